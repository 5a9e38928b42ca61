# syncgraph/extractor.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Unit extraction from source files on disk.

SymbolExtractor bridges the filesystem and the parser layer: it reads a
file, picks the parser for its extension, and returns the parser's results.
Files that cannot be read, or whose extension has no parser, raise
ExtractionError; everything below file level is reported as values.
"""

import logging
from typing import Optional

from .errors import ExtractionError
from .parsers import (
    BaseParser,
    CallSite,
    ExtractionResult,
    ImportInfo,
    ParserRegistry,
    ReExportInfo,
    SymbolInfo,
)

logger = logging.getLogger(__name__)


class SymbolExtractor:
    """Extract units, call sites, imports and re-exports from files."""

    def __init__(self, registry: Optional[ParserRegistry] = None):
        self.registry = registry or ParserRegistry()

    def _load(self, file_path: str) -> tuple[BaseParser, str]:
        parser = self.registry.get_parser_for_path(file_path)
        if parser is None:
            raise ExtractionError(f"No parser available for {file_path}")

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise ExtractionError(f"Cannot read {file_path}: {e}") from e

        return parser, content

    def extract_all(self, file_path: str) -> ExtractionResult:
        """Extract every unit in a file.

        Args:
            file_path: Path to the source file.

        Returns:
            ExtractionResult with units in document order and any per-node
            errors.

        Raises:
            ExtractionError: If the file cannot be read or has no parser.
        """
        parser, content = self._load(file_path)
        result = parser.extract_symbols(content, file_path)
        for error in result.errors:
            logger.debug(f"{file_path}: {error}")
        return result

    def extract_one(self, file_path: str, name: str) -> Optional[SymbolInfo]:
        """Return the first unit named ``name`` in the file, or None."""
        for symbol in self.extract_all(file_path).symbols:
            if symbol.name == name:
                return symbol
        return None

    def extract_call_sites(self, file_path: str, owner_name: str) -> list[CallSite]:
        parser, content = self._load(file_path)
        return parser.extract_call_sites(content, file_path, owner_name)

    def extract_imports(self, file_path: str) -> list[ImportInfo]:
        parser, content = self._load(file_path)
        return parser.extract_imports(content)

    def extract_re_exports(self, file_path: str) -> list[ReExportInfo]:
        parser, content = self._load(file_path)
        return parser.extract_re_exports(content)
