# syncgraph/parsers/registry.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Parser registry mapping file extensions to tree-sitter grammars."""

import os
import warnings
from typing import Optional

from .base import BaseParser
from .typescript_parser import TSXParser, TypeScriptParser

# Extensions handled by each grammar. JavaScript goes through the TSX grammar
# since plain .js files commonly contain JSX.
EXTENSION_GRAMMARS: dict[str, str] = {
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
    ".jsx": "tsx",
    ".js": "tsx",
    ".mjs": "tsx",
    ".cjs": "tsx",
}

_parser_classes: dict[str, type[BaseParser]] = {
    "typescript": TypeScriptParser,
    "tsx": TSXParser,
}


class ParserRegistry:
    """Registry of loaded parsers, addressable by language or file path.

    Parser instances are created once and reused; a parser whose grammar
    fails to load is left out with a warning.
    """

    def __init__(self):
        """Initialize parser registry and load all available parsers."""
        self._parsers: dict[str, BaseParser] = {}
        self._load_parsers()

    def _load_parsers(self) -> None:
        for lang_name, parser_class in _parser_classes.items():
            try:
                parser = parser_class()
                if parser.is_available():
                    self._parsers[lang_name] = parser
                else:
                    warnings.warn(
                        f"{parser_class.__name__} loaded but tree-sitter not available"
                    )
            except Exception as e:
                warnings.warn(f"Failed to load {parser_class.__name__}: {e}")

    def get_parser(self, language: str) -> Optional[BaseParser]:
        """Get parser for a language name ('typescript' or 'tsx'), case-insensitive."""
        return self._parsers.get(language.lower())

    def get_parser_for_path(self, file_path: str) -> Optional[BaseParser]:
        """Get the parser for a file based on its extension.

        Args:
            file_path: Path of the source file.

        Returns:
            BaseParser instance, or None for unsupported extensions or when
            the grammar could not be loaded.
        """
        ext = os.path.splitext(file_path)[1].lower()
        language = EXTENSION_GRAMMARS.get(ext)
        if language is None:
            return None
        return self._parsers.get(language)

    def has_parser(self, language: str) -> bool:
        return language.lower() in self._parsers

    def list_available_languages(self) -> list[str]:
        """Get sorted list of languages with available parsers."""
        return sorted(self._parsers.keys())

    def __repr__(self) -> str:
        langs = ", ".join(self.list_available_languages())
        return f"ParserRegistry({len(self._parsers)} parsers: {langs})"
