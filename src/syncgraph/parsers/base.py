# syncgraph/parsers/base.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Base parser interface and extraction result types.

Parsers turn the text of one source file into flat lists of units, call
sites, imports and re-exports. Nothing here touches the filesystem; the
SymbolExtractor facade reads files and hands their content to a parser.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterator, Optional, Union


@dataclass
class JsDocParam:
    """A single @param entry from a doc comment."""

    name: str
    description: str


@dataclass
class JsDocInfo:
    """Structured content of a /** ... */ doc comment."""

    description: Optional[str] = None
    params: list[JsDocParam] = field(default_factory=list)
    returns: Optional[str] = None
    examples: list[str] = field(default_factory=list)
    deprecated: Optional[Union[bool, str]] = None  # True, or the reason text
    throws: list[str] = field(default_factory=list)
    see: list[str] = field(default_factory=list)


@dataclass
class SymbolInfo:
    """A named unit extracted from a source file.

    Identity is (file_path, name). Names are not guaranteed unique within a
    file; the extractor never merges duplicates.
    """

    name: str
    kind: str  # "function" | "class" | "const" | "method" | "component"
    file_path: str
    params: str  # Parameter list text, without the parentheses
    body: str
    full_text: str
    start_line: int
    end_line: int
    is_async: bool = False
    is_default_export: bool = False
    parent: Optional[str] = None  # For methods: owning class name
    jsdoc: Optional[JsDocInfo] = None


@dataclass
class ConditionInfo:
    """One enclosing guard of a call site."""

    condition: str  # "if (req.type === 'image')", "else", "switch (kind) case 'a'"
    branch: str  # "then" | "else" | "else-if" | "case <v>" | "default" | "&&" | "||"
    branch_group: str  # "branch:12", shared by alternatives of one if/switch/ternary


@dataclass
class CallSite:
    """A call made from inside a unit's body."""

    name: str  # Callee name as written (last identifier of the callee)
    expression: str  # Full callee expression text, e.g. "this.store.save"
    conditions: list[ConditionInfo] = field(default_factory=list)


@dataclass
class ImportInfo:
    """An import binding declared at the top level of a file."""

    name: str  # Local bound name
    original_name: str  # Exported name in the source module ("*" for namespaces)
    source: str  # Module specifier as written
    is_default: bool
    is_namespace: bool = False


@dataclass
class ReExportInfo:
    """A re-export declaration: export { original as local } from "source"."""

    local_name: str  # "*" for export * from "source"
    original_name: str
    source: str


@dataclass
class ExtractionResult:
    """Units found in a file plus any per-node failures."""

    symbols: list[SymbolInfo]
    errors: list[str]


class BaseParser(ABC):
    """Base class for tree-sitter backed language parsers."""

    def __init__(self):
        """Initialize parser with language-specific tree-sitter."""
        self.parser = None
        self.language = None
        self._load_parser()

    @abstractmethod
    def _load_parser(self) -> None:
        """Load the tree-sitter parser for this language."""
        pass

    def is_available(self) -> bool:
        """Check if parser loaded successfully."""
        return self.parser is not None and self.language is not None

    def get_language_name(self) -> str:
        """Get the language name for this parser."""
        return self.__class__.__name__.replace("Parser", "").lower()

    def parse(self, content: str) -> Optional["tree_sitter.Tree"]:
        """Parse source code and return the AST.

        Args:
            content: Source code as string.

        Returns:
            Tree-sitter Tree or None if parser unavailable.
        """
        if not self.is_available():
            return None
        return self.parser.parse(content.encode("utf-8"))

    @abstractmethod
    def extract_symbols(self, content: str, file_path: str) -> ExtractionResult:
        """Extract every unit from file content."""
        pass

    @abstractmethod
    def extract_call_sites(
        self, content: str, file_path: str, owner_name: str
    ) -> list[CallSite]:
        """Extract distinct call sites from the body of the named unit."""
        pass

    @abstractmethod
    def extract_imports(self, content: str) -> list[ImportInfo]:
        """Extract top-level, value-level import bindings."""
        pass

    @abstractmethod
    def extract_re_exports(self, content: str) -> list[ReExportInfo]:
        """Extract top-level re-export declarations."""
        pass

    def _get_node_text(self, node) -> str:
        """Get the text content of a node."""
        return node.text.decode("utf-8")

    def _get_node_line(self, node) -> int:
        """Get the 1-indexed line number of a node."""
        return node.start_point[0] + 1

    def _get_node_end_line(self, node) -> int:
        """Get the 1-indexed end line number of a node."""
        return node.end_point[0] + 1

    def _walk_tree(self, node) -> Iterator:
        """Walk all nodes below and including ``node`` in pre-order, without recursion."""
        stack = [node]
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(current.children))
