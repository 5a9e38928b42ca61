# syncgraph/parsers/__init__.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Language parsers for unit extraction.

Tree-sitter based parsers for TypeScript, TSX and JavaScript sources.
"""

from .base import (
    BaseParser,
    CallSite,
    ConditionInfo,
    ExtractionResult,
    ImportInfo,
    JsDocInfo,
    JsDocParam,
    ReExportInfo,
    SymbolInfo,
)
from .jsdoc import parse_jsdoc
from .registry import EXTENSION_GRAMMARS, ParserRegistry
from .typescript_parser import TSXParser, TypeScriptParser

__all__ = [
    # Base types
    "BaseParser",
    "CallSite",
    "ConditionInfo",
    "ExtractionResult",
    "ImportInfo",
    "JsDocInfo",
    "JsDocParam",
    "ReExportInfo",
    "SymbolInfo",
    "parse_jsdoc",
    # Registry
    "EXTENSION_GRAMMARS",
    "ParserRegistry",
    # Parsers
    "TSXParser",
    "TypeScriptParser",
]
