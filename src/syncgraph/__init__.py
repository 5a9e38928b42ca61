# syncgraph/__init__.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
syncgraph: call graphs and staleness detection for TypeScript projects.

This package provides:
- SymbolExtractor: tree-sitter based unit, call-site and import extraction
- ModuleResolver: relative, aliased and re-exported module resolution
- ClassifierRegistry: framework entry points and runtime connections
- GraphBuilder: three-pass flow graph construction
- ContentHasher: rename-tolerant content hashes
- StaleChecker: snapshot and doc staleness checks
"""

from .checker import CheckResult, StaleChecker
from .classifiers import ClassifierRegistry
from .config import SyncGraphConfig, load_config
from .errors import (
    ConfigError,
    ExtractionError,
    FrontMatterError,
    SnapshotError,
    SnapshotNotFoundError,
    SyncGraphError,
)
from .extractor import SymbolExtractor
from .graph import FlowGraph, GraphStore, ModuleResolver, clear_alias_cache
from .graph.builder import GraphBuilder
from .hasher import ContentHasher, hash_symbol

__all__ = [
    # Extraction
    "SymbolExtractor",
    # Resolution
    "ModuleResolver",
    "clear_alias_cache",
    # Classification
    "ClassifierRegistry",
    # Graph
    "FlowGraph",
    "GraphBuilder",
    "GraphStore",
    # Hashing
    "ContentHasher",
    "hash_symbol",
    # Staleness
    "CheckResult",
    "StaleChecker",
    # Config
    "SyncGraphConfig",
    "load_config",
    # Errors
    "SyncGraphError",
    "ConfigError",
    "ExtractionError",
    "FrontMatterError",
    "SnapshotError",
    "SnapshotNotFoundError",
]
