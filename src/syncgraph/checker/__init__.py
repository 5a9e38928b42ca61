# syncgraph/checker/__init__.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Staleness checking of graph snapshots and generated docs."""

from .checker import StaleChecker
from .doc_parser import parse_doc_file, parse_front_matter
from .models import (
    CheckError,
    CheckResult,
    DocDependency,
    DocMetadata,
    StaleDependency,
    StaleRecord,
    format_stale_reason,
)
from .paths import resolve_source_path, to_relative_path

__all__ = [
    "StaleChecker",
    "parse_doc_file",
    "parse_front_matter",
    "CheckError",
    "CheckResult",
    "DocDependency",
    "DocMetadata",
    "StaleDependency",
    "StaleRecord",
    "format_stale_reason",
    "resolve_source_path",
    "to_relative_path",
]
