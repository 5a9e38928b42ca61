# syncgraph/classifiers/base.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Base classifier interface for framework-specific detection.

A classifier recognizes units that a framework triggers from outside
(route handlers, background functions, tasks) and finds "runtime
connections": calls whose target is named by a string, such as an event
name or a task id, rather than by a reference the resolver can follow.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ..graph.models import EntryPointMetadata
from ..parsers.base import SymbolInfo

CONNECTION_EDGE_TYPES = {
    "inngest-send": "event-emit",
    "inngest-invoke": "async-dispatch",
    "task-trigger": "async-dispatch",
    "fetch": "http-request",
    "navigation": "http-request",
}


def connection_edge_type(connection_type: str) -> str:
    """Edge type for a connection type; unknown types are async dispatches."""
    return CONNECTION_EDGE_TYPES.get(connection_type, "async-dispatch")


@dataclass
class EntryPointMatch:
    entry_type: str
    metadata: EntryPointMetadata


@dataclass
class RuntimeConnection:
    """A string-addressed call found in a unit's body.

    Attributes:
        type: "inngest-send", "task-trigger", "fetch", ...
        target_hint: Event name, task id, or URL path as written.
        source_location: Line range of the unit containing the call.
    """

    type: str
    target_hint: str
    source_location: tuple[int, int]


@dataclass
class ResolvedConnection:
    target_symbol: SymbolInfo
    target_file_path: str  # Absolute path
    edge_type: str


class Classifier(ABC):
    """Base class for framework classifiers."""

    name: str = ""

    @abstractmethod
    def detect_entry_point(
        self, symbol: SymbolInfo, file_path: str
    ) -> Optional[EntryPointMatch]:
        """Classify a unit as an entry point.

        Args:
            symbol: Unit to classify.
            file_path: Path of the file the unit came from.

        Returns:
            EntryPointMatch, or None when the unit is not an entry point of
            this framework.
        """
        pass

    @abstractmethod
    def detect_connections(self, symbol: SymbolInfo, file_path: str) -> list[RuntimeConnection]:
        """Find runtime connections in a unit's body."""
        pass

    def resolve_connection(
        self, connection: RuntimeConnection, project_files: list[str]
    ) -> Optional[ResolvedConnection]:
        """Resolve a connection to a concrete unit, or None if this classifier cannot."""
        return None

    def reset(self) -> None:
        """Forget per-file state read during an earlier build."""
        pass

    def _find_all(
        self, pattern: re.Pattern, symbol: SymbolInfo, connection_type: str, group: int = 1
    ) -> list[RuntimeConnection]:
        return [
            RuntimeConnection(
                type=connection_type,
                target_hint=match.group(group),
                source_location=(symbol.start_line, symbol.end_line),
            )
            for match in pattern.finditer(symbol.body)
        ]
