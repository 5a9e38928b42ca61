# syncgraph/classifiers/trigger_dev.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Trigger.dev classifier.

Detects task definitions (``task({ id: "...", run: ... })``) and task
triggers (``tasks.trigger("id")``, ``triggerAndWait``, ``batchTrigger``,
with optional generic type arguments).
"""

import logging
import re
from typing import Optional

from ..errors import ExtractionError
from ..extractor import SymbolExtractor
from ..graph.models import EntryPointMetadata
from ..parsers.base import SymbolInfo
from .base import (
    Classifier,
    EntryPointMatch,
    ResolvedConnection,
    RuntimeConnection,
    connection_edge_type,
)

logger = logging.getLogger(__name__)

TASK_PATTERN = re.compile(r"^task\s*\(")
ID_PATTERN = re.compile(r"\bid\s*:\s*['\"`]([^'\"`]+)['\"`]")
TRIGGER_PATTERN = re.compile(
    r"\.(?:trigger|triggerAndWait|batchTrigger)\s*(?:<[^>]*>)?\s*\(\s*['\"`]([^'\"`]+)['\"`]"
)


class TriggerDevClassifier(Classifier):
    name = "trigger-dev"

    def __init__(self, extractor: Optional[SymbolExtractor] = None):
        self._extractor = extractor
        # file path -> [(task id, unit)]
        self._tasks: dict[str, list[tuple[str, SymbolInfo]]] = {}

    def detect_entry_point(
        self, symbol: SymbolInfo, file_path: str
    ) -> Optional[EntryPointMatch]:
        if symbol.kind != "const" or not TASK_PATTERN.match(symbol.body):
            return None

        id_match = ID_PATTERN.search(symbol.body)
        return EntryPointMatch(
            entry_type="trigger-task",
            metadata=EntryPointMetadata(task_id=id_match.group(1) if id_match else None),
        )

    def detect_connections(self, symbol: SymbolInfo, file_path: str) -> list[RuntimeConnection]:
        return self._find_all(TRIGGER_PATTERN, symbol, "task-trigger")

    def resolve_connection(
        self, connection: RuntimeConnection, project_files: list[str]
    ) -> Optional[ResolvedConnection]:
        """Find the task whose id matches a task-trigger hint.

        Scans the project files for task definitions; results are cached per
        file until the next ``reset``.
        """
        if connection.type != "task-trigger":
            return None

        for file_path in project_files:
            for task_id, symbol in self._get_tasks(file_path):
                if task_id == connection.target_hint:
                    return ResolvedConnection(
                        target_symbol=symbol,
                        target_file_path=file_path,
                        edge_type=connection_edge_type(connection.type),
                    )
        return None

    def reset(self) -> None:
        self._tasks.clear()

    def _get_tasks(self, file_path: str) -> list[tuple[str, SymbolInfo]]:
        if file_path in self._tasks:
            return self._tasks[file_path]

        if self._extractor is None:
            self._extractor = SymbolExtractor()

        tasks: list[tuple[str, SymbolInfo]] = []
        try:
            symbols = self._extractor.extract_all(file_path).symbols
        except ExtractionError as e:
            logger.debug(f"Skipping {file_path} while resolving tasks: {e}")
            symbols = []

        for symbol in symbols:
            match = self.detect_entry_point(symbol, file_path)
            if match is not None and match.metadata.task_id:
                tasks.append((match.metadata.task_id, symbol))

        self._tasks[file_path] = tasks
        return tasks
