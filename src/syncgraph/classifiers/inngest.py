# syncgraph/classifiers/inngest.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Inngest classifier.

Detects function definitions (``inngest.createFunction(...)`` assigned to a
const), event dispatches (``inngest.send({ name: "..." })``) and direct
invocations (``step.invoke({ function: fn })``).
"""

import re
from typing import Optional

from ..graph.models import EntryPointMetadata
from ..parsers.base import SymbolInfo
from .base import Classifier, EntryPointMatch, RuntimeConnection

CREATE_FUNCTION_PATTERN = re.compile(r"createFunction\s*\(")
EVENT_PATTERN = re.compile(r"\bevent\s*:\s*['\"`]([^'\"`]+)['\"`]")
ID_PATTERN = re.compile(r"\bid\s*:\s*['\"`]([^'\"`]+)['\"`]")

SEND_PATTERN = re.compile(r"\.send\s*\(\s*\{[^}]*name\s*:\s*['\"`]([^'\"`]+)['\"`]")
INVOKE_PATTERN = re.compile(r"step\.invoke\s*\(\s*\{[^}]*function\s*:\s*(\w+)")


class InngestClassifier(Classifier):
    name = "inngest"

    def detect_entry_point(
        self, symbol: SymbolInfo, file_path: str
    ) -> Optional[EntryPointMatch]:
        if symbol.kind != "const" or not CREATE_FUNCTION_PATTERN.search(symbol.body):
            return None

        event_match = EVENT_PATTERN.search(symbol.body)
        id_match = ID_PATTERN.search(symbol.body)
        return EntryPointMatch(
            entry_type="inngest-function",
            metadata=EntryPointMetadata(
                event_trigger=event_match.group(1) if event_match else None,
                task_id=id_match.group(1) if id_match else None,
            ),
        )

    def detect_connections(self, symbol: SymbolInfo, file_path: str) -> list[RuntimeConnection]:
        connections = self._find_all(SEND_PATTERN, symbol, "inngest-send")
        connections.extend(self._find_all(INVOKE_PATTERN, symbol, "inngest-invoke"))
        return connections
