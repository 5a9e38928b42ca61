# syncgraph/graph/symbol_table.py
# AI-Mind (c) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Node id to GraphNode mapping.

Holds the nodes produced in pass 1 of a build and answers the lookups call
resolution needs: by (file, name), by file, and over all nodes.
"""

import logging
from typing import Iterator, Optional

from .models import GraphNode, make_node_id

logger = logging.getLogger(__name__)


class SymbolTable:
    """Maps node ids to nodes, in first-insertion order.

    Same-named units in one file share an id. The later node replaces the
    earlier one (last write wins) but keeps the earlier position, so
    iteration order depends only on the order units were first seen.
    """

    def __init__(self):
        self._nodes: dict[str, GraphNode] = {}
        self._default_exports: dict[str, str] = {}  # file_path -> node id

    def add(self, node: GraphNode, is_default_export: bool = False) -> None:
        """Add a node, replacing any node with the same id."""
        if node.id in self._nodes:
            logger.debug(f"Duplicate unit {node.id}; keeping the later definition")
        self._nodes[node.id] = node
        if is_default_export:
            self._default_exports[node.file_path] = node.id

    def get(self, node_id: str) -> Optional[GraphNode]:
        return self._nodes.get(node_id)

    def lookup(self, file_path: str, name: str) -> Optional[GraphNode]:
        """Exact lookup by relative file path + unit name.

        Args:
            file_path: Root-relative POSIX file path.
            name: Unit name (e.g. "handler" or "Queue.push").

        Returns:
            GraphNode if found, None otherwise.
        """
        return self._nodes.get(make_node_id(file_path, name))

    def default_export(self, file_path: str) -> Optional[GraphNode]:
        """The node marked as the default export of a file, if any."""
        node_id = self._default_exports.get(file_path)
        return self._nodes.get(node_id) if node_id else None

    def nodes(self) -> list[GraphNode]:
        return list(self._nodes.values())

    def entry_points(self) -> Iterator[GraphNode]:
        for node in self._nodes.values():
            if node.entry_type is not None:
                yield node

    def __contains__(self, node_id: str) -> bool:
        return node_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)
