# syncgraph/graph/builder.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Flow graph construction from source files.

The builder performs three passes:

Pass 1 (Nodes):
    Extract units from every file, classify entry points, hash content,
    and register one node per unit id.

Pass 2 (Edges):
    For every unit, resolve its call sites to nodes (direct-call or
    conditional-call edges) and collect runtime connections reported by
    the classifiers (async-dispatch, event-emit, http-request edges).

Pass 3 (Dedup):
    Keep only the first edge for each (source, target) pair.
"""

import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Optional, Union

from ..classifiers.base import RuntimeConnection, connection_edge_type
from ..classifiers.registry import ClassifierRegistry
from ..errors import ExtractionError
from ..extractor import SymbolExtractor
from ..hasher import ContentHasher
from ..parsers.base import ImportInfo, SymbolInfo
from .models import (
    GRAPH_VERSION,
    ConditionModel,
    FlowGraph,
    GraphEdge,
    GraphNode,
    make_edge_id,
    make_node_id,
)
from .module_resolver import ModuleResolver
from .resolver import CallResolver
from .symbol_table import SymbolTable

logger = logging.getLogger(__name__)

CONDITION_SEPARATOR = " → "


class GraphBuilder:
    """Builds a FlowGraph from a list of source files.

    Node ids are "<path relative to root>:<unit name>" with POSIX
    separators. Files that cannot be read or parsed are logged, recorded
    in ``errors`` and skipped; the build always completes.
    """

    def __init__(
        self,
        root: Optional[Union[str, Path]] = None,
        resolver: Optional[ModuleResolver] = None,
        classifiers: Optional[ClassifierRegistry] = None,
        extractor: Optional[SymbolExtractor] = None,
        hasher: Optional[ContentHasher] = None,
    ):
        self.root = os.path.abspath(str(root)) if root is not None else None
        self.extractor = extractor or SymbolExtractor()
        self.module_resolver = resolver or ModuleResolver()
        self.classifiers = classifiers if classifiers is not None else ClassifierRegistry.default()
        self.hasher = hasher or ContentHasher()
        self.errors: list[str] = []

    def relative_path(self, file_path: str) -> str:
        """Node-id form of a path: relative to root, POSIX separators."""
        root = self.root or os.getcwd()
        return Path(os.path.relpath(os.path.abspath(file_path), root)).as_posix()

    def build(self, source_files: Iterable[Union[str, Path]]) -> FlowGraph:
        """Build the graph for one analysis run.

        Args:
            source_files: Ordered source file paths. Only calls landing in
                these files produce edges.

        Returns:
            FlowGraph snapshot with deduplicated edges.
        """
        self.errors = []
        self.classifiers.reset()
        files = list(dict.fromkeys(os.path.abspath(str(f)) for f in source_files))

        symbol_table = SymbolTable()
        file_symbols: dict[str, list[SymbolInfo]] = {}

        # Pass 1: nodes
        for file_path in files:
            try:
                result = self.extractor.extract_all(file_path)
            except ExtractionError as e:
                logger.warning(f"Skipping {file_path}: {e}")
                self.errors.append(str(e))
                continue

            for error in result.errors:
                self.errors.append(f"{self.relative_path(file_path)}: {error}")

            file_symbols[file_path] = result.symbols
            for symbol in result.symbols:
                node = self._make_node(symbol, file_path)
                symbol_table.add(node, is_default_export=symbol.is_default_export)

        logger.info(f"Pass 1 complete: {len(file_symbols)} files, {len(symbol_table)} nodes")

        # Pass 2: edges
        call_resolver = CallResolver(
            extractor=self.extractor,
            module_resolver=self.module_resolver,
            symbol_table=symbol_table,
            known_files=set(files),
            to_relative=self.relative_path,
        )

        edges: list[GraphEdge] = []
        for file_path, symbols in file_symbols.items():
            try:
                edges.extend(
                    self._build_file_edges(file_path, symbols, call_resolver, symbol_table, files)
                )
            except ExtractionError as e:
                logger.warning(f"Skipping edges of {file_path}: {e}")
                self.errors.append(str(e))

        # Pass 3: dedup
        deduped = self.deduplicate_edges(edges)
        logger.info(
            f"Pass 2 complete: {len(deduped)} edges ({len(edges) - len(deduped)} duplicates dropped)"
        )

        return FlowGraph(
            version=GRAPH_VERSION,
            generated_at=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            nodes=symbol_table.nodes(),
            edges=deduped,
        )

    def _make_node(self, symbol: SymbolInfo, file_path: str) -> GraphNode:
        rel_path = self.relative_path(file_path)
        match = self.classifiers.detect_entry_point(symbol, file_path)

        metadata = None
        if match is not None and match.metadata.model_dump(exclude_none=True):
            metadata = match.metadata

        return GraphNode(
            id=make_node_id(rel_path, symbol.name),
            name=symbol.name,
            kind=symbol.kind,
            file_path=rel_path,
            entry_type=match.entry_type if match else None,
            is_async=symbol.is_async,
            hash=self.hasher.hash(symbol),
            line_range=(symbol.start_line, symbol.end_line),
            metadata=metadata,
        )

    def _build_file_edges(
        self,
        file_path: str,
        symbols: list[SymbolInfo],
        call_resolver: CallResolver,
        symbol_table: SymbolTable,
        files: list[str],
    ) -> list[GraphEdge]:
        edges: list[GraphEdge] = []
        imports: list[ImportInfo] = self.extractor.extract_imports(file_path)
        rel_path = self.relative_path(file_path)

        for symbol in symbols:
            source_id = make_node_id(rel_path, symbol.name)

            # Call-site edges
            order = 0
            for call_site in self.extractor.extract_call_sites(file_path, symbol.name):
                target_id = call_resolver.resolve(call_site, file_path, symbol, imports)
                target = symbol_table.get(target_id) if target_id else None
                if target is None:
                    continue

                conditional = bool(call_site.conditions)
                edges.append(
                    GraphEdge(
                        id=make_edge_id(source_id, target.id),
                        source=source_id,
                        target=target.id,
                        edge_type="conditional-call" if conditional else "direct-call",
                        label=(
                            CONDITION_SEPARATOR.join(c.condition for c in call_site.conditions)
                            if conditional
                            else None
                        ),
                        conditions=(
                            [
                                ConditionModel(
                                    condition=c.condition,
                                    branch=c.branch,
                                    branch_group=c.branch_group,
                                )
                                for c in call_site.conditions
                            ]
                            if conditional
                            else None
                        ),
                        is_async=target.is_async,
                        order=order,
                    )
                )
                order += 1

            # Runtime connection edges
            for classifier in self.classifiers:
                for connection in classifier.detect_connections(symbol, file_path):
                    edge = None
                    resolved = classifier.resolve_connection(connection, files)
                    if resolved is not None:
                        target_id = make_node_id(
                            self.relative_path(resolved.target_file_path),
                            resolved.target_symbol.name,
                        )
                        if target_id in symbol_table:
                            edge = self._connection_edge(
                                source_id, target_id, resolved.edge_type, connection
                            )
                    if edge is None:
                        edge = self._match_connection(source_id, connection, symbol_table)
                    if edge is not None:
                        edges.append(edge)

        return edges

    def _match_connection(
        self, source_id: str, connection: RuntimeConnection, symbol_table: SymbolTable
    ) -> Optional[GraphEdge]:
        """Fallback for unresolved connections: exact match on entry-point metadata.

        - inngest-send: event_trigger of a node
        - task-trigger: task_id of a node
        - fetch: route of an api-route node
        - navigation: route of a page node
        """
        hint = connection.target_hint
        for node in symbol_table.entry_points():
            metadata = node.metadata
            if metadata is None:
                continue

            if connection.type == "inngest-send":
                matched = metadata.event_trigger == hint
            elif connection.type == "task-trigger":
                matched = metadata.task_id == hint
            elif connection.type == "fetch":
                matched = node.entry_type == "api-route" and metadata.route == hint
            elif connection.type == "navigation":
                matched = node.entry_type == "page" and metadata.route == hint
            else:
                matched = False

            if matched:
                return self._connection_edge(
                    source_id, node.id, connection_edge_type(connection.type), connection
                )
        return None

    def _connection_edge(
        self, source_id: str, target_id: str, edge_type: str, connection: RuntimeConnection
    ) -> GraphEdge:
        return GraphEdge(
            id=make_edge_id(source_id, target_id),
            source=source_id,
            target=target_id,
            edge_type=edge_type,
            label=connection.target_hint,
            is_async=True,
        )

    @staticmethod
    def deduplicate_edges(edges: list[GraphEdge]) -> list[GraphEdge]:
        """Keep the first edge for each (source, target) pair, preserving order."""
        seen: set[tuple[str, str]] = set()
        result: list[GraphEdge] = []
        for edge in edges:
            key = (edge.source, edge.target)
            if key not in seen:
                seen.add(key)
                result.append(edge)
        return result
