# syncgraph/graph/mermaid.py
# AI-Mind (c) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Mermaid diagram generation from flow graph snapshots.

Produces flowchart TD diagrams derived only from graph data, so the same
snapshot always renders the same text.
"""

import re
from typing import Optional

from .models import FlowGraph, GraphEdge, GraphNode

HIGHLIGHT_STYLE = "fill:#dbeafe,stroke:#3b82f6,stroke-width:2px"
ENTRY_STYLE = "fill:#e0e7ff,stroke:#6366f1,stroke-width:2px"

EDGE_ARROWS = {
    "error-handler": "-. error .->",
    "event-emit": "-.->",
    "async-dispatch": "-.->",
    "conditional-call": "-.->",
    "http-request": "-- HTTP -->",
}


def node_to_mermaid(graph: FlowGraph, node_id: str, depth: int = 1) -> str:
    """Generate a diagram of a node and its neighbours up to ``depth`` hops.

    Neighbours are followed in both directions (callers and callees).

    Args:
        graph: Snapshot to render from.
        node_id: Center node, highlighted in the output.
        depth: Hops to include.

    Returns:
        Mermaid flowchart text, or "" when the node does not exist.
    """
    node_map = {node.id: node for node in graph.nodes}
    if node_id not in node_map:
        return ""

    included: dict[str, None] = {node_id: None}
    frontier = [node_id]
    for _ in range(depth):
        next_frontier: list[str] = []
        for current in frontier:
            for edge in graph.edges:
                if edge.source == current and edge.target not in included:
                    included[edge.target] = None
                    next_frontier.append(edge.target)
            for edge in graph.edges:
                if edge.target == current and edge.source not in included:
                    included[edge.source] = None
                    next_frontier.append(edge.source)
        frontier = next_frontier

    edges = [e for e in graph.edges if e.source in included and e.target in included]
    return _build_mermaid(node_id, list(included), edges, node_map)


def flow_to_mermaid(
    nodes: list[GraphNode], edges: list[GraphEdge], entry_node_id: Optional[str] = None
) -> str:
    """Generate a diagram for a whole flow, highlighting its entry point."""
    node_map = {node.id: node for node in nodes}
    return _build_mermaid(entry_node_id or "", list(node_map), edges, node_map)


def _build_mermaid(
    highlight_id: str,
    included_ids: list[str],
    edges: list[GraphEdge],
    node_map: dict[str, GraphNode],
) -> str:
    lines = ["flowchart TD"]

    # Group nodes by file
    file_groups: dict[str, list[GraphNode]] = {}
    for node_id in included_ids:
        node = node_map.get(node_id)
        if node is not None:
            file_groups.setdefault(node.file_path, []).append(node)

    grouped = len(file_groups) > 1
    indent = "    " if grouped else "  "
    for file_path, nodes in file_groups.items():
        if grouped:
            lines.append(f'  subgraph {_sanitize_id(file_path)}["{_sanitize_label(file_path)}"]')
        for node in nodes:
            label = _format_node_label(node)
            shape = f'(["{label}"])' if node.entry_type else f'["{label}"]'
            lines.append(f"{indent}{_sanitize_id(node.id)}{shape}")
        if grouped:
            lines.append("  end")

    for edge in edges:
        arrow = EDGE_ARROWS.get(edge.edge_type, "-->")
        label = f'|"{_sanitize_label(edge.label)}"|' if edge.label else ""
        lines.append(f"  {_sanitize_id(edge.source)} {arrow}{label} {_sanitize_id(edge.target)}")

    if highlight_id and highlight_id in node_map and highlight_id in included_ids:
        lines.append(f"  style {_sanitize_id(highlight_id)} {HIGHLIGHT_STYLE}")

    for node_id in included_ids:
        node = node_map.get(node_id)
        if node is not None and node.entry_type and node_id != highlight_id:
            lines.append(f"  style {_sanitize_id(node_id)} {ENTRY_STYLE}")

    return "\n".join(lines)


def _format_node_label(node: GraphNode) -> str:
    label = _sanitize_label(node.name)
    if node.is_async:
        label = f"async {label}"
    metadata = node.metadata
    if metadata is not None:
        if metadata.http_method:
            label = f"{metadata.http_method} {label}"
        if metadata.event_trigger:
            label = f"{label}<br/>{_sanitize_label(metadata.event_trigger)}"
        if metadata.task_id:
            label = f"{label}<br/>{_sanitize_label(metadata.task_id)}"
    return label


def _sanitize_label(label: str) -> str:
    """Escape characters that break mermaid labels as #<code>; entities."""
    return re.sub(r'[>"<|]', lambda m: f"#{ord(m.group(0))};", label)


def _sanitize_id(s: str) -> str:
    """Replace every non-alphanumeric character for use as a mermaid node id."""
    return re.sub(r"[^a-zA-Z0-9]", "_", s)
