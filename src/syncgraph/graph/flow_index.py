# syncgraph/graph/flow_index.py
# AI-Mind (c) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Bidirectional adjacency over a FlowGraph with height/depth traversal.

Used to pick the neighbourhood of a node for rendering and inspection.
"""

from collections import defaultdict

from .models import FlowGraph, GraphEdge, GraphNode


class FlowIndex:
    """Forward (callees) and inverse (callers) edge index of a snapshot."""

    def __init__(self, graph: FlowGraph):
        self.graph = graph
        self.nodes: dict[str, GraphNode] = {node.id: node for node in graph.nodes}
        self.outgoing: dict[str, list[GraphEdge]] = defaultdict(list)
        self.incoming: dict[str, list[GraphEdge]] = defaultdict(list)
        for edge in graph.edges:
            self.outgoing[edge.source].append(edge)
            self.incoming[edge.target].append(edge)

    def get_callees(self, node_id: str) -> list[str]:
        """Ids this node reaches, in edge order."""
        return [edge.target for edge in self.outgoing.get(node_id, [])]

    def get_callers(self, node_id: str) -> list[str]:
        """Ids that reach this node, in edge order."""
        return [edge.source for edge in self.incoming.get(node_id, [])]

    def entry_points(self) -> list[GraphNode]:
        return [node for node in self.graph.nodes if node.entry_type is not None]

    def get_neighborhood(
        self, node_ids: list[str], height: int = 1, depth: int = 1
    ) -> list[GraphEdge]:
        """Get the edges around some nodes.

        Args:
            node_ids: Center node ids.
            height: Levels up (callers of callers of ...).
            depth: Levels down (callees of callees of ...).

        Returns:
            Edges in the neighbourhood, in snapshot order.
        """
        selected: set[str] = set()

        def traverse(start: str, levels: int, index: dict[str, list[GraphEdge]], forward: bool):
            frontier = [start]
            visited = {start}
            for _ in range(levels):
                next_frontier = []
                for node_id in frontier:
                    for edge in index.get(node_id, []):
                        selected.add(edge.id)
                        neighbour = edge.target if forward else edge.source
                        if neighbour not in visited:
                            visited.add(neighbour)
                            next_frontier.append(neighbour)
                frontier = next_frontier

        for node_id in node_ids:
            traverse(node_id, depth, self.outgoing, forward=True)
            traverse(node_id, height, self.incoming, forward=False)

        return [edge for edge in self.graph.edges if edge.id in selected]

    def reachable(self, start: str) -> list[str]:
        """Every node id reachable from ``start`` (excluding it), breadth-first."""
        order: list[str] = []
        visited = {start}
        frontier = [start]
        while frontier:
            next_frontier = []
            for node_id in frontier:
                for target in self.get_callees(node_id):
                    if target not in visited:
                        visited.add(target)
                        order.append(target)
                        next_frontier.append(target)
            frontier = next_frontier
        return order
