# syncgraph/graph/models.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Data models for the project-wide flow graph.

These models are the persisted snapshot shape (graph.json). Unlike the
parser dataclasses they carry no source text, only identity, a content
hash and classification metadata. Field names serialize in camelCase.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

GRAPH_VERSION = "1.0"

NodeKind = Literal["function", "class", "const", "method", "component"]

EntryType = Literal[
    "api-route",
    "page",
    "inngest-function",
    "trigger-task",
    "middleware",
    "server-action",
]

EdgeType = Literal[
    "direct-call",
    "async-dispatch",
    "event-emit",
    "http-request",
    "conditional-call",
    "error-handler",
    "middleware-chain",
]


class GraphModel(BaseModel):
    """Base model: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class EntryPointMetadata(GraphModel):
    http_method: Optional[str] = None
    route: Optional[str] = None
    event_trigger: Optional[str] = None
    task_id: Optional[str] = None


class ConditionModel(GraphModel):
    """One guard on the path to a call: condition text, branch taken, chain id."""

    condition: str
    branch: str
    branch_group: str


class GraphNode(GraphModel):
    """One unit at the time of the build.

    Attributes:
        id: "<relative file path>:<name>", e.g. "src/app/api/analyze/route.ts:POST".
        hash: Content hash of the unit's parameters and body.
        line_range: (start, end), 1-indexed and inclusive.
    """

    id: str
    name: str
    kind: NodeKind
    file_path: str
    entry_type: Optional[EntryType] = None
    is_async: bool = False
    hash: str
    line_range: tuple[int, int]
    metadata: Optional[EntryPointMetadata] = None


class GraphEdge(GraphModel):
    """A directed "source body reaches target" relationship."""

    id: str
    source: str
    target: str
    edge_type: EdgeType = Field(alias="type")
    label: Optional[str] = None
    conditions: Optional[list[ConditionModel]] = None
    is_async: bool = False
    order: Optional[int] = None


class FlowGraph(GraphModel):
    """An immutable graph snapshot."""

    version: str = GRAPH_VERSION
    generated_at: str
    nodes: list[GraphNode]
    edges: list[GraphEdge]

    def get_node(self, node_id: str) -> Optional[GraphNode]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None


def make_node_id(file_path: str, name: str) -> str:
    return f"{file_path}:{name}"


def make_edge_id(source: str, target: str) -> str:
    return f"{source}->{target}"
