# syncgraph/graph/__init__.py
# AI-Mind (c) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Flow graph module.

Components:
- FlowGraph, GraphNode, GraphEdge: snapshot models (graph.json)
- ModuleResolver: resolves import specifiers to project files
- SymbolTable: node id -> node map built in pass 1
- GraphStore: snapshot persistence
- FlowIndex: bidirectional traversal over a snapshot
- node_to_mermaid, flow_to_mermaid: diagrams from snapshot data

The builder lives in syncgraph.graph.builder.
"""

from .models import (
    ConditionModel,
    EntryPointMetadata,
    FlowGraph,
    GraphEdge,
    GraphNode,
    make_edge_id,
    make_node_id,
)
from .module_resolver import (
    AliasCache,
    ModuleResolver,
    clear_alias_cache,
    get_alias_cache,
    strip_json_comments,
)
from .symbol_table import SymbolTable
from .store import GraphStore, load_graph
from .flow_index import FlowIndex
from .mermaid import flow_to_mermaid, node_to_mermaid

__all__ = [
    # Models
    "ConditionModel",
    "EntryPointMetadata",
    "FlowGraph",
    "GraphEdge",
    "GraphNode",
    "make_edge_id",
    "make_node_id",
    # Resolution
    "AliasCache",
    "ModuleResolver",
    "clear_alias_cache",
    "get_alias_cache",
    "strip_json_comments",
    "SymbolTable",
    # Persistence
    "GraphStore",
    "load_graph",
    # Traversal and rendering
    "FlowIndex",
    "flow_to_mermaid",
    "node_to_mermaid",
]
