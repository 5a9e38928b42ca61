# syncgraph/classifiers/__init__.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Framework classifiers for entry points and runtime connections.

Components:
- Classifier: interface every framework implements
- NextJsClassifier, InngestClassifier, TriggerDevClassifier: built-in frameworks
- ClassifierRegistry: fixed-order registry consulted by the graph builder
"""

from .base import (
    CONNECTION_EDGE_TYPES,
    Classifier,
    EntryPointMatch,
    ResolvedConnection,
    RuntimeConnection,
    connection_edge_type,
)
from .inngest import InngestClassifier
from .nextjs import NextJsClassifier
from .registry import ClassifierRegistry
from .trigger_dev import TriggerDevClassifier

__all__ = [
    "CONNECTION_EDGE_TYPES",
    "Classifier",
    "EntryPointMatch",
    "ResolvedConnection",
    "RuntimeConnection",
    "connection_edge_type",
    "NextJsClassifier",
    "InngestClassifier",
    "TriggerDevClassifier",
    "ClassifierRegistry",
]
