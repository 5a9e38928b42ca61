# syncgraph/classifiers/registry.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Classifier registry, consulted in a fixed order."""

from typing import Iterator, Optional

from ..parsers.base import SymbolInfo
from .base import Classifier, EntryPointMatch
from .inngest import InngestClassifier
from .nextjs import NextJsClassifier
from .trigger_dev import TriggerDevClassifier


class ClassifierRegistry:
    """Ordered set of classifiers.

    The first classifier that recognizes a unit as an entry point wins;
    classifications are never merged. New frameworks are added with
    ``register``, which appends to the end of the order.
    """

    def __init__(self, classifiers: Optional[list[Classifier]] = None):
        self._classifiers: list[Classifier] = list(classifiers) if classifiers else []

    @classmethod
    def default(cls) -> "ClassifierRegistry":
        """Registry with the built-in classifiers: Next.js, Inngest, Trigger.dev."""
        return cls([NextJsClassifier(), InngestClassifier(), TriggerDevClassifier()])

    def register(self, classifier: Classifier) -> None:
        self._classifiers.append(classifier)

    def detect_entry_point(
        self, symbol: SymbolInfo, file_path: str
    ) -> Optional[EntryPointMatch]:
        for classifier in self._classifiers:
            match = classifier.detect_entry_point(symbol, file_path)
            if match is not None:
                return match
        return None

    def reset(self) -> None:
        """Clear cached file state of every classifier before a new build."""
        for classifier in self._classifiers:
            classifier.reset()

    def names(self) -> list[str]:
        return [c.name for c in self._classifiers]

    def __iter__(self) -> Iterator[Classifier]:
        return iter(self._classifiers)

    def __len__(self) -> int:
        return len(self._classifiers)

    def __repr__(self) -> str:
        return f"ClassifierRegistry({', '.join(self.names())})"
