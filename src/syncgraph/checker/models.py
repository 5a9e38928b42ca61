# syncgraph/checker/models.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Types for the staleness checker."""

from dataclasses import dataclass, field
from typing import Any, Optional

REASON_CHANGED = "changed"
REASON_NOT_FOUND = "not-found"
REASON_FILE_NOT_FOUND = "file-not-found"


@dataclass
class DocDependency:
    """A unit a doc was written against, as recorded in its front matter."""

    path: str
    symbol: str
    hash: str
    as_of: Optional[str] = None  # Commit at which the hash was last valid


@dataclass
class DocMetadata:
    title: str
    generated: str
    dependencies: list[DocDependency]
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass
class StaleDependency:
    path: str
    symbol: str
    old_hash: str
    new_hash: str  # "" when the unit or file is gone
    reason: str  # "changed" | "not-found" | "file-not-found"


@dataclass
class StaleRecord:
    """One stale item: a graph node id, or a doc path for doc checks."""

    id: str
    reason: str
    stale_dependencies: list[StaleDependency]


@dataclass
class CheckError:
    """A report-level error, keyed by node id, doc path or snapshot path."""

    key: str
    message: str
    missing: bool = False  # The required input does not exist yet

    def __str__(self) -> str:
        return f"{self.key}: {self.message}"


@dataclass
class CheckResult:
    total: int = 0
    up_to_date: list[str] = field(default_factory=list)
    stale: list[StaleRecord] = field(default_factory=list)
    errors: list[CheckError] = field(default_factory=list)

    @property
    def status(self) -> str:
        """Overall outcome of a check.

        - empty: nothing was checked (no snapshot yet, or it has no nodes)
        - error: nothing was checked because the input could not be read
        - stale: at least one stale item
        - partial: nothing stale, but some items could not be checked
        - ok: everything up to date
        """
        if self.total == 0:
            if any(not e.missing for e in self.errors):
                return "error"
            return "empty"
        if self.stale:
            return "stale"
        if self.errors:
            return "partial"
        return "ok"


def format_stale_reason(stale_dependencies: list[StaleDependency]) -> str:
    """Human-readable reason, one clause per stale dependency."""
    reasons = []
    for dep in stale_dependencies:
        if dep.reason == REASON_CHANGED:
            reasons.append(f"{dep.path}:{dep.symbol} changed")
        elif dep.reason == REASON_NOT_FOUND:
            reasons.append(f"{dep.path}:{dep.symbol} not found")
        else:
            reasons.append(f"{dep.path} not found")
    return ", ".join(reasons)
