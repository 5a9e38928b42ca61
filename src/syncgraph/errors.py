# syncgraph/errors.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Exceptions for syncgraph."""


class SyncGraphError(Exception):
    """Base class for all syncgraph errors."""
    pass


class ConfigError(SyncGraphError):
    """Raised when a configuration file is unreadable or has invalid fields."""
    pass


class ExtractionError(SyncGraphError):
    """Raised when a source file cannot be read or parsed at all.

    Scoped to a single file. Callers that process many files record it as a
    per-file error and move on to the next file.
    """
    pass


class SnapshotError(SyncGraphError):
    """Raised when a graph snapshot is missing, unreadable, or malformed."""
    pass


class FrontMatterError(SyncGraphError):
    """Raised when a markdown doc has no front matter or it is not valid YAML."""
    pass


class SnapshotNotFoundError(SnapshotError):
    """Raised when no graph snapshot has been written yet."""
    pass
