# syncgraph/checker/paths.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Path resolution across working trees.

Paths recorded in a snapshot or a doc's front matter may come from another
checkout of the same project (a different clone or worktree). These helpers
re-anchor such paths in the current tree by looking for a known
project-root-relative prefix such as "src/".
"""

import os
from pathlib import Path
from typing import Iterator, Optional, Sequence

DEFAULT_PREFIXES = ("src/", "lib/")


def _prefixed_tails(file_path: str, prefixes: Sequence[str]) -> Iterator[str]:
    """Yield trailing parts of the path that start with one of the prefixes."""
    parts = file_path.replace("\\", "/").split("/")
    for i in range(len(parts)):
        candidate = "/".join(parts[i:])
        if candidate.startswith(tuple(prefixes)):
            yield candidate


def to_relative_path(
    file_path: str, cwd: Optional[str] = None, prefixes: Sequence[str] = DEFAULT_PREFIXES
) -> str:
    """Convert an absolute or foreign-tree path to a root-relative POSIX path.

    Args:
        file_path: Path to convert.
        cwd: Project root; defaults to the current directory.
        prefixes: Known root-relative prefixes.

    Returns:
        Relative path when the file is under ``cwd``; otherwise the first
        tail starting with a known prefix; otherwise the plain relative path.
    """
    root = os.path.abspath(cwd or os.getcwd())
    resolved = os.path.abspath(file_path)

    if resolved == root or resolved.startswith(root + os.sep):
        return Path(os.path.relpath(resolved, root)).as_posix()

    for candidate in _prefixed_tails(file_path, prefixes):
        return candidate

    return Path(os.path.relpath(resolved, root)).as_posix()


def resolve_source_path(
    file_path: str, cwd: Optional[str] = None, prefixes: Sequence[str] = DEFAULT_PREFIXES
) -> str:
    """Resolve a recorded path to an absolute path in the current tree.

    Relative paths are joined to ``cwd``. When the result does not exist,
    every tail of the path starting with a known prefix is tried against
    ``cwd``. If nothing exists, the first computed path is returned so the
    caller can report it as missing.
    """
    root = os.path.abspath(cwd or os.getcwd())
    direct = file_path if os.path.isabs(file_path) else os.path.join(root, file_path)
    direct = os.path.normpath(direct)

    if os.path.exists(direct):
        return direct

    for candidate in _prefixed_tails(file_path, prefixes):
        resolved = os.path.normpath(os.path.join(root, candidate))
        if os.path.exists(resolved):
            return resolved

    return direct
