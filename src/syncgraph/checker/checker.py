# syncgraph/checker/checker.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Staleness checking against the current working tree.

For every recorded (path, unit, hash) fact, the unit is re-extracted from
the current source and re-hashed. The fact is up to date when the hashes
match; otherwise it is stale because the unit changed, the unit is gone,
or the file is gone.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Sequence, Union

from ..errors import SnapshotError, SnapshotNotFoundError
from ..extractor import SymbolExtractor
from ..graph.store import load_graph
from ..hasher import ContentHasher
from .doc_parser import parse_doc_file
from .models import (
    REASON_CHANGED,
    REASON_FILE_NOT_FOUND,
    REASON_NOT_FOUND,
    CheckError,
    CheckResult,
    StaleDependency,
    StaleRecord,
    format_stale_reason,
)
from .paths import DEFAULT_PREFIXES, resolve_source_path

logger = logging.getLogger(__name__)

SKIP_DIRS = {"node_modules", ".git"}


class StaleChecker:
    """Checks graph snapshots and generated docs for staleness."""

    def __init__(
        self,
        root: Optional[Union[str, Path]] = None,
        prefixes: Sequence[str] = DEFAULT_PREFIXES,
        extractor: Optional[SymbolExtractor] = None,
        hasher: Optional[ContentHasher] = None,
    ):
        """Initialize the checker.

        Args:
            root: Working tree recorded paths are resolved against;
                defaults to the current directory.
            prefixes: Root-relative prefixes used to re-anchor paths that
                were recorded in another tree.
            extractor: Unit extractor.
            hasher: Content hasher; must match the one used at build time.
        """
        self.root = os.path.abspath(str(root)) if root is not None else None
        self.prefixes = tuple(prefixes)
        self.extractor = extractor or SymbolExtractor()
        self.hasher = hasher or ContentHasher()

    def check(self, snapshot_location: Union[str, Path]) -> CheckResult:
        """Check every node of a graph snapshot.

        Args:
            snapshot_location: Path to graph.json or the directory holding it.

        Returns:
            CheckResult with one entry per node. An absent or corrupt
            snapshot yields total 0 and a single report-level error, marked
            ``missing`` when the snapshot does not exist.
        """
        result = CheckResult()
        try:
            graph = load_graph(snapshot_location)
        except SnapshotNotFoundError as e:
            result.errors.append(
                CheckError(key=str(snapshot_location), message=str(e), missing=True)
            )
            return result
        except SnapshotError as e:
            result.errors.append(CheckError(key=str(snapshot_location), message=str(e)))
            return result

        result.total = len(graph.nodes)
        for node in graph.nodes:
            try:
                dep = self.check_dependency(node.file_path, node.name, node.hash)
            except Exception as e:
                logger.debug(f"Error checking {node.id}: {e}")
                result.errors.append(CheckError(key=node.id, message=str(e)))
                continue

            if dep is None:
                result.up_to_date.append(node.id)
            else:
                result.stale.append(
                    StaleRecord(id=node.id, reason=format_stale_reason([dep]), stale_dependencies=[dep])
                )

        logger.info(
            f"Checked {result.total} nodes: {len(result.stale)} stale, {len(result.errors)} errors"
        )
        return result

    def check_docs(self, docs_dir: Union[str, Path]) -> CheckResult:
        """Check every markdown doc under a directory.

        Each doc's front matter lists the units it was written against; a
        doc is stale when any of them is.
        """
        result = CheckResult()
        if not os.path.isdir(docs_dir):
            result.errors.append(
                CheckError(
                    key=str(docs_dir), message=f"Docs directory not found: {docs_dir}", missing=True
                )
            )
            return result

        doc_files = self.find_markdown_files(docs_dir)
        result.total = len(doc_files)

        for doc_path in doc_files:
            try:
                record = self.check_doc(doc_path)
            except Exception as e:
                logger.debug(f"Error checking {doc_path}: {e}")
                result.errors.append(CheckError(key=doc_path, message=str(e)))
                continue

            if record is None:
                result.up_to_date.append(doc_path)
            else:
                result.stale.append(record)

        return result

    def check_doc(self, doc_path: str) -> Optional[StaleRecord]:
        """Check a single doc; None when every dependency is up to date."""
        metadata = parse_doc_file(doc_path)

        stale_deps: list[StaleDependency] = []
        for dependency in metadata.dependencies:
            dep = self.check_dependency(dependency.path, dependency.symbol, dependency.hash)
            if dep is not None:
                stale_deps.append(dep)

        if not stale_deps:
            return None
        return StaleRecord(
            id=doc_path, reason=format_stale_reason(stale_deps), stale_dependencies=stale_deps
        )

    def check_dependency(
        self, path: str, symbol: str, old_hash: str
    ) -> Optional[StaleDependency]:
        """Compare one recorded unit hash with the current source.

        Returns:
            None when up to date, otherwise the StaleDependency.

        Raises:
            ExtractionError: If the file exists but cannot be read or parsed.
        """
        source_path = resolve_source_path(path, self.root, self.prefixes)

        if not os.path.isfile(source_path):
            return StaleDependency(
                path=path, symbol=symbol, old_hash=old_hash, new_hash="", reason=REASON_FILE_NOT_FOUND
            )

        # Same-named units share one node id; any of them matching counts
        candidates = [
            unit for unit in self.extractor.extract_all(source_path).symbols if unit.name == symbol
        ]
        if not candidates:
            return StaleDependency(
                path=path, symbol=symbol, old_hash=old_hash, new_hash="", reason=REASON_NOT_FOUND
            )

        hashes = [self.hasher.hash(unit) for unit in candidates]
        if old_hash in hashes:
            return None
        return StaleDependency(
            path=path, symbol=symbol, old_hash=old_hash, new_hash=hashes[-1], reason=REASON_CHANGED
        )

    def find_markdown_files(self, docs_dir: Union[str, Path]) -> list[str]:
        """All *.md files under a directory, sorted, skipping node_modules and .git."""
        files: list[str] = []
        for dirpath, dirnames, filenames in os.walk(docs_dir):
            dirnames[:] = sorted(d for d in dirnames if d not in SKIP_DIRS)
            for filename in sorted(filenames):
                if filename.endswith(".md"):
                    files.append(os.path.join(dirpath, filename))
        return sorted(files)
