# syncgraph/graph/store.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Snapshot persistence.

Reads and writes a FlowGraph as <output_dir>/graph.json.
"""

import json
import logging
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from ..errors import SnapshotError, SnapshotNotFoundError
from .models import FlowGraph

logger = logging.getLogger(__name__)

GRAPH_FILENAME = "graph.json"


class GraphStore:
    """Reads and writes graph.json inside an output directory."""

    def __init__(self, output_dir: Union[str, Path]):
        self.output_dir = Path(output_dir).resolve()

    @property
    def graph_path(self) -> Path:
        return self.output_dir / GRAPH_FILENAME

    def write(self, graph: FlowGraph) -> Path:
        """Write the snapshot, creating the output directory if needed.

        Returns:
            Path of the written file.
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)
        with open(self.graph_path, "w", encoding="utf-8") as f:
            json.dump(graph.to_dict(), f, indent=2, ensure_ascii=False)
        logger.info(
            f"Wrote {len(graph.nodes)} nodes and {len(graph.edges)} edges to {self.graph_path}"
        )
        return self.graph_path

    def read(self) -> Optional[FlowGraph]:
        """Read the snapshot; None if the file is absent or corrupt."""
        if not self.graph_path.exists():
            return None
        try:
            return load_graph(self.graph_path)
        except SnapshotError as e:
            logger.warning(str(e))
            return None

    def exists(self) -> bool:
        return self.graph_path.exists()


def load_graph(path: Union[str, Path]) -> FlowGraph:
    """Load a snapshot file.

    Args:
        path: Path to graph.json, or the directory holding it.

    Returns:
        Parsed FlowGraph.

    Raises:
        SnapshotNotFoundError: If the file is missing.
        SnapshotError: If the file is not JSON or not a snapshot.
    """
    graph_path = Path(path)
    if graph_path.is_dir():
        graph_path = graph_path / GRAPH_FILENAME

    if not graph_path.exists():
        raise SnapshotNotFoundError(f"Graph snapshot not found: {graph_path}")

    try:
        with open(graph_path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise SnapshotError(f"Cannot read graph snapshot {graph_path}: {e}") from e

    try:
        return FlowGraph.model_validate(data)
    except ValidationError as e:
        raise SnapshotError(f"Invalid graph snapshot {graph_path}: {e}") from e
