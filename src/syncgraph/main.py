# syncgraph/main.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
CLI entry point for syncgraph.

Usage:
    python -m syncgraph build
    python -m syncgraph check
    python -m syncgraph check-docs docs/
    python -m syncgraph mermaid "src/app/api/analyze/route.ts:POST"
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .checker import CheckResult, StaleChecker
from .config import SyncGraphConfig, load_config
from .errors import ConfigError
from .graph import FlowIndex, GraphStore, ModuleResolver, flow_to_mermaid, node_to_mermaid
from .graph.builder import GraphBuilder
from .hasher import short_hash

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="syncgraph",
        description="Build a call graph of TypeScript sources and detect stale facts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Build graph.json from the configured sources
    python -m syncgraph build

    # Check the snapshot against the current sources
    python -m syncgraph check --verbose

    # Render the neighbourhood of one node
    python -m syncgraph mermaid "src/lib/db.ts:connect" --depth 2
        """,
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration YAML (default: _syncgraph/config.yaml)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose (debug) logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    build = subparsers.add_parser("build", help="Build and write the graph snapshot")
    build.add_argument("files", nargs="*", type=Path, help="Source files (default: configured sources)")
    build.add_argument("--output-dir", type=Path, default=None, help="Override output directory")

    check = subparsers.add_parser("check", help="Check snapshot nodes for staleness")
    check.add_argument("--snapshot", type=Path, default=None, help="graph.json or its directory")

    check_docs = subparsers.add_parser("check-docs", help="Check markdown docs for staleness")
    check_docs.add_argument("docs_dir", nargs="?", type=Path, default=None)

    mermaid = subparsers.add_parser("mermaid", help="Render a node or flow as mermaid")
    mermaid.add_argument("node_id", help='Node id, e.g. "src/lib/db.ts:connect"')
    mermaid.add_argument("--depth", type=int, default=1, help="Neighbour hops to include")
    mermaid.add_argument(
        "--flow", action="store_true", help="Render everything reachable from the node"
    )

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the syncgraph CLI.

    Returns:
        Exit code: 0 when nothing is stale, 1 when stale or on fatal errors.
    """
    args = _build_parser().parse_args(argv)

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        config = load_config(args.config)
    except ConfigError as e:
        logger.error(str(e))
        return 1

    if args.command == "build":
        return _run_build(config, args)
    if args.command == "check":
        return _run_check(config, args)
    if args.command == "check-docs":
        return _run_check_docs(config, args)
    if args.command == "mermaid":
        return _run_mermaid(config, args)
    return 1


def _run_build(config: SyncGraphConfig, args: argparse.Namespace) -> int:
    files = list(args.files) or list(config.iter_source_files())
    if not files:
        logger.error("No source files found; check the configured sources")
        return 1

    output_dir = args.output_dir or config.root / config.output_dir
    print(f"Building graph from {len(files)} files...")

    try:
        builder = GraphBuilder(root=config.root, resolver=ModuleResolver(config.resolver))
        graph = builder.build(files)
        path = GraphStore(output_dir).write(graph)
    except Exception as e:
        logger.exception(f"Build failed: {e}")
        return 1

    for error in builder.errors:
        logger.warning(error)

    entry_points = sum(1 for node in graph.nodes if node.entry_type)
    print(f"  Nodes: {len(graph.nodes)} ({entry_points} entry points)")
    print(f"  Edges: {len(graph.edges)}")
    print(f"Done. Graph saved to {path}")
    return 0


def _run_check(config: SyncGraphConfig, args: argparse.Namespace) -> int:
    snapshot = args.snapshot or config.root / config.output_dir
    checker = StaleChecker(root=config.root, prefixes=config.project_root_prefixes)
    return _report(checker.check(snapshot), noun="nodes")


def _run_check_docs(config: SyncGraphConfig, args: argparse.Namespace) -> int:
    docs_dir = args.docs_dir or config.root / config.docs_dir
    checker = StaleChecker(root=config.root, prefixes=config.project_root_prefixes)
    return _report(checker.check_docs(docs_dir), noun="docs")


def _report(result: CheckResult, noun: str) -> int:
    """Print a check result; return the exit code."""
    for error in result.errors:
        logger.warning(str(error))

    status = result.status
    if status == "error":
        for error in result.errors:
            print(f"Check failed: {error}")
        return 1
    if status == "empty":
        print("Nothing to check yet. Run `syncgraph build` first.")
        return 1

    for record in result.stale:
        print(f"STALE {record.id}: {record.reason}")
        for dep in record.stale_dependencies:
            if dep.new_hash:
                print(f"    {short_hash(dep.old_hash)} -> {short_hash(dep.new_hash)}")

    print(
        f"Checked {result.total} {noun}: {len(result.up_to_date)} up to date, "
        f"{len(result.stale)} stale, {len(result.errors)} errors"
    )

    if status == "stale":
        return 1
    if status == "partial":
        print(f"Warning: {len(result.errors)} {noun} could not be checked")
    return 0


def _run_mermaid(config: SyncGraphConfig, args: argparse.Namespace) -> int:
    graph = GraphStore(config.root / config.output_dir).read()
    if graph is None:
        print("No graph snapshot found. Run `syncgraph build` first.")
        return 1

    if graph.get_node(args.node_id) is None:
        logger.error(f"Unknown node: {args.node_id}")
        return 1

    if args.flow:
        index = FlowIndex(graph)
        included = {args.node_id, *index.reachable(args.node_id)}
        nodes = [node for node in graph.nodes if node.id in included]
        edges = [e for e in graph.edges if e.source in included and e.target in included]
        print(flow_to_mermaid(nodes, edges, args.node_id))
    else:
        print(node_to_mermaid(graph, args.node_id, depth=args.depth))
    return 0


if __name__ == "__main__":
    sys.exit(main())
