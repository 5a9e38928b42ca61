# tests/conftest.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Pytest configuration for syncgraph tests.

Ensures the src directory is importable and provides fixtures for writing
small TypeScript projects into a temporary directory.
"""

import sys
import textwrap
from pathlib import Path
from typing import Callable

import pytest

# Add src directory to path for local packages
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from syncgraph.graph.module_resolver import clear_alias_cache  # noqa: E402


@pytest.fixture(autouse=True)
def reset_alias_cache():
    """Isolate the process-wide alias cache between tests."""
    clear_alias_cache()
    yield
    clear_alias_cache()


@pytest.fixture
def write_project(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Write {relative path: source} into tmp_path and return the root.

    Sources are dedented so fixtures can be written inline.
    """

    def _write(files: dict[str, str]) -> Path:
        for rel_path, content in files.items():
            path = tmp_path / rel_path
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")
        return tmp_path

    return _write
