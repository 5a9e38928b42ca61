# syncgraph/checker/doc_parser.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Front matter parsing for generated markdown docs.

Format:
    ---
    title: processImage
    generated: 2026-02-03T00:00:00Z
    dependencies:
      - path: src/lib/images.ts
        symbol: processImage
        hash: 3f1c...
        asOf: 9a2b7c1
    ---
"""

import re
from pathlib import Path
from typing import Union

import yaml

from ..errors import FrontMatterError
from .models import DocDependency, DocMetadata

FRONT_MATTER_PATTERN = re.compile(r"\A---\r?\n(.*?)\r?\n---", re.DOTALL)


def parse_doc_file(file_path: Union[str, Path]) -> DocMetadata:
    """Read a markdown doc and parse its front matter.

    Raises:
        FrontMatterError: If the doc has no front matter or it is not YAML.
        OSError: If the file cannot be read.
    """
    with open(file_path, encoding="utf-8") as f:
        return parse_front_matter(f.read())


def parse_front_matter(content: str) -> DocMetadata:
    """Parse the YAML front matter of a markdown document.

    Dependencies missing any of path, symbol or hash are skipped.
    """
    match = FRONT_MATTER_PATTERN.match(content)
    if not match:
        raise FrontMatterError("No frontmatter found in doc file")

    try:
        data = yaml.safe_load(match.group(1)) or {}
    except yaml.YAMLError as e:
        raise FrontMatterError(f"Invalid frontmatter: {e}") from e

    if not isinstance(data, dict):
        raise FrontMatterError("Frontmatter must be a mapping")

    dependencies: list[DocDependency] = []
    for entry in data.get("dependencies") or []:
        if not isinstance(entry, dict):
            continue
        path, symbol, digest = entry.get("path"), entry.get("symbol"), entry.get("hash")
        if not (path and symbol and digest):
            continue
        as_of = entry.get("asOf")
        dependencies.append(
            DocDependency(
                path=str(path),
                symbol=str(symbol),
                hash=str(digest),
                as_of=str(as_of) if as_of is not None else None,
            )
        )

    extra = {k: v for k, v in data.items() if k not in ("title", "generated", "dependencies")}
    return DocMetadata(
        title=str(data.get("title") or ""),
        generated=str(data.get("generated") or ""),
        dependencies=dependencies,
        extra=extra,
    )
