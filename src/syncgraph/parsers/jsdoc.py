# syncgraph/parsers/jsdoc.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Doc-comment parsing for /** ... */ blocks.

Extracts the free-text description plus @param, @returns, @example,
@throws, @see and @deprecated tags. Type annotations inside braces are
dropped; only names and descriptions are kept.
"""

import re
from typing import Optional

from .base import JsDocInfo, JsDocParam

TAG_LINE = re.compile(r"^@([A-Za-z]+)\b\s?(.*)$")
LEADING_DASH = re.compile(r"^-(\s+|$)")

PARAM_TAGS = {"param", "arg", "argument"}
RETURN_TAGS = {"returns", "return"}
THROWS_TAGS = {"throws", "exception"}


def parse_jsdoc(comment: str) -> Optional[JsDocInfo]:
    """Parse the raw text of a doc comment.

    Args:
        comment: Comment text including the ``/**`` and ``*/`` delimiters.

    Returns:
        JsDocInfo, or None when the text is not a doc comment or carries
        nothing (an empty ``/** */`` block is treated as absent).
    """
    if not comment.startswith("/**"):
        return None

    inner = comment[3:-2] if comment.endswith("*/") else comment[3:]

    description_lines: list[str] = []
    tags: list[tuple[str, list[str]]] = []
    for raw_line in inner.split("\n"):
        line = _strip_comment_prefix(raw_line)
        match = TAG_LINE.match(line.strip())
        if match:
            tags.append((match.group(1).lower(), [match.group(2)]))
        elif tags:
            tags[-1][1].append(line)
        else:
            description_lines.append(line.strip())

    info = JsDocInfo(description="\n".join(description_lines).strip() or None)

    for tag, lines in tags:
        text = "\n".join(lines).strip()
        if tag in PARAM_TAGS:
            param = _parse_param(text)
            if param:
                info.params.append(param)
        elif tag in RETURN_TAGS:
            if info.returns is None:
                info.returns = _strip_type(text) or None
        elif tag == "example":
            example = "\n".join(lines).strip("\n").rstrip()
            if example.strip():
                info.examples.append(_dedent(example))
        elif tag == "deprecated":
            if info.deprecated is None:
                info.deprecated = text if text else True
        elif tag in THROWS_TAGS:
            if text:
                info.throws.append(_strip_type(text) or text)
        elif tag == "see":
            if text:
                info.see.append(text)

    if (
        info.description is None
        and not info.params
        and info.returns is None
        and not info.examples
        and info.deprecated is None
        and not info.throws
        and not info.see
    ):
        return None

    return info


def _strip_comment_prefix(line: str) -> str:
    """Remove the leading `` * `` decoration of a doc-comment line."""
    stripped = line.lstrip()
    if stripped.startswith("*"):
        stripped = stripped[1:]
        if stripped.startswith(" "):
            stripped = stripped[1:]
        return stripped.rstrip()
    return line.rstrip()


def _strip_type(text: str) -> str:
    """Drop a leading ``{Type}`` token, honouring nested braces."""
    if not text.startswith("{"):
        return text
    depth = 0
    for i, ch in enumerate(text):
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[i + 1 :].strip()
    return ""


def _parse_param(text: str) -> Optional[JsDocParam]:
    """Parse ``{Type} name - description`` into a JsDocParam."""
    text = _strip_type(text)
    if not text:
        return None

    parts = text.split(None, 1)
    name = parts[0]
    rest = parts[1] if len(parts) > 1 else ""

    # [name] or [name=default] marks an optional parameter
    if name.startswith("[") and name.endswith("]"):
        name = name[1:-1].split("=", 1)[0]

    description = LEADING_DASH.sub("", rest.strip())
    return JsDocParam(name=name, description=description)


def _dedent(text: str) -> str:
    """Remove indentation common to every non-blank line."""
    lines = text.split("\n")
    indents = [len(line) - len(line.lstrip()) for line in lines if line.strip()]
    if not indents:
        return text
    cut = min(indents)
    return "\n".join(line[cut:] for line in lines).strip()
