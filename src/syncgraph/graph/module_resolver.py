# syncgraph/graph/module_resolver.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Module specifier to file path resolution.

Resolves the specifier of an import or re-export (e.g. "./utils",
"@/lib/db") to the absolute path of a project file. Relative specifiers
resolve against the importing file; alias specifiers are rewritten using
the "paths" of the nearest tsconfig.json. Bare package specifiers are
never resolved.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Optional

from ..config import ResolverSettings

logger = logging.getLogger(__name__)


@dataclass
class AliasConfig:
    """Wildcard path aliases from one project configuration file.

    Attributes:
        base_dir: Directory alias targets are relative to.
        patterns: (prefix, replacement) pairs, longest prefix first.
            "@/*": ["./src/*"] becomes ("@/", "./src/").
    """

    base_dir: str
    patterns: list[tuple[str, str]] = field(default_factory=list)


class AliasCache:
    """Memoizes alias lookups by absolute directory.

    Every directory visited while walking up to a configuration file is
    stored with the result, so any later lookup from those directories
    is a single dict hit. Not safe for concurrent mutation.
    """

    def __init__(self):
        self._by_dir: dict[str, Optional[AliasConfig]] = {}

    def lookup(self, from_file: str, config_file: str = "tsconfig.json") -> Optional[AliasConfig]:
        """Find the alias configuration governing ``from_file``.

        Args:
            from_file: Path of the importing file.
            config_file: Configuration file name to look for.

        Returns:
            AliasConfig, or None when no configuration file is found or the
            nearest one has no usable aliases or cannot be parsed.
        """
        directory = os.path.dirname(os.path.abspath(from_file))
        visited: list[str] = []
        result: Optional[AliasConfig] = None

        while True:
            if directory in self._by_dir:
                result = self._by_dir[directory]
                break

            visited.append(directory)
            candidate = os.path.join(directory, config_file)
            if os.path.isfile(candidate):
                result = load_alias_config(candidate)
                break

            parent = os.path.dirname(directory)
            if parent == directory:
                break
            directory = parent

        for visited_dir in visited:
            self._by_dir[visited_dir] = result
        return result

    def clear(self) -> None:
        self._by_dir.clear()

    def __len__(self) -> int:
        return len(self._by_dir)


_default_cache: Optional[AliasCache] = None


def get_alias_cache() -> AliasCache:
    """Process-wide alias cache, created on first use."""
    global _default_cache
    if _default_cache is None:
        _default_cache = AliasCache()
    return _default_cache


def clear_alias_cache() -> None:
    """Reset the process-wide alias cache."""
    if _default_cache is not None:
        _default_cache.clear()


def strip_json_comments(text: str) -> str:
    """Remove // and /* */ comments and trailing commas from JSON-with-comments.

    String literals are copied verbatim, so a value such as "@/*" or
    "http://host" is never mistaken for a comment.
    """
    out: list[str] = []
    i = 0
    n = len(text)
    in_string = False

    while i < n:
        ch = text[i]

        if in_string:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == '"':
                in_string = False
            i += 1
            continue

        if ch == '"':
            in_string = True
            out.append(ch)
            i += 1
        elif text.startswith("//", i):
            end = text.find("\n", i)
            i = n if end == -1 else end
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            i = n if end == -1 else end + 2
        else:
            out.append(ch)
            i += 1

    return _strip_trailing_commas("".join(out))


def _strip_trailing_commas(text: str) -> str:
    out: list[str] = []
    i = 0
    n = len(text)
    in_string = False

    while i < n:
        ch = text[i]
        if in_string:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
            out.append(ch)
        elif ch == ",":
            j = i + 1
            while j < n and text[j].isspace():
                j += 1
            if j >= n or text[j] not in "}]":
                out.append(ch)
        else:
            out.append(ch)
        i += 1

    return "".join(out)


def load_alias_config(config_path: str) -> Optional[AliasConfig]:
    """Parse wildcard aliases from ``compilerOptions.paths``.

    Only the first target of each mapping is used, and only mappings where
    both the pattern and the target end in "/*".
    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = json.loads(strip_json_comments(f.read()))
    except (OSError, ValueError) as e:
        logger.debug(f"Ignoring unreadable project config {config_path}: {e}")
        return None

    compiler_options = config.get("compilerOptions") if isinstance(config, dict) else None
    if not isinstance(compiler_options, dict):
        return None
    paths = compiler_options.get("paths")
    if not isinstance(paths, dict):
        return None

    config_dir = os.path.dirname(os.path.abspath(config_path))
    base_url = compiler_options.get("baseUrl")
    base_dir = (
        os.path.normpath(os.path.join(config_dir, base_url))
        if isinstance(base_url, str)
        else config_dir
    )

    patterns: list[tuple[str, str]] = []
    for pattern, targets in paths.items():
        if not isinstance(targets, list) or not targets or not isinstance(targets[0], str):
            continue
        target = targets[0]
        if pattern.endswith("/*") and target.endswith("/*"):
            patterns.append((pattern[:-1], target[:-1]))

    patterns.sort(key=lambda p: len(p[0]), reverse=True)
    return AliasConfig(base_dir=base_dir, patterns=patterns)


class ModuleResolver:
    """Resolves module specifiers to absolute file paths.

    Probe order for a base path:
    1. the path itself, if it is a file
    2. extension swaps (./bar.js -> ./bar.ts, ./bar.tsx)
    3. each suffix appended (.ts, .tsx, /index.ts, /index.tsx, .js, .jsx)
    """

    def __init__(
        self,
        settings: Optional[ResolverSettings] = None,
        cache: Optional[AliasCache] = None,
    ):
        self.settings = settings or ResolverSettings()
        self.cache = cache if cache is not None else get_alias_cache()

    def resolve(self, from_file: str, specifier: str) -> Optional[str]:
        """Resolve ``specifier`` as imported from ``from_file``.

        Args:
            from_file: Path of the importing file.
            specifier: Module specifier as written in the import.

        Returns:
            Absolute, normalized file path, or None when the specifier is a
            bare package or no candidate file exists.
        """
        if specifier.startswith("."):
            base_dir = os.path.dirname(os.path.abspath(from_file))
            return self._probe(os.path.normpath(os.path.join(base_dir, specifier)))

        aliases = self.cache.lookup(from_file, self.settings.config_file)
        if aliases is not None:
            for prefix, replacement in aliases.patterns:
                if specifier.startswith(prefix):
                    mapped = replacement + specifier[len(prefix) :]
                    return self._probe(os.path.normpath(os.path.join(aliases.base_dir, mapped)))

        return None

    def _probe(self, base_path: str) -> Optional[str]:
        if os.path.isfile(base_path):
            return base_path

        for from_ext, to_exts in self.settings.extension_swaps.items():
            if base_path.endswith(from_ext):
                stem = base_path[: -len(from_ext)]
                for to_ext in to_exts:
                    candidate = stem + to_ext
                    if os.path.isfile(candidate):
                        return candidate

        for suffix in self.settings.suffixes:
            candidate = base_path + suffix
            if os.path.isfile(candidate):
                return candidate

        return None
