# syncgraph/config.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Configuration models for syncgraph.

Defines the structure of the YAML configuration file that names the
source paths to analyze, where snapshots are written, and how module
specifiers are resolved.
"""

import fnmatch
import logging
from pathlib import Path
from typing import Iterator, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError

from .errors import ConfigError
from .parsers.registry import EXTENSION_GRAMMARS

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("_syncgraph/config.yaml")

DEFAULT_EXCLUDE = ["**/node_modules/**", "**/.next/**", "**/dist/**", "**/*.d.ts"]


class SourcePath(BaseModel):
    """A source path to analyze.

    Attributes:
        path: Directory to scan, relative to the project root.
        recursive: Whether to recurse into subdirectories (default True).
        extensions: File extensions to include.
        exclude: Glob patterns (matched against root-relative POSIX paths) to skip.
    """

    path: Path
    recursive: bool = True
    extensions: list[str] = Field(default_factory=lambda: sorted(EXTENSION_GRAMMARS))
    exclude: list[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUDE))


class ResolverSettings(BaseModel):
    """Module specifier resolution settings.

    Attributes:
        config_file: Name of the project configuration file holding path aliases.
        extension_swaps: Compiled-output extension -> source extensions to try instead.
        suffixes: Suffixes appended to an extensionless base path, in probe order.
    """

    config_file: str = "tsconfig.json"
    extension_swaps: dict[str, list[str]] = Field(
        default_factory=lambda: {
            ".js": [".ts", ".tsx"],
            ".jsx": [".tsx", ".ts"],
            ".mjs": [".mts", ".ts"],
        }
    )
    suffixes: list[str] = Field(
        default_factory=lambda: [".ts", ".tsx", "/index.ts", "/index.tsx", ".js", ".jsx"]
    )


class SyncGraphConfig(BaseModel):
    """Configuration for one analyzed project.

    This model maps directly to the YAML configuration file format.

    Attributes:
        root: Project root; node ids are paths relative to it.
        output_dir: Directory holding graph.json.
        docs_dir: Directory of markdown docs with recorded dependencies.
        sources: Source paths to analyze.
        resolver: Module resolution settings.
        project_root_prefixes: Path prefixes used to re-anchor paths recorded
            in another working tree.

    Example YAML:
        output_dir: _syncgraph
        sources:
          - path: src
            exclude:
              - "**/*.test.ts"
          - path: app
        resolver:
          config_file: tsconfig.json
    """

    root: Path = Path(".")
    output_dir: Path = Path("_syncgraph")
    docs_dir: Path = Path("docs")
    sources: list[SourcePath] = Field(default_factory=lambda: [SourcePath(path=Path("src"))])
    resolver: ResolverSettings = Field(default_factory=ResolverSettings)
    project_root_prefixes: list[str] = Field(default_factory=lambda: ["src/", "lib/"])

    def iter_source_files(self) -> Iterator[Path]:
        """Yield every source file named by the configured sources, sorted per source.

        Files are yielded once even when sources overlap.
        """
        seen: set[Path] = set()
        for source in self.sources:
            for file_path in self._iter_files(source):
                resolved = file_path.resolve()
                if resolved in seen:
                    continue
                seen.add(resolved)
                yield file_path

    def _iter_files(self, source: SourcePath) -> Iterator[Path]:
        path = self.root / source.path
        if not path.exists():
            logger.warning(f"Source path does not exist: {path}")
            return

        candidates = path.rglob("*") if source.recursive else path.glob("*")
        for file_path in sorted(candidates):
            if not file_path.is_file() or file_path.suffix.lower() not in source.extensions:
                continue
            relative = file_path.relative_to(self.root).as_posix()
            if any(_glob_match(relative, pattern) for pattern in source.exclude):
                continue
            yield file_path


def _glob_match(relative: str, pattern: str) -> bool:
    """fnmatch with a leading ``**/`` also matching at the root."""
    if fnmatch.fnmatch(relative, pattern):
        return True
    if pattern.startswith("**/"):
        return fnmatch.fnmatch(relative, pattern[3:])
    return False


def load_config(path: Optional[Union[str, Path]] = None) -> SyncGraphConfig:
    """Load configuration from YAML.

    Args:
        path: Config file path. Defaults to ``_syncgraph/config.yaml``.

    Returns:
        SyncGraphConfig; defaults when the file does not exist.

    Raises:
        ConfigError: If the file is not valid YAML or has invalid fields.
    """
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if not config_path.exists():
        logger.debug(f"Config file not found, using defaults: {config_path}")
        return SyncGraphConfig()

    try:
        with open(config_path) as f:
            config_dict = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {config_path}: {e}") from e

    if not isinstance(config_dict, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")

    try:
        return SyncGraphConfig(**config_dict)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {config_path}: {e}") from e
