# syncgraph/graph/resolver.py
# AI-Mind (c) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Call target resolution.

Resolves a call site found in one unit to the id of the node it reaches,
using the calling file's own units, its imports, and re-export chains.
"""

import logging
from typing import Callable, Optional

from ..extractor import SymbolExtractor
from ..parsers.base import CallSite, ImportInfo, ReExportInfo, SymbolInfo
from .module_resolver import ModuleResolver
from .symbol_table import SymbolTable

logger = logging.getLogger(__name__)

# Re-export hops followed before giving up; guards against cyclic barrels
MAX_RE_EXPORT_DEPTH = 5


class CallResolver:
    """Resolves call sites to node ids for one build.

    Tiers, first success wins:
    1. same file: a unit of that name in the calling file
       (``this.save()`` inside class Store also tries "Store.save")
    2. import: the local name of an import, or ``ns.fn()`` for a namespace
       import; the import's original name is looked up in the target file
    3. re-export: when the target file does not define the name, follow
       its re-exports, at most MAX_RE_EXPORT_DEPTH hops

    Same-file definitions shadow imports of the same name. A call qualified
    by a namespace import (``ns.fn()``) skips the same-file tier.
    """

    def __init__(
        self,
        extractor: SymbolExtractor,
        module_resolver: ModuleResolver,
        symbol_table: SymbolTable,
        known_files: set[str],
        to_relative: Callable[[str], str],
    ):
        """Initialize resolver with the state of a build.

        Args:
            extractor: Extractor used to read re-exports of barrel files.
            module_resolver: Resolves specifiers to absolute file paths.
            symbol_table: Nodes created in pass 1.
            known_files: Absolute paths of every file in the build.
            to_relative: Converts an absolute path to its node-id path.
        """
        self.extractor = extractor
        self.module_resolver = module_resolver
        self.symbol_table = symbol_table
        self.known_files = known_files
        self.to_relative = to_relative
        self._re_exports: dict[str, list[ReExportInfo]] = {}

    def resolve(
        self,
        call_site: CallSite,
        file_path: str,
        owner: SymbolInfo,
        imports: list[ImportInfo],
    ) -> Optional[str]:
        """Resolve a call site to a target node id.

        Args:
            call_site: The call to resolve.
            file_path: Absolute path of the calling file.
            owner: Unit containing the call.
            imports: Imports of the calling file.

        Returns:
            Target node id, or None when the call leaves the build's files
            or cannot be resolved.
        """
        rel_path = self.to_relative(file_path)

        # ns.fn() with import * as ns never refers to a same-file fn
        import_match = self._match_namespace(call_site, imports)

        if import_match is None:
            # Tier 1: same file
            if call_site.expression.startswith("this."):
                owner_class = owner.parent or (owner.name if owner.kind == "class" else None)
                if owner_class:
                    node = self.symbol_table.lookup(rel_path, f"{owner_class}.{call_site.name}")
                    if node is not None:
                        return node.id

            node = self.symbol_table.lookup(rel_path, call_site.name)
            if node is not None:
                return node.id

            # Tier 2: imports
            import_match = self._match_named(call_site, imports)
            if import_match is None:
                return None

        target_path = self.module_resolver.resolve(file_path, import_match.source)
        if target_path is None or target_path not in self.known_files:
            return None

        if import_match.is_namespace:
            original_name = call_site.name
        else:
            original_name = import_match.original_name

        target_rel = self.to_relative(target_path)
        node = self.symbol_table.lookup(target_rel, original_name)
        if node is not None:
            return node.id

        if import_match.is_default:
            node = self.symbol_table.default_export(target_rel)
            if node is not None:
                return node.id

        # Tier 3: re-export chain
        return self.follow_re_export(target_path, original_name)

    def _match_named(
        self, call_site: CallSite, imports: list[ImportInfo]
    ) -> Optional[ImportInfo]:
        for imp in imports:
            if not imp.is_namespace and imp.name == call_site.name:
                return imp
        return None

    def _match_namespace(
        self, call_site: CallSite, imports: list[ImportInfo]
    ) -> Optional[ImportInfo]:
        qualifier, _, _ = call_site.expression.rpartition(".")
        if qualifier:
            for imp in imports:
                if imp.is_namespace and imp.name == qualifier:
                    return imp
        return None

    def follow_re_export(self, barrel_path: str, name: str, depth: int = 0) -> Optional[str]:
        """Follow re-exports of ``name`` from a barrel file to its defining node.

        Args:
            barrel_path: Absolute path of the file re-exporting the name.
            name: Name exported by the barrel.
            depth: Hops already followed.

        Returns:
            Node id of the definition, or None when the chain leaves the
            build, dead-ends, or runs deeper than MAX_RE_EXPORT_DEPTH.
        """
        if depth > MAX_RE_EXPORT_DEPTH:
            logger.debug(f"Re-export chain for {name} too deep at {barrel_path}")
            return None

        re_exports = self._get_re_exports(barrel_path)

        named = [r for r in re_exports if r.local_name == name]
        if named:
            candidates = [(named[0], named[0].original_name)]
        else:
            candidates = [(r, name) for r in re_exports if r.local_name == "*"]

        for re_export, original_name in candidates:
            target_path = self.module_resolver.resolve(barrel_path, re_export.source)
            if target_path is None or target_path not in self.known_files:
                continue

            node = self.symbol_table.lookup(self.to_relative(target_path), original_name)
            if node is not None:
                return node.id

            target_id = self.follow_re_export(target_path, original_name, depth + 1)
            if target_id is not None:
                return target_id

        return None

    def _get_re_exports(self, file_path: str) -> list[ReExportInfo]:
        if file_path not in self._re_exports:
            self._re_exports[file_path] = self.extractor.extract_re_exports(file_path)
        return self._re_exports[file_path]
