# syncgraph/classifiers/nextjs.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Next.js classifier.

Detects:
- API route handlers (GET, POST, ... exported from app/api/**/route.ts)
- Page components (default export of app/**/page.tsx)
- Middleware (middleware() in middleware.ts)
- Server actions (functions in files starting with a "use server" directive)

Connections: fetch("/api/...") and router.push/replace("...").
"""

import logging
import re
from typing import Optional

from ..graph.models import EntryPointMetadata
from ..parsers.base import SymbolInfo
from .base import Classifier, EntryPointMatch, RuntimeConnection

logger = logging.getLogger(__name__)

HTTP_METHODS = {"GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"}

API_ROUTE_PATTERN = re.compile(r"(?:^|/)app/(api/.+)/route\.(ts|tsx|js|jsx)$")
PAGE_PATTERN = re.compile(r"(?:^|/)app/(?:(.+)/)?page\.(ts|tsx|js|jsx)$")
MIDDLEWARE_PATTERN = re.compile(r"(?:^|/)middleware\.(ts|tsx|js|jsx)$")

FETCH_PATTERN = re.compile(r"fetch\s*\(\s*['\"`](/?api/[^'\"`]+)['\"`]")
ROUTER_PATTERN = re.compile(r"router\.(push|replace)\s*\(\s*['\"`]([^'\"`]+)['\"`]")

USE_SERVER_DIRECTIVES = ("'use server'", '"use server"')


class NextJsClassifier(Classifier):
    name = "nextjs"

    def __init__(self):
        self._use_server: dict[str, bool] = {}

    def detect_entry_point(
        self, symbol: SymbolInfo, file_path: str
    ) -> Optional[EntryPointMatch]:
        path = file_path.replace("\\", "/")

        route_match = API_ROUTE_PATTERN.search(path)
        if route_match and symbol.name in HTTP_METHODS:
            return EntryPointMatch(
                entry_type="api-route",
                metadata=EntryPointMetadata(
                    http_method=symbol.name, route=f"/{route_match.group(1)}"
                ),
            )

        page_match = PAGE_PATTERN.search(path)
        if page_match and (symbol.name == "default" or symbol.is_default_export):
            route = f"/{page_match.group(1)}" if page_match.group(1) else "/"
            return EntryPointMatch(entry_type="page", metadata=EntryPointMetadata(route=route))

        if MIDDLEWARE_PATTERN.search(path) and symbol.name == "middleware":
            return EntryPointMatch(entry_type="middleware", metadata=EntryPointMetadata())

        if symbol.kind in ("function", "const") and self._has_use_server(file_path):
            return EntryPointMatch(entry_type="server-action", metadata=EntryPointMetadata())

        return None

    def _has_use_server(self, file_path: str) -> bool:
        if file_path not in self._use_server:
            try:
                with open(file_path, "r", encoding="utf-8") as f:
                    content = f.read()
            except (OSError, UnicodeDecodeError) as e:
                logger.debug(f"Cannot read {file_path} for directive check: {e}")
                content = ""
            self._use_server[file_path] = content.lstrip().startswith(USE_SERVER_DIRECTIVES)
        return self._use_server[file_path]

    def reset(self) -> None:
        self._use_server.clear()

    def detect_connections(self, symbol: SymbolInfo, file_path: str) -> list[RuntimeConnection]:
        connections = self._find_all(FETCH_PATTERN, symbol, "fetch")
        for connection in connections:
            if not connection.target_hint.startswith("/"):
                connection.target_hint = f"/{connection.target_hint}"

        connections.extend(self._find_all(ROUTER_PATTERN, symbol, "navigation", group=2))
        return connections
