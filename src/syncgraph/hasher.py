# syncgraph/hasher.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Rename-tolerant content hashing for units.

Only the parameter text and body text of a unit are hashed, after
whitespace normalization. The unit's name, export modifiers and position
never reach the digest.
"""

import hashlib
import re
from typing import Optional

from .parsers.base import SymbolInfo

TAB_WIDTH = 2
SHORT_HASH_LENGTH = 8

_SPACE_RUNS = re.compile(r" +")


def normalize(text: str) -> str:
    """Normalize whitespace: line endings, then tabs, then space runs, then ends."""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = text.replace("\t", " " * TAB_WIDTH)
    text = _SPACE_RUNS.sub(" ", text)
    return text.strip()


def hash_content(params: str, body: str) -> str:
    """Hex sha256 of the normalized parameter and body text."""
    content = normalize(f"{params}{body}")
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def hash_symbol(symbol: SymbolInfo) -> str:
    """Hash a unit by its parameters and body only."""
    return hash_content(symbol.params, symbol.body)


def short_hash(digest: str) -> str:
    """Display form of a digest. Never compare short forms for equality."""
    return digest[:SHORT_HASH_LENGTH]


def has_changed(old: SymbolInfo, new: Optional[SymbolInfo]) -> bool:
    """True when ``new`` is missing or hashes differently from ``old``."""
    if new is None:
        return True
    return hash_symbol(old) != hash_symbol(new)


class ContentHasher:
    """Stateless wrapper around the hashing functions for injection into the builder."""

    def hash(self, symbol: SymbolInfo) -> str:
        return hash_symbol(symbol)

    def short(self, digest: str) -> str:
        return short_hash(digest)

    def changed(self, old: SymbolInfo, new: Optional[SymbolInfo]) -> bool:
        return has_changed(old, new)
