"""
Path glob matching shared by scope and exclusion checks.

Semantics:
- a pattern without `*` matches only the identical normalized path
- `**` matches zero or more path segments, crossing `/`
- `*` matches within a single segment
- every other character is literal
"""

from __future__ import annotations

import posixpath
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable


def normalize_path(path: str) -> str:
    """Convert backslashes to `/` and strip a leading `./`."""
    normalized = path.replace("\\", "/")
    if normalized.startswith("./"):
        normalized = normalized[2:]
    return normalized


_DRIVE_RE = re.compile(r"^[A-Za-z]:/")


def fold_path(path: str) -> str | None:
    """
    Normalize `path` and collapse `.` and `..` segments.

    Returns None unless the folded path stays strictly inside the root.
    """
    normalized = normalize_path(path)
    if posixpath.isabs(normalized) or _DRIVE_RE.match(normalized):
        return None
    folded = posixpath.normpath(normalized)
    if folded in (".", "..") or folded.startswith("../"):
        return None
    return folded


def _translate(pattern: str) -> str:
    parts: list[str] = []
    i = 0
    n = len(pattern)
    while i < n:
        if pattern.startswith("**/", i):
            parts.append("(?:.*/)?")
            i += 3
        elif pattern.startswith("**", i):
            parts.append(".*")
            i += 2
        elif pattern[i] == "*":
            parts.append("[^/]*")
            i += 1
        else:
            parts.append(re.escape(pattern[i]))
            i += 1
    return "^" + "".join(parts) + "$"


@dataclass(frozen=True)
class GlobPattern:
    """A compiled path pattern."""

    pattern: str
    regex: re.Pattern[str] | None = None

    @property
    def is_literal(self) -> bool:
        return self.regex is None

    def matches(self, path: str) -> bool:
        target = normalize_path(path)
        if self.regex is None:
            return target == self.pattern
        return self.regex.match(target) is not None


@lru_cache(maxsize=512)
def compile_pattern(pattern: str) -> GlobPattern:
    normalized = normalize_path(pattern)
    if "*" not in normalized:
        return GlobPattern(pattern=normalized)
    return GlobPattern(pattern=normalized, regex=re.compile(_translate(normalized)))


def matches_any(path: str, patterns: Iterable[str]) -> bool:
    return any(compile_pattern(p).matches(path) for p in patterns)
