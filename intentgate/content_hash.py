"""
Content addressing for staleness checks and trace entries.

Digests are position-independent: identical content yields the same digest
wherever it sits, so a moved block can be recognized as unchanged.
"""

from __future__ import annotations

import hashlib
import re
from pathlib import Path


DIGEST_SCHEME = "sha256"

_DIGEST_RE = re.compile(r"^sha256:[0-9a-f]{64}$")


def content_digest(content: bytes | str) -> str:
    """
    Compute the content digest of raw bytes.

    Strings are UTF-8 encoded first, so the digest of a text equals the
    digest of the same text written to disk as UTF-8.

    Returns:
        "sha256:" followed by the lowercase hex digest
    """
    if isinstance(content, str):
        content = content.encode("utf-8")
    return f"{DIGEST_SCHEME}:{hashlib.sha256(content).hexdigest()}"


def file_digest(path: Path) -> str:
    """Digest a file's bytes on disk."""
    return content_digest(path.read_bytes())


def is_content_digest(value: object) -> bool:
    return isinstance(value, str) and bool(_DIGEST_RE.match(value))
