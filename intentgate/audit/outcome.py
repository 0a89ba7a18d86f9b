from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class WriteOutcome:
    """Result of one audit write. Consumed by the writer; never raised."""

    ok: bool
    target: Path | None = None
    error: str | None = None
    skipped: bool = False

    @classmethod
    def written(cls, target: Path) -> "WriteOutcome":
        return cls(ok=True, target=target)

    @classmethod
    def skip(cls, reason: str) -> "WriteOutcome":
        return cls(ok=True, skipped=True, error=reason)

    @classmethod
    def failed(cls, target: Path | None, exc: BaseException) -> "WriteOutcome":
        return cls(ok=False, target=target, error=f"{type(exc).__name__}: {exc}")


def consume(outcome: WriteOutcome, logger: logging.Logger, what: str) -> None:
    """Log an outcome and drop it."""
    if not outcome.ok:
        logger.warning(f"Failed to {what} ({outcome.target}): {outcome.error}")
    elif outcome.skipped:
        logger.debug(f"Skipped {what}: {outcome.error}")
