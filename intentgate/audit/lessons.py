"""Lessons learned: postmortem notes appended to .orchestration/AGENT.md after failed verification."""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path

from ..layout import OrchestrationPaths
from .outcome import WriteOutcome, consume


logger = logging.getLogger(__name__)


def format_lesson(relative_path: str, problems: str, day: date) -> str:
    return (
        f"## Lesson Learned ({day.isoformat()})\n"
        f"**File:** {relative_path}\n"
        f"**Problems:**\n"
        f"{problems.strip()}\n\n"
    )


def write_lesson(root: Path, relative_path: str, problems: str | None, *, today: date | None = None) -> WriteOutcome:
    if not relative_path or not relative_path.strip() or not problems or not problems.strip():
        return WriteOutcome.skip("nothing to record")

    paths = OrchestrationPaths.for_root(root)
    target = paths.lessons_file
    try:
        paths.ensure_dir()
        with target.open("a", encoding="utf-8") as f:
            f.write(format_lesson(relative_path, problems, today or date.today()))
    except Exception as e:
        return WriteOutcome.failed(target, e)
    return WriteOutcome.written(target)


def append_lesson(root: Path, relative_path: str, problems: str | None, *, today: date | None = None) -> None:
    consume(write_lesson(root, relative_path, problems, today=today), logger, "append lesson")
