from __future__ import annotations

from datetime import date
from pathlib import Path

from intentgate.audit.lessons import append_lesson, format_lesson, write_lesson


DAY = date(2026, 3, 14)


def test_format_lesson() -> None:
    assert format_lesson("src/a.ts", "  TS2304: Cannot find name 'x'\n", DAY) == (
        "## Lesson Learned (2026-03-14)\n"
        "**File:** src/a.ts\n"
        "**Problems:**\n"
        "TS2304: Cannot find name 'x'\n"
        "\n"
    )


def test_lessons_are_appended(tmp_path: Path) -> None:
    append_lesson(tmp_path, "src/a.ts", "first problem", today=DAY)
    append_lesson(tmp_path, "src/b.ts", "second problem", today=DAY)

    content = (tmp_path / ".orchestration" / "AGENT.md").read_text(encoding="utf-8")
    assert content.count("## Lesson Learned (2026-03-14)") == 2
    assert content.index("src/a.ts") < content.index("src/b.ts")


def test_existing_content_is_preserved(tmp_path: Path) -> None:
    target = tmp_path / ".orchestration" / "AGENT.md"
    target.parent.mkdir()
    target.write_text("# Agent notes\n\n", encoding="utf-8")

    append_lesson(tmp_path, "src/a.ts", "broken", today=DAY)

    assert target.read_text(encoding="utf-8").startswith("# Agent notes\n\n## Lesson Learned")


def test_blank_input_is_skipped(tmp_path: Path) -> None:
    for path, problems in [("", "x"), ("src/a.ts", ""), ("src/a.ts", "   \n"), ("src/a.ts", None)]:
        outcome = write_lesson(tmp_path, path, problems, today=DAY)
        assert outcome.ok and outcome.skipped

    assert not (tmp_path / ".orchestration").exists()


def test_failure_is_reported_not_raised(tmp_path: Path) -> None:
    (tmp_path / ".orchestration").write_text("not a directory", encoding="utf-8")

    outcome = write_lesson(tmp_path, "src/a.ts", "broken", today=DAY)
    assert not outcome.ok

    append_lesson(tmp_path, "src/a.ts", "broken", today=DAY)
