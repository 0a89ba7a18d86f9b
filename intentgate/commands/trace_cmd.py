"""Audit trail CLI commands."""

from __future__ import annotations

import json
from pathlib import Path

from rich.console import Console
from rich.table import Table

from ..audit.intent_map import update_intent_map
from ..audit.ledger import TraceLedger, record_mutation
from ..audit.lessons import append_lesson
from ..layout import OrchestrationPaths


def run_trace(
    root: Path,
    *,
    intent_id: str | None = None,
    path: str | None = None,
    output_json: bool = False,
) -> int:
    console = Console()
    ledger = TraceLedger(root)

    records = ledger.records_for_path(path) if path else ledger.read_all()
    if intent_id:
        records = [r for r in records if intent_id in r.intent_ids]

    if output_json:
        print(json.dumps([r.to_dict() for r in records], indent=2))
        return 0

    table = Table(title="Agent Trace")
    table.add_column("timestamp", style="dim", no_wrap=True)
    table.add_column("file", style="cyan")
    table.add_column("intent", style="magenta")
    table.add_column("digest", style="dim")
    table.add_column("revision", style="dim")

    for r in records:
        digest = r.content_digest or ""
        table.add_row(
            r.timestamp,
            r.relative_path,
            ", ".join(r.intent_ids),
            (digest[:19] + "…") if digest else "",
            (r.vcs_revision or "")[:10],
        )

    console.print(table)
    console.print(f"Records: {len(records)} total")
    return 0


def run_record(
    root: Path,
    path: str,
    *,
    intent_id: str,
    session_id: str = "",
    model_id: str = "unknown",
    evolution: bool = False,
    problems: str | None = None,
) -> int:
    """Record a mutation made outside an agent session (e.g. by hand)."""
    before = TraceLedger(root).count()
    record_mutation(root, path, intent_id=intent_id, session_id=session_id, model_id=model_id)
    if evolution:
        update_intent_map(root, intent_id, path)
    if problems:
        append_lesson(root, path, problems)

    if TraceLedger(root).count() <= before:
        Console(stderr=True).print("Trace entry was not written (see log output).", style="bold red")
        return 1
    return 0


def run_map(root: Path) -> int:
    err = Console(stderr=True)
    target = OrchestrationPaths.for_root(root).intent_map_file
    if not target.exists():
        err.print(f"No intent map yet: {target}", style="yellow")
        return 1
    print(target.read_text(encoding="utf-8"), end="")
    return 0


def run_lesson(root: Path, path: str, problems: str) -> int:
    append_lesson(root, path, problems)
    return 0
