"""Intent policy CLI commands."""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.table import Table

from ..layout import OrchestrationPaths
from ..policy.load import load_exclusion_policy, load_intents
from ..session import IntentSelectionError, Session, select_active_intent


def run_intents(root: Path) -> int:
    console = Console()
    err = Console(stderr=True)
    intents, ok = load_intents(root)
    if not ok:
        err.print(
            f"No readable intents at {OrchestrationPaths.for_root(root).intents_file}",
            style="bold red",
        )
        return 1

    exclusions = load_exclusion_policy(root)

    table = Table(title="Active Intents")
    table.add_column("id", style="cyan", no_wrap=True)
    table.add_column("name")
    table.add_column("status", style="magenta")
    table.add_column("owned_scope")
    table.add_column("excluded", style="red")

    for intent in intents:
        table.add_row(
            intent.id,
            intent.name or "",
            intent.status.value if intent.status else "",
            ", ".join(intent.owned_scope) or "(unrestricted)",
            "yes" if exclusions.excludes_intent(intent.id) else "",
        )

    console.print(table)
    if exclusions.ignored_path_patterns:
        console.print(f"Blocked paths: {', '.join(exclusions.ignored_path_patterns)}", style="dim")
    return 0


def run_select(root: Path, intent_id: str) -> int:
    err = Console(stderr=True)
    session = Session()
    try:
        context = select_active_intent(root, session, intent_id)
    except IntentSelectionError as e:
        err.print(str(e), style="bold red", highlight=False)
        return 1
    print(context)
    return 0
