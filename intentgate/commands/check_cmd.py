"""Gatekeeper CLI commands."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape

from ..content_hash import file_digest
from ..gatekeeper import Allow, ConfirmFn, Gatekeeper, Operation


EXIT_ALLOWED = 0
EXIT_DENIED = 2


def parse_params(pairs: tuple[str, ...] | list[str]) -> dict[str, Any]:
    """Parse repeated key=value options into a parameter mapping."""
    params: dict[str, Any] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"Expected key=value, got {pair!r}")
        params[key] = value
    return params


def run_check(
    root: Path,
    operation: str,
    *,
    declared_intent: str | None = None,
    params: dict[str, Any] | None = None,
    confirm: ConfirmFn | None = None,
    output_json: bool = False,
) -> int:
    console = Console()
    op = Operation(name=operation, params=params or {}, declared_intent=declared_intent)
    decision = Gatekeeper(root).check(op, confirm=confirm)

    if isinstance(decision, Allow):
        if output_json:
            print(json.dumps({
                "allow": True,
                "classification": decision.classification.value,
                "overridden": decision.overridden,
            }))
        else:
            note = " (human override)" if decision.overridden else ""
            console.print(f"[green]ALLOW[/green] {escape(operation)} ({decision.classification.value}){note}")
        return EXIT_ALLOWED

    if output_json:
        print(decision.to_tool_error())
    else:
        console.print(f"[bold red]DENY[/bold red] {escape(operation)}: {decision.kind.value}")
        console.print(f"  {escape(decision.message)}", highlight=False)
        console.print(f"  action hint: {decision.action_hint}", style="dim")
    return EXIT_DENIED


def run_digest(files: list[Path]) -> int:
    err = Console(stderr=True)
    status = 0
    for path in files:
        try:
            print(f"{file_digest(path)}  {path}")
        except OSError as e:
            err.print(f"Cannot read {path}: {e}", style="bold red")
            status = 1
    return status
