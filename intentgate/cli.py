"""CLI entrypoint for intentgate."""

import logging
import sys
from pathlib import Path

import click

from . import __version__
from .layout import find_project_root


@click.group()
@click.version_option(__version__, prog_name="intentgate")
@click.option(
    "--root",
    "-r",
    type=click.Path(exists=False, file_okay=False, dir_okay=True, path_type=Path),
    default=None,
    envvar="INTENTGATE_ROOT",
    help="Project root containing .orchestration/ (defaults to auto-detected from the current directory)",
)
@click.option("--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, root: Path | None, verbose: bool) -> None:
    """intentgate - Intent gatekeeping and audit trail for agent edits.

    Check operations against declared intents, and inspect the agent trace
    ledger and intent map kept under .orchestration/.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    if root is None:
        root = find_project_root(Path.cwd()) or Path.cwd()

    if not root.exists() or not root.is_dir():
        raise click.BadParameter(f"Directory '{root}' does not exist.", param_hint="--root / -r")

    ctx.obj["root"] = root.resolve()


@cli.command()
@click.argument("operation")
@click.option("--intent", "declared_intent", type=str, default=None, metavar="INTENT_ID", help="Currently declared intent")
@click.option(
    "--param",
    "-p",
    "param_pairs",
    multiple=True,
    metavar="KEY=VALUE",
    help="Operation parameter (repeatable), e.g. -p path=src/a.ts -p expected_content_hash=sha256:...",
)
@click.option(
    "--patch-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Read the `patch` parameter from a file (apply_patch)",
)
@click.option("--interactive", is_flag=True, help="Offer a human override for overridable denials")
@click.option("--json", "output_json", is_flag=True, help="Output the decision as JSON")
@click.pass_context
def check(
    ctx: click.Context,
    operation: str,
    declared_intent: str | None,
    param_pairs: tuple[str, ...],
    patch_file: Path | None,
    interactive: bool,
    output_json: bool,
) -> None:
    """Decide whether OPERATION may run under the declared intent.

    Exits 0 when allowed and 2 when denied.
    """
    from .commands.check_cmd import parse_params, run_check

    try:
        params = parse_params(param_pairs)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--param / -p")
    if patch_file is not None:
        params["patch"] = patch_file.read_text(encoding="utf-8")

    confirm = (lambda message: click.confirm(message, default=False, err=True)) if interactive else None
    exit_code = run_check(
        ctx.obj["root"],
        operation,
        declared_intent=declared_intent,
        params=params,
        confirm=confirm,
        output_json=output_json,
    )
    sys.exit(exit_code)


@cli.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(dir_okay=False, path_type=Path))
def digest(files: tuple[Path, ...]) -> None:
    """Print the content digest of each FILE (for expected_content_hash)."""
    from .commands.check_cmd import run_digest

    sys.exit(run_digest(list(files)))


@cli.command()
@click.pass_context
def intents(ctx: click.Context) -> None:
    """List intents from active_intents.yaml with their exclusion status."""
    from .commands.intents_cmd import run_intents

    sys.exit(run_intents(ctx.obj["root"]))


@cli.command()
@click.argument("intent_id")
@click.pass_context
def select(ctx: click.Context, intent_id: str) -> None:
    """Validate INTENT_ID and print its <intent_context> block."""
    from .commands.intents_cmd import run_select

    sys.exit(run_select(ctx.obj["root"], intent_id))


@cli.command()
@click.argument("path")
@click.option("--intent", "intent_id", required=True, metavar="INTENT_ID", help="Intent the change was made under")
@click.option("--session", "session_id", default="", help="Session or task identifier")
@click.option("--model", "model_id", default="unknown", help="Model identifier of the contributor")
@click.option("--evolution", is_flag=True, help="Also add PATH to the intent map (INTENT_EVOLUTION)")
@click.option("--problems", default=None, help="Verification problems to record as a lesson")
@click.pass_context
def record(
    ctx: click.Context,
    path: str,
    intent_id: str,
    session_id: str,
    model_id: str,
    evolution: bool,
    problems: str | None,
) -> None:
    """Append a trace record for PATH as it is on disk now."""
    from .commands.trace_cmd import run_record

    sys.exit(
        run_record(
            ctx.obj["root"],
            path,
            intent_id=intent_id,
            session_id=session_id,
            model_id=model_id,
            evolution=evolution,
            problems=problems,
        )
    )


@cli.command()
@click.option("--intent", "intent_id", default=None, metavar="INTENT_ID", help="Only records for this intent")
@click.option("--path", default=None, help="Only records for this file")
@click.option("--json", "output_json", is_flag=True, help="Output records as JSON")
@click.pass_context
def trace(ctx: click.Context, intent_id: str | None, path: str | None, output_json: bool) -> None:
    """Show the agent trace ledger."""
    from .commands.trace_cmd import run_trace

    sys.exit(run_trace(ctx.obj["root"], intent_id=intent_id, path=path, output_json=output_json))


@cli.command("map")
@click.pass_context
def intent_map(ctx: click.Context) -> None:
    """Print the intent map."""
    from .commands.trace_cmd import run_map

    sys.exit(run_map(ctx.obj["root"]))


@cli.command()
@click.argument("path")
@click.argument("problems")
@click.pass_context
def lesson(ctx: click.Context, path: str, problems: str) -> None:
    """Append a lesson learned for PATH to AGENT.md."""
    from .commands.trace_cmd import run_lesson

    sys.exit(run_lesson(ctx.obj["root"], path, problems))


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
