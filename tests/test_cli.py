"""
Tests for the intentgate CLI commands.

The run_* functions are tested directly with capsys; a few end-to-end
invocations go through the click group to cover option wiring and exit codes.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from intentgate.cli import cli
from intentgate.commands.check_cmd import EXIT_ALLOWED, EXIT_DENIED, parse_params, run_check, run_digest
from intentgate.commands.intents_cmd import run_intents, run_select
from intentgate.commands.trace_cmd import run_lesson, run_map, run_record, run_trace
from intentgate.content_hash import content_digest


# ============================================================================
# check / digest
# ============================================================================


def test_parse_params() -> None:
    assert parse_params(["path=src/a.ts", "content=a=b"]) == {"path": "src/a.ts", "content": "a=b"}
    with pytest.raises(ValueError):
        parse_params(["no-separator"])
    with pytest.raises(ValueError):
        parse_params(["=value"])


def test_check_allow(project_root: Path, capsys) -> None:
    result = run_check(project_root, "write_to_file", declared_intent="INT-001", params={"path": "src/a.ts"})

    assert result == EXIT_ALLOWED
    out = capsys.readouterr().out
    assert "ALLOW" in out
    assert "destructive" in out


def test_check_deny_text(project_root: Path, capsys) -> None:
    result = run_check(project_root, "write_to_file", declared_intent="INT-001", params={"path": "docs/a.md"})

    assert result == EXIT_DENIED
    out = capsys.readouterr().out
    assert "DENY" in out
    assert "SCOPE_VIOLATION" in out
    assert "[docs/a.md]" in out
    assert "request_scope_expansion" in out


def test_check_deny_json(project_root: Path, capsys) -> None:
    result = run_check(project_root, "edit", params={"file_path": "src/a.ts"}, output_json=True)

    assert result == EXIT_DENIED
    data = json.loads(capsys.readouterr().out)
    assert data["error_type"] == "MISSING_INTENT"
    assert data["action_hint"] == "select_active_intent"


def test_check_allow_json_with_override(project_root: Path, capsys) -> None:
    result = run_check(
        project_root,
        "write_to_file",
        declared_intent="INT-001",
        params={"path": "docs/a.md"},
        confirm=lambda message: True,
        output_json=True,
    )

    assert result == EXIT_ALLOWED
    assert json.loads(capsys.readouterr().out) == {
        "allow": True,
        "classification": "destructive",
        "overridden": True,
    }


def test_digest(tmp_path: Path, capsys) -> None:
    path = tmp_path / "a.ts"
    path.write_text("const x = 1\n", encoding="utf-8")

    assert run_digest([path]) == 0
    assert capsys.readouterr().out.startswith(content_digest("const x = 1\n"))


def test_digest_missing_file(tmp_path: Path, capsys) -> None:
    assert run_digest([tmp_path / "missing.ts"]) == 1
    assert "Cannot read" in capsys.readouterr().err


# ============================================================================
# intents / select
# ============================================================================


def test_intents_table(project_root: Path, capsys) -> None:
    (project_root / ".intentignore").write_text("intent:INT-003\nsecrets/**\n", encoding="utf-8")

    assert run_intents(project_root) == 0
    out = capsys.readouterr().out
    assert "Active Intents" in out
    assert "INT-001" in out and "INT-002" in out and "INT-003" in out
    assert "unrestricted" in out
    assert "Blocked paths: secrets/**" in out


def test_intents_without_store(tmp_path: Path, capsys) -> None:
    assert run_intents(tmp_path) == 1
    assert "No readable intents" in capsys.readouterr().err


def test_select_prints_context(project_root: Path, capsys) -> None:
    assert run_select(project_root, "INT-001") == 0
    out = capsys.readouterr().out
    assert out.startswith("<intent_context>\n<intent_id>INT-001</intent_id>")


def test_select_unknown_intent(project_root: Path, capsys) -> None:
    assert run_select(project_root, "INT-404") == 1
    assert "Available intents" in capsys.readouterr().err


# ============================================================================
# record / trace / map / lesson
# ============================================================================


def test_record_then_trace_json(project_root: Path, capsys) -> None:
    (project_root / "src").mkdir()
    (project_root / "src" / "a.ts").write_text("x\n", encoding="utf-8")

    assert run_record(project_root, "src/a.ts", intent_id="INT-001", session_id="manual", evolution=True) == 0
    assert run_record(project_root, "src/b.ts", intent_id="INT-002") == 0
    capsys.readouterr()

    assert run_trace(project_root, intent_id="INT-001", output_json=True) == 0
    data = json.loads(capsys.readouterr().out)
    assert len(data) == 1
    assert data[0]["files"][0]["relative_path"] == "src/a.ts"

    assert run_map(project_root) == 0
    assert "## INT-001: JWT Auth" in capsys.readouterr().out


def test_trace_table(project_root: Path, capsys) -> None:
    run_record(project_root, "src/a.ts", intent_id="INT-001")
    capsys.readouterr()

    assert run_trace(project_root) == 0
    out = capsys.readouterr().out
    assert "Agent Trace" in out
    assert "Records: 1 total" in out


def test_record_failure_exit_code(tmp_path: Path, capsys) -> None:
    (tmp_path / ".orchestration").write_text("not a directory", encoding="utf-8")

    assert run_record(tmp_path, "a.ts", intent_id="INT-001") == 1
    assert "not written" in capsys.readouterr().err


def test_map_missing(project_root: Path, capsys) -> None:
    assert run_map(project_root) == 1
    assert "No intent map yet" in capsys.readouterr().err


def test_lesson(project_root: Path) -> None:
    assert run_lesson(project_root, "src/a.ts", "tests failed") == 0
    assert "tests failed" in (project_root / ".orchestration" / "AGENT.md").read_text(encoding="utf-8")


# ============================================================================
# click wiring
# ============================================================================


def test_cli_check_exit_codes(project_root: Path) -> None:
    runner = CliRunner()

    allowed = runner.invoke(
        cli, ["--root", str(project_root), "check", "write_to_file", "--intent", "INT-001", "-p", "path=src/a.ts"]
    )
    denied = runner.invoke(
        cli, ["--root", str(project_root), "check", "write_to_file", "--intent", "INT-001", "-p", "path=docs/a.md"]
    )

    assert allowed.exit_code == 0
    assert denied.exit_code == 2


def test_cli_check_interactive_override(project_root: Path) -> None:
    result = CliRunner().invoke(
        cli,
        ["--root", str(project_root), "check", "write_to_file", "-p", "path=docs/a.md", "--interactive", "--json"],
        input="y\n",
    )

    assert result.exit_code == 0
    assert '"overridden": true' in result.output


def test_cli_check_patch_file(project_root: Path, tmp_path: Path) -> None:
    patch = tmp_path / "change.patch"
    patch.write_text("*** Begin Patch\n*** Add File: docs/x.md\n+x\n*** End Patch\n", encoding="utf-8")

    result = CliRunner().invoke(
        cli,
        ["--root", str(project_root), "check", "apply_patch", "--intent", "INT-001", "--patch-file", str(patch), "--json"],
    )

    assert result.exit_code == 2
    assert "SCOPE_VIOLATION" in result.output


def test_cli_bad_param(project_root: Path) -> None:
    result = CliRunner().invoke(cli, ["--root", str(project_root), "check", "edit", "-p", "oops"])
    assert result.exit_code == 2
    assert "key=value" in result.output


def test_cli_root_from_env(project_root: Path) -> None:
    result = CliRunner().invoke(cli, ["select", "INT-002"], env={"INTENTGATE_ROOT": str(project_root)})

    assert result.exit_code == 0
    assert "<name>Billing API</name>" in result.output


def test_cli_missing_root(tmp_path: Path) -> None:
    result = CliRunner().invoke(cli, ["--root", str(tmp_path / "nope"), "intents"])
    assert result.exit_code != 0
