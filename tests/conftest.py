"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from intentgate.session import Session


INTENTS_YAML = """\
active_intents:
  - id: "INT-001"
    name: "JWT Auth"
    status: "IN_PROGRESS"
    owned_scope:
      - "src/**"
    constraints:
      - "Do not change the public login API"
    acceptance_criteria:
      - "Tokens expire after 15 minutes"
  - id: "INT-002"
    name: "Billing API"
    status: "PENDING"
  - id: "INT-003"
    status: "COMPLETED"
    owned_scope:
      - "docs/*.md"
"""


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """A project root with .orchestration/active_intents.yaml."""
    root = tmp_path / "project"
    _write(root / ".orchestration" / "active_intents.yaml", INTENTS_YAML)
    return root


@pytest.fixture
def session() -> Session:
    return Session(session_id="task-123", model_id="test-model")


@pytest.fixture
def no_revision():
    """Revision lookup that never shells out."""
    return lambda root: None
