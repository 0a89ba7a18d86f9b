"""
Fixed on-disk layout of the orchestration directory.

Every artifact the gatekeeper reads or the audit writers produce lives at a
project-relative location under .orchestration/. There is no configuration
file; the layout is the configuration.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


ORCHESTRATION_DIR = ".orchestration"

INTENTS_FILENAME = "active_intents.yaml"
INTENTIGNORE_FILENAME = ".intentignore"
TRACE_FILENAME = "agent_trace.jsonl"
INTENT_MAP_FILENAME = "intent_map.md"
LESSONS_FILENAME = "AGENT.md"


@dataclass(frozen=True)
class OrchestrationPaths:
    """Resolved artifact paths for one project root."""

    root: Path

    @classmethod
    def for_root(cls, root: Path | str) -> "OrchestrationPaths":
        return cls(root=Path(root))

    @property
    def orchestration_dir(self) -> Path:
        return self.root / ORCHESTRATION_DIR

    @property
    def intents_file(self) -> Path:
        return self.orchestration_dir / INTENTS_FILENAME

    @property
    def intentignore_files(self) -> tuple[Path, Path]:
        """Primary then fallback exclusion file locations."""
        return (
            self.orchestration_dir / INTENTIGNORE_FILENAME,
            self.root / INTENTIGNORE_FILENAME,
        )

    @property
    def trace_file(self) -> Path:
        return self.orchestration_dir / TRACE_FILENAME

    @property
    def intent_map_file(self) -> Path:
        return self.orchestration_dir / INTENT_MAP_FILENAME

    @property
    def lessons_file(self) -> Path:
        return self.orchestration_dir / LESSONS_FILENAME

    def ensure_dir(self) -> Path:
        """Ensure .orchestration exists and return it."""
        self.orchestration_dir.mkdir(parents=True, exist_ok=True)
        return self.orchestration_dir

    def resolve_target(self, relative_path: str) -> Path:
        """Resolve a project-relative target path against the root."""
        return self.root / relative_path


def find_project_root(start: Path) -> Path | None:
    """Find the nearest directory containing .orchestration by walking up from `start`."""
    cur = start.resolve()
    for p in (cur, *cur.parents):
        if (p / ORCHESTRATION_DIR).is_dir():
            return p
    return None
