"""
Append-only agent trace ledger.

Stores one MutationRecord per accepted mutation in
.orchestration/agent_trace.jsonl. Key property: append-only, never rewritten.
Writing is best-effort; a failed trace append never fails the mutation it
describes.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Callable, Iterator

from ..content_hash import content_digest
from ..layout import OrchestrationPaths
from ..policy.globs import normalize_path
from .outcome import WriteOutcome, consume
from .trace import MutationRecord, build_mutation_record
from .vcs import get_current_revision


logger = logging.getLogger(__name__)

RevisionLookup = Callable[[Path], "str | None"]


class TraceLedger:
    """Append-only ledger of mutation records.

    Storage format: JSON Lines (.jsonl) - one record per line
    Location: .orchestration/agent_trace.jsonl relative to the project root
    """

    def __init__(self, root: Path):
        self.paths = OrchestrationPaths.for_root(root)
        self.ledger_path = self.paths.trace_file

    def append(self, record: MutationRecord) -> None:
        """Append a record. This is the only write operation."""
        self.paths.ensure_dir()
        with self.ledger_path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(record.to_dict(), separators=(",", ":")) + "\n")

    def iter_records(self) -> Iterator[MutationRecord]:
        """Iterate over records, skipping lines that do not parse."""
        if not self.ledger_path.exists():
            return
        with self.ledger_path.open("r", encoding="utf-8") as f:
            for lineno, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    yield MutationRecord.from_dict(json.loads(line))
                except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
                    logger.debug(f"Skipping malformed trace line {lineno}: {e}")

    def read_all(self) -> list[MutationRecord]:
        return list(self.iter_records())

    def count(self) -> int:
        if not self.ledger_path.exists():
            return 0
        count = 0
        with self.ledger_path.open("r", encoding="utf-8") as f:
            for line in f:
                if line.strip():
                    count += 1
        return count

    # --- Query methods ---

    def records_for_intent(self, intent_id: str) -> list[MutationRecord]:
        return [r for r in self.iter_records() if intent_id in r.intent_ids]

    def records_for_path(self, relative_path: str) -> list[MutationRecord]:
        target = normalize_path(relative_path)
        return [r for r in self.iter_records() if r.relative_path == target]


def _lookup_revision(lookup: RevisionLookup, root: Path) -> str | None:
    try:
        return lookup(root)
    except Exception as e:
        logger.debug(f"Revision lookup failed in {root}: {e}")
        return None


def _read_content(path: Path, fallback: bytes | str | None) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        logger.debug(f"Using caller-supplied content for {path}: {e}")
        if isinstance(fallback, str):
            return fallback.encode("utf-8")
        return fallback or b""


def write_trace_entry(
    root: Path,
    relative_path: str,
    *,
    intent_id: str | None,
    content: bytes | str | None = None,
    session_id: str = "",
    model_id: str = "unknown",
    revision_lookup: RevisionLookup = get_current_revision,
) -> WriteOutcome:
    """Build and append one trace record, reporting the result as a WriteOutcome."""
    if not intent_id or not intent_id.strip():
        return WriteOutcome.skip(f"no intent for {relative_path}")

    ledger = TraceLedger(root)
    try:
        rel = normalize_path(relative_path)
        data = _read_content(ledger.paths.resolve_target(rel), content)
        record = build_mutation_record(
            rel,
            data,
            intent_id=intent_id,
            digest=content_digest(data),
            origin=session_id,
            model_id=model_id,
            vcs_revision=_lookup_revision(revision_lookup, Path(root)),
        )
        ledger.append(record)
    except Exception as e:
        return WriteOutcome.failed(ledger.ledger_path, e)
    return WriteOutcome.written(ledger.ledger_path)


def record_mutation(
    root: Path,
    relative_path: str,
    *,
    intent_id: str | None,
    content: bytes | str | None = None,
    session_id: str = "",
    model_id: str = "unknown",
    revision_lookup: RevisionLookup = get_current_revision,
) -> None:
    """
    Append a trace record for a file that was just written.

    Args:
        root: Project root
        relative_path: Path of the mutated file relative to the root
        intent_id: Intent the mutation was made under; blank means no-op
        content: Content the caller wrote, used if the file cannot be re-read
        session_id: Session/task identifier recorded as the conversation origin
        model_id: Identifier of the model that produced the change
        revision_lookup: VCS revision provider (None when unavailable)

    Never raises.
    """
    outcome = write_trace_entry(
        root,
        relative_path,
        intent_id=intent_id,
        content=content,
        session_id=session_id,
        model_id=model_id,
        revision_lookup=revision_lookup,
    )
    consume(outcome, logger, "append agent trace")
