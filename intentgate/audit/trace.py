"""
Agent trace records.

One MutationRecord is written per accepted mutation. The serialized form
follows the Agent Trace layout (vcs / files / conversations / ranges /
related) so the ledger can be read by other trace tooling.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any


@dataclass(frozen=True)
class LineRange:
    start_line: int
    end_line: int
    content_digest: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "start_line": self.start_line,
            "end_line": self.end_line,
            "content_hash": self.content_digest,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LineRange":
        return cls(
            start_line=int(data.get("start_line", 1)),
            end_line=int(data.get("end_line", 1)),
            content_digest=str(data.get("content_hash", "")),
        )


@dataclass(frozen=True)
class RelatedRef:
    value: str
    type: str = "specification"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "value": self.value}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RelatedRef":
        return cls(type=str(data.get("type", "specification")), value=str(data.get("value", "")))


@dataclass(frozen=True)
class Contributor:
    model_id: str
    kind: str = "AI"

    def to_dict(self) -> dict[str, Any]:
        return {"entity_type": self.kind, "model_identifier": self.model_id}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Contributor":
        return cls(kind=str(data.get("entity_type", "AI")), model_id=str(data.get("model_identifier", "unknown")))


@dataclass(frozen=True)
class Conversation:
    origin: str
    contributor: Contributor
    ranges: tuple[LineRange, ...] = ()
    related: tuple[RelatedRef, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.origin,
            "contributor": self.contributor.to_dict(),
            "ranges": [r.to_dict() for r in self.ranges],
            "related": [r.to_dict() for r in self.related],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Conversation":
        return cls(
            origin=str(data.get("url", "")),
            contributor=Contributor.from_dict(data.get("contributor") or {}),
            ranges=tuple(LineRange.from_dict(r) for r in data.get("ranges") or []),
            related=tuple(RelatedRef.from_dict(r) for r in data.get("related") or []),
        )


@dataclass(frozen=True)
class TraceFile:
    relative_path: str
    conversations: tuple[Conversation, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "relative_path": self.relative_path,
            "conversations": [c.to_dict() for c in self.conversations],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TraceFile":
        return cls(
            relative_path=str(data.get("relative_path", "")),
            conversations=tuple(Conversation.from_dict(c) for c in data.get("conversations") or []),
        )


@dataclass(frozen=True)
class MutationRecord:
    """
    A single ledger entry.

    Records are append-only: once written they are never rewritten or deleted.

    This package writes one file per record. `extra_files` holds the remaining
    entries of multi-file records appended by other Agent Trace writers, so
    reading the ledger never drops them.
    """

    id: str
    timestamp: str
    vcs_revision: str | None
    file: TraceFile
    extra_files: tuple[TraceFile, ...] = ()

    @property
    def relative_path(self) -> str:
        return self.file.relative_path

    @property
    def intent_ids(self) -> list[str]:
        ids: list[str] = []
        for conversation in self.file.conversations:
            for ref in conversation.related:
                if ref.type == "specification" and ref.value not in ids:
                    ids.append(ref.value)
        return ids

    @property
    def content_digest(self) -> str | None:
        for conversation in self.file.conversations:
            for r in conversation.ranges:
                return r.content_digest
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "vcs": {"revision_id": self.vcs_revision},
            "files": [self.file.to_dict()] + [f.to_dict() for f in self.extra_files],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MutationRecord":
        files = [TraceFile.from_dict(f) for f in data.get("files") or []]
        if not files:
            raise ValueError("trace record has no files")
        vcs = data.get("vcs") or {}
        return cls(
            id=str(data["id"]),
            timestamp=str(data["timestamp"]),
            vcs_revision=vcs.get("revision_id") if isinstance(vcs, dict) else None,
            file=files[0],
            extra_files=tuple(files[1:]),
        )


def count_lines(text: str) -> int:
    """Line count used for whole-file ranges; empty content still spans line 1."""
    return max(1, len(text.splitlines()))


def build_mutation_record(
    relative_path: str,
    content: bytes,
    *,
    intent_id: str,
    digest: str,
    origin: str,
    model_id: str,
    vcs_revision: str | None,
    timestamp: datetime | None = None,
) -> MutationRecord:
    """Build a record attributing the whole file to one AI contributor under one intent."""
    ts = timestamp or datetime.now(timezone.utc)
    end_line = count_lines(content.decode("utf-8", errors="replace"))
    conversation = Conversation(
        origin=origin,
        contributor=Contributor(model_id=model_id),
        ranges=(LineRange(start_line=1, end_line=end_line, content_digest=digest),),
        related=(RelatedRef(value=intent_id),),
    )
    return MutationRecord(
        id=str(uuid.uuid4()),
        timestamp=ts.isoformat(),
        vcs_revision=vcs_revision,
        file=TraceFile(relative_path=relative_path, conversations=(conversation,)),
    )
