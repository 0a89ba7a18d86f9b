"""
Post-mutation dispatch: the second half of the intent handshake.

After the host has executed an operation the gatekeeper allowed, the audit
writers run in a fixed order:

    trace ledger (always) -> intent map (INTENT_EVOLUTION only) -> lessons (on problems)

None of them can fail the operation.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from .audit.intent_map import update_intent_map
from .audit.ledger import RevisionLookup, record_mutation
from .audit.lessons import append_lesson
from .audit.vcs import get_current_revision
from .gatekeeper.classify import OperationClass
from .gatekeeper.operation import Operation
from .policy.globs import fold_path
from .session import Session


class MutationClass(str, Enum):
    AST_REFACTOR = "AST_REFACTOR"  # Same behavior, new shape
    INTENT_EVOLUTION = "INTENT_EVOLUTION"  # New behavior for the intent


def effective_intent(op: Operation, session: Session) -> str | None:
    """The intent a mutation is attributed to: the call's own, else the session's."""
    return op.call_intent or op.declared_intent or session.declared_intent


def run_post_mutation_hooks(
    root: Path,
    op: Operation,
    session: Session,
    *,
    content: bytes | str | None = None,
    problems: str | None = None,
    revision_lookup: RevisionLookup = get_current_revision,
) -> None:
    if op.classification is not OperationClass.DESTRUCTIVE:
        return

    intent_id = effective_intent(op, session)
    fallback = content if content is not None else op.content
    evolution = op.mutation_class == MutationClass.INTENT_EVOLUTION.value

    for raw_path in op.target_paths:
        path = fold_path(raw_path) or raw_path
        record_mutation(
            root,
            path,
            intent_id=intent_id,
            content=fallback,
            session_id=session.session_id,
            model_id=session.model_id,
            revision_lookup=revision_lookup,
        )
        if evolution and intent_id:
            update_intent_map(root, intent_id, path)
        if problems:
            append_lesson(root, path, problems)
