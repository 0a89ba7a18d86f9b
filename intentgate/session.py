"""
Intent selection: the first half of the intent handshake.

An agent declares the intent it works under by selecting it; the session
carries that declaration and hands it to the gatekeeper on each check.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from pathlib import Path

from .layout import OrchestrationPaths
from .policy.load import find_intent, load_intents
from .policy.schema import Intent


class IntentSelectionError(ValueError):
    pass


@dataclass
class Session:
    session_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    model_id: str = "unknown"
    declared_intent: str | None = None


def has_orchestration_intents(root: Path) -> bool:
    return OrchestrationPaths.for_root(root).intents_file.is_file()


def _bullet_block(tag: str, items: tuple[str, ...], empty: str) -> str:
    body = "\n".join(f"  - {item}" for item in items) if items else f"  ({empty})"
    return f"<{tag}>\n{body}\n</{tag}>"


def build_intent_context(intent: Intent) -> str:
    """Render the <intent_context> block: only the intent's scope and constraints."""
    scope = _bullet_block("owned_scope", intent.owned_scope, "no scope defined")
    constraints = _bullet_block("constraints", intent.constraints, "no constraints defined")
    return (
        "<intent_context>\n"
        f"<intent_id>{intent.id}</intent_id>\n"
        f"<name>{intent.name or ''}</name>\n"
        "\n"
        f"{scope}\n"
        "\n"
        f"{constraints}\n"
        "</intent_context>"
    )


def select_active_intent(root: Path, session: Session, intent_id: str | None) -> str:
    """
    Declare `intent_id` for the session and return its intent context block.

    Raises:
        IntentSelectionError: if the id is blank, the intent file cannot be
            loaded, or no intent has that exact id
    """
    if not intent_id or not intent_id.strip():
        raise IntentSelectionError("Missing required parameter: intent_id")

    intents, ok = load_intents(root)
    if not ok:
        path = OrchestrationPaths.for_root(root).intents_file
        raise IntentSelectionError(f"Failed to read {path.name}: file is missing or malformed")

    intent = find_intent(intents, intent_id)
    if intent is None:
        available = ", ".join(i.id for i in intents) or "(none)"
        raise IntentSelectionError(
            f'Intent "{intent_id}" not found in active_intents.yaml. Available intents: {available}'
        )

    session.declared_intent = intent.id
    return build_intent_context(intent)
