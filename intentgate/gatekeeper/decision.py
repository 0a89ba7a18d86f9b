"""
Gatekeeper decisions.

A decision is a value, not an exception: denial is an expected outcome that
the caller hands back to the agent as the operation's whole result.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal, Union

from .classify import OperationClass


class ErrorKind(str, Enum):
    MISSING_INTENT = "MISSING_INTENT"
    INTENT_EXCLUDED = "INTENT_EXCLUDED"
    INTENT_MISMATCH = "INTENT_MISMATCH"
    SCOPE_VIOLATION = "SCOPE_VIOLATION"
    PATH_EXCLUDED = "PATH_EXCLUDED"
    STALE_TARGET = "STALE_TARGET"


# Corrective action expected from the caller, keyed by denial kind.
ACTION_HINTS: dict[ErrorKind, str] = {
    ErrorKind.MISSING_INTENT: "select_active_intent",
    ErrorKind.INTENT_EXCLUDED: "select_active_intent",
    ErrorKind.INTENT_MISMATCH: "select_active_intent",
    ErrorKind.SCOPE_VIOLATION: "request_scope_expansion",
    ErrorKind.PATH_EXCLUDED: "update_intentignore_or_choose_different_file",
    ErrorKind.STALE_TARGET: "read_file",
}

# Denials a human may convert into an allow.
OVERRIDABLE_KINDS = frozenset({
    ErrorKind.MISSING_INTENT,
    ErrorKind.INTENT_EXCLUDED,
    ErrorKind.INTENT_MISMATCH,
    ErrorKind.SCOPE_VIOLATION,
    ErrorKind.PATH_EXCLUDED,
})


@dataclass(frozen=True)
class Allow:
    classification: OperationClass
    overridden: bool = False

    allow: Literal[True] = field(default=True, init=False)


@dataclass(frozen=True)
class Deny:
    kind: ErrorKind
    message: str
    action_hint: str
    classification: OperationClass = OperationClass.DESTRUCTIVE
    recoverable: bool = True

    allow: Literal[False] = field(default=False, init=False)

    @property
    def overridable(self) -> bool:
        return self.kind in OVERRIDABLE_KINDS

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": "error",
            "message": "The tool execution failed",
            "error": self.message,
            "error_type": self.kind.value,
            "recoverable": self.recoverable,
            "action_hint": self.action_hint,
            "classification": self.classification.value,
        }

    def to_tool_error(self) -> str:
        """Render the JSON payload returned to the agent in place of the tool result."""
        return json.dumps(self.to_dict())


Decision = Union[Allow, Deny]


def deny(kind: ErrorKind, message: str, classification: OperationClass = OperationClass.DESTRUCTIVE) -> Deny:
    return Deny(kind=kind, message=message, action_hint=ACTION_HINTS[kind], classification=classification)
