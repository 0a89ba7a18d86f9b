from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from .classify import OperationClass, classify_operation
from .targets import extract_target_paths


@dataclass(frozen=True)
class Operation:
    """
    A requested operation as parsed by the host runtime.

    `declared_intent` is the intent currently declared for the session; it is
    supplied by the caller on every check and never stored by the gatekeeper.
    """

    name: str
    params: Mapping[str, Any] = field(default_factory=dict)
    declared_intent: str | None = None

    @property
    def classification(self) -> OperationClass:
        return classify_operation(self.name)

    @property
    def call_intent(self) -> str | None:
        """Intent id echoed by the call itself (write operations)."""
        value = self.params.get("intent_id")
        return value if isinstance(value, str) else None

    @property
    def expected_digest(self) -> str | None:
        value = self.params.get("expected_content_hash")
        if not isinstance(value, str) or not value.strip():
            return None
        return value.strip()

    @property
    def mutation_class(self) -> str | None:
        value = self.params.get("mutation_class")
        return value.strip() if isinstance(value, str) and value.strip() else None

    @property
    def content(self) -> str | None:
        """Written content, the trace fallback when the target cannot be re-read."""
        value = self.params.get("content")
        return value if isinstance(value, str) else None

    @property
    def target_paths(self) -> list[str]:
        return extract_target_paths(self.name, self.params)
