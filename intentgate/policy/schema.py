from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .globs import matches_any


class IntentStatus(str, Enum):
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    PENDING = "PENDING"


@dataclass(frozen=True)
class Intent:
    id: str
    name: str | None = None
    status: IntentStatus | None = None
    owned_scope: tuple[str, ...] = ()
    constraints: tuple[str, ...] = ()
    acceptance_criteria: tuple[str, ...] = ()

    @property
    def title(self) -> str:
        """Display title: "<id>: <name>" when a name is set, else the bare id."""
        if self.name and self.name.strip():
            return f"{self.id}: {self.name.strip()}"
        return self.id

    @property
    def is_unrestricted(self) -> bool:
        """An empty scope authorizes every path."""
        return not self.owned_scope

    def owns(self, path: str) -> bool:
        return self.is_unrestricted or matches_any(path, self.owned_scope)


@dataclass(frozen=True)
class ExclusionPolicy:
    ignored_intents: frozenset[str] = field(default_factory=frozenset)
    ignored_path_patterns: tuple[str, ...] = ()

    @classmethod
    def empty(cls) -> "ExclusionPolicy":
        return cls()

    def excludes_intent(self, intent_id: str) -> bool:
        return intent_id in self.ignored_intents

    def excludes_path(self, path: str) -> bool:
        return matches_any(path, self.ignored_path_patterns)

    def merged(self, other: "ExclusionPolicy") -> "ExclusionPolicy":
        return ExclusionPolicy(
            ignored_intents=self.ignored_intents | other.ignored_intents,
            ignored_path_patterns=self.ignored_path_patterns + other.ignored_path_patterns,
        )
