"""
Post-action audit trail.

Components:
- trace: MutationRecord and its Agent Trace serialization
- ledger: append-only .orchestration/agent_trace.jsonl
- intent_map: derived .orchestration/intent_map.md index
- lessons: postmortem notes in .orchestration/AGENT.md
- vcs: best-effort revision lookup

Design principles:
- Append-only: ledger records are never rewritten
- Best-effort: audit failures are logged, never surfaced to the caller
- Derived: the intent map is rebuilt from its own serialized state
"""

from .intent_map import IntentMap, IntentMapSection, parse_intent_map, serialize_intent_map, update_intent_map
from .ledger import TraceLedger, record_mutation
from .lessons import append_lesson
from .outcome import WriteOutcome
from .trace import MutationRecord
from .vcs import get_current_revision

__all__ = [
    "IntentMap",
    "IntentMapSection",
    "MutationRecord",
    "TraceLedger",
    "WriteOutcome",
    "append_lesson",
    "get_current_revision",
    "parse_intent_map",
    "record_mutation",
    "serialize_intent_map",
    "update_intent_map",
]
