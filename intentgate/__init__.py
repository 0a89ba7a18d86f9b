"""intentgate - intent gatekeeping and audit trail for agent-driven edits."""

__version__ = "0.1.0"
