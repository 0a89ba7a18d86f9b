"""
Operation classification.

Classification is a static partition of operation names. Unknown operations
are treated as safe: the gatekeeper only polices the operations it knows to
mutate the tree.
"""

from __future__ import annotations

from enum import Enum


class OperationClass(str, Enum):
    SAFE = "safe"  # Read-only and meta operations; never gated
    DESTRUCTIVE = "destructive"  # Mutates source/config or runs commands


WRITE_OPERATION = "write_to_file"

DESTRUCTIVE_OPERATIONS = frozenset({
    WRITE_OPERATION,
    "edit",
    "edit_file",
    "search_replace",
    "apply_diff",
    "apply_patch",
    "execute_command",
})

SAFE_OPERATIONS = frozenset({
    "select_active_intent",
    "read_file",
    "list_files",
    "search_files",
    "codebase_search",
    "read_command_output",
    "ask_followup_question",
    "switch_mode",
    "new_task",
    "update_todo_list",
    "attempt_completion",
    "use_mcp_tool",
    "access_mcp_resource",
    "run_slash_command",
    "skill",
    "generate_image",
})


def classify_operation(name: str) -> OperationClass:
    if name in SAFE_OPERATIONS:
        return OperationClass.SAFE
    if name in DESTRUCTIVE_OPERATIONS:
        return OperationClass.DESTRUCTIVE
    # TODO: fall back to DESTRUCTIVE once hosts register their full tool catalog.
    return OperationClass.SAFE


def is_destructive(name: str) -> bool:
    return classify_operation(name) is OperationClass.DESTRUCTIVE
