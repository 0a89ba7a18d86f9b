"""
Pre-action policy enforcement for agent operations.

Components:
- classify: static safe/destructive partition of operation names
- targets: target path extraction per operation
- operation: the operation descriptor handed in by the host runtime
- decision: Allow / Deny outcomes with machine-readable error kinds
- gatekeeper: the check sequence itself
"""

from .classify import OperationClass, classify_operation, is_destructive
from .decision import Allow, Decision, Deny, ErrorKind
from .gatekeeper import ConfirmFn, Gatekeeper
from .operation import Operation
from .targets import extract_patch_paths, extract_target_paths

__all__ = [
    "Allow",
    "ConfirmFn",
    "Decision",
    "Deny",
    "ErrorKind",
    "Gatekeeper",
    "Operation",
    "OperationClass",
    "classify_operation",
    "extract_patch_paths",
    "extract_target_paths",
    "is_destructive",
]
