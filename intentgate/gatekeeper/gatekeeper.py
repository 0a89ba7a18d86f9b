"""
Intent gatekeeper: the pre-action policy check for destructive operations.

Check sequence (short-circuits on the first denial):
1. an intent must be declared
2. the declared intent must exist in active_intents.yaml
3. the declared intent must not be excluded by .intentignore
4. write_to_file must echo the declared intent, if it echoes one at all
5. every target path, with `.` and `..` folded, must stay inside the root and
   be neither excluded nor outside the intent's scope
6. targets must still match the caller's expected content digest

Denials from steps 1-5 can be overridden through a caller-supplied
confirmation channel. A stale target can never be overridden.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from ..content_hash import content_digest
from ..layout import OrchestrationPaths
from ..policy.globs import fold_path
from ..policy.load import find_intent, load_exclusion_policy, load_intents
from ..policy.schema import Intent
from .classify import WRITE_OPERATION, OperationClass
from .decision import Allow, Decision, Deny, ErrorKind, deny
from .operation import Operation


logger = logging.getLogger(__name__)

ConfirmFn = Callable[[str], bool]

INTENT_REQUIRED_ERROR = "You must cite a valid active Intent ID."


class Gatekeeper:
    """
    Stateless decision engine over one project root.

    Policy files are re-read on every check; nothing is cached between calls.
    """

    def __init__(self, root: Path):
        self.root = Path(root)
        self.paths = OrchestrationPaths.for_root(self.root)

    def check(self, op: Operation, *, confirm: ConfirmFn | None = None) -> Decision:
        classification = op.classification
        if classification is OperationClass.SAFE:
            return Allow(classification=classification)

        overridden = False
        denial = self._policy_denial(op)
        if denial is not None:
            if not self._request_override(denial, confirm):
                logger.debug(f"{op.name}: denied ({denial.kind.value}): {denial.message}")
                return denial
            logger.info(f"{op.name}: {denial.kind.value} overridden by human confirmation")
            overridden = True

        # An override never extends to a stale target.
        stale = self._stale_target(op)
        if stale is not None:
            logger.debug(f"{op.name}: denied ({stale.kind.value}): {stale.message}")
            return stale

        return Allow(classification=classification, overridden=overridden)

    # -------------------------------------------------------------------------
    # Steps 1-5: intent and path policy
    # -------------------------------------------------------------------------

    def _policy_denial(self, op: Operation) -> Deny | None:
        declared = op.declared_intent
        if not declared:
            return deny(ErrorKind.MISSING_INTENT, INTENT_REQUIRED_ERROR)

        # An unreadable store and an unknown intent are indistinguishable to the caller.
        intents, _ = load_intents(self.root)
        intent = find_intent(intents, declared)
        if intent is None:
            return deny(ErrorKind.MISSING_INTENT, INTENT_REQUIRED_ERROR)

        exclusions = load_exclusion_policy(self.root)
        if exclusions.excludes_intent(declared):
            return deny(ErrorKind.INTENT_EXCLUDED, f"Intent {declared} is excluded by .intentignore.")

        if op.name == WRITE_OPERATION:
            call_intent = op.call_intent
            if call_intent is not None and call_intent != declared:
                return deny(
                    ErrorKind.INTENT_MISMATCH,
                    f"{WRITE_OPERATION} intent_id ({call_intent}) does not match selected active intent "
                    f"({declared}). Call select_active_intent first or use the same intent_id.",
                )

        for raw_target in op.target_paths:
            target = fold_path(raw_target)
            if target is None:
                return deny(ErrorKind.PATH_EXCLUDED, f"Path {raw_target} is outside the project root.")
            if exclusions.excludes_path(target):
                return deny(ErrorKind.PATH_EXCLUDED, f"Path {target} is blocked by .intentignore.")
            if not intent.owns(target):
                return self._scope_violation(intent, target)

        return None

    @staticmethod
    def _scope_violation(intent: Intent, target: str) -> Deny:
        return deny(
            ErrorKind.SCOPE_VIOLATION,
            f"Scope Violation: {intent.id} is not authorized to edit [{target}]. Request scope expansion.",
        )

    @staticmethod
    def _request_override(denial: Deny, confirm: ConfirmFn | None) -> bool:
        if confirm is None or not denial.overridable:
            return False
        return bool(confirm(f"{denial.message} This action may be destructive. Proceed anyway?"))

    # -------------------------------------------------------------------------
    # Step 6: optimistic staleness check
    # -------------------------------------------------------------------------

    def _stale_target(self, op: Operation) -> Deny | None:
        expected = op.expected_digest
        if expected is None:
            return None

        for raw_target in op.target_paths:
            target = fold_path(raw_target)
            if target is None:
                continue
            path = self.paths.resolve_target(target)
            if not path.exists():
                # Creating a file is not a stale write.
                continue
            try:
                current = content_digest(path.read_bytes())
            except OSError as e:
                # The write itself will surface a persistent read/write problem.
                logger.debug(f"Skipping staleness check for {target}: {e}")
                continue
            if current != expected:
                return deny(
                    ErrorKind.STALE_TARGET,
                    f"Stale File: {target} was modified since you read it. "
                    "Re-read the file with read_file and try again.",
                )
        return None
