from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from ..layout import OrchestrationPaths
from .globs import normalize_path
from .schema import ExclusionPolicy, Intent, IntentStatus


logger = logging.getLogger(__name__)

INTENT_DIRECTIVE = "intent:"


def _coerce_str_tuple(value: Any) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(str(v) for v in value if v is not None and str(v).strip())


def _coerce_status(value: Any) -> IntentStatus | None:
    if not isinstance(value, str):
        return None
    try:
        return IntentStatus(value.strip())
    except ValueError:
        return None


def parse_intents(data: Any) -> list[Intent] | None:
    """
    Build intents from a parsed policy document.

    Returns None when the document has no `active_intents` list. Entries
    without a string id are skipped rather than rejecting the whole file.
    """
    if not isinstance(data, dict):
        return None
    raw_intents = data.get("active_intents")
    if not isinstance(raw_intents, list):
        return None

    intents: list[Intent] = []
    for raw in raw_intents:
        if not isinstance(raw, dict):
            continue
        intent_id = raw.get("id")
        if not isinstance(intent_id, str) or not intent_id.strip():
            continue

        name = raw.get("name")
        intents.append(
            Intent(
                id=intent_id,
                name=name if isinstance(name, str) else None,
                status=_coerce_status(raw.get("status")),
                owned_scope=tuple(normalize_path(p) for p in _coerce_str_tuple(raw.get("owned_scope"))),
                constraints=_coerce_str_tuple(raw.get("constraints")),
                acceptance_criteria=_coerce_str_tuple(raw.get("acceptance_criteria")),
            )
        )
    return intents


def load_intents(root: Path) -> tuple[list[Intent], bool]:
    """
    Load declared intents from .orchestration/active_intents.yaml.

    Fails soft: a missing, unreadable, empty or malformed file yields
    ([], False). Callers treat that exactly like "no intents declared".
    """
    path = OrchestrationPaths.for_root(root).intents_file
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug(f"Intent policy file not found: {path}")
        return [], False
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Failed to read intent policy file {path}: {e}")
        return [], False

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        logger.warning(f"Failed to parse intent policy file {path}: {e}")
        return [], False

    intents = parse_intents(data)
    if intents is None:
        logger.debug(f"Intent policy file has no active_intents list: {path}")
        return [], False
    return intents, True


def find_intent(intents: list[Intent], intent_id: str | None) -> Intent | None:
    """Exact, case-sensitive lookup."""
    if not intent_id:
        return None
    for intent in intents:
        if intent.id == intent_id:
            return intent
    return None


def parse_exclusion_lines(text: str) -> ExclusionPolicy:
    ignored_intents: set[str] = set()
    patterns: list[str] = []
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith(INTENT_DIRECTIVE):
            intent_id = line[len(INTENT_DIRECTIVE):].strip()
            if intent_id:
                ignored_intents.add(intent_id)
            continue
        patterns.append(normalize_path(line))
    return ExclusionPolicy(ignored_intents=frozenset(ignored_intents), ignored_path_patterns=tuple(patterns))


def load_exclusion_policy(root: Path) -> ExclusionPolicy:
    """
    Merge the primary (.orchestration/.intentignore) and fallback
    (<root>/.intentignore) exclusion files.

    Each location is read independently; a missing or unreadable file
    contributes nothing.
    """
    policy = ExclusionPolicy.empty()
    for path in OrchestrationPaths.for_root(root).intentignore_files:
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            continue
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Skipping unreadable exclusion file {path}: {e}")
            continue
        policy = policy.merged(parse_exclusion_lines(text))
    return policy
