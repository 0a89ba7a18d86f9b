"""Intent policy and exclusion rules (policy as data, matching as code)."""

from .globs import GlobPattern, compile_pattern, fold_path, matches_any, normalize_path
from .load import find_intent, load_exclusion_policy, load_intents, parse_exclusion_lines
from .schema import ExclusionPolicy, Intent, IntentStatus

__all__ = [
    "ExclusionPolicy",
    "GlobPattern",
    "Intent",
    "IntentStatus",
    "compile_pattern",
    "find_intent",
    "fold_path",
    "load_exclusion_policy",
    "load_intents",
    "matches_any",
    "normalize_path",
    "parse_exclusion_lines",
]
