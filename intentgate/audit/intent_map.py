"""
Intent map: a derived Markdown index of intent -> touched files.

The file is regenerated from its own parsed state plus one new fact on every
update, so the serializer is the single source of truth for formatting.
Only mutations classed as intent evolution are recorded here.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from ..layout import OrchestrationPaths
from ..policy.load import find_intent, load_intents
from .outcome import WriteOutcome, consume


logger = logging.getLogger(__name__)

HEADER_LINES = (
    "# Intent Map",
    "",
    "Maps business intents to files. Updated when INTENT_EVOLUTION occurs.",
    "",
)

_SECTION_HEADER_RE = re.compile(r"^##\s+(.+)$")
_LIST_ITEM_RE = re.compile(r"^-\s+`([^`]+)`\s*$")


@dataclass
class IntentMapSection:
    title: str
    files: set[str] = field(default_factory=set)

    def belongs_to(self, intent_id: str) -> bool:
        # Prefix match keeps history together when an intent is renamed.
        return self.title == intent_id or self.title.startswith(f"{intent_id}: ")


@dataclass
class IntentMap:
    sections: list[IntentMapSection] = field(default_factory=list)

    def find_section(self, intent_id: str) -> IntentMapSection | None:
        for section in self.sections:
            if section.belongs_to(intent_id):
                return section
        return None

    def add(self, intent_id: str, title: str, path: str) -> IntentMapSection:
        """Add `path` under the intent's section, creating the section at the end if needed."""
        section = self.find_section(intent_id)
        if section is None:
            section = IntentMapSection(title=title)
            self.sections.append(section)
        section.files.add(path)
        return section


def parse_intent_map(content: str) -> IntentMap:
    """Parse intent_map.md. Unknown lines are ignored; list items before any heading are dropped."""
    intent_map = IntentMap()
    current: IntentMapSection | None = None
    for line in content.splitlines():
        header = _SECTION_HEADER_RE.match(line)
        if header:
            current = IntentMapSection(title=header.group(1).strip())
            intent_map.sections.append(current)
            continue
        item = _LIST_ITEM_RE.match(line)
        if item and current is not None:
            current.files.add(item.group(1))
    return intent_map


def serialize_intent_map(intent_map: IntentMap) -> str:
    lines: list[str] = list(HEADER_LINES)
    for section in intent_map.sections:
        lines.extend([f"## {section.title}", ""])
        for path in sorted(section.files):
            lines.append(f"- `{path}`")
        lines.append("")
    text = "\n".join(lines)
    return re.sub(r"\n{3,}", "\n\n", text).rstrip() + "\n"


def resolve_intent_title(root: Path, intent_id: str) -> str:
    """Section title for an intent: `<id>: <name>` when named in active_intents.yaml, else the id."""
    intents, _ = load_intents(root)
    intent = find_intent(intents, intent_id)
    return intent.title if intent is not None else intent_id


def _load_intent_map(path: Path) -> IntentMap:
    try:
        return parse_intent_map(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Starting a fresh intent map ({path}): {e}")
        return IntentMap()


def write_intent_map_entry(root: Path, intent_id: str, relative_path: str) -> WriteOutcome:
    if not intent_id or not relative_path:
        return WriteOutcome.skip("intent id and path are required")

    paths = OrchestrationPaths.for_root(root)
    target = paths.intent_map_file
    try:
        title = resolve_intent_title(Path(root), intent_id)
        intent_map = _load_intent_map(target)
        intent_map.add(intent_id, title, relative_path)
        paths.ensure_dir()
        target.write_text(serialize_intent_map(intent_map), encoding="utf-8")
    except Exception as e:
        return WriteOutcome.failed(target, e)
    return WriteOutcome.written(target)


def update_intent_map(root: Path, intent_id: str, relative_path: str) -> None:
    """Record that `relative_path` evolved under `intent_id`. Never raises."""
    consume(write_intent_map_entry(root, intent_id, relative_path), logger, "update intent map")
