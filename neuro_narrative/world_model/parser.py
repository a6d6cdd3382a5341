"""
Narrative Parser — best-effort extraction of world facts from free text.

The Dungeon Master is asked for prose, not structured output, so every field
is optional. A field the text doesn't mention stays None in the WorldUpdate.
"""

import re
from typing import List, Optional

from neuro_narrative.models.world import WorldUpdate

# A value runs to the end of its line or to the first sentence-ending period,
# whichever comes first. Values never include line breaks, CRLF included.
_VALUE = r"([^\r\n]+?)(?=\.\s|\.\r?$|\r?$)"
_FLAGS = re.IGNORECASE | re.MULTILINE

_FIELD_PATTERNS = {
    "location": re.compile(r"Location: " + _VALUE, _FLAGS),
    "time": re.compile(r"Time: " + _VALUE, _FLAGS),
    "weather": re.compile(r"Weather: " + _VALUE, _FLAGS),
    "characters": re.compile(r"Characters?: " + _VALUE, _FLAGS),
    "items": re.compile(r"Items?: " + _VALUE, _FLAGS),
}

_LIST_FIELDS = ("characters", "items")


def _split_list(value: str) -> List[str]:
    return [part.strip() for part in value.split(",")]


def parse_narrative(text: str) -> WorldUpdate:
    """Extract location, time, weather, characters and items if present."""
    fields = {}
    for name, pattern in _FIELD_PATTERNS.items():
        match = pattern.search(text)
        if not match:
            continue
        value = match.group(1)
        fields[name] = _split_list(value) if name in _LIST_FIELDS else value
    return WorldUpdate(**fields)


def first_sentence(text: str) -> str:
    """Text up to the first period, or the whole text if there is none."""
    return text.split(".", 1)[0]


def extract_action(text: str) -> Optional[str]:
    """The statement following 'Action: ', or None when the marker is absent."""
    match = re.search(r"Action: ([^\r\n]+)", text)
    return match.group(1) if match else None
