"""Game turn output."""

from pydantic import BaseModel

DUNGEON_MASTER = "Dungeon Master"
AI_CHARACTER = "AI Character"


class DialogueLine(BaseModel):
    """One speaker's text within a turn."""

    speaker: str
    text: str
