"""World State — the in-fiction environment shared by every turn."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

MAX_EVENTS = 10


class WorldState(BaseModel):
    """The single mutable record of environment facts."""

    model_config = ConfigDict(populate_by_name=True)

    location: str = "Mystical Glade"
    time: str = "Golden Hour"
    weather: str = "Gentle breeze with shimmering motes of magic"
    events: List[str] = []                  # Oldest first, capped at MAX_EVENTS
    characters: List[str] = []
    items: List[str] = []
    neural_activity: float = Field(default=0.5, ge=0, le=1, alias="neuralActivity")


class WorldUpdate(BaseModel):
    """Partial update extracted from narrative text. None means 'not mentioned'."""

    location: Optional[str] = None
    time: Optional[str] = None
    weather: Optional[str] = None
    characters: Optional[List[str]] = None
    items: Optional[List[str]] = None

    def is_empty(self) -> bool:
        return all(v is None for v in self.model_dump().values())
