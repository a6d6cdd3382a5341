"""Memory Model — short-term memories, long-term archive and goals."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Memory(BaseModel):
    """A short-term memory written on every turn."""

    id: str
    info: str
    importance: float                       # Compared against the attention threshold
    timestamp: datetime


class LongTermMemory(BaseModel):
    """An archived memory. Created by consolidation only, never mutated."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    info: str
    original_timestamp: datetime = Field(alias="originalTimestamp")
    consolidation_timestamp: datetime = Field(alias="consolidationTimestamp")


class Goal(BaseModel):
    """A tracked textual objective. Progress has no upper bound."""

    id: str
    description: str
    progress: int = 0
