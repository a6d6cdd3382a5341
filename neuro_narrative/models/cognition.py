"""Cognitive state exposed alongside the world state."""

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field

from neuro_narrative.models.memory import Goal, Memory

SleepState = Literal["sleep", "wake"]


class BrainWaves(BaseModel):
    """Instantaneous signal values, each within its own sub-range of [0, 1]."""

    alpha: float
    beta: float
    theta: float
    delta: float


class AIState(BaseModel):
    """Snapshot of the AI character's internal state."""

    model_config = ConfigDict(populate_by_name=True)

    goals: List[Goal] = []
    memories: List[Memory] = []             # Top 5 above the attention threshold
    emotion: str
    sleep_state: SleepState = Field(alias="sleepState")
    brain_waves: BrainWaves = Field(alias="brainWaves")
