"""Neuro Narrative data models."""

from neuro_narrative.models.cognition import AIState, BrainWaves, SleepState
from neuro_narrative.models.consolidation import ConsolidationConfig, ConsolidationReport
from neuro_narrative.models.game import AI_CHARACTER, DUNGEON_MASTER, DialogueLine
from neuro_narrative.models.memory import Goal, LongTermMemory, Memory
from neuro_narrative.models.world import MAX_EVENTS, WorldState, WorldUpdate

__all__ = [
    "AI_CHARACTER",
    "AIState",
    "BrainWaves",
    "ConsolidationConfig",
    "ConsolidationReport",
    "DUNGEON_MASTER",
    "DialogueLine",
    "Goal",
    "LongTermMemory",
    "MAX_EVENTS",
    "Memory",
    "SleepState",
    "WorldState",
    "WorldUpdate",
]
