"""
Game Loop — one player action, two speakers.

  narrate → update world → remember narration
          → AI character responds → update goals → remember response

Each turn holds the world lock from start to finish. Steps are not retried
or rolled back: if the AI character fails, the world has already absorbed
the narration and the error surfaces to the caller.
"""

import logging
from typing import List

from neuro_narrative.cognition.agent import CognitiveAgent
from neuro_narrative.cognition.goals import GoalUpdater
from neuro_narrative.memory.store import MemoryStore
from neuro_narrative.models.cognition import AIState
from neuro_narrative.models.game import AI_CHARACTER, DUNGEON_MASTER, DialogueLine
from neuro_narrative.narrative.dungeon_master import DungeonMaster
from neuro_narrative.world_model.store import WorldStateStore

logger = logging.getLogger(__name__)

NARRATION_IMPORTANCE = 0.6
RESPONSE_IMPORTANCE = 0.4


class GameLoop:
    """Sequences the Dungeon Master and the AI character for each action."""

    def __init__(
        self,
        world_store: WorldStateStore,
        memory_store: MemoryStore,
        dungeon_master: DungeonMaster,
        agent: CognitiveAgent,
        goal_updater: GoalUpdater,
    ):
        self.world_store = world_store
        self.memory_store = memory_store
        self.dungeon_master = dungeon_master
        self.agent = agent
        self.goal_updater = goal_updater

    def play(self, action: str) -> List[DialogueLine]:
        """Run one full turn. Returns the narration then the AI's response."""
        with self.world_store.turn() as world:
            narration = self.dungeon_master.narrate(action, world)
            self.world_store.apply_narrative(narration)
            self.memory_store.insert_memory(narration, NARRATION_IMPORTANCE)
            logger.debug("Narration stored (%d chars)", len(narration))

            response = self.agent.respond(narration, world)
            update = self.goal_updater.apply(response)
            self.memory_store.insert_memory(response, RESPONSE_IMPORTANCE)
            logger.debug("AI response stored, action=%r", update.action)

        return [
            DialogueLine(speaker=DUNGEON_MASTER, text=narration),
            DialogueLine(speaker=AI_CHARACTER, text=response),
        ]

    def ai_state(self) -> AIState:
        return self.agent.snapshot()
