"""
Goal Updater — turns the AI character's stated action into goal progress.

Matching is a case-insensitive substring test of each goal's description
against the action text. New goals appear at random so the character's
agenda grows with play.
"""

import logging
import random
from typing import List, Optional

from pydantic import BaseModel

from neuro_narrative.memory.store import MemoryStore
from neuro_narrative.models.memory import Goal
from neuro_narrative.world_model.parser import extract_action

logger = logging.getLogger(__name__)

PROGRESS_STEP = 20
NEW_GOAL_PROBABILITY = 0.3
NEW_GOAL_TEMPLATE = "Explore the implications of: {action}"


class GoalUpdateResult(BaseModel):
    """What one application of the goal updater changed."""

    action: Optional[str] = None
    advanced_goal_ids: List[str] = []
    created_goal: Optional[Goal] = None


class GoalUpdater:
    def __init__(self, memory_store: MemoryStore, rng: Optional[random.Random] = None):
        self._memory_store = memory_store
        self._rng = rng or random.Random()

    def apply(self, agent_text: str) -> GoalUpdateResult:
        """Advance matching goals and maybe create a new one. No action, no change."""
        action = extract_action(agent_text)
        if action is None:
            return GoalUpdateResult()

        result = GoalUpdateResult(action=action)
        lowered = action.lower()
        for goal in self._memory_store.get_goals():
            if goal.description.lower() in lowered:
                self._memory_store.increment_goal_progress(goal.id, PROGRESS_STEP)
                result.advanced_goal_ids.append(goal.id)

        if self._rng.random() < NEW_GOAL_PROBABILITY:
            result.created_goal = self._memory_store.insert_goal(
                NEW_GOAL_TEMPLATE.format(action=action)
            )
            logger.info("New goal: %s", result.created_goal.description)

        return result
