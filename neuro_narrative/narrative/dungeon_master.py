"""
Dungeon Master — narrates the outcome of the player's action.

The prompt carries the visible world (place, time, weather, the last few
events, who and what is present) and the current neural activity so that the
narration tracks the world the AI character is experiencing.
"""

import logging

from neuro_narrative.llm.client import TextGenerator
from neuro_narrative.models.world import WorldState

logger = logging.getLogger(__name__)

RECENT_EVENT_COUNT = 3

DUNGEON_MASTER_PROMPT = """
You are the Dungeon Master in a vibrant, magical fantasy world. Craft a vivid, engaging narrative based on the player's action:
"{action}"

Current world state:
Location: {location}
Time: {time}
Weather: {weather}
Recent events: {recent_events}
Characters present: {characters}
Notable items: {items}
Neural Activity: {neural_activity}

Your task:
1. Describe the outcome of the player's action in rich, sensory detail. Use vivid imagery and evocative language.
2. Introduce a new element: a character, item, or event that adds intrigue or wonder to the world.
3. Present a choice or challenge that encourages exploration or interaction with the world.
4. Subtly weave in potential goals or quests that the player might pursue.
5. Maintain a sense of whimsy and magic throughout your description.

Your response should be detailed and immersive (150-200 words). End with an open-ended question or a clear set of choices for the player.
"""


def build_prompt(action: str, world: WorldState) -> str:
    """Render the narration prompt for an action against the given world."""
    return DUNGEON_MASTER_PROMPT.format(
        action=action,
        location=world.location,
        time=world.time,
        weather=world.weather,
        recent_events=". ".join(world.events[-RECENT_EVENT_COUNT:]),
        characters=", ".join(world.characters),
        items=", ".join(world.items),
        neural_activity=world.neural_activity,
    )


class DungeonMaster:
    """Narrative generator. Failures of the backend propagate unchanged."""

    def __init__(self, generator: TextGenerator):
        self._generator = generator

    def narrate(self, action: str, world: WorldState) -> str:
        prompt = build_prompt(action, world)
        logger.debug("Dungeon Master narrating action %r", action)
        return self._generator.generate(prompt)
