"""
Cognitive Agent — the AI character's turn.

The character reacts to the Dungeon Master's narration with its goals,
recalled memories, an emotion, the sleep/wake state and the instantaneous
brain-wave signals in view. The reply is requested in the form

  Thoughts: ...
  Action: ...

but nothing enforces it; downstream parsing treats both lines as optional.
"""

import json
import logging
import random
from datetime import datetime
from typing import Callable, List, Optional

from neuro_narrative.cognition import signals
from neuro_narrative.llm.client import TextGenerator
from neuro_narrative.memory.store import MemoryStore
from neuro_narrative.models.cognition import AIState, BrainWaves
from neuro_narrative.models.memory import Goal, Memory
from neuro_narrative.models.world import WorldState

logger = logging.getLogger(__name__)

RELEVANT_MEMORY_LIMIT = 5

AI_CHARACTER_PROMPT = """
You are an AI with a biologically-inspired cognitive system, exploring a magical fantasy realm. Here's the current situation:
{narrative}

Your current goals: {goals}
Your cherished memories: {memories}
Your emotional state: {emotion}
Sleep state: {sleep_state}
Neural activity: {neural_activity}
Brain wave states:
- Alpha: {alpha}
- Beta: {beta}
- Theta: {theta}
- Delta: {delta}

Your task:
1. Reflect on the situation, your goals, and your emotions. How do they intertwine with your current neural state?
2. Make a decision about what to do next, influenced by your current brain wave states and sleep cycle.
3. Explain your thought process, emotions, and how your neurological state is affecting your decision.

Format your response as follows:
Thoughts: [Your introspective thoughts here]
Action: [Your clear action statement here]

Your thoughts should be introspective and emotive (100-150 words), reflecting your current neurological state.
Your action should be a clear, concise statement of what you will do next.
"""


def build_prompt(
    narrative: str,
    goals: List[Goal],
    memories: List[Memory],
    emotion: str,
    sleep_state: str,
    neural_activity: float,
    waves: BrainWaves,
) -> str:
    """Render the AI character prompt."""
    return AI_CHARACTER_PROMPT.format(
        narrative=narrative,
        goals=json.dumps([g.model_dump(mode="json") for g in goals]),
        memories=json.dumps([m.model_dump(mode="json") for m in memories]),
        emotion=emotion,
        sleep_state=sleep_state,
        neural_activity=neural_activity,
        alpha=waves.alpha,
        beta=waves.beta,
        theta=waves.theta,
        delta=waves.delta,
    )


class CognitiveAgent:
    """
    The AI character.

    ``clock`` supplies wall-clock time for the signals and the sleep cycle;
    ``rng`` drives emotion sampling. Both are injectable for tests.
    """

    def __init__(
        self,
        generator: TextGenerator,
        memory_store: MemoryStore,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._generator = generator
        self._memory_store = memory_store
        self._rng = rng or random.Random()
        self._clock = clock

    def relevant_memories(self, now: Optional[datetime] = None) -> List[Memory]:
        """Memories above the current attention level (the alpha wave)."""
        now = now or self._clock()
        attention = signals.alpha(now.timestamp())
        return self._memory_store.get_relevant_memories(
            attention, limit=RELEVANT_MEMORY_LIMIT
        )

    def respond(self, narrative: str, world: WorldState) -> str:
        now = self._clock()
        prompt = build_prompt(
            narrative=narrative,
            goals=self._memory_store.get_goals(),
            memories=self.relevant_memories(now),
            emotion=signals.sample_emotion(self._rng),
            sleep_state=signals.sleep_state(now),
            neural_activity=world.neural_activity,
            waves=signals.brain_waves(now.timestamp()),
        )
        return self._generator.generate(prompt)

    def snapshot(self) -> AIState:
        """Current goals, recalled memories, a fresh emotion and the signals."""
        now = self._clock()
        return AIState(
            goals=self._memory_store.get_goals(),
            memories=self.relevant_memories(now),
            emotion=signals.sample_emotion(self._rng),
            sleep_state=signals.sleep_state(now),
            brain_waves=signals.brain_waves(now.timestamp()),
        )
