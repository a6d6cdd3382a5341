"""Tests for the Game Loop."""

import random
from datetime import datetime

import pytest

from neuro_narrative.cognition.agent import CognitiveAgent
from neuro_narrative.cognition.goals import GoalUpdater
from neuro_narrative.game.loop import GameLoop
from neuro_narrative.memory.store import MemoryStore
from neuro_narrative.models.game import AI_CHARACTER, DUNGEON_MASTER
from neuro_narrative.narrative.dungeon_master import DungeonMaster
from neuro_narrative.world_model.store import WorldStateStore

NARRATION = "Location: Dark Cavern. You step through the door into darkness."
RESPONSE = "Thoughts: It is cold here.\nAction: light the torch"


class _ScriptedGenerator:
    """Answers the Dungeon Master and the AI character with fixed texts."""

    def __init__(self, narration: str = NARRATION, response: str = RESPONSE,
                 fail_agent: bool = False):
        self.narration = narration
        self.response = response
        self.fail_agent = fail_agent
        self.calls = []

    def generate(self, prompt: str) -> str:
        if "You are the Dungeon Master" in prompt:
            self.calls.append("dungeon_master")
            return self.narration
        self.calls.append("ai_character")
        if self.fail_agent:
            raise ConnectionError("model unavailable")
        return self.response


def _make_game(generator, memory_store=None):
    ms = memory_store or MemoryStore(db_path=":memory:")
    ws = WorldStateStore(ms)
    rng = random.Random(0)
    clock = lambda: datetime(2026, 10, 19, 12, 0)
    return GameLoop(
        world_store=ws,
        memory_store=ms,
        dungeon_master=DungeonMaster(generator),
        agent=CognitiveAgent(generator, ms, rng=rng, clock=clock),
        goal_updater=GoalUpdater(ms, rng=rng),
    )


class TestPlay:
    def test_turn_order_and_speakers(self):
        generator = _ScriptedGenerator()
        game = _make_game(generator)

        lines = game.play("I open the door")

        assert generator.calls == ["dungeon_master", "ai_character"]
        assert [line.speaker for line in lines] == [DUNGEON_MASTER, AI_CHARACTER]
        assert lines[0].text == NARRATION
        assert lines[1].text == RESPONSE

    def test_world_updated_from_narration(self):
        game = _make_game(_ScriptedGenerator())
        game.play("I open the door")

        state = game.world_store.state
        assert state.location == "Dark Cavern"
        assert state.events[-1].startswith("Location: Dark Cavern")
        assert state.neural_activity == pytest.approx(0.6)

    def test_both_texts_remembered(self):
        game = _make_game(_ScriptedGenerator())
        game.play("I open the door")

        memories = {m.info: m.importance for m in game.memory_store.list_memories()}
        assert memories == {NARRATION: 0.6, RESPONSE: 0.4}

    def test_goals_advanced_by_action(self):
        ms = MemoryStore(db_path=":memory:")
        ms.insert_goal("light the torch")
        game = _make_game(_ScriptedGenerator(), memory_store=ms)

        game.play("I look around")

        torch = [g for g in ms.get_goals() if g.description == "light the torch"][0]
        assert torch.progress == 20

    def test_agent_failure_leaves_partial_effects(self):
        game = _make_game(_ScriptedGenerator(fail_agent=True))

        with pytest.raises(ConnectionError):
            game.play("I open the door")

        # The narration step already landed
        assert game.world_store.state.location == "Dark Cavern"
        memories = game.memory_store.list_memories()
        assert [m.info for m in memories] == [NARRATION]

    def test_ai_state(self):
        game = _make_game(_ScriptedGenerator())
        state = game.ai_state()
        assert state.sleep_state == "wake"
        assert state.goals == []
