"""Tests for the FastAPI API endpoints."""

import random
import time
from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from neuro_narrative.api.app import create_app
from neuro_narrative.config import Settings
from neuro_narrative.memory.store import MemoryStore
from neuro_narrative.world_model.store import WorldStateStore

NARRATION = "Location: Dark Cavern. You step through the door into darkness."


class _StubGenerator:
    def __init__(self, reply: str = NARRATION):
        self.reply = reply

    def generate(self, prompt: str) -> str:
        return self.reply


class _BrokenGenerator:
    def generate(self, prompt: str) -> str:
        raise RuntimeError("upstream exploded")


def _make_app(generator, memory_store=None, clock=lambda: datetime(2026, 10, 19, 10, 0),
              **settings):
    ms = memory_store or MemoryStore(db_path=":memory:")
    return create_app(
        settings=Settings(database_url=":memory:", **settings),
        memory_store=ms,
        world_store=WorldStateStore(ms),
        generator=generator,
        rng=random.Random(3),
        clock=clock,
    )


def _make_client(generator, memory_store=None):
    return TestClient(_make_app(generator, memory_store))


@pytest.fixture
def client():
    """Create a test client with fresh components and a stub model."""
    return _make_client(_StubGenerator())


class TestGameAction:
    def test_end_to_end_turn(self, client):
        response = client.post("/game-action", json={"action": "I open the door"})
        assert response.status_code == 200
        data = response.json()

        assert data["worldState"]["location"] == "Dark Cavern"
        assert data["worldState"]["events"][-1].startswith("Location: Dark Cavern")
        assert data["responses"] == [
            {"speaker": "Dungeon Master", "text": NARRATION},
            {"speaker": "AI Character", "text": NARRATION},
        ]

    def test_response_shape(self, client):
        data = client.post("/game-action", json={"action": "look"}).json()
        assert set(data) == {"responses", "worldState", "aiState"}
        assert set(data["aiState"]) == {
            "goals", "memories", "emotion", "sleepState", "brainWaves",
        }
        assert data["aiState"]["sleepState"] == "wake"
        assert "neuralActivity" in data["worldState"]

    def test_missing_action(self, client):
        response = client.post("/game-action", json={})
        assert response.status_code == 400
        assert response.text == "Action is required"

    def test_empty_action(self, client):
        response = client.post("/game-action", json={"action": ""})
        assert response.status_code == 400

    def test_missing_body(self, client):
        response = client.post("/game-action")
        assert response.status_code == 400

    def test_non_string_action_played_as_text(self, client):
        response = client.post("/game-action", json={"action": 42})
        assert response.status_code == 200
        assert response.json()["responses"][0]["speaker"] == "Dungeon Master"

    def test_falsy_non_string_action(self, client):
        for action in (0, False, [], None):
            response = client.post("/game-action", json={"action": action})
            assert response.status_code == 400
            assert response.text == "Action is required"

    def test_backend_failure_is_500(self):
        client = _make_client(_BrokenGenerator())
        response = client.post("/game-action", json={"action": "I open the door"})
        assert response.status_code == 500
        assert response.text == "An error occurred"


class TestGameState:
    def test_initial_state(self, client):
        response = client.get("/game-state")
        assert response.status_code == 200
        data = response.json()
        assert data["worldState"]["location"] == "Mystical Glade"
        assert data["worldState"]["neuralActivity"] == 0.5
        assert set(data["aiState"]["brainWaves"]) == {"alpha", "beta", "theta", "delta"}

    def test_state_reflects_turns(self, client):
        client.post("/game-action", json={"action": "I open the door"})
        client.post("/game-action", json={"action": "I walk on"})
        data = client.get("/game-state").json()
        assert len(data["worldState"]["events"]) == 2

    def test_store_failure_is_500(self):
        ms = MemoryStore(db_path=":memory:")
        client = _make_client(_StubGenerator(), memory_store=ms)
        ms.close()
        response = client.get("/game-state")
        assert response.status_code == 500
        assert response.text == "An error occurred while fetching game state"


class TestLandingPage:
    def test_index_served(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert "Neuro Narrative" in response.text


class TestConsolidationLifespan:
    def test_job_runs_while_app_is_up(self):
        app = _make_app(
            _StubGenerator(),
            clock=lambda: datetime(2026, 10, 19, 2, 0),
            consolidation_interval_seconds=1,
        )
        consolidation = app.state.consolidation
        assert consolidation.status == "stopped"

        with TestClient(app):
            deadline = time.monotonic() + 5
            while consolidation.last_report is None and time.monotonic() < deadline:
                time.sleep(0.1)
            assert consolidation.status == "running"
            assert consolidation.last_report is not None
            assert consolidation.last_report.ran is True

        assert consolidation.status == "stopped"

    def test_job_skips_while_awake(self):
        app = _make_app(_StubGenerator(), consolidation_interval_seconds=1)
        consolidation = app.state.consolidation

        with TestClient(app):
            deadline = time.monotonic() + 5
            while consolidation.last_report is None and time.monotonic() < deadline:
                time.sleep(0.1)
            assert consolidation.last_report.ran is False
            assert app.state.world_store.state.neural_activity == 0.5

        assert consolidation.status == "stopped"
