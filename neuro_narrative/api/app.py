"""
Neuro Narrative API — FastAPI endpoints.

Exposes the game via a small REST API:
- POST /game-action  play one turn
- GET  /game-state   inspect world and AI state
- GET  /             landing page
"""

import asyncio
import logging
import random
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Optional

from fastapi import FastAPI
from fastapi.responses import FileResponse, PlainTextResponse
from pydantic import BaseModel

from neuro_narrative.cognition.agent import CognitiveAgent
from neuro_narrative.cognition.goals import GoalUpdater
from neuro_narrative.config import Settings, load_settings
from neuro_narrative.consolidation.loop import ConsolidationLoop
from neuro_narrative.game.loop import GameLoop
from neuro_narrative.llm.client import OpenAITextGenerator, TextGenerator
from neuro_narrative.memory.store import MemoryStore
from neuro_narrative.models.consolidation import ConsolidationConfig
from neuro_narrative.narrative.dungeon_master import DungeonMaster
from neuro_narrative.world_model.store import WorldStateStore

logger = logging.getLogger(__name__)

PUBLIC_DIR = Path(__file__).resolve().parent.parent / "public"


# --- Request Models ---

class GameActionRequest(BaseModel):
    action: Optional[Any] = None           # Any truthy JSON value is played as text


# --- Application Factory ---

def create_app(
    settings: Optional[Settings] = None,
    memory_store: Optional[MemoryStore] = None,
    world_store: Optional[WorldStateStore] = None,
    generator: Optional[TextGenerator] = None,
    rng: Optional[random.Random] = None,
    clock: Callable[[], datetime] = datetime.now,
    consolidation_config: Optional[ConsolidationConfig] = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = settings or load_settings()

    # Initialize components
    ms = memory_store or MemoryStore(db_path=settings.database_url)
    ws = world_store or WorldStateStore(ms)
    gen = generator or OpenAITextGenerator.from_settings(settings)
    rng = rng or random.Random()
    config = consolidation_config or ConsolidationConfig(
        interval_seconds=settings.consolidation_interval_seconds,
    )

    agent = CognitiveAgent(gen, ms, rng=rng, clock=clock)
    game = GameLoop(
        world_store=ws,
        memory_store=ms,
        dungeon_master=DungeonMaster(gen),
        agent=agent,
        goal_updater=GoalUpdater(ms, rng=rng),
    )
    consolidation = ConsolidationLoop(ms, ws, config=config, clock=clock)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        stop_event = asyncio.Event()
        task = asyncio.create_task(consolidation.run_async(stop_event))
        logger.info(
            "Memory consolidation scheduled every %ds", config.interval_seconds
        )
        try:
            yield
        finally:
            stop_event.set()
            await task

    app = FastAPI(
        title="Neuro Narrative API",
        description="Dungeon Master and cognitive AI character",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Store components on app state for access in endpoints
    app.state.settings = settings
    app.state.memory_store = ms
    app.state.world_store = ws
    app.state.game = game
    app.state.consolidation = consolidation

    def _ai_state() -> dict:
        return game.ai_state().model_dump(mode="json", by_alias=True)

    # === GAME ===

    @app.post("/game-action")
    def game_action(req: Optional[GameActionRequest] = None):
        """Play one turn for the player's action."""
        if req is None or not req.action:
            return PlainTextResponse("Action is required", status_code=400)

        try:
            responses = game.play(str(req.action))
            return {
                "responses": [r.model_dump() for r in responses],
                "worldState": ws.get_state_snapshot(),
                "aiState": _ai_state(),
            }
        except Exception:
            logger.exception("Game turn failed for action %r", req.action)
            return PlainTextResponse("An error occurred", status_code=500)

    @app.get("/game-state")
    def game_state():
        """Current world and AI state."""
        try:
            return {
                "worldState": ws.get_state_snapshot(),
                "aiState": _ai_state(),
            }
        except Exception:
            logger.exception("Fetching game state failed")
            return PlainTextResponse(
                "An error occurred while fetching game state", status_code=500
            )

    # === STATIC ===

    @app.get("/", include_in_schema=False)
    def index():
        return FileResponse(PUBLIC_DIR / "index.html")

    return app
