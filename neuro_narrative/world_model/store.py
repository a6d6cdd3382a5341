"""
World State Store — owns the live world state.

Updated by: Dungeon Master narration + sleep-time consolidation
Queried by: Dungeon Master + AI character prompts, HTTP state endpoints
"""

import copy
import logging
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from neuro_narrative.memory.store import MemoryStore
from neuro_narrative.models.world import MAX_EVENTS, WorldState, WorldUpdate
from neuro_narrative.world_model.parser import first_sentence, parse_narrative

logger = logging.getLogger(__name__)

ACTIVITY_STEP = 0.1


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


class WorldStateStore:
    """
    In-memory world state mirrored into the memory store after each mutation.
    One instance per game; pass it to whoever needs the world.
    """

    def __init__(
        self,
        memory_store: MemoryStore,
        initial: Optional[WorldState] = None,
    ):
        self._memory_store = memory_store
        self._state = initial or WorldState()
        self._lock = threading.RLock()
        self._publish()

    @property
    def state(self) -> WorldState:
        """Get the current world state."""
        return self._state

    @contextmanager
    def turn(self) -> Iterator[WorldState]:
        """Hold the world exclusively for one read-modify-write sequence."""
        with self._lock:
            yield self._state

    def apply_update(self, update: WorldUpdate) -> None:
        """Overwrite every field the update mentions."""
        with self._lock:
            for name, value in update.model_dump(exclude_none=True).items():
                setattr(self._state, name, value)
            self._publish()

    def record_event(self, event: str) -> None:
        """Append an event, evicting the oldest beyond MAX_EVENTS."""
        with self._lock:
            events = self._state.events
            events.append(event)
            while len(events) > MAX_EVENTS:
                events.pop(0)
            self._publish()

    def adjust_activity(self, step: float) -> float:
        """Shift neural activity by step, clamped into [0, 1]."""
        with self._lock:
            self._state.neural_activity = _clamp(self._state.neural_activity + step)
            self._publish()
            return self._state.neural_activity

    def apply_narrative(self, text: str) -> WorldUpdate:
        """
        Fold a Dungeon Master narration into the world:
        extracted fields overwrite, the first sentence becomes an event,
        activity rises by ACTIVITY_STEP, and the snapshot is persisted.
        """
        update = parse_narrative(text)
        with self._lock:
            self.apply_update(update)
            self.record_event(first_sentence(text))
            self.adjust_activity(ACTIVITY_STEP)
            self.persist()
        if not update.is_empty():
            logger.debug("World update from narration: %s", update.model_dump(exclude_none=True))
        return update

    def decay(self, step: float) -> float:
        """Lower neural activity by step (clamped at 0) and persist."""
        with self._lock:
            level = self.adjust_activity(-step)
            self.persist()
        return level

    def persist(self) -> None:
        """Mirror the full state into the world_state collection."""
        self._memory_store.save_world_state(self._state)

    def _publish(self) -> None:
        # Callers hold the lock; readers only ever see a complete dump
        self._snapshot = self._state.model_dump(mode="json", by_alias=True)

    def get_state_snapshot(self) -> dict:
        """
        Serializable world state as of the last completed mutation.
        Does not wait for an in-flight turn to finish.
        """
        return copy.deepcopy(self._snapshot)
