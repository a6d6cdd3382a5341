"""
Consolidation Loop — memory housekeeping while the character sleeps.

Every interval (hourly by default) the loop wakes up and, only if the
sleep/wake cycle says "sleep":
  1. selects short-term memories older than the minimum age
  2. copies the important ones into long-term memory
  3. deletes every selected memory from short-term storage
  4. lowers neural activity

Copy and delete are not atomic. A failure between them can leave a memory in
both stores; a failure before the copy can lose it.
"""

import asyncio
import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from neuro_narrative.cognition.signals import sleep_state
from neuro_narrative.memory.store import MemoryStore
from neuro_narrative.models.consolidation import ConsolidationConfig, ConsolidationReport
from neuro_narrative.world_model.store import WorldStateStore

logger = logging.getLogger(__name__)


class ConsolidationLoop:
    """Recurring sleep-time consolidation job."""

    def __init__(
        self,
        memory_store: MemoryStore,
        world_store: WorldStateStore,
        config: Optional[ConsolidationConfig] = None,
        clock: Callable[[], datetime] = datetime.now,
        utc_clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.memory_store = memory_store
        self.world_store = world_store
        self.config = config or ConsolidationConfig()
        self._clock = clock
        self._utc_clock = utc_clock
        self._running = False
        self.last_report: Optional[ConsolidationReport] = None

    @property
    def status(self) -> str:
        return "running" if self._running else "stopped"

    def consolidate_once(self, now: Optional[datetime] = None) -> ConsolidationReport:
        """
        Run a single consolidation pass.
        ``now`` is local wall-clock time and only decides sleep vs. wake.
        Memory ages are measured against ``utc_clock``, matching how memories
        are stamped.
        """
        if now is None:
            now = self._clock()

        if sleep_state(now) != "sleep":
            return ConsolidationReport(ran=False)

        logger.info("Performing memory consolidation...")
        consolidated_at = self._utc_clock()
        cutoff = consolidated_at - timedelta(hours=self.config.min_age_hours)
        old_memories = self.memory_store.get_memories_before(cutoff)

        report = ConsolidationReport(ran=True, examined=len(old_memories))
        for memory in old_memories:
            if memory.importance > self.config.importance_threshold:
                self.memory_store.archive_memory(memory, consolidated_at)
                report.consolidated += 1
            else:
                report.discarded += 1
            self.memory_store.delete_memory(memory.id)

        with self.world_store.turn():
            level = self.world_store.decay(self.config.activity_decay)

        logger.info(
            "Consolidation done: %d examined, %d archived, %d discarded, activity now %.2f",
            report.examined, report.consolidated, report.discarded, level,
        )
        return report

    def _run_guarded(self) -> None:
        try:
            self.last_report = self.consolidate_once()
        except Exception:
            logger.exception("Memory consolidation failed")

    async def run_async(self, stop_event: Optional[asyncio.Event] = None) -> None:
        """Run consolidation every interval until stop_event is set."""
        self._running = True
        if stop_event is None:
            stop_event = asyncio.Event()

        try:
            while not stop_event.is_set():
                try:
                    await asyncio.wait_for(
                        stop_event.wait(),
                        timeout=self.config.interval_seconds,
                    )
                except asyncio.TimeoutError:
                    await asyncio.to_thread(self._run_guarded)
        finally:
            self._running = False
