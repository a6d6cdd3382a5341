"""
Memory Store — persistent collections behind the AI character.

Collections:
- goals: tracked objectives with integer progress
- memories: short-term memories, queried by importance and recency
- long_term_memory: append-only archive written by consolidation
- world_state: one document mirroring the live world state

Behavioral Contract:
- Parse misses and empty queries return empty results, never errors.
- world_state holds exactly one document by convention; saving replaces it.
- Copying to long-term storage and deleting from short-term storage are
  separate operations. There is no transaction spanning them.
"""

import json
import logging
import sqlite3
import threading
from datetime import datetime
from typing import List, Optional
from uuid import uuid4

from neuro_narrative.models.memory import Goal, LongTermMemory, Memory
from neuro_narrative.models.world import WorldState

logger = logging.getLogger(__name__)

# Fixed-width so that string comparison in SQL orders chronologically
_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%f"


def _ts(value: datetime) -> str:
    return value.strftime(_TIMESTAMP_FORMAT)


class MemoryStore:
    """
    Document store for goals, memories and world state.
    Prototype: SQLite with one table per collection.
    """

    def __init__(self, db_path: str = ":memory:"):
        self.db_path = db_path
        self._lock = threading.Lock()
        self._conn = sqlite3.connect(db_path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._init_schema()

    def _init_schema(self) -> None:
        """Create the collections if they don't exist."""
        self._conn.execute("""
            CREATE TABLE IF NOT EXISTS goals (
                id TEXT PRIMARY KEY,
                description TEXT NOT NULL,
                progress INTEGER NOT NULL DEFAULT 0
            )
        """)
        self._conn.execute("""
            CREATE TABLE IF NOT EXISTS memories (
                id TEXT PRIMARY KEY,
                info TEXT NOT NULL,
                importance REAL NOT NULL,
                timestamp TEXT NOT NULL
            )
        """)
        self._conn.execute("""
            CREATE INDEX IF NOT EXISTS idx_memories_timestamp ON memories(timestamp)
        """)
        self._conn.execute("""
            CREATE TABLE IF NOT EXISTS long_term_memory (
                id TEXT PRIMARY KEY,
                info TEXT NOT NULL,
                original_timestamp TEXT NOT NULL,
                consolidation_timestamp TEXT NOT NULL
            )
        """)
        self._conn.execute("""
            CREATE TABLE IF NOT EXISTS world_state (
                document_json TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
        """)
        self._conn.commit()

    # --- Goals ---

    def get_goals(self) -> List[Goal]:
        """All goals in creation order."""
        with self._lock:
            rows = self._conn.execute(
                "SELECT id, description, progress FROM goals ORDER BY rowid"
            ).fetchall()
        return [Goal(**dict(r)) for r in rows]

    def insert_goal(self, description: str, progress: int = 0) -> Goal:
        goal = Goal(
            id=f"goal_{uuid4().hex[:12]}",
            description=description,
            progress=progress,
        )
        with self._lock:
            self._conn.execute(
                "INSERT INTO goals (id, description, progress) VALUES (?, ?, ?)",
                (goal.id, goal.description, goal.progress),
            )
            self._conn.commit()
        return goal

    def increment_goal_progress(self, goal_id: str, step: int) -> bool:
        """Add step to a goal's progress. Returns False if the goal is unknown."""
        with self._lock:
            cursor = self._conn.execute(
                "UPDATE goals SET progress = progress + ? WHERE id = ?",
                (step, goal_id),
            )
            self._conn.commit()
        return cursor.rowcount > 0

    # --- Short-term memories ---

    def insert_memory(
        self,
        info: str,
        importance: float = 0.5,
        timestamp: Optional[datetime] = None,
    ) -> Memory:
        """Store a memory stamped with the current time unless given one."""
        memory = Memory(
            id=f"mem_{uuid4().hex[:12]}",
            info=info,
            importance=importance,
            timestamp=timestamp or datetime.utcnow(),
        )
        with self._lock:
            self._conn.execute(
                "INSERT INTO memories (id, info, importance, timestamp) VALUES (?, ?, ?, ?)",
                (memory.id, memory.info, memory.importance, _ts(memory.timestamp)),
            )
            self._conn.commit()
        return memory

    def get_relevant_memories(self, threshold: float, limit: int = 5) -> List[Memory]:
        """Memories more important than threshold, newest first."""
        with self._lock:
            rows = self._conn.execute(
                "SELECT id, info, importance, timestamp FROM memories "
                "WHERE importance > ? ORDER BY timestamp DESC LIMIT ?",
                (threshold, limit),
            ).fetchall()
        return [Memory(**dict(r)) for r in rows]

    def get_memories_before(self, cutoff: datetime) -> List[Memory]:
        """Memories stamped strictly earlier than cutoff."""
        with self._lock:
            rows = self._conn.execute(
                "SELECT id, info, importance, timestamp FROM memories "
                "WHERE timestamp < ? ORDER BY timestamp",
                (_ts(cutoff),),
            ).fetchall()
        return [Memory(**dict(r)) for r in rows]

    def list_memories(self) -> List[Memory]:
        with self._lock:
            rows = self._conn.execute(
                "SELECT id, info, importance, timestamp FROM memories ORDER BY timestamp"
            ).fetchall()
        return [Memory(**dict(r)) for r in rows]

    def delete_memory(self, memory_id: str) -> bool:
        with self._lock:
            cursor = self._conn.execute("DELETE FROM memories WHERE id = ?", (memory_id,))
            self._conn.commit()
        return cursor.rowcount > 0

    # --- Long-term memory ---

    def archive_memory(
        self, memory: Memory, consolidated_at: Optional[datetime] = None
    ) -> LongTermMemory:
        """Copy a memory into the long-term archive. Does not delete the original."""
        record = LongTermMemory(
            id=f"ltm_{uuid4().hex[:12]}",
            info=memory.info,
            original_timestamp=memory.timestamp,
            consolidation_timestamp=consolidated_at or datetime.utcnow(),
        )
        with self._lock:
            self._conn.execute(
                """
                INSERT INTO long_term_memory (
                    id, info, original_timestamp, consolidation_timestamp
                ) VALUES (?, ?, ?, ?)
                """,
                (
                    record.id,
                    record.info,
                    _ts(record.original_timestamp),
                    _ts(record.consolidation_timestamp),
                ),
            )
            self._conn.commit()
        return record

    def list_long_term_memories(self) -> List[LongTermMemory]:
        with self._lock:
            rows = self._conn.execute(
                "SELECT id, info, original_timestamp, consolidation_timestamp "
                "FROM long_term_memory ORDER BY rowid"
            ).fetchall()
        return [LongTermMemory(**dict(r)) for r in rows]

    # --- World state ---

    def save_world_state(self, state: WorldState) -> None:
        """Replace the single world_state document, creating it if missing."""
        document = state.model_dump_json(by_alias=True)
        now = _ts(datetime.utcnow())
        with self._lock:
            cursor = self._conn.execute(
                "UPDATE world_state SET document_json = ?, updated_at = ?",
                (document, now),
            )
            if cursor.rowcount == 0:
                self._conn.execute(
                    "INSERT INTO world_state (document_json, updated_at) VALUES (?, ?)",
                    (document, now),
                )
            self._conn.commit()

    def load_world_state(self) -> Optional[WorldState]:
        """The persisted world state, or None if nothing has been saved."""
        with self._lock:
            row = self._conn.execute(
                "SELECT document_json FROM world_state ORDER BY rowid LIMIT 1"
            ).fetchone()
        if not row:
            return None
        return WorldState.model_validate(json.loads(row["document_json"]))

    def count(self, collection: str) -> int:
        """Number of documents in a collection."""
        if collection not in ("goals", "memories", "long_term_memory", "world_state"):
            raise ValueError(f"Unknown collection: {collection}")
        with self._lock:
            row = self._conn.execute(f"SELECT COUNT(*) AS cnt FROM {collection}").fetchone()
        return row["cnt"]

    def close(self) -> None:
        """Close the database connection."""
        logger.debug("Closing memory store at %s", self.db_path)
        self._conn.close()
