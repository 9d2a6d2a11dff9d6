"""
Snapshot Store Collaborators

The engine hands its state to a store after processing and loads it once at
startup. Durable storage lives outside the engine; any object with async
load_progress()/save_progress() methods can be injected.

InMemoryProgressStore keeps the last snapshot in process memory and is used
for tests and local runs.
"""

import logging
from typing import Optional, Protocol

from rewards_engine.models.snapshot import EngineSnapshot

logger = logging.getLogger(__name__)


class ProgressStore(Protocol):
    """Durable storage for engine snapshots"""

    async def load_progress(self) -> Optional[EngineSnapshot]:
        ...

    async def save_progress(self, snapshot: EngineSnapshot) -> None:
        ...


class InMemoryProgressStore:
    """In-memory snapshot store (NOT persisted across processes)"""

    def __init__(self, snapshot: Optional[EngineSnapshot] = None):
        self._snapshot = snapshot
        self.save_count = 0
        logger.debug("InMemoryProgressStore initialized - snapshots are kept in memory only")

    async def load_progress(self) -> Optional[EngineSnapshot]:
        """Return a copy of the last saved snapshot, if any"""
        if self._snapshot is None:
            return None
        return self._snapshot.model_copy(deep=True)

    async def save_progress(self, snapshot: EngineSnapshot) -> None:
        """Keep a copy of the snapshot"""
        self._snapshot = snapshot.model_copy(deep=True)
        self.save_count += 1
        logger.debug(
            f"Saved snapshot to memory: {len(snapshot.progress.unlocked_rewards)} rewards, "
            f"{len(snapshot.streaks)} streaks"
        )
