"""Global test fixtures and utilities for rewards engine tests"""
import pytest
from datetime import datetime, timedelta
from unittest.mock import AsyncMock

from rewards_engine.gamification.progress_store import InMemoryProgressStore
from rewards_engine.services.rewards_service import RewardsService


# ============================================================================
# Clock Fixtures
# ============================================================================

class FakeClock:
    """Settable clock injected into the engine"""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now

    def set(self, now: datetime) -> datetime:
        self.now = now
        return self.now


@pytest.fixture
def start_time():
    """Fixed local time used as 'now' by default (a Wednesday)"""
    return datetime(2024, 3, 13, 12, 0, 0)


@pytest.fixture
def clock(start_time):
    """Fake clock starting at start_time"""
    return FakeClock(start_time)


# ============================================================================
# Store Fixtures
# ============================================================================

@pytest.fixture
def memory_store():
    """Empty in-memory snapshot store"""
    return InMemoryProgressStore()


@pytest.fixture
def failing_store():
    """Snapshot store whose load and save always fail"""
    store = AsyncMock()
    store.load_progress = AsyncMock(side_effect=OSError("disk unavailable"))
    store.save_progress = AsyncMock(side_effect=OSError("disk unavailable"))
    return store


# ============================================================================
# Service Fixtures
# ============================================================================

@pytest.fixture
def make_service(clock, memory_store):
    """Factory building a RewardsService on the fake clock"""
    def _make(**kwargs):
        kwargs.setdefault("store", memory_store)
        kwargs.setdefault("clock", clock)
        return RewardsService(**kwargs)
    return _make


@pytest.fixture
def service(make_service):
    """RewardsService with the packaged catalogs"""
    return make_service()


@pytest.fixture
def submit_daily(clock):
    """Submit one activity per day for `days` days, advancing the clock"""
    async def _submit(service, activity_type, days, payload=None):
        results = []
        for i in range(days):
            if i:
                clock.advance(days=1)
            results.append(await service.submit_activity(activity_type, payload or {}))
        return results
    return _submit
