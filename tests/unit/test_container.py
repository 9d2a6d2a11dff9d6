"""Unit tests for the service container (rewards_engine/services/container.py)"""
import pytest

from rewards_engine.scheduler.daily_reset import DailyResetScheduler
from rewards_engine.services import container as container_module
from rewards_engine.services.container import ServiceContainer, get_container, init_container
from rewards_engine.services.rewards_service import RewardsService


@pytest.fixture(autouse=True)
def reset_global_container(monkeypatch):
    monkeypatch.setattr(container_module, "_container", None)


def test_get_container_before_init_raises():
    with pytest.raises(RuntimeError):
        get_container()


def test_init_container_sets_global(memory_store, clock):
    container = init_container(store=memory_store, clock=clock)
    assert get_container() is container


def test_services_are_lazy_singletons(memory_store, clock):
    container = ServiceContainer(store=memory_store, clock=clock)

    service = container.rewards_service
    assert isinstance(service, RewardsService)
    assert container.rewards_service is service
    assert service.store is memory_store
    assert service.clock is clock

    scheduler = container.scheduler
    assert isinstance(scheduler, DailyResetScheduler)
    assert scheduler.service is service
