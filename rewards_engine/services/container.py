"""
Service Container - Dependency Injection Container

Simple DI container for the rewards engine and its scheduler.
Uses lazy loading to only instantiate services when first accessed.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional
import logging

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """
    Simple dependency injection container for services.

    Services are lazy-loaded on first access via properties.
    Collaborators (store, clock, level curve) are injected.
    """

    # Collaborators (injected)
    store: Optional[object] = None  # ProgressStore implementation
    clock: Optional[Callable[[], datetime]] = None
    level_curve: Optional[Callable] = None

    # Services (lazy-loaded via properties)
    _rewards_service: Optional[object] = field(default=None, init=False, repr=False)
    _scheduler: Optional[object] = field(default=None, init=False, repr=False)

    @property
    def rewards_service(self):
        """Get RewardsService instance (lazy-loaded)"""
        if self._rewards_service is None:
            from rewards_engine.services.rewards_service import RewardsService

            kwargs = {"store": self.store, "clock": self.clock}
            if self.level_curve is not None:
                kwargs["level_curve"] = self.level_curve
            self._rewards_service = RewardsService(**kwargs)
            logger.debug("RewardsService instantiated")
        return self._rewards_service

    @property
    def scheduler(self):
        """Get DailyResetScheduler instance (lazy-loaded)"""
        if self._scheduler is None:
            from rewards_engine.scheduler.daily_reset import DailyResetScheduler
            self._scheduler = DailyResetScheduler(self.rewards_service)
            logger.debug("DailyResetScheduler instantiated")
        return self._scheduler


# Global container instance (initialized in main.py)
_container: Optional[ServiceContainer] = None


def get_container() -> ServiceContainer:
    """
    Get the global service container.

    Returns:
        ServiceContainer: The global container instance

    Raises:
        RuntimeError: If container not initialized (call init_container first)
    """
    if _container is None:
        raise RuntimeError(
            "Service container not initialized. "
            "Call init_container() in main.py before using services."
        )
    return _container


def init_container(
    store: Optional[object] = None,
    clock: Optional[Callable[[], datetime]] = None,
    level_curve: Optional[Callable] = None,
) -> ServiceContainer:
    """
    Initialize the global service container.

    Should be called once in main.py before the engine is used.

    Args:
        store: Snapshot store (defaults to in-memory)
        clock: Clock returning local time (defaults to datetime.now)
        level_curve: Streak-to-level mapping (defaults to the built-in curve)

    Returns:
        ServiceContainer: The initialized container
    """
    global _container

    _container = ServiceContainer(store=store, clock=clock, level_curve=level_curve)

    logger.info("Service container initialized")
    return _container
