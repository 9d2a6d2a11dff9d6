"""
Service layer for the rewards engine.

The RewardsService owns all engine state; the ServiceContainer wires it
together with its collaborators.
"""

from rewards_engine.services.container import ServiceContainer, get_container, init_container
from rewards_engine.services.rewards_service import RewardsService

__all__ = [
    "RewardsService",
    "ServiceContainer",
    "get_container",
    "init_container",
]
