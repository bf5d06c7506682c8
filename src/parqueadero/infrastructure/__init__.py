"""Infrastructure layer: repositories and in-process messaging."""

from .repositories import Repository, InMemoryRepository, InMemoryParkingLotRepository
from .messaging import (
    ALL_EVENTS, EventHandler, LoggingEventHandler, EventBus, InMemoryEventStore
)

__all__ = [
    "Repository", "InMemoryRepository", "InMemoryParkingLotRepository",
    "ALL_EVENTS", "EventHandler", "LoggingEventHandler", "EventBus", "InMemoryEventStore",
]
