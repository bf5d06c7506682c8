# File: src/parqueadero/infrastructure/messaging.py
"""
Messaging Infrastructure for the Parqueadero Management System

In-process publish/subscribe for domain events raised by the parking lot:
1. Event Bus - routes events to the handlers subscribed to their type
2. Event Handlers - side effects triggered by events (logging, recording)
3. Event Store - keeps every published event in memory for auditing
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, List
from datetime import datetime
import logging

from ..domain.models import DomainEvent


# Subscribing to this type receives every event
ALL_EVENTS = "*"


# ============================================================================
# EVENT HANDLERS
# ============================================================================

class EventHandler(ABC):
    """Abstract base class for event handlers"""

    @abstractmethod
    def handle(self, event: DomainEvent) -> None:
        """Handle a domain event"""
        pass

    def can_handle(self, event: DomainEvent) -> bool:
        """Check if this handler can handle the event"""
        return True


class LoggingEventHandler(EventHandler):
    """Writes every event it receives to the log"""

    def __init__(self, level: int = logging.INFO):
        self.level = level
        self._logger = logging.getLogger(self.__class__.__name__)

    def handle(self, event: DomainEvent) -> None:
        payload = event.to_dict()
        self._logger.log(self.level, f"{payload['event_type']}: {payload['data']}")


# ============================================================================
# EVENT BUS (In-memory)
# ============================================================================

class EventBus:
    """
    In-memory event bus for intra-process event publishing

    Handler failures are logged and never reach the publisher.
    """

    def __init__(self):
        self._subscribers: Dict[str, List[EventHandler]] = {}
        self._logger = logging.getLogger(self.__class__.__name__)

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        """Subscribe to events of a specific type (or ALL_EVENTS)"""
        if event_type not in self._subscribers:
            self._subscribers[event_type] = []

        if handler not in self._subscribers[event_type]:
            self._subscribers[event_type].append(handler)
            self._logger.debug(f"Subscribed {handler.__class__.__name__} to {event_type}")

    def unsubscribe(self, event_type: str, handler: EventHandler) -> None:
        """Unsubscribe handler from events"""
        handlers = self._subscribers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)
            self._logger.debug(f"Unsubscribed {handler.__class__.__name__} from {event_type}")

    def publish(self, event: DomainEvent) -> None:
        """Publish an event to all subscribers"""
        self._logger.debug(f"Publishing event: {event.event_type} (ID: {event.event_id})")

        handlers = self._subscribers.get(event.event_type, []) + self._subscribers.get(ALL_EVENTS, [])
        for handler in handlers:
            if handler.can_handle(event):
                try:
                    handler.handle(event)
                except Exception as e:
                    self._logger.error(
                        f"Error handling event {event.event_type} with {handler.__class__.__name__}: {e}"
                    )

    def publish_all(self, events: List[DomainEvent]) -> None:
        for event in events:
            self.publish(event)


# ============================================================================
# EVENT STORE
# ============================================================================

class InMemoryEventStore(EventHandler):
    """
    Records published events in order
    Subscribe it to ALL_EVENTS to keep a full audit trail
    """

    def __init__(self):
        self._events: List[DomainEvent] = []

    def handle(self, event: DomainEvent) -> None:
        self._events.append(event)

    def get_events(self, event_type: Optional[str] = None) -> List[DomainEvent]:
        if event_type is None:
            return list(self._events)
        return [e for e in self._events if e.event_type == event_type]

    def get_events_for_lot(self, parking_lot_id: str) -> List[DomainEvent]:
        return [e for e in self._events if e.parking_lot_id == parking_lot_id]

    def get_events_since(self, timestamp: datetime) -> List[DomainEvent]:
        return [e for e in self._events if e.timestamp >= timestamp]

    def count(self) -> int:
        return len(self._events)
