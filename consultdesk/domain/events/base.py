"""
Base classes for domain events and event handling.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Dict, Any, List, Optional
from datetime import datetime
from dataclasses import dataclass, field
import uuid


logger = logging.getLogger(__name__)


@dataclass
class DomainEvent(ABC):
    """Base class for all domain events."""

    event_id: str = field(default_factory=lambda: str(uuid.uuid4()), kw_only=True)
    occurred_at: datetime = field(default_factory=datetime.utcnow, kw_only=True)
    event_type: str = field(init=False, default="")
    version: int = field(default=1, kw_only=True)

    def __post_init__(self):
        self.event_type = self.__class__.__name__

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        return {
            "event_id": self.event_id,
            "event_type": self.event_type,
            "occurred_at": self.occurred_at.isoformat(),
            "version": self.version,
            "data": self._get_event_data()
        }

    @abstractmethod
    def _get_event_data(self) -> Dict[str, Any]:
        """Get event-specific data for serialization."""
        pass


class EventHandler(ABC):
    """Base class for event handlers."""

    @abstractmethod
    async def handle(self, event: DomainEvent) -> None:
        pass

    @abstractmethod
    def can_handle(self, event: DomainEvent) -> bool:
        pass


class EventDispatcher:
    """Dispatches domain events to registered handlers."""

    def __init__(self, max_log_size: int = 1000):
        self._handlers: Dict[str, List[EventHandler]] = {}
        self._global_handlers: List[EventHandler] = []
        self._event_log: List[Dict[str, Any]] = []
        self._max_log_size = max_log_size

    def register_handler(self, event_type: str, handler: EventHandler) -> None:
        """Register an event handler for a specific event type."""
        self._handlers.setdefault(event_type, []).append(handler)
        logger.info(f"Registered handler {handler.__class__.__name__} for {event_type}")

    def register_global_handler(self, handler: EventHandler) -> None:
        """Register a handler that receives every event it can handle."""
        self._global_handlers.append(handler)
        logger.info(f"Registered global handler {handler.__class__.__name__}")

    async def dispatch(self, event: DomainEvent) -> None:
        """Dispatch event to all registered handlers."""
        self._event_log.append(event.to_dict())
        del self._event_log[:-self._max_log_size]

        handlers = self._handlers.get(event.event_type, []) + [
            handler for handler in self._global_handlers
            if handler.can_handle(event)
        ]

        if not handlers:
            logger.debug(f"No handlers registered for event: {event.event_type}")
            return

        await asyncio.gather(*(self._safe_handle(handler, event) for handler in handlers))
        logger.debug(f"Dispatched {event.event_type} to {len(handlers)} handler(s)")

    async def _safe_handle(self, handler: EventHandler, event: DomainEvent) -> None:
        # one failing handler must not stop the others
        try:
            await handler.handle(event)
        except Exception as e:
            logger.error(
                f"Handler {handler.__class__.__name__} failed to process "
                f"{event.event_type}: {str(e)}"
            )

    def get_event_log(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Most recent events first."""
        events = list(reversed(self._event_log))
        return events[:limit] if limit else events

    def clear_event_log(self) -> None:
        self._event_log.clear()

    def clear_handlers(self) -> None:
        self._handlers.clear()
        self._global_handlers.clear()

    def get_registered_handlers(self) -> Dict[str, List[str]]:
        result = {
            event_type: [h.__class__.__name__ for h in handlers]
            for event_type, handlers in self._handlers.items()
        }
        if self._global_handlers:
            result["global"] = [h.__class__.__name__ for h in self._global_handlers]
        return result


_event_dispatcher = None


def get_event_dispatcher() -> EventDispatcher:
    """Get singleton event dispatcher instance."""
    global _event_dispatcher
    if _event_dispatcher is None:
        _event_dispatcher = EventDispatcher()
    return _event_dispatcher


async def publish_event(event: DomainEvent) -> None:
    """Publish a domain event."""
    await get_event_dispatcher().dispatch(event)
