"""
Typed publish/subscribe for localization change notifications.

Every event kind has a fixed payload type. Listeners are called
synchronously, in registration order, by the code that publishes the event.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar

from .utils.core.exceptions import UnknownEventError

if TYPE_CHECKING:
    from .locales.locale import Locale

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LocaleChanged:
    """The selected locale of a namespace changed."""

    namespace: str
    previous: Locale | None
    current: Locale


@dataclass(frozen=True)
class ClientFolderChanged:
    """The output folder of the client libraries changed."""

    folder: str


@dataclass(frozen=True)
class CacheKeyChanged:
    """The cache-busting key of the client libraries changed."""

    cache_key: str


Event = LocaleChanged | ClientFolderChanged | CacheKeyChanged

EVENT_TYPES: tuple[type[Event], ...] = (LocaleChanged, ClientFolderChanged, CacheKeyChanged)

E = TypeVar("E", LocaleChanged, ClientFolderChanged, CacheKeyChanged)


class EventBus:
    """Listener registry for the localization events."""

    def __init__(self) -> None:
        self._listeners: dict[type[Event], dict[int, Callable[[Event], None]]] = {
            event_type: {} for event_type in EVENT_TYPES
        }
        self._ids: itertools.count[int] = itertools.count(1)

    def subscribe(self, event_type: type[E], callback: Callable[[E], None]) -> int:
        """
        Register a listener for an event type.

        Args:
            event_type: One of the event classes
            callback: Called with the event instance

        Returns:
            Listener ID usable with unsubscribe()

        Raises:
            UnknownEventError: If the event type is not a localization event
        """
        listeners = self._listeners.get(event_type)
        if listeners is None:
            raise UnknownEventError(
                f"Unknown event type '{getattr(event_type, '__name__', event_type)}'.",
                details=f"Known events: {', '.join(t.__name__ for t in EVENT_TYPES)}",
            )

        listener_id = next(self._ids)
        listeners[listener_id] = callback  # pyright: ignore[reportArgumentType]
        logger.debug(f"Listener {listener_id} subscribed to {event_type.__name__}")
        return listener_id

    def unsubscribe(self, listener_id: int) -> bool:
        """
        Remove a listener.

        Returns:
            True if the listener was registered
        """
        for listeners in self._listeners.values():
            if listeners.pop(listener_id, None) is not None:
                return True
        return False

    def publish(self, event: Event) -> None:
        """Deliver an event to its listeners in registration order."""
        listeners = list(self._listeners[type(event)].values())
        logger.debug(f"Publishing {type(event).__name__} to {len(listeners)} listeners")
        for callback in listeners:
            callback(event)

    def listener_count(self, event_type: type[Event]) -> int:
        return len(self._listeners.get(event_type, {}))

    def clear(self) -> None:
        for listeners in self._listeners.values():
            listeners.clear()
