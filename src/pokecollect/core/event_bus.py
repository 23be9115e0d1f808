"""
Event bus for session notifications.

Screens observe login, logout and session-state changes here without the
session service holding references to them.
"""
from threading import Lock
from typing import Any, Callable, Dict, Optional, Tuple

from pokecollect.utils.logger import logger

Handler = Callable[[Any], None]


class EventBus:
    """
    Thread-safe publish/subscribe registry keyed by event name.

    Handlers run synchronously on the publishing thread, which may be a
    background worker. Subscriber lists are replaced rather than mutated, so
    publishing never holds the lock while handlers run.
    """

    def __init__(self):
        self._handlers: Dict[str, Tuple[Handler, ...]] = {}
        self._lock = Lock()

    def subscribe(self, event_type: str, callback: Handler) -> Callable[[], None]:
        """
        Register ``callback`` for ``event_type``; registering twice is a no-op.

        Returns:
            A function that removes this subscription
        """
        with self._lock:
            current = self._handlers.get(event_type, ())
            if callback not in current:
                self._handlers[event_type] = current + (callback,)
                logger.debug(f"Subscribed to event: {event_type}")
        return lambda: self.unsubscribe(event_type, callback)

    def unsubscribe(self, event_type: str, callback: Handler) -> None:
        with self._lock:
            remaining = tuple(h for h in self._handlers.get(event_type, ()) if h != callback)
            if remaining:
                self._handlers[event_type] = remaining
            elif self._handlers.pop(event_type, None) is not None:
                logger.debug(f"No subscribers left for event: {event_type}")

    def publish(self, event_type: str, data: Any = None) -> None:
        """
        Deliver ``data`` to every handler of ``event_type``.

        A handler that raises is logged and skipped.
        """
        with self._lock:
            handlers = self._handlers.get(event_type, ())

        for callback in handlers:
            try:
                callback(data)
            except Exception as e:
                logger.error(f"Error in event handler for {event_type}: {e}")

    def clear_subscribers(self, event_type: Optional[str] = None) -> None:
        """Drop the handlers of one event type, or of all of them."""
        with self._lock:
            if event_type is None:
                self._handlers.clear()
            else:
                self._handlers.pop(event_type, None)

    def get_subscriber_count(self, event_type: str) -> int:
        with self._lock:
            return len(self._handlers.get(event_type, ()))


class EventTypes:
    """Event names published by the session service."""

    SESSION_STATE_CHANGED = "session.state.changed"   # data: SessionSnapshot
    LOGIN_SUCCESS = "auth.login.success"              # data: User or None
    LOGIN_FAILED = "auth.login.failed"                # data: error message
    LOGOUT = "auth.logout"
    SESSION_EXPIRED = "auth.session.expired"
