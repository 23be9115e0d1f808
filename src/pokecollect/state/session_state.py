"""
Session state: logged-in flag, loading flag, error message, current user.

Owned by the session service, which is the only writer. Readers take
immutable snapshots or subscribe to SESSION_STATE_CHANGED on the event bus.
"""
from dataclasses import dataclass, replace
from threading import Lock
from typing import Optional

from pokecollect.core.event_bus import EventBus, EventTypes
from pokecollect.models.auth import User
from pokecollect.utils.logger import logger


@dataclass(frozen=True)
class SessionSnapshot:
    is_logged_in: bool = False
    is_loading: bool = False
    error_message: Optional[str] = None
    current_user: Optional[User] = None


class SessionState:
    """
    Thread-safe session state.

    Every change is broadcast with the new snapshot as event data.
    """

    def __init__(self, event_bus: EventBus):
        self._event_bus = event_bus
        self._snapshot = SessionSnapshot()
        self._lock = Lock()

    def snapshot(self) -> SessionSnapshot:
        with self._lock:
            return self._snapshot

    def update(self, **changes) -> SessionSnapshot:
        with self._lock:
            previous = self._snapshot
            self._snapshot = replace(previous, **changes)
            current = self._snapshot

        if current != previous:
            logger.debug(f"Session state: logged_in={current.is_logged_in}, "
                         f"loading={current.is_loading}, error={current.error_message!r}")
            self._event_bus.publish(EventTypes.SESSION_STATE_CHANGED, current)
        return current

    @property
    def is_logged_in(self) -> bool:
        return self.snapshot().is_logged_in
