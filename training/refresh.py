from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, List

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RefreshEvent:
    reason: str
    # True when the underlying week changed (new data download) and planned
    # lineups from the previous window are obsolete.
    discard_planned_lineups: bool = False


RefreshListener = Callable[[RefreshEvent], None]


class RefreshBus:
    """Explicit refresh subscription point owned by the application.

    Derived caches subscribe here instead of registering themselves with any UI
    layer. Listener failures are logged and never stop the remaining listeners.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._listeners: List[RefreshListener] = []

    def subscribe(self, listener: RefreshListener) -> None:
        with self._lock:
            if listener not in self._listeners:
                self._listeners.append(listener)

    def unsubscribe(self, listener: RefreshListener) -> None:
        with self._lock:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass

    def notify(self, reason: str, *, discard_planned_lineups: bool = False) -> int:
        """Deliver one event to every listener. Returns the number that succeeded."""
        event = RefreshEvent(reason=str(reason), discard_planned_lineups=bool(discard_planned_lineups))
        with self._lock:
            listeners = list(self._listeners)

        ok = 0
        for listener in listeners:
            try:
                listener(event)
                ok += 1
            except Exception:
                logger.warning("REFRESH_LISTENER_FAILED reason=%s listener=%r", event.reason, listener, exc_info=True)
        return ok
