"""
Observer-style dispatcher for analysis progress events.
Subscriptions map an event name to a list of callables.
"""
from threading import Lock
from typing import Any, Callable, Dict, List
import logging

logger = logging.getLogger(__name__)


class EventDispatcher:
    def __init__(self):
        self._listeners: Dict[str, List[Callable[..., None]]] = {}
        self._lock = Lock()

    def subscribe(self, event_name: str, callback: Callable[..., None]) -> Callable[[], None]:
        """Register `callback`; the returned function removes it again."""
        with self._lock:
            self._listeners.setdefault(event_name, []).append(callback)
        return lambda: self.unsubscribe(event_name, callback)

    def unsubscribe(self, event_name: str, callback: Callable[..., None]) -> None:
        with self._lock:
            callbacks = self._listeners.get(event_name, [])
            if callback in callbacks:
                callbacks.remove(callback)

    def dispatch(self, event_name: str, **payload: Any) -> None:
        with self._lock:
            listeners = list(self._listeners.get(event_name, []))
        for listener in listeners:
            try:
                listener(**payload)
            except Exception as exc:
                logger.warning("Listener for '%s' failed: %s", event_name, exc)
