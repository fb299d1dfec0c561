import logging
from collections import defaultdict
from typing import Callable, Dict, List


class EventEmitter:
    """Minimal synchronous publish/subscribe hub for connection events."""

    def __init__(self):
        self.log = logging.getLogger("EventEmitter")
        self._listeners: Dict[str, List[Callable[..., None]]] = defaultdict(list)

    def on(self, event: str, callback: Callable[..., None]) -> "EventEmitter":
        self._listeners[event].append(callback)
        return self

    def off(self, event: str, callback: Callable[..., None]) -> None:
        try:
            self._listeners[event].remove(callback)
        except ValueError:
            self.log.debug(f"off() called for unregistered '{event}' listener")

    def emit(self, event: str, *args) -> None:
        # Copy so listeners may unsubscribe themselves while being called
        for callback in list(self._listeners.get(event, ())):
            try:
                callback(*args)
            except Exception as e:
                self.log.error(f"Listener for '{event}' raised: {e}", exc_info=True)
