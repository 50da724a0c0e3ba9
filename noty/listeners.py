"""
Explicit observer list used by the controller to announce state changes.
"""

from __future__ import annotations

from threading import RLock
from typing import Callable, List

from noty import logger as app_logger

_LOGGER = app_logger.get_logger()

Listener = Callable[[], None]


class ChangeNotifier:
    """
    Parameterless "changed" channel.

    Listeners are called synchronously on the notifying thread and are
    expected to pull whatever state they need. A failing listener is logged
    and skipped so the remaining listeners still run.
    """

    def __init__(self) -> None:
        self._listeners: List[Listener] = []
        self._lock = RLock()

    def add_listener(self, listener: Listener) -> None:
        with self._lock:
            if listener not in self._listeners:
                self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    @property
    def has_listeners(self) -> bool:
        with self._lock:
            return bool(self._listeners)

    def notify_listeners(self) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener()
            except Exception:
                _LOGGER.exception("Snackbar listener {} raised during notification", listener)

    def dispose(self) -> None:
        with self._lock:
            self._listeners.clear()
