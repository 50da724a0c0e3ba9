"""
Auto-dismiss timers for live snackbars, one single-shot QTimer per message id.
"""

from __future__ import annotations

from typing import Dict, List

from PySide6.QtCore import QObject, QTimer, Signal

from noty import logger as app_logger
from noty.message import SnackbarMessage

_LOGGER = app_logger.get_logger()


class AutoDismissScheduler(QObject):
    """
    Emits ``expired(id)`` once a message's lifetime elapses.

    Scheduling an id that already has a timer replaces it. The consumer is
    expected to call ``controller.hide(id)``, which tolerates ids that were
    removed in the meantime.
    """

    expired = Signal(str)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._timers: Dict[str, QTimer] = {}

    def schedule(self, message: SnackbarMessage) -> bool:
        """Start (or restart) the timer for ``message``; return whether one is running."""
        self.cancel(message.id)
        duration = message.effective_duration
        if duration is None:
            return False

        timer = QTimer(self)
        timer.setSingleShot(True)
        timer.setInterval(max(0, int(duration.total_seconds() * 1000)))
        message_id = message.id
        timer.timeout.connect(lambda: self._on_timeout(message_id, timer))  # type: ignore[arg-type]
        self._timers[message_id] = timer
        timer.start()
        _LOGGER.debug("Auto-dismiss for snackbar {} in {} ms.", message_id, timer.interval())
        return True

    def cancel(self, message_id: str) -> None:
        timer = self._timers.pop(message_id, None)
        if timer is None:
            return
        timer.stop()
        timer.deleteLater()

    def cancel_all(self) -> None:
        for message_id in list(self._timers):
            self.cancel(message_id)

    def is_scheduled(self, message_id: str) -> bool:
        return message_id in self._timers

    @property
    def scheduled_ids(self) -> List[str]:
        return list(self._timers)

    def interval_ms(self, message_id: str) -> int | None:
        timer = self._timers.get(message_id)
        return timer.interval() if timer is not None else None

    def _on_timeout(self, message_id: str, timer: QTimer | None = None) -> None:
        current = self._timers.get(message_id)
        # A stopped or replaced timer must not dismiss the newer message.
        if current is None or (timer is not None and current is not timer):
            return
        del self._timers[message_id]
        current.deleteLater()
        self.expired.emit(message_id)
