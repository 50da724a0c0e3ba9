"""
Countdown adapter: keeps one persistent message ticking down once per second.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from PySide6.QtCore import QTimer

from noty import logger as app_logger
from noty import message as messages
from noty.adapters.base import SnackbarAdapter
from noty.message import SnackbarMessage
from noty.types import SnackbarType

if TYPE_CHECKING:  # pragma: no cover
    from noty.controller import SnackbarController

_LOGGER = app_logger.get_logger()

COUNTDOWN_MESSAGE_ID = "countdown"


class CountdownSnackbarAdapter(SnackbarAdapter):
    def __init__(self, seconds: int = 5, *, adapter_id: str = "countdown_adapter", tick_ms: int = 1000) -> None:
        self.seconds = seconds
        self._adapter_id = adapter_id
        self._tick_ms = tick_ms
        self._remaining = seconds
        self._controller: Optional["SnackbarController"] = None
        self._timer: Optional[QTimer] = None

    @property
    def id(self) -> str:
        return self._adapter_id

    @property
    def remaining(self) -> int:
        return self._remaining

    def initialize(self, controller: "SnackbarController") -> None:
        self._controller = controller
        self._remaining = self.seconds
        self._timer = QTimer()
        self._timer.setInterval(self._tick_ms)
        self._timer.timeout.connect(self.tick)  # type: ignore[arg-type]
        self._timer.start()
        self.tick()

    def dispose(self) -> None:
        if self._timer is not None:
            self._timer.stop()
            self._timer.deleteLater()
            self._timer = None
        self._controller = None

    def tick(self) -> None:
        controller = self._controller
        if controller is None:
            return
        if self._remaining > 0:
            controller.update(COUNTDOWN_MESSAGE_ID, self._countdown_message(self._remaining))
            self._remaining -= 1
            return

        _LOGGER.debug("Countdown {} finished.", self._adapter_id)
        if self._timer is not None:
            self._timer.stop()
        controller.hide(COUNTDOWN_MESSAGE_ID)
        controller.show(messages.success("Time is up!"))

    @staticmethod
    def _countdown_message(remaining: int) -> SnackbarMessage:
        return SnackbarMessage(
            id=COUNTDOWN_MESSAGE_ID,
            message=f"Timer: {remaining} seconds",
            type=SnackbarType.INFO,
            persistent=True,
        )
