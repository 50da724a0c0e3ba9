"""
Connectivity adapter: polls reachability and reports losses and recoveries.
"""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING, Callable, Optional

from PySide6.QtCore import QTimer
from PySide6.QtNetwork import QTcpSocket

from noty import logger as app_logger
from noty.adapters.base import SnackbarAdapter
from noty.message import SnackbarMessage
from noty.settings import DEFAULT_NETWORK_POLL_SECONDS
from noty.types import SnackbarAction, SnackbarPriority, SnackbarType

if TYPE_CHECKING:  # pragma: no cover
    from noty.controller import SnackbarController

_LOGGER = app_logger.get_logger()

NETWORK_ADAPTER_ID = "network_adapter"
NETWORK_GROUP = "network"
CONNECTION_LOST_ID = "network_lost"
CONNECTION_RESTORED_ID = "network_restored"
SLOW_CONNECTION_ID = "network_slow"

DEFAULT_PROBE_HOST = "1.1.1.1"
DEFAULT_PROBE_PORT = 53
DEFAULT_PROBE_TIMEOUT = 3.0


def connection_lost(on_retry: Optional[Callable[[], None]] = None) -> SnackbarMessage:
    actions = (SnackbarAction(label="Retry", on_pressed=on_retry, text_color="#ffffff"),) if on_retry else ()
    return SnackbarMessage(
        id=CONNECTION_LOST_ID,
        message="Connection lost",
        type=SnackbarType.ERROR,
        duration=timedelta(seconds=5),
        priority=SnackbarPriority.CRITICAL,
        actions=actions,
        group_id=NETWORK_GROUP,
    )


def connection_restored() -> SnackbarMessage:
    return SnackbarMessage(
        id=CONNECTION_RESTORED_ID,
        message="Connection restored",
        type=SnackbarType.SUCCESS,
        duration=timedelta(seconds=2),
        priority=SnackbarPriority.NORMAL,
        group_id=NETWORK_GROUP,
    )


def slow_connection() -> SnackbarMessage:
    return SnackbarMessage(
        id=SLOW_CONNECTION_ID,
        message="Slow connection",
        type=SnackbarType.WARNING,
        duration=timedelta(seconds=3),
        priority=SnackbarPriority.NORMAL,
        group_id=NETWORK_GROUP,
    )
class NetworkSnackbarAdapter(SnackbarAdapter):
    """
    Periodically probes connectivity. Going offline shows a critical
    "connection lost" message with a retry action; coming back online
    withdraws it and shows a short confirmation.

    The default probe is a non-blocking ``QTcpSocket`` connect whose outcome
    arrives through the event loop, so polling never stalls the GUI thread.
    At most one probe is in flight.
    """

    def __init__(
        self,
        *,
        poll_interval_seconds: int = DEFAULT_NETWORK_POLL_SECONDS,
        probe_host: str = DEFAULT_PROBE_HOST,
        probe_port: int = DEFAULT_PROBE_PORT,
        probe_timeout: float = DEFAULT_PROBE_TIMEOUT,
    ) -> None:
        self.poll_interval_seconds = poll_interval_seconds
        self._probe_host = probe_host
        self._probe_port = probe_port
        self._probe_timeout = probe_timeout
        self._controller: Optional["SnackbarController"] = None
        self._timer: Optional[QTimer] = None
        self._probe_socket: Optional[QTcpSocket] = None
        self._probe_deadline: Optional[QTimer] = None
        self._online = True
        self._connectivity_provider: Optional[Callable[[], bool]] = None

    @property
    def id(self) -> str:
        return NETWORK_ADAPTER_ID

    @property
    def is_online(self) -> bool:
        return self._online

    @property
    def is_active(self) -> bool:
        return self._timer is not None and self._timer.isActive()

    @property
    def is_probing(self) -> bool:
        return self._probe_socket is not None

    def set_connectivity_provider(self, provider: Callable[[], bool]) -> None:
        """
        Override connectivity detection. Primarily used for testing.
        """
        self._connectivity_provider = provider

    def initialize(self, controller: "SnackbarController") -> None:
        self._controller = controller
        self._online = True
        self._timer = QTimer()
        self._timer.setInterval(max(1, self.poll_interval_seconds) * 1000)
        self._timer.timeout.connect(self.check_now)  # type: ignore[arg-type]
        self._timer.start()

    def dispose(self) -> None:
        if self._timer is not None:
            self._timer.stop()
            self._timer.deleteLater()
            self._timer = None
        self._cancel_probe()
        self._controller = None

    def check_now(self) -> None:
        if self._controller is None:
            return

        if self._connectivity_provider is not None:
            try:
                online = bool(self._connectivity_provider())
            except OSError as exc:
                _LOGGER.warning("Connectivity probe failed: {}", exc)
                return
            self._report(online)
            return

        if self._probe_socket is not None:
            return
        self._start_probe()

    def _start_probe(self) -> None:
        probe = QTcpSocket()
        deadline = QTimer()
        deadline.setSingleShot(True)
        deadline.setInterval(max(1, int(self._probe_timeout * 1000)))
        probe.connected.connect(lambda: self._finish_probe(probe, True))  # type: ignore[arg-type]
        probe.errorOccurred.connect(lambda _error: self._finish_probe(probe, False))  # type: ignore[arg-type]
        deadline.timeout.connect(lambda: self._finish_probe(probe, False))  # type: ignore[arg-type]
        self._probe_socket = probe
        self._probe_deadline = deadline
        deadline.start()
        probe.connectToHost(self._probe_host, self._probe_port)

    def _finish_probe(self, probe: QTcpSocket, online: bool) -> None:
        # Late signals from an aborted or superseded socket are ignored.
        if probe is not self._probe_socket:
            return
        self._cancel_probe()
        self._report(online)

    def _cancel_probe(self) -> None:
        probe, deadline = self._probe_socket, self._probe_deadline
        self._probe_socket = None
        self._probe_deadline = None
        if deadline is not None:
            deadline.stop()
            deadline.deleteLater()
        if probe is not None:
            probe.abort()
            probe.deleteLater()

    def _report(self, online: bool) -> None:
        controller = self._controller
        if controller is None:
            return
        was_online = self._online
        self._online = online
        if not online:
            if was_online:
                _LOGGER.info("Network connection lost.")
            controller.show(connection_lost(self.check_now))
        elif not was_online:
            _LOGGER.info("Network connection restored.")
            controller.hide(CONNECTION_LOST_ID)
            controller.show(connection_restored())
