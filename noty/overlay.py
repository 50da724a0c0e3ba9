"""
Overlay coordinator: renders the controller's queue as a stack of popups.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from PySide6.QtCore import QObject, QPoint, QRect, Signal
from PySide6.QtWidgets import QApplication, QWidget

from noty import logger as app_logger
from noty.adapters.base import AdapterHost, SnackbarAdapter
from noty.controller import SnackbarController
from noty.message import SnackbarMessage
from noty.popup import SnackbarPopup
from noty.render import AnimationConfig, RenderPlan, build_render_plan, diff_plan
from noty.scheduler import AutoDismissScheduler
from noty.settings import NotySettings, SettingsManager
from noty.types import Insets

_LOGGER = app_logger.get_logger()


class SnackbarOverlay(QObject):
    """
    Display side of the snackbar queue.

    Listens to the controller, lays the ordered messages out with
    :func:`build_render_plan`, keeps one popup and one auto-dismiss timer per
    visible message, and reports timer expiry and user dismissal back through
    ``controller.hide``. Source adapters are initialized against the same
    controller and disposed with the overlay.
    """

    # Re-emitted controller notifications; queued across threads by Qt.
    stateChanged = Signal()

    def __init__(
        self,
        controller: Optional[SnackbarController] = None,
        adapters: Iterable[SnackbarAdapter] = (),
        *,
        settings: Optional[NotySettings] = None,
        host: Optional[QWidget] = None,
        animation: Optional[AnimationConfig] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        if settings is None:
            settings = controller.settings if controller is not None else SettingsManager().read_settings()
        self._settings = settings
        self._controller = controller or SnackbarController(settings)
        self._host = host
        self._animation = animation or AnimationConfig()
        self._popups: Dict[str, SnackbarPopup] = {}
        self._shown: Dict[str, SnackbarMessage] = {}
        self._disposed = False

        self._scheduler = AutoDismissScheduler(self)
        self._scheduler.expired.connect(self._on_expired)

        self.stateChanged.connect(self.refresh)
        self._controller.add_listener(self._on_controller_changed)

        self._adapter_host = AdapterHost(self._controller)
        self._adapter_host.initialize_all(adapters)

    @property
    def controller(self) -> SnackbarController:
        return self._controller

    @property
    def scheduler(self) -> AutoDismissScheduler:
        return self._scheduler

    @property
    def adapters(self) -> List[SnackbarAdapter]:
        return self._adapter_host.adapters

    @property
    def visible_ids(self) -> List[str]:
        return list(self._popups)

    def set_adapters(self, adapters: Iterable[SnackbarAdapter]) -> None:
        if self._adapter_host.sync(adapters):
            _LOGGER.info("Snackbar adapters changed; re-initialized {}.", [a.id for a in self.adapters])

    def current_plan(self) -> RenderPlan:
        return build_render_plan(
            self._controller.messages,
            self._settings.alignment,
            max_visible=self._settings.max_visible_messages,
            padding=Insets.all(self._settings.padding),
            config=self._animation,
        )

    def refresh(self) -> None:
        if self._disposed:
            return
        plan = self.current_plan()
        diff = diff_plan(self._shown, plan)

        for message_id in diff.removed:
            self._remove_popup(message_id)

        geometry = self._geometry()
        for entry in plan.entries:
            message_id = entry.message_id
            popup = self._popups.get(message_id)
            if popup is not None and popup.is_closing:
                # Its exit animation ends in dismissRequested, which hides the id.
                continue

            animate_in = popup is None
            if popup is None:
                popup = SnackbarPopup()
                popup.dismissRequested.connect(self._on_dismiss_requested)
                self._popups[message_id] = popup

            if animate_in or message_id in diff.replaced:
                self._shown[message_id] = entry.message
                self._scheduler.schedule(entry.message)
            popup.apply_entry(entry, geometry, self._animation, animate_in=animate_in)

    def dispose(self) -> None:
        """Tear down adapters, timers and popups and stop listening."""
        if self._disposed:
            return
        self._disposed = True
        self._controller.remove_listener(self._on_controller_changed)
        self._adapter_host.dispose_all()
        self._scheduler.cancel_all()
        for message_id in list(self._popups):
            self._remove_popup(message_id)
        _LOGGER.debug("Snackbar overlay disposed.")

    def _on_controller_changed(self) -> None:
        self.stateChanged.emit()

    def _on_expired(self, message_id: str) -> None:
        _LOGGER.debug("Snackbar {} expired.", message_id)
        self._controller.hide(message_id)

    def _on_dismiss_requested(self, message_id: str) -> None:
        _LOGGER.debug("Snackbar {} dismissed by user.", message_id)
        self._controller.hide(message_id)

    def _remove_popup(self, message_id: str) -> None:
        self._scheduler.cancel(message_id)
        self._shown.pop(message_id, None)
        popup = self._popups.pop(message_id, None)
        if popup is not None:
            popup.discard()

    def _geometry(self) -> QRect:
        if self._host is not None:
            return QRect(self._host.mapToGlobal(QPoint(0, 0)), self._host.size())
        screen = QApplication.primaryScreen()
        if screen is None:
            return QRect()
        return screen.availableGeometry()
