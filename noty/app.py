"""
Demo window exercising the snackbar overlay.
"""

from __future__ import annotations

from datetime import timedelta

from PySide6.QtWidgets import QGridLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from noty import logger as app_logger
from noty import message as messages
from noty.adapters import CountdownSnackbarAdapter, sets
from noty.controller import SnackbarController
from noty.message import SnackbarMessage
from noty.overlay import SnackbarOverlay
from noty.settings import SettingsManager
from noty.types import SnackbarAction, SnackbarPriority, SnackbarType

APP_NAME = "Noty Demo"
APP_VERSION = "1.0.0"
LOADING_ID = "demo_loading"


class DemoWindow(QWidget, messages.SnackbarMixin):
    def __init__(self) -> None:
        super().__init__()
        self._logger = app_logger.get_logger()
        self.setWindowTitle(f"{APP_NAME} v{APP_VERSION}")
        self.resize(720, 480)

        settings = SettingsManager().read_settings()
        self.controller = SnackbarController(settings)
        self.overlay = SnackbarOverlay(
            self.controller,
            sets.basic() + [CountdownSnackbarAdapter(seconds=5)],
            settings=settings,
            host=self,
            parent=self,
        )
        self._burst = 0

        buttons = [
            ("Info", lambda: self.show_info(self.controller, "Heads up: this is an info message")),
            ("Success", lambda: self.show_success(self.controller, "Saved successfully")),
            ("Warning", lambda: self.show_warning(self.controller, "Disk space is running low")),
            ("Error", self._show_error),
            ("Critical", self._show_critical),
            ("Start loading", lambda: self.show_loading(self.controller, "Loading data...", id=LOADING_ID)),
            ("Stop loading", lambda: self.hide_loading(self.controller, id=LOADING_ID)),
            ("Group burst", self._show_group_burst),
            ("Hide group", lambda: self.controller.hide_group("burst")),
            ("Clear transient", self.controller.clear_non_persistent),
            ("Clear all", lambda: self.clear_all_snackbars(self.controller)),
        ]

        grid = QGridLayout()
        for index, (label, handler) in enumerate(buttons):
            button = QPushButton(label)
            button.clicked.connect(handler)  # type: ignore[arg-type]
            grid.addWidget(button, index // 3, index % 3)

        layout = QVBoxLayout(self)
        layout.addWidget(QLabel("Click the buttons to push snackbars into the queue."))
        layout.addLayout(grid)
        layout.addStretch()

    def _show_error(self) -> None:
        retry = SnackbarAction(label="Retry", on_pressed=lambda: self._logger.info("Retry pressed in demo."))
        self.show_error(self.controller, "Upload failed", actions=[retry])

    def _show_critical(self) -> None:
        self.controller.show(
            SnackbarMessage(
                id="demo_critical",
                message="Critical: session about to expire",
                type=SnackbarType.ERROR,
                priority=SnackbarPriority.CRITICAL,
                persistent=True,
            )
        )

    def _show_group_burst(self) -> None:
        for _ in range(4):
            self._burst += 1
            self.controller.show(
                messages.info(
                    f"Notification #{self._burst}",
                    id=f"burst_{self._burst}",
                    group_id="burst",
                    duration=timedelta(seconds=6),
                )
            )

    def closeEvent(self, event) -> None:  # noqa: N802
        self._logger.info("Closing demo window.")
        self.overlay.dispose()
        super().closeEvent(event)
