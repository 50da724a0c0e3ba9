"""
Snackbar card window: one rendered message with icon, text and action buttons.
"""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QEasingCurve, QParallelAnimationGroup, QPoint, QPropertyAnimation, QRect, Qt, Signal
from PySide6.QtGui import QColor, QMouseEvent
from PySide6.QtWidgets import (
    QGraphicsDropShadowEffect,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSizePolicy,
    QStyle,
    QToolButton,
    QVBoxLayout,
    QWidget,
)

from noty import logger as app_logger
from noty.message import SnackbarMessage
from noty.render import AnimationConfig, RenderEntry
from noty.types import SnackbarAction

_LOGGER = app_logger.get_logger()

BASE_WIDTH = 300
MIN_WIDTH = 200
ICON_SIZE = 16

_ICON_PRESETS = {
    "info": QStyle.StandardPixmap.SP_MessageBoxInformation,
    "success": QStyle.StandardPixmap.SP_DialogApplyButton,
    "warning": QStyle.StandardPixmap.SP_MessageBoxWarning,
    "error": QStyle.StandardPixmap.SP_MessageBoxCritical,
    "loading": QStyle.StandardPixmap.SP_BrowserReload,
}


def _easing(name: str) -> QEasingCurve.Type:
    return getattr(QEasingCurve.Type, name, QEasingCurve.Type.InOutQuad)


class SnackbarPopup(QWidget):
    """
    Frameless card positioned by a :class:`RenderEntry`.

    The popup never touches the controller; it asks for removal through
    ``dismissRequested`` once its exit animation has finished.
    """

    dismissRequested = Signal(str)

    def __init__(self, parent: QWidget | None = None) -> None:
        flags = Qt.WindowType.Tool | Qt.WindowType.FramelessWindowHint | Qt.WindowType.WindowStaysOnTopHint
        super().__init__(parent)
        self.setWindowFlags(flags)
        self.setObjectName("SnackbarPopup")
        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground, True)
        self.setAttribute(Qt.WidgetAttribute.WA_ShowWithoutActivating, True)

        self._container = QWidget(self)
        self._container.setObjectName("SnackbarCard")
        self._shadow = QGraphicsDropShadowEffect(self._container)
        self._shadow.setColor(QColor(0, 0, 0, 140))
        self._shadow.setOffset(0, 4)
        self._container.setGraphicsEffect(self._shadow)

        self._message: SnackbarMessage | None = None
        self._entry: RenderEntry | None = None
        self._config = AnimationConfig()
        self._closing = False

        self._icon_label = QLabel()
        self._icon_label.setFixedSize(ICON_SIZE, ICON_SIZE)
        self._icon_label.setSizePolicy(QSizePolicy.Policy.Fixed, QSizePolicy.Policy.Fixed)

        self._text_label = QLabel()
        self._text_label.setObjectName("SnackbarText")
        self._text_label.setWordWrap(True)

        self._close_button = QToolButton()
        self._close_button.setObjectName("SnackbarClose")
        self._close_button.setText("✕")
        self._close_button.setCursor(Qt.CursorShape.PointingHandCursor)
        self._close_button.setAutoRaise(True)
        self._close_button.clicked.connect(self.dismiss)  # type: ignore[arg-type]

        top_row = QHBoxLayout()
        top_row.setSpacing(8)
        top_row.addWidget(self._icon_label)
        top_row.addWidget(self._text_label, 1)
        top_row.addWidget(self._close_button)

        self._actions_row = QWidget()
        self._actions_layout = QHBoxLayout(self._actions_row)
        self._actions_layout.setContentsMargins(0, 8, 0, 0)
        self._actions_layout.setSpacing(8)

        card_layout = QVBoxLayout(self._container)
        card_layout.setContentsMargins(16, 12, 16, 12)
        card_layout.setSpacing(0)
        card_layout.addLayout(top_row)
        card_layout.addWidget(self._actions_row)

        base_layout = QHBoxLayout(self)
        base_layout.setContentsMargins(0, 0, 0, 0)
        base_layout.addWidget(self._container)
        self.setMinimumWidth(MIN_WIDTH)

        self._pos_animation = QPropertyAnimation(self, b"pos", self)
        self._opacity_animation = QPropertyAnimation(self, b"windowOpacity", self)
        self._animations = QParallelAnimationGroup(self)
        self._animations.addAnimation(self._pos_animation)
        self._animations.addAnimation(self._opacity_animation)

    @property
    def message_id(self) -> Optional[str]:
        return self._message.id if self._message is not None else None

    @property
    def is_closing(self) -> bool:
        return self._closing

    def apply_entry(self, entry: RenderEntry, geometry: QRect, config: AnimationConfig, *, animate_in: bool) -> None:
        """Populate from ``entry`` and animate toward its slot in ``geometry``."""
        if entry.message is not self._message:
            self._populate(entry.message)
        self._entry = entry
        self._config = config
        self._apply_style(entry)

        self.setFixedWidth(max(MIN_WIDTH, int(BASE_WIDTH * entry.scale)))
        self.adjustSize()
        self._shadow.setBlurRadius(entry.elevation * 3)
        target = self._target_position(entry, geometry)

        if animate_in:
            start = target + QPoint(int(entry.slide_from * (self.width() + 32)), 0)
            self.move(start)
            self.setWindowOpacity(config.entry_opacity)
            self.show()
            self._animate(start, target, config.entry_opacity, entry.opacity, config)
        else:
            self._animate(self.pos(), target, self.windowOpacity(), entry.opacity, config)

    def dismiss(self) -> None:
        """Play the exit animation, then request removal."""
        if self._closing or self._entry is None or self._message is None:
            return
        self._closing = True
        config = self._config
        end = self.pos() + QPoint(int(self._entry.slide_from * (self.width() + 32)), 0)
        self._animations.finished.connect(self._on_exit_finished)  # type: ignore[arg-type]
        self._animate(self.pos(), end, self.windowOpacity(), 0.0, config)

    def discard(self) -> None:
        """Close immediately, without animation or signals."""
        self._animations.stop()
        self.hide()
        self.deleteLater()

    def _animate(self, start: QPoint, end: QPoint, start_opacity: float, end_opacity: float, config: AnimationConfig) -> None:
        self._animations.stop()
        easing = _easing(config.easing)
        for animation in (self._pos_animation, self._opacity_animation):
            animation.setDuration(config.duration_ms)
            animation.setEasingCurve(easing)
        self._pos_animation.setStartValue(start)
        self._pos_animation.setEndValue(end)
        self._opacity_animation.setStartValue(start_opacity)
        self._opacity_animation.setEndValue(end_opacity)
        self._animations.start()

    def _on_exit_finished(self) -> None:
        if self._message is not None:
            self.dismissRequested.emit(self._message.id)

    def _populate(self, message: SnackbarMessage) -> None:
        self._message = message
        self._text_label.setText(message.message)
        self._close_button.setVisible(message.persistent)
        self.setCursor(
            Qt.CursorShape.PointingHandCursor if message.dismiss_on_tap else Qt.CursorShape.ArrowCursor
        )

        while self._actions_layout.count():
            item = self._actions_layout.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()
        self._actions_layout.addStretch()
        for action in message.actions:
            self._actions_layout.addWidget(self._create_action_button(action))
        self._actions_row.setVisible(message.has_actions)

    def _apply_style(self, entry: RenderEntry) -> None:
        pixmap_kind = _ICON_PRESETS.get(entry.icon, QStyle.StandardPixmap.SP_MessageBoxInformation)
        self._icon_label.setPixmap(self.style().standardIcon(pixmap_kind).pixmap(ICON_SIZE, ICON_SIZE))

        border = "border: 2px solid white;" if entry.emphasised else "border: none;"
        font_size = 15 if entry.emphasised else 14
        font_weight = 600 if entry.emphasised else 500
        self.setStyleSheet(
            f"""
            QWidget#SnackbarCard {{
                background-color: {entry.background};
                border-radius: 8px;
                {border}
            }}
            QWidget#SnackbarCard QLabel#SnackbarText {{
                color: white;
                font-size: {font_size}px;
                font-weight: {font_weight};
            }}
            QWidget#SnackbarCard QToolButton#SnackbarClose {{
                color: rgba(255, 255, 255, 0.70);
                border: none;
            }}
            """
        )

    def _create_action_button(self, action: SnackbarAction) -> QPushButton:
        button = QPushButton(action.label)
        button.setCursor(Qt.CursorShape.PointingHandCursor)
        color = action.text_color or "white"
        button.setStyleSheet(
            f"""
            QPushButton {{
                color: {color};
                background: transparent;
                border: none;
                padding: 4px 12px;
                font-size: 12px;
                font-weight: 500;
            }}
            QPushButton:hover {{
                background-color: rgba(255, 255, 255, 0.15);
                border-radius: 4px;
            }}
            """
        )
        button.clicked.connect(lambda: self._on_action(action))  # type: ignore[arg-type]
        return button

    def _on_action(self, action: SnackbarAction) -> None:
        try:
            action.trigger()
        except Exception:
            _LOGGER.exception("Snackbar action {!r} failed.", action.label)
        if self._message is not None and not self._message.persistent:
            self.dismiss()

    def _target_position(self, entry: RenderEntry, geometry: QRect) -> QPoint:
        if entry.top is not None:
            y = geometry.top() + int(entry.top)
        else:
            y = geometry.bottom() - self.height() - int(entry.bottom or 0)
        if entry.left is not None:
            x = geometry.left() + int(entry.left)
        else:
            x = geometry.right() - self.width() - int(entry.right or 0)
        return QPoint(x, y)

    def mousePressEvent(self, event: QMouseEvent) -> None:  # noqa: N802
        super().mousePressEvent(event)
        if event.button() == Qt.MouseButton.LeftButton and self._message is not None and self._message.dismiss_on_tap:
            self.dismiss()
