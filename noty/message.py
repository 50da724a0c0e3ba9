"""
Message entity handed to the snackbar controller, plus factory helpers.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import timedelta
from typing import TYPE_CHECKING, Any, Iterable, Optional, Tuple

from noty.types import SnackbarAction, SnackbarPriority, SnackbarType

if TYPE_CHECKING:  # pragma: no cover
    from noty.controller import SnackbarController

_DEFAULT_DURATIONS = {
    SnackbarType.INFO: timedelta(seconds=2),
    SnackbarType.SUCCESS: timedelta(seconds=2),
    SnackbarType.WARNING: timedelta(seconds=3),
    SnackbarType.ERROR: timedelta(seconds=4),
    SnackbarType.LOADING: None,
}


def default_duration(snackbar_type: SnackbarType) -> Optional[timedelta]:
    """Return the auto-dismiss delay used when a message does not set one."""
    return _DEFAULT_DURATIONS[snackbar_type]


@dataclass(frozen=True, slots=True)
class SnackbarMessage:
    """
    Immutable description of one notification.

    ``id`` is the identity used for replacement and targeted removal;
    ``group_id`` clusters related messages for bulk hiding and the
    per-group cap.
    """

    id: str
    message: str
    type: SnackbarType
    duration: Optional[timedelta] = None
    priority: SnackbarPriority = SnackbarPriority.NORMAL
    persistent: bool = False
    actions: Tuple[SnackbarAction, ...] = field(default=())
    group_id: Optional[str] = None
    icon: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.actions, tuple):
            object.__setattr__(self, "actions", tuple(self.actions or ()))

    @property
    def effective_duration(self) -> Optional[timedelta]:
        """Delay before automatic dismissal, or None when the message stays."""
        if self.persistent or self.type is SnackbarType.LOADING:
            return None
        return self.duration if self.duration is not None else default_duration(self.type)

    @property
    def has_actions(self) -> bool:
        return bool(self.actions)

    @property
    def dismiss_on_tap(self) -> bool:
        return not self.actions

    def with_changes(self, **changes: Any) -> "SnackbarMessage":
        return replace(self, **changes)


def _generate_id(snackbar_type: SnackbarType) -> str:
    return f"{snackbar_type.value}_{uuid.uuid4().hex[:12]}"


def info(
    text: str,
    *,
    id: Optional[str] = None,
    duration: Optional[timedelta] = None,
    priority: SnackbarPriority = SnackbarPriority.NORMAL,
    actions: Iterable[SnackbarAction] = (),
    group_id: Optional[str] = None,
) -> SnackbarMessage:
    return SnackbarMessage(
        id=id or _generate_id(SnackbarType.INFO),
        message=text,
        type=SnackbarType.INFO,
        duration=duration,
        priority=priority,
        actions=tuple(actions),
        group_id=group_id,
    )


def success(
    text: str,
    *,
    id: Optional[str] = None,
    duration: timedelta = timedelta(seconds=2),
    group_id: Optional[str] = None,
) -> SnackbarMessage:
    return SnackbarMessage(
        id=id or _generate_id(SnackbarType.SUCCESS),
        message=text,
        type=SnackbarType.SUCCESS,
        duration=duration,
        group_id=group_id,
    )


def warning(
    text: str,
    *,
    id: Optional[str] = None,
    duration: timedelta = timedelta(seconds=3),
    actions: Iterable[SnackbarAction] = (),
    group_id: Optional[str] = None,
) -> SnackbarMessage:
    return SnackbarMessage(
        id=id or _generate_id(SnackbarType.WARNING),
        message=text,
        type=SnackbarType.WARNING,
        duration=duration,
        actions=tuple(actions),
        group_id=group_id,
    )


def error(
    text: str,
    *,
    id: Optional[str] = None,
    duration: timedelta = timedelta(seconds=4),
    actions: Iterable[SnackbarAction] = (),
    group_id: Optional[str] = None,
) -> SnackbarMessage:
    return SnackbarMessage(
        id=id or _generate_id(SnackbarType.ERROR),
        message=text,
        type=SnackbarType.ERROR,
        duration=duration,
        priority=SnackbarPriority.HIGH,
        actions=tuple(actions),
        group_id=group_id,
    )


def loading(text: str, *, custom_id: Optional[str] = None, group_id: Optional[str] = None) -> SnackbarMessage:
    """Persistent spinner message; hide it explicitly once the work finishes."""
    return SnackbarMessage(
        id=custom_id or _generate_id(SnackbarType.LOADING),
        message=text,
        type=SnackbarType.LOADING,
        persistent=True,
        group_id=group_id,
    )


class SnackbarMixin:
    """Shortcuts for classes that push messages into a controller."""

    def show_info(self, controller: "SnackbarController", text: str, **kwargs: Any) -> None:
        controller.show(info(text, **kwargs))

    def show_success(self, controller: "SnackbarController", text: str, **kwargs: Any) -> None:
        controller.show(success(text, **kwargs))

    def show_warning(self, controller: "SnackbarController", text: str, **kwargs: Any) -> None:
        controller.show(warning(text, **kwargs))

    def show_error(self, controller: "SnackbarController", text: str, **kwargs: Any) -> None:
        controller.show(error(text, **kwargs))

    def show_loading(self, controller: "SnackbarController", text: str, *, id: str = "loading") -> None:
        controller.show(loading(text, custom_id=id))

    def hide_loading(self, controller: "SnackbarController", *, id: str = "loading") -> None:
        controller.hide(id)

    def clear_all_snackbars(self, controller: "SnackbarController") -> None:
        controller.clear_all()
