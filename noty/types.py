"""
Closed enumerations and small value types shared by the queue and the display layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Callable, Optional


class SnackbarType(Enum):
    """Severity of a message; drives default lifetime and iconography."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    LOADING = "loading"


class SnackbarPriority(IntEnum):
    """Display importance. Higher values sort first and are evicted last."""

    LOW = 0
    NORMAL = 1
    HIGH = 2
    CRITICAL = 3


class StackAlignment(Enum):
    TOP_LEFT = "top_left"
    TOP_RIGHT = "top_right"
    BOTTOM_LEFT = "bottom_left"
    BOTTOM_RIGHT = "bottom_right"

    @property
    def is_top(self) -> bool:
        return self in (StackAlignment.TOP_LEFT, StackAlignment.TOP_RIGHT)

    @property
    def is_left(self) -> bool:
        return self in (StackAlignment.TOP_LEFT, StackAlignment.BOTTOM_LEFT)


@dataclass(frozen=True)
class SnackbarAction:
    """Interactive button attached to a message."""

    label: str
    on_pressed: Callable[[], None]
    text_color: Optional[str] = None

    def trigger(self) -> None:
        self.on_pressed()


@dataclass(frozen=True)
class Insets:
    left: float = 0.0
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0

    @classmethod
    def all(cls, value: float) -> "Insets":
        return cls(value, value, value, value)
