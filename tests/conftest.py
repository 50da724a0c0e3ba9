"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import os
import tempfile
from collections.abc import Iterator
from typing import Optional

import pytest

# Keep log files out of the user's home directory during the test run.
os.environ.setdefault("NOTY_LOG_DIR", tempfile.mkdtemp(prefix="noty-logs-"))
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from noty.controller import SnackbarController  # noqa: E402
from noty.message import SnackbarMessage  # noqa: E402
from noty.types import SnackbarPriority, SnackbarType  # noqa: E402


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ListenerRecorder:
    """Counts parameterless change notifications."""

    def __init__(self) -> None:
        self.calls = 0

    def __call__(self) -> None:
        self.calls += 1


def make_message(
    message_id: str,
    *,
    priority: SnackbarPriority = SnackbarPriority.NORMAL,
    group_id: Optional[str] = None,
    persistent: bool = False,
    type: SnackbarType = SnackbarType.INFO,
    text: Optional[str] = None,
) -> SnackbarMessage:
    return SnackbarMessage(
        id=message_id,
        message=text or f"message {message_id}",
        type=type,
        priority=priority,
        group_id=group_id,
        persistent=persistent,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def controller(clock: FakeClock) -> SnackbarController:
    return SnackbarController(clock=clock)


@pytest.fixture
def recorder(controller: SnackbarController) -> Iterator[ListenerRecorder]:
    listener = ListenerRecorder()
    controller.add_listener(listener)
    yield listener
    controller.remove_listener(listener)


@pytest.fixture(scope="session")
def qapp():
    """One offscreen QApplication shared by timer, socket and widget tests."""
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app
