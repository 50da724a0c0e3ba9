"""
Snackbar controller: owns the queue snapshot and applies the admission policy.
"""

from __future__ import annotations

import time
from threading import RLock
from typing import Callable, Collection, Iterable, List, Optional

from noty import logger as app_logger
from noty.listeners import ChangeNotifier, Listener
from noty.message import SnackbarMessage
from noty.settings import NotySettings
from noty.state import SnackbarState

_LOGGER = app_logger.get_logger()

Clock = Callable[[], float]


class SnackbarController:
    """
    Decides which messages are live, in which order, and which get evicted.

    Every mutating call runs under one lock, swaps in a fresh
    :class:`SnackbarState` and then notifies listeners synchronously. None of
    the operations raise: a call either changes state or is a silent no-op.
    """

    def __init__(self, settings: Optional[NotySettings] = None, *, clock: Clock = time.monotonic) -> None:
        self._settings = settings or NotySettings()
        self._clock = clock
        self._state = SnackbarState()
        self._lock = RLock()
        self._notifier = ChangeNotifier()

    def add_listener(self, listener: Listener) -> None:
        self._notifier.add_listener(listener)

    def remove_listener(self, listener: Listener) -> None:
        self._notifier.remove_listener(listener)

    @property
    def settings(self) -> NotySettings:
        return self._settings

    @property
    def state(self) -> SnackbarState:
        with self._lock:
            return self._state

    @property
    def messages(self) -> List[SnackbarMessage]:
        """Live messages in display order."""
        return self.state.sorted_messages()

    @property
    def count(self) -> int:
        return self.state.count

    @property
    def is_empty(self) -> bool:
        return self.state.is_empty

    @property
    def has_messages(self) -> bool:
        return not self.state.is_empty

    def show(self, message: SnackbarMessage) -> None:
        """Admit ``message`` unless the same id was admitted within the spam window."""
        with self._lock:
            now = self._clock()
            if self._is_spam(message.id, now):
                _LOGGER.debug("Suppressed repeat of snackbar {} inside spam window.", message.id)
                return
            admitted = self._apply_limits(message, replaced_ids={message.id})
            self._state = self._state.admitted(admitted, message.id, now)
            _LOGGER.debug("Admitted snackbar {} (priority={}).", message.id, message.priority.name)
        self._notifier.notify_listeners()

    def show_multiple(self, messages: Iterable[SnackbarMessage]) -> None:
        for message in messages:
            self.show(message)

    def hide(self, message_id: str) -> None:
        with self._lock:
            if not self._state.contains(message_id):
                return
            self._state = self._state.with_messages([m for m in self._state.messages if m.id != message_id])
        self._notifier.notify_listeners()

    def hide_group(self, group_id: str) -> None:
        with self._lock:
            remaining = [m for m in self._state.messages if m.group_id != group_id]
            if len(remaining) == self._state.count:
                return
            self._state = self._state.with_messages(remaining)
        self._notifier.notify_listeners()

    def update(self, message_id: str, new_message: SnackbarMessage) -> None:
        """
        Replace the live message ``message_id`` with ``new_message``.

        Never spam-suppressed. ``new_message.id`` may differ from
        ``message_id``; any live message holding either id is replaced.
        """
        with self._lock:
            now = self._clock()
            admitted = self._apply_limits(new_message, replaced_ids={message_id, new_message.id})
            self._state = self._state.admitted(admitted, new_message.id, now)
            _LOGGER.debug("Updated snackbar {} -> {}.", message_id, new_message.id)
        self._notifier.notify_listeners()

    def replace_group(self, group_id: str, messages: Iterable[SnackbarMessage]) -> None:
        self.hide_group(group_id)
        self.show_multiple(messages)

    def clear_all(self) -> None:
        """Drop every message and the spam-suppression history."""
        with self._lock:
            self._state = SnackbarState()
        self._notifier.notify_listeners()

    def clear_non_persistent(self) -> None:
        with self._lock:
            self._state = self._state.with_messages([m for m in self._state.messages if m.persistent])
        self._notifier.notify_listeners()

    def _is_spam(self, message_id: str, now: float) -> bool:
        last_shown = self._state.shown_at(message_id)
        if last_shown is None:
            return False
        return now - last_shown < self._settings.spam_window_seconds

    def _apply_limits(self, message: SnackbarMessage, *, replaced_ids: Collection[str]) -> List[SnackbarMessage]:
        """Return the admission-ordered list with ``message`` appended and at most one eviction per cap."""
        remaining = [m for m in self._state.messages if m.id not in replaced_ids]

        if message.group_id is not None:
            members = [m for m in remaining if m.group_id == message.group_id]
            if len(members) >= self._settings.max_per_group:
                oldest = members[0]
                remaining = [m for m in remaining if m.id != oldest.id]
                _LOGGER.debug("Group {} full; evicted oldest snackbar {}.", message.group_id, oldest.id)

        if len(remaining) >= self._settings.max_total_messages:
            # min() keeps the first of equal priorities, i.e. the earliest admitted.
            victim = min(remaining, key=lambda m: int(m.priority))
            remaining = [m for m in remaining if m.id != victim.id]
            _LOGGER.debug("Queue full; evicted snackbar {} (priority={}).", victim.id, victim.priority.name)

        remaining.append(message)
        return remaining
