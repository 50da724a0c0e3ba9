"""
Immutable queue snapshot and the ordering rules derived from it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from noty.message import SnackbarMessage


def sort_key(message: SnackbarMessage, position: int) -> Tuple[int, int]:
    """Key placing higher priority first, then later admissions first."""
    return (-int(message.priority), -position)


def compare_messages(
    a: SnackbarMessage, b: SnackbarMessage, order: Sequence[SnackbarMessage]
) -> int:
    """
    Total order over live messages: priority descending, then recency descending.

    ``order`` is the admission-ordered collection both messages belong to.
    Returns a negative number when ``a`` sorts before ``b``.
    """
    by_priority = int(b.priority) - int(a.priority)
    if by_priority:
        return by_priority
    return _position(order, b) - _position(order, a)


def _position(order: Sequence[SnackbarMessage], message: SnackbarMessage) -> int:
    # Live ids are unique, so the id pins the admission slot.
    for index, candidate in enumerate(order):
        if candidate.id == message.id:
            return index
    raise ValueError(f"Message {message.id!r} is not part of the given order")


@dataclass(frozen=True)
class SnackbarState:
    """
    Authoritative snapshot owned by the controller.

    ``messages`` keeps admission order (oldest first). ``last_shown`` maps a
    message id to the clock reading of its latest admission and outlives the
    message itself so repeats can be suppressed.
    """

    messages: Tuple[SnackbarMessage, ...] = ()
    last_shown: Mapping[str, float] = field(default_factory=dict)

    @property
    def count(self) -> int:
        return len(self.messages)

    @property
    def is_empty(self) -> bool:
        return not self.messages

    def sorted_messages(self) -> List[SnackbarMessage]:
        indexed = sorted(
            enumerate(self.messages),
            key=lambda pair: sort_key(pair[1], pair[0]),
        )
        return [message for _, message in indexed]

    def grouped_messages(self) -> Dict[Optional[str], List[SnackbarMessage]]:
        groups: Dict[Optional[str], List[SnackbarMessage]] = {}
        for message in self.sorted_messages():
            groups.setdefault(message.group_id, []).append(message)
        return groups

    def find(self, message_id: str) -> Optional[SnackbarMessage]:
        for message in self.messages:
            if message.id == message_id:
                return message
        return None

    def contains(self, message_id: str) -> bool:
        return self.find(message_id) is not None

    def group_members(self, group_id: str) -> List[SnackbarMessage]:
        return [m for m in self.messages if m.group_id == group_id]

    def shown_at(self, message_id: str) -> Optional[float]:
        return self.last_shown.get(message_id)

    def with_messages(self, messages: Sequence[SnackbarMessage]) -> "SnackbarState":
        return SnackbarState(messages=tuple(messages), last_shown=self.last_shown)

    def admitted(self, messages: Sequence[SnackbarMessage], message_id: str, now: float) -> "SnackbarState":
        """Return a snapshot with ``messages`` live and ``message_id`` stamped at ``now``."""
        last_shown = dict(self.last_shown)
        last_shown[message_id] = now
        return SnackbarState(messages=tuple(messages), last_shown=last_shown)
