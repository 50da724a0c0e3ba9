"""
Environment-backed configuration for the snackbar queue and overlay.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from noty import logger as app_logger
from noty.types import StackAlignment

_LOGGER = app_logger.get_logger()

_ENV_PREFIX = "NOTY_"

DEFAULT_SPAM_WINDOW_SECONDS = 2.0
DEFAULT_MAX_PER_GROUP = 3
DEFAULT_MAX_TOTAL_MESSAGES = 10
DEFAULT_MAX_VISIBLE_MESSAGES = 5
DEFAULT_PADDING = 16.0
DEFAULT_NETWORK_POLL_SECONDS = 30

_MAX_TOTAL_LIMIT = 50
_MAX_SPAM_WINDOW = 60.0
_MAX_PADDING = 200.0
_MAX_POLL_SECONDS = 3600


@dataclass(eq=True)
class NotySettings:
    spam_window_seconds: float = DEFAULT_SPAM_WINDOW_SECONDS
    max_per_group: int = DEFAULT_MAX_PER_GROUP
    max_total_messages: int = DEFAULT_MAX_TOTAL_MESSAGES
    max_visible_messages: int = DEFAULT_MAX_VISIBLE_MESSAGES
    alignment: StackAlignment = StackAlignment.TOP_RIGHT
    padding: float = DEFAULT_PADDING
    network_poll_seconds: int = DEFAULT_NETWORK_POLL_SECONDS


class SettingsManager:
    """Loads settings from ``NOTY_*`` variables and clamps invalid data."""

    def __init__(self, *, environ: Optional[Mapping[str, str]] = None) -> None:
        self._environ = os.environ if environ is None else environ

    def read_settings(self) -> NotySettings:
        max_total = self._read_int("MAX_TOTAL_MESSAGES", DEFAULT_MAX_TOTAL_MESSAGES, 1, _MAX_TOTAL_LIMIT)
        return NotySettings(
            spam_window_seconds=self._read_float(
                "SPAM_WINDOW_SECONDS", DEFAULT_SPAM_WINDOW_SECONDS, 0.0, _MAX_SPAM_WINDOW
            ),
            max_per_group=self._read_int("MAX_PER_GROUP", DEFAULT_MAX_PER_GROUP, 1, max_total),
            max_total_messages=max_total,
            max_visible_messages=self._read_int(
                "MAX_VISIBLE_MESSAGES", min(DEFAULT_MAX_VISIBLE_MESSAGES, max_total), 1, max_total
            ),
            alignment=self._read_alignment(),
            padding=self._read_float("PADDING", DEFAULT_PADDING, 0.0, _MAX_PADDING),
            network_poll_seconds=self._read_int(
                "NETWORK_POLL_SECONDS", DEFAULT_NETWORK_POLL_SECONDS, 1, _MAX_POLL_SECONDS
            ),
        )

    def _raw(self, name: str) -> Optional[str]:
        value = self._environ.get(_ENV_PREFIX + name)
        if value is None or not value.strip():
            return None
        return value.strip()

    def _read_int(self, name: str, default: int, minimum: int, maximum: int) -> int:
        raw = self._raw(name)
        if raw is None:
            return default
        try:
            value = int(raw)
        except ValueError:
            _LOGGER.warning("Setting {}{} has non-integer value {!r}; using {}.", _ENV_PREFIX, name, raw, default)
            return default
        return self._clamp(name, value, minimum, maximum)

    def _read_float(self, name: str, default: float, minimum: float, maximum: float) -> float:
        raw = self._raw(name)
        if raw is None:
            return default
        try:
            value = float(raw)
        except ValueError:
            _LOGGER.warning("Setting {}{} has non-numeric value {!r}; using {}.", _ENV_PREFIX, name, raw, default)
            return default
        return self._clamp(name, value, minimum, maximum)

    def _read_alignment(self) -> StackAlignment:
        raw = self._raw("ALIGNMENT")
        if raw is None:
            return StackAlignment.TOP_RIGHT
        try:
            return StackAlignment(raw.lower().replace("-", "_"))
        except ValueError:
            _LOGGER.warning("Unknown stack alignment {!r}; using top_right.", raw)
            return StackAlignment.TOP_RIGHT

    @staticmethod
    def _clamp(name: str, value, minimum, maximum):
        if value < minimum or value > maximum:
            _LOGGER.warning(
                "Invalid value {} for {}{}. Clamping to [{}, {}].",
                value,
                _ENV_PREFIX,
                name,
                minimum,
                maximum,
            )
        return max(minimum, min(maximum, value))
