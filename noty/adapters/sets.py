"""
Ready-made adapter collections.

Every function builds fresh adapter instances so no two overlays share
mutable adapter state.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from noty.adapters.base import SnackbarAdapter
from noty.adapters.network import NetworkSnackbarAdapter


def _network_only() -> List[SnackbarAdapter]:
    # Connectivity is the only bundled source, so every preset currently maps to it.
    return [NetworkSnackbarAdapter()]


def basic() -> List[SnackbarAdapter]:
    return _network_only()


def minimal() -> List[SnackbarAdapter]:
    return _network_only()


def advanced() -> List[SnackbarAdapter]:
    return _network_only()


def complete() -> List[SnackbarAdapter]:
    return _network_only()


def no_sync() -> List[SnackbarAdapter]:
    return _network_only()


def custom(adapters: Iterable[SnackbarAdapter]) -> List[SnackbarAdapter]:
    return list(adapters)


def all_available() -> List[SnackbarAdapter]:
    return _network_only()


def get_by_id(adapter_id: str) -> Optional[SnackbarAdapter]:
    for adapter in all_available():
        if adapter.id == adapter_id:
            return adapter
    return None
