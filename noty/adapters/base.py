"""
Source adapter contract and the host that runs adapter life-cycles.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, Iterable, List, Optional, Set

from noty import logger as app_logger

if TYPE_CHECKING:  # pragma: no cover
    from noty.controller import SnackbarController

_LOGGER = app_logger.get_logger()


class SnackbarAdapter(ABC):
    """
    Pluggable producer that pushes messages into a controller.

    ``initialize`` receives the controller handle; ``dispose`` must release
    every timer or subscription the adapter created and drop the handle. It
    has to be safe even when ``initialize`` never ran or failed halfway.
    """

    @property
    @abstractmethod
    def id(self) -> str:
        """Stable identifier used to de-duplicate adapter lists."""

    @abstractmethod
    def initialize(self, controller: "SnackbarController") -> None:
        ...

    def dispose(self) -> None:
        return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"


class CustomSnackbarAdapter(SnackbarAdapter):
    """Adapter assembled from plain callables."""

    def __init__(
        self,
        id: str,
        initialize: Callable[["SnackbarController"], None],
        dispose: Optional[Callable[[], None]] = None,
    ) -> None:
        self._id = id
        self._on_initialize = initialize
        self._on_dispose = dispose

    @property
    def id(self) -> str:
        return self._id

    def initialize(self, controller: "SnackbarController") -> None:
        self._on_initialize(controller)

    def dispose(self) -> None:
        if self._on_dispose is not None:
            self._on_dispose()


def add_if_not_exists(adapters: Iterable[SnackbarAdapter], adapter: SnackbarAdapter) -> List[SnackbarAdapter]:
    result = list(adapters)
    if any(existing.id == adapter.id for existing in result):
        return result
    result.append(adapter)
    return result


def remove_by_id(adapters: Iterable[SnackbarAdapter], adapter_id: str) -> List[SnackbarAdapter]:
    return [adapter for adapter in adapters if adapter.id != adapter_id]


def replace_adapter(adapters: Iterable[SnackbarAdapter], adapter: SnackbarAdapter) -> List[SnackbarAdapter]:
    """Swap the adapter sharing ``adapter.id`` in place, or append it."""
    result = list(adapters)
    for index, existing in enumerate(result):
        if existing.id == adapter.id:
            result[index] = adapter
            return result
    result.append(adapter)
    return result


class AdapterHost:
    """
    Initializes and disposes adapters against one controller.

    Faults raised by an adapter are logged and never propagate. An adapter
    counts as attempted even if its ``initialize`` raised, so it is not
    retried and still receives ``dispose``.
    """

    def __init__(self, controller: "SnackbarController") -> None:
        self._controller = controller
        self._adapters: List[SnackbarAdapter] = []
        self._attempted: Set[str] = set()
        self._failed: Set[str] = set()

    @property
    def adapters(self) -> List[SnackbarAdapter]:
        return list(self._adapters)

    @property
    def attempted_ids(self) -> Set[str]:
        return set(self._attempted)

    @property
    def failed_ids(self) -> Set[str]:
        return set(self._failed)

    def initialize_all(self, adapters: Iterable[SnackbarAdapter]) -> None:
        for adapter in adapters:
            if adapter.id in self._attempted:
                continue
            self._attempted.add(adapter.id)
            self._adapters.append(adapter)
            try:
                adapter.initialize(self._controller)
            except Exception:
                self._failed.add(adapter.id)
                _LOGGER.exception("Adapter {} failed to initialize.", adapter.id)
                continue
            _LOGGER.info("Adapter {} initialized.", adapter.id)

    def dispose_all(self) -> None:
        for adapter in self._adapters:
            try:
                adapter.dispose()
            except Exception:
                _LOGGER.exception("Adapter {} failed to dispose.", adapter.id)
        self._adapters.clear()
        self._attempted.clear()
        self._failed.clear()

    def reinitialize(self, adapters: Iterable[SnackbarAdapter]) -> None:
        """Dispose the current set and initialize ``adapters`` from scratch."""
        adapters = list(adapters)
        self.dispose_all()
        self.initialize_all(adapters)

    def sync(self, adapters: Iterable[SnackbarAdapter]) -> bool:
        """Reinitialize only when the set of adapter ids changed; return whether it did."""
        adapters = list(adapters)
        if {a.id for a in adapters} == {a.id for a in self._adapters}:
            return False
        self.reinitialize(adapters)
        return True
