"""
Entry point for the noty demo application.
"""

from __future__ import annotations

import sys
from typing import Iterable

from PySide6.QtWidgets import QApplication

from noty import logger as app_logger
from noty.app import DemoWindow

_LOGGER = app_logger.get_logger()


def _run_application(argv: Iterable[str]) -> int:
    app = QApplication(list(argv))
    window = DemoWindow()
    window.show()
    return app.exec()


def main() -> int:
    """Launch the demo window, logging instead of crashing on unexpected errors."""
    try:
        return _run_application(sys.argv)
    except Exception:  # pragma: no cover - crash guard
        _LOGGER.exception("Noty demo crashed.")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
