"""Tests for logging setup helpers."""

from __future__ import annotations

from pathlib import Path

import pytest

from noty import logger as app_logger


class TestLogger:
    def test_log_dir_override(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("NOTY_LOG_DIR", str(tmp_path))

        assert app_logger.default_log_path() == tmp_path / "noty.log"

    def test_default_log_dir(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NOTY_LOG_DIR", raising=False)

        assert app_logger.default_log_path() == Path.home() / ".noty" / "logs" / "noty.log"

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(None, "INFO"), ("debug", "DEBUG"), (" warning ", "WARNING"), ("loud", "INFO")],
    )
    def test_console_level(self, monkeypatch: pytest.MonkeyPatch, raw, expected: str) -> None:
        if raw is None:
            monkeypatch.delenv("NOTY_LOG_LEVEL", raising=False)
        else:
            monkeypatch.setenv("NOTY_LOG_LEVEL", raw)

        assert app_logger.console_level() == expected

    def test_get_logger_is_shared(self) -> None:
        assert app_logger.get_logger() is app_logger.get_logger()
