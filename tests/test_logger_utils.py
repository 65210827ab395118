"""Unit tests for formant_synth.logger_utils."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from formant_synth.logger_utils import DEFAULT_NAMESPACE, LoggerUtils


def test_singleton() -> None:
    assert LoggerUtils() is LoggerUtils()


def test_get_logger_uses_namespace() -> None:
    assert LoggerUtils.get_logger("io").name == f"{DEFAULT_NAMESPACE}.io"
    assert LoggerUtils.get_logger().name == DEFAULT_NAMESPACE


def test_file_logging(tmp_path: Path) -> None:
    log_file = tmp_path / "synth.log"
    LoggerUtils(log_file, use_null_console=True)
    root = logging.getLogger(DEFAULT_NAMESPACE)
    assert any(isinstance(h, RotatingFileHandler) for h in root.handlers)

    LoggerUtils.get_logger("test").info("hello")
    for handler in root.handlers:
        handler.flush()
    assert "hello" in log_file.read_text(encoding="utf-8")


def test_set_level() -> None:
    utils = LoggerUtils(use_null_console=True)
    utils.set_level("debug")
    assert utils.get_level().name == "DEBUG"
    assert utils.get_level().value == logging.DEBUG


def test_unknown_level_falls_back_to_info(caplog: pytest.LogCaptureFixture) -> None:
    utils = LoggerUtils(use_null_console=True)
    with caplog.at_level(logging.WARNING, logger=DEFAULT_NAMESPACE):
        utils.set_level("chatty")
    assert utils.get_level().value == logging.INFO
    assert "Unknown logging level" in caplog.text


def test_set_level_moves_console_handler() -> None:
    utils = LoggerUtils()
    utils.set_level("DEBUG")
    root = logging.getLogger(DEFAULT_NAMESPACE)
    console = [h for h in root.handlers if type(h) is logging.StreamHandler]
    assert [h.level for h in console] == [logging.DEBUG]

    utils.set_level("ERROR")
    assert [h.level for h in console] == [logging.ERROR]
