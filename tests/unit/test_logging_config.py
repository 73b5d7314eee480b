# -*- coding: utf-8 -*-
"""Unit tests for logging handler and processor setup."""

from __future__ import annotations

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

import structlog

from p2p_sell_bot.config import Settings
from p2p_sell_bot.logging.config import _build_handlers, _build_processors


def test_console_only_uses_console_renderer() -> None:
    settings = Settings(logging={"console_level": "DEBUG"})

    handlers = _build_handlers(settings)
    processors = _build_processors(settings)

    assert len(handlers) == 1
    assert handlers[0].level == logging.DEBUG
    assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)


def test_file_target_rotates_at_midnight_and_renders_json(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "bot.log"
    settings = Settings(
        logging={
            "log_to_console": False,
            "log_to_file": True,
            "log_file_path": str(log_file),
            "file_level": "WARNING",
            "log_file_backup_count": 3,
        }
    )

    handlers = _build_handlers(settings)
    try:
        assert len(handlers) == 1
        rotating = handlers[0]
        assert isinstance(rotating, TimedRotatingFileHandler)
        assert rotating.when == "MIDNIGHT"
        assert rotating.utc is True
        assert rotating.backupCount == 3
        assert rotating.level == logging.WARNING
        assert log_file.parent.is_dir()
        assert isinstance(_build_processors(settings)[-1], structlog.processors.JSONRenderer)
    finally:
        for handler in handlers:
            handler.close()


def test_no_targets_adds_no_renderer() -> None:
    settings = Settings(logging={"log_to_console": False})

    assert _build_handlers(settings) == []
    renderers = (structlog.dev.ConsoleRenderer, structlog.processors.JSONRenderer)
    assert not any(isinstance(p, renderers) for p in _build_processors(settings))
