# -*- coding: utf-8 -*-
"""Unit tests for Settings defaults and env overrides."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from p2p_sell_bot.config import Settings


def test_monitor_defaults() -> None:
    settings = Settings()

    assert settings.monitor.poll_seconds == 20.0
    assert settings.monitor.cookie_refresh_hours == 4.0
    assert settings.monitor.token_refresh_minutes == 25.0
    assert settings.monitor.dedup_release_minutes == 11.0
    assert settings.monitor.cookie_refresh_seconds == 4 * 60 * 60
    assert settings.monitor.token_refresh_seconds == 25 * 60
    assert settings.monitor.dedup_release_seconds == 11 * 60


def test_api_defaults() -> None:
    settings = Settings()

    assert settings.api.host == "https://clash.gg"
    assert settings.api.authority == "clash.gg"
    assert settings.api.max_retries == 1
    assert settings.transfer.source_tag == "clash"


def test_nested_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MONITOR__POLL_SECONDS", "5")
    monkeypatch.setenv("ACCOUNT__SELLER_ID", "76561198000000009")

    settings = Settings()

    assert settings.monitor.poll_seconds == 5.0
    assert settings.account.seller_id == "76561198000000009"


def test_settings_are_frozen() -> None:
    settings = Settings()
    with pytest.raises(ValidationError):
        settings.monitor = settings.monitor  # type: ignore[misc]
