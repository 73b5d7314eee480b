# -*- coding: utf-8 -*-
"""Unit tests for CredentialRefreshScheduler and CredentialStore."""

from __future__ import annotations

import asyncio

import pytest

from p2p_sell_bot.config import Settings
from p2p_sell_bot.exceptions import CredentialFetchError
from p2p_sell_bot.models.credential import CredentialKind
from p2p_sell_bot.services.credentials import (
    CredentialRefreshScheduler,
    CredentialStore,
    ICredentialProvider,
)


class FakeProvider(ICredentialProvider):
    """Records calls; hands out numbered cookies and tokens."""

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.cookie_error: Exception | None = None
        self.token_error: Exception | None = None
        self._cookies = 0
        self._tokens = 0

    async def fetch_session_cookie(self) -> str:
        self.calls.append("cookie")
        if self.cookie_error is not None:
            raise self.cookie_error
        self._cookies += 1
        return f"session=c{self._cookies}"

    async def fetch_access_token(self, session_cookie: str) -> str:
        self.calls.append(f"token:{session_cookie}")
        if self.token_error is not None:
            raise self.token_error
        self._tokens += 1
        return f"t{self._tokens}"


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def store() -> CredentialStore:
    return CredentialStore()


def _scheduler(
    settings: Settings, store: CredentialStore, provider: FakeProvider
) -> CredentialRefreshScheduler:
    return CredentialRefreshScheduler(settings=settings, store=store, provider=provider)


async def test_bootstrap_fetches_cookie_before_token(
    settings: Settings, store: CredentialStore, provider: FakeProvider
) -> None:
    ready = await _scheduler(settings, store, provider).bootstrap()

    assert ready is True
    assert provider.calls == ["cookie", "token:session=c1"]
    assert store.session_cookie == "session=c1"
    assert store.access_token == "t1"


async def test_token_never_requested_with_empty_cookie(
    settings: Settings, store: CredentialStore, provider: FakeProvider
) -> None:
    provider.cookie_error = CredentialFetchError("browser down", kind="session_cookie")
    scheduler = _scheduler(settings, store, provider)

    ready = await scheduler.bootstrap()
    refreshed = await scheduler.refresh_token()

    assert ready is False
    assert refreshed is False
    assert provider.calls == ["cookie"]
    assert store.access_token == ""


async def test_failed_cookie_refresh_keeps_stale_cookie(
    settings: Settings, store: CredentialStore, provider: FakeProvider
) -> None:
    scheduler = _scheduler(settings, store, provider)
    await scheduler.bootstrap()
    provider.cookie_error = CredentialFetchError("browser down", kind="session_cookie")

    assert await scheduler.refresh_cookie() is False
    assert store.session_cookie == "session=c1"


async def test_failed_token_refresh_keeps_stale_token(
    settings: Settings, store: CredentialStore, provider: FakeProvider
) -> None:
    scheduler = _scheduler(settings, store, provider)
    await scheduler.bootstrap()
    provider.token_error = CredentialFetchError("401", kind="access_token", status_code=401)

    assert await scheduler.refresh_token() is False
    assert store.access_token == "t1"


async def test_token_refresh_uses_latest_cookie(
    settings: Settings, store: CredentialStore, provider: FakeProvider
) -> None:
    scheduler = _scheduler(settings, store, provider)
    await scheduler.bootstrap()
    await scheduler.refresh_cookie()

    await scheduler.refresh_token()

    assert provider.calls[-1] == "token:session=c2"
    assert store.access_token == "t2"


async def test_timers_refresh_independently_until_stopped(
    seller_id: str, store: CredentialStore, provider: FakeProvider
) -> None:
    settings = Settings(
        account={"seller_id": seller_id},
        monitor={"cookie_refresh_hours": 0.03 / 3600, "token_refresh_minutes": 0.01 / 60},
    )
    scheduler = _scheduler(settings, store, provider)
    await scheduler.bootstrap()

    await scheduler.start()
    await asyncio.sleep(0.1)
    await scheduler.stop()
    token_calls = sum(1 for c in provider.calls if c.startswith("token:"))
    cookie_calls = provider.calls.count("cookie")
    await asyncio.sleep(0.05)

    assert token_calls > cookie_calls > 1
    assert sum(1 for c in provider.calls if c.startswith("token:")) == token_calls


def test_store_starts_empty_and_rejects_empty_values() -> None:
    store = CredentialStore()

    assert store.session_cookie == ""
    assert store.access_token == ""
    assert store.ready is False
    with pytest.raises(ValueError):
        store.set(CredentialKind.ACCESS_TOKEN, "")


def test_store_replaces_in_place() -> None:
    store = CredentialStore()
    store.set(CredentialKind.SESSION_COOKIE, "a=1")
    store.set(CredentialKind.SESSION_COOKIE, "a=2")

    assert store.get(CredentialKind.SESSION_COOKIE) == "a=2"
    assert store.updated_at(CredentialKind.SESSION_COOKIE) is not None
    assert store.updated_at(CredentialKind.ACCESS_TOKEN) is None
