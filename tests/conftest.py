# -*- coding: utf-8 -*-
"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

import pytest

from p2p_sell_bot.config import Settings
from p2p_sell_bot.models.credential import CredentialKind
from p2p_sell_bot.models.listing import Listing
from p2p_sell_bot.persistence.repositories.in_memory import InMemoryDispatchTracker
from p2p_sell_bot.services.credentials import CredentialStore


class FakeClock:
    """Manually advanced monotonic clock (seconds)."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def seller_id() -> str:
    """Account identity used by tests."""
    return "76561198000000001"


@pytest.fixture
def settings(seller_id: str) -> Settings:
    """Settings with the test seller and default cadences."""
    return Settings(account={"seller_id": seller_id})


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def tracker(clock: FakeClock) -> Iterator[InMemoryDispatchTracker]:
    """Fresh dispatch tracker on the fake clock."""
    t = InMemoryDispatchTracker(clock=clock)
    yield t
    t.close()


@pytest.fixture
def ready_store() -> CredentialStore:
    """Store with both credentials already fetched."""
    store = CredentialStore()
    store.set(CredentialKind.SESSION_COOKIE, "session=abc")
    store.set(CredentialKind.ACCESS_TOKEN, "token-1")
    return store


@pytest.fixture
def raw_listing_factory(seller_id: str) -> Callable[..., dict[str, Any]]:
    """Build a raw GET /listings/my-active item with easy overrides."""

    def _build(**overrides: Any) -> dict[str, Any]:
        return {
            "id": overrides.pop("id", "L1"),
            "status": overrides.pop("status", "ASKED"),
            "seller": {"steamId": overrides.pop("seller_id", seller_id)},
            "item": {
                "name": overrides.pop("item_name", "Skin"),
                "inspect": {"a": overrides.pop("asset_id", "A1")},
            },
            "buyerTradelink": overrides.pop("buyer_tradelink", "D1"),
        }

    return _build


@pytest.fixture
def listing_factory(
    raw_listing_factory: Callable[..., dict[str, Any]],
) -> Callable[..., Listing]:
    """Build a Listing through the same path the monitor uses."""

    def _build(**overrides: Any) -> Listing:
        return Listing.from_response(raw_listing_factory(**overrides))

    return _build
