# -*- coding: utf-8 -*-
"""Unit tests for MarketplaceApiClient."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any, cast
from unittest.mock import AsyncMock

import pytest

from p2p_sell_bot.clients.marketplace import MarketplaceApiClient
from p2p_sell_bot.config import Settings
from p2p_sell_bot.exceptions import (
    ConfirmSaleError,
    CredentialFetchError,
    ListingsFetchError,
    MarketplaceAPIError,
)


def _client(settings: Settings, http: SimpleNamespace) -> MarketplaceApiClient:
    return MarketplaceApiClient(http_client=cast(Any, http), settings=settings)


async def test_get_active_listings_sends_auth_headers(settings: Settings) -> None:
    http = SimpleNamespace(get=AsyncMock(return_value=[{"id": 1}, "junk"]))

    listings = await _client(settings, http).get_active_listings("tok", "a=1")

    assert listings == [{"id": 1}]
    url = http.get.await_args.args[0]
    headers = http.get.await_args.kwargs["headers"]
    assert url == "https://clash.gg/api/steam-p2p/listings/my-active"
    assert headers["Authorization"] == "Bearer tok"
    assert headers["Cookie"] == "a=1"
    assert headers["Authority"] == "clash.gg"
    assert headers["Referer"] == "https://clash.gg/"
    assert headers["User-Agent"] == settings.api.user_agent


async def test_get_active_listings_non_list_is_empty(settings: Settings) -> None:
    http = SimpleNamespace(get=AsyncMock(return_value={"error": "x"}))

    assert await _client(settings, http).get_active_listings("tok", "a=1") == []


async def test_get_active_listings_transport_error(settings: Settings) -> None:
    http = SimpleNamespace(
        get=AsyncMock(side_effect=MarketplaceAPIError("down", status_code=401))
    )

    with pytest.raises(ListingsFetchError) as exc_info:
        await _client(settings, http).get_active_listings("tok", "a=1")

    assert exc_info.value.status_code == 401


async def test_confirm_sale_patches_answer_endpoint(settings: Settings) -> None:
    http = SimpleNamespace(patch=AsyncMock(return_value=None))

    await _client(settings, http).confirm_sale("L1", "tok", "a=1")

    http.patch.assert_awaited_once()
    assert http.patch.await_args.args[0] == "https://clash.gg/api/steam-p2p/listings/L1/answer"
    assert http.patch.await_args.kwargs["json"] == {}
    assert http.patch.await_args.kwargs["headers"]["Authorization"] == "Bearer tok"


async def test_confirm_sale_transport_error(settings: Settings) -> None:
    http = SimpleNamespace(
        patch=AsyncMock(side_effect=MarketplaceAPIError("down", status_code=500))
    )

    with pytest.raises(ConfirmSaleError) as exc_info:
        await _client(settings, http).confirm_sale("L1", "tok", "a=1")

    assert exc_info.value.listing_id == "L1"
    assert exc_info.value.status_code == 500


async def test_get_access_token_sends_cookie_without_bearer(settings: Settings) -> None:
    http = SimpleNamespace(get=AsyncMock(return_value={"accessToken": "fresh"}))

    token = await _client(settings, http).get_access_token("a=1")

    assert token == "fresh"
    headers = http.get.await_args.kwargs["headers"]
    assert headers["Cookie"] == "a=1"
    assert "Authorization" not in headers
    assert http.get.await_args.args[0] == "https://clash.gg/api/auth/access-token"


@pytest.mark.parametrize("payload", [{}, {"accessToken": ""}, [], None])
async def test_get_access_token_missing_token(settings: Settings, payload: Any) -> None:
    http = SimpleNamespace(get=AsyncMock(return_value=payload))

    with pytest.raises(CredentialFetchError) as exc_info:
        await _client(settings, http).get_access_token("a=1")

    assert exc_info.value.kind == "access_token"


async def test_get_access_token_transport_error(settings: Settings) -> None:
    http = SimpleNamespace(
        get=AsyncMock(side_effect=MarketplaceAPIError("down", status_code=403))
    )

    with pytest.raises(CredentialFetchError) as exc_info:
        await _client(settings, http).get_access_token("a=1")

    assert exc_info.value.status_code == 403
