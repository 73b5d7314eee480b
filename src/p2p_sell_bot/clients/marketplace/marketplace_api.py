# -*- coding: utf-8 -*-
"""Marketplace API client: active listings, sale answers and access tokens."""

from __future__ import annotations

import structlog
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, cast
from structlog.contextvars import bound_contextvars

from p2p_sell_bot.clients.marketplace.schema import AccessTokenSchema, ListingSchema
from p2p_sell_bot.config import Settings
from p2p_sell_bot.exceptions import (
    ConfirmSaleError,
    CredentialFetchError,
    ListingsFetchError,
    MarketplaceAPIError,
)
from p2p_sell_bot.models.credential import CredentialKind

if TYPE_CHECKING:
    from p2p_sell_bot.clients.http import AsyncHttpClient


class MarketplaceApiClient:
    """Client for the marketplace's seller endpoints.

    Credentials are passed per call; the client never stores them.
    """

    def __init__(
        self,
        http_client: "AsyncHttpClient",
        settings: Settings,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the client.

        Args:
            http_client: Async HTTP client (e.g. AsyncHttpClient).
            settings: Application settings (uses settings.api).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._http = http_client
        self._settings = settings
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def _url(self, path: str) -> str:
        return f"{self._settings.api.host.rstrip('/')}/{path.lstrip('/')}"

    def common_headers(self) -> Dict[str, str]:
        """Browser-like headers sent on every marketplace request."""
        api = self._settings.api
        return {
            "Authority": api.authority,
            "Accept": "*/*",
            "Accept-Encoding": "gzip, deflate, br",
            "Accept-Language": api.accept_language,
            "Content-Type": "application/json",
            "Referer": f"{api.host.rstrip('/')}/",
            "User-Agent": api.user_agent,
        }

    def auth_headers(self, access_token: str, session_cookie: str) -> Dict[str, str]:
        return {
            **self.common_headers(),
            "Authorization": f"Bearer {access_token}",
            "Cookie": session_cookie,
        }

    async def get_active_listings(
        self, access_token: str, session_cookie: str
    ) -> List[ListingSchema]:
        """Fetch the seller's active listings.

        Raises:
            ListingsFetchError: On transport or auth failure.
        """
        url = self._url(self._settings.api.active_listings_path)
        try:
            data = await self._http.get(
                url, headers=self.auth_headers(access_token, session_cookie)
            )
        except MarketplaceAPIError as e:
            raise ListingsFetchError(
                "Error while fetching active listings",
                status_code=e.status_code,
                cause=e,
            ) from e
        if not isinstance(data, list):
            self._logger.warning(
                "marketplace_active_listings_non_list",
                marketplace_response_type=type(data).__name__,
            )
            return []
        result: List[ListingSchema] = []
        for x in cast(list[Any], data):
            if isinstance(x, dict):
                result.append(cast(ListingSchema, x))
        return result

    async def confirm_sale(
        self, listing_id: str, access_token: str, session_cookie: str
    ) -> None:
        """Answer a buyer's purchase request for listing_id.

        Raises:
            ConfirmSaleError: On transport or auth failure.
        """
        path = self._settings.api.answer_listing_path.format(listing_id=listing_id)
        with bound_contextvars(listing_id=listing_id):
            try:
                await self._http.patch(
                    self._url(path),
                    headers=self.auth_headers(access_token, session_cookie),
                    json={},
                )
            except MarketplaceAPIError as e:
                raise ConfirmSaleError(
                    f"Error while answering sale for listing {listing_id}",
                    listing_id=listing_id,
                    status_code=e.status_code,
                    cause=e,
                ) from e
            self._logger.info("marketplace_sale_answered")

    async def get_access_token(self, session_cookie: str) -> str:
        """Exchange the session cookie for a fresh bearer token.

        Raises:
            CredentialFetchError: On transport failure or a response without a token.
        """
        url = self._url(self._settings.api.access_token_path)
        headers = {**self.common_headers(), "Cookie": session_cookie}
        try:
            data = await self._http.get(url, headers=headers)
        except MarketplaceAPIError as e:
            raise CredentialFetchError(
                "Error while fetching access token",
                kind=CredentialKind.ACCESS_TOKEN.value,
                status_code=e.status_code,
                cause=e,
            ) from e
        token = cast(AccessTokenSchema, data).get("accessToken") if isinstance(data, dict) else None
        if not isinstance(token, str) or not token:
            raise CredentialFetchError(
                "Access token response has no accessToken",
                kind=CredentialKind.ACCESS_TOKEN.value,
            )
        return token
