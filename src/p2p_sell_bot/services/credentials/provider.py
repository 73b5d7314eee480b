"""Credential provider: where fresh cookies and tokens come from."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from p2p_sell_bot.exceptions import BrowserAutomationError, CredentialFetchError
from p2p_sell_bot.models.credential import CredentialKind

if TYPE_CHECKING:
    from p2p_sell_bot.clients.browser import BrowserCookieSource
    from p2p_sell_bot.clients.marketplace import MarketplaceApiClient


class ICredentialProvider(ABC):
    """Fetches the session cookie and exchanges it for an access token."""

    @abstractmethod
    async def fetch_session_cookie(self) -> str:
        """Return a fresh Cookie header value. Raises CredentialFetchError."""
        ...

    @abstractmethod
    async def fetch_access_token(self, session_cookie: str) -> str:
        """Return a fresh bearer token for session_cookie. Raises CredentialFetchError."""
        ...


class MarketplaceCredentialProvider(ICredentialProvider):
    """Cookie from the logged-in browser, token from the marketplace auth endpoint."""

    def __init__(
        self,
        cookie_source: BrowserCookieSource,
        marketplace_api: MarketplaceApiClient,
    ) -> None:
        self._cookie_source = cookie_source
        self._marketplace_api = marketplace_api

    async def fetch_session_cookie(self) -> str:
        try:
            return await self._cookie_source.fetch_cookie_header()
        except BrowserAutomationError as e:
            raise CredentialFetchError(
                str(e),
                kind=CredentialKind.SESSION_COOKIE.value,
                cause=e,
            ) from e

    async def fetch_access_token(self, session_cookie: str) -> str:
        if not session_cookie:
            raise CredentialFetchError(
                "Cannot fetch an access token without a session cookie",
                kind=CredentialKind.ACCESS_TOKEN.value,
            )
        return await self._marketplace_api.get_access_token(session_cookie)
