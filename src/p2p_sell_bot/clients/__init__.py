"""HTTP, marketplace and browser clients."""

from p2p_sell_bot.clients.browser import BrowserCookieSource
from p2p_sell_bot.clients.http import AsyncHttpClient
from p2p_sell_bot.clients.marketplace import MarketplaceApiClient

__all__ = [
    "AsyncHttpClient",
    "BrowserCookieSource",
    "MarketplaceApiClient",
]
