"""P2P marketplace sell bot: answers sales and dispatches item transfers."""

from p2p_sell_bot.clients import (
    AsyncHttpClient,
    BrowserCookieSource,
    MarketplaceApiClient,
)
from p2p_sell_bot.config import get_settings
from p2p_sell_bot.DI import Container
from p2p_sell_bot.services import SaleMonitor, SellBotRunner

__version__ = "0.0.1"
__all__ = [
    "AsyncHttpClient",
    "BrowserCookieSource",
    "Container",
    "MarketplaceApiClient",
    "SaleMonitor",
    "SellBotRunner",
    "get_settings",
]
