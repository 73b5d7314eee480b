"""Exceptions subpackage."""

from p2p_sell_bot.exceptions.exceptions import (
    BrowserAutomationError,
    ConfirmSaleError,
    CredentialFetchError,
    DispatchError,
    ListingsFetchError,
    MarketplaceAPIError,
    MissingRequiredConfigError,
    SellBotError,
)

__all__ = [
    "BrowserAutomationError",
    "ConfirmSaleError",
    "CredentialFetchError",
    "DispatchError",
    "ListingsFetchError",
    "MarketplaceAPIError",
    "MissingRequiredConfigError",
    "SellBotError",
]
