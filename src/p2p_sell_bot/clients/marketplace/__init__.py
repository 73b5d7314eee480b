"""Marketplace API client."""

from p2p_sell_bot.clients.marketplace.marketplace_api import MarketplaceApiClient

__all__ = ["MarketplaceApiClient"]
