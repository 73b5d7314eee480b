"""Credential store, provider and refresh scheduling."""

from p2p_sell_bot.services.credentials.credential_store import CredentialStore
from p2p_sell_bot.services.credentials.provider import (
    ICredentialProvider,
    MarketplaceCredentialProvider,
)
from p2p_sell_bot.services.credentials.refresh_scheduler import CredentialRefreshScheduler

__all__ = [
    "CredentialRefreshScheduler",
    "CredentialStore",
    "ICredentialProvider",
    "MarketplaceCredentialProvider",
]
