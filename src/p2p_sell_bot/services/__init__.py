# -*- coding: utf-8 -*-
"""Application services."""

from p2p_sell_bot.services.classification import (
    AnswerSale,
    DispatchTransfer,
    ListingAction,
    NoAction,
    classify_listing,
)
from p2p_sell_bot.services.credentials import (
    CredentialRefreshScheduler,
    CredentialStore,
    ICredentialProvider,
    MarketplaceCredentialProvider,
)
from p2p_sell_bot.services.runner import SellBotRunner
from p2p_sell_bot.services.sale_monitor import PollSummary, SaleMonitor
from p2p_sell_bot.services.scheduling import PeriodicTask
from p2p_sell_bot.services.transfer import ITransferDispatcher, LoggingTransferDispatcher

__all__ = [
    "AnswerSale",
    "CredentialRefreshScheduler",
    "CredentialStore",
    "DispatchTransfer",
    "ICredentialProvider",
    "ITransferDispatcher",
    "ListingAction",
    "LoggingTransferDispatcher",
    "MarketplaceCredentialProvider",
    "NoAction",
    "PeriodicTask",
    "PollSummary",
    "SaleMonitor",
    "SellBotRunner",
    "classify_listing",
]
