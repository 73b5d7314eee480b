# -*- coding: utf-8 -*-
"""Domain models."""

from p2p_sell_bot.models.credential import CredentialKind
from p2p_sell_bot.models.dispatch_record import DispatchRecord
from p2p_sell_bot.models.listing import Listing, ListingItem, ListingStatus
from p2p_sell_bot.models.transfer import TransferRequest, offer_cancel_after

__all__ = [
    "CredentialKind",
    "DispatchRecord",
    "Listing",
    "ListingItem",
    "ListingStatus",
    "TransferRequest",
    "offer_cancel_after",
]
