"""Listing classification."""

from p2p_sell_bot.services.classification.actions import (
    AnswerSale,
    DispatchTransfer,
    ListingAction,
    NoAction,
)
from p2p_sell_bot.services.classification.listing_classifier import classify_listing

__all__ = [
    "AnswerSale",
    "DispatchTransfer",
    "ListingAction",
    "NoAction",
    "classify_listing",
]
