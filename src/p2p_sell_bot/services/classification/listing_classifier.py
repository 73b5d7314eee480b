"""Maps a listing snapshot to the action the sale monitor should take."""

from __future__ import annotations

from collections.abc import Callable

from p2p_sell_bot.models.listing import Listing, ListingStatus
from p2p_sell_bot.services.classification.actions import (
    AnswerSale,
    DispatchTransfer,
    ListingAction,
    NoAction,
)


def classify_listing(
    listing: Listing,
    self_seller_id: str,
    *,
    is_dispatched: Callable[[str], bool],
) -> ListingAction:
    """Classify one listing from its latest snapshot and the dispatch tracker.

    Rules, first match wins:
    1. Listing of another seller: NoAction.
    2. REQUESTED: AnswerSale (dispatch state is irrelevant).
    3. BUYER_MATCHED and not dispatched yet: DispatchTransfer.
    4. Anything else: NoAction.

    Args:
        listing: Listing snapshot.
        self_seller_id: The configured account identity.
        is_dispatched: Lookup in the dispatch tracker (e.g. tracker.is_dispatched).
    """
    if listing.seller_id != self_seller_id:
        return NoAction(listing.id, "foreign_seller")
    if listing.status is ListingStatus.REQUESTED:
        return AnswerSale(listing.id)
    if listing.status is ListingStatus.BUYER_MATCHED:
        if is_dispatched(listing.id):
            return NoAction(listing.id, "already_dispatched")
        return DispatchTransfer(
            listing_id=listing.id,
            item_name=listing.item.name,
            asset_id=listing.item.transfer_asset_id,
            destination=listing.buyer_destination,
        )
    return NoAction(listing.id, "unrecognized_status")
