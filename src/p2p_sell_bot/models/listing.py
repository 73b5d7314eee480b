"""Listing: a marketplace record for an item this account has put up for sale.

Built from the raw GET /listings/my-active item. Only the fields the sell flow
needs are kept; the record is read-only.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ListingStatus(str, Enum):
    """Listing states that matter to the sell flow. Wire values are the marketplace's."""

    REQUESTED = "ASKED"
    """A buyer asked to purchase; the seller must answer."""
    BUYER_MATCHED = "ANSWERED"
    """Sale answered; the item must be sent to the buyer."""
    UNKNOWN = "UNKNOWN"
    """Any other status. Never acted upon."""

    @classmethod
    def parse(cls, raw: Any) -> ListingStatus:
        """Map a raw status string to a ListingStatus; unrecognized values map to UNKNOWN."""
        if isinstance(raw, str):
            for status in (cls.REQUESTED, cls.BUYER_MATCHED):
                if raw.strip().upper() == status.value:
                    return status
        return cls.UNKNOWN


@dataclass(frozen=True, slots=True)
class ListingItem:
    """The item on sale."""

    name: str
    transfer_asset_id: str | None = None
    """Steam asset id of the concrete unit to send (item.inspect.a)."""


@dataclass(frozen=True, slots=True)
class Listing:
    """Active listing snapshot."""

    id: str
    seller_id: str
    status: ListingStatus
    item: ListingItem
    buyer_destination: str | None = None
    """Buyer trade link; present once a buyer is matched."""
    raw_status: str | None = None

    @classmethod
    def from_response(cls, response: dict[str, Any]) -> Listing:
        """Build from raw GET /listings/my-active item (camelCase, nested seller/item).

        Raises:
            ValueError: If the item has no id.
        """
        listing_id = response.get("id")
        if listing_id is None or not str(listing_id).strip():
            raise ValueError("listing has no id")
        seller = response.get("seller") or {}
        item = response.get("item") or {}
        inspect = item.get("inspect") or {}
        asset_id = inspect.get("a")
        raw_status = response.get("status")
        return cls(
            id=str(listing_id).strip(),
            seller_id=str(seller.get("steamId") or ""),
            status=ListingStatus.parse(raw_status),
            item=ListingItem(
                name=str(item.get("name") or ""),
                transfer_asset_id=str(asset_id) if asset_id is not None else None,
            ),
            buyer_destination=response.get("buyerTradelink"),
            raw_status=raw_status if isinstance(raw_status, str) else None,
        )
