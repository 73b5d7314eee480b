"""Actions the sale monitor can take for a listing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True, slots=True)
class NoAction:
    """Nothing to do for this listing."""

    listing_id: str
    reason: str


@dataclass(frozen=True, slots=True)
class AnswerSale:
    """Confirm the buyer's purchase request."""

    listing_id: str


@dataclass(frozen=True, slots=True)
class DispatchTransfer:
    """Send the item to the matched buyer."""

    listing_id: str
    item_name: str
    asset_id: str | None
    destination: str | None


ListingAction = Union[NoAction, AnswerSale, DispatchTransfer]
