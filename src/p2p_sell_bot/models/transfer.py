"""TransferRequest: what the transfer dispatcher needs to send an item to a buyer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# Offer lifetime per sell platform before the trade offer is cancelled.
_CANCEL_AFTER_SECONDS: dict[str, int] = {
    "empire": 12 * 60 * 60,
    "clash": 10 * 60,
}
_DEFAULT_CANCEL_AFTER_SECONDS = 60 * 60


def offer_cancel_after(source_tag: str) -> int:
    """Seconds a trade offer for `source_tag` stays open (empire 12h, clash 10min, other 1h)."""
    return _CANCEL_AFTER_SECONDS.get(source_tag.strip().lower(), _DEFAULT_CANCEL_AFTER_SECONDS)


@dataclass(frozen=True, slots=True)
class TransferRequest:
    """Send asset_id to destination (buyer trade link) for a sale on source_tag."""

    destination: str
    asset_id: str
    source_tag: str
    metadata: dict[str, Any] = field(default_factory=dict)
    """Sale data attached to the offer (item_name, listing_id)."""
    cancel_after_seconds: int = _DEFAULT_CANCEL_AFTER_SECONDS

    @classmethod
    def create(
        cls,
        *,
        destination: str,
        asset_id: str,
        source_tag: str,
        metadata: dict[str, Any] | None = None,
    ) -> TransferRequest:
        if not destination or not asset_id:
            raise ValueError("destination and asset_id must be non-empty")
        return cls(
            destination=destination,
            asset_id=asset_id,
            source_tag=source_tag,
            metadata=dict(metadata or {}),
            cancel_after_seconds=offer_cancel_after(source_tag),
        )
