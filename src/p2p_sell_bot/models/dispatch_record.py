"""DispatchRecord: marker that a transfer was already dispatched for a listing.

Identity is listing_id. The record lives until its release time, after which
the listing may be dispatched again.
"""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class DispatchRecord:
    """A transfer was dispatched for listing_id at dispatched_at (tracker clock seconds)."""

    listing_id: str
    dispatched_at: float
    release_at: float
    """Clock time after which the record is gone."""

    @classmethod
    def create(
        cls, listing_id: str, *, dispatched_at: float, release_after: float
    ) -> DispatchRecord:
        listing_id = listing_id.strip()
        if not listing_id:
            raise ValueError("listing_id must be non-empty")
        return cls(
            listing_id=listing_id,
            dispatched_at=dispatched_at,
            release_at=dispatched_at + release_after,
        )

    def with_release_at(self, release_at: float) -> DispatchRecord:
        return replace(self, release_at=release_at)

    def is_expired(self, now: float) -> bool:
        return now >= self.release_at
