"""Abstract interface for dispatch deduplication (in-memory, DB, etc.)."""

from __future__ import annotations

from abc import ABC, abstractmethod


class IDispatchTracker(ABC):
    """Remembers listings whose transfer was already dispatched, for a bounded time.

    Methods are synchronous so a check-then-mark never spans a suspension point.
    """

    @abstractmethod
    def mark_dispatched(self, listing_id: str) -> None:
        """Record that a transfer was dispatched for listing_id. Idempotent.

        The record is released automatically after the tracker's release delay.
        """
        ...

    @abstractmethod
    def is_dispatched(self, listing_id: str) -> bool:
        """Return True while a live record exists for listing_id."""
        ...

    @abstractmethod
    def schedule_release(self, listing_id: str, after: float | None = None) -> None:
        """Move the release to `after` seconds after the mark (default: tracker's release delay)."""
        ...

    @abstractmethod
    def release(self, listing_id: str) -> bool:
        """Remove the record now. Returns False if nothing was tracked."""
        ...

    def close(self) -> None:
        """Cancel pending timers. Default: nothing to cancel."""
        return None
