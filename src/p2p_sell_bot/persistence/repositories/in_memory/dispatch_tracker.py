# -*- coding: utf-8 -*-
"""In-memory dispatch tracker (keyed by listing id) with deferred release."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable
from typing import Any

import structlog

from p2p_sell_bot.models.dispatch_record import DispatchRecord
from p2p_sell_bot.persistence.repositories.interfaces.dispatch_tracker import (
    IDispatchTracker,
)

DEFAULT_RELEASE_SECONDS = 11 * 60


class InMemoryDispatchTracker(IDispatchTracker):
    """In-memory implementation of IDispatchTracker.

    Release is driven by the running event loop's call_later. The clock is
    injectable and is_dispatched() also treats a record past its release time as
    gone, so release behaviour can be tested without waiting in real time.
    """

    def __init__(
        self,
        *,
        release_after_seconds: float = DEFAULT_RELEASE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize an empty tracker.

        Args:
            release_after_seconds: Delay from the mark until a record is released.
            clock: Monotonic time source in seconds (injected for tests).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._release_after = release_after_seconds
        self._clock = clock
        self._store: dict[str, DispatchRecord] = {}
        self._timers: dict[str, asyncio.TimerHandle] = {}
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, listing_id: object) -> bool:
        return isinstance(listing_id, str) and self.is_dispatched(listing_id)

    def mark_dispatched(self, listing_id: str) -> None:
        """Record listing_id as dispatched and arm its release.

        The record expires release_after_seconds after this call. A second mark
        keeps the first record.
        """
        key = listing_id.strip()
        if self.is_dispatched(key):
            return
        record = DispatchRecord.create(
            key, dispatched_at=self._clock(), release_after=self._release_after
        )
        self._store[key] = record
        self._arm_timer(key, record.release_at)

    def is_dispatched(self, listing_id: str) -> bool:
        key = listing_id.strip()
        record = self._store.get(key)
        if record is None:
            return False
        if record.is_expired(self._clock()):
            self._drop(key, reason="expired")
            return False
        return True

    def schedule_release(self, listing_id: str, after: float | None = None) -> None:
        """Move the release of listing_id to `after` seconds from its dispatch time.

        The delay is measured from the mark, not from this call. Without a running
        event loop only the clock check in is_dispatched() applies.
        """
        key = listing_id.strip()
        record = self._store.get(key)
        if record is None:
            return
        delay = self._release_after if after is None else after
        release_at = record.dispatched_at + delay
        self._store[key] = record.with_release_at(release_at)
        self._arm_timer(key, release_at)

    def _arm_timer(self, key: str, release_at: float) -> None:
        previous = self._timers.pop(key, None)
        if previous is not None:
            previous.cancel()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        remaining = max(0.0, release_at - self._clock())
        self._timers[key] = loop.call_later(remaining, self._on_release_timer, key)

    def release(self, listing_id: str) -> bool:
        key = listing_id.strip()
        timer = self._timers.pop(key, None)
        if timer is not None:
            timer.cancel()
        return self._drop(key, reason="manual")

    def release_expired(self) -> int:
        """Drop every record past its release time. Returns how many were dropped."""
        now = self._clock()
        expired = [k for k, r in self._store.items() if r.is_expired(now)]
        for key in expired:
            timer = self._timers.pop(key, None)
            if timer is not None:
                timer.cancel()
            self._drop(key, reason="expired")
        return len(expired)

    def close(self) -> None:
        for timer in self._timers.values():
            timer.cancel()
        self._timers.clear()

    def _on_release_timer(self, key: str) -> None:
        self._timers.pop(key, None)
        self._drop(key, reason="timer")

    def _drop(self, key: str, *, reason: str) -> bool:
        record = self._store.pop(key, None)
        if record is None:
            return False
        self._logger.info(
            "dispatch_tracker_released",
            listing_id=key,
            release_reason=reason,
            tracked_count=len(self._store),
        )
        return True
