# -*- coding: utf-8 -*-
"""Fixed-rate background job with an in-flight guard.

Ticks fire every `interval_seconds` on the loop clock, independent of how long
a run takes. A tick that fires while the previous run is still in flight is
skipped, so two runs of the same job never overlap. Exceptions from a run are
logged and do not stop the schedule.
"""

from __future__ import annotations

import asyncio
import structlog
from collections.abc import Awaitable, Callable
from types import TracebackType
from typing import Any, Optional, Type


class PeriodicTask:
    """Runs `func` every `interval_seconds` until stop().

    Use start()/stop() or `async with task:`.
    """

    def __init__(
        self,
        name: str,
        func: Callable[[], Awaitable[Any]],
        interval_seconds: float,
        *,
        run_immediately: bool = False,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the job.

        Args:
            name: Job name used in log events.
            func: Coroutine function to run on every tick.
            interval_seconds: Tick period (must be > 0).
            run_immediately: If True, the first tick fires at start() instead of one interval later.
            get_logger: Logger factory (injected).
            logger_name: Optional logger name (defaults to class name).
        """
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be > 0")
        self._name = name
        self._func = func
        self._interval = interval_seconds
        self._run_immediately = run_immediately
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._lock = asyncio.Lock()
        self._running = False
        self._loop_task: Optional[asyncio.Task[None]] = None
        self._inflight: Optional[asyncio.Task[None]] = None
        self.runs = 0
        self.skipped_ticks = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def running(self) -> bool:
        return self._running

    async def __aenter__(self) -> PeriodicTask:
        await self.start()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> bool:
        await self.stop()
        return False

    async def start(self) -> None:
        """Start ticking in a background task. Idempotent."""
        async with self._lock:
            if self._running:
                return
            self._running = True
            self._loop_task = asyncio.create_task(self._tick_loop(), name=f"periodic:{self._name}")

    async def stop(self) -> None:
        """Cancel the schedule and any in-flight run, and wait for both. Idempotent."""
        async with self._lock:
            if not self._running:
                return
            self._running = False
            tasks = [t for t in (self._loop_task, self._inflight) if t is not None]
            self._loop_task = None
            self._inflight = None
        for task in tasks:
            task.cancel()
        for task in tasks:
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._logger.debug("periodic_task_stopped", periodic_task=self._name)

    async def _tick_loop(self) -> None:
        loop = asyncio.get_running_loop()
        next_at = loop.time() + (0.0 if self._run_immediately else self._interval)
        self._logger.debug(
            "periodic_task_started",
            periodic_task=self._name,
            periodic_interval_seconds=self._interval,
        )
        while True:
            delay = next_at - loop.time()
            if delay > 0:
                await asyncio.sleep(delay)
            next_at += self._interval
            # Missed ticks (e.g. the process was suspended) are dropped, not replayed.
            while next_at <= loop.time():
                next_at += self._interval

            if self._inflight is not None and not self._inflight.done():
                self.skipped_ticks += 1
                self._logger.warning(
                    "periodic_task_tick_skipped",
                    periodic_task=self._name,
                    periodic_skipped_ticks=self.skipped_ticks,
                )
                continue
            self._inflight = asyncio.create_task(self._run_once())

    async def _run_once(self) -> None:
        self.runs += 1
        try:
            await self._func()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self._logger.exception(
                "periodic_task_run_failed",
                periodic_task=self._name,
                error_type=type(e).__name__,
                error_message=str(e),
            )
