# -*- coding: utf-8 -*-
"""Unit tests for SellBotRunner lifecycle."""

from __future__ import annotations

import asyncio
from types import SimpleNamespace
from typing import Any, cast
from unittest.mock import AsyncMock, MagicMock

import pytest

from p2p_sell_bot.services.runner import SellBotRunner


def _parts(calls: list[str]) -> tuple[SimpleNamespace, SimpleNamespace, SimpleNamespace]:
    def record(name: str, result: Any = None) -> AsyncMock:
        async def _side_effect(*_: Any) -> Any:
            calls.append(name)
            return result

        return AsyncMock(side_effect=_side_effect)

    scheduler = SimpleNamespace(
        bootstrap=record("bootstrap", True),
        start=record("scheduler_start"),
        stop=record("scheduler_stop"),
    )
    monitor = SimpleNamespace(start=record("monitor_start"), stop=record("monitor_stop"))
    tracker = SimpleNamespace(close=MagicMock(side_effect=lambda: calls.append("tracker_close")))
    return scheduler, monitor, tracker


def _runner(
    scheduler: SimpleNamespace, monitor: SimpleNamespace, tracker: SimpleNamespace
) -> SellBotRunner:
    return SellBotRunner(
        refresh_scheduler=cast(Any, scheduler),
        sale_monitor=cast(Any, monitor),
        dispatch_tracker=cast(Any, tracker),
    )


async def test_run_bootstraps_before_starting_and_stops_everything() -> None:
    calls: list[str] = []
    runner = _runner(*_parts(calls))
    shutdown = asyncio.Event()
    shutdown.set()

    await runner.run(shutdown)

    assert calls == [
        "bootstrap",
        "scheduler_start",
        "monitor_start",
        "monitor_stop",
        "scheduler_stop",
        "tracker_close",
    ]


async def test_cancellation_still_stops_everything() -> None:
    calls: list[str] = []
    runner = _runner(*_parts(calls))

    task = asyncio.create_task(runner.run(asyncio.Event()))
    await asyncio.sleep(0.01)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert calls[-3:] == ["monitor_stop", "scheduler_stop", "tracker_close"]


async def test_monitor_starts_even_when_credentials_not_ready() -> None:
    calls: list[str] = []
    scheduler, monitor, tracker = _parts(calls)
    scheduler.bootstrap = AsyncMock(return_value=False)
    shutdown = asyncio.Event()
    shutdown.set()

    await _runner(scheduler, monitor, tracker).run(shutdown)

    monitor.start.assert_awaited_once()
