"""Orchestrator: bootstraps credentials, runs refresh timers and the sale monitor until shutdown."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from p2p_sell_bot.persistence.repositories.interfaces import IDispatchTracker
    from p2p_sell_bot.services.credentials import CredentialRefreshScheduler
    from p2p_sell_bot.services.sale_monitor import SaleMonitor


class SellBotRunner:
    """Owns the lifecycle of every background job.

    Order on start: credential bootstrap (cookie, then token), refresh timers,
    sale monitor (first poll immediately). On shutdown everything is stopped and
    pending dispatch releases are cancelled.
    """

    def __init__(
        self,
        refresh_scheduler: CredentialRefreshScheduler,
        sale_monitor: SaleMonitor,
        dispatch_tracker: IDispatchTracker,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize the runner.

        Args:
            refresh_scheduler: Credential bootstrap and refresh timers.
            sale_monitor: Poll loop.
            dispatch_tracker: Closed on shutdown to cancel release timers.
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._scheduler = refresh_scheduler
        self._monitor = sale_monitor
        self._tracker = dispatch_tracker
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def start(self) -> None:
        ready = await self._scheduler.bootstrap()
        if not ready:
            self._logger.warning(
                "runner_credentials_not_ready",
                message="Polling will be skipped until credentials are refreshed",
            )
        await self._scheduler.start()
        await self._monitor.start()
        self._logger.info("runner_started")

    async def stop(self) -> None:
        await self._monitor.stop()
        await self._scheduler.stop()
        self._tracker.close()
        self._logger.info("runner_stopped")

    async def run(self, shutdown_event: asyncio.Event) -> None:
        """Start everything, wait for shutdown_event or cancellation, stop everything."""
        await self.start()
        try:
            await shutdown_event.wait()
            self._logger.info("runner_shutdown_started")
        except asyncio.CancelledError:
            self._logger.info(
                "runner_shutdown_cancelled",
                message="Task cancelled; stopping system",
            )
            raise
        finally:
            await self.stop()
