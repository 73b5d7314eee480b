# -*- coding: utf-8 -*-
"""
Entry point for the sell bot.

Orchestrates: logging, settings, container, credential bootstrap, refresh timers,
sale monitor, shutdown (SIGINT/SIGTERM or CancelledError).

Run with: python -m p2p_sell_bot.main  (or the `p2p-sell-bot` script)
"""
from __future__ import annotations

import asyncio
import signal
import structlog

from p2p_sell_bot.DI import Container
from p2p_sell_bot.config import get_settings
from p2p_sell_bot.exceptions import MissingRequiredConfigError
from p2p_sell_bot.logging.config import configure_logging
from p2p_sell_bot.utils import is_steam_id, mask_identifier


def _setup_signals(shutdown_event: asyncio.Event) -> None:
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, shutdown_event.set)
        except NotImplementedError:
            pass  # Windows has no add_signal_handler


async def run() -> None:
    configure_logging()
    logger = structlog.get_logger("main")
    settings = get_settings()
    seller_id = settings.account.seller_id.strip()
    if not seller_id:
        logger.error(
            "main_missing_seller_id",
            message="ACCOUNT__SELLER_ID is not set",
        )
        raise MissingRequiredConfigError("ACCOUNT__SELLER_ID")
    if not is_steam_id(seller_id):
        logger.warning(
            "main_seller_id_unusual",
            seller_id_masked=mask_identifier(seller_id),
            message="ACCOUNT__SELLER_ID does not look like a SteamID64",
        )

    container = Container()
    runner = container.runner()
    http_client = container.http_client()
    shutdown_event = asyncio.Event()
    _setup_signals(shutdown_event)

    logger.info(
        "main_sell_bot_starting",
        seller_id_masked=mask_identifier(seller_id),
        poll_seconds=settings.monitor.poll_seconds,
        cookie_refresh_hours=settings.monitor.cookie_refresh_hours,
        token_refresh_minutes=settings.monitor.token_refresh_minutes,
        dedup_release_minutes=settings.monitor.dedup_release_minutes,
    )
    try:
        await runner.run(shutdown_event)
    finally:
        await http_client.aclose()
        logger.info("main_shutdown_complete")


def main() -> None:
    asyncio.run(run())


__all__ = ["run", "main"]

if __name__ == "__main__":
    main()
