# -*- coding: utf-8 -*-
"""Sale monitor: polls active listings, answers sales and dispatches transfers."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, cast

import structlog
from structlog.contextvars import bound_contextvars

from p2p_sell_bot.exceptions import ConfirmSaleError, DispatchError, ListingsFetchError
from p2p_sell_bot.models.listing import Listing
from p2p_sell_bot.models.transfer import TransferRequest
from p2p_sell_bot.services.classification import (
    AnswerSale,
    DispatchTransfer,
    NoAction,
    classify_listing,
)
from p2p_sell_bot.services.scheduling import PeriodicTask
from p2p_sell_bot.utils.validation import mask_identifier

if TYPE_CHECKING:
    from p2p_sell_bot.clients.marketplace import MarketplaceApiClient
    from p2p_sell_bot.config import Settings
    from p2p_sell_bot.persistence.repositories.interfaces import IDispatchTracker
    from p2p_sell_bot.services.credentials import CredentialStore
    from p2p_sell_bot.services.transfer import ITransferDispatcher


@dataclass(slots=True)
class PollSummary:
    """Counters for one poll cycle."""

    listings: int = 0
    answered: int = 0
    dispatched: int = 0
    ignored: int = 0
    failed: int = 0
    fetch_failed: bool = False
    skipped: bool = False


class SaleMonitor:
    """Polls the seller's active listings and acts on each one.

    Every cycle classifies the latest snapshot against the dispatch tracker.
    Per-listing work runs concurrently and is awaited before the cycle ends;
    one listing's failure never affects its siblings. Transfers are started as
    background tasks so a slow dispatcher never holds up polling.
    """

    def __init__(
        self,
        settings: Settings,
        marketplace_api: MarketplaceApiClient,
        credential_store: CredentialStore,
        dispatch_tracker: IDispatchTracker,
        transfer_dispatcher: ITransferDispatcher,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize the monitor.

        Args:
            settings: Application settings (account.seller_id, monitor.*, transfer.source_tag).
            marketplace_api: Listings and sale-answer endpoints.
            credential_store: Current cookie and token, read at call time.
            dispatch_tracker: Remembers listings whose transfer was already dispatched.
            transfer_dispatcher: Starts item transfers to buyers.
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._settings = settings
        self._api = marketplace_api
        self._store = credential_store
        self._tracker = dispatch_tracker
        self._dispatcher = transfer_dispatcher
        self._get_logger = get_logger
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._poll_task: PeriodicTask | None = None
        self._dispatch_tasks: set[asyncio.Task[None]] = set()
        self._dispatch_failures = 0

    @property
    def seller_id(self) -> str:
        return self._settings.account.seller_id.strip()

    @property
    def pending_dispatches(self) -> int:
        return len(self._dispatch_tasks)

    @property
    def dispatch_failures(self) -> int:
        """Transfers whose dispatch raised since the monitor was created."""
        return self._dispatch_failures

    async def start(self) -> None:
        """Poll now and then every monitor.poll_seconds. Idempotent."""
        if self._poll_task is not None:
            return
        self._poll_task = PeriodicTask(
            "sale_monitor_poll",
            self.poll_once,
            self._settings.monitor.poll_seconds,
            run_immediately=True,
            get_logger=self._get_logger,
        )
        await self._poll_task.start()
        self._logger.info(
            "sale_monitor_started",
            seller_id_masked=mask_identifier(self.seller_id),
            poll_seconds=self._settings.monitor.poll_seconds,
        )

    async def stop(self) -> None:
        """Stop polling; the in-flight cycle and pending transfers are cancelled. Idempotent."""
        task, self._poll_task = self._poll_task, None
        if task is not None:
            await task.stop()
            self._logger.info("sale_monitor_stopped")
        pending = list(self._dispatch_tasks)
        if pending:
            for dispatch in pending:
                dispatch.cancel()
            await asyncio.gather(*pending, return_exceptions=True)
            self._logger.warning("sale_monitor_dispatches_cancelled", count=len(pending))

    async def wait_for_dispatches(self) -> None:
        """Wait until every transfer started so far has finished."""
        if self._dispatch_tasks:
            await asyncio.gather(*list(self._dispatch_tasks), return_exceptions=True)

    async def poll_once(self) -> PollSummary:
        """Run one poll cycle. Never raises for fetch, answer or dispatch failures."""
        summary = PollSummary()
        if not self._store.ready:
            summary.skipped = True
            self._logger.warning("sale_monitor_poll_skipped", reason="credentials_not_ready")
            return summary

        listings = await self._fetch_listings(summary)
        summary.listings = len(listings)
        if listings:
            await asyncio.gather(*(self._process_listing(x, summary) for x in listings))
        self._logger.debug(
            "sale_monitor_poll_completed",
            listings=summary.listings,
            answered=summary.answered,
            dispatched=summary.dispatched,
            ignored=summary.ignored,
            failed=summary.failed,
        )
        return summary

    async def _fetch_listings(self, summary: PollSummary) -> list[Listing]:
        try:
            raw = await self._api.get_active_listings(
                self._store.access_token, self._store.session_cookie
            )
        except ListingsFetchError as e:
            summary.fetch_failed = True
            self._logger.error(
                "sale_monitor_listings_fetch_failed",
                error_type=type(e).__name__,
                error_message=str(e),
                http_status_code=e.status_code,
            )
            return []

        listings: list[Listing] = []
        for item in raw:
            try:
                listings.append(Listing.from_response(cast(dict[str, Any], item)))
            except (TypeError, ValueError, AttributeError) as e:
                summary.failed += 1
                self._logger.warning(
                    "sale_monitor_listing_unparseable",
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
        return listings

    async def _process_listing(self, listing: Listing, summary: PollSummary) -> None:
        with bound_contextvars(listing_id=listing.id, item_name=listing.item.name):
            try:
                # Classification and the dispatch mark run before the first await.
                action = classify_listing(
                    listing,
                    self.seller_id,
                    is_dispatched=self._tracker.is_dispatched,
                )
                if isinstance(action, AnswerSale):
                    await self._answer_sale(action, summary)
                elif isinstance(action, DispatchTransfer):
                    self._start_transfer(action, summary)
                elif isinstance(action, NoAction):
                    summary.ignored += 1
            except Exception as e:
                summary.failed += 1
                self._logger.exception(
                    "sale_monitor_listing_failed",
                    error_type=type(e).__name__,
                    error_message=str(e),
                )

    async def _answer_sale(self, action: AnswerSale, summary: PollSummary) -> None:
        try:
            await self._api.confirm_sale(
                action.listing_id,
                self._store.access_token,
                self._store.session_cookie,
            )
        except ConfirmSaleError as e:
            summary.failed += 1
            self._logger.error(
                "sale_monitor_answer_sale_failed",
                error_type=type(e).__name__,
                error_message=str(e),
                http_status_code=e.status_code,
            )
            return
        summary.answered += 1

    def _start_transfer(self, action: DispatchTransfer, summary: PollSummary) -> None:
        if not action.destination or not action.asset_id:
            summary.failed += 1
            self._logger.warning(
                "sale_monitor_dispatch_incomplete_listing",
                has_destination=bool(action.destination),
                has_asset_id=bool(action.asset_id),
            )
            return

        self._tracker.mark_dispatched(action.listing_id)
        # The mark stays until release even if the dispatch fails.
        self._tracker.schedule_release(
            action.listing_id, self._settings.monitor.dedup_release_seconds
        )
        self._logger.info("sale_monitor_buyer_matched", message="Sending trade offer")
        request = TransferRequest.create(
            destination=action.destination,
            asset_id=action.asset_id,
            source_tag=self._settings.transfer.source_tag,
            metadata={"item_name": action.item_name, "listing_id": action.listing_id},
        )
        task = asyncio.create_task(
            self._run_dispatch(request), name=f"transfer_dispatch:{action.listing_id}"
        )
        self._dispatch_tasks.add(task)
        task.add_done_callback(self._dispatch_tasks.discard)
        summary.dispatched += 1

    async def _run_dispatch(self, request: TransferRequest) -> None:
        try:
            await self._dispatcher.dispatch(request)
        except DispatchError as e:
            self._dispatch_failures += 1
            self._logger.error(
                "sale_monitor_dispatch_failed",
                error_type=type(e).__name__,
                error_message=str(e),
            )
        except Exception as e:
            self._dispatch_failures += 1
            self._logger.exception(
                "sale_monitor_dispatch_crashed",
                error_type=type(e).__name__,
                error_message=str(e),
            )
