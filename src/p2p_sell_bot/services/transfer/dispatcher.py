# -*- coding: utf-8 -*-
"""Transfer dispatcher interface and the default logging dispatcher."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

import structlog

from p2p_sell_bot.models.transfer import TransferRequest
from p2p_sell_bot.utils.validation import mask_identifier


class ITransferDispatcher(ABC):
    """Initiates an item transfer (e.g. a Steam trade offer) to a buyer.

    dispatch() only starts the transfer; the outcome (accepted, declined,
    cancelled) is observed by the implementation, not reported back.
    Implementations raise DispatchError when the transfer cannot be started.
    """

    @abstractmethod
    async def dispatch(self, request: TransferRequest) -> None:
        ...


class LoggingTransferDispatcher(ITransferDispatcher):
    """Writes each transfer request to the log without sending anything. Keeps no state.

    Default wiring until a real trade-offer dispatcher is injected.
    """

    def __init__(
        self,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def dispatch(self, request: TransferRequest) -> None:
        self._logger.info(
            "transfer_dispatch_requested",
            transfer_destination_masked=mask_identifier(request.destination),
            transfer_asset_id=request.asset_id,
            transfer_source=request.source_tag,
            transfer_cancel_after_seconds=request.cancel_after_seconds,
            item_name=request.metadata.get("item_name"),
            listing_id=request.metadata.get("listing_id"),
        )
