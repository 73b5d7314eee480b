"""Item transfer dispatch."""

from p2p_sell_bot.services.transfer.dispatcher import (
    ITransferDispatcher,
    LoggingTransferDispatcher,
)

__all__ = ["ITransferDispatcher", "LoggingTransferDispatcher"]
