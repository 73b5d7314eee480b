# -*- coding: utf-8 -*-
"""Repository interfaces (abstractions). Implementations live in in_memory/, etc."""

from p2p_sell_bot.persistence.repositories.interfaces.dispatch_tracker import (
    IDispatchTracker,
)

__all__ = ["IDispatchTracker"]
