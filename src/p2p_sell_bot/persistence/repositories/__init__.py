# -*- coding: utf-8 -*-
"""Repositories: interfaces (abstractions) and implementations (in_memory, etc.)."""

from p2p_sell_bot.persistence.repositories.in_memory import InMemoryDispatchTracker
from p2p_sell_bot.persistence.repositories.interfaces import IDispatchTracker

__all__ = ["IDispatchTracker", "InMemoryDispatchTracker"]
