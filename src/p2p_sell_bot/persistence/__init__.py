"""Persistence layer (repositories, etc.)."""

from p2p_sell_bot.persistence.repositories import IDispatchTracker, InMemoryDispatchTracker

__all__ = ["IDispatchTracker", "InMemoryDispatchTracker"]
