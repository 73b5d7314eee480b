"""In-memory repository implementations."""

from p2p_sell_bot.persistence.repositories.in_memory.dispatch_tracker import (
    DEFAULT_RELEASE_SECONDS,
    InMemoryDispatchTracker,
)

__all__ = ["DEFAULT_RELEASE_SECONDS", "InMemoryDispatchTracker"]
