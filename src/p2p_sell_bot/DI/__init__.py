"""Dependency injection."""

from p2p_sell_bot.DI.container import Container

__all__ = ["Container"]
