"""Background scheduling."""

from p2p_sell_bot.services.scheduling.periodic_task import PeriodicTask

__all__ = ["PeriodicTask"]
