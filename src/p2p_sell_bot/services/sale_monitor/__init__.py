"""Sale monitor (poll loop)."""

from p2p_sell_bot.services.sale_monitor.sale_monitor import PollSummary, SaleMonitor

__all__ = ["PollSummary", "SaleMonitor"]
