"""Configuration subpackage."""

from p2p_sell_bot.config.config import (
    AccountSettings,
    ApiSettings,
    AppSettings,
    BrowserSettings,
    LoggingSettings,
    MonitorSettings,
    Settings,
    TransferSettings,
    get_settings,
)

__all__ = [
    "AccountSettings",
    "ApiSettings",
    "AppSettings",
    "BrowserSettings",
    "LoggingSettings",
    "MonitorSettings",
    "Settings",
    "TransferSettings",
    "get_settings",
]
