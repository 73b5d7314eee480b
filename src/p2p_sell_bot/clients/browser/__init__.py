"""Browser automation (Chrome DevTools) for session cookies."""

from p2p_sell_bot.clients.browser.cookie_source import BrowserCookieSource

__all__ = ["BrowserCookieSource"]
