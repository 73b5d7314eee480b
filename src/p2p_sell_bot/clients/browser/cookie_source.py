# -*- coding: utf-8 -*-
"""Session cookie harvesting from a Chrome instance running in remote-debugging mode.

Flow: open a blank target over the DevTools HTTP endpoint, connect to its
WebSocket, navigate to the marketplace, wait for the load event, read all
cookies, close the target. Chrome must be started with
--remote-debugging-port and be logged in to the marketplace.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Optional

import aiohttp
import structlog

from p2p_sell_bot.config import Settings
from p2p_sell_bot.exceptions import BrowserAutomationError
from p2p_sell_bot.utils.cookies import filter_cookies, unify_cookies


class _DevToolsConnection:
    """Request/response and event bookkeeping over one DevTools WebSocket."""

    def __init__(self, ws: aiohttp.ClientWebSocketResponse) -> None:
        self._ws = ws
        self._next_id = 0
        self._events: list[str] = []

    def clear_events(self) -> None:
        self._events.clear()

    async def call(self, method: str, params: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        self._next_id += 1
        msg_id = self._next_id
        await self._ws.send_json({"id": msg_id, "method": method, "params": params or {}})
        while True:
            message = await self._receive()
            if message.get("id") == msg_id:
                if "error" in message:
                    raise BrowserAutomationError(f"{method} failed: {message['error']}")
                return message.get("result") or {}
            if "method" in message:
                self._events.append(message["method"])

    async def wait_for_event(self, name: str) -> None:
        while name not in self._events:
            message = await self._receive()
            if "method" in message:
                self._events.append(message["method"])

    async def _receive(self) -> dict[str, Any]:
        msg = await self._ws.receive()
        if msg.type == aiohttp.WSMsgType.TEXT:
            data = msg.json()
            return data if isinstance(data, dict) else {}
        if msg.type in (
            aiohttp.WSMsgType.CLOSE,
            aiohttp.WSMsgType.CLOSING,
            aiohttp.WSMsgType.CLOSED,
            aiohttp.WSMsgType.ERROR,
        ):
            raise BrowserAutomationError("DevTools connection closed")
        return {}


class BrowserCookieSource:
    """Reads the marketplace session cookie out of a running browser."""

    def __init__(
        self,
        settings: Settings,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the source.

        Args:
            settings: Application settings (uses settings.browser).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._settings = settings
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def _devtools_url(self, path: str) -> str:
        return f"{self._settings.browser.devtools_url.rstrip('/')}/{path.lstrip('/')}"

    async def fetch_cookie_header(self) -> str:
        """Return the marketplace cookies joined into one Cookie header value.

        Raises:
            BrowserAutomationError: If the browser cannot be reached or returns no cookies.
        """
        cookies = await self.get_cookies()
        marketplace_cookies = filter_cookies(cookies, self._settings.browser.cookie_domain)
        self._logger.debug(
            "browser_cookies_read",
            browser_cookies_total=len(cookies),
            browser_cookies_kept=len(marketplace_cookies),
        )
        if not marketplace_cookies:
            raise BrowserAutomationError(
                f"No cookies for {self._settings.browser.cookie_domain} in the browser"
            )
        return unify_cookies(marketplace_cookies)

    async def get_cookies(self) -> list[dict[str, Any]]:
        """Load the marketplace page in a fresh target and return every browser cookie."""
        browser = self._settings.browser
        try:
            async with asyncio.timeout(browser.timeout_seconds):
                async with aiohttp.ClientSession() as session:
                    target = await self._open_target(session)
                    try:
                        return await self._read_cookies(session, target["webSocketDebuggerUrl"])
                    finally:
                        await self._close_target(session, target["id"])
        except BrowserAutomationError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError, KeyError, ValueError) as e:
            raise BrowserAutomationError(
                f"Error fetching cookies from {browser.devtools_url}: {type(e).__name__}",
                cause=e,
            ) from e

    async def _open_target(self, session: aiohttp.ClientSession) -> dict[str, Any]:
        async with session.put(self._devtools_url("/json/new?about:blank")) as response:
            response.raise_for_status()
            target = await response.json(content_type=None)
        if not isinstance(target, dict):
            raise BrowserAutomationError("DevTools /json/new returned no target")
        return target

    async def _read_cookies(
        self, session: aiohttp.ClientSession, ws_url: str
    ) -> list[dict[str, Any]]:
        async with session.ws_connect(ws_url, max_msg_size=0) as ws:
            devtools = _DevToolsConnection(ws)
            await devtools.call("Network.enable")
            await devtools.call("Page.enable")
            devtools.clear_events()
            await devtools.call("Page.navigate", {"url": self._settings.browser.page_url})
            await devtools.wait_for_event("Page.loadEventFired")
            result = await devtools.call("Network.getAllCookies")
        cookies = result.get("cookies")
        return [c for c in cookies if isinstance(c, dict)] if isinstance(cookies, list) else []

    async def _close_target(self, session: aiohttp.ClientSession, target_id: str) -> None:
        try:
            async with session.get(self._devtools_url(f"/json/close/{target_id}")) as response:
                await response.read()
        except aiohttp.ClientError as e:
            self._logger.debug(
                "browser_close_target_failed",
                browser_target_id=target_id,
                error_type=type(e).__name__,
                error_message=str(e),
            )
