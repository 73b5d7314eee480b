# -*- coding: utf-8 -*-
"""Async HTTP client with bounded retries and rate-limit handling."""

from __future__ import annotations

import asyncio
import random
import uuid
import aiohttp
import structlog
from typing import Any, Callable, Dict, Mapping, Optional
from structlog.contextvars import bound_contextvars

from p2p_sell_bot.config import Settings
from p2p_sell_bot.exceptions import MarketplaceAPIError


class AsyncHttpClient:
    """Async HTTP client for the marketplace API with 429 handling.

    Injects Settings and optionally an aiohttp.ClientSession. If no session
    is provided, one is created and must be closed via aclose() or used
    as an async context manager. settings.api.max_retries bounds the attempts
    per request (1 = single attempt).
    """

    def __init__(
        self,
        settings: Settings,
        *,
        session: Optional[aiohttp.ClientSession] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Configuration (timeout, max_retries, etc.).
            session: Optional shared aiohttp session. If None, the client
                creates and owns a session (call aclose() when done).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._settings = settings
        self._session = session
        self._owns_session = session is None
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self._settings.api.timeout_seconds)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session

    async def aclose(self) -> None:
        """Close the session if this client owns it."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> AsyncHttpClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    def _backoff_delay(self, attempt: int) -> float:
        """Exponential backoff with jitter, capped at 4 seconds."""
        base = min(4.0, 0.25 * (2**attempt))
        return base + random.uniform(0.0, 0.15)

    async def get(
        self,
        url: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Perform a GET request and return JSON.

        Raises:
            MarketplaceAPIError: If the request fails after all attempts.
        """
        return await self._request("GET", url, headers=headers, params=params)

    async def patch(
        self,
        url: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Perform a PATCH request with JSON body and return JSON (None for empty bodies).

        Raises:
            MarketplaceAPIError: If the request fails after all attempts.
        """
        return await self._request("PATCH", url, headers=headers, json=json or {})

    async def _request(
        self,
        method: str,
        url: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        request_id = uuid.uuid4().hex[:12]
        max_retries = self._settings.api.max_retries
        event_prefix = f"http_{method.lower()}"
        last_error: Optional[Exception] = None

        with bound_contextvars(
            http_method=method,
            http_url=url,
            http_request_id=request_id,
            http_max_retries=max_retries,
        ):
            for attempt in range(max_retries):
                with bound_contextvars(http_attempt=attempt + 1):
                    try:
                        session = await self._get_session()
                        async with session.request(
                            method,
                            url,
                            headers=dict(headers or {}),
                            params=params,
                            json=json,
                        ) as response:
                            if response.status == 429:
                                retry_after: Optional[float] = None
                                header = response.headers.get("Retry-After")
                                if header:
                                    try:
                                        retry_after = float(header)
                                    except ValueError:
                                        pass
                                self._logger.warning(
                                    f"{event_prefix}_rate_limited",
                                    http_status_code=429,
                                    http_retry_after_seconds=retry_after,
                                )
                                last_error = aiohttp.ClientResponseError(
                                    response.request_info,
                                    response.history,
                                    status=429,
                                    message="Too Many Requests",
                                )
                                if attempt + 1 < max_retries:
                                    if retry_after is not None and retry_after > 0:
                                        await asyncio.sleep(retry_after)
                                    else:
                                        await asyncio.sleep(self._backoff_delay(attempt))
                                continue

                            response.raise_for_status()
                            return await response.json(content_type=None)
                    except aiohttp.ClientResponseError as e:
                        last_error = e
                        self._logger.debug(
                            f"{event_prefix}_retry",
                            error_type=type(e).__name__,
                            error_message=str(e),
                            http_status_code=getattr(e, "status", None),
                        )
                    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                        last_error = e
                        self._logger.debug(
                            f"{event_prefix}_retry",
                            error_type=type(e).__name__,
                            error_message=str(e),
                        )
                    except ValueError as e:
                        # 2xx with a body that is not JSON, e.g. an HTML challenge page.
                        last_error = e
                        self._logger.debug(
                            f"{event_prefix}_invalid_json",
                            error_type=type(e).__name__,
                            error_message=str(e),
                        )
                    if attempt + 1 < max_retries:
                        await asyncio.sleep(self._backoff_delay(attempt))

            status_code = (
                getattr(last_error, "status", None)
                if isinstance(last_error, aiohttp.ClientResponseError)
                else None
            )
            self._logger.warning(
                f"{event_prefix}_failed",
                http_status_code=status_code,
                http_attempts=max_retries,
                error_type=type(last_error).__name__ if last_error else None,
                error_message=str(last_error) if last_error else None,
            )
            raise MarketplaceAPIError(
                f"{method} failed after {max_retries} attempt(s): {url}",
                url=url,
                status_code=status_code,
                cause=last_error,
            ) from last_error
