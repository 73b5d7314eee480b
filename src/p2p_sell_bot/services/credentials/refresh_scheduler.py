# -*- coding: utf-8 -*-
"""Bootstrap and periodic refresh of the session cookie and access token."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import structlog

from p2p_sell_bot.exceptions import CredentialFetchError
from p2p_sell_bot.models.credential import CredentialKind
from p2p_sell_bot.services.scheduling import PeriodicTask

if TYPE_CHECKING:
    from p2p_sell_bot.config import Settings
    from p2p_sell_bot.services.credentials.credential_store import CredentialStore
    from p2p_sell_bot.services.credentials.provider import ICredentialProvider


class CredentialRefreshScheduler:
    """Keeps the CredentialStore fresh.

    bootstrap() fetches the cookie and then the token (the token request needs
    the cookie). start() runs two independent timers: cookie every
    monitor.cookie_refresh_hours, token every monitor.token_refresh_minutes.
    A failed refresh keeps the previous value and the next tick retries.
    """

    def __init__(
        self,
        settings: Settings,
        store: CredentialStore,
        provider: ICredentialProvider,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize the scheduler.

        Args:
            settings: Application settings (uses settings.monitor intervals).
            store: Credential store to update in place.
            provider: Where cookies and tokens come from.
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._settings = settings
        self._store = store
        self._provider = provider
        self._get_logger = get_logger
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._tasks: list[PeriodicTask] = []

    async def bootstrap(self) -> bool:
        """Fetch cookie then token, in that order. Returns True if both are available."""
        await self.refresh_cookie()
        await self.refresh_token()
        ready = self._store.ready
        self._logger.info("credentials_bootstrapped", credentials_ready=ready)
        return ready

    async def refresh_cookie(self) -> bool:
        """Fetch a new session cookie. On failure the stored cookie is left unchanged."""
        try:
            cookie = await self._provider.fetch_session_cookie()
            self._store.set(CredentialKind.SESSION_COOKIE, cookie)
        except (CredentialFetchError, ValueError) as e:
            self._log_refresh_failed(CredentialKind.SESSION_COOKIE, e)
            return False
        self._logger.info("credential_updated", credential_kind=CredentialKind.SESSION_COOKIE.value)
        return True

    async def refresh_token(self) -> bool:
        """Fetch a new access token with the current cookie.

        Skipped while no cookie is stored, so the token endpoint is never called
        with an empty cookie.
        """
        cookie = self._store.session_cookie
        if not cookie:
            self._logger.warning(
                "credential_refresh_skipped",
                credential_kind=CredentialKind.ACCESS_TOKEN.value,
                reason="missing_session_cookie",
            )
            return False
        try:
            token = await self._provider.fetch_access_token(cookie)
            self._store.set(CredentialKind.ACCESS_TOKEN, token)
        except (CredentialFetchError, ValueError) as e:
            self._log_refresh_failed(CredentialKind.ACCESS_TOKEN, e)
            return False
        self._logger.info("credential_updated", credential_kind=CredentialKind.ACCESS_TOKEN.value)
        return True

    async def start(self) -> None:
        """Start both refresh timers. First ticks fire one interval after start. Idempotent."""
        if self._tasks:
            return
        monitor = self._settings.monitor
        self._tasks = [
            PeriodicTask(
                "cookie_refresh",
                self.refresh_cookie,
                monitor.cookie_refresh_seconds,
                get_logger=self._get_logger,
            ),
            PeriodicTask(
                "token_refresh",
                self.refresh_token,
                monitor.token_refresh_seconds,
                get_logger=self._get_logger,
            ),
        ]
        for task in self._tasks:
            await task.start()

    async def stop(self) -> None:
        """Cancel both refresh timers. Idempotent."""
        tasks, self._tasks = self._tasks, []
        for task in tasks:
            await task.stop()

    def _log_refresh_failed(self, kind: CredentialKind, error: Exception) -> None:
        self._logger.error(
            "credential_refresh_failed",
            credential_kind=kind.value,
            credential_stale=self._store.has(kind),
            error_type=type(error).__name__,
            error_message=str(error),
            http_status_code=getattr(error, "status_code", None),
        )
