# -*- coding: utf-8 -*-
"""Dependency injection container (dependency-injector)."""

from __future__ import annotations

from dependency_injector import containers, providers

from p2p_sell_bot.clients.browser import BrowserCookieSource
from p2p_sell_bot.clients.http import AsyncHttpClient
from p2p_sell_bot.clients.marketplace import MarketplaceApiClient
from p2p_sell_bot.config import Settings, get_settings
from p2p_sell_bot.persistence.repositories.in_memory import InMemoryDispatchTracker
from p2p_sell_bot.services.credentials import (
    CredentialRefreshScheduler,
    CredentialStore,
    MarketplaceCredentialProvider,
)
from p2p_sell_bot.services.runner import SellBotRunner
from p2p_sell_bot.services.sale_monitor import SaleMonitor
from p2p_sell_bot.services.transfer import LoggingTransferDispatcher


def _build_dispatch_tracker(settings: Settings) -> InMemoryDispatchTracker:
    """Build the dispatch tracker with the release delay from settings."""
    return InMemoryDispatchTracker(
        release_after_seconds=settings.monitor.dedup_release_seconds,
    )


class Container(containers.DeclarativeContainer):
    """Application container. Wires settings, clients, credentials, tracker, monitor, runner."""

    config = providers.Callable(get_settings)

    http_client = providers.Singleton(
        AsyncHttpClient,
        settings=config,
    )

    marketplace_api_client = providers.Singleton(
        MarketplaceApiClient,
        http_client=http_client,
        settings=config,
    )

    browser_cookie_source = providers.Singleton(
        BrowserCookieSource,
        settings=config,
    )

    credential_provider = providers.Singleton(
        MarketplaceCredentialProvider,
        cookie_source=browser_cookie_source,
        marketplace_api=marketplace_api_client,
    )

    credential_store = providers.Singleton(CredentialStore)

    credential_refresh_scheduler = providers.Singleton(
        CredentialRefreshScheduler,
        settings=config,
        store=credential_store,
        provider=credential_provider,
    )

    dispatch_tracker = providers.Singleton(_build_dispatch_tracker, config)

    transfer_dispatcher = providers.Singleton(LoggingTransferDispatcher)

    sale_monitor = providers.Singleton(
        SaleMonitor,
        settings=config,
        marketplace_api=marketplace_api_client,
        credential_store=credential_store,
        dispatch_tracker=dispatch_tracker,
        transfer_dispatcher=transfer_dispatcher,
    )

    runner = providers.Singleton(
        SellBotRunner,
        refresh_scheduler=credential_refresh_scheduler,
        sale_monitor=sale_monitor,
        dispatch_tracker=dispatch_tracker,
    )
