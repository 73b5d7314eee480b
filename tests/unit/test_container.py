# -*- coding: utf-8 -*-
"""Unit tests for the DI container wiring."""

from __future__ import annotations

from dependency_injector import providers

from p2p_sell_bot.config import Settings
from p2p_sell_bot.DI import Container
from p2p_sell_bot.services import SaleMonitor, SellBotRunner


def test_container_wires_shared_singletons(settings: Settings) -> None:
    container = Container()
    container.config.override(providers.Object(settings))

    runner = container.runner()
    monitor = container.sale_monitor()

    assert isinstance(runner, SellBotRunner)
    assert isinstance(monitor, SaleMonitor)
    assert monitor.seller_id == settings.account.seller_id
    assert container.credential_store() is container.credential_store()
    assert container.dispatch_tracker() is container.dispatch_tracker()
