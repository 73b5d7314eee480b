# -*- coding: utf-8 -*-
"""Unit tests for cookie helpers."""

from __future__ import annotations

from p2p_sell_bot.utils.cookies import filter_cookies, unify_cookies
from p2p_sell_bot.utils.validation import is_steam_id, mask_identifier


def test_filter_cookies_keeps_marketplace_domains() -> None:
    cookies = [
        {"name": "a", "value": "1", "domain": ".clash.gg"},
        {"name": "b", "value": "2", "domain": "google.com"},
        {"name": "c", "value": "3", "domain": "clash.gg"},
        {"name": "d", "value": "4"},
    ]

    kept = filter_cookies(cookies, "clash.gg")

    assert [c["name"] for c in kept] == ["a", "c"]


def test_unify_cookies_joins_name_value_pairs() -> None:
    cookies = [{"name": "a", "value": "1"}, {"name": "b", "value": "2"}]
    assert unify_cookies(cookies) == "a=1; b=2"


def test_unify_cookies_single_and_empty() -> None:
    assert unify_cookies([{"name": "a", "value": "1"}]) == "a=1"
    assert unify_cookies([]) == ""


def test_is_steam_id() -> None:
    assert is_steam_id("76561198000000001")
    assert not is_steam_id("7656119800000000")
    assert not is_steam_id("abc")
    assert not is_steam_id(None)


def test_mask_identifier() -> None:
    assert mask_identifier("76561198000000001") == "765611...0001"
    assert mask_identifier("short") == "***"
    assert mask_identifier(None) == "***"
