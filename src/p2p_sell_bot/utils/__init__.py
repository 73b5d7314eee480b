# -*- coding: utf-8 -*-
"""Utility modules."""

from p2p_sell_bot.utils.cookies import filter_cookies, unify_cookies
from p2p_sell_bot.utils.validation import is_steam_id, mask_identifier

__all__ = ["filter_cookies", "is_steam_id", "mask_identifier", "unify_cookies"]
