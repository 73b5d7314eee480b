"""Helpers to turn browser cookies into a Cookie header value."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any


def filter_cookies(
    cookies: Iterable[Mapping[str, Any]], domain: str
) -> list[Mapping[str, Any]]:
    """Keep cookies whose domain contains `domain` (e.g. ".clash.gg", "clash.gg")."""
    return [c for c in cookies if domain in str(c.get("domain") or "")]


def unify_cookies(cookies: Iterable[Mapping[str, Any]]) -> str:
    """Join cookies as `name=value; name2=value2`. Order is irrelevant to the server."""
    return "; ".join(f"{c.get('name')}={c.get('value')}" for c in cookies)
