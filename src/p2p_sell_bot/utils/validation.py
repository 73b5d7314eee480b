"""Validation and masking helpers for identifiers that end up in logs."""

from __future__ import annotations

from typing import Any


def is_steam_id(value: Any) -> bool:
    """Return True if value looks like a SteamID64 (17 decimal digits)."""
    if not isinstance(value, str):
        return False
    s = value.strip()
    return len(s) == 17 and s.isdigit()


def mask_identifier(value: str | None) -> str:
    """Return a masked identifier for logging (e.g. 765611...4321)."""
    if not value or len(value) < 10:
        return "***"
    return f"{value[:6]}...{value[-4:]}"
