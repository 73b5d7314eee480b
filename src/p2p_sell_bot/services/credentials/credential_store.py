"""Holds the current session cookie and access token.

The store is the only owner of both values. Readers take the current value at
call time and must not keep it across poll cycles.
"""

from __future__ import annotations

from datetime import UTC, datetime

from p2p_sell_bot.models.credential import CredentialKind


class CredentialStore:
    """In-place holder for the two marketplace credentials. Values start empty."""

    def __init__(self) -> None:
        self._values: dict[CredentialKind, str] = {kind: "" for kind in CredentialKind}
        self._updated_at: dict[CredentialKind, datetime | None] = {
            kind: None for kind in CredentialKind
        }

    @property
    def session_cookie(self) -> str:
        return self._values[CredentialKind.SESSION_COOKIE]

    @property
    def access_token(self) -> str:
        return self._values[CredentialKind.ACCESS_TOKEN]

    def get(self, kind: CredentialKind) -> str:
        return self._values[kind]

    def set(self, kind: CredentialKind, value: str) -> None:
        """Replace the value for kind. Empty values are rejected so a stale value is kept."""
        if not value:
            raise ValueError(f"{kind.value} must be non-empty")
        self._values[kind] = value
        self._updated_at[kind] = datetime.now(UTC)

    def updated_at(self, kind: CredentialKind) -> datetime | None:
        return self._updated_at[kind]

    def has(self, kind: CredentialKind) -> bool:
        return bool(self._values[kind])

    @property
    def ready(self) -> bool:
        """True once both credentials have been fetched at least once."""
        return all(self._values.values())
