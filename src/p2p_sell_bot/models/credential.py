"""Credential kinds used to authenticate marketplace calls."""

from __future__ import annotations

from enum import Enum


class CredentialKind(str, Enum):
    """The two independently expiring secrets."""

    SESSION_COOKIE = "session_cookie"
    """Browser-derived Cookie header value; lasts a few hours."""
    ACCESS_TOKEN = "access_token"
    """Bearer token derived from the session cookie; expires after ~30 minutes."""
