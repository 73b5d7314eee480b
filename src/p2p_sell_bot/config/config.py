# -*- coding: utf-8 -*-
"""Configuration loaded from environment via Pydantic Settings.

Nested env vars use <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, ACCOUNT__SELLER_ID.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Literal, Optional

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """General application configuration."""

    model_config = SettingsConfigDict(extra="ignore")

    app_name: str = "p2p-sell-bot"
    service_name: Optional[str] = None
    service_version: Optional[str] = None
    environment: Literal["development", "test", "production"] = "development"


class LoggingSettings(BaseSettings):
    """Structured logging configuration for structlog/stdlib/Logfire."""

    model_config = SettingsConfigDict(extra="ignore")

    # Per-target levels (only the 5 standard levels)
    console_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    logfire_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    log_to_console: bool = True
    log_to_file: bool = False
    log_file_path: str = "logs/sell_bot.log"
    # Rotated at UTC midnight; this many old files are kept.
    log_file_backup_count: int = 14

    # Main output format: JSONRenderer if True, ConsoleRenderer if False
    json_format: bool = False

    logfire_enabled: bool = False
    logfire_token: Optional[str] = None


class ApiSettings(BaseSettings):
    """Marketplace HTTP API (clash.gg Steam P2P endpoints)."""

    model_config = SettingsConfigDict(extra="ignore")

    host: str = Field(
        default="https://clash.gg",
        description="Marketplace base URL.",
    )
    active_listings_path: str = Field(
        default="/api/steam-p2p/listings/my-active",
        description="GET: the seller's active listings.",
    )
    answer_listing_path: str = Field(
        default="/api/steam-p2p/listings/{listing_id}/answer",
        description="PATCH: confirm a sale request for a listing.",
    )
    access_token_path: str = Field(
        default="/api/auth/access-token",
        description="GET: exchange the session cookie for a bearer token.",
    )
    user_agent: str = Field(
        default=(
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
        ),
        description="Browser user agent; should match the browser the cookie came from.",
    )
    accept_language: str = "en-US,en;q=0.9"
    timeout_seconds: float = Field(
        default=15.0,
        ge=1.0,
        le=120.0,
        description="HTTP request timeout in seconds.",
    )
    max_retries: int = Field(
        default=1,
        ge=1,
        le=20,
        description="Attempts per request. 1 = no retry; the next scheduled tick retries.",
    )

    @computed_field
    @property
    def authority(self) -> str:
        """Host name without scheme, sent as the Authority header."""
        return self.host.split("://", 1)[-1].rstrip("/")


class BrowserSettings(BaseSettings):
    """Chrome instance in remote-debugging mode used to harvest the session cookie."""

    model_config = SettingsConfigDict(extra="ignore")

    devtools_url: str = Field(
        default="http://127.0.0.1:9222",
        description="Chrome DevTools HTTP endpoint (chrome --remote-debugging-port=9222).",
    )
    page_url: str = Field(
        default="https://clash.gg",
        description="Page loaded before reading cookies so the session is refreshed.",
    )
    cookie_domain: str = Field(
        default="clash.gg",
        description="Only cookies whose domain contains this value are kept.",
    )
    timeout_seconds: float = Field(default=60.0, ge=1.0, le=600.0)


class AccountSettings(BaseSettings):
    """The seller's own account identity (Steam ID)."""

    model_config = SettingsConfigDict(extra="ignore")

    seller_id: str = Field(
        default="",
        description="Seller Steam ID. Listings from any other seller are ignored. Env: ACCOUNT__SELLER_ID.",
    )


class MonitorSettings(BaseSettings):
    """Poll and refresh cadences."""

    model_config = SettingsConfigDict(extra="ignore")

    poll_seconds: float = Field(
        default=20.0,
        ge=1.0,
        le=3600.0,
        description="Interval between active-listing checks in seconds.",
    )
    cookie_refresh_hours: float = Field(
        default=4.0,
        gt=0.0,
        le=48.0,
        description="Interval between session cookie refreshes in hours.",
    )
    token_refresh_minutes: float = Field(
        default=25.0,
        gt=0.0,
        le=29.0,
        description="Interval between access token refreshes in minutes (token expires after ~30).",
    )
    dedup_release_minutes: float = Field(
        default=11.0,
        gt=0.0,
        le=24 * 60.0,
        description="How long a dispatched listing stays marked before it is released.",
    )

    @computed_field
    @property
    def cookie_refresh_seconds(self) -> float:
        return self.cookie_refresh_hours * 60 * 60

    @computed_field
    @property
    def token_refresh_seconds(self) -> float:
        return self.token_refresh_minutes * 60

    @computed_field
    @property
    def dedup_release_seconds(self) -> float:
        return self.dedup_release_minutes * 60


class TransferSettings(BaseSettings):
    """Item transfer dispatch."""

    model_config = SettingsConfigDict(extra="ignore")

    source_tag: str = Field(
        default="clash",
        description="Sell platform tag attached to every transfer request.",
    )


class Settings(BaseSettings):
    """Root application configuration.

    Groups all sub-configurations so the rest of the code does not
    read environment variables directly. Nested overrides use
    <section>__<key>, e.g. MONITOR__POLL_SECONDS, API__USER_AGENT.
    """

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    app: AppSettings = Field(default_factory=AppSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)
    browser: BrowserSettings = Field(default_factory=BrowserSettings)
    account: AccountSettings = Field(default_factory=AccountSettings)
    monitor: MonitorSettings = Field(default_factory=MonitorSettings)
    transfer: TransferSettings = Field(default_factory=TransferSettings)

    @classmethod
    def from_env(cls, **overrides: Any) -> Settings:
        """Build settings from environment (and .env), with optional overrides.

        Nested overrides can be passed as nested dicts, e.g.:
        - from_env(monitor={"poll_seconds": 5})

        Returns:
            A new Settings instance.
        """
        return cls(**overrides)


@lru_cache
def get_settings() -> Settings:
    """Return a single cached instance of Settings.

    Typical usage:

        from p2p_sell_bot.config import get_settings

        settings = get_settings()
        poll_seconds = settings.monitor.poll_seconds
    """
    return Settings()
