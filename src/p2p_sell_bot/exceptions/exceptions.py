"""Custom exceptions for the marketplace API, credentials and sale handling.

Everything below SellBotError except MissingRequiredConfigError is non-fatal:
the tick that raised it logs and the next scheduled tick recovers.
"""

from __future__ import annotations


class SellBotError(Exception):
    """Base exception for sell bot errors."""

    pass


class MissingRequiredConfigError(SellBotError):
    """Raised when a required configuration value is missing."""

    pass


class MarketplaceAPIError(SellBotError):
    """Raised when a marketplace HTTP request fails after retries."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.cause = cause


class BrowserAutomationError(SellBotError):
    """Raised when cookies cannot be read from the remote-debugging browser."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class CredentialFetchError(SellBotError):
    """Raised when the session cookie or the access token cannot be fetched."""

    def __init__(
        self,
        message: str,
        *,
        kind: str,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.status_code = status_code
        self.cause = cause


class ListingsFetchError(SellBotError):
    """Raised when the active listings cannot be fetched."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.cause = cause


class ConfirmSaleError(SellBotError):
    """Raised when answering a buyer's purchase request fails."""

    def __init__(
        self,
        message: str,
        *,
        listing_id: str,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.listing_id = listing_id
        self.status_code = status_code
        self.cause = cause


class DispatchError(SellBotError):
    """Raised by a transfer dispatcher when a transfer cannot be initiated."""

    def __init__(
        self,
        message: str,
        *,
        listing_id: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.listing_id = listing_id
        self.cause = cause
