"""Exception hierarchy for SupplierWorker.

Fatal errors derive from ``SyncError`` and abort a run. ``GraphError`` is raised
by the Graph client and contained per item by the index sync.
"""

from __future__ import annotations

from typing import Optional


class SyncError(Exception):
    """Base class for errors that abort a sync run."""


class ConfigurationError(SyncError):
    """Required settings are missing or invalid."""


class AuthError(SyncError):
    """Client-credentials exchange failed or returned no token."""

    def __init__(self, message: str, status_code: int = 0):
        super().__init__(message)
        self.status_code = status_code


class FetchError(SyncError):
    """Source data could not be retrieved."""


class PageFormatError(FetchError):
    """A page response could not be parsed."""


class RetryError(Exception):
    """All attempts of a retried operation failed."""

    def __init__(self, message: str, attempts: int, last_error: Optional[BaseException] = None):
        super().__init__(message)
        self.attempts = attempts
        self.last_error = last_error


class GraphError(Exception):
    """Microsoft Graph returned an error response."""

    def __init__(self, message: str, status_code: int = 0, code: str = "", details: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.details = details

    def __str__(self) -> str:
        status = f"{self.status_code}:" if self.status_code else ""
        parts = [status, self.code, super().__str__(), self.details]
        return " ".join(p for p in parts if p)
