"""
Exception hierarchy for catalog search and game caching.
"""

from typing import Optional


class BGGSearchError(Exception):
    """Base class for all errors raised by this package."""


class InvalidArgument(BGGSearchError):
    """Caller input rejected before any network call."""


class UpstreamUnavailable(BGGSearchError):
    """BGG answered with a non-success status, timed out, or sent an unreadable body."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class UpstreamTransportError(BGGSearchError):
    """Network-level failure reaching BGG (DNS, connection reset, ...)."""


class StorageError(BGGSearchError):
    """Failure reading or writing the local games table."""
