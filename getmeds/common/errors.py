"""
Error taxonomy for the search pipeline.

ValidationError    - the query was rejected before any network call
ConfigurationError - a capability the strategy needs is disabled
UpstreamError      - a retailer's primary request failed
SearchFailedError  - every enabled retailer failed
"""

from typing import Dict, Optional


class GetMedsError(Exception):
    """Base class for all pipeline errors."""


class ValidationError(GetMedsError, ValueError):
    """Raised when the search query does not meet the minimum requirements."""


class ConfigurationError(GetMedsError):
    """Raised when configuration is missing or a required capability is disabled."""


class UpstreamError(GetMedsError):
    """Raised when a retailer (or the relay in front of it) fails to answer."""

    def __init__(self, message: str, status_code: Optional[int] = None, url: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class SearchFailedError(UpstreamError):
    """Raised when every enabled retailer failed and no data could be obtained."""

    def __init__(self, failures: Dict[str, BaseException]):
        names = ", ".join(failures) or "none"
        super().__init__(f"All retailers failed: {names}")
        self.failures = failures
