"""Soft-failure conditions raised by adapters and caught at their boundaries."""
from typing import Optional


class UpstreamUnavailable(Exception):
    """Raised when the repository listing endpoint cannot be read.

    Never escapes ``IRepositorySource.fetch_all``; callers only ever see an
    empty list.
    """

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status

    @property
    def is_transient(self) -> bool:
        """Transport failures and 5xx responses are worth another attempt."""
        return self.status is None or self.status >= 500


class ScrapeDegraded(Exception):
    """Raised when a scraped page is unavailable or its markup is not recognised."""
    pass
