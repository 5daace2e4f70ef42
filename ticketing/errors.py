"""Errors raised by the Ticketmaster event source client."""
from typing import Optional


class EventSourceError(Exception):
    """Base class for failures fetching the venue listing."""


class ConfigurationMissingError(EventSourceError):
    """Raised when no API key is configured."""


class NetworkUnreachableError(EventSourceError):
    """Raised when the ticket service cannot be reached."""


class UpstreamStatusError(EventSourceError):
    """Raised when the ticket service answers with a non-2xx status."""

    def __init__(self, status_code: int, reason: Optional[str] = None):
        self.status_code = status_code
        self.reason = reason or ''
        super().__init__(f"Ticketmaster returned {self.status}")

    @property
    def status(self) -> str:
        """Status line such as '503 Service Unavailable'."""
        return f"{self.status_code} {self.reason}".strip()


class ResponseUnparseableError(EventSourceError):
    """Raised when the response body is not a valid event listing."""
