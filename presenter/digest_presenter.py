"""Plain-text daily digest of today's events."""
from datetime import date
from typing import Sequence

from processor.models import ScheduledEvent
from ticketing.errors import (
    ConfigurationMissingError,
    NetworkUnreachableError,
    ResponseUnparseableError,
    UpstreamStatusError,
)

DATE_LABEL_FORMAT = '%A %m-%d-%Y'
LIVE_MARKER = ' (LIVE)'


class DigestPresenter:
    """Renders scheduled events as a newline-joined text summary."""

    def render(self, events: Sequence[ScheduledEvent], today: date) -> str:
        """
        Render the digest body.

        Args:
            events: Scheduled events in display order
            today: Date named in the header line

        Returns:
            Digest text
        """
        label = today.strftime(DATE_LABEL_FORMAT)

        if not events:
            return f"{label}: No events today."

        lines = [f"{label} Events:"]
        for event in events:
            marker = LIVE_MARKER if event.is_live else ''
            lines.append(f"- {event.name}: {event.time_range}{marker}")

        return '\n'.join(lines)

    def render_failure(self, error: Exception) -> str:
        """
        Describe why the digest could not be built.

        Args:
            error: Error raised while fetching the listing

        Returns:
            Short reason line
        """
        if isinstance(error, ConfigurationMissingError):
            return "Daily Events: API key missing"
        if isinstance(error, NetworkUnreachableError):
            return "Daily Events: ticket service unreachable"
        if isinstance(error, UpstreamStatusError):
            return f"Daily Events: Ticketmaster returned {error.status}"
        if isinstance(error, ResponseUnparseableError):
            return "Daily Events: failed parsing event data"
        return "Daily Events: unexpected error"

    def subject(self, today: date) -> str:
        """Email subject line for the digest."""
        return f"Daily Events - {today.strftime(DATE_LABEL_FORMAT)}"
