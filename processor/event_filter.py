"""Selection, ordering and classification of today's venue events."""
import logging
from datetime import date, datetime, time, timedelta
from typing import Iterable, List, Optional, Sequence

from processor.models import (
    Classification,
    FilteredEvent,
    RawEvent,
    ScheduledEvent,
)

logger = logging.getLogger(__name__)

DATE_FORMAT = '%Y-%m-%d'
TIME_FORMAT = '%H:%M:%S'
END_OF_DAY = time(23, 59, 59)

# Ticketmaster never reports how long an event runs
EVENT_DURATION = timedelta(hours=2)
UPCOMING_WINDOW = timedelta(hours=2)

# Non-public listings: suite packages, vouchers, guest passes, fee items
DEFAULT_EXCLUDED_PREFIXES = ('Suites', 'Recovery', 'Wild', 'Int Fee')


class EventFieldError(ValueError):
    """Raised when an event carries an unparseable date or time literal."""


def parse_event_date(date_str: Optional[str]) -> Optional[date]:
    """
    Parse a Ticketmaster local date.

    Args:
        date_str: Date in YYYY-MM-DD format

    Returns:
        Parsed date or None if the value is missing or malformed
    """
    if not date_str:
        return None
    try:
        return datetime.strptime(date_str.strip(), DATE_FORMAT).date()
    except ValueError:
        return None


def parse_start(date_str: str, time_str: Optional[str]) -> datetime:
    """
    Combine a local date and optional local time into a start datetime.

    Events without a time sort last by starting at 23:59:59.

    Args:
        date_str: Date in YYYY-MM-DD format
        time_str: Time in HH:MM:SS format, or None

    Returns:
        Naive local start datetime

    Raises:
        EventFieldError: If either literal is malformed
    """
    event_date = parse_event_date(date_str)
    if event_date is None:
        raise EventFieldError(f"Invalid date '{date_str}'")

    if not time_str:
        return datetime.combine(event_date, END_OF_DAY)

    try:
        start_time = datetime.strptime(time_str.strip(), TIME_FORMAT).time()
    except ValueError as e:
        raise EventFieldError(f"Invalid time '{time_str}'") from e

    return datetime.combine(event_date, start_time)


def classify(
    start: datetime,
    now: datetime,
    duration: timedelta = EVENT_DURATION
) -> Classification:
    """
    Classify an event against the current time.

    LIVE while now is within [start, start + duration], UPCOMING when it
    starts within UPCOMING_WINDOW, LATER otherwise (including ended events).
    """
    end = start + duration
    if start <= now <= end:
        return Classification.LIVE
    if now < start and start - now <= UPCOMING_WINDOW:
        return Classification.UPCOMING
    return Classification.LATER


def schedule_events(
    events: Iterable[FilteredEvent],
    now: datetime,
    duration: timedelta = EVENT_DURATION
) -> List[ScheduledEvent]:
    """
    Attach end times and classifications, preserving order.

    Args:
        events: Filtered events, already sorted
        now: Current venue-local time
        duration: Assumed event length

    Returns:
        List of ScheduledEvent objects
    """
    return [
        ScheduledEvent(
            name=event.name,
            start=event.start,
            end=event.start + duration,
            classification=classify(event.start, now, duration)
        )
        for event in events
    ]


class EventFilter:
    """Selects today's public events from a venue listing."""

    def __init__(self, excluded_prefixes: Sequence[str] = DEFAULT_EXCLUDED_PREFIXES):
        """
        Initialize the filter.

        Args:
            excluded_prefixes: Event name prefixes that mark non-public listings
        """
        self.excluded_prefixes = tuple(excluded_prefixes)

    def is_excluded(self, name: str) -> bool:
        return any(name.startswith(prefix) for prefix in self.excluded_prefixes)

    def filter_events(self, raw_events: Iterable[RawEvent], today: date) -> List[FilteredEvent]:
        """
        Keep today's non-excluded events, sorted by start time.

        The sort is stable: events with equal start times keep their
        listing order.

        Args:
            raw_events: Events from the venue listing
            today: Venue-local date to keep

        Returns:
            List of FilteredEvent objects in start order
        """
        filtered = []
        total = 0

        for event in raw_events:
            total += 1

            if parse_event_date(event.local_date) != today:
                continue

            if self.is_excluded(event.name):
                logger.debug(f"Excluding non-public listing '{event.name}'")
                continue

            try:
                start = parse_start(event.local_date, event.local_time)
            except EventFieldError as e:
                logger.warning(f"Dropping event '{event.name}': {e}")
                continue

            filtered.append(FilteredEvent(name=event.name, start=start))

        filtered.sort(key=lambda event: event.start)

        logger.info(
            f"Kept {len(filtered)} of {total} events for {today.isoformat()}"
        )
        return filtered
