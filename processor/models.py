"""Data models for venue event listings."""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional


@dataclass
class RawEvent:
    """Event as received from the Ticketmaster Discovery API."""
    event_id: str
    name: str
    local_date: str
    local_time: Optional[str] = None
    event_type: str = 'event'
    date_tbd: bool = False
    date_tba: bool = False
    time_tba: bool = False
    no_specific_time: bool = False
    status_code: Optional[str] = None
    url: Optional[str] = None
    timezone: Optional[str] = None
    venue_names: List[str] = field(default_factory=list)
    segment: Optional[str] = None
    genre: Optional[str] = None
    public_sale_start: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RawEvent':
        """
        Build a RawEvent from one Discovery API event object.

        Args:
            data: Decoded JSON event

        Returns:
            RawEvent instance

        Raises:
            KeyError: If id, name or dates.start.localDate is missing
            TypeError: If the name is not a string or a nested object has
                the wrong shape
        """
        name = data['name']
        if not isinstance(name, str):
            raise TypeError(f"Event name must be a string, got {type(name).__name__}")

        dates = data['dates']
        start = dates['start']

        classifications = data.get('classifications') or []
        primary = next(
            (c for c in classifications if c.get('primary')),
            classifications[0] if classifications else {}
        )

        venues = (data.get('_embedded') or {}).get('venues') or []
        public_sales = (data.get('sales') or {}).get('public') or {}

        return cls(
            event_id=data['id'],
            name=name,
            local_date=start['localDate'],
            local_time=start.get('localTime'),
            event_type=data.get('type', 'event'),
            date_tbd=bool(start.get('dateTBD', False)),
            date_tba=bool(start.get('dateTBA', False)),
            time_tba=bool(start.get('timeTBA', False)),
            no_specific_time=bool(start.get('noSpecificTime', False)),
            status_code=(dates.get('status') or {}).get('code'),
            url=data.get('url'),
            timezone=dates.get('timezone'),
            venue_names=[v['name'] for v in venues if v.get('name')],
            segment=(primary.get('segment') or {}).get('name'),
            genre=(primary.get('genre') or {}).get('name'),
            public_sale_start=public_sales.get('startDateTime')
        )


@dataclass
class Page:
    """Pagination block of a Discovery API search response."""
    size: int
    total_elements: int
    total_pages: int
    number: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Page':
        return cls(
            size=int(data.get('size', 0)),
            total_elements=int(data.get('totalElements', 0)),
            total_pages=int(data.get('totalPages', 0)),
            number=int(data.get('number', 0))
        )


@dataclass
class EventsResponse:
    """Decoded event search response."""
    events: List[RawEvent]
    page: Optional[Page] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EventsResponse':
        if not isinstance(data, dict):
            raise TypeError(f"Expected JSON object, got {type(data).__name__}")

        embedded = data.get('_embedded') or {}
        events = [RawEvent.from_dict(item) for item in embedded.get('events', [])]

        page = data.get('page')
        return cls(
            events=events,
            page=Page.from_dict(page) if page else None
        )


class Classification(Enum):
    """Display state of an event relative to the current time."""
    LIVE = 'live'
    UPCOMING = 'upcoming'
    LATER = 'later'


@dataclass(frozen=True)
class FilteredEvent:
    """Event happening today with a concrete local start time."""
    name: str
    start: datetime


@dataclass(frozen=True)
class ScheduledEvent:
    """Filtered event with its assumed end time and display state."""
    name: str
    start: datetime
    end: datetime
    classification: Classification

    @property
    def is_live(self) -> bool:
        return self.classification is Classification.LIVE

    @property
    def start_label(self) -> str:
        return format_clock(self.start)

    @property
    def end_label(self) -> str:
        return format_clock(self.end)

    @property
    def time_range(self) -> str:
        """Start and end on a 12-hour clock, e.g. '7:00 PM–9:00 PM'."""
        return f"{self.start_label}–{self.end_label}"


def format_clock(value: datetime) -> str:
    """Format a time as '7:00 PM' (no leading zero on the hour)."""
    return value.strftime('%I:%M %p').lstrip('0')
