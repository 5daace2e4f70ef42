"""Kiosk slideshow rendering for today's events."""
import html
from datetime import date
from typing import Sequence

from processor.models import Classification, ScheduledEvent
from ticketing.errors import (
    ConfigurationMissingError,
    NetworkUnreachableError,
    ResponseUnparseableError,
    UpstreamStatusError,
)

SLIDE_INTERVAL_MS = 10000

TIME_CLASSES = {
    Classification.LIVE: 'time-live',
    Classification.UPCOMING: 'time-upcoming',
    Classification.LATER: 'time-later',
}

FAILURE_REASONS = {
    ConfigurationMissingError: 'Ticket service not configured',
    NetworkUnreachableError: 'Ticket service unavailable',
    UpstreamStatusError: 'Ticket service temporarily unavailable',
    ResponseUnparseableError: 'Event data unavailable',
}

DEFAULT_FAILURE_REASON = 'Events unavailable'

PAGE_HEAD = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>Today's Events</title>
<style>
body {
    background: #000;
    color: white;
    font-family: Arial, sans-serif;
    margin: 0;
    height: 100vh;
    display: flex;
    justify-content: center;
    align-items: center;
}
.container {
    width: 100%;
    text-align: center;
}
.header {
    font-size: 26px;
    color: #bbb;
    margin-bottom: 10px;
}
.slide {
    display: none;
    padding: 20px;
    animation: fade 0.8s ease-in-out;
}
@keyframes fade {
    from { opacity: 0; }
    to { opacity: 1; }
}
.title {
    font-size: 36px;
    font-weight: bold;
    color: #00e5ff;
    line-height: 1.2;
}
.time-line {
    font-size: 34px;
    margin-top: 14px;
}
.time-upcoming { color: #ffd54f; }
.time-later { color: #64b5f6; }
.time-live {
    color: #ff5252;
    font-weight: bold;
}
.live-badge {
    display: inline-block;
    margin-left: 12px;
    padding: 6px 14px;
    border-radius: 8px;
    background: #ff1744;
    color: white;
    font-size: 18px;
    animation: pulse 1.2s infinite;
}
@keyframes pulse {
    0% { opacity: 1; }
    50% { opacity: 0.6; }
    100% { opacity: 1; }
}
.empty { color: #777; }
</style>
</head>
<body>
<div class="container">
"""

PAGE_SCRIPT = """<script>
const slides = document.querySelectorAll(".slide");
let index = 0;
function showSlide(i) {
    slides.forEach(s => s.style.display = "none");
    slides[i].style.display = "block";
}
if (slides.length > 0) {
    showSlide(0);
    setInterval(() => {
        index = (index + 1) %% slides.length;
        showSlide(index);
    }, %(interval)d);
}
</script>
"""

PAGE_TAIL = """</div>
</body>
</html>"""

EMPTY_SLIDE = (
    '<div class="slide" style="display:block;">'
    '<div class="title empty">No events today</div>'
    '</div>'
)

FAILURE_PAGE = (
    '<!DOCTYPE html>'
    '<html><head><meta charset="utf-8"><title>Today\'s Events</title></head>'
    '<body style="background:black;color:white;font-family:sans-serif;'
    'text-align:center;padding-top:40vh;">'
    '<h2>%s</h2>'
    '</body></html>'
)


class HtmlPresenter:
    """Renders scheduled events as an auto-rotating slideshow page."""

    def __init__(self, interval_ms: int = SLIDE_INTERVAL_MS):
        self.interval_ms = interval_ms

    def render(self, events: Sequence[ScheduledEvent], today: date) -> str:
        """
        Render the slideshow document.

        Args:
            events: Scheduled events in display order
            today: Date shown in the header

        Returns:
            Complete HTML document
        """
        parts = [
            PAGE_HEAD,
            f'<div class="header">{html.escape(self.header(today))}</div>\n',
            '<div id="slides">\n',
        ]

        if not events:
            parts.append(EMPTY_SLIDE + '\n')
        else:
            parts.extend(self._render_slide(event) for event in events)

        parts.append('</div>\n')
        parts.append(PAGE_SCRIPT % {'interval': self.interval_ms})
        parts.append(PAGE_TAIL)

        return ''.join(parts)

    def render_failure(self, error: Exception) -> str:
        """Render a placeholder page naming why events are unavailable."""
        return FAILURE_PAGE % html.escape(self.failure_reason(error))

    @staticmethod
    def failure_reason(error: Exception) -> str:
        for error_type, reason in FAILURE_REASONS.items():
            if isinstance(error, error_type):
                return reason
        return DEFAULT_FAILURE_REASON

    @staticmethod
    def header(today: date) -> str:
        return today.strftime('%A • %m-%d-%Y')

    def _render_slide(self, event: ScheduledEvent) -> str:
        badge = ' <span class="live-badge">LIVE</span>' if event.is_live else ''
        return (
            '<div class="slide">'
            f'<div class="title">{html.escape(event.name)}</div>'
            f'<div class="time-line {TIME_CLASSES[event.classification]}">'
            f'{event.time_range}{badge}</div>'
            '</div>\n'
        )
