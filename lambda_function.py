"""AWS Lambda handlers for the venue events kiosk page and daily digest."""
import json
import logging
import os
import time
from datetime import date
from typing import Any, Dict, List, Tuple

from config import DEFAULT_LOG_LEVEL, Config, load_config
from notifier.sns_notifier import SnsNotifier
from presenter.digest_presenter import DigestPresenter
from presenter.html_presenter import HtmlPresenter
from processor.event_filter import EventFilter, schedule_events
from processor.models import ScheduledEvent
from ticketing.errors import EventSourceError
from ticketing.ticketmaster_client import TicketmasterClient

# Attributes every LogRecord carries; anything else came from `extra`
_RESERVED_ATTRS = set(vars(logging.makeLogRecord({}))) | {'message', 'asctime'}


# Configure JSON logging
class JsonFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'message': record.getMessage(),
            'logger': record.name
        }

        for key, value in vars(record).items():
            if key not in _RESERVED_ATTRS and key not in log_data:
                log_data[key] = value

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def setup_logging(log_level: str = 'INFO') -> None:
    """
    Configure logging with JSON formatter.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    root_logger = logging.getLogger()

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root_logger.addHandler(handler)

    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))


def build_schedule(config: Config) -> Tuple[List[ScheduledEvent], date]:
    """
    Fetch, filter and classify today's events.

    Args:
        config: Loaded configuration

    Returns:
        Tuple of (scheduled events, today's date)

    Raises:
        EventSourceError: If the listing could not be fetched
    """
    client = TicketmasterClient(
        api_key=config.api_key,
        venue_id=config.venue_id,
        timeout=config.timeout_seconds
    )
    event_filter = EventFilter(config.excluded_prefixes)

    listing = client.fetch_events()

    now = config.now()
    today = now.date()
    filtered = event_filter.filter_events(listing.events, today)

    # Re-read the clock so classification reflects render time
    return schedule_events(filtered, config.now()), today


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    HTTP handler rendering the kiosk slideshow.

    Always answers 200; upstream failures degrade to a placeholder page.

    Args:
        event: API Gateway or function URL request (ignored)
        context: Lambda context object

    Returns:
        Proxy response with the HTML document as body
    """
    setup_logging(os.environ.get('LOG_LEVEL', DEFAULT_LOG_LEVEL))
    config = load_config()
    logger = logging.getLogger(__name__)

    start_time = time.time()
    logger.info(
        "Kiosk page request started",
        extra={'venue_id': config.venue_id}
    )

    presenter = HtmlPresenter()
    event_count = 0

    try:
        events, today = build_schedule(config)
        event_count = len(events)
        body = presenter.render(events, today)
    except EventSourceError as e:
        logger.error(
            f"Failed to fetch venue events: {e}",
            extra={'error_type': type(e).__name__}
        )
        body = presenter.render_failure(e)
    except Exception as e:
        logger.error(
            f"Kiosk page rendering failed: {e}",
            extra={'error_type': type(e).__name__},
            exc_info=True
        )
        body = presenter.render_failure(e)

    duration = time.time() - start_time
    logger.info(
        "Kiosk page request completed",
        extra={
            'events_rendered': event_count,
            'duration_seconds': round(duration, 2)
        }
    )

    return {
        'statusCode': 200,
        'headers': {'Content-Type': 'text/html; charset=utf-8'},
        'body': body
    }


def digest_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Scheduled handler publishing the daily digest to SNS.

    Args:
        event: EventBridge event payload (ignored)
        context: Lambda context object

    Returns:
        Response dict with statusCode and a publish summary
    """
    setup_logging(os.environ.get('LOG_LEVEL', DEFAULT_LOG_LEVEL))
    config = load_config()
    logger = logging.getLogger(__name__)

    start_time = time.time()
    logger.info(
        "Daily digest started",
        extra={'venue_id': config.venue_id}
    )

    presenter = DigestPresenter()
    notifier = SnsNotifier(config.topic_arn)
    event_count = 0
    today = config.now().date()

    try:
        events, today = build_schedule(config)
        event_count = len(events)
        message = presenter.render(events, today)
    except EventSourceError as e:
        logger.error(
            f"Failed to fetch venue events: {e}",
            extra={'error_type': type(e).__name__}
        )
        message = presenter.render_failure(e)
    except Exception as e:
        logger.error(
            f"Daily digest build failed: {e}",
            extra={'error_type': type(e).__name__},
            exc_info=True
        )
        message = presenter.render_failure(e)

    message_id = notifier.publish(message, subject=presenter.subject(today))

    duration = time.time() - start_time
    logger.info(
        "Daily digest completed",
        extra={
            'events_listed': event_count,
            'published': message_id is not None,
            'duration_seconds': round(duration, 2)
        }
    )

    return {
        'statusCode': 200,
        'body': json.dumps({
            'message': message,
            'events': event_count,
            'published': message_id is not None,
            'message_id': message_id,
            'duration_seconds': round(duration, 2)
        })
    }
