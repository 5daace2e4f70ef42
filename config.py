"""Runtime configuration for the venue events Lambdas."""
import logging
import os
from dataclasses import dataclass
from datetime import datetime
from typing import List, Mapping, Optional, Tuple

import pytz

from processor.event_filter import DEFAULT_EXCLUDED_PREFIXES

logger = logging.getLogger(__name__)

DEFAULT_VENUE_ID = 'KovZpZA6AJdA'
DEFAULT_TIMEOUT_SECONDS = 10
DEFAULT_LOG_LEVEL = 'INFO'


@dataclass(frozen=True)
class Config:
    """Settings shared by the HTML and digest handlers."""
    api_key: Optional[str]
    topic_arn: Optional[str]
    venue_id: str = DEFAULT_VENUE_ID
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS
    log_level: str = DEFAULT_LOG_LEVEL
    timezone: Optional[str] = None
    excluded_prefixes: Tuple[str, ...] = DEFAULT_EXCLUDED_PREFIXES

    def missing_settings(self) -> List[str]:
        """Return the environment variable names of unset credentials."""
        missing = []
        if not self.api_key:
            missing.append('TICKETMASTER_API_KEY')
        if not self.topic_arn:
            missing.append('SNS_TOPIC_ARN')
        return missing

    def now(self) -> datetime:
        """
        Current wall-clock time at the venue.

        Returns:
            Naive datetime comparable with Ticketmaster local dates and times
        """
        if self.timezone:
            return datetime.now(pytz.timezone(self.timezone)).replace(tzinfo=None)
        return datetime.now()


def load_config(environ: Optional[Mapping[str, str]] = None) -> Config:
    """
    Build a Config from environment variables.

    Invalid values fall back to defaults with a warning; this never raises.

    Args:
        environ: Mapping to read from (default: os.environ)

    Returns:
        Validated Config
    """
    if environ is None:
        environ = os.environ

    config = Config(
        api_key=_optional(environ.get('TICKETMASTER_API_KEY')),
        topic_arn=_optional(environ.get('SNS_TOPIC_ARN')),
        venue_id=_optional(environ.get('VENUE_ID')) or DEFAULT_VENUE_ID,
        timeout_seconds=_parse_timeout(environ.get('TIMEOUT_SECONDS')),
        log_level=(_optional(environ.get('LOG_LEVEL')) or DEFAULT_LOG_LEVEL).upper(),
        timezone=_parse_timezone(environ.get('VENUE_TIMEZONE')),
        excluded_prefixes=_parse_prefixes(environ.get('EXCLUDED_NAME_PREFIXES'))
    )

    missing = config.missing_settings()
    if missing:
        logger.warning(
            f"Missing configuration: {', '.join(missing)}",
            extra={'missing_settings': missing}
        )

    return config


def _optional(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value.strip()


def _parse_timeout(value: Optional[str]) -> int:
    value = _optional(value)
    if value is None:
        return DEFAULT_TIMEOUT_SECONDS

    try:
        timeout = int(value)
    except ValueError:
        timeout = 0

    if timeout <= 0:
        logger.warning(
            f"Invalid TIMEOUT_SECONDS '{value}', "
            f"using {DEFAULT_TIMEOUT_SECONDS} seconds"
        )
        return DEFAULT_TIMEOUT_SECONDS
    return timeout


def _parse_timezone(value: Optional[str]) -> Optional[str]:
    value = _optional(value)
    if value is None:
        return None

    try:
        pytz.timezone(value)
    except pytz.UnknownTimeZoneError:
        logger.warning(f"Unknown VENUE_TIMEZONE '{value}', using local time")
        return None
    return value


def _parse_prefixes(value: Optional[str]) -> Tuple[str, ...]:
    # An explicitly empty variable disables exclusion entirely
    if value is None:
        return DEFAULT_EXCLUDED_PREFIXES
    return tuple(prefix.strip() for prefix in value.split(',') if prefix.strip())
