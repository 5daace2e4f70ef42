"""Client for the Ticketmaster Discovery API venue listing."""
import json
import logging
from typing import Optional

import requests

from processor.models import EventsResponse
from ticketing.errors import (
    ConfigurationMissingError,
    NetworkUnreachableError,
    ResponseUnparseableError,
    UpstreamStatusError,
)

logger = logging.getLogger(__name__)


class TicketmasterClient:
    """Fetches one venue's events from the Discovery API."""

    BASE_URL = "https://app.ticketmaster.com/discovery/v2/events.json"

    def __init__(self, api_key: Optional[str], venue_id: str, timeout: int = 10):
        """
        Initialize the client.

        Args:
            api_key: Discovery API key
            venue_id: Ticketmaster venue identifier
            timeout: HTTP request timeout in seconds (default: 10)
        """
        self.api_key = api_key
        self.venue_id = venue_id
        self.timeout = timeout

    def fetch_events(self) -> EventsResponse:
        """
        Fetch the first page of the venue's event listing.

        The request is made once; there is no retry.

        Returns:
            Decoded EventsResponse (events may be empty)

        Raises:
            ConfigurationMissingError: If no API key is configured
            NetworkUnreachableError: If the request fails to complete
            UpstreamStatusError: If the response status is not 2xx
            ResponseUnparseableError: If the body is not a valid listing
        """
        if not self.api_key:
            raise ConfigurationMissingError("TICKETMASTER_API_KEY is not set")

        params = {
            'venueId': self.venue_id,
            'apikey': self.api_key
        }

        logger.info(f"Fetching events for venue {self.venue_id}")

        # Streamed so the status is checked before any body is read
        try:
            response = requests.get(
                self.BASE_URL,
                params=params,
                timeout=self.timeout,
                stream=True
            )
        except requests.RequestException as e:
            raise self._unreachable(e) from e

        with response:
            if not 200 <= response.status_code < 300:
                logger.error(
                    f"Ticketmaster returned HTTP {response.status_code}",
                    extra={'status_code': response.status_code}
                )
                raise UpstreamStatusError(response.status_code, response.reason)

            try:
                body = response.content
            except requests.RequestException as e:
                raise self._unreachable(e) from e

        listing = self._parse_body(body)

        if listing.page and listing.page.total_pages > 1:
            logger.warning(
                f"Listing has {listing.page.total_pages} pages; "
                f"only the first {len(listing.events)} events were inspected"
            )

        logger.info(f"Fetched {len(listing.events)} events")
        return listing

    def _unreachable(self, error: requests.RequestException) -> NetworkUnreachableError:
        # Exception text can embed the request URL, which carries the key
        logger.error(
            f"Ticketmaster request failed: {type(error).__name__}",
            extra={'venue_id': self.venue_id}
        )
        return NetworkUnreachableError(type(error).__name__)

    def _parse_body(self, body: bytes) -> EventsResponse:
        """
        Decode a listing response body.

        Args:
            body: Raw body of a 2xx response

        Returns:
            EventsResponse

        Raises:
            ResponseUnparseableError: If the body is not JSON or lacks
                required event fields
        """
        try:
            data = json.loads(body)
        except ValueError as e:
            logger.error(f"Response body is not valid JSON: {e}")
            raise ResponseUnparseableError("Response body is not valid JSON") from e

        try:
            return EventsResponse.from_dict(data)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.error(f"Response does not match the event listing format: {e!r}")
            raise ResponseUnparseableError(
                "Response does not match the event listing format"
            ) from e
