"""Unit tests for HtmlPresenter."""
from datetime import date, datetime, timedelta

import pytest
from bs4 import BeautifulSoup

from presenter.html_presenter import SLIDE_INTERVAL_MS, HtmlPresenter
from processor.models import Classification, ScheduledEvent
from ticketing.errors import (
    ConfigurationMissingError,
    NetworkUnreachableError,
    ResponseUnparseableError,
    UpstreamStatusError,
)

TODAY = date(2024, 3, 15)


def scheduled(name, hour, classification):
    start = datetime(2024, 3, 15, hour, 0)
    return ScheduledEvent(
        name=name,
        start=start,
        end=start + timedelta(hours=2),
        classification=classification
    )


@pytest.fixture
def presenter():
    return HtmlPresenter()


class TestHtmlPresenter:
    """Test cases for HtmlPresenter class."""

    def test_header_shows_weekday_and_date(self, presenter):
        soup = BeautifulSoup(presenter.render([], TODAY), 'html.parser')

        assert soup.find('div', class_='header').get_text() == 'Friday • 03-15-2024'

    def test_empty_renders_single_no_events_slide(self, presenter):
        soup = BeautifulSoup(presenter.render([], TODAY), 'html.parser')

        slides = soup.find_all('div', class_='slide')
        assert len(slides) == 1
        assert slides[0].get_text(strip=True) == 'No events today'

    def test_one_slide_per_event_in_order(self, presenter):
        events = [
            scheduled('Matinee', 13, Classification.LATER),
            scheduled('Concert X', 19, Classification.LIVE),
            scheduled('Late Show', 22, Classification.UPCOMING),
        ]

        soup = BeautifulSoup(presenter.render(events, TODAY), 'html.parser')

        titles = [div.get_text() for div in soup.find_all('div', class_='title')]
        assert titles == ['Matinee', 'Concert X', 'Late Show']

    def test_live_event_slide(self, presenter):
        soup = BeautifulSoup(
            presenter.render([scheduled('Concert X', 19, Classification.LIVE)], TODAY),
            'html.parser'
        )

        time_line = soup.find('div', class_='time-line')
        assert 'time-live' in time_line['class']
        assert '7:00 PM–9:00 PM' in time_line.get_text()
        assert time_line.find('span', class_='live-badge').get_text() == 'LIVE'

    @pytest.mark.parametrize('classification, css_class', [
        (Classification.UPCOMING, 'time-upcoming'),
        (Classification.LATER, 'time-later'),
    ])
    def test_non_live_slides_have_no_badge(self, presenter, classification, css_class):
        soup = BeautifulSoup(
            presenter.render([scheduled('Show', 19, classification)], TODAY),
            'html.parser'
        )

        time_line = soup.find('div', class_='time-line')
        assert css_class in time_line['class']
        assert soup.find('span', class_='live-badge') is None

    def test_event_names_are_escaped(self, presenter):
        page = presenter.render(
            [scheduled('<b>Rock & Roll</b>', 19, Classification.LATER)],
            TODAY
        )

        assert '<b>Rock' not in page
        assert '&lt;b&gt;Rock &amp; Roll&lt;/b&gt;' in page

    def test_script_rotates_slides(self, presenter):
        page = presenter.render([], TODAY)

        assert f'}}, {SLIDE_INTERVAL_MS});' in page
        assert '(index + 1) % slides.length' in page

    def test_custom_interval(self):
        page = HtmlPresenter(interval_ms=5000).render([], TODAY)

        assert '}, 5000);' in page

    @pytest.mark.parametrize('error, reason', [
        (ConfigurationMissingError('no key'), 'Ticket service not configured'),
        (NetworkUnreachableError('ConnectionError'), 'Ticket service unavailable'),
        (UpstreamStatusError(503, 'Service Unavailable'), 'Ticket service temporarily unavailable'),
        (ResponseUnparseableError('bad body'), 'Event data unavailable'),
        (RuntimeError('boom'), 'Events unavailable'),
    ])
    def test_render_failure(self, presenter, error, reason):
        soup = BeautifulSoup(presenter.render_failure(error), 'html.parser')

        assert soup.find('h2').get_text() == reason
        assert soup.find('div', class_='slide') is None
