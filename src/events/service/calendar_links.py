"""Add-to-calendar links for events."""

import typing as t
from datetime import UTC, datetime
from urllib.parse import urlencode

from django.utils.html import strip_tags

from events.models import Event

GOOGLE_CALENDAR_URL = "https://calendar.google.com/calendar/render"


class CalendarEventData(t.NamedTuple):
    title: str
    description: str
    start: datetime
    end: datetime
    location: str


def _format_date(value: datetime) -> str:
    return value.astimezone(UTC).strftime("%Y%m%dT%H%M%SZ")


def calendar_event_data(event: Event) -> CalendarEventData:
    """Collect the calendar fields of an event.

    The end falls back to the default duration when the event has none.
    """
    return CalendarEventData(
        title=event.title,
        description=event.description,
        start=event.date,
        end=event.ends_at,
        location=event.location,
    )


def google_calendar_url(data: CalendarEventData) -> str:
    """Build a Google Calendar "add event" link."""
    details = " ".join(strip_tags(data.description).split())
    params = {
        "action": "TEMPLATE",
        "text": data.title,
        "dates": f"{_format_date(data.start)}/{_format_date(data.end)}",
        "details": details,
        "location": data.location,
        "sf": "true",
        "output": "xml",
    }
    return f"{GOOGLE_CALENDAR_URL}?{urlencode(params)}"


def calendar_link_for(event: Event) -> str:
    return google_calendar_url(calendar_event_data(event))
