"""
iCalendar interchange for host applications.

The engine never persists events, but hosts commonly keep them as
VCALENDAR text. These helpers convert between CalendarEvent and
icalendar components. Times are written in UTC and read back as naive
local time; the colour travels in the RFC 7986 COLOR property and the
category in CATEGORIES.
"""

from datetime import datetime, timedelta
from typing import Iterable, Optional

from icalendar import Calendar as ICalCalendar, Event as ICalEvent
import pytz

from .config import EVENT_COLORS, is_palette_color
from .event_manager import new_event_id
from .models import CalendarEvent
from .timezone_utils import as_datetime, local_naive_to_utc
from .debug import debug_print


PRODID = '-//calview//calendar engine//EN'


def _first_category(component: ICalEvent) -> Optional[str]:
    cats = component.get('CATEGORIES')
    if cats is None:
        return None
    if isinstance(cats, list):
        cats = cats[0] if cats else None
        if cats is None:
            return None
    values = getattr(cats, 'cats', None)
    if values:
        return str(values[0])
    text = str(cats)
    return text or None


def event_to_ical(event: CalendarEvent) -> ICalEvent:
    """Build an icalendar VEVENT for one event."""
    component = ICalEvent()
    component.add('uid', event.id)
    component.add('summary', event.title)
    component.add('dtstamp', datetime.now(pytz.UTC))
    component.add('dtstart', local_naive_to_utc(event.start_date))
    component.add('dtend', local_naive_to_utc(event.end_date))
    component.add('color', event.color)
    if event.description:
        component.add('description', event.description)
    if event.category:
        component.add('categories', [event.category])
    return component


def event_from_ical(component: ICalEvent) -> Optional[CalendarEvent]:
    """
    Read a VEVENT into a CalendarEvent.

    Returns None for components without DTSTART. Without DTEND the event
    lasts one day when DTSTART is a DATE and one hour otherwise. Colours
    outside the palette fall back to the first palette colour, and a
    missing UID gets a freshly generated id.
    """
    dtstart = component.get('DTSTART')
    if dtstart is None:
        debug_print("ICAL", f"Skipping VEVENT without DTSTART: {component.get('UID')}")
        return None
    all_day = not isinstance(dtstart.dt, datetime)
    start = as_datetime(dtstart.dt)

    dtend = component.get('DTEND')
    if dtend is not None:
        end = as_datetime(dtend.dt)
    elif all_day:
        end = start + timedelta(days=1)
    else:
        end = start + timedelta(hours=1)

    color = str(component.get('COLOR', '')).lower()
    if not is_palette_color(color):
        color = EVENT_COLORS[0]

    uid = component.get('UID')
    if uid:
        event_id = str(uid)
    else:
        event_id = new_event_id()
        debug_print("ICAL", f"VEVENT without UID, assigned id {event_id}")

    description = component.get('DESCRIPTION')
    return CalendarEvent(
        id=event_id,
        title=str(component.get('SUMMARY', '')),
        start_date=start,
        end_date=end,
        color=color,
        description=str(description) if description else None,
        category=_first_category(component),
    )


def events_to_ics(events: Iterable[CalendarEvent]) -> str:
    """Serialize events into one VCALENDAR document."""
    vcal = ICalCalendar()
    vcal.add('prodid', PRODID)
    vcal.add('version', '2.0')
    for event in events:
        vcal.add_component(event_to_ical(event))
    return vcal.to_ical().decode('utf-8')


def events_from_ics(ical_text: str) -> list[CalendarEvent]:
    """Parse every VEVENT of a VCALENDAR document."""
    vcal = ICalCalendar.from_ical(ical_text)
    events = []
    for component in vcal.walk('VEVENT'):
        event = event_from_ical(component)
        if event is not None:
            events.append(event)
    return events
