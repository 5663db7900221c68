"""
Data model shared by every part of the engine.

CalendarEvent is owned by the host application; the engine only keeps
transient references to it while computing grids and layouts. GridCell,
PositionedEvent and DayPreview are derived values, recomputed from
scratch whenever navigation or the event list changes.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, date, time as dt_time, timedelta
from enum import Enum
from typing import Any, Optional

from .config import EVENT_COLORS
from .timezone_utils import as_datetime, to_local_naive


class ViewMode(Enum):
    MONTH = "month"
    WEEK = "week"

    @classmethod
    def parse(cls, value: "str | ViewMode") -> "ViewMode":
        if isinstance(value, ViewMode):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown view mode: {value!r} (expected 'month' or 'week')")


# Host mappings may use either naming convention
_FIELD_ALIASES = {
    'startDate': 'start_date',
    'endDate': 'end_date',
    'start': 'start_date',
    'end': 'end_date',
}

EVENT_FIELDS = ('id', 'title', 'description', 'start_date', 'end_date', 'color', 'category')


def coerce_datetime(value: Any) -> Optional[datetime]:
    """
    Interpret a value as a naive local datetime.

    Accepts datetimes, dates (midnight) and ISO-8601 strings. Returns
    None when the value cannot be read as a point in time.
    """
    if isinstance(value, datetime):
        return to_local_naive(value)
    if isinstance(value, date):
        return datetime.combine(value, dt_time.min)
    if isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        try:
            return to_local_naive(datetime.fromisoformat(text))
        except ValueError:
            return None
    return None


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, dt_time.min)


def end_of_day(day: date) -> datetime:
    """Exclusive end of a day: the following midnight."""
    return start_of_day(day) + timedelta(days=1)


@dataclass
class CalendarEvent:
    """
    A single event as supplied by the host.

    Aware datetimes are folded into naive local time on construction so
    that every comparison inside the engine is between naive values.
    """
    id: str
    title: str
    start_date: datetime
    end_date: datetime
    color: str = EVENT_COLORS[0]
    description: Optional[str] = None
    category: Optional[str] = None

    def __post_init__(self):
        self.start_date = as_datetime(self.start_date)
        self.end_date = as_datetime(self.end_date)

    @property
    def duration(self) -> timedelta:
        return self.end_date - self.start_date

    def effective_end(self, min_duration: timedelta) -> datetime:
        """
        End used for layout and indexing.

        Zero-length or inverted events are stretched to min_duration so
        they stay visible and take part in overlap detection.
        """
        if self.end_date <= self.start_date:
            return self.start_date + min_duration
        return self.end_date

    def occupies(self, start: datetime, end: datetime, min_duration: timedelta = timedelta(0)) -> bool:
        """Half-open intersection test against [start, end)."""
        return self.start_date < end and self.effective_end(min_duration) > start

    def with_updates(self, updates: dict) -> 'CalendarEvent':
        """Return a copy with a partial update applied (what a host does on update)."""
        changes = {_FIELD_ALIASES.get(k, k): v for k, v in updates.items()}
        unknown = set(changes) - set(EVENT_FIELDS)
        if unknown:
            raise ValueError(f"Unknown event fields: {sorted(unknown)}")
        return replace(self, **changes)

    @classmethod
    def from_dict(cls, data: dict) -> 'CalendarEvent':
        """Build an event from a plain mapping (ISO-8601 strings allowed for dates)."""
        values = {_FIELD_ALIASES.get(k, k): v for k, v in data.items()}
        start = coerce_datetime(values.get('start_date'))
        end = coerce_datetime(values.get('end_date'))
        if start is None or end is None:
            raise ValueError(f"Event {values.get('id')!r} has an unreadable start or end date")
        return cls(
            id=str(values['id']),
            title=values.get('title', ''),
            start_date=start,
            end_date=end,
            color=values.get('color', EVENT_COLORS[0]),
            description=values.get('description'),
            category=values.get('category'),
        )

    def to_dict(self) -> dict:
        data = {
            'id': self.id,
            'title': self.title,
            'start_date': self.start_date.isoformat(),
            'end_date': self.end_date.isoformat(),
            'color': self.color,
        }
        if self.description is not None:
            data['description'] = self.description
        if self.category is not None:
            data['category'] = self.category
        return data


@dataclass(frozen=True)
class GridCell:
    """
    One addressable unit of the calendar surface.

    A day in month view (date is a `date`), an hour slot in week view
    (date is a `datetime` at the top of the hour, and hour is set).
    """
    date: "date | datetime"
    is_current_period: bool
    is_today: bool
    hour: Optional[int] = None

    @property
    def day(self) -> date:
        if isinstance(self.date, datetime):
            return self.date.date()
        return self.date

    @property
    def key(self) -> date:
        return self.day

    @property
    def start(self) -> datetime:
        if isinstance(self.date, datetime):
            return self.date
        return start_of_day(self.date)

    @property
    def end(self) -> datetime:
        if self.hour is not None:
            return self.start + timedelta(hours=1)
        return end_of_day(self.date)

    @property
    def label(self) -> str:
        if self.hour is not None:
            return f"{self.hour:02d}:00"
        return str(self.date.day)


@dataclass(frozen=True)
class PositionedEvent:
    """
    An event placed in a lane of one day column (week view).

    visible_start/visible_end are the event clipped to the day, so an
    event "Sat 17:00 - Sun 04:00" yields one portion per day.
    """
    event: CalendarEvent
    day: date
    lane_index: int
    lane_count: int
    visible_start: datetime
    visible_end: datetime

    @property
    def continues_before(self) -> bool:
        return self.event.start_date < start_of_day(self.day)

    @property
    def continues_after(self) -> bool:
        return self.event.end_date > end_of_day(self.day)

    @property
    def start_hour(self) -> float:
        """Visible start as hours since midnight (0-24)."""
        return (self.visible_start - start_of_day(self.day)).total_seconds() / 3600.0

    @property
    def end_hour(self) -> float:
        return (self.visible_end - start_of_day(self.day)).total_seconds() / 3600.0

    @property
    def width_fraction(self) -> float:
        return 1.0 / self.lane_count

    @property
    def left_fraction(self) -> float:
        return self.lane_index / self.lane_count

    def shifted_times(self, new_visible_start: datetime) -> tuple[datetime, datetime]:
        """
        Translate a moved portion back to new event start and end.

        The whole event moves by the same delta the portion moved by.
        """
        delta = new_visible_start - self.visible_start
        return (self.event.start_date + delta, self.event.end_date + delta)


@dataclass(frozen=True)
class DayPreview:
    """Capped list of events for a month cell plus the "+N more" count."""
    day: date
    events: tuple[CalendarEvent, ...] = field(default_factory=tuple)
    overflow_count: int = 0

    @property
    def total(self) -> int:
        return len(self.events) + self.overflow_count

    @property
    def has_overflow(self) -> bool:
        return self.overflow_count > 0
