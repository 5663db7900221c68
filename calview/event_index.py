"""
Assignment of events to days and hour slots.

All occupancy tests are half-open: an event occupies [start, end) if
event.start < end and event.end > start. An event ending exactly at
midnight therefore does not show up on the following day.
"""

from datetime import date, datetime, timedelta
from typing import Iterable, Optional, Sequence

from .config import HOURS_PER_DAY, LayoutConfig, PreviewConfig
from .interval_tree import IntervalTree
from .models import CalendarEvent, DayPreview, GridCell, start_of_day, end_of_day


DEFAULT_MIN_DURATION = LayoutConfig().min_duration
DEFAULT_MAX_PREVIEW = PreviewConfig().max_events_per_day


def event_sort_key(event: CalendarEvent) -> tuple[datetime, str]:
    return (event.start_date, event.id)


class EventIndex:
    """
    Range-queryable view over a list of events.

    Built once per event list; each query costs O(log n + k) instead of
    a scan of every event.
    """

    def __init__(self, events: Iterable[CalendarEvent], min_duration: timedelta = DEFAULT_MIN_DURATION):
        self.min_duration = min_duration
        self._tree: IntervalTree[datetime] = IntervalTree(
            (event.start_date, event.effective_end(min_duration), event) for event in events
        )

    def __len__(self) -> int:
        return len(self._tree)

    def between(self, start: datetime, end: datetime) -> list[CalendarEvent]:
        """Events intersecting [start, end), ordered by start then id."""
        return sorted(self._tree.intersecting(start, end), key=event_sort_key)

    def on_day(self, day: date) -> list[CalendarEvent]:
        return self.between(start_of_day(day), end_of_day(day))


def index_by_day(
    events: Iterable[CalendarEvent],
    days: Iterable["date | GridCell"],
    min_duration: timedelta = DEFAULT_MIN_DURATION,
) -> dict[date, list[CalendarEvent]]:
    """
    Map each day to the events touching it.

    Multi-day events appear under every day they touch. Every requested
    day gets a key, possibly with an empty list.
    """
    index = EventIndex(events, min_duration)
    result: dict[date, list[CalendarEvent]] = {}
    for day in days:
        if isinstance(day, GridCell):
            day = day.day
        if day not in result:
            result[day] = index.on_day(day)
    return result


def index_by_hour_slot(
    events: Iterable[CalendarEvent],
    day: date,
    min_duration: timedelta = DEFAULT_MIN_DURATION,
) -> dict[int, list[CalendarEvent]]:
    """Map each hour 0-23 of `day` to the events overlapping that hour."""
    day_start = start_of_day(day)
    index = EventIndex(
        (e for e in events if e.occupies(day_start, end_of_day(day), min_duration)),
        min_duration,
    )
    return {
        hour: index.between(day_start + timedelta(hours=hour), day_start + timedelta(hours=hour + 1))
        for hour in range(HOURS_PER_DAY)
    }


def make_preview(day: date, events: Sequence[CalendarEvent], max_visible: int = DEFAULT_MAX_PREVIEW) -> DayPreview:
    visible = tuple(events[:max_visible])
    return DayPreview(day=day, events=visible, overflow_count=len(events) - len(visible))


def build_month_previews(
    events: Iterable[CalendarEvent],
    cells: Iterable["date | GridCell"],
    max_visible: int = DEFAULT_MAX_PREVIEW,
    min_duration: timedelta = DEFAULT_MIN_DURATION,
) -> dict[date, DayPreview]:
    """
    Capped per-day event lists for the month view.

    Up to `max_visible` events per day are exposed; the rest are only
    counted, for a "+N more" indicator.
    """
    by_day = index_by_day(events, cells, min_duration)
    return {day: make_preview(day, day_events, max_visible) for day, day_events in by_day.items()}


def find_event(events: Iterable[CalendarEvent], event_id: str) -> Optional[CalendarEvent]:
    for event in events:
        if event.id == event_id:
            return event
    return None
