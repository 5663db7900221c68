"""
Lane layout for the week view.

Events sharing a day column are placed side by side in lanes so that no
two overlapping events share a lane. Each event gets the lowest lane
that is free at its start time; the number of lanes used that day is
given to every event of the day so they can all size themselves to
1/lane_count of the column width.
"""

import heapq
from datetime import date, datetime, timedelta
from typing import Iterable

from .event_index import DEFAULT_MIN_DURATION, EventIndex
from .models import CalendarEvent, PositionedEvent, start_of_day, end_of_day


def _visible_bounds(event: CalendarEvent, day: date, min_duration: timedelta) -> tuple[datetime, datetime]:
    """Event clipped to the day, after stretching zero-length events."""
    day_start = start_of_day(day)
    day_end = end_of_day(day)
    start = max(event.start_date, day_start)
    end = min(event.effective_end(min_duration), day_end)
    return start, end


def layout_day(
    events: Iterable[CalendarEvent],
    day: date,
    min_duration: timedelta = DEFAULT_MIN_DURATION,
) -> list[PositionedEvent]:
    """
    Assign lanes to the events touching `day`.

    Events not touching the day are ignored. The result is ordered by
    visible start, then visible end, then id.
    """
    day_start = start_of_day(day)
    day_end = end_of_day(day)

    portions = []
    for event in events:
        if not event.occupies(day_start, day_end, min_duration):
            continue
        start, end = _visible_bounds(event, day, min_duration)
        portions.append((start, end, event.id, event))

    # Sort by start time, then end time, then id for determinism
    portions.sort(key=lambda p: (p[0], p[1], p[2]))

    active: list[tuple[datetime, int]] = []  # (end, lane) of events still running
    free_lanes: list[int] = []
    lane_count = 0
    assigned: list[tuple[datetime, datetime, CalendarEvent, int]] = []

    for start, end, _, event in portions:
        # Release lanes whose event has ended by now
        while active and active[0][0] <= start:
            _, lane = heapq.heappop(active)
            heapq.heappush(free_lanes, lane)

        if free_lanes:
            lane = heapq.heappop(free_lanes)
        else:
            lane = lane_count
            lane_count += 1

        heapq.heappush(active, (end, lane))
        assigned.append((start, end, event, lane))

    return [
        PositionedEvent(
            event=event,
            day=day,
            lane_index=lane,
            lane_count=lane_count,
            visible_start=start,
            visible_end=end,
        )
        for start, end, event, lane in assigned
    ]


def layout_week(
    events: Iterable[CalendarEvent],
    days: Iterable[date],
    min_duration: timedelta = DEFAULT_MIN_DURATION,
) -> dict[date, list[PositionedEvent]]:
    """Lane layout for each day column of a week."""
    index = EventIndex(events, min_duration)
    return {day: layout_day(index.on_day(day), day, min_duration) for day in days}


def max_concurrency(
    events: Iterable[CalendarEvent],
    day: date,
    min_duration: timedelta = DEFAULT_MIN_DURATION,
) -> int:
    """Largest number of the day's events running at the same instant."""
    day_start = start_of_day(day)
    day_end = end_of_day(day)
    points: list[tuple[datetime, int]] = []
    for event in events:
        if not event.occupies(day_start, day_end, min_duration):
            continue
        start, end = _visible_bounds(event, day, min_duration)
        points.append((start, 1))
        points.append((end, -1))

    # Ends sort before starts at the same instant (half-open intervals)
    points.sort()
    current = best = 0
    for _, delta in points:
        current += delta
        best = max(best, current)
    return best
