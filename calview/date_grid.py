"""
Date grid construction for month and week views.

A month grid is always MONTH_GRID_CELLS days, starting on the configured
first weekday on or before the 1st of the month. A week grid is 7 days
of 24 hourly slots. Both are returned as fresh tuples of GridCell and
never mutated afterwards.
"""

from datetime import datetime, date, timedelta, time as dt_time
from typing import Iterable, Optional

from .config import (
    DAYS_PER_WEEK, HOURS_PER_DAY, MONTH_GRID_CELLS,
    LocalizationConfig, WeekStart,
)
from .models import GridCell, ViewMode, start_of_day
from . import timezone_utils


def start_of_week(day: date, week_start: WeekStart = WeekStart.MONDAY) -> date:
    """The first day of the week containing `day`."""
    offset = (day.weekday() - week_start.value) % DAYS_PER_WEEK
    return day - timedelta(days=offset)


def week_days(reference_date: date, week_start: WeekStart = WeekStart.MONDAY) -> list[date]:
    first = start_of_week(reference_date, week_start)
    return [first + timedelta(days=i) for i in range(DAYS_PER_WEEK)]


def month_grid_start(reference_date: date, week_start: WeekStart = WeekStart.MONDAY) -> date:
    return start_of_week(reference_date.replace(day=1), week_start)


def build_month_grid(
    reference_date: date,
    week_start: WeekStart = WeekStart.MONDAY,
    today: Optional[date] = None,
) -> tuple[GridCell, ...]:
    """
    Build the 6x7 grid of days shown for the month of `reference_date`.

    Leading and trailing days from neighbouring months are included with
    is_current_period=False so the grid is always complete.
    """
    if isinstance(reference_date, datetime):
        reference_date = reference_date.date()
    if today is None:
        today = timezone_utils.today()

    grid_start = month_grid_start(reference_date, week_start)
    cells = []
    for i in range(MONTH_GRID_CELLS):
        cell_date = grid_start + timedelta(days=i)
        is_current = (cell_date.year, cell_date.month) == (reference_date.year, reference_date.month)
        cells.append(GridCell(date=cell_date, is_current_period=is_current, is_today=cell_date == today))
    return tuple(cells)


def build_week_grid(
    reference_date: date,
    week_start: WeekStart = WeekStart.MONDAY,
    today: Optional[date] = None,
) -> tuple[GridCell, ...]:
    """
    Build the hourly slots of the week containing `reference_date`.

    Ordered day by day, 00:00 to 23:00 within each day. Times are naive
    local; DST transitions do not change the slot count.
    """
    if isinstance(reference_date, datetime):
        reference_date = reference_date.date()
    if today is None:
        today = timezone_utils.today()

    cells = []
    for day in week_days(reference_date, week_start):
        for hour in range(HOURS_PER_DAY):
            cells.append(GridCell(
                date=datetime.combine(day, dt_time(hour=hour)),
                is_current_period=True,
                is_today=day == today,
                hour=hour,
            ))
    return tuple(cells)


def build_grid(
    reference_date: date,
    view_mode: ViewMode,
    week_start: WeekStart = WeekStart.MONDAY,
    today: Optional[date] = None,
) -> tuple[GridCell, ...]:
    if view_mode == ViewMode.WEEK:
        return build_week_grid(reference_date, week_start, today)
    return build_month_grid(reference_date, week_start, today)


def grid_days(cells: Iterable[GridCell]) -> list[date]:
    """Distinct days covered by a grid, in grid order."""
    days: list[date] = []
    for cell in cells:
        if not days or days[-1] != cell.day:
            days.append(cell.day)
    return days


def visible_range(
    reference_date: date,
    view_mode: ViewMode,
    week_start: WeekStart = WeekStart.MONDAY,
) -> tuple[datetime, datetime]:
    """Half-open [start, end) datetimes covered by the grid of a view."""
    if view_mode == ViewMode.WEEK:
        first = start_of_week(reference_date, week_start)
        length = DAYS_PER_WEEK
    else:
        first = month_grid_start(reference_date, week_start)
        length = MONTH_GRID_CELLS
    start = start_of_day(first)
    return start, start + timedelta(days=length)


def period_title(
    reference_date: date,
    view_mode: ViewMode,
    localization: Optional[LocalizationConfig] = None,
    week_start: WeekStart = WeekStart.MONDAY,
) -> str:
    """Header label for the visible period, e.g. "October 2025"."""
    if localization is None:
        localization = LocalizationConfig()

    if view_mode == ViewMode.MONTH:
        return f"{localization.get_month_name(reference_date.month)} {reference_date.year}"

    days = week_days(reference_date, week_start)
    first, last = days[0], days[-1]
    first_label = f"{localization.get_short_month_name(first.month)} {first.day}"
    last_label = f"{localization.get_short_month_name(last.month)} {last.day}"
    if first.year != last.year:
        return f"{first_label}, {first.year} – {last_label}, {last.year}"
    return f"{first_label} – {last_label}, {last.year}"
