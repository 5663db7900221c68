"""
Navigation state: which period the calendar shows and in which view.

Every transition returns a new NavigationState; none can fail.
"""

import calendar
from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta
from typing import Optional

from .config import DAYS_PER_WEEK, LocalizationConfig, WeekStart
from .date_grid import build_grid, period_title, visible_range
from .models import GridCell, ViewMode
from . import timezone_utils


def add_months(d: date, months: int) -> date:
    """Shift by whole months, clamping the day to the target month's length."""
    month_index = d.month - 1 + months
    year = d.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return d.replace(year=year, month=month, day=min(d.day, last_day))


@dataclass(frozen=True)
class NavigationState:
    reference_date: date
    view_mode: ViewMode = ViewMode.MONTH

    def __post_init__(self):
        if isinstance(self.reference_date, datetime):
            object.__setattr__(self, 'reference_date', self.reference_date.date())
        object.__setattr__(self, 'view_mode', ViewMode.parse(self.view_mode))

    @classmethod
    def initial(cls, initial_date: Optional[date] = None, initial_view: "ViewMode | str" = ViewMode.MONTH) -> 'NavigationState':
        if initial_date is None:
            initial_date = timezone_utils.today()
        return cls(reference_date=initial_date, view_mode=ViewMode.parse(initial_view))

    # ==================== Transitions ====================

    def next(self) -> 'NavigationState':
        """Advance by one month or one week depending on the view."""
        if self.view_mode == ViewMode.WEEK:
            return replace(self, reference_date=self.reference_date + timedelta(days=DAYS_PER_WEEK))
        return replace(self, reference_date=add_months(self.reference_date, 1))

    def previous(self) -> 'NavigationState':
        if self.view_mode == ViewMode.WEEK:
            return replace(self, reference_date=self.reference_date - timedelta(days=DAYS_PER_WEEK))
        return replace(self, reference_date=add_months(self.reference_date, -1))

    def today(self, current: Optional[date] = None) -> 'NavigationState':
        """Jump to the current date, keeping the view."""
        if current is None:
            current = timezone_utils.today()
        return replace(self, reference_date=current)

    def set_view(self, mode: "ViewMode | str") -> 'NavigationState':
        return replace(self, view_mode=ViewMode.parse(mode))

    # ==================== Derived values ====================

    def visible_range(self, week_start: WeekStart = WeekStart.MONDAY) -> tuple[datetime, datetime]:
        return visible_range(self.reference_date, self.view_mode, week_start)

    def build_grid(self, week_start: WeekStart = WeekStart.MONDAY, today: Optional[date] = None) -> tuple[GridCell, ...]:
        return build_grid(self.reference_date, self.view_mode, week_start, today)

    def title(self, localization: Optional[LocalizationConfig] = None, week_start: WeekStart = WeekStart.MONDAY) -> str:
        return period_title(self.reference_date, self.view_mode, localization, week_start)
