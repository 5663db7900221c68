"""
calview - calendar state and layout engine

This package provides the computation behind an embeddable calendar widget:
- Configuration and policy constants (config.py)
- Date grids for month and week views (date_grid.py)
- Assignment of events to days and hour slots (event_index.py)
- Lane layout of overlapping events (lane_layout.py)
- Navigation and event form state machines (navigation.py, event_form.py)
- CRUD intents emitted to the host (event_manager.py)
- Host-facing session object (session.py)
- iCalendar interchange (ical.py)
"""

from .config import Config, WeekStart, EVENT_COLORS, MONTH_GRID_CELLS
from .models import CalendarEvent, ViewMode, GridCell, PositionedEvent, DayPreview
from .date_grid import build_month_grid, build_week_grid
from .event_index import EventIndex, index_by_day, index_by_hour_slot, build_month_previews
from .lane_layout import layout_day, layout_week
from .navigation import NavigationState
from .event_form import EventFormState, FormMode
from .event_manager import (
    EventManager, EventCallbacks,
    EventAdded, EventUpdated, EventDeleted,
)
from .session import CalendarSession

__all__ = [
    'Config',
    'WeekStart',
    'EVENT_COLORS',
    'MONTH_GRID_CELLS',
    'CalendarEvent',
    'ViewMode',
    'GridCell',
    'PositionedEvent',
    'DayPreview',
    'build_month_grid',
    'build_week_grid',
    'EventIndex',
    'index_by_day',
    'index_by_hour_slot',
    'build_month_previews',
    'layout_day',
    'layout_week',
    'NavigationState',
    'EventFormState',
    'FormMode',
    'EventManager',
    'EventCallbacks',
    'EventAdded',
    'EventUpdated',
    'EventDeleted',
    'CalendarSession',
]
