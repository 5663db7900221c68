"""
Host-facing calendar session.

Ties navigation, grid building, indexing, lane layout and the CRUD form
together behind one object. The host supplies its event list and
callbacks, renders from the values computed here, and calls
set_events() whenever its own list changes.
"""

from datetime import date, datetime
from typing import Any, Iterable, Optional

from .config import Config
from .date_grid import grid_days
from .event_form import EventFormState
from .event_index import build_month_previews, find_event, index_by_day, index_by_hour_slot
from .event_manager import CalendarIntent, EventCallbacks, EventDeleted, EventManager
from .lane_layout import layout_week
from .models import CalendarEvent, DayPreview, GridCell, PositionedEvent, ViewMode
from .navigation import NavigationState


class CalendarSession:
    """One long-lived calendar: navigation state, form state, and the host's events."""

    def __init__(
        self,
        events: Iterable[CalendarEvent] = (),
        initial_view: "ViewMode | str" = ViewMode.MONTH,
        initial_date: Optional[date] = None,
        callbacks: Optional[EventCallbacks] = None,
        config: Optional[Config] = None,
    ):
        self.config = config or Config()
        self.navigation = NavigationState.initial(initial_date, initial_view)
        self.manager = EventManager(
            callbacks=callbacks,
            form=EventFormState(self.config.form, self.config.messages),
        )
        self._events: list[CalendarEvent] = list(events)

    # ==================== Events ====================

    @property
    def events(self) -> list[CalendarEvent]:
        return list(self._events)

    def set_events(self, events: Iterable[CalendarEvent]) -> None:
        """Replace the event list (after the host applied an intent)."""
        self._events = list(events)

    # ==================== Navigation ====================

    @property
    def view_mode(self) -> ViewMode:
        return self.navigation.view_mode

    @property
    def reference_date(self) -> date:
        return self.navigation.reference_date

    def next(self) -> NavigationState:
        self.navigation = self.navigation.next()
        return self.navigation

    def previous(self) -> NavigationState:
        self.navigation = self.navigation.previous()
        return self.navigation

    def today(self, current: Optional[date] = None) -> NavigationState:
        self.navigation = self.navigation.today(current)
        return self.navigation

    def set_view(self, mode: "ViewMode | str") -> NavigationState:
        self.navigation = self.navigation.set_view(mode)
        return self.navigation

    def title(self) -> str:
        return self.navigation.title(self.config.localization, self.config.grid.week_start)

    def weekday_headers(self) -> list[str]:
        return self.config.localization.weekday_headers(self.config.grid.week_start)

    # ==================== Derived layout ====================

    def grid(self, today: Optional[date] = None) -> tuple[GridCell, ...]:
        return self.navigation.build_grid(self.config.grid.week_start, today)

    def visible_days(self) -> list[date]:
        return grid_days(self.grid())

    def month_previews(self) -> dict[date, DayPreview]:
        """Capped event lists per month cell, with "+N more" counts."""
        return build_month_previews(
            self._events,
            self.visible_days(),
            self.config.preview.max_events_per_day,
            self.config.layout.min_duration,
        )

    def week_layout(self) -> dict[date, list[PositionedEvent]]:
        """Lane-positioned events per day column of the visible week."""
        return layout_week(self._events, self.visible_days(), self.config.layout.min_duration)

    def events_for_day(self, day: date) -> list[CalendarEvent]:
        return index_by_day(self._events, [day], self.config.layout.min_duration)[day]

    def events_by_hour(self, day: date) -> dict[int, list[CalendarEvent]]:
        return index_by_hour_slot(self._events, day, self.config.layout.min_duration)

    # ==================== Interaction ====================

    @property
    def form(self) -> EventFormState:
        return self.manager.form

    def click_cell(self, cell: "GridCell | date | datetime") -> None:
        """Open the form to create an event at the clicked cell or slot."""
        if isinstance(cell, GridCell):
            cell = cell.date
        self.manager.open_for_create(cell)

    def click_event(self, event_id: str) -> None:
        """Open the form to edit one of the host's events."""
        event = find_event(self._events, event_id)
        if event is None:
            raise KeyError(f"No event with id {event_id!r}")
        self.manager.open_for_edit(event)

    def update_field(self, name: str, value: Any) -> None:
        self.manager.update_field(name, value)

    def submit(self) -> Optional[CalendarIntent]:
        return self.manager.submit()

    def delete_current(self) -> Optional[EventDeleted]:
        return self.manager.delete_current()

    def cancel(self) -> None:
        self.manager.cancel()

    @classmethod
    def from_config_file(cls, config_path=None, **kwargs) -> 'CalendarSession':
        """Load a TOML configuration, apply it, and start a session with it."""
        config = Config.load(config_path)
        config.apply()
        return cls(config=config, **kwargs)
