"""
CRUD orchestration between the event form and the host application.

The engine never stores events. A confirmed form action becomes one of
three intents (EventAdded, EventUpdated, EventDeleted) that is handed to
the matching host callback. Callbacks are fire-and-forget: the host is
expected to feed an updated event list back through its own update
cycle.
"""

import uuid
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Union
from datetime import date, datetime

from .event_form import EventFormState, FormMode
from .models import CalendarEvent
from .debug import debug_print


@dataclass(frozen=True)
class EventAdded:
    event: CalendarEvent


@dataclass(frozen=True)
class EventUpdated:
    event_id: str
    updates: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class EventDeleted:
    event_id: str


CalendarIntent = Union[EventAdded, EventUpdated, EventDeleted]


@dataclass
class EventCallbacks:
    """Host notification functions; any of them may be left unset."""
    on_event_add: Optional[Callable[[CalendarEvent], None]] = None
    on_event_update: Optional[Callable[[str, dict], None]] = None
    on_event_delete: Optional[Callable[[str], None]] = None


def new_event_id() -> str:
    return str(uuid.uuid4())


class EventManager:
    """
    Validates form submissions and emits CRUD intents to the host.

    Each confirmed action emits exactly one intent; failed validation,
    cancel and invalid deletes emit nothing.
    """

    def __init__(
        self,
        callbacks: Optional[EventCallbacks] = None,
        form: Optional[EventFormState] = None,
        id_factory: Callable[[], str] = new_event_id,
    ):
        self.callbacks = callbacks or EventCallbacks()
        self.form = form or EventFormState()
        self._id_factory = id_factory

    # ==================== Form passthroughs ====================

    def open_for_create(self, when: "date | datetime") -> None:
        self.form.open_for_create(when)

    def open_for_edit(self, event: CalendarEvent) -> None:
        self.form.open_for_edit(event)

    def update_field(self, name: str, value: Any) -> None:
        self.form.update_field(name, value)

    # ==================== Actions ====================

    def submit(self) -> Optional[CalendarIntent]:
        """
        Validate the draft and emit an add or update intent.

        On validation failure the form stays open with its errors set and
        None is returned.
        """
        if not self.form.is_open:
            return None

        self.form.errors = self.form.validate()
        if self.form.errors:
            debug_print("MANAGER", f"submit rejected: {sorted(self.form.errors)}")
            return None

        if self.form.mode == FormMode.CREATE:
            intent: CalendarIntent = EventAdded(CalendarEvent(id=self._id_factory(), **self.form.cleaned()))
        else:
            intent = EventUpdated(self.form.original_id, self.form.changed_fields())

        self.form.reset()
        self.dispatch(intent)
        return intent

    def delete_current(self) -> Optional[EventDeleted]:
        """Emit a delete intent for the event being edited (edit mode only)."""
        if self.form.mode != FormMode.EDIT:
            return None
        intent = EventDeleted(self.form.original_id)
        self.form.reset()
        self.dispatch(intent)
        return intent

    def cancel(self) -> None:
        self.form.reset()

    def dispatch(self, intent: CalendarIntent) -> None:
        """Hand an intent to the matching host callback."""
        debug_print("MANAGER", f"emit {intent!r}")
        if isinstance(intent, EventAdded):
            if self.callbacks.on_event_add:
                self.callbacks.on_event_add(intent.event)
        elif isinstance(intent, EventUpdated):
            if self.callbacks.on_event_update:
                self.callbacks.on_event_update(intent.event_id, intent.updates)
        elif isinstance(intent, EventDeleted):
            if self.callbacks.on_event_delete:
                self.callbacks.on_event_delete(intent.event_id)
        else:
            raise TypeError(f"Not a calendar intent: {intent!r}")
