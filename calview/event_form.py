"""
State of the create/edit event form.

The form is either closed, open for creating a new event, or open for
editing an existing one. Field values are kept raw in `draft` (as typed
by the user) and validated on every change; validation problems are
reported per field in `errors` and never raised.
"""

from datetime import date, datetime, time as dt_time
from enum import Enum
from typing import Any, Optional

from .config import FormConfig, MessagesConfig, is_palette_color
from .models import CalendarEvent, coerce_datetime
from .debug import debug_print


class FormMode(Enum):
    CREATE = "create"
    EDIT = "edit"


# Fields the user can change; the id is never editable
EDITABLE_FIELDS = ('title', 'description', 'start_date', 'end_date', 'color', 'category')


class EventFormState:
    """Modal form state: visibility, mode, draft values and field errors."""

    def __init__(self, form_config: Optional[FormConfig] = None, messages: Optional[MessagesConfig] = None):
        self.form_config = form_config or FormConfig()
        self.messages = messages or MessagesConfig()
        self.mode: Optional[FormMode] = None
        self.draft: dict[str, Any] = {}
        self.errors: dict[str, str] = {}
        self.original: Optional[CalendarEvent] = None

    @property
    def is_open(self) -> bool:
        return self.mode is not None

    @property
    def original_id(self) -> Optional[str]:
        return self.original.id if self.original else None

    # ==================== Transitions ====================

    def open_for_create(self, when: "date | datetime") -> None:
        """
        Open an empty draft starting at the clicked slot.

        A bare date (month cell) starts at the configured default hour.
        The end defaults to start + default duration (one hour).
        """
        if isinstance(when, datetime):
            start = coerce_datetime(when)
        else:
            start = datetime.combine(when, dt_time(hour=self.form_config.default_start_hour))

        self.mode = FormMode.CREATE
        self.original = None
        self.errors = {}
        self.draft = {
            'title': '',
            'description': '',
            'start_date': start,
            'end_date': start + self.form_config.default_duration,
            'color': self.form_config.default_color,
            'category': '',
        }
        debug_print("FORM", f"open for create at {start.isoformat()}")

    def open_for_edit(self, event: CalendarEvent) -> None:
        self.mode = FormMode.EDIT
        self.original = event
        self.errors = {}
        self.draft = {
            'title': event.title,
            'description': event.description or '',
            'start_date': event.start_date,
            'end_date': event.end_date,
            'color': event.color,
            'category': event.category or '',
        }
        debug_print("FORM", f"open for edit: {event.id}")

    def update_field(self, name: str, value: Any) -> None:
        """Change one draft field and re-run validation."""
        if name not in EDITABLE_FIELDS:
            raise ValueError(f"Unknown form field: {name!r}")
        if not self.is_open:
            debug_print("FORM", f"ignoring update of {name} on a closed form")
            return
        self.draft[name] = value
        self.errors = self.validate()

    def reset(self) -> None:
        """Close the form and discard the draft."""
        self.mode = None
        self.original = None
        self.draft = {}
        self.errors = {}

    # ==================== Validation ====================

    def validate(self) -> dict[str, str]:
        """Check the draft and return a mapping of field name to message."""
        errors: dict[str, str] = {}

        title = self.draft.get('title')
        if not isinstance(title, str) or not title.strip():
            errors['title'] = self.messages.title_required

        # Malformed dates are reported before any interval check
        start = coerce_datetime(self.draft.get('start_date'))
        end = coerce_datetime(self.draft.get('end_date'))
        if start is None:
            errors['start_date'] = self.messages.invalid_start
        if end is None:
            errors['end_date'] = self.messages.invalid_end
        if start is not None and end is not None and start >= end:
            errors['end_date'] = self.messages.end_before_start

        if not is_palette_color(self.draft.get('color')):
            errors['color'] = self.messages.invalid_color

        return errors

    def cleaned(self) -> dict[str, Any]:
        """Typed draft values; only meaningful when validate() is empty."""
        description = self.draft.get('description')
        description = description.strip() if isinstance(description, str) else description
        category = self.draft.get('category')
        category = category.strip() if isinstance(category, str) else category
        return {
            'title': self.draft['title'].strip(),
            'description': description or None,
            'start_date': coerce_datetime(self.draft['start_date']),
            'end_date': coerce_datetime(self.draft['end_date']),
            'color': self.draft['color'].strip().lower(),
            'category': category or None,
        }

    def changed_fields(self) -> dict[str, Any]:
        """
        Cleaned values of the fields that differ from the edited event.

        Empty when nothing was changed (or the form is not in edit mode).
        """
        if self.mode != FormMode.EDIT or self.original is None:
            return {}
        cleaned = self.cleaned()
        original = self.original
        updates: dict[str, Any] = {}

        if cleaned['title'] != original.title.strip():
            updates['title'] = cleaned['title']
        if cleaned['description'] != ((original.description or '').strip() or None):
            updates['description'] = cleaned['description']
        if cleaned['start_date'] != original.start_date:
            updates['start_date'] = cleaned['start_date']
        if cleaned['end_date'] != original.end_date:
            updates['end_date'] = cleaned['end_date']
        if cleaned['color'] != original.color.strip().lower():
            updates['color'] = cleaned['color']
        if cleaned['category'] != ((original.category or '').strip() or None):
            updates['category'] = cleaned['category']
        return updates
