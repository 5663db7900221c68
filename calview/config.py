"""
Configuration for the calview engine.

Handles TOML file parsing and holds the policy constants (grid size,
preview cap, colour palette) that every layout computation shares.
"""

import tomllib
import os
from pathlib import Path
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Optional

from . import debug
from . import timezone_utils


# Month grid: always 6 weeks of 7 days, whatever the month looks like
MONTH_GRID_WEEKS = 6
DAYS_PER_WEEK = 7
MONTH_GRID_CELLS = MONTH_GRID_WEEKS * DAYS_PER_WEEK
HOURS_PER_DAY = 24

# Fixed event palette (blue, green, amber, purple, red, pink)
EVENT_COLORS = [
    '#3b82f6',  # Blue
    '#10b981',  # Green
    '#f59e0b',  # Amber
    '#8b5cf6',  # Purple
    '#ef4444',  # Red
    '#ec4899',  # Pink
]

DEFAULT_CATEGORIES = ["Meeting", "Work", "Personal", "Design", "Development"]


def is_palette_color(color: object) -> bool:
    """Check whether a value is one of the fixed event colours."""
    if not isinstance(color, str):
        return False
    return color.strip().lower() in EVENT_COLORS


class WeekStart(Enum):
    """First weekday of a grid row, as a `date.weekday()` number."""
    MONDAY = 0
    SUNDAY = 6

    @classmethod
    def parse(cls, value: "str | WeekStart") -> "WeekStart":
        if isinstance(value, WeekStart):
            return value
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown week start: {value!r} (expected 'monday' or 'sunday')")


@dataclass
class GridConfig:
    """Configuration for grid construction."""
    week_start: WeekStart = WeekStart.MONDAY


@dataclass
class PreviewConfig:
    """Configuration for month cell previews."""
    max_events_per_day: int = 3  # Remaining events collapse into "+N more"


@dataclass
class FormConfig:
    """Configuration for new-event drafts."""
    default_duration_minutes: int = 60
    default_start_hour: int = 9  # Used when a whole day (month cell) is clicked
    default_color: str = EVENT_COLORS[0]

    @property
    def default_duration(self) -> timedelta:
        return timedelta(minutes=self.default_duration_minutes)


@dataclass
class LayoutConfig:
    """Configuration for event placement."""
    min_event_minutes: int = 30  # Zero-length events are stretched to this

    @property
    def min_duration(self) -> timedelta:
        return timedelta(minutes=self.min_event_minutes)


@dataclass
class MessagesConfig:
    """Validation messages shown next to form fields."""
    title_required: str = "Title is required"
    invalid_start: str = "Start date is invalid"
    invalid_end: str = "End date is invalid"
    end_before_start: str = "End time must be after start time"
    invalid_color: str = "Please choose one of the available colors"


@dataclass
class LocalizationConfig:
    """Configuration for localized day and month names."""
    # Default to English abbreviated day names
    day_names: list[str] = None  # Mon Tue Wed Thu Fri Sat Sun
    # Default to English full month names
    month_names: list[str] = None  # January February ... December

    def __post_init__(self):
        if self.day_names is None:
            self.day_names = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
        if self.month_names is None:
            self.month_names = [
                "January", "February", "March", "April", "May", "June",
                "July", "August", "September", "October", "November", "December"
            ]

    def get_day_name(self, weekday: int) -> str:
        """Get localized day name for weekday (0=Monday, 6=Sunday)."""
        return self.day_names[weekday] if 0 <= weekday < len(self.day_names) else ""

    def get_month_name(self, month: int) -> str:
        """Get localized month name (1=January, 12=December)."""
        return self.month_names[month - 1] if 1 <= month <= len(self.month_names) else ""

    def get_short_month_name(self, month: int) -> str:
        return self.get_month_name(month)[:3]

    def weekday_headers(self, week_start: WeekStart = WeekStart.MONDAY) -> list[str]:
        """Day names in grid column order."""
        return [self.get_day_name((week_start.value + i) % DAYS_PER_WEEK) for i in range(DAYS_PER_WEEK)]


@dataclass
class Config:
    """Main configuration container for the calview engine."""

    timezone: str = timezone_utils.DEFAULT_TIMEZONE
    debug: bool = False
    grid: GridConfig = field(default_factory=GridConfig)
    preview: PreviewConfig = field(default_factory=PreviewConfig)
    form: FormConfig = field(default_factory=FormConfig)
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    localization: LocalizationConfig = field(default_factory=LocalizationConfig)
    messages: MessagesConfig = field(default_factory=MessagesConfig)

    @classmethod
    def get_default_config_path(cls) -> Path:
        """Get the default configuration file path."""
        xdg_config = os.environ.get('XDG_CONFIG_HOME', os.path.expanduser('~/.config'))
        return Path(xdg_config) / 'calview' / 'calview.toml'

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> 'Config':
        """Load configuration from TOML file."""
        if config_path is None:
            config_path = cls.get_default_config_path()
        config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, 'rb') as f:
            data = tomllib.load(f)

        config = cls.from_dict(data)
        debug.debug_print("CONFIG", f"Loaded configuration from {config_path} (sections: {list(data.keys())})")
        return config

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        """Build a configuration from already-parsed TOML tables."""
        general = data.get('General', {})

        grid_data = data.get('Grid', {})
        grid = GridConfig(
            week_start=WeekStart.parse(grid_data.get('week_start', 'monday')),
        )

        preview_data = data.get('Preview', {})
        preview = PreviewConfig(
            max_events_per_day=int(preview_data.get('max_events_per_day', PreviewConfig.max_events_per_day)),
        )
        if preview.max_events_per_day < 0:
            raise ValueError("Preview.max_events_per_day must not be negative")

        form_data = data.get('Form', {})
        form = FormConfig(
            default_duration_minutes=int(form_data.get('default_duration_minutes', FormConfig.default_duration_minutes)),
            default_start_hour=int(form_data.get('default_start_hour', FormConfig.default_start_hour)),
            default_color=form_data.get('default_color', FormConfig.default_color).lower(),
        )
        if not is_palette_color(form.default_color):
            raise ValueError(f"Form.default_color {form.default_color!r} is not in the event palette")
        if not 0 <= form.default_start_hour < HOURS_PER_DAY:
            raise ValueError("Form.default_start_hour must be between 0 and 23")
        if form.default_duration_minutes <= 0:
            raise ValueError("Form.default_duration_minutes must be positive")

        layout_data = data.get('Layout', {})
        layout = LayoutConfig(
            min_event_minutes=int(layout_data.get('min_event_minutes', LayoutConfig.min_event_minutes)),
        )
        if layout.min_event_minutes <= 0:
            raise ValueError("Layout.min_event_minutes must be positive")

        # Parse Localization section
        localization_data = data.get('Localization', {})
        day_names_str = localization_data.get('day_names', '')
        month_names_str = localization_data.get('month_names', '')

        # Space-separated names (if provided)
        day_names = day_names_str.split() if day_names_str else None
        month_names = month_names_str.split() if month_names_str else None

        localization = LocalizationConfig(
            day_names=day_names,
            month_names=month_names
        )

        messages_data = data.get('Messages', {})
        messages = MessagesConfig(**{
            name: messages_data.get(name, getattr(MessagesConfig, name))
            for name in MessagesConfig.__dataclass_fields__
        })

        return cls(
            timezone=general.get('timezone', timezone_utils.DEFAULT_TIMEZONE),
            debug=bool(general.get('debug', False)),
            grid=grid,
            preview=preview,
            form=form,
            layout=layout,
            localization=localization,
            messages=messages,
        )

    def apply(self):
        """Push the process-wide settings (timezone, debug output) into effect."""
        timezone_utils.set_timezone(self.timezone)
        debug.set_debug(self.debug)
