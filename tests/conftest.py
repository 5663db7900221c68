"""
Pytest configuration and shared fixtures.
"""

import sys
from datetime import datetime
from pathlib import Path

import pytest

# Add the repository root to the path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from calview import debug, timezone_utils
from calview.config import EVENT_COLORS, DEFAULT_CATEGORIES
from calview.models import CalendarEvent


@pytest.fixture(autouse=True)
def engine_defaults():
    """Keep process-wide settings from leaking between tests."""
    timezone_utils.set_timezone(timezone_utils.DEFAULT_TIMEZONE)
    debug.set_debug(False)
    yield
    timezone_utils.set_timezone(timezone_utils.DEFAULT_TIMEZONE)
    debug.set_debug(False)


@pytest.fixture
def make_event():
    """Factory for events with a default title."""
    def _make(event_id, start, end, title=None, **kwargs):
        return CalendarEvent(
            id=event_id,
            title=title or f"Event {event_id}",
            start_date=start,
            end_date=end,
            **kwargs,
        )
    return _make


@pytest.fixture
def sample_events():
    """The four sample events from the late-October 2025 week."""
    return [
        CalendarEvent(
            id='evt-1',
            title='Team Standup',
            description='Daily sync with the team',
            start_date=datetime(2025, 10, 29, 9, 0),
            end_date=datetime(2025, 10, 29, 9, 30),
            color='#3b82f6',
            category='Meeting',
        ),
        CalendarEvent(
            id='evt-2',
            title='Design Review',
            description='Review new component designs',
            start_date=datetime(2025, 10, 29, 14, 0),
            end_date=datetime(2025, 10, 29, 15, 30),
            color='#10b981',
            category='Design',
        ),
        CalendarEvent(
            id='evt-3',
            title='Client Presentation',
            start_date=datetime(2025, 10, 30, 10, 0),
            end_date=datetime(2025, 10, 30, 11, 30),
            color='#f59e0b',
            category='Meeting',
        ),
        CalendarEvent(
            id='evt-4',
            title='Development Sprint',
            description='Sprint planning and task assignment',
            start_date=datetime(2025, 10, 31, 9, 0),
            end_date=datetime(2025, 10, 31, 17, 0),
            color='#8b5cf6',
            category='Work',
        ),
    ]


@pytest.fixture
def many_events():
    """25 events, one per day of October 2025."""
    events = []
    for i in range(1, 26):
        events.append(CalendarEvent(
            id=f'evt-{i}',
            title=f'Event {i}',
            description=f'Description for event {i}',
            start_date=datetime(2025, 10, i, 9 + (i % 8), 0),
            end_date=datetime(2025, 10, i, 10 + (i % 8), 30),
            color=EVENT_COLORS[i % len(EVENT_COLORS)],
            category=DEFAULT_CATEGORIES[i % len(DEFAULT_CATEGORIES)],
        ))
    return events
