"""
Tests for the shared data model.
"""

from datetime import date, datetime, timedelta

import pytest
import pytz

from calview.models import CalendarEvent, GridCell, ViewMode, coerce_datetime


def test_from_dict_accepts_host_keys():
    event = CalendarEvent.from_dict({
        'id': 'evt-1',
        'title': 'Team Standup',
        'startDate': '2025-10-29T09:00:00',
        'endDate': '2025-10-29T09:30:00',
        'color': '#3b82f6',
        'category': 'Meeting',
    })

    assert event.start_date == datetime(2025, 10, 29, 9, 0)
    assert event.end_date == datetime(2025, 10, 29, 9, 30)
    assert event.description is None
    assert event.to_dict() == {
        'id': 'evt-1',
        'title': 'Team Standup',
        'start_date': '2025-10-29T09:00:00',
        'end_date': '2025-10-29T09:30:00',
        'color': '#3b82f6',
        'category': 'Meeting',
    }


def test_from_dict_rejects_unreadable_dates():
    with pytest.raises(ValueError):
        CalendarEvent.from_dict({'id': 'x', 'title': 'x', 'startDate': 'soon', 'endDate': 'later'})


def test_aware_datetimes_become_local_naive():
    utc = pytz.UTC
    event = CalendarEvent('x', 'x', datetime(2025, 7, 1, 7, 0, tzinfo=utc), datetime(2025, 7, 1, 8, 0, tzinfo=utc))
    # Europe/Amsterdam is UTC+2 in summer
    assert event.start_date == datetime(2025, 7, 1, 9, 0)
    assert event.end_date.tzinfo is None


def test_with_updates():
    event = CalendarEvent('x', 'Old', datetime(2025, 10, 29, 9), datetime(2025, 10, 29, 10))
    updated = event.with_updates({'title': 'New', 'endDate': datetime(2025, 10, 29, 11)})

    assert updated.title == 'New'
    assert updated.end_date == datetime(2025, 10, 29, 11)
    assert event.title == 'Old'
    with pytest.raises(ValueError):
        event.with_updates({'location': 'Room 1'})


def test_effective_end():
    ping = CalendarEvent('p', 'p', datetime(2025, 10, 29, 9), datetime(2025, 10, 29, 9))
    assert ping.effective_end(timedelta(minutes=30)) == datetime(2025, 10, 29, 9, 30)
    assert ping.occupies(datetime(2025, 10, 29, 9, 15), datetime(2025, 10, 29, 10), timedelta(minutes=30))


def test_coerce_datetime():
    assert coerce_datetime(date(2025, 10, 29)) == datetime(2025, 10, 29)
    assert coerce_datetime('2025-10-29T08:00:00Z') == datetime(2025, 10, 29, 9, 0)
    assert coerce_datetime('') is None
    assert coerce_datetime(42) is None


def test_grid_cell_properties():
    day_cell = GridCell(date(2025, 10, 29), True, False)
    assert day_cell.key == date(2025, 10, 29)
    assert day_cell.label == "29"
    assert day_cell.end - day_cell.start == timedelta(days=1)

    slot = GridCell(datetime(2025, 10, 29, 14), True, True, hour=14)
    assert slot.key == date(2025, 10, 29)
    assert slot.label == "14:00"


def test_view_mode_parse():
    assert ViewMode.parse('Week') == ViewMode.WEEK
    assert ViewMode.parse(ViewMode.MONTH) == ViewMode.MONTH
    with pytest.raises(ValueError):
        ViewMode.parse('day')
