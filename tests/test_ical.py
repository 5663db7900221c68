"""
Tests for iCalendar interchange.
"""

from datetime import datetime

from calview.ical import events_from_ics, events_to_ics


SAMPLE_ICS = """BEGIN:VCALENDAR
VERSION:2.0
PRODID:-//test//test//EN
BEGIN:VEVENT
UID:all-day
SUMMARY:Offsite
DTSTART;VALUE=DATE:20251029
DTEND;VALUE=DATE:20251030
COLOR:#10B981
CATEGORIES:Work,Personal
END:VEVENT
BEGIN:VEVENT
UID:no-end
SUMMARY:Call
DTSTART:20251030T140000
COLOR:teal
END:VEVENT
BEGIN:VEVENT
UID:no-start
SUMMARY:Broken
END:VEVENT
END:VCALENDAR
"""


def test_export_and_import(sample_events):
    text = events_to_ics(sample_events)

    assert "BEGIN:VCALENDAR" in text
    assert "PRODID:-//calview//calendar engine//EN" in text

    parsed = events_from_ics(text)
    assert parsed == sample_events


def test_import_edge_cases():
    events = {e.id: e for e in events_from_ics(SAMPLE_ICS)}

    assert set(events) == {'all-day', 'no-end'}

    offsite = events['all-day']
    assert offsite.start_date == datetime(2025, 10, 29)
    assert offsite.end_date == datetime(2025, 10, 30)
    assert offsite.color == '#10b981'
    assert offsite.category == 'Work'
    assert offsite.description is None

    call = events['no-end']
    assert call.end_date == datetime(2025, 10, 30, 15, 0)
    assert call.color == '#3b82f6'
    assert call.category is None


def test_all_day_without_end_lasts_one_day():
    text = SAMPLE_ICS.replace("DTEND;VALUE=DATE:20251030\n", "")
    offsite = {e.id: e for e in events_from_ics(text)}['all-day']
    assert offsite.start_date == datetime(2025, 10, 29)
    assert offsite.end_date == datetime(2025, 10, 30)


def test_missing_uids_get_distinct_ids():
    text = SAMPLE_ICS.replace("UID:all-day\n", "").replace("UID:no-end\n", "")
    events = events_from_ics(text)

    ids = [e.id for e in events]
    assert len(ids) == 2
    assert all(ids)
    assert len(set(ids)) == 2


def test_utc_times_are_read_as_local():
    text = SAMPLE_ICS.replace("DTSTART:20251030T140000", "DTSTART:20251030T140000Z")
    call = {e.id: e for e in events_from_ics(text)}['no-end']
    # Europe/Amsterdam is UTC+1 after the October DST change
    assert call.start_date == datetime(2025, 10, 30, 15, 0)
    assert call.start_date.tzinfo is None
