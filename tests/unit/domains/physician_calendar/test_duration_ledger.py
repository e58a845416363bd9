# ============================================================================
# Tests for the duration ledger
# ============================================================================
"""Unit tests for DurationLedger on the in-memory store."""

from datetime import datetime, timedelta

import pytest

from agenda.domains.physician_calendar.application import DurationLedger
from agenda.domains.physician_calendar.domain.services.intervals import time_range_of
from agenda.domains.physician_calendar.infrastructure.ledger import InMemoryDurationStore


class MovableClock:
    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def movable_clock(now) -> MovableClock:
    return MovableClock(now)


@pytest.fixture
def movable_ledger(movable_clock) -> DurationLedger:
    return DurationLedger(InMemoryDurationStore(), max_entries=3, clock=movable_clock)


class TestDurationLedger:
    """Tests for recording and reading durations."""

    def test_record_and_get(self, ledger) -> None:
        """Should return the recorded duration for the exact key."""
        ledger.record("2099-03-10T09:00:00", 45)
        assert ledger.get("2099-03-10T09:00:00") == 45
        assert ledger.get("2099-03-10T09:30:00") is None

    def test_durations_are_rounded(self, ledger) -> None:
        """Should store whole minutes."""
        ledger.record("2099-03-10T09:00:00", 29.6)
        assert ledger.get("2099-03-10T09:00:00") == 30

    def test_negative_and_empty_are_ignored(self, ledger) -> None:
        """Should drop negative durations and empty keys."""
        ledger.record("2099-03-10T09:00:00", -10)
        ledger.record("", 30)
        assert ledger.entries() == {}

    def test_later_record_overwrites(self, ledger) -> None:
        """Should keep the last duration written for a key."""
        ledger.record("2099-03-10T09:00:00", 30)
        ledger.record("2099-03-10T09:00:00", 60)
        assert ledger.get("2099-03-10T09:00:00") == 60

    def test_get_or_default(self, ledger) -> None:
        """Should fall back to the configured default."""
        assert ledger.get_or_default("2099-03-10T09:00:00") == 30

    def test_entries_expire_after_retention(self, movable_ledger, movable_clock) -> None:
        """Should forget entries older than 90 days."""
        movable_ledger.record("2099-03-10T09:00:00", 45)

        movable_clock.advance(days=90)
        assert movable_ledger.get("2099-03-10T09:00:00") == 45

        movable_clock.advance(seconds=1)
        assert movable_ledger.get("2099-03-10T09:00:00") is None
        assert movable_ledger.get_or_default("2099-03-10T09:00:00") == 30
        assert movable_ledger.entries() == {}

    def test_oldest_entries_are_evicted(self, movable_ledger, movable_clock) -> None:
        """Should keep at most max_entries, evicting the oldest first."""
        for hour in (8, 9, 10, 11):
            movable_ledger.record(f"2099-03-10T{hour:02d}:00:00", hour * 5)
            movable_clock.advance(minutes=1)

        entries = movable_ledger.entries()
        assert len(entries) == 3
        assert "2099-03-10T08:00:00" not in entries
        assert entries["2099-03-10T11:00:00"] == 55

    def test_record_many(self, ledger) -> None:
        """Should record a whole batch."""
        ledger.record_many([("2099-03-10T09:00:00", 20), ("2099-03-10T09:30:00", 25), ("", 5)])
        assert ledger.entries() == {"2099-03-10T09:00:00": 20, "2099-03-10T09:30:00": 25}

    def test_resolve_uses_ledger(self, ledger, make_appointment) -> None:
        """Should resolve an appointment's duration through the ledger."""
        appointment = make_appointment("09:00", duration=15)
        assert ledger.resolve(appointment) == 15
        ledger.record(appointment.appointment_date, 50)
        assert ledger.resolve(appointment) == 50

    def test_recorded_duration_drives_interval(self, ledger, make_appointment) -> None:
        """Should make time_range_of return the recorded end."""
        appointment = make_appointment("09:00")
        ledger.record(appointment.appointment_date, 50)
        occupied = time_range_of(appointment, ledger.entries())
        assert occupied.end == datetime(2099, 3, 10, 9, 50)

    def test_clear(self, ledger) -> None:
        """Should remove every entry."""
        ledger.record("2099-03-10T09:00:00", 30)
        ledger.clear()
        assert ledger.entries() == {}
