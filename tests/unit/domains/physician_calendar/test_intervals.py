# ============================================================================
# Tests for interval utilities and naive local timestamps
# ============================================================================
"""Unit tests for overlaps, time_range_of and the local datetime helpers."""

from datetime import datetime, time

import pytest

from agenda.domains.physician_calendar.domain.services.intervals import overlaps, resolve_duration, time_range_of
from agenda.domains.physician_calendar.domain.value_objects.local_datetime import (
    canonical_local_datetime,
    format_display_time,
    is_valid_local_datetime,
    parse_clock_time,
    parse_local_date,
    parse_local_datetime,
)


def at(hour: int, minute: int = 0) -> datetime:
    return datetime(2099, 3, 10, hour, minute)


class TestOverlaps:
    """Tests for the half-open overlap primitive."""

    @pytest.mark.parametrize(
        ("a", "b", "expected"),
        [
            ((at(9), at(10)), (at(9, 30), at(10, 30)), True),
            ((at(9), at(10)), (at(10), at(11)), False),
            ((at(9), at(10)), (at(11), at(12)), False),
            ((at(9), at(12)), (at(10), at(11)), True),
            ((at(9), at(10)), (at(9), at(10)), True),
            ((at(9), at(9, 1)), (at(9), at(9, 1)), True),
        ],
    )
    def test_overlap_is_symmetric(self, a, b, expected) -> None:
        """Should give the same answer in both argument orders."""
        assert overlaps(*a, *b) is expected
        assert overlaps(*b, *a) is expected

    def test_touching_ranges_do_not_overlap(self) -> None:
        """Should treat end == start as no overlap."""
        assert overlaps(at(8), at(9), at(9), at(9, 30)) is False
        assert overlaps(at(9), at(9, 30), at(8), at(9)) is False


class TestTimeRangeOf:
    """Tests for appointment interval construction."""

    def test_uses_default_duration(self, make_appointment) -> None:
        """Should fall back to 30 minutes when nothing else is known."""
        occupied = time_range_of(make_appointment("09:00"))
        assert occupied is not None
        assert occupied.start == at(9)
        assert occupied.end == at(9, 30)

    def test_uses_own_duration_field(self, make_appointment) -> None:
        """Should use the record's own duration when the ledger has nothing."""
        occupied = time_range_of(make_appointment("09:00", duration=45))
        assert occupied.end == at(9, 45)

    def test_ledger_wins_over_own_duration(self, make_appointment) -> None:
        """Should prefer the ledger entry for the exact timestamp."""
        appointment = make_appointment("09:00", duration=45)
        occupied = time_range_of(appointment, {"2099-03-10T09:00:00": 20})
        assert occupied.end == at(9, 20)

    def test_ledger_lookup_by_canonical_form(self, make_appointment) -> None:
        """Should find a ledger entry when the store echoes fractional seconds."""
        appointment = make_appointment("2099-03-10T09:00:00.000")
        assert resolve_duration(appointment, {"2099-03-10T09:00:00": 50}) == 50

    def test_custom_default_duration(self, make_appointment) -> None:
        """Should honour a configured default duration."""
        occupied = time_range_of(make_appointment("09:00"), default_duration=20)
        assert occupied.end == at(9, 20)

    def test_unparseable_timestamp_returns_none(self, make_appointment) -> None:
        """Should return None instead of raising for garbage timestamps."""
        assert time_range_of(make_appointment("2099-13-45Tnot-a-time")) is None


class TestLocalDatetime:
    """Tests for naive local timestamp parsing."""

    def test_strict_format_is_valid(self) -> None:
        """Should accept exactly YYYY-MM-DDTHH:mm:ss."""
        assert is_valid_local_datetime("2099-03-10T09:30:00") is True

    @pytest.mark.parametrize(
        "value",
        [
            "2099-03-10T09:30",
            "2099-03-10 09:30:00",
            "2099-03-10T09:30:00Z",
            "2099-03-10T09:30:00+02:00",
            "2099-02-30T09:30:00",
            "2099-03-10T24:00:00",
            "",
            None,
        ],
    )
    def test_strict_format_rejects_everything_else(self, value) -> None:
        """Should reject near misses and calendar-invalid values."""
        assert is_valid_local_datetime(value) is False

    def test_parse_keeps_wall_clock(self) -> None:
        """Should parse without any timezone conversion."""
        parsed = parse_local_datetime("2099-03-10T09:30:00")
        assert parsed == datetime(2099, 3, 10, 9, 30)
        assert parsed.tzinfo is None

    def test_parse_rejects_offsets(self) -> None:
        """Should never reinterpret offset-carrying timestamps."""
        assert parse_local_datetime("2099-03-10T09:30:00Z") is None
        assert parse_local_datetime("2099-03-10T09:30:00-03:00") is None

    def test_canonical_rendering(self) -> None:
        """Should render equivalent spellings identically."""
        assert canonical_local_datetime("2099-03-10T09:30") == "2099-03-10T09:30:00"
        assert canonical_local_datetime("2099-03-10T09:30:00.250") == "2099-03-10T09:30:00"
        assert canonical_local_datetime("garbage") is None

    def test_parse_clock_time_bounds(self) -> None:
        """Should accept 0-23 hours and 0-59 minutes only."""
        assert parse_clock_time("08:05") == time(8, 5)
        assert parse_clock_time("23:59") == time(23, 59)
        assert parse_clock_time("24:00") is None
        assert parse_clock_time("12:60") is None
        assert parse_clock_time("noon") is None

    def test_parse_local_date(self) -> None:
        """Should parse strict ISO dates only."""
        assert parse_local_date("2099-03-10").isoformat() == "2099-03-10"
        assert parse_local_date("10/03/2099") is None
        assert parse_local_date("2099-02-30") is None

    def test_display_time(self) -> None:
        """Should render a 12-hour label."""
        assert format_display_time(at(9, 30)) == "09:30 AM"
        assert format_display_time(at(14)) == "02:00 PM"
