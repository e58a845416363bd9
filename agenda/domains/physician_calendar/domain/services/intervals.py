"""Interval utilities.

Half-open ``[start, end)`` intervals over naive local datetimes.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta

from ..entities.appointment import Appointment
from ..value_objects.local_datetime import canonical_local_datetime, parse_local_datetime

DEFAULT_DURATION_MINUTES = 30


@dataclass(frozen=True)
class TimeRange:
    start: datetime
    end: datetime

    @property
    def duration_minutes(self) -> int:
        return int((self.end - self.start).total_seconds() // 60)

    def overlaps(self, other: "TimeRange") -> bool:
        return overlaps(self.start, self.end, other.start, other.end)


def overlaps(start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime) -> bool:
    """True when the two half-open intervals share time. Touching is not overlapping."""
    return start_a < end_b and start_b < end_a


def resolve_duration(
    appointment: Appointment,
    durations: Mapping[str, int] | None = None,
    default_duration: int = DEFAULT_DURATION_MINUTES,
) -> int:
    """Resolve an appointment's duration.

    Order: ledger entry for the exact timestamp text, ledger entry for the
    canonical rendering of the same instant, the record's own duration, the
    default.
    """
    if durations:
        exact = durations.get(appointment.appointment_date)
        if exact is not None:
            return exact
        canonical = canonical_local_datetime(appointment.appointment_date)
        if canonical is not None and canonical != appointment.appointment_date:
            recorded = durations.get(canonical)
            if recorded is not None:
                return recorded
    if appointment.duration_minutes:
        return appointment.duration_minutes
    return default_duration


def time_range_of(
    appointment: Appointment,
    durations: Mapping[str, int] | None = None,
    default_duration: int = DEFAULT_DURATION_MINUTES,
) -> TimeRange | None:
    """Occupied interval of an appointment, or None when its timestamp cannot be parsed."""
    start = parse_local_datetime(appointment.appointment_date)
    if start is None:
        return None
    minutes = resolve_duration(appointment, durations, default_duration)
    return TimeRange(start=start, end=start + timedelta(minutes=minutes))


def candidate_range(start: str | datetime, duration_minutes: int) -> TimeRange | None:
    """Interval for a not-yet-created slot."""
    begin = start if isinstance(start, datetime) else parse_local_datetime(start)
    if begin is None or duration_minutes <= 0:
        return None
    return TimeRange(start=begin, end=begin + timedelta(minutes=duration_minutes))
