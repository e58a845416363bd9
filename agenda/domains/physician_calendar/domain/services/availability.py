"""Availability Calculator.

Free time before the next commitment, capacity estimates and the day grid
shown next to the slot picker.
"""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum

from ..entities.appointment import Appointment
from ..value_objects.local_datetime import format_display_time, parse_clock_time, parse_local_date
from .blocked_ranges import ADJACENCY_THRESHOLD_MINUTES, BlockedRange, is_time_slot_blocked, merge_into_blocked_ranges
from .durations import format_duration
from .intervals import DEFAULT_DURATION_MINUTES
from .slot_sequencer import DAY_END

MIN_VIABLE_DURATION_MINUTES = 15
GRID_START = time(8, 0)
GRID_STEP_MINUTES = 30


def max_free_duration_from(
    start_time: str | time,
    on_date: str | date,
    blocked_ranges: Sequence[BlockedRange],
    day_end: time = DAY_END,
) -> int | None:
    """Whole minutes available from ``start_time`` until the next blocked range or day end.

    Returns 0 when the instant sits inside a blocked range or at/after the day
    end, and None when the inputs cannot be parsed. The result is floored so
    it never exceeds the real gap.
    """
    day = parse_local_date(on_date)
    clock = parse_clock_time(start_time)
    if day is None or clock is None:
        return None

    candidate = datetime.combine(day, clock)
    ceiling = datetime.combine(day, day_end)

    for blocked in blocked_ranges:
        if blocked.contains(candidate):
            return 0

    upcoming = [blocked.start for blocked in blocked_ranges if blocked.start > candidate]
    if upcoming:
        ceiling = min(min(upcoming), ceiling)

    free_seconds = (ceiling - candidate).total_seconds()
    if free_seconds <= 0:
        return 0
    return int(free_seconds // 60)


class AvailabilityVerdict(str, Enum):
    OK = "ok"
    UNUSABLE = "unusable"  # no free time at all
    INSUFFICIENT = "insufficient"  # below the minimum viable booking
    EXCEEDS_AVAILABLE = "exceeds_available"


@dataclass(frozen=True)
class DurationAssessment:
    verdict: AvailabilityVerdict
    available_minutes: int | None
    requested_minutes: int

    @property
    def is_acceptable(self) -> bool:
        return self.verdict == AvailabilityVerdict.OK

    @property
    def message(self) -> str:
        if self.verdict == AvailabilityVerdict.UNUSABLE:
            return "This time is not available"
        if self.verdict == AvailabilityVerdict.INSUFFICIENT:
            return f"Only {format_duration(self.available_minutes)} available at this time"
        if self.verdict == AvailabilityVerdict.EXCEEDS_AVAILABLE:
            return (
                f"Duration of {format_duration(self.requested_minutes)} exceeds the "
                f"{format_duration(self.available_minutes)} available"
            )
        return "Available"


def assess_requested_duration(
    requested_minutes: int,
    available_minutes: int | None,
    min_viable_minutes: int = MIN_VIABLE_DURATION_MINUTES,
) -> DurationAssessment:
    """Classify a requested duration against the free time at that instant."""
    if available_minutes is None or available_minutes <= 0:
        verdict = AvailabilityVerdict.UNUSABLE
    elif available_minutes < min_viable_minutes:
        verdict = AvailabilityVerdict.INSUFFICIENT
    elif requested_minutes > available_minutes:
        verdict = AvailabilityVerdict.EXCEEDS_AVAILABLE
    else:
        verdict = AvailabilityVerdict.OK
    return DurationAssessment(verdict, available_minutes, requested_minutes)


def max_slots_in_free_time(available_minutes: int, slot_minutes: int, break_minutes: int = 0) -> int:
    """How many slots fit when N slots need ``N*slot + (N-1)*break`` minutes."""
    if available_minutes <= 0 or slot_minutes <= 0:
        return 0
    if break_minutes <= 0:
        return available_minutes // slot_minutes
    return (available_minutes + break_minutes) // (slot_minutes + break_minutes)


@dataclass(frozen=True)
class TimeSlotAvailability:
    time: str
    display_time: str
    is_blocked: bool
    max_duration: int | None
    reason: str | None = None


def time_slot_availability(
    on_date: str | date,
    appointments: Iterable[Appointment],
    slot_duration_minutes: int = DEFAULT_DURATION_MINUTES,
    durations: Mapping[str, int] | None = None,
    day_end: time = DAY_END,
    adjacency_threshold_minutes: int = ADJACENCY_THRESHOLD_MINUTES,
    default_duration: int = DEFAULT_DURATION_MINUTES,
) -> list[TimeSlotAvailability]:
    """Half-hour grid from 08:00 to the day end for the given date."""
    day = parse_local_date(on_date)
    if day is None:
        return []

    day_key = day.isoformat()
    same_day = [appointment for appointment in appointments if appointment.date == day_key]
    ranges = merge_into_blocked_ranges(
        same_day,
        adjacency_threshold_minutes=adjacency_threshold_minutes,
        durations=durations,
        default_duration=default_duration,
    )

    grid: list[TimeSlotAvailability] = []
    cursor = datetime.combine(day, GRID_START)
    limit = datetime.combine(day, day_end)
    while cursor < limit:
        check = is_time_slot_blocked(cursor, slot_duration_minutes, ranges)
        grid.append(
            TimeSlotAvailability(
                time=cursor.strftime("%H:%M"),
                display_time=format_display_time(cursor),
                is_blocked=check.is_blocked,
                max_duration=max_free_duration_from(cursor.time(), day, ranges, day_end),
                reason=check.reason,
            )
        )
        cursor += timedelta(minutes=GRID_STEP_MINUTES)
    return grid
