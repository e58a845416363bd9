"""Blocked-Range Merger.

Collapses a day's bookings into the minimal set of unavailable intervals.
Bookings separated by no more than the adjacency threshold form one range.
"""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta

from ..entities.appointment import Appointment
from ..value_objects.appointment_status import AppointmentStatus
from .intervals import DEFAULT_DURATION_MINUTES, TimeRange, candidate_range, overlaps, time_range_of

ADJACENCY_THRESHOLD_MINUTES = 5


@dataclass(frozen=True)
class BlockedRange:
    """Intervalo bloqueado por uno o más turnos reservados."""

    start: datetime
    end: datetime
    appointments: tuple[Appointment, ...]

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant < self.end


@dataclass(frozen=True)
class SlotBlockCheck:
    is_blocked: bool
    reason: str | None = None
    blocking_range: BlockedRange | None = None


def merge_into_blocked_ranges(
    appointments: Iterable[Appointment],
    exclude_cancelled: bool = True,
    adjacency_threshold_minutes: int = ADJACENCY_THRESHOLD_MINUTES,
    durations: Mapping[str, int] | None = None,
    default_duration: int = DEFAULT_DURATION_MINUTES,
) -> list[BlockedRange]:
    """Merge one day's booked appointments into sorted, non-overlapping ranges.

    Cancelled (when excluded), open-slot and unparseable entries are dropped.
    """
    timed: list[tuple[TimeRange, Appointment]] = []
    for appointment in appointments:
        if exclude_cancelled and appointment.status == AppointmentStatus.CANCELLED:
            continue
        if appointment.is_open_slot:
            continue
        occupied = time_range_of(appointment, durations, default_duration)
        if occupied is None:
            continue
        timed.append((occupied, appointment))

    if not timed:
        return []

    timed.sort(key=lambda item: (item[0].start, item[0].end))
    threshold = timedelta(minutes=adjacency_threshold_minutes)

    ranges: list[BlockedRange] = []
    current_start, current_end = timed[0][0].start, timed[0][0].end
    members = [timed[0][1]]
    for occupied, appointment in timed[1:]:
        if occupied.start - current_end <= threshold:
            current_end = max(current_end, occupied.end)
            members.append(appointment)
            continue
        ranges.append(BlockedRange(current_start, current_end, tuple(members)))
        current_start, current_end = occupied.start, occupied.end
        members = [appointment]
    ranges.append(BlockedRange(current_start, current_end, tuple(members)))
    return ranges


def is_time_slot_blocked(
    start: str | datetime,
    duration_minutes: int,
    blocked_ranges: Sequence[BlockedRange],
) -> SlotBlockCheck:
    """Check a prospective slot against precomputed blocked ranges."""
    candidate = candidate_range(start, duration_minutes)
    if candidate is None:
        return SlotBlockCheck(is_blocked=False)

    for blocked in blocked_ranges:
        if overlaps(candidate.start, candidate.end, blocked.start, blocked.end):
            count = len(blocked.appointments)
            if count > 1:
                reason = f"Conflicts with {count} consecutive appointments"
            else:
                reason = "Conflicts with existing appointment"
            return SlotBlockCheck(is_blocked=True, reason=reason, blocking_range=blocked)
    return SlotBlockCheck(is_blocked=False)
