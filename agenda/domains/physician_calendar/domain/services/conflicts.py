"""Conflict detection for candidate slots.

Conflicts are values, not errors: callers inspect the report before
committing anything to the remote store.
"""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from ..entities.appointment import Appointment
from ..value_objects.appointment_status import AppointmentStatus
from .intervals import DEFAULT_DURATION_MINUTES, candidate_range, time_range_of
from .slot_sequencer import CalculatedSlot


def find_conflicts(
    candidate_start: str | datetime,
    candidate_duration: int,
    existing: Iterable[Appointment],
    exclude_cancelled: bool = True,
    durations: Mapping[str, int] | None = None,
    default_duration: int = DEFAULT_DURATION_MINUTES,
) -> list[Appointment]:
    """Booked appointments overlapping ``[candidate_start, candidate_start + candidate_duration)``.

    Cancelled appointments (when excluded) and open slots never conflict.
    An unparseable candidate yields no conflicts.
    """
    candidate = candidate_range(candidate_start, candidate_duration)
    if candidate is None:
        return []

    conflicts: list[Appointment] = []
    for appointment in existing:
        if exclude_cancelled and appointment.status == AppointmentStatus.CANCELLED:
            continue
        if appointment.is_open_slot:
            continue
        occupied = time_range_of(appointment, durations, default_duration)
        if occupied is not None and candidate.overlaps(occupied):
            conflicts.append(appointment)
    return conflicts


@dataclass(frozen=True)
class SlotConflict:
    slot: CalculatedSlot
    conflicts: tuple[Appointment, ...] = ()

    @property
    def has_conflicts(self) -> bool:
        return bool(self.conflicts)


@dataclass(frozen=True)
class BatchConflictReport:
    """Conflicts for every candidate of a batch, in submission order."""

    per_candidate: tuple[SlotConflict, ...] = field(default_factory=tuple)

    @property
    def has_conflicts(self) -> bool:
        return any(item.has_conflicts for item in self.per_candidate)

    @property
    def total_conflict_count(self) -> int:
        return sum(len(item.conflicts) for item in self.per_candidate)

    @property
    def conflicting_slots(self) -> list[CalculatedSlot]:
        return [item.slot for item in self.per_candidate if item.has_conflicts]

    @property
    def conflicting_indices(self) -> list[int]:
        return [item.slot.index for item in self.per_candidate if item.has_conflicts]

    def conflicts_for(self, index: int) -> tuple[Appointment, ...]:
        for item in self.per_candidate:
            if item.slot.index == index:
                return item.conflicts
        return ()


def _dates_touched(slot: CalculatedSlot) -> set[str]:
    # Includes the previous day: a late booking there can run past midnight
    day = slot.start.date() - timedelta(days=1)
    last = max((slot.end - timedelta(microseconds=1)).date(), slot.start.date())
    dates = set()
    while day <= last:
        dates.add(day.isoformat())
        day += timedelta(days=1)
    return dates


def find_conflicts_for_batch(
    candidates: Sequence[CalculatedSlot],
    existing: Iterable[Appointment],
    exclude_cancelled: bool = True,
    durations: Mapping[str, int] | None = None,
    default_duration: int = DEFAULT_DURATION_MINUTES,
) -> BatchConflictReport:
    """Check a whole batch, comparing only against appointments on the dates the batch touches."""
    batch_dates = set().union(*(_dates_touched(slot) for slot in candidates))
    same_day = [appointment for appointment in existing if appointment.date in batch_dates]

    return BatchConflictReport(
        per_candidate=tuple(
            SlotConflict(
                slot=slot,
                conflicts=tuple(
                    find_conflicts(
                        slot.start,
                        slot.duration_minutes,
                        same_day,
                        exclude_cancelled=exclude_cancelled,
                        durations=durations,
                        default_duration=default_duration,
                    )
                ),
            )
            for slot in candidates
        )
    )
