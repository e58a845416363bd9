# ============================================================================
# SCOPE: APPLICATION LAYER (Physician Calendar)
# Description: Side-effect free queries for the presentation layer.
# ============================================================================
"""Calendar Queries.

Read-only facade over the appointment book and the pure domain functions.
Safe to call on every render or keystroke.
"""

from collections.abc import Sequence
from datetime import date, datetime, time
from typing import TYPE_CHECKING

from ...domain.entities import Appointment
from ...domain.services.availability import (
    DurationAssessment,
    TimeSlotAvailability,
    assess_requested_duration,
    max_free_duration_from,
    max_slots_in_free_time,
    time_slot_availability,
)
from ...domain.services.blocked_ranges import BlockedRange, SlotBlockCheck, is_time_slot_blocked, merge_into_blocked_ranges
from ...domain.services.conflicts import BatchConflictReport, find_conflicts, find_conflicts_for_batch
from ...domain.services.intervals import TimeRange, time_range_of
from ...domain.services.slot_sequencer import CalculatedSlot, generate_slots
from ...domain.value_objects import SchedulingPolicy
from ...domain.value_objects.local_datetime import parse_local_date

if TYPE_CHECKING:
    from .appointment_book import AppointmentBook
    from .duration_ledger import DurationLedger


class CalendarQueries:
    """Consultas puras sobre la agenda."""

    def __init__(
        self,
        book: "AppointmentBook",
        ledger: "DurationLedger",
        policy: SchedulingPolicy | None = None,
    ) -> None:
        self._book = book
        self._ledger = ledger
        self._policy = policy or SchedulingPolicy()

    @property
    def appointments(self) -> tuple[Appointment, ...]:
        return self._book.appointments

    def time_range_of(self, appointment: Appointment) -> TimeRange | None:
        return time_range_of(appointment, self._ledger.entries(), self._policy.default_duration_minutes)

    def duration_of(self, appointment: Appointment) -> int:
        return self._ledger.resolve(appointment)

    def conflicts_for(self, start_timestamp: str, duration_minutes: int) -> list[Appointment]:
        return find_conflicts(
            start_timestamp,
            duration_minutes,
            self._book.appointments,
            durations=self._ledger.entries(),
            default_duration=self._policy.default_duration_minutes,
        )

    def conflicts_for_batch(self, slots: Sequence[CalculatedSlot]) -> BatchConflictReport:
        return find_conflicts_for_batch(
            slots,
            self._book.appointments,
            durations=self._ledger.entries(),
            default_duration=self._policy.default_duration_minutes,
        )

    def blocked_ranges(self, on_date: str | date) -> list[BlockedRange]:
        day = parse_local_date(on_date)
        if day is None:
            return []
        return merge_into_blocked_ranges(
            self._book.for_date(day.isoformat()),
            adjacency_threshold_minutes=self._policy.adjacency_threshold_minutes,
            durations=self._ledger.entries(),
            default_duration=self._policy.default_duration_minutes,
        )

    def is_slot_blocked(self, start: datetime, duration_minutes: int) -> SlotBlockCheck:
        return is_time_slot_blocked(start, duration_minutes, self.blocked_ranges(start.date()))

    def max_free_duration(self, on_date: str | date, start_time: str | time) -> int | None:
        return max_free_duration_from(start_time, on_date, self.blocked_ranges(on_date), self._policy.day_end)

    def assess_duration(self, on_date: str | date, start_time: str | time, requested_minutes: int) -> DurationAssessment:
        available = self.max_free_duration(on_date, start_time)
        return assess_requested_duration(requested_minutes, available, self._policy.min_viable_duration_minutes)

    def max_slots(self, on_date: str | date, start_time: str | time, slot_minutes: int, break_minutes: int = 0) -> int:
        available = self.max_free_duration(on_date, start_time)
        return max_slots_in_free_time(available or 0, slot_minutes, break_minutes)

    def preview_slots(
        self,
        on_date: str | date,
        start_time: str | time,
        count: int,
        slot_duration_minutes: int,
        break_duration_minutes: int = 0,
        constrain_to_same_day: bool = True,
        now: datetime | None = None,
    ) -> list[CalculatedSlot]:
        return generate_slots(
            on_date,
            start_time,
            count,
            slot_duration_minutes,
            break_duration_minutes,
            constrain_to_same_day=constrain_to_same_day,
            now=now,
            day_end=self._policy.day_end,
        )

    def day_availability(self, on_date: str | date, slot_duration_minutes: int | None = None) -> list[TimeSlotAvailability]:
        return time_slot_availability(
            on_date,
            self._book.appointments,
            slot_duration_minutes=slot_duration_minutes or self._policy.default_duration_minutes,
            durations=self._ledger.entries(),
            day_end=self._policy.day_end,
            adjacency_threshold_minutes=self._policy.adjacency_threshold_minutes,
            default_duration=self._policy.default_duration_minutes,
        )
