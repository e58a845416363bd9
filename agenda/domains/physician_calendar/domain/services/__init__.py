# Domain Services
from .availability import (
    AvailabilityVerdict,
    DurationAssessment,
    TimeSlotAvailability,
    assess_requested_duration,
    max_free_duration_from,
    max_slots_in_free_time,
    time_slot_availability,
)
from .blocked_ranges import BlockedRange, SlotBlockCheck, is_time_slot_blocked, merge_into_blocked_ranges
from .conflicts import BatchConflictReport, SlotConflict, find_conflicts, find_conflicts_for_batch
from .durations import MAX_DURATION_MINUTES, MIN_DURATION_MINUTES, format_duration, is_valid_duration
from .intervals import TimeRange, overlaps, resolve_duration, time_range_of
from .slot_sequencer import CalculatedSlot, generate_slots
from .status_rules import (
    apply_view_corrections,
    is_eligible_for_auto_completion,
    is_expired_open_slot,
    merge_server_echo,
)

__all__ = [
    "MAX_DURATION_MINUTES",
    "MIN_DURATION_MINUTES",
    "AvailabilityVerdict",
    "BatchConflictReport",
    "BlockedRange",
    "CalculatedSlot",
    "DurationAssessment",
    "SlotBlockCheck",
    "SlotConflict",
    "TimeRange",
    "TimeSlotAvailability",
    "apply_view_corrections",
    "assess_requested_duration",
    "find_conflicts",
    "find_conflicts_for_batch",
    "format_duration",
    "generate_slots",
    "is_eligible_for_auto_completion",
    "is_expired_open_slot",
    "is_time_slot_blocked",
    "is_valid_duration",
    "max_free_duration_from",
    "max_slots_in_free_time",
    "merge_into_blocked_ranges",
    "merge_server_echo",
    "overlaps",
    "resolve_duration",
    "time_range_of",
]
