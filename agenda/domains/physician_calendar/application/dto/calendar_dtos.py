# ============================================================================
# SCOPE: APPLICATION LAYER (Physician Calendar)
# Description: Data Transfer Objects for calendar operations.
# ============================================================================
"""Calendar DTOs.

Data Transfer Objects for refreshing the agenda, opening slots and completing
appointments.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ...domain.entities import Appointment

# =============================================================================
# Request DTOs
# =============================================================================


@dataclass(frozen=True)
class OpenSlotRequest:
    """Request DTO for opening a single slot."""

    start_timestamp: str  # YYYY-MM-DDTHH:mm:ss
    duration_minutes: int = 30


@dataclass(frozen=True)
class OpenSlotsRequest:
    """Request DTO for opening consecutive slots on one day."""

    on_date: str  # YYYY-MM-DD
    start_time: str  # HH:MM
    count: int
    slot_duration_minutes: int = 30
    break_duration_minutes: int = 0
    constrain_to_same_day: bool = True


@dataclass(frozen=True)
class CompleteAppointmentRequest:
    """Request DTO for completing an appointment."""

    appointment_id: str


# =============================================================================
# Result DTOs
# =============================================================================


@dataclass
class UseCaseResult:
    """Generic result for use case operations."""

    success: bool
    data: Any | None = None
    error_code: str | None = None
    error_message: str | None = None

    @classmethod
    def ok(cls, data: Any = None, **kwargs: Any) -> "UseCaseResult":
        """Create successful result."""
        return cls(success=True, data=data, **kwargs)

    @classmethod
    def error(cls, code: str, message: str, **kwargs: Any) -> "UseCaseResult":
        """Create error result."""
        return cls(success=False, error_code=code, error_message=message, **kwargs)


@dataclass
class RefreshAppointmentsResult(UseCaseResult):
    """Result for refresh operation."""

    appointments: list[Appointment] = field(default_factory=list)


@dataclass
class OpenSlotResult(UseCaseResult):
    """Result for single slot opening."""

    start_timestamp: str | None = None
    conflicts: list[Appointment] = field(default_factory=list)


class SlotOutcomeStatus(str, Enum):
    CREATED = "created"
    FAILED = "failed"  # remote store rejected or timed out
    CONFLICT = "conflict"  # overlaps a booking, never submitted
    ABANDONED = "abandoned"  # batch cancelled before this slot


@dataclass(frozen=True)
class SlotOutcome:
    """What happened to one slot of a batch."""

    index: int
    start_timestamp: str
    status: SlotOutcomeStatus
    error_message: str | None = None
    conflicts: tuple[Appointment, ...] = ()

    @property
    def created(self) -> bool:
        return self.status == SlotOutcomeStatus.CREATED


@dataclass
class BatchOpenSlotsResult(UseCaseResult):
    """Result for batch slot opening, one outcome per slot in submission order."""

    outcomes: list[SlotOutcome] = field(default_factory=list)

    @property
    def created_count(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.created)

    @property
    def created_indices(self) -> list[int]:
        return [outcome.index for outcome in self.outcomes if outcome.created]

    @property
    def failed_indices(self) -> list[int]:
        """Slots that were attempted or blocked and did not get created."""
        return [
            outcome.index
            for outcome in self.outcomes
            if outcome.status in (SlotOutcomeStatus.FAILED, SlotOutcomeStatus.CONFLICT)
        ]

    @property
    def abandoned_indices(self) -> list[int]:
        return [outcome.index for outcome in self.outcomes if outcome.status == SlotOutcomeStatus.ABANDONED]

    @property
    def summary(self) -> str:
        """E.g. ``Created 3 of 5 slots. Failed: #4, #5``."""
        text = f"Created {self.created_count} of {len(self.outcomes)} slots."
        if self.failed_indices:
            text += " Failed: " + ", ".join(f"#{index}" for index in self.failed_indices)
        if self.abandoned_indices:
            text += ("." if self.failed_indices else "") + " Abandoned: " + ", ".join(
                f"#{index}" for index in self.abandoned_indices
            )
        return text


@dataclass
class CompleteAppointmentResult(UseCaseResult):
    """Result for completing an appointment."""

    appointment: Appointment | None = None
