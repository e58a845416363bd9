# ============================================================================
# SCOPE: APPLICATION LAYER (Physician Calendar)
# Description: DTO exports.
# ============================================================================
from .calendar_dtos import (
    BatchOpenSlotsResult,
    CompleteAppointmentRequest,
    CompleteAppointmentResult,
    OpenSlotRequest,
    OpenSlotResult,
    OpenSlotsRequest,
    RefreshAppointmentsResult,
    SlotOutcome,
    SlotOutcomeStatus,
    UseCaseResult,
)

__all__ = [
    # Request DTOs
    "OpenSlotRequest",
    "OpenSlotsRequest",
    "CompleteAppointmentRequest",
    # Result DTOs
    "UseCaseResult",
    "RefreshAppointmentsResult",
    "OpenSlotResult",
    "BatchOpenSlotsResult",
    "CompleteAppointmentResult",
    "SlotOutcome",
    "SlotOutcomeStatus",
]
