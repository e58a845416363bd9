# ============================================================================
# SCOPE: APPLICATION LAYER (Physician Calendar)
# Description: Application layer exports.
# ============================================================================
"""Application Layer - Physician Calendar.

Contains use cases, services, ports (interfaces), and DTOs for the physician
calendar domain.
"""

from .dto import (
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
from .ports import IAppointmentStore, IDurationStore, RemoteStoreError
from .services import (
    AppointmentBook,
    AutoCompletionSweep,
    CalendarQueries,
    DurationLedger,
    InFlightRegistry,
    LedgerEntry,
    SweepReport,
)
from .use_cases import (
    CompleteAppointmentUseCase,
    OpenSlotsBatchUseCase,
    OpenSlotUseCase,
    RefreshAppointmentsUseCase,
)

__all__ = [
    # Ports
    "IAppointmentStore",
    "IDurationStore",
    "RemoteStoreError",
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
    # Services
    "AppointmentBook",
    "AutoCompletionSweep",
    "CalendarQueries",
    "DurationLedger",
    "InFlightRegistry",
    "LedgerEntry",
    "SweepReport",
    # Use Cases
    "CompleteAppointmentUseCase",
    "OpenSlotUseCase",
    "OpenSlotsBatchUseCase",
    "RefreshAppointmentsUseCase",
]
