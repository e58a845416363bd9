# ============================================================================
# SCOPE: APPLICATION LAYER (Physician Calendar)
# Description: Use case exports.
# ============================================================================
from .complete_appointment import CompleteAppointmentUseCase
from .open_slot import OpenSlotUseCase
from .open_slots_batch import OpenSlotsBatchUseCase
from .refresh_appointments import RefreshAppointmentsUseCase

__all__ = [
    "CompleteAppointmentUseCase",
    "OpenSlotUseCase",
    "OpenSlotsBatchUseCase",
    "RefreshAppointmentsUseCase",
]
