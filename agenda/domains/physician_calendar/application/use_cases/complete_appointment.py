# ============================================================================
# SCOPE: APPLICATION LAYER (Physician Calendar)
# Description: Use case for marking an appointment as completed.
# ============================================================================
"""Complete Appointment Use Case.

Optimistically marks the appointment completed, calls the remote store and
rolls the book back on any failure, including cancellation of the call. The server echo is validated and folded
through the status merge so a cancelled appointment stays cancelled.
"""

import logging
from typing import TYPE_CHECKING

from agenda.core.domain import DataIntegrityException, InvalidOperationException

from ...domain.value_objects import AppointmentStatus
from ..dto.calendar_dtos import CompleteAppointmentRequest, CompleteAppointmentResult
from ..ports.remote_store_error import RemoteStoreError

if TYPE_CHECKING:
    from ..ports import IAppointmentStore
    from ..services.appointment_book import AppointmentBook
    from ..services.in_flight import InFlightRegistry

logger = logging.getLogger(__name__)


class CompleteAppointmentUseCase:
    """Use case for completing an appointment.

    Shared by manual completion and the auto-completion sweep; the in-flight
    registry keeps the two from completing the same id concurrently.
    """

    def __init__(
        self,
        store: "IAppointmentStore",
        book: "AppointmentBook",
        in_flight: "InFlightRegistry",
    ) -> None:
        self._store = store
        self._book = book
        self._in_flight = in_flight

    async def execute(self, request: CompleteAppointmentRequest) -> CompleteAppointmentResult:
        appointment_id = (request.appointment_id or "").strip()
        if not appointment_id:
            return CompleteAppointmentResult.error(code="VALIDATION_ERROR", message="Appointment id is required")

        appointment = self._book.get(appointment_id)
        if appointment is None:
            return CompleteAppointmentResult.error(
                code="APPOINTMENT_NOT_FOUND",
                message=f"Appointment {appointment_id} not found",
            )

        if appointment.is_open_slot:
            error = InvalidOperationException("complete", "open_slot", "Cannot complete an open slot")
            return CompleteAppointmentResult.error(code=error.code, message=error.message)

        if not appointment.status.can_transition_to(AppointmentStatus.COMPLETED):
            error = InvalidOperationException("complete", appointment.status.value)
            return CompleteAppointmentResult.error(code=error.code, message=error.message)

        if not self._in_flight.try_acquire(appointment_id):
            return CompleteAppointmentResult.error(
                code="COMPLETION_IN_PROGRESS",
                message=f"Appointment {appointment_id} is already being completed",
            )

        snapshot = self._book.snapshot()
        committed = False
        try:
            self._book.set_status(appointment_id, AppointmentStatus.COMPLETED)
            echo = await self._store.mark_completed(appointment_id)
            if echo.id != appointment_id:
                raise DataIntegrityException(
                    f"Remote store echoed appointment {echo.id} for {appointment_id}",
                    entity_id=appointment_id,
                    reason="id_mismatch",
                )
            if echo.is_open_slot:
                raise DataIntegrityException(
                    "Remote store returned an appointment without a patient",
                    entity_id=appointment_id,
                    reason="open_slot_echo",
                )
            committed = True
        except (RemoteStoreError, TimeoutError) as e:
            code = getattr(e, "error_code", "REMOTE_TIMEOUT")
            logger.warning(f"Failed to complete appointment {appointment_id}: {code} - {e}")
            return CompleteAppointmentResult.error(code=code, message=str(e) or "Remote store timed out")
        except DataIntegrityException as e:
            logger.error(f"Rejected completion echo for {appointment_id}: {e.message}")
            return CompleteAppointmentResult.error(code=e.code, message=e.message)
        except Exception as e:
            logger.error(f"Unexpected error completing appointment {appointment_id}: {e}", exc_info=True)
            return CompleteAppointmentResult.error(code="UNEXPECTED_ERROR", message=str(e) or type(e).__name__)
        finally:
            # Also runs when the caller cancels the call (asyncio.wait_for timeout)
            if not committed:
                self._book.restore(snapshot)
            self._in_flight.release(appointment_id)

        kept = self._book.fold_echo(echo)
        if kept.status == AppointmentStatus.CANCELLED:
            logger.warning(f"Appointment {appointment_id} is cancelled on the server, keeping it cancelled")
            return CompleteAppointmentResult.error(
                code="APPOINTMENT_CANCELLED",
                message=f"Appointment {appointment_id} was cancelled and cannot be completed",
                appointment=kept,
            )

        logger.info(f"Appointment {appointment_id} completed")
        return CompleteAppointmentResult.ok(appointment=kept)
