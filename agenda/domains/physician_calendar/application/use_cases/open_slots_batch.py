# ============================================================================
# SCOPE: APPLICATION LAYER (Physician Calendar)
# Description: Use case for opening several consecutive slots.
# ============================================================================
"""Open Slots Batch Use Case.

Expands a multi-slot request and creates the slots one at a time, in order.
Each slot is conflict-checked against the book as it stands after the
previous one; a failure never stops the remaining slots. The caller may set
``cancel_event`` to abandon the rest of the batch. Slots already created stay
created.
"""

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

from ...domain.services.conflicts import find_conflicts
from ...domain.services.durations import (
    MAX_DURATION_MINUTES,
    MIN_DURATION_MINUTES,
    format_duration,
    is_valid_duration,
)
from ...domain.services.slot_sequencer import CalculatedSlot, generate_slots
from ...domain.value_objects import SchedulingPolicy
from ..dto.calendar_dtos import BatchOpenSlotsResult, OpenSlotsRequest, SlotOutcome, SlotOutcomeStatus
from ..ports.remote_store_error import RemoteStoreError

if TYPE_CHECKING:
    from ..ports import IAppointmentStore
    from ..services.appointment_book import AppointmentBook
    from ..services.duration_ledger import DurationLedger
    from .refresh_appointments import RefreshAppointmentsUseCase

logger = logging.getLogger(__name__)


class OpenSlotsBatchUseCase:
    """Use case for opening a batch of slots."""

    def __init__(
        self,
        store: "IAppointmentStore",
        book: "AppointmentBook",
        ledger: "DurationLedger",
        policy: SchedulingPolicy | None = None,
        refresh: "RefreshAppointmentsUseCase | None" = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._store = store
        self._book = book
        self._ledger = ledger
        self._policy = policy or SchedulingPolicy()
        self._refresh = refresh
        self._clock = clock

    def preview(self, request: OpenSlotsRequest) -> list[CalculatedSlot]:
        """Slots the request would produce, without touching the store."""
        return generate_slots(
            request.on_date,
            request.start_time,
            request.count,
            request.slot_duration_minutes,
            request.break_duration_minutes,
            constrain_to_same_day=request.constrain_to_same_day,
            now=self._clock(),
            day_end=self._policy.day_end,
        )

    async def _open_one(self, slot: CalculatedSlot) -> SlotOutcome:
        conflicts = find_conflicts(
            slot.start_timestamp,
            slot.duration_minutes,
            self._book.appointments,
            durations=self._ledger.entries(),
            default_duration=self._policy.default_duration_minutes,
        )
        if conflicts:
            return SlotOutcome(
                index=slot.index,
                start_timestamp=slot.start_timestamp,
                status=SlotOutcomeStatus.CONFLICT,
                error_message=f"Conflicts with {len(conflicts)} existing appointment(s)",
                conflicts=tuple(conflicts),
            )

        snapshot = self._book.snapshot()
        created = False
        try:
            await self._store.create_slot(slot.start_timestamp)
            created = True
        except (RemoteStoreError, TimeoutError) as e:
            logger.warning(f"Slot #{slot.index} ({slot.start_timestamp}) failed: {e}")
            return SlotOutcome(
                index=slot.index,
                start_timestamp=slot.start_timestamp,
                status=SlotOutcomeStatus.FAILED,
                error_message=str(e) or "Remote store timed out",
            )
        except Exception as e:
            logger.error(f"Unexpected error opening slot #{slot.index} ({slot.start_timestamp}): {e}", exc_info=True)
            return SlotOutcome(
                index=slot.index,
                start_timestamp=slot.start_timestamp,
                status=SlotOutcomeStatus.FAILED,
                error_message=str(e) or type(e).__name__,
            )
        finally:
            if not created:
                self._book.restore(snapshot)

        self._ledger.record(slot.start_timestamp, slot.duration_minutes)
        return SlotOutcome(index=slot.index, start_timestamp=slot.start_timestamp, status=SlotOutcomeStatus.CREATED)

    async def execute(
        self,
        request: OpenSlotsRequest,
        cancel_event: asyncio.Event | None = None,
    ) -> BatchOpenSlotsResult:
        """Execute the batch.

        Args:
            request: Batch description.
            cancel_event: Once set, the remaining slots are reported as abandoned.

        Returns:
            BatchOpenSlotsResult with one outcome per generated slot.
        """
        if not is_valid_duration(request.slot_duration_minutes):
            return BatchOpenSlotsResult.error(
                code="VALIDATION_ERROR",
                message=(
                    f"Slot duration must be between {format_duration(MIN_DURATION_MINUTES)} "
                    f"and {format_duration(MAX_DURATION_MINUTES)}"
                ),
            )

        slots = self.preview(request)
        if not slots:
            return BatchOpenSlotsResult.error(
                code="VALIDATION_ERROR",
                message="No valid slots could be generated for the requested date and time",
            )

        logger.info(f"Opening {len(slots)} slots on {request.on_date} from {request.start_time}")

        outcomes: list[SlotOutcome] = []
        for slot in slots:
            if cancel_event is not None and cancel_event.is_set():
                outcomes.append(
                    SlotOutcome(index=slot.index, start_timestamp=slot.start_timestamp, status=SlotOutcomeStatus.ABANDONED)
                )
                continue
            outcomes.append(await self._open_one(slot))

        created = sum(1 for outcome in outcomes if outcome.created)
        if created and self._refresh is not None:
            refreshed = await self._refresh.execute()
            if not refreshed.success:
                logger.warning(f"Slots opened but refresh failed: {refreshed.error_message}")

        result = BatchOpenSlotsResult(success=created == len(outcomes), outcomes=outcomes)
        if not result.success:
            result.error_code = "PARTIAL_FAILURE" if created else "BATCH_FAILED"
            result.error_message = result.summary
        logger.info(result.summary)
        return result
