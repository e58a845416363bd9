# ============================================================================
# SCOPE: APPLICATION LAYER (Physician Calendar)
# Description: Use case for opening a single bookable slot.
# ============================================================================
"""Open Slot Use Case.

Validates the slot, checks it against existing bookings and free time, then
asks the remote store to create it and records its duration in the ledger.
"""

import logging
from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

from agenda.core.domain import ValidationException

from ...domain.services.availability import assess_requested_duration, max_free_duration_from
from ...domain.services.blocked_ranges import merge_into_blocked_ranges
from ...domain.services.conflicts import find_conflicts
from ...domain.services.durations import (
    MAX_DURATION_MINUTES,
    MIN_DURATION_MINUTES,
    format_duration,
    is_valid_duration,
)
from ...domain.value_objects import SchedulingPolicy
from ...domain.value_objects.local_datetime import is_valid_local_datetime, parse_local_datetime
from ..dto.calendar_dtos import OpenSlotRequest, OpenSlotResult
from ..ports.remote_store_error import RemoteStoreError

if TYPE_CHECKING:
    from ..ports import IAppointmentStore
    from ..services.appointment_book import AppointmentBook
    from ..services.duration_ledger import DurationLedger
    from .refresh_appointments import RefreshAppointmentsUseCase

logger = logging.getLogger(__name__)


class OpenSlotUseCase:
    """Use case for opening one slot."""

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

    def _validate(self, request: OpenSlotRequest) -> datetime:
        if not is_valid_local_datetime(request.start_timestamp):
            raise ValidationException(
                f"Invalid slot datetime '{request.start_timestamp}', expected YYYY-MM-DDTHH:mm:ss",
                field="start_timestamp",
            )
        if not is_valid_duration(request.duration_minutes):
            raise ValidationException(
                f"Slot duration must be between {format_duration(MIN_DURATION_MINUTES)} "
                f"and {format_duration(MAX_DURATION_MINUTES)}",
                field="duration_minutes",
            )
        start = parse_local_datetime(request.start_timestamp)
        if start is None or start < self._clock():
            raise ValidationException("Cannot open a slot in the past", field="start_timestamp")
        return start

    async def execute(self, request: OpenSlotRequest) -> OpenSlotResult:
        """Execute the open slot use case.

        Returns:
            OpenSlotResult; conflicts and insufficient free time are returned
            as failed results, never raised.
        """
        try:
            start = self._validate(request)
        except ValidationException as e:
            return OpenSlotResult.error(code=e.code, message=e.message)

        durations = self._ledger.entries()
        conflicts = find_conflicts(
            request.start_timestamp,
            request.duration_minutes,
            self._book.appointments,
            durations=durations,
            default_duration=self._policy.default_duration_minutes,
        )
        if conflicts:
            logger.info(f"Slot {request.start_timestamp} conflicts with {len(conflicts)} appointment(s)")
            return OpenSlotResult.error(
                code="SLOT_CONFLICT",
                message=f"Slot conflicts with {len(conflicts)} existing appointment(s)",
                start_timestamp=request.start_timestamp,
                conflicts=conflicts,
            )

        ranges = merge_into_blocked_ranges(
            self._book.for_date(start.date().isoformat()),
            adjacency_threshold_minutes=self._policy.adjacency_threshold_minutes,
            durations=durations,
            default_duration=self._policy.default_duration_minutes,
        )
        available = max_free_duration_from(start.time(), start.date(), ranges, self._policy.day_end)
        assessment = assess_requested_duration(
            request.duration_minutes, available, self._policy.min_viable_duration_minutes
        )
        if not assessment.is_acceptable:
            return OpenSlotResult.error(
                code=f"AVAILABILITY_{assessment.verdict.name}",
                message=assessment.message,
                start_timestamp=request.start_timestamp,
            )

        snapshot = self._book.snapshot()
        created = False
        try:
            await self._store.create_slot(request.start_timestamp)
            created = True
        except (RemoteStoreError, TimeoutError) as e:
            code = getattr(e, "error_code", "REMOTE_TIMEOUT")
            logger.warning(f"Failed to open slot {request.start_timestamp}: {code} - {e}")
            return OpenSlotResult.error(
                code=code,
                message=str(e) or "Remote store timed out",
                start_timestamp=request.start_timestamp,
            )
        except Exception as e:
            logger.error(f"Unexpected error opening slot {request.start_timestamp}: {e}", exc_info=True)
            return OpenSlotResult.error(
                code="UNEXPECTED_ERROR",
                message=str(e) or type(e).__name__,
                start_timestamp=request.start_timestamp,
            )
        finally:
            if not created:
                self._book.restore(snapshot)

        self._ledger.record(request.start_timestamp, request.duration_minutes)
        logger.info(f"Opened slot {request.start_timestamp} ({format_duration(request.duration_minutes)})")

        if self._refresh is not None:
            refreshed = await self._refresh.execute()
            if not refreshed.success:
                logger.warning(f"Slot opened but refresh failed: {refreshed.error_message}")

        return OpenSlotResult.ok(start_timestamp=request.start_timestamp)
