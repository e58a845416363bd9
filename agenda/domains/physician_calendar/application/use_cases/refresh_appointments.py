# ============================================================================
# SCOPE: APPLICATION LAYER (Physician Calendar)
# Description: Use case for reloading the agenda from the remote store.
# ============================================================================
"""Refresh Appointments Use Case.

Fetches the authoritative appointment list and adopts it as the local view.
"""

import logging
from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

from ...domain.value_objects import SchedulingPolicy
from ..dto.calendar_dtos import RefreshAppointmentsResult
from ..ports.remote_store_error import RemoteStoreError

if TYPE_CHECKING:
    from ..ports import IAppointmentStore
    from ..services.appointment_book import AppointmentBook
    from ..services.duration_ledger import DurationLedger

logger = logging.getLogger(__name__)


class RefreshAppointmentsUseCase:
    """Use case for refreshing the appointment book."""

    def __init__(
        self,
        store: "IAppointmentStore",
        book: "AppointmentBook",
        ledger: "DurationLedger",
        policy: SchedulingPolicy | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._store = store
        self._book = book
        self._ledger = ledger
        self._policy = policy or SchedulingPolicy()
        self._clock = clock

    async def execute(self) -> RefreshAppointmentsResult:
        """Fetch and replace local state. On failure the book is left untouched."""
        snapshot = self._book.snapshot()
        try:
            fetched = await self._store.fetch_scheduled()
        except (RemoteStoreError, TimeoutError) as e:
            self._book.restore(snapshot)
            code = getattr(e, "error_code", "REMOTE_TIMEOUT")
            logger.warning(f"Failed to fetch appointments: {code} - {e}")
            return RefreshAppointmentsResult.error(code=code, message=str(e) or "Remote store timed out")

        self._book.replace(
            fetched,
            now=self._clock(),
            durations=self._ledger.entries(),
            default_duration=self._policy.default_duration_minutes,
        )
        logger.info(f"Fetched {len(fetched)} appointments")
        return RefreshAppointmentsResult.ok(appointments=list(self._book.appointments))
