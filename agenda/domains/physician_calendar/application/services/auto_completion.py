# ============================================================================
# SCOPE: APPLICATION LAYER (Physician Calendar)
# Description: One pass of the automatic completion of elapsed appointments.
# ============================================================================
"""Auto-Completion Sweep.

Completes, one by one, every booked appointment whose end plus grace period
has passed. A failure is logged and the sweep moves on; the failed id is free
to be retried on the next pass.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

from agenda.core.shared.logger import get_logger

from ...domain.services.status_rules import is_eligible_for_auto_completion
from ...domain.value_objects import SchedulingPolicy
from ..dto.calendar_dtos import CompleteAppointmentRequest

if TYPE_CHECKING:
    from ..services.appointment_book import AppointmentBook
    from ..services.duration_ledger import DurationLedger
    from ..services.in_flight import InFlightRegistry
    from ..use_cases.complete_appointment import CompleteAppointmentUseCase

logger = get_logger(__name__, {"component": "auto_completion"})


@dataclass
class SweepReport:
    """Resultado de una pasada de auto-completado."""

    completed_ids: list[str] = field(default_factory=list)
    failed_ids: list[str] = field(default_factory=list)
    skipped_ids: list[str] = field(default_factory=list)

    @property
    def attempted(self) -> int:
        return len(self.completed_ids) + len(self.failed_ids)

    @property
    def refresh_needed(self) -> bool:
        return bool(self.completed_ids)


class AutoCompletionSweep:
    """Runs the completion pass over the current appointment book."""

    def __init__(
        self,
        book: "AppointmentBook",
        ledger: "DurationLedger",
        in_flight: "InFlightRegistry",
        complete_use_case: "CompleteAppointmentUseCase",
        policy: SchedulingPolicy | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._book = book
        self._ledger = ledger
        self._in_flight = in_flight
        self._complete = complete_use_case
        self._policy = policy or SchedulingPolicy()
        self._clock = clock

    def eligible(self, now: datetime) -> list[str]:
        """Ids that may be completed at ``now`` and are not already in flight."""
        durations = self._ledger.entries()
        return [
            appointment.id
            for appointment in self._book.appointments
            if is_eligible_for_auto_completion(
                appointment,
                now,
                grace_period_minutes=self._policy.grace_period_minutes,
                durations=durations,
                default_duration=self._policy.default_duration_minutes,
            )
            and not self._in_flight.is_in_flight(appointment.id)
        ]

    async def run_once(self, now: datetime | None = None) -> SweepReport:
        now = now or self._clock()
        report = SweepReport()
        candidates = self.eligible(now)
        if not candidates:
            return report

        logger.info(f"Auto-completing {len(candidates)} appointment(s)", now=now.isoformat())
        for appointment_id in candidates:
            try:
                result = await self._complete.execute(CompleteAppointmentRequest(appointment_id=appointment_id))
            except Exception as e:
                report.failed_ids.append(appointment_id)
                logger.error(
                    f"Auto-completion crashed for {appointment_id}: {e}",
                    exc_info=True,
                    appointment_id=appointment_id,
                )
                continue

            if result.success:
                report.completed_ids.append(appointment_id)
            elif result.error_code == "COMPLETION_IN_PROGRESS":
                report.skipped_ids.append(appointment_id)
            else:
                report.failed_ids.append(appointment_id)
                logger.warning(
                    f"Auto-completion failed for {appointment_id}",
                    appointment_id=appointment_id,
                    error_code=result.error_code,
                )

        logger.info(
            f"Auto-completion sweep done: {len(report.completed_ids)} completed, {len(report.failed_ids)} failed",
        )
        return report
