# ============================================================================
# SCOPE: APPLICATION LAYER (Physician Calendar)
# Description: In-memory view of the physician's appointments.
# ============================================================================
"""Appointment Book.

Local view of the remote store's appointments. Every remote mutation is
bracketed by ``snapshot()`` / ``restore()`` so a failed call leaves no
optimistic state behind.
"""

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime

from ...domain.entities import Appointment
from ...domain.services.intervals import DEFAULT_DURATION_MINUTES
from ...domain.services.status_rules import apply_view_corrections, merge_server_echo
from ...domain.value_objects import AppointmentStatus

logger = logging.getLogger(__name__)

BookSnapshot = tuple[tuple[Appointment, ...], datetime | None]


class AppointmentBook:
    """Vista local de la agenda del médico."""

    def __init__(self, appointments: Iterable[Appointment] = ()) -> None:
        self._appointments: list[Appointment] = list(appointments)
        self._last_fetch_time: datetime | None = None

    @property
    def appointments(self) -> tuple[Appointment, ...]:
        return tuple(self._appointments)

    @property
    def last_fetch_time(self) -> datetime | None:
        return self._last_fetch_time

    def get(self, appointment_id: str) -> Appointment | None:
        for appointment in self._appointments:
            if appointment.id == appointment_id:
                return appointment
        return None

    def snapshot(self) -> BookSnapshot:
        return tuple(self._appointments), self._last_fetch_time

    def restore(self, snapshot: BookSnapshot) -> None:
        appointments, last_fetch_time = snapshot
        self._appointments = list(appointments)
        self._last_fetch_time = last_fetch_time

    def replace(
        self,
        fetched: Iterable[Appointment],
        now: datetime,
        durations: Mapping[str, int] | None = None,
        default_duration: int = DEFAULT_DURATION_MINUTES,
    ) -> None:
        """Adopt a fetch result.

        Membership comes from the fetch alone; terminal statuses already held
        locally survive a stale echo, and elapsed open slots show as expired.
        """
        current = {appointment.id: appointment for appointment in self._appointments}
        merged = [merge_server_echo(current.get(echo.id), echo) for echo in fetched]
        self._appointments = apply_view_corrections(merged, now, durations, default_duration)
        self._last_fetch_time = now
        logger.debug(f"Appointment book replaced with {len(self._appointments)} appointments")

    def fold_echo(self, echo: Appointment) -> Appointment:
        """Merge one server-echoed record into the view and return what was kept."""
        for position, local in enumerate(self._appointments):
            if local.id == echo.id:
                kept = merge_server_echo(local, echo)
                self._appointments[position] = kept
                return kept
        self._appointments.append(echo)
        return echo

    def set_status(self, appointment_id: str, status: AppointmentStatus) -> bool:
        """Optimistic local status update. Returns False when the id is unknown."""
        for position, local in enumerate(self._appointments):
            if local.id == appointment_id:
                self._appointments[position] = local.with_status(status)
                return True
        return False

    def for_date(self, on_date: str) -> list[Appointment]:
        return [appointment for appointment in self._appointments if appointment.date == on_date]
