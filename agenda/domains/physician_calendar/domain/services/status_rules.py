"""Status rules.

Pure predicates for derived status transitions and the merge applied
whenever a server-echoed record is folded into local state.
"""

from collections.abc import Iterable, Mapping
from datetime import datetime, timedelta

from ..entities.appointment import Appointment
from ..value_objects.appointment_status import AppointmentStatus
from .intervals import DEFAULT_DURATION_MINUTES, time_range_of

GRACE_PERIOD_MINUTES = 5


def is_expired_open_slot(
    appointment: Appointment,
    now: datetime,
    durations: Mapping[str, int] | None = None,
    default_duration: int = DEFAULT_DURATION_MINUTES,
) -> bool:
    """An open slot still marked scheduled whose end has passed."""
    if not appointment.is_open_slot or appointment.status != AppointmentStatus.SCHEDULED:
        return False
    occupied = time_range_of(appointment, durations, default_duration)
    return occupied is not None and occupied.end < now


def apply_view_corrections(
    appointments: Iterable[Appointment],
    now: datetime,
    durations: Mapping[str, int] | None = None,
    default_duration: int = DEFAULT_DURATION_MINUTES,
) -> list[Appointment]:
    """Overlay EXPIRED on elapsed open slots. Never persisted."""
    return [
        appointment.with_status(AppointmentStatus.EXPIRED)
        if is_expired_open_slot(appointment, now, durations, default_duration)
        else appointment
        for appointment in appointments
    ]


def is_eligible_for_auto_completion(
    appointment: Appointment,
    now: datetime,
    grace_period_minutes: int = GRACE_PERIOD_MINUTES,
    durations: Mapping[str, int] | None = None,
    default_duration: int = DEFAULT_DURATION_MINUTES,
) -> bool:
    """A booked, scheduled visit is eligible once ``now >= end + grace``."""
    if appointment.status != AppointmentStatus.SCHEDULED:
        return False
    if appointment.is_open_slot:
        return False
    occupied = time_range_of(appointment, durations, default_duration)
    if occupied is None:
        return False
    return now >= occupied.end + timedelta(minutes=grace_period_minutes)


def merge_server_echo(local: Appointment | None, echo: Appointment) -> Appointment:
    """Fold a server-echoed record into local state.

    CANCELLED on either side wins, then COMPLETED on either side, otherwise
    the echo is taken as is.
    """
    if local is None:
        return echo
    statuses = {local.status, echo.status}
    if AppointmentStatus.CANCELLED in statuses:
        return echo.with_status(AppointmentStatus.CANCELLED)
    if AppointmentStatus.COMPLETED in statuses:
        return echo.with_status(AppointmentStatus.COMPLETED)
    return echo
