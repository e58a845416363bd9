"""Appointment Entity.

A physician's appointment as read from the remote store. The core never edits
it in place; status overlays produce a new instance.
"""

from dataclasses import dataclass, replace
from datetime import datetime

from ..value_objects.appointment_status import AppointmentStatus
from ..value_objects.local_datetime import parse_local_datetime

OPEN_SLOT_PATIENT_IDS = frozenset({"", "0"})
OPEN_SLOT_LABEL = "Available Slot"


@dataclass(frozen=True)
class Appointment:
    """Turno del médico.

    ``appointment_date`` keeps the raw naive timestamp text exactly as the
    remote store returned it; it is parsed lazily so a single malformed record
    never breaks a whole fetch.
    """

    id: str
    appointment_date: str
    doctor_id: str = ""
    patient_id: str | None = None
    patient_name: str = OPEN_SLOT_LABEL
    duration_minutes: int | None = None
    status: AppointmentStatus = AppointmentStatus.SCHEDULED
    appointment_type: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Appointment id must be non-empty")

    @property
    def is_open_slot(self) -> bool:
        """¿Es un turno libre (sin paciente real)?"""
        if self.patient_id is None or self.patient_id.strip() in OPEN_SLOT_PATIENT_IDS:
            return True
        return self.patient_name == OPEN_SLOT_LABEL

    @property
    def start(self) -> datetime | None:
        return parse_local_datetime(self.appointment_date)

    @property
    def date(self) -> str:
        """Calendar date part, ``YYYY-MM-DD``."""
        start = self.start
        return start.strftime("%Y-%m-%d") if start else self.appointment_date[:10]

    @property
    def time(self) -> str:
        """Wall-clock part, ``HH:MM``."""
        start = self.start
        return start.strftime("%H:%M") if start else ""

    def with_status(self, status: AppointmentStatus) -> "Appointment":
        """Return a copy carrying a different status."""
        if status == self.status:
            return self
        return replace(self, status=status)
