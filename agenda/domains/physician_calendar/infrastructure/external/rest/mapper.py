# ============================================================================
# SCOPE: INFRASTRUCTURE LAYER (Physician Calendar)
# Description: Maps REST payloads to Appointment entities.
# ============================================================================
"""Appointment mapper.

Translates the remote store's camelCase records into domain appointments.
Timestamps are kept verbatim; statuses are normalised.
"""

import logging
import re
from typing import Any

from pydantic import ValidationError

from ....domain.entities import Appointment
from ....domain.entities.appointment import OPEN_SLOT_LABEL
from ....domain.value_objects import AppointmentStatus
from .schemas import ScheduledAppointmentPayload

logger = logging.getLogger(__name__)

_TYPE_SEPARATORS = re.compile(r"[\s_-]+")


def format_appointment_type(raw: str | None) -> str | None:
    """``follow-up`` / ``follow_up`` -> ``Follow Up``."""
    if not raw or not raw.strip():
        return None
    return " ".join(word.capitalize() for word in _TYPE_SEPARATORS.split(raw.strip()) if word)


class AppointmentMapper:
    """Mapper de turnos del backend a entidades de dominio."""

    @staticmethod
    def _patient_name(payload: ScheduledAppointmentPayload) -> str:
        if payload.patient_name and payload.patient_name.strip():
            return payload.patient_name.strip()
        if payload.patient_id not in (None, 0, "0", ""):
            return f"Patient #{payload.patient_id}"
        return OPEN_SLOT_LABEL

    @classmethod
    def to_entity(cls, payload: ScheduledAppointmentPayload) -> Appointment:
        """Map a validated payload.

        Raises:
            ValueError: When the record has no usable id.
        """
        if payload.id in (None, ""):
            raise ValueError("Appointment record without id")
        return Appointment(
            id=str(payload.id),
            doctor_id=str(payload.doctor_id) if payload.doctor_id is not None else "0",
            patient_id=str(payload.patient_id) if payload.patient_id is not None else "0",
            patient_name=cls._patient_name(payload),
            appointment_date=payload.appointment_date.strip(),
            status=AppointmentStatus.from_backend(payload.appointment_status),
            appointment_type=format_appointment_type(payload.appointment_type),
        )

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> Appointment:
        """Validate and map one raw record.

        Raises:
            ValueError: When the record cannot be mapped (ValidationError included).
        """
        return cls.to_entity(ScheduledAppointmentPayload.model_validate(raw))

    @classmethod
    def map_many(cls, raw_items: list[Any]) -> list[Appointment]:
        """Map a fetch result, skipping records that cannot be mapped."""
        appointments: list[Appointment] = []
        for raw in raw_items:
            if not isinstance(raw, dict):
                logger.warning(f"Skipping non-object appointment record: {raw!r}")
                continue
            try:
                appointments.append(cls.from_raw(raw))
            except (ValidationError, ValueError) as e:
                logger.warning(f"Skipping unmappable appointment record {raw.get('id')!r}: {e}")
        return appointments
