"""Appointment Status Value Object.

Defines the possible states of a physician's appointment and their valid transitions.
"""

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class AppointmentStatus(str, Enum):
    """Estados del turno médico con máquina de estados."""

    SCHEDULED = "scheduled"  # Agendado (turno abierto o reservado)
    COMPLETED = "completed"  # Completado (atendido)
    CANCELLED = "cancelled"  # Cancelado
    EXPIRED = "expired"  # Turno abierto vencido, sólo en la vista

    @classmethod
    def from_backend(cls, raw: str | None) -> "AppointmentStatus":
        """Normalize a status string coming from the remote store.

        Unknown or missing values fall back to SCHEDULED with a warning.
        """
        if raw is not None:
            key = str(raw).strip().lower()
            for status in (cls.SCHEDULED, cls.COMPLETED, cls.CANCELLED):
                if status.value == key:
                    return status
        logger.warning(f"Unknown appointment status '{raw}', defaulting to scheduled")
        return cls.SCHEDULED

    @property
    def display_name(self) -> str:
        """Nombre para mostrar."""
        names = {
            "scheduled": "Scheduled",
            "completed": "Completed",
            "cancelled": "Cancelled",
            "expired": "Expired",
        }
        return names.get(self.value, self.value)

    def can_transition_to(self, new_status: "AppointmentStatus") -> bool:
        """Validar si la transición de estado es válida.

        State machine:
        - scheduled -> completed (booked visit past its grace period)
        - scheduled -> expired (open slot past its end, view only)
        - completed -> (final state)
        - cancelled -> (final state)
        - expired -> (derived, no further transitions)
        """
        transitions: dict[str, list[str]] = {
            "scheduled": ["completed", "expired"],
            "completed": [],  # Estado final
            "cancelled": [],  # Estado final
            "expired": [],
        }
        return new_status.value in transitions.get(self.value, [])

    def is_final(self) -> bool:
        """¿Es un estado final (nunca se sobrescribe)?"""
        return self.value in ["completed", "cancelled"]
