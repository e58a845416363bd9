# ============================================================================
# SCOPE: APPLICATION LAYER (Physician Calendar)
# Description: Remote appointment store port.
# ============================================================================
"""Appointment Store Port.

Defines the three operations the calendar core needs from the remote
appointment store. The core never talks to storage by any other route.
"""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ...domain.entities import Appointment


@runtime_checkable
class IAppointmentStore(Protocol):
    """Interface for the remote appointment store.

    Implementations: RemoteAppointmentStoreClient

    Every method raises RemoteStoreError (or a subclass) on failure.
    """

    async def fetch_scheduled(self) -> list["Appointment"]:
        """Fetch every appointment of the authenticated physician.

        Returns:
            Authoritative list that replaces local state.
        """
        ...

    async def create_slot(self, local_datetime: str) -> None:
        """Open a bookable slot.

        Args:
            local_datetime: Naive local timestamp ``YYYY-MM-DDTHH:mm:ss``.
        """
        ...

    async def mark_completed(self, appointment_id: str) -> "Appointment":
        """Mark an appointment as completed.

        Args:
            appointment_id: Appointment ID.

        Returns:
            The server's view of the appointment after the update.
        """
        ...
