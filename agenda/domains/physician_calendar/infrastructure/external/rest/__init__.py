# ============================================================================
# SCOPE: INFRASTRUCTURE LAYER (Physician Calendar)
# Description: REST appointment store adapter.
# ============================================================================
from .client import RemoteAppointmentStoreClient
from .exceptions import (
    InvalidRemoteRequestError,
    InvalidRemoteResponseError,
    RemoteStoreConnectionError,
    RemoteStoreHTTPError,
    RemoteStoreTimeoutError,
)
from .mapper import AppointmentMapper, format_appointment_type
from .schemas import OpenSlotPayload, ScheduledAppointmentPayload

__all__ = [
    "AppointmentMapper",
    "InvalidRemoteRequestError",
    "InvalidRemoteResponseError",
    "OpenSlotPayload",
    "RemoteAppointmentStoreClient",
    "RemoteStoreConnectionError",
    "RemoteStoreHTTPError",
    "RemoteStoreTimeoutError",
    "ScheduledAppointmentPayload",
    "format_appointment_type",
]
