# ============================================================================
# SCOPE: APPLICATION LAYER (Physician Calendar)
# Description: Port exports.
# ============================================================================
from .appointment_store_port import IAppointmentStore
from .duration_store_port import IDurationStore
from .remote_store_error import RemoteStoreError

__all__ = [
    "IAppointmentStore",
    "IDurationStore",
    "RemoteStoreError",
]
