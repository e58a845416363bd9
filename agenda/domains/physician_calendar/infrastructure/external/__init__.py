# ============================================================================
# SCOPE: INFRASTRUCTURE LAYER (Physician Calendar)
# Description: External system adapters.
# ============================================================================
from .rest import RemoteAppointmentStoreClient

__all__ = ["RemoteAppointmentStoreClient"]
