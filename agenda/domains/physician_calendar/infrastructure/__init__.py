# ============================================================================
# SCOPE: INFRASTRUCTURE LAYER (Physician Calendar)
# Description: Infrastructure exports.
# ============================================================================
from .external import RemoteAppointmentStoreClient
from .ledger import InMemoryDurationStore, RedisDurationStore
from .scheduler import AutoCompletionScheduler

__all__ = [
    "AutoCompletionScheduler",
    "InMemoryDurationStore",
    "RedisDurationStore",
    "RemoteAppointmentStoreClient",
]
