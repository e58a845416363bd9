# ============================================================================
# SCOPE: INFRASTRUCTURE LAYER (Physician Calendar)
# Description: Duration ledger storage backends.
# ============================================================================
from .memory_store import InMemoryDurationStore
from .redis_store import RedisDurationStore

__all__ = ["InMemoryDurationStore", "RedisDurationStore"]
