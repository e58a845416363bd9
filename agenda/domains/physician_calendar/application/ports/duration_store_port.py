# ============================================================================
# SCOPE: APPLICATION LAYER (Physician Calendar)
# Description: Key-value store port backing the duration ledger.
# ============================================================================
"""Duration Store Port.

Raw storage for ledger entries. Expiry and eviction policy live in
DurationLedger; stores only keep what they are given.
"""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..services.duration_ledger import LedgerEntry


@runtime_checkable
class IDurationStore(Protocol):
    """Interface for duration ledger storage.

    Implementations: InMemoryDurationStore, RedisDurationStore
    """

    def get(self, key: str) -> "LedgerEntry | None": ...

    def put(self, entry: "LedgerEntry") -> None: ...

    def delete(self, key: str) -> None: ...

    def all(self) -> list["LedgerEntry"]: ...

    def clear(self) -> None: ...
