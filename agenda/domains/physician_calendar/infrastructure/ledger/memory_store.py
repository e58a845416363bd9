# ============================================================================
# SCOPE: INFRASTRUCTURE LAYER (Physician Calendar)
# Description: Process-local duration ledger storage.
# ============================================================================
"""In-memory duration store."""

import threading

from ...application.services.duration_ledger import LedgerEntry


class InMemoryDurationStore:
    """Dict-backed IDurationStore. Entries live as long as the process."""

    def __init__(self) -> None:
        self._entries: dict[str, LedgerEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> LedgerEntry | None:
        with self._lock:
            return self._entries.get(key)

    def put(self, entry: LedgerEntry) -> None:
        with self._lock:
            self._entries[entry.key] = entry

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def all(self) -> list[LedgerEntry]:
        with self._lock:
            return list(self._entries.values())

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
