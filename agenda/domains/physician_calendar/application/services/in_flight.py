# ============================================================================
# SCOPE: APPLICATION LAYER (Physician Calendar)
# Description: Registry of appointment ids with a completion call in flight.
# ============================================================================
"""In-flight registry.

Shared by the auto-completion sweep and manual completion so that no two
completion calls for the same appointment run at once.
"""

import threading


class InFlightRegistry:
    """Set of appointment ids with atomic check-and-insert."""

    def __init__(self) -> None:
        self._ids: set[str] = set()
        self._lock = threading.Lock()

    def try_acquire(self, appointment_id: str) -> bool:
        """Mark ``appointment_id`` in flight. False when it already is."""
        with self._lock:
            if appointment_id in self._ids:
                return False
            self._ids.add(appointment_id)
            return True

    def release(self, appointment_id: str) -> None:
        with self._lock:
            self._ids.discard(appointment_id)

    def is_in_flight(self, appointment_id: str) -> bool:
        with self._lock:
            return appointment_id in self._ids

    def __len__(self) -> int:
        with self._lock:
            return len(self._ids)
