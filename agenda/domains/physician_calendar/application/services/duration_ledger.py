# ============================================================================
# SCOPE: APPLICATION LAYER (Physician Calendar)
# Description: Best-effort cache of slot durations keyed by start timestamp.
# ============================================================================
"""Duration Ledger.

The remote store does not persist a slot's duration, so the duration chosen
when a slot is opened is recorded here under the exact timestamp string sent
to the store. Entries expire after a retention window and the ledger keeps at
most ``max_entries`` of them, evicting the oldest first. Expired or evicted
entries simply fall back to the default duration.
"""

import logging
from collections.abc import Callable, Iterable
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from ...domain.entities import Appointment
from ...domain.services.intervals import DEFAULT_DURATION_MINUTES, resolve_duration

if TYPE_CHECKING:
    from ..ports import IDurationStore

logger = logging.getLogger(__name__)

RETENTION_DAYS = 90
MAX_ENTRIES = 1000


class LedgerEntry(BaseModel):
    """Recorded duration of a slot opened through the agenda."""

    key: str = Field(..., description="Exact start timestamp sent to the remote store")
    duration_minutes: int = Field(..., ge=0)
    created_at: datetime


class DurationLedger:
    """Expiring, size-bounded map from start timestamp to duration."""

    def __init__(
        self,
        store: "IDurationStore",
        retention_days: int = RETENTION_DAYS,
        max_entries: int = MAX_ENTRIES,
        default_duration: int = DEFAULT_DURATION_MINUTES,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._store = store
        self._retention = timedelta(days=retention_days)
        self._max_entries = max_entries
        self._default_duration = default_duration
        self._clock = clock

    def _is_expired(self, entry: LedgerEntry, now: datetime) -> bool:
        return now - entry.created_at > self._retention

    def record(self, key: str, duration_minutes: float) -> None:
        """Store a duration. Empty keys and negative durations are ignored."""
        self.record_many([(key, duration_minutes)])

    def record_many(self, items: Iterable[tuple[str, float]]) -> None:
        now = self._clock()
        written = 0
        for key, duration in items:
            if not key or duration is None or duration < 0:
                logger.debug(f"Ignoring ledger entry key={key!r} duration={duration!r}")
                continue
            self._store.put(LedgerEntry(key=key, duration_minutes=round(duration), created_at=now))
            written += 1
        if written:
            self._enforce_policy(now)

    def _enforce_policy(self, now: datetime) -> None:
        live: list[LedgerEntry] = []
        for entry in self._store.all():
            if self._is_expired(entry, now):
                self._store.delete(entry.key)
            else:
                live.append(entry)

        overflow = len(live) - self._max_entries
        if overflow > 0:
            live.sort(key=lambda entry: entry.created_at)
            for entry in live[:overflow]:
                self._store.delete(entry.key)
            logger.info(f"Duration ledger evicted {overflow} oldest entries")

    def get(self, key: str) -> int | None:
        """Recorded duration for ``key`` or None when absent or expired."""
        if not key:
            return None
        entry = self._store.get(key)
        if entry is None:
            return None
        if self._is_expired(entry, self._clock()):
            self._store.delete(key)
            return None
        return entry.duration_minutes

    def get_or_default(self, key: str) -> int:
        recorded = self.get(key)
        return self._default_duration if recorded is None else recorded

    def resolve(self, appointment: Appointment) -> int:
        """Duration of an appointment: ledger, then its own field, then the default."""
        return resolve_duration(appointment, self.entries(), self._default_duration)

    def entries(self) -> dict[str, int]:
        """Live entries as a plain mapping, ready for the pure interval functions."""
        now = self._clock()
        return {
            entry.key: entry.duration_minutes for entry in self._store.all() if not self._is_expired(entry, now)
        }

    def clear(self) -> None:
        self._store.clear()
