# ============================================================================
# Shared fixtures for physician calendar tests
# ============================================================================
"""Fixtures for the physician calendar domain.

All tests run on a fixed far-future day with a pinned clock so that the
"slot in the past" checks are deterministic.
"""

from collections.abc import Callable
from datetime import datetime
from unittest.mock import AsyncMock

import pytest

from agenda.domains.physician_calendar.application import (
    AppointmentBook,
    DurationLedger,
    InFlightRegistry,
)
from agenda.domains.physician_calendar.domain.entities import Appointment
from agenda.domains.physician_calendar.domain.value_objects import AppointmentStatus, SchedulingPolicy
from agenda.domains.physician_calendar.infrastructure.ledger import InMemoryDurationStore

DAY = "2099-03-10"
NOW = datetime(2099, 3, 10, 7, 0)


@pytest.fixture
def day() -> str:
    return DAY


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def clock(now: datetime) -> Callable[[], datetime]:
    return lambda: now


@pytest.fixture
def make_appointment() -> Callable[..., Appointment]:
    """Factory for appointments on the test day.

    ``at`` is ``HH:MM`` (or a full timestamp); booked by default.
    """

    counter = iter(range(1, 10_000))

    def _make(
        at: str,
        duration: int | None = None,
        patient_id: str | None = "42",
        status: AppointmentStatus = AppointmentStatus.SCHEDULED,
        appointment_id: str | None = None,
        patient_name: str | None = None,
    ) -> Appointment:
        timestamp = at if "T" in at else f"{DAY}T{at}:00"
        booked = patient_id not in (None, "", "0")
        return Appointment(
            id=appointment_id or str(next(counter)),
            appointment_date=timestamp,
            doctor_id="7",
            patient_id=patient_id,
            patient_name=patient_name or ("Jane Doe" if booked else "Available Slot"),
            duration_minutes=duration,
            status=status,
        )

    return _make


@pytest.fixture
def policy() -> SchedulingPolicy:
    return SchedulingPolicy()


@pytest.fixture
def ledger(clock: Callable[[], datetime]) -> DurationLedger:
    return DurationLedger(InMemoryDurationStore(), clock=clock)


@pytest.fixture
def book() -> AppointmentBook:
    return AppointmentBook()


@pytest.fixture
def in_flight() -> InFlightRegistry:
    return InFlightRegistry()


@pytest.fixture
def store() -> AsyncMock:
    """Mock IAppointmentStore."""
    mock = AsyncMock()
    mock.fetch_scheduled.return_value = []
    mock.create_slot.return_value = None
    return mock
