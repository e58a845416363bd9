"""Slot Sequencer.

Expands a multi-slot request into concrete candidate slots. Pure: the only
input besides the arguments is ``now``, which callers may pin.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from ..value_objects.local_datetime import (
    format_display_time,
    format_local_datetime,
    parse_clock_time,
    parse_local_date,
    parse_local_datetime,
)

logger = logging.getLogger(__name__)

DAY_END = time(18, 0)


@dataclass(frozen=True)
class CalculatedSlot:
    """Candidate slot not yet committed to the remote store."""

    start_timestamp: str
    index: int
    duration_minutes: int

    @property
    def start(self) -> datetime:
        parsed = parse_local_datetime(self.start_timestamp)
        if parsed is None:
            raise ValueError(f"Invalid slot timestamp: {self.start_timestamp}")
        return parsed

    @property
    def end(self) -> datetime:
        return self.start + timedelta(minutes=self.duration_minutes)

    @property
    def date(self) -> str:
        return self.start_timestamp[:10]

    @property
    def display_time(self) -> str:
        return format_display_time(self.start)


def generate_slots(
    on_date: str | date,
    start_time: str | time,
    count: int,
    slot_duration_minutes: int,
    break_duration_minutes: int = 0,
    constrain_to_same_day: bool = True,
    now: datetime | None = None,
    day_end: time = DAY_END,
) -> list[CalculatedSlot]:
    """Generate up to ``count`` consecutive slots separated by breaks.

    Invalid input or a first slot already in the past yields ``[]``. Under
    ``constrain_to_same_day`` generation stops at the first slot that would
    end after ``day_end``.
    """
    day = parse_local_date(on_date)
    clock = parse_clock_time(start_time)
    if day is None or clock is None:
        logger.debug(f"Rejecting slot request with date={on_date!r} time={start_time!r}")
        return []
    if count < 1 or slot_duration_minutes < 1 or break_duration_minutes < 0:
        return []

    base = datetime.combine(day, clock.replace(second=0, microsecond=0))
    reference = now if now is not None else datetime.now()
    if base < reference:
        return []

    limit = datetime.combine(day, day_end)
    step = timedelta(minutes=slot_duration_minutes + break_duration_minutes)
    length = timedelta(minutes=slot_duration_minutes)

    slots: list[CalculatedSlot] = []
    for i in range(count):
        slot_start = base + i * step
        if constrain_to_same_day and slot_start + length > limit:
            break
        slots.append(
            CalculatedSlot(
                start_timestamp=format_local_datetime(slot_start),
                index=i + 1,
                duration_minutes=slot_duration_minutes,
            )
        )
    return slots
