"""Scheduling Policy Value Object.

Thresholds that govern conflict merging, availability and auto-completion.
Defaults are the values observed in production; deployments override them
through settings.
"""

from dataclasses import dataclass
from datetime import time
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from agenda.config.settings import Settings


@dataclass(frozen=True)
class SchedulingPolicy:
    """Reglas de agenda configurables."""

    default_duration_minutes: int = 30
    adjacency_threshold_minutes: int = 5
    grace_period_minutes: int = 5
    day_end: time = time(18, 0)
    min_viable_duration_minutes: int = 15

    @classmethod
    def from_settings(cls, settings: "Settings") -> "SchedulingPolicy":
        """Build the policy from application settings."""
        return cls(
            default_duration_minutes=settings.DEFAULT_APPOINTMENT_DURATION,
            adjacency_threshold_minutes=settings.ADJACENCY_THRESHOLD_MINUTES,
            grace_period_minutes=settings.AUTO_COMPLETE_GRACE_PERIOD_MINUTES,
            day_end=settings.DAY_END_TIME,
            min_viable_duration_minutes=settings.MIN_VIABLE_DURATION_MINUTES,
        )
