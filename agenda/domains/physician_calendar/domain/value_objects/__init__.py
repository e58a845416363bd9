# Domain Value Objects
from .appointment_status import AppointmentStatus
from .scheduling_policy import SchedulingPolicy

__all__ = ["AppointmentStatus", "SchedulingPolicy"]
