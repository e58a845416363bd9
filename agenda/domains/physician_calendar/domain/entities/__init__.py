# Domain Entities
from .appointment import Appointment

__all__ = ["Appointment"]
