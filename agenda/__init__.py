"""
Physician Agenda

Appointment calendar core for a single physician: slot opening, conflict
detection, availability hints and automatic completion of elapsed visits.
"""

__version__ = "0.1.0"
