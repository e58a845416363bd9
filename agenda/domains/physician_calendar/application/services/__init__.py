# ============================================================================
# SCOPE: APPLICATION LAYER (Physician Calendar)
# Description: Application service exports.
# ============================================================================
from .appointment_book import AppointmentBook
from .auto_completion import AutoCompletionSweep, SweepReport
from .calendar_queries import CalendarQueries
from .duration_ledger import DurationLedger, LedgerEntry
from .in_flight import InFlightRegistry

__all__ = [
    "AppointmentBook",
    "AutoCompletionSweep",
    "CalendarQueries",
    "DurationLedger",
    "InFlightRegistry",
    "LedgerEntry",
    "SweepReport",
]
