"""Physician calendar domain.

Slot opening, conflict detection, availability and auto-completion for a
single physician's agenda.
"""
