"""
Appointment availability and recurrence engine.

Pure functions; every catalog they need is passed in explicitly:
- operating_calendar: open/closed and hours for a date
- occupancy: busy intervals of a professional on a date
- slot_generator: free start times for a booking duration
- recurrence: projection of repeating bookings
"""

from .occupancy import busy_intervals
from .operating_calendar import hours_for, is_open
from .recurrence import add_months, next_occurrence, project
from .slot_generator import fits_schedule, generate_slots, is_slot_available

__all__ = [
    "is_open",
    "hours_for",
    "busy_intervals",
    "generate_slots",
    "fits_schedule",
    "is_slot_available",
    "add_months",
    "next_occurrence",
    "project",
]
