"""
Operating calendar: is the shop open on a date, and with which hours.

Resolution order:
1. A special day for the date wins (closed, or open with custom/default hours)
2. Otherwise the weekly pattern (working weekdays + default hours)
"""

from datetime import date, datetime
from typing import Union

from ..domain.entities import OperatingHours, ShopCalendarConfig

DateLike = Union[date, datetime]


def _as_date(day: DateLike) -> date:
    # Weekday lookups must only ever see the calendar date
    if isinstance(day, datetime):
        return day.date()
    return day


def is_open(config: ShopCalendarConfig, day: DateLike) -> bool:
    """Return True when the shop takes bookings on ``day``."""
    day = _as_date(day)
    special_day = config.special_day_for(day)
    if special_day is not None:
        return not special_day.is_closed
    return day.weekday() in config.working_days


def hours_for(config: ShopCalendarConfig, day: DateLike) -> OperatingHours:
    """
    Return the opening window that applies on ``day``.

    An open special day without its own hours uses the default window.
    The result is only meaningful when ``is_open`` is true for the date.
    """
    special_day = config.special_day_for(_as_date(day))
    if special_day is not None and not special_day.is_closed and special_day.hours:
        return special_day.hours
    return config.default_hours
