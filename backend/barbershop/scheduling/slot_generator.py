"""
Slot generation: free start times for a booking of a given length.

A slot is emitted when the whole booking ``[t, t + duration)`` fits inside
the day's operating hours and overlaps no busy interval of the
professional. Results are "HH:MM" strings in ascending order.
"""

import time as _time
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional

from ..core.config import DEFAULT_SLOT_STEP_MINUTES
from ..core.logging_config import get_logger, log_performance
from ..domain.entities import (
    Appointment,
    ShopCalendarConfig,
    TimeInterval,
    minutes_to_time_str,
    time_to_minutes,
)
from .occupancy import busy_intervals
from .operating_calendar import hours_for, is_open

logger = get_logger(__name__)


def generate_slots(
    config: ShopCalendarConfig,
    appointments: Iterable[Appointment],
    professional_id,
    day: date,
    total_duration_minutes: int,
    exclude_appointment_id: Optional[int] = None,
    step_minutes: int = DEFAULT_SLOT_STEP_MINUTES,
) -> List[str]:
    """
    Enumerate bookable start times for ``professional_id`` on ``day``.

    Returns an empty list when the shop is closed, when no professional is
    selected or when the requested duration is not positive.
    """
    if isinstance(day, datetime):
        day = day.date()
    if not professional_id or total_duration_minutes <= 0:
        return []
    if not is_open(config, day):
        logger.debug(
            "Shop closed, no slots",
            extra={"context": {"date": day.isoformat()}},
        )
        return []
    if step_minutes <= 0:
        raise ValueError("Slot step must be positive")

    started = _time.perf_counter()
    hours = hours_for(config, day)
    busy = busy_intervals(appointments, professional_id, day, exclude_appointment_id)
    day_start = datetime.combine(day, datetime.min.time())

    slots = []
    minute = hours.start_minute
    while minute < hours.end_minute:
        end_minute = minute + total_duration_minutes
        if end_minute > hours.end_minute:
            # Later candidates end even later
            break
        candidate = TimeInterval(
            day_start + timedelta(minutes=minute),
            day_start + timedelta(minutes=end_minute),
        )
        if not any(candidate.overlaps(interval) for interval in busy):
            slots.append(minutes_to_time_str(minute))
        minute += step_minutes

    log_performance(
        "generate_slots",
        (_time.perf_counter() - started) * 1000,
        professional_id=professional_id,
        date=day.isoformat(),
        duration_minutes=total_duration_minutes,
        slot_count=len(slots),
    )
    return slots


def fits_schedule(
    config: ShopCalendarConfig,
    appointments: Iterable[Appointment],
    professional_id,
    start: datetime,
    total_duration_minutes: int,
    exclude_appointment_id: Optional[int] = None,
) -> bool:
    """
    Check a concrete booking against the calendar and occupancy.

    Same rules as ``generate_slots`` (open day, inside hours, no overlap)
    without requiring the start to sit on the slot grid.
    """
    if not professional_id or total_duration_minutes <= 0:
        return False
    day = start.date()
    if not is_open(config, day):
        return False

    hours = hours_for(config, day)
    candidate = TimeInterval(start, start + timedelta(minutes=total_duration_minutes))
    if candidate.start < datetime.combine(day, hours.start_time):
        return False
    if candidate.end > datetime.combine(day, hours.end_time):
        return False

    busy = busy_intervals(appointments, professional_id, day, exclude_appointment_id)
    return not any(candidate.overlaps(interval) for interval in busy)


def is_slot_available(
    config: ShopCalendarConfig,
    appointments: Iterable[Appointment],
    professional_id,
    start: datetime,
    total_duration_minutes: int,
    exclude_appointment_id: Optional[int] = None,
    step_minutes: int = DEFAULT_SLOT_STEP_MINUTES,
) -> bool:
    """
    Check one concrete start datetime against the slot grid for its date.

    The start must be one of the generated slots, so it has to sit on the
    grid, fit the hours and overlap nothing.
    """
    if start.second or start.microsecond:
        return False
    slots = generate_slots(
        config,
        appointments,
        professional_id,
        start.date(),
        total_duration_minutes,
        exclude_appointment_id=exclude_appointment_id,
        step_minutes=step_minutes,
    )
    return minutes_to_time_str(time_to_minutes(start.time())) in slots
