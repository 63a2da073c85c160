"""
Recurrence projection for repeating bookings.

The first appointment is always kept. Each repeat is placed one cadence
step after the previous *candidate* (skipped or not) at the same time of
day, and is admitted only if it fits the calendar and collides with
neither stored appointments nor repeats created earlier in the same run.
A rejected repeat is dropped, never moved to another time.
"""

import calendar
from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Callable, Iterable, Optional

from ..core.config import MONTHLY_POLICY_CLAMP, MONTHLY_POLICY_ROLLOVER
from ..core.logging_config import get_logger
from ..domain.entities import (
    Appointment,
    AppointmentStatus,
    ProjectionResult,
    RecurrenceCadence,
    RecurrenceRequest,
    ShopCalendarConfig,
)
from .slot_generator import fits_schedule

logger = get_logger(__name__)

CADENCE_DAYS = {
    RecurrenceCadence.DAILY: 1,
    RecurrenceCadence.WEEKLY: 7,
    RecurrenceCadence.BIWEEKLY: 15,
    RecurrenceCadence.TWENTY_DAYS: 20,
}


def add_months(day: date, months: int = 1, policy: str = MONTHLY_POLICY_ROLLOVER) -> date:
    """
    Advance ``day`` by whole calendar months.

    With the ``rollover`` policy a day missing from the target month spills
    into the next one (2027-01-31 -> 2027-03-03). With ``clamp`` it becomes
    the last day of the target month (2027-01-31 -> 2027-02-28).
    """
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1

    if policy == MONTHLY_POLICY_CLAMP:
        last_day = calendar.monthrange(year, month)[1]
        return date(year, month, min(day.day, last_day))
    if policy != MONTHLY_POLICY_ROLLOVER:
        raise ValueError(f"Unknown monthly recurrence policy '{policy}'")
    return date(year, month, 1) + timedelta(days=day.day - 1)


def next_occurrence(
    previous: datetime,
    cadence: RecurrenceCadence,
    monthly_policy: str = MONTHLY_POLICY_ROLLOVER,
) -> datetime:
    """Return the candidate that follows ``previous`` for ``cadence``."""
    cadence = RecurrenceCadence(cadence)
    if cadence == RecurrenceCadence.MONTHLY:
        return datetime.combine(
            add_months(previous.date(), 1, monthly_policy), previous.time()
        )
    if cadence not in CADENCE_DAYS:
        raise ValueError(f"Cadence '{cadence.value}' has no step")
    return previous + timedelta(days=CADENCE_DAYS[cadence])


def project(
    first_appointment: Appointment,
    recurrence: RecurrenceRequest,
    config: ShopCalendarConfig,
    appointments: Iterable[Appointment],
    monthly_policy: str = MONTHLY_POLICY_ROLLOVER,
    id_factory: Optional[Callable[[], Optional[int]]] = None,
) -> ProjectionResult:
    """
    Project ``recurrence`` from ``first_appointment``.

    Args:
        first_appointment: Occurrence 0, created unconditionally as PENDING
        recurrence: Cadence and number of repeats after the first one
        config: Shop operating calendar
        appointments: Stored appointments (read only)
        monthly_policy: 'rollover' or 'clamp' for monthly cadences
        id_factory: Optional callable assigning ids to created appointments

    Returns:
        ProjectionResult whose created_count + skipped_count equals
        ``occurrence_count + 1`` for a repeating cadence. A ``none`` cadence
        ignores the count and yields the first appointment only.
    """
    new_id = id_factory or (lambda: None)
    first = replace(
        first_appointment,
        id=first_appointment.id if first_appointment.id is not None else new_id(),
        status=AppointmentStatus.PENDING,
        final_price=None,
    )
    result = ProjectionResult(created_appointments=[first])

    stored = list(appointments)
    duration = first.total_duration_minutes
    candidate = first.start

    for index in range(1, recurrence.repeat_count + 1):
        candidate = next_occurrence(candidate, recurrence.cadence, monthly_policy)
        known = stored + result.created_appointments

        if fits_schedule(config, known, first.professional_id, candidate, duration):
            result.created_appointments.append(
                replace(first, id=new_id(), start=candidate)
            )
            continue

        result.skipped_dates.append(candidate.date())
        logger.info(
            "Recurring occurrence skipped",
            extra={
                "context": {
                    "occurrence": index,
                    "date": candidate.date().isoformat(),
                    "time": candidate.strftime("%H:%M"),
                    "professional_id": first.professional_id,
                    "cadence": recurrence.cadence.value,
                }
            },
        )

    logger.debug(
        "Recurrence projected",
        extra={
            "context": {
                "cadence": recurrence.cadence.value,
                "created": result.created_count,
                "skipped": result.skipped_count,
            }
        },
    )
    return result
