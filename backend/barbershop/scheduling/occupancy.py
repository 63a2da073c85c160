"""Busy intervals of one professional on one date."""

from datetime import date
from typing import Iterable, List, Optional

from ..domain.entities import Appointment, TimeInterval


def busy_intervals(
    appointments: Iterable[Appointment],
    professional_id,
    day: date,
    exclude_appointment_id: Optional[int] = None,
) -> List[TimeInterval]:
    """
    Intervals already consumed on ``day`` by ``professional_id``.

    Pending and completed appointments occupy their interval; canceled ones
    free it. ``exclude_appointment_id`` leaves out the appointment being
    edited so it never conflicts with itself.
    """
    intervals = []
    for appointment in appointments:
        if appointment.professional_id != professional_id:
            continue
        if appointment.is_canceled:
            continue
        if exclude_appointment_id is not None and appointment.id == exclude_appointment_id:
            continue
        if appointment.start.date() != day:
            continue
        intervals.append(appointment.interval)

    intervals.sort(key=lambda interval: interval.start)
    return intervals
