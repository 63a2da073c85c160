"""
Pure helpers for the monthly reports and client histories.

Only Completed appointments count as revenue; their ``final_price`` is the
amount charged, while per-service figures use the booked item prices.
"""

from collections import Counter, defaultdict
from datetime import date
from typing import Dict, Iterable, List, Tuple

from ..domain.entities import Appointment, AppointmentStatus

TOP_SERVICES_LIMIT = 3


def month_bounds(year: int, month: int) -> Tuple[date, date]:
    """``[first day, first day of next month)``."""
    start = date(year, month, 1)
    if month == 12:
        return start, date(year + 1, 1, 1)
    return start, date(year, month + 1, 1)


def shift_month(year: int, month: int, offset: int) -> Tuple[int, int]:
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def month_label(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def completed(appointments: Iterable[Appointment]) -> List[Appointment]:
    return [a for a in appointments if a.status == AppointmentStatus.COMPLETED]


def realized_revenue(appointments: Iterable[Appointment]) -> float:
    return sum(a.final_price or 0.0 for a in completed(appointments))


def service_counts(appointments: Iterable[Appointment]) -> List[Tuple[str, int]]:
    """How many times each service was performed, most frequent first."""
    counts = Counter(s.name for a in completed(appointments) for s in a.services)
    # Counter.most_common keeps first-seen order among ties
    return counts.most_common()


def top_services(
    appointments: Iterable[Appointment], limit: int = TOP_SERVICES_LIMIT
) -> List[Tuple[str, int]]:
    return service_counts(appointments)[:limit]


def revenue_by_service(appointments: Iterable[Appointment]) -> List[Tuple[str, float]]:
    revenue: Dict[str, float] = defaultdict(float)
    for appointment in completed(appointments):
        for service in appointment.services:
            revenue[service.name] += service.price
    return sorted(revenue.items(), key=lambda item: item[1], reverse=True)
