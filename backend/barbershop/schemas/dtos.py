"""
Data Transfer Objects (DTOs) and validation schemas.

Request DTOs validate what a form layer submits; response DTOs are built
from domain entities and serialize themselves with ``to_dict``.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import List, Optional, Tuple

from ..domain.entities import (
    Client,
    Expense,
    ExpenseCategory,
    OperatingHours,
    RecurrenceRequest,
    ShopProfile,
    SpecialDay,
    format_time,
)


@dataclass
class BookingRequest:
    """DTO for booking submissions (single or recurring)."""

    client_name: str
    professional_id: Optional[int]
    service_ids: List[int]
    start_date: Optional[date]
    start_time: Optional[time]
    notes: Optional[str] = None
    recurrence: RecurrenceRequest = field(default_factory=RecurrenceRequest)

    def validate(self, max_recurrence: Optional[int] = None) -> None:
        """Validate the request data."""
        if not self.client_name or not self.client_name.strip():
            raise ValueError("Client is required")
        if not self.service_ids:
            raise ValueError("At least one service is required")
        if not self.professional_id:
            raise ValueError("Professional is required")
        if self.start_date is None or self.start_time is None:
            raise ValueError("An available time must be selected")
        if max_recurrence is not None and self.recurrence.repeat_count > max_recurrence:
            raise ValueError(f"Recurrence count cannot exceed {max_recurrence}")

    @property
    def start(self) -> datetime:
        return datetime.combine(self.start_date, self.start_time)


@dataclass
class RescheduleRequest:
    """DTO for edits of an existing appointment (never recurring)."""

    client_name: str
    professional_id: Optional[int]
    service_ids: List[int]
    start_date: Optional[date]
    start_time: Optional[time]
    notes: Optional[str] = None

    def validate(self) -> None:
        BookingRequest(
            client_name=self.client_name,
            professional_id=self.professional_id,
            service_ids=self.service_ids,
            start_date=self.start_date,
            start_time=self.start_time,
        ).validate()

    @property
    def start(self) -> datetime:
        return datetime.combine(self.start_date, self.start_time)


@dataclass
class AppointmentResponse:
    """DTO for appointment API responses."""

    id: Optional[int]
    client_name: str
    professional_id: Optional[int]
    start: datetime
    end: datetime
    services: List[dict]
    total_duration_minutes: int
    total_price: float
    status: str
    final_price: Optional[float]
    notes: Optional[str]

    @classmethod
    def from_domain(cls, appointment) -> "AppointmentResponse":
        """Create response from domain entity."""
        return cls(
            id=appointment.id,
            client_name=appointment.client_name,
            professional_id=appointment.professional_id,
            start=appointment.start,
            end=appointment.end,
            services=[
                {
                    "id": s.id,
                    "name": s.name,
                    "price": s.price,
                    "duration_minutes": s.duration_minutes,
                }
                for s in appointment.services
            ],
            total_duration_minutes=appointment.total_duration_minutes,
            total_price=appointment.total_price,
            status=appointment.status.value,
            final_price=appointment.final_price,
            notes=appointment.notes,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "client_name": self.client_name,
            "professional_id": self.professional_id,
            "date": self.start.date().isoformat(),
            "time": format_time(self.start.time()),
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "services": self.services,
            "total_duration_minutes": self.total_duration_minutes,
            "total_price": self.total_price,
            "status": self.status,
            "final_price": self.final_price,
            "notes": self.notes,
        }


@dataclass
class BookingResultResponse:
    """DTO summarizing a (possibly recurring) booking."""

    appointments: List[AppointmentResponse]
    created_count: int
    skipped_count: int
    skipped_dates: List[date] = field(default_factory=list)

    @classmethod
    def from_projection(cls, appointments, result) -> "BookingResultResponse":
        return cls(
            appointments=[AppointmentResponse.from_domain(a) for a in appointments],
            created_count=result.created_count,
            skipped_count=result.skipped_count,
            skipped_dates=list(result.skipped_dates),
        )

    @property
    def message(self) -> str:
        noun = "appointment" if self.created_count == 1 else "appointments"
        message = f"{self.created_count} {noun} created"
        if self.skipped_count:
            message += f", {self.skipped_count} skipped due to conflict"
        return message + "."

    def to_dict(self) -> dict:
        return {
            "appointments": [a.to_dict() for a in self.appointments],
            "created_count": self.created_count,
            "skipped_count": self.skipped_count,
            "skipped_dates": [d.isoformat() for d in self.skipped_dates],
            "message": self.message,
        }


@dataclass
class DaySummaryResponse:
    """DTO for the per-day dashboard figures."""

    date: date
    total: int = 0
    pending_count: int = 0
    completed_count: int = 0
    canceled_count: int = 0
    projected_revenue: float = 0.0
    realized_revenue: float = 0.0

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "total": self.total,
            "pending_count": self.pending_count,
            "completed_count": self.completed_count,
            "canceled_count": self.canceled_count,
            "projected_revenue": round(self.projected_revenue, 2),
            "realized_revenue": round(self.realized_revenue, 2),
        }


@dataclass
class CalendarSettingsRequest:
    """DTO for updates of the weekly pattern."""

    working_days: List[int]
    start: str
    end: str

    def validate(self) -> None:
        if any(not isinstance(d, int) or d < 0 or d > 6 for d in self.working_days):
            raise ValueError("Working days must be weekday numbers from 0 to 6")
        self.to_hours()

    def to_hours(self) -> OperatingHours:
        return OperatingHours.from_strings(self.start, self.end)


@dataclass
class SpecialDayRequest:
    """DTO for adding or replacing a special day."""

    date: date
    is_closed: bool = False
    start: Optional[str] = None
    end: Optional[str] = None

    def validate(self) -> None:
        if not self.is_closed and bool(self.start) != bool(self.end):
            raise ValueError("Both start and end are required for custom hours")
        self.to_domain()

    def to_domain(self) -> SpecialDay:
        hours = None
        if not self.is_closed and self.start and self.end:
            hours = OperatingHours.from_strings(self.start, self.end)
        return SpecialDay(date=self.date, is_closed=self.is_closed, hours=hours)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass
class ServiceRequest:
    """DTO for creating or replacing a service catalog entry."""

    name: str
    price: float
    duration_minutes: int

    def validate(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Service name is required")
        if not _is_number(self.price):
            raise ValueError("Price must be a number")
        if self.price < 0:
            raise ValueError("Price cannot be negative")
        if not isinstance(self.duration_minutes, int) or isinstance(
            self.duration_minutes, bool
        ):
            raise ValueError("Duration must be a whole number of minutes")
        if self.duration_minutes <= 0:
            raise ValueError("Duration must be positive")


@dataclass
class ProfessionalRequest:
    """DTO for creating or replacing a professional."""

    name: str
    specialty: str = ""

    def validate(self) -> None:
        if not self.name or len(self.name.strip()) < 2:
            raise ValueError("Name must be at least 2 characters")


@dataclass
class ClientRequest:
    """DTO for client registration."""

    name: str
    age: Optional[int] = None
    phone: str = ""

    def validate(self) -> None:
        if not self.name or len(self.name.strip()) < 2:
            raise ValueError("Name must be at least 2 characters")
        if self.age is not None and (not isinstance(self.age, int) or self.age < 0):
            raise ValueError("Age must be a non-negative whole number")

    def to_domain(self) -> Client:
        return Client(name=self.name.strip(), age=self.age, phone=(self.phone or "").strip())


@dataclass
class ExpenseRequest:
    """DTO for recording an expense."""

    description: str
    category: str
    amount: float
    date: Optional[date]

    def validate(self) -> None:
        if not _is_number(self.amount):
            raise ValueError("Amount must be a number")
        self.to_domain()

    def to_domain(self) -> Expense:
        return Expense(
            description=(self.description or "").strip(),
            category=self.category or ExpenseCategory.OTHER,
            amount=self.amount,
            date=self.date,
        )


@dataclass
class ShopProfileRequest:
    """DTO for updates of the shop name, address and monthly goal."""

    name: str
    address: str = ""
    monthly_goal: float = 0.0

    def validate(self) -> None:
        if not _is_number(self.monthly_goal):
            raise ValueError("Monthly goal must be a number")
        self.to_domain()

    def to_domain(self) -> ShopProfile:
        return ShopProfile(
            name=(self.name or "").strip(),
            address=(self.address or "").strip(),
            monthly_goal=float(self.monthly_goal),
        )


@dataclass
class ClientProfileResponse:
    """A client with the figures of their appointment history."""

    client: Client
    total_revenue: float = 0.0
    completed_services: List[Tuple[str, int]] = field(default_factory=list)
    canceled_appointments: int = 0
    last_visit: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.client.id,
            "name": self.client.name,
            "age": self.client.age,
            "phone": self.client.phone,
            "total_revenue": round(self.total_revenue, 2),
            "completed_services": [
                {"service_name": name, "count": count}
                for name, count in self.completed_services
            ],
            "canceled_appointments": self.canceled_appointments,
            "last_visit": self.last_visit.isoformat() if self.last_visit else None,
        }


@dataclass
class MonthlyReportResponse:
    """KPIs of one calendar month.

    Revenue counts Completed appointments only, at their final price;
    ``revenue_by_service`` uses the prices of the booked service items.
    """

    month: str
    total_revenue: float = 0.0
    clients_served: int = 0
    total_expenses: float = 0.0
    monthly_goal: float = 0.0
    top_services: List[Tuple[str, int]] = field(default_factory=list)
    revenue_by_service: List[Tuple[str, float]] = field(default_factory=list)

    @property
    def average_ticket(self) -> float:
        if not self.clients_served:
            return 0.0
        return self.total_revenue / self.clients_served

    @property
    def net_profit(self) -> float:
        return self.total_revenue - self.total_expenses

    @property
    def goal_progress(self) -> Optional[float]:
        """Revenue as a percentage of the goal; None without a goal."""
        if self.monthly_goal <= 0:
            return None
        return self.total_revenue / self.monthly_goal * 100

    def to_dict(self) -> dict:
        progress = self.goal_progress
        return {
            "month": self.month,
            "total_revenue": round(self.total_revenue, 2),
            "clients_served": self.clients_served,
            "average_ticket": round(self.average_ticket, 2),
            "total_expenses": round(self.total_expenses, 2),
            "net_profit": round(self.net_profit, 2),
            "monthly_goal": self.monthly_goal,
            "goal_progress": round(progress, 1) if progress is not None else None,
            "top_services": [
                {"name": name, "count": count} for name, count in self.top_services
            ],
            "revenue_by_service": [
                {"name": name, "revenue": round(revenue, 2)}
                for name, revenue in self.revenue_by_service
            ],
        }


@dataclass
class MonthlyHistoryPoint:
    month: str
    revenue: float
    clients_served: int
    expenses: float

    def to_dict(self) -> dict:
        return {
            "month": self.month,
            "revenue": round(self.revenue, 2),
            "clients_served": self.clients_served,
            "expenses": round(self.expenses, 2),
        }


@dataclass
class ErrorResponse:
    """DTO for error responses."""

    error: str
    message: str
    details: Optional[dict] = None

    @classmethod
    def validation_error(
        cls, message: str, details: Optional[dict] = None
    ) -> "ErrorResponse":
        """Create validation error response."""
        return cls(error="validation_error", message=message, details=details)

    @classmethod
    def not_found(cls, resource: str, resource_id=None) -> "ErrorResponse":
        """Create not found error response."""
        label = resource if resource_id is None else f"{resource} {resource_id}"
        return cls(error="not_found", message=f"{label} not found")

    @classmethod
    def conflict(cls, message: str) -> "ErrorResponse":
        """Create conflict error response."""
        return cls(error="conflict", message=message)

    @classmethod
    def server_error(cls, message: str = "Internal server error") -> "ErrorResponse":
        """Create server error response."""
        return cls(error="server_error", message=message)

    def to_dict(self) -> dict:
        payload = {"success": False, "error": self.error, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload
