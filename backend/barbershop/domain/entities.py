"""
Domain entities - Pure business logic, no framework dependencies.

Every entity here is independent of:
- Database implementation (SQLAlchemy)
- HTTP frameworks (Flask)

Times of day are naive ``datetime.time`` values and appointment starts are
naive local ``datetime`` values; the shop runs on a single local clock.
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import FrozenSet, Iterable, List, Optional, Tuple, Union

MINUTES_PER_DAY = 24 * 60


def parse_time(value: Union[str, time]) -> time:
    """Parse an "HH:MM" string into a ``time``; ``time`` values pass through."""
    if isinstance(value, time):
        return value
    try:
        hour_str, minute_str = str(value).strip().split(":")
        return time(int(hour_str), int(minute_str))
    except (TypeError, ValueError):
        raise ValueError(f"Invalid time '{value}', expected HH:MM")


def format_time(value: time) -> str:
    return f"{value.hour:02d}:{value.minute:02d}"


def minutes_to_time_str(minutes: int) -> str:
    """Convert a minute-of-day into "HH:MM"."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def time_to_minutes(value: time) -> int:
    return value.hour * 60 + value.minute


class AppointmentStatus(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    CANCELED = "CANCELED"


class RecurrenceCadence(str, Enum):
    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    TWENTY_DAYS = "twenty_days"
    MONTHLY = "monthly"


@dataclass(frozen=True)
class ServiceItem:
    """Catalog entry for a service offered by the shop.

    The duration drives slot length; an appointment with several items
    lasts for the sum of their durations.
    """

    id: Optional[int] = None
    name: str = ""
    price: float = 0.0
    duration_minutes: int = 0

    def __post_init__(self):
        """Validate business rules."""
        if not self.name or not self.name.strip():
            raise ValueError("Service name is required")
        if self.price < 0:
            raise ValueError("Price cannot be negative")
        if self.duration_minutes <= 0:
            raise ValueError("Duration must be positive")


@dataclass
class Professional:
    """Domain entity for a professional whose calendar can be booked."""

    id: Optional[int] = None
    name: str = ""
    specialty: str = ""

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Professional name is required")


@dataclass(frozen=True)
class OperatingHours:
    """Daily opening window, ``[start_time, end_time)``."""

    start_time: time = time(9, 0)
    end_time: time = time(18, 0)

    def __post_init__(self):
        object.__setattr__(self, "start_time", parse_time(self.start_time))
        object.__setattr__(self, "end_time", parse_time(self.end_time))
        if self.end_time <= self.start_time:
            raise ValueError("Closing time must be after opening time")

    @classmethod
    def from_strings(cls, start: str, end: str) -> "OperatingHours":
        return cls(start_time=parse_time(start), end_time=parse_time(end))

    @property
    def start_minute(self) -> int:
        return time_to_minutes(self.start_time)

    @property
    def end_minute(self) -> int:
        return time_to_minutes(self.end_time)

    def to_dict(self) -> dict:
        return {"start": format_time(self.start_time), "end": format_time(self.end_time)}


@dataclass(frozen=True)
class SpecialDay:
    """Override of the weekly pattern for one calendar date.

    A closed special day never carries hours; an open one may carry hours
    that replace the default window for that date only.
    """

    date: date
    is_closed: bool = False
    hours: Optional[OperatingHours] = None

    def __post_init__(self):
        if isinstance(self.date, datetime):
            object.__setattr__(self, "date", self.date.date())
        if self.is_closed and self.hours is not None:
            object.__setattr__(self, "hours", None)

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "is_closed": self.is_closed,
            "hours": self.hours.to_dict() if self.hours else None,
        }


# Monday through Saturday
DEFAULT_WORKING_DAYS = frozenset({0, 1, 2, 3, 4, 5})


@dataclass(frozen=True)
class ShopCalendarConfig:
    """Operating calendar of the shop.

    ``working_days`` uses Python weekday numbers (Monday=0 ... Sunday=6).
    ``special_days`` holds at most one entry per date; when duplicates are
    supplied the last one wins.
    """

    working_days: FrozenSet[int] = DEFAULT_WORKING_DAYS
    default_hours: OperatingHours = field(default_factory=OperatingHours)
    special_days: Tuple[SpecialDay, ...] = ()

    def __post_init__(self):
        working_days = frozenset(int(d) for d in self.working_days)
        invalid = [d for d in working_days if d < 0 or d > 6]
        if invalid:
            raise ValueError(f"Invalid weekday(s): {sorted(invalid)}")
        object.__setattr__(self, "working_days", working_days)

        by_date = {}
        for special_day in self.special_days:
            by_date[special_day.date] = special_day
        object.__setattr__(
            self,
            "special_days",
            tuple(by_date[d] for d in sorted(by_date)),
        )

    def special_day_for(self, day: date) -> Optional[SpecialDay]:
        for special_day in self.special_days:
            if special_day.date == day:
                return special_day
        return None

    def with_special_day(self, special_day: SpecialDay) -> "ShopCalendarConfig":
        """Return a copy with ``special_day`` added or replacing its date."""
        return replace(self, special_days=self.special_days + (special_day,))

    def without_special_day(self, day: date) -> "ShopCalendarConfig":
        return replace(
            self,
            special_days=tuple(sd for sd in self.special_days if sd.date != day),
        )

    def to_dict(self) -> dict:
        return {
            "working_days": sorted(self.working_days),
            "default_hours": self.default_hours.to_dict(),
            "special_days": [sd.to_dict() for sd in self.special_days],
        }


@dataclass(frozen=True)
class TimeInterval:
    """Half-open interval ``[start, end)``."""

    start: datetime
    end: datetime

    def overlaps(self, other: "TimeInterval") -> bool:
        # Touching intervals (one ends exactly when the other starts) are free
        return self.start < other.end and self.end > other.start

    @property
    def duration_minutes(self) -> int:
        return int((self.end - self.start).total_seconds() // 60)


@dataclass
class Appointment:
    """Domain entity for a booked appointment.

    Lifecycle: PENDING -> COMPLETED or PENDING -> CANCELED. Both outcomes
    are terminal.
    """

    id: Optional[int] = None
    client_name: str = ""
    professional_id: Optional[int] = None
    start: Optional[datetime] = None
    services: List[ServiceItem] = field(default_factory=list)
    status: AppointmentStatus = AppointmentStatus.PENDING
    final_price: Optional[float] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate business rules."""
        if not self.client_name or not self.client_name.strip():
            raise ValueError("Client name is required")
        if self.start is None:
            raise ValueError("Start date and time are required")
        self.status = AppointmentStatus(self.status)
        self.services = list(self.services)

    @property
    def total_duration_minutes(self) -> int:
        return total_duration(self.services)

    @property
    def total_price(self) -> float:
        return sum(s.price for s in self.services)

    @property
    def end(self) -> datetime:
        return self.start + timedelta(minutes=self.total_duration_minutes)

    @property
    def interval(self) -> TimeInterval:
        return TimeInterval(self.start, self.end)

    @property
    def day(self) -> date:
        return self.start.date()

    @property
    def is_canceled(self) -> bool:
        return self.status == AppointmentStatus.CANCELED


def total_duration(services: Iterable[ServiceItem]) -> int:
    """Sum of the durations of ``services`` in minutes."""
    return sum(s.duration_minutes for s in services)


@dataclass(frozen=True)
class RecurrenceRequest:
    """Repeat cadence and number of repeats requested for a booking.

    ``occurrence_count`` counts repeats after the first appointment.
    """

    cadence: RecurrenceCadence = RecurrenceCadence.NONE
    occurrence_count: int = 0

    def __post_init__(self):
        object.__setattr__(self, "cadence", RecurrenceCadence(self.cadence))
        if self.occurrence_count < 0:
            raise ValueError("Occurrence count cannot be negative")

    @property
    def repeat_count(self) -> int:
        """Number of projected repeats; zero when no cadence is set."""
        if self.cadence == RecurrenceCadence.NONE:
            return 0
        return self.occurrence_count


@dataclass
class ProjectionResult:
    """Outcome of projecting a recurring booking."""

    created_appointments: List[Appointment] = field(default_factory=list)
    skipped_dates: List[date] = field(default_factory=list)

    @property
    def created_count(self) -> int:
        return len(self.created_appointments)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped_dates)


@dataclass
class Client:
    """Domain entity for a registered client.

    Appointments reference clients by name only, so a client's history is
    every appointment booked under the same name.
    """

    id: Optional[int] = None
    name: str = ""
    age: Optional[int] = None
    phone: str = ""

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Client name is required")
        if self.age is not None and self.age < 0:
            raise ValueError("Age cannot be negative")


class ExpenseCategory(str, Enum):
    RENT = "Aluguel"
    BILLS = "Contas"
    SUPPLIES = "Suprimentos"
    MARKETING = "Marketing"
    TAX = "Imposto"
    SALARY = "Salário"
    OTHER = "Outros"


@dataclass
class Expense:
    """An outgoing payment of the shop, counted in the month of ``date``."""

    id: Optional[int] = None
    description: str = ""
    category: ExpenseCategory = ExpenseCategory.OTHER
    amount: float = 0.0
    date: Optional[date] = None

    def __post_init__(self):
        if not self.description or not self.description.strip():
            raise ValueError("Description is required")
        if self.amount <= 0:
            raise ValueError("Amount must be greater than zero")
        if self.date is None:
            raise ValueError("Expense date is required")
        try:
            self.category = ExpenseCategory(self.category)
        except ValueError:
            raise ValueError(f"Invalid expense category '{self.category}'")


@dataclass(frozen=True)
class ShopProfile:
    """Shop identity and the revenue goal the monthly report is measured against."""

    name: str = "Minha Barbearia"
    address: str = ""
    monthly_goal: float = 5000.0

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Shop name is required")
        if self.monthly_goal < 0:
            raise ValueError("Monthly goal cannot be negative")

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "address": self.address,
            "monthly_goal": self.monthly_goal,
        }
