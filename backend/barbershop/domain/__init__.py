"""
Domain package - Pure business logic layer.

This package contains:
- entities.py: Domain entities with business logic
- interfaces.py: Repository contracts
"""

from .entities import (
    Appointment,
    AppointmentStatus,
    Client,
    Expense,
    ExpenseCategory,
    OperatingHours,
    Professional,
    ProjectionResult,
    RecurrenceCadence,
    RecurrenceRequest,
    ServiceItem,
    ShopCalendarConfig,
    ShopProfile,
    SpecialDay,
    TimeInterval,
)
from .interfaces import (
    IAppointmentReader,
    IAppointmentRepository,
    IAppointmentWriter,
    ICatalogReader,
    ICatalogRepository,
    ICatalogWriter,
    IClientRepository,
    IExpenseRepository,
    IShopSettingsRepository,
)

__all__ = [
    # Domain entities
    "Appointment",
    "AppointmentStatus",
    "Client",
    "Expense",
    "ExpenseCategory",
    "OperatingHours",
    "Professional",
    "ProjectionResult",
    "RecurrenceCadence",
    "RecurrenceRequest",
    "ServiceItem",
    "ShopCalendarConfig",
    "ShopProfile",
    "SpecialDay",
    "TimeInterval",
    # Repository interfaces
    "IAppointmentRepository",
    "ICatalogRepository",
    "IShopSettingsRepository",
    "IClientRepository",
    "IExpenseRepository",
    # Segregated interfaces
    "IAppointmentReader",
    "IAppointmentWriter",
    "ICatalogReader",
    "ICatalogWriter",
]
