"""SQLAlchemy implementations of the domain repository interfaces."""

from .appointment_repo import AppointmentRepository
from .catalog_repo import CatalogRepository
from .client_repo import ClientRepository
from .expense_repo import ExpenseRepository
from .settings_repo import ShopSettingsRepository

__all__ = [
    "AppointmentRepository",
    "CatalogRepository",
    "ClientRepository",
    "ExpenseRepository",
    "ShopSettingsRepository",
]
