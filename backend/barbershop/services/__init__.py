# Services package initialization
# Application use-cases composed from repositories and the scheduling engine

from .appointment_service import AppointmentService
from .catalog_service import CatalogService
from .client_service import ClientService
from .finance_service import FinanceService
from .settings_service import ShopSettingsService

__all__ = [
    "AppointmentService",
    "CatalogService",
    "ClientService",
    "FinanceService",
    "ShopSettingsService",
]
