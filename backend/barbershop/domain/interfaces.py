"""
Abstract interfaces for repositories following Interface Segregation Principle.

These interfaces define contracts without implementation details,
enabling dependency injection and easier testing.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Iterable, List, Optional

from .entities import (
    Appointment,
    Client,
    Expense,
    Professional,
    ServiceItem,
    ShopCalendarConfig,
    ShopProfile,
)


class IAppointmentReader(ABC):
    """Interface for appointment read operations."""

    @abstractmethod
    def get_by_id(self, appointment_id: int) -> Optional[Appointment]:
        """Get appointment by ID."""
        pass

    @abstractmethod
    def get_by_date(self, day: date) -> List[Appointment]:
        """Get all appointments starting on ``day``, ordered by start."""
        pass

    @abstractmethod
    def get_by_professional_and_date(
        self, professional_id: int, day: date
    ) -> List[Appointment]:
        """Get a professional's appointments starting on ``day``."""
        pass

    @abstractmethod
    def get_by_date_range(
        self, start_date: datetime, end_date: datetime
    ) -> List[Appointment]:
        """Get appointments starting in ``[start_date, end_date)``."""
        pass

    @abstractmethod
    def get_by_client_names(self, client_names: Iterable[str]) -> List[Appointment]:
        """Get every appointment booked under one of ``client_names``."""
        pass

    @abstractmethod
    def count_pending_for_professional(self, professional_id: int) -> int:
        """Count Pending appointments assigned to a professional."""
        pass


class IAppointmentWriter(ABC):
    """Interface for appointment write operations."""

    @abstractmethod
    def create_many(self, appointments: Iterable[Appointment]) -> List[Appointment]:
        """Create a batch of appointments in one transaction."""
        pass

    @abstractmethod
    def update(self, appointment: Appointment) -> Appointment:
        """Update an existing appointment."""
        pass


class IAppointmentRepository(IAppointmentReader, IAppointmentWriter):
    """Complete appointment repository interface."""

    pass


class ICatalogReader(ABC):
    """Interface for service and professional catalog reads."""

    @abstractmethod
    def get_service(self, service_id: int) -> Optional[ServiceItem]:
        """Get a service by ID."""
        pass

    @abstractmethod
    def list_services(self) -> List[ServiceItem]:
        """List all services ordered by name."""
        pass

    @abstractmethod
    def get_professional(self, professional_id: int) -> Optional[Professional]:
        """Get a professional by ID."""
        pass

    @abstractmethod
    def list_professionals(self) -> List[Professional]:
        """List all professionals ordered by name."""
        pass


class ICatalogWriter(ABC):
    """Interface for service and professional catalog writes."""

    @abstractmethod
    def create_service(self, service: ServiceItem) -> ServiceItem:
        """Create a new service."""
        pass

    @abstractmethod
    def create_professional(self, professional: Professional) -> Professional:
        """Create a new professional."""
        pass

    @abstractmethod
    def update_service(self, service: ServiceItem) -> ServiceItem:
        """Replace name, price and duration of an existing service."""
        pass

    @abstractmethod
    def delete_service(self, service_id: int) -> bool:
        """Delete a service; False when it does not exist."""
        pass

    @abstractmethod
    def update_professional(self, professional: Professional) -> Professional:
        """Replace name and specialty of an existing professional."""
        pass

    @abstractmethod
    def delete_professional(self, professional_id: int) -> bool:
        """Delete a professional; False when it does not exist."""
        pass


class ICatalogRepository(ICatalogReader, ICatalogWriter):
    """Complete catalog repository interface."""

    pass


class IShopSettingsRepository(ABC):
    """Interface for the shop operating calendar settings."""

    @abstractmethod
    def get_config(self) -> ShopCalendarConfig:
        """Get the current calendar config (defaults when none is stored)."""
        pass

    @abstractmethod
    def save_config(self, config: ShopCalendarConfig) -> ShopCalendarConfig:
        """Replace the stored calendar config."""
        pass

    @abstractmethod
    def get_profile(self) -> ShopProfile:
        """Get the shop name, address and monthly goal (defaults when unset)."""
        pass

    @abstractmethod
    def save_profile(self, profile: ShopProfile) -> ShopProfile:
        """Replace the stored shop profile."""
        pass


class IClientRepository(ABC):
    """Interface for the client register."""

    @abstractmethod
    def get_by_id(self, client_id: int) -> Optional[Client]:
        pass

    @abstractmethod
    def list_all(self) -> List[Client]:
        """List clients ordered by name."""
        pass

    @abstractmethod
    def create(self, client: Client) -> Client:
        pass

    @abstractmethod
    def delete(self, client_id: int) -> bool:
        """Delete a client; False when it does not exist."""
        pass


class IExpenseRepository(ABC):
    """Interface for shop expenses."""

    @abstractmethod
    def get_by_date_range(self, start_date: date, end_date: date) -> List[Expense]:
        """Get expenses dated in ``[start_date, end_date)``, oldest first."""
        pass

    @abstractmethod
    def create(self, expense: Expense) -> Expense:
        pass

    @abstractmethod
    def delete(self, expense_id: int) -> bool:
        """Delete an expense; False when it does not exist."""
        pass
