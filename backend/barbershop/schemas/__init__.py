"""
Schemas package - Data Transfer Objects and validation.

This package contains DTOs that define the API contracts
and handle request validation.
"""

from .dtos import (
    AppointmentResponse,
    BookingRequest,
    BookingResultResponse,
    CalendarSettingsRequest,
    ClientProfileResponse,
    ClientRequest,
    DaySummaryResponse,
    ErrorResponse,
    ExpenseRequest,
    MonthlyHistoryPoint,
    MonthlyReportResponse,
    ProfessionalRequest,
    RescheduleRequest,
    ServiceRequest,
    ShopProfileRequest,
    SpecialDayRequest,
)

__all__ = [
    # Appointment DTOs
    "BookingRequest",
    "RescheduleRequest",
    "AppointmentResponse",
    "BookingResultResponse",
    "DaySummaryResponse",
    # Settings and catalog DTOs
    "CalendarSettingsRequest",
    "SpecialDayRequest",
    "ShopProfileRequest",
    "ServiceRequest",
    "ProfessionalRequest",
    # Clients and finance DTOs
    "ClientRequest",
    "ClientProfileResponse",
    "ExpenseRequest",
    "MonthlyReportResponse",
    "MonthlyHistoryPoint",
    # Common DTOs
    "ErrorResponse",
]
