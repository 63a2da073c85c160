"""
Appointment service: booking use-cases on top of the scheduling engine.
"""

from datetime import date, datetime, time, timedelta
from typing import List, Optional

from ..core import config
from ..core.exceptions import (
    InvalidStatusTransitionError,
    ResourceNotFoundError,
    SlotUnavailableError,
)
from ..core.logging_config import get_logger
from ..domain.entities import Appointment, AppointmentStatus, ServiceItem, total_duration
from ..domain.interfaces import (
    IAppointmentRepository,
    ICatalogReader,
    IShopSettingsRepository,
)
from ..scheduling import generate_slots, is_open, is_slot_available, next_occurrence, project
from ..schemas.dtos import (
    AppointmentResponse,
    BookingRequest,
    BookingResultResponse,
    DaySummaryResponse,
    RescheduleRequest,
)

logger = get_logger(__name__)


class AppointmentService:
    """Application service for appointment-related use-cases.

    The scheduling engine only reads; this service is the single place
    that writes appointments, after the engine has validated them.
    """

    def __init__(
        self,
        appointment_repo: IAppointmentRepository,
        catalog_repo: ICatalogReader,
        settings_repo: IShopSettingsRepository,
        step_minutes: Optional[int] = None,
        monthly_policy: Optional[str] = None,
        max_recurrence: Optional[int] = None,
    ):
        self.appointment_repo = appointment_repo
        self.catalog_repo = catalog_repo
        self.settings_repo = settings_repo
        self.step_minutes = step_minutes or config.SLOT_STEP_MINUTES
        self.monthly_policy = monthly_policy or config.MONTHLY_RECURRENCE_POLICY
        self.max_recurrence = max_recurrence or config.MAX_RECURRENCE_COUNT

    # ------------------------------------------------------------------
    # Availability
    # ------------------------------------------------------------------

    def is_shop_open(self, day: date) -> bool:
        return is_open(self.settings_repo.get_config(), day)

    def get_available_slots(
        self,
        professional_id: Optional[int],
        day: date,
        service_ids: List[int],
        exclude_appointment_id: Optional[int] = None,
    ) -> List[str]:
        """Free start times ("HH:MM") for the selected services on ``day``."""
        if not professional_id or not service_ids:
            return []

        services = self._resolve_services(service_ids)
        appointments = self.appointment_repo.get_by_professional_and_date(
            professional_id, day
        )
        return generate_slots(
            self.settings_repo.get_config(),
            appointments,
            professional_id,
            day,
            total_duration(services),
            exclude_appointment_id=exclude_appointment_id,
            step_minutes=self.step_minutes,
        )

    # ------------------------------------------------------------------
    # Booking
    # ------------------------------------------------------------------

    def book(self, request: BookingRequest) -> BookingResultResponse:
        """Book an appointment and, when requested, its repeats.

        Business Rules:
        - Professional and services must exist
        - The chosen start must be one of the free slots of that day
        - Repeats that do not fit are skipped, never moved
        """
        request.validate(self.max_recurrence)

        self._require_professional(request.professional_id)
        services = self._resolve_services(request.service_ids)
        shop_config = self.settings_repo.get_config()
        duration = total_duration(services)

        same_day = self.appointment_repo.get_by_professional_and_date(
            request.professional_id, request.start_date
        )
        if not is_slot_available(
            shop_config,
            same_day,
            request.professional_id,
            request.start,
            duration,
            step_minutes=self.step_minutes,
        ):
            raise SlotUnavailableError(
                f"{request.start:%Y-%m-%d %H:%M} is not available for this booking"
            )

        first = Appointment(
            client_name=request.client_name.strip(),
            professional_id=request.professional_id,
            start=request.start,
            services=services,
            notes=request.notes or None,
        )

        stored = same_day
        if request.recurrence.repeat_count:
            stored = self._appointments_in_horizon(first.start, request)

        result = project(
            first,
            request.recurrence,
            shop_config,
            stored,
            monthly_policy=self.monthly_policy,
        )
        persisted = self.appointment_repo.create_many(result.created_appointments)

        logger.info(
            "Booking created",
            extra={
                "context": {
                    "professional_id": request.professional_id,
                    "start": request.start.isoformat(),
                    "cadence": request.recurrence.cadence.value,
                    "created": result.created_count,
                    "skipped": result.skipped_count,
                }
            },
        )
        return BookingResultResponse.from_projection(persisted, result)

    def reschedule(
        self, appointment_id: int, request: RescheduleRequest
    ) -> AppointmentResponse:
        """Edit a pending appointment; it never conflicts with itself."""
        request.validate()

        appointment = self._require_appointment(appointment_id)
        if appointment.status != AppointmentStatus.PENDING:
            raise InvalidStatusTransitionError(
                "Only pending appointments can be edited"
            )

        self._require_professional(request.professional_id)
        services = self._resolve_services(request.service_ids)
        same_day = self.appointment_repo.get_by_professional_and_date(
            request.professional_id, request.start_date
        )
        if not is_slot_available(
            self.settings_repo.get_config(),
            same_day,
            request.professional_id,
            request.start,
            total_duration(services),
            exclude_appointment_id=appointment_id,
            step_minutes=self.step_minutes,
        ):
            raise SlotUnavailableError(
                f"{request.start:%Y-%m-%d %H:%M} is not available for this booking"
            )

        appointment.client_name = request.client_name.strip()
        appointment.professional_id = request.professional_id
        appointment.start = request.start
        appointment.services = services
        appointment.notes = request.notes or None

        updated = self.appointment_repo.update(appointment)
        logger.info(
            "Appointment rescheduled",
            extra={
                "context": {
                    "appointment_id": appointment_id,
                    "start": request.start.isoformat(),
                }
            },
        )
        return AppointmentResponse.from_domain(updated)

    # ------------------------------------------------------------------
    # Status transitions
    # ------------------------------------------------------------------

    def complete(self, appointment_id: int) -> AppointmentResponse:
        """Mark a pending appointment as completed, fixing its final price."""
        appointment = self._require_appointment(appointment_id)
        if appointment.status != AppointmentStatus.PENDING:
            raise InvalidStatusTransitionError(
                "Only pending appointments can be completed"
            )

        appointment.status = AppointmentStatus.COMPLETED
        appointment.final_price = appointment.total_price
        updated = self.appointment_repo.update(appointment)

        logger.info(
            "Appointment completed",
            extra={
                "context": {
                    "appointment_id": appointment_id,
                    "final_price": updated.final_price,
                }
            },
        )
        return AppointmentResponse.from_domain(updated)

    def cancel(self, appointment_id: int, reason: str) -> AppointmentResponse:
        """Cancel a pending appointment; the reason is prepended to its notes."""
        if not reason or not reason.strip():
            raise ValueError("Cancellation reason is required")

        appointment = self._require_appointment(appointment_id)
        if appointment.status != AppointmentStatus.PENDING:
            raise InvalidStatusTransitionError(
                "Only pending appointments can be canceled"
            )

        appointment.status = AppointmentStatus.CANCELED
        appointment.final_price = None
        appointment.notes = (
            f"Cancelado: {reason.strip()}. \n{appointment.notes or ''}".strip()
        )
        updated = self.appointment_repo.update(appointment)

        logger.info(
            "Appointment canceled",
            extra={"context": {"appointment_id": appointment_id}},
        )
        return AppointmentResponse.from_domain(updated)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_appointment(self, appointment_id: int) -> AppointmentResponse:
        return AppointmentResponse.from_domain(self._require_appointment(appointment_id))

    def get_daily_schedule(
        self,
        day: date,
        professional_id: Optional[int] = None,
        status: Optional[AppointmentStatus] = None,
    ) -> List[AppointmentResponse]:
        """Get the appointments of a day, optionally filtered."""
        appointments = self.appointment_repo.get_by_date(day)
        if professional_id is not None:
            appointments = [a for a in appointments if a.professional_id == professional_id]
        if status is not None:
            status = AppointmentStatus(status)
            appointments = [a for a in appointments if a.status == status]
        appointments.sort(key=lambda a: a.start)
        return [AppointmentResponse.from_domain(a) for a in appointments]

    def get_day_summary(self, day: date) -> DaySummaryResponse:
        """Counts and revenue figures for one day.

        Projected revenue is what pending appointments are expected to bring
        in; realized revenue is what completed appointments did bring in.
        """
        summary = DaySummaryResponse(date=day)
        for appointment in self.appointment_repo.get_by_date(day):
            summary.total += 1
            if appointment.status == AppointmentStatus.PENDING:
                summary.pending_count += 1
                summary.projected_revenue += appointment.total_price
            elif appointment.status == AppointmentStatus.COMPLETED:
                summary.completed_count += 1
                summary.realized_revenue += appointment.final_price or 0.0
            else:
                summary.canceled_count += 1
        return summary

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require_appointment(self, appointment_id: int) -> Appointment:
        appointment = self.appointment_repo.get_by_id(appointment_id)
        if not appointment:
            raise ResourceNotFoundError("Appointment", appointment_id)
        return appointment

    def _require_professional(self, professional_id: int):
        professional = self.catalog_repo.get_professional(professional_id)
        if not professional:
            raise ResourceNotFoundError("Professional", professional_id)
        return professional

    def _resolve_services(self, service_ids: List[int]) -> List[ServiceItem]:
        services = []
        seen = set()
        for service_id in service_ids:
            if service_id in seen:
                continue
            seen.add(service_id)
            service = self.catalog_repo.get_service(service_id)
            if not service:
                raise ResourceNotFoundError("Service", service_id)
            services.append(service)
        return services

    def _appointments_in_horizon(
        self, start: datetime, request: BookingRequest
    ) -> List[Appointment]:
        """Stored appointments from the first day through the last projected one."""
        last = start
        for _ in range(request.recurrence.repeat_count):
            last = next_occurrence(last, request.recurrence.cadence, self.monthly_policy)

        range_start = datetime.combine(start.date(), time.min)
        range_end = datetime.combine(last.date(), time.min) + timedelta(days=1)
        return [
            a
            for a in self.appointment_repo.get_by_date_range(range_start, range_end)
            if a.professional_id == request.professional_id
        ]
