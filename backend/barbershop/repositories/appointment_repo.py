"""
Appointment repository implementation backed by SQLAlchemy.
"""

from datetime import date, datetime, time, timedelta
from typing import Iterable, List, Optional

from ..db.base import AppointmentModel as DbAppointment
from ..domain.entities import Appointment as DomainAppointment
from ..domain.entities import AppointmentStatus, ServiceItem
from ..domain.interfaces import IAppointmentRepository


def _day_bounds(day: date):
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


class AppointmentRepository(IAppointmentRepository):
    """Repository for Appointment persistence operations."""

    def __init__(self, db_session) -> None:
        self.db = db_session

    def get_by_id(self, appointment_id: int) -> Optional[DomainAppointment]:
        db_appointment = self.db.get(DbAppointment, appointment_id)
        return self._to_domain(db_appointment) if db_appointment else None

    def get_by_date(self, day: date) -> List[DomainAppointment]:
        start, end = _day_bounds(day)
        return self.get_by_date_range(start, end)

    def get_by_professional_and_date(
        self, professional_id: int, day: date
    ) -> List[DomainAppointment]:
        start, end = _day_bounds(day)
        rows = (
            self.db.query(DbAppointment)
            .filter(
                DbAppointment.professional_id == professional_id,
                DbAppointment.start_at >= start,
                DbAppointment.start_at < end,
            )
            .order_by(DbAppointment.start_at.asc())
            .all()
        )
        return [self._to_domain(row) for row in rows]

    def get_by_date_range(
        self, start_date: datetime, end_date: datetime
    ) -> List[DomainAppointment]:
        rows = (
            self.db.query(DbAppointment)
            .filter(
                DbAppointment.start_at >= start_date,
                DbAppointment.start_at < end_date,
            )
            .order_by(DbAppointment.start_at.asc(), DbAppointment.id.asc())
            .all()
        )
        return [self._to_domain(row) for row in rows]

    def get_by_client_names(
        self, client_names: Iterable[str]
    ) -> List[DomainAppointment]:
        names = {name.strip() for name in client_names if name and name.strip()}
        if not names:
            return []
        rows = (
            self.db.query(DbAppointment)
            .filter(DbAppointment.client_name.in_(names))
            .order_by(DbAppointment.start_at.asc(), DbAppointment.id.asc())
            .all()
        )
        return [self._to_domain(row) for row in rows]

    def count_pending_for_professional(self, professional_id: int) -> int:
        return (
            self.db.query(DbAppointment)
            .filter(
                DbAppointment.professional_id == professional_id,
                DbAppointment.status == AppointmentStatus.PENDING.value,
            )
            .count()
        )

    def create_many(
        self, appointments: Iterable[DomainAppointment]
    ) -> List[DomainAppointment]:
        rows = [self._to_model(appointment) for appointment in appointments]
        try:
            self.db.add_all(rows)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        for row in rows:
            self.db.refresh(row)
        return [self._to_domain(row) for row in rows]

    def update(self, appointment: DomainAppointment) -> DomainAppointment:
        if not appointment.id:
            raise ValueError("Appointment ID is required for update")

        row = self.db.get(DbAppointment, appointment.id)
        if not row:
            raise ValueError(f"Appointment with ID {appointment.id} not found")

        row.client_name = appointment.client_name
        row.professional_id = appointment.professional_id
        row.start_at = appointment.start
        row.services = self._services_to_json(appointment.services)
        row.status = appointment.status.value
        row.final_price = appointment.final_price
        row.notes = appointment.notes
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(row)
        return self._to_domain(row)

    @staticmethod
    def _services_to_json(services: Iterable[ServiceItem]) -> list:
        return [
            {
                "id": s.id,
                "name": s.name,
                "price": s.price,
                "duration_minutes": s.duration_minutes,
            }
            for s in services
        ]

    def _to_model(self, appointment: DomainAppointment) -> DbAppointment:
        return DbAppointment(
            client_name=appointment.client_name,
            professional_id=appointment.professional_id,
            start_at=appointment.start,
            services=self._services_to_json(appointment.services),
            status=appointment.status.value,
            final_price=appointment.final_price,
            notes=appointment.notes,
        )

    def _to_domain(self, db_appointment: DbAppointment) -> DomainAppointment:
        """Convert database model to domain entity."""
        return DomainAppointment(
            id=db_appointment.id,
            client_name=db_appointment.client_name,
            professional_id=db_appointment.professional_id,
            start=db_appointment.start_at,
            services=[ServiceItem(**item) for item in db_appointment.services or []],
            status=AppointmentStatus(db_appointment.status),
            final_price=db_appointment.final_price,
            notes=db_appointment.notes,
            created_at=db_appointment.created_at,
            updated_at=db_appointment.updated_at,
        )
