"""Service and professional catalog repository."""

from typing import List, Optional

from ..db.base import ProfessionalModel, ServiceModel
from ..domain.entities import Professional, ServiceItem
from ..domain.interfaces import ICatalogRepository


class CatalogRepository(ICatalogRepository):
    """Repository for the service menu and the professionals list."""

    def __init__(self, db_session) -> None:
        self.db = db_session

    def get_service(self, service_id: int) -> Optional[ServiceItem]:
        row = self.db.get(ServiceModel, service_id)
        return self._service_to_domain(row) if row else None

    def list_services(self) -> List[ServiceItem]:
        rows = self.db.query(ServiceModel).order_by(ServiceModel.name).all()
        return [self._service_to_domain(row) for row in rows]

    def create_service(self, service: ServiceItem) -> ServiceItem:
        row = ServiceModel(
            name=service.name.strip(),
            price=service.price,
            duration_minutes=service.duration_minutes,
        )
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return self._service_to_domain(row)

    def get_professional(self, professional_id: int) -> Optional[Professional]:
        row = self.db.get(ProfessionalModel, professional_id)
        return self._professional_to_domain(row) if row else None

    def list_professionals(self) -> List[Professional]:
        rows = self.db.query(ProfessionalModel).order_by(ProfessionalModel.name).all()
        return [self._professional_to_domain(row) for row in rows]

    def create_professional(self, professional: Professional) -> Professional:
        row = ProfessionalModel(
            name=professional.name.strip(), specialty=professional.specialty or ""
        )
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return self._professional_to_domain(row)

    def update_service(self, service: ServiceItem) -> ServiceItem:
        row = self.db.get(ServiceModel, service.id)
        if row is None:
            raise ValueError(f"Service with ID {service.id} not found")
        row.name = service.name.strip()
        row.price = service.price
        row.duration_minutes = service.duration_minutes
        self._commit()
        self.db.refresh(row)
        return self._service_to_domain(row)

    def delete_service(self, service_id: int) -> bool:
        return self._delete(ServiceModel, service_id)

    def update_professional(self, professional: Professional) -> Professional:
        row = self.db.get(ProfessionalModel, professional.id)
        if row is None:
            raise ValueError(f"Professional with ID {professional.id} not found")
        row.name = professional.name.strip()
        row.specialty = professional.specialty or ""
        self._commit()
        self.db.refresh(row)
        return self._professional_to_domain(row)

    def delete_professional(self, professional_id: int) -> bool:
        # Past appointments keep their rows; the relationship nulls their FK
        return self._delete(ProfessionalModel, professional_id)

    def _delete(self, model, row_id: int) -> bool:
        row = self.db.get(model, row_id)
        if row is None:
            return False
        self.db.delete(row)
        self._commit()
        return True

    def _commit(self) -> None:
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    @staticmethod
    def _service_to_domain(row: ServiceModel) -> ServiceItem:
        return ServiceItem(
            id=row.id,
            name=row.name,
            price=float(row.price),
            duration_minutes=row.duration_minutes,
        )

    @staticmethod
    def _professional_to_domain(row: ProfessionalModel) -> Professional:
        return Professional(id=row.id, name=row.name, specialty=row.specialty or "")
