"""
Catalog service: services offered by the shop and the professionals
whose calendars can be booked.

Appointments store a snapshot of their service items, so editing or
deleting a service never rewrites booked history.
"""

from typing import List, Optional

from ..core.exceptions import ResourceInUseError, ResourceNotFoundError
from ..core.logging_config import get_logger
from ..domain.entities import Professional, ServiceItem
from ..domain.interfaces import IAppointmentReader, ICatalogRepository
from ..schemas.dtos import ProfessionalRequest, ServiceRequest

logger = get_logger(__name__)


class CatalogService:
    def __init__(
        self,
        catalog_repo: ICatalogRepository,
        appointment_repo: Optional[IAppointmentReader] = None,
    ) -> None:
        self.catalog_repo = catalog_repo
        self.appointment_repo = appointment_repo

    def list_services(self) -> List[ServiceItem]:
        return self.catalog_repo.list_services()

    def list_professionals(self) -> List[Professional]:
        return self.catalog_repo.list_professionals()

    def create_service(self, request: ServiceRequest) -> ServiceItem:
        request.validate()
        service = self.catalog_repo.create_service(self._service_from(request))
        logger.info(
            "Service created",
            extra={"context": {"service_id": service.id, "name": service.name}},
        )
        return service

    def update_service(self, service_id: int, request: ServiceRequest) -> ServiceItem:
        request.validate()
        if self.catalog_repo.get_service(service_id) is None:
            raise ResourceNotFoundError("Service", service_id)
        service = self.catalog_repo.update_service(
            self._service_from(request, service_id)
        )
        logger.info(
            "Service updated",
            extra={
                "context": {
                    "service_id": service_id,
                    "price": service.price,
                    "duration_minutes": service.duration_minutes,
                }
            },
        )
        return service

    def delete_service(self, service_id: int) -> None:
        if not self.catalog_repo.delete_service(service_id):
            raise ResourceNotFoundError("Service", service_id)
        logger.info("Service deleted", extra={"context": {"service_id": service_id}})

    def create_professional(self, request: ProfessionalRequest) -> Professional:
        request.validate()
        professional = self.catalog_repo.create_professional(
            Professional(name=request.name.strip(), specialty=request.specialty or "")
        )
        logger.info(
            "Professional created",
            extra={"context": {"professional_id": professional.id}},
        )
        return professional

    def update_professional(
        self, professional_id: int, request: ProfessionalRequest
    ) -> Professional:
        request.validate()
        if self.catalog_repo.get_professional(professional_id) is None:
            raise ResourceNotFoundError("Professional", professional_id)
        return self.catalog_repo.update_professional(
            Professional(
                id=professional_id,
                name=request.name.strip(),
                specialty=request.specialty or "",
            )
        )

    def delete_professional(self, professional_id: int) -> None:
        """
        Remove a professional from the catalog.

        Refused while Pending appointments are assigned to them; completed
        and canceled appointments stay in history without a professional.
        """
        if self.catalog_repo.get_professional(professional_id) is None:
            raise ResourceNotFoundError("Professional", professional_id)
        if self.appointment_repo is not None:
            pending = self.appointment_repo.count_pending_for_professional(
                professional_id
            )
            if pending:
                raise ResourceInUseError(
                    f"Professional has {pending} pending appointment(s)"
                )
        self.catalog_repo.delete_professional(professional_id)
        logger.info(
            "Professional deleted",
            extra={"context": {"professional_id": professional_id}},
        )

    @staticmethod
    def _service_from(request: ServiceRequest, service_id: Optional[int] = None) -> ServiceItem:
        return ServiceItem(
            id=service_id,
            name=request.name.strip(),
            price=float(request.price),
            duration_minutes=request.duration_minutes,
        )
