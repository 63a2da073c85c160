"""
Client register and client history.

A client's history is every appointment booked under the client's name:
revenue from completed visits, how often each service was performed and
how many bookings were canceled.
"""

from collections import defaultdict
from typing import List

from ..core.exceptions import ResourceNotFoundError
from ..core.logging_config import get_logger
from ..domain.entities import AppointmentStatus, Client
from ..domain.interfaces import IAppointmentReader, IClientRepository
from ..schemas.dtos import ClientProfileResponse, ClientRequest
from . import report_helpers

logger = get_logger(__name__)


class ClientService:
    """Application service for client use-cases."""

    def __init__(
        self, client_repo: IClientRepository, appointment_repo: IAppointmentReader
    ) -> None:
        self.client_repo = client_repo
        self.appointment_repo = appointment_repo

    def list_clients(self) -> List[Client]:
        return self.client_repo.list_all()

    def create_client(self, request: ClientRequest) -> Client:
        request.validate()
        client = self.client_repo.create(request.to_domain())
        logger.info("Client created", extra={"context": {"client_id": client.id}})
        return client

    def delete_client(self, client_id: int) -> None:
        """Remove a client; their appointments stay untouched."""
        if not self.client_repo.delete(client_id):
            raise ResourceNotFoundError("Client", client_id)
        logger.info("Client deleted", extra={"context": {"client_id": client_id}})

    def get_profile(self, client_id: int) -> ClientProfileResponse:
        client = self.client_repo.get_by_id(client_id)
        if client is None:
            raise ResourceNotFoundError("Client", client_id)
        return self._build_profile(
            client, self.appointment_repo.get_by_client_names([client.name])
        )

    def list_profiles(self) -> List[ClientProfileResponse]:
        """Profiles of every client, loading appointments in one query."""
        clients = self.client_repo.list_all()
        by_name = defaultdict(list)
        for appointment in self.appointment_repo.get_by_client_names(
            c.name for c in clients
        ):
            by_name[appointment.client_name.strip()].append(appointment)
        return [self._build_profile(c, by_name[c.name.strip()]) for c in clients]

    @staticmethod
    def _build_profile(client: Client, appointments) -> ClientProfileResponse:
        done = report_helpers.completed(appointments)
        return ClientProfileResponse(
            client=client,
            total_revenue=report_helpers.realized_revenue(done),
            completed_services=report_helpers.service_counts(done),
            canceled_appointments=sum(
                1 for a in appointments if a.status == AppointmentStatus.CANCELED
            ),
            last_visit=max((a.start for a in done), default=None),
        )
