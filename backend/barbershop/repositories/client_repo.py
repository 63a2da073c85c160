"""Client register repository."""

from typing import List, Optional

from ..db.base import ClientModel
from ..domain.entities import Client
from ..domain.interfaces import IClientRepository


class ClientRepository(IClientRepository):
    def __init__(self, db_session) -> None:
        self.db = db_session

    def get_by_id(self, client_id: int) -> Optional[Client]:
        row = self.db.get(ClientModel, client_id)
        return self._to_domain(row) if row else None

    def list_all(self) -> List[Client]:
        rows = self.db.query(ClientModel).order_by(ClientModel.name, ClientModel.id).all()
        return [self._to_domain(row) for row in rows]

    def create(self, client: Client) -> Client:
        row = ClientModel(
            name=client.name.strip(),
            age=client.age,
            phone=(client.phone or "").strip(),
        )
        try:
            self.db.add(row)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(row)
        return self._to_domain(row)

    def delete(self, client_id: int) -> bool:
        row = self.db.get(ClientModel, client_id)
        if row is None:
            return False
        try:
            self.db.delete(row)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return True

    @staticmethod
    def _to_domain(row: ClientModel) -> Client:
        return Client(id=row.id, name=row.name, age=row.age, phone=row.phone or "")
