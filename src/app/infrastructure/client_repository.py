from uuid import UUID
from typing import Optional

from sqlalchemy import select

from src.app.core.domain.models import Client, ClientPatch
from src.app.core.services.client_store import ClientStore
from src.shared.database.base_repo import BaseRepository
from src.shared.database.database import Database

from src.app.infrastructure.entities.client_entity import ClientEntity
from src.app.infrastructure.mappers.client_mapper import ClientMapper


class ClientRepository(BaseRepository[ClientEntity, Client], ClientStore):
    """Repository for Client operations, backing the spouse-link logic as its ClientStore."""

    entity_class = ClientEntity

    def __init__(self, db: Database, mapper: ClientMapper):
        super().__init__(db, mapper)

    async def get(self, client_id: UUID) -> Optional[Client]:
        return await self.get_by_id(client_id)

    async def insert(self, client: Client) -> UUID:
        await super().insert(client)
        return client.id

    async def patch(self, client_id: UUID, patch: ClientPatch) -> bool:
        """Write the explicitly set fields of ``patch`` in one committed statement."""
        values = patch.changes()
        if "email" in values:
            values["email"] = str(values["email"])
        if not values:
            return await self.get_by_id(client_id) is not None
        return await self.update_fields(client_id, values)

    async def list_by_statuses(self, statuses: list[str]) -> list[Client]:
        return await self.find_all(
            select(ClientEntity).where(ClientEntity.status.in_(statuses))
        )
