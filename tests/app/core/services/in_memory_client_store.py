from typing import Iterable
from uuid import UUID

from src.app.core.domain.models import Client, ClientPatch
from src.app.core.services.client_store import ClientStore


class InMemoryClientStore(ClientStore):
    """Dict-backed ClientStore that records every write in order."""

    def __init__(self, clients: Iterable[Client] = ()):
        self.records: dict[UUID, Client] = {client.id: client for client in clients}
        self.writes: list[tuple[str, UUID]] = []

    async def get(self, client_id: UUID) -> Client | None:
        return self.records.get(client_id)

    async def insert(self, client: Client) -> UUID:
        self.records[client.id] = client
        self.writes.append(("insert", client.id))
        return client.id

    async def patch(self, client_id: UUID, patch: ClientPatch) -> bool:
        current = self.records.get(client_id)
        if current is None:
            return False
        self.records[client_id] = patch.apply_to(current)
        self.writes.append(("patch", client_id))
        return True

    async def list_all(self) -> list[Client]:
        return list(self.records.values())

    async def get_many(self, client_ids: Iterable[UUID]) -> list[Client]:
        return [self.records[client_id] for client_id in client_ids if client_id in self.records]
