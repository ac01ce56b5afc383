"""Keyed client storage used by the spouse-link logic."""
import abc
from typing import Iterable
from uuid import UUID

from src.app.core.domain.models import Client, ClientPatch


class ClientStore(abc.ABC):
    """
    Keyed store of client records.

    Every ``patch`` is atomic for the one record it touches and commits on its own;
    there is no transaction spanning several records.
    """

    @abc.abstractmethod
    async def get(self, client_id: UUID) -> Client | None:
        pass

    @abc.abstractmethod
    async def insert(self, client: Client) -> UUID:
        pass

    @abc.abstractmethod
    async def patch(self, client_id: UUID, patch: ClientPatch) -> bool:
        """Apply the explicitly set fields of ``patch``. Returns False when the record does not exist."""

    @abc.abstractmethod
    async def list_all(self) -> list[Client]:
        pass

    @abc.abstractmethod
    async def get_many(self, client_ids: Iterable[UUID]) -> list[Client]:
        pass
