import logging
from uuid import UUID, uuid4
from datetime import datetime, UTC

from src.app.core.domain.models import Client, ClientPatch, ClientStatus, DuplicateFields
from src.app.core.services.duplicates import find_client_duplicates
from src.app.core.services.spouse_links import SpouseLinkMaintainer
from src.app.infrastructure.client_repository import ClientRepository
from src.client.schemas import CreateClientRequest, UpdateClientRequest
from src.shared.exceptions import EntityNotFound
from src.shared.listing import Page, SortOrder, filter_by_search, paginate, sort_items

logger = logging.getLogger(__name__)

CLIENT_SEARCH_FIELDS = ("name", "email", "tax_id")
CLIENT_DIGIT_FIELDS = ("phone",)
SPOUSE_CANDIDATE_STATUSES = [ClientStatus.ACTIVE, ClientStatus.PENDING]
SPOUSE_SEARCH_LIMIT = 10
SPOUSE_BROWSE_LIMIT = 20


class ClientService:
    """Service for handling Client business logic."""

    def __init__(self, repository: ClientRepository, spouse_links: SpouseLinkMaintainer):
        self.repository = repository
        self.spouse_links = spouse_links

    async def create_client(self, request: CreateClientRequest) -> Client:
        """Create a new client, pairing it with ``request.spouse_id`` when given."""
        now = datetime.now(UTC)
        client = Client(
            id=uuid4(),
            created_at=now,
            updated_at=now,
            **request.model_dump(),
        )
        client_id = await self.spouse_links.create(client)
        logger.info("Created client %s", client_id)
        return await self.get_client(client_id)

    async def update_client(self, client_id: UUID, request: UpdateClientRequest) -> Client:
        """Apply the fields set on ``request``; spouse changes are mirrored on the spouse records."""
        patch = ClientPatch(**request.model_dump(exclude_unset=True, exclude={"remove_spouse"}))
        await self.spouse_links.update(client_id, patch, remove_spouse=request.remove_spouse)
        return await self.get_client(client_id)

    async def delete_client(self, client_id: UUID) -> Client:
        """Soft delete: the client becomes inactive and keeps its spouse link."""
        await self.spouse_links.soft_delete(client_id)
        logger.info("Deactivated client %s", client_id)
        return await self.get_client(client_id)

    async def get_client(self, client_id: UUID) -> Client:
        """Get a client by ID."""
        client = await self.repository.get_by_id(client_id)
        if not client:
            raise EntityNotFound("Client", client_id)
        return client

    async def list_clients(
        self,
        page: int | None = None,
        page_size: int | None = None,
        search: str | None = None,
        status: ClientStatus | None = None,
        sort_by: str | None = None,
        sort_order: SortOrder = SortOrder.ASC,
    ) -> Page[Client]:
        clients = await self.repository.list_all()
        if status is not None:
            clients = [client for client in clients if client.status == status]
        clients = filter_by_search(clients, search, CLIENT_SEARCH_FIELDS, CLIENT_DIGIT_FIELDS)
        return paginate(sort_items(clients, sort_by, sort_order), page, page_size)

    async def search_clients(self, query: str) -> list[Client]:
        """All clients matching ``query``, unpaginated."""
        clients = await self.repository.list_all()
        return filter_by_search(clients, query, CLIENT_SEARCH_FIELDS, CLIENT_DIGIT_FIELDS)

    async def search_spouse_candidates(
        self, query: str | None = None, exclude_id: UUID | None = None
    ) -> list[Client]:
        """
        Active or pending clients that could be picked as a spouse.

        With a query, up to 10 matches are returned; without one, the first 20 by name.
        """
        candidates = await self.repository.list_by_statuses(SPOUSE_CANDIDATE_STATUSES)
        candidates = [client for client in candidates if client.id != exclude_id]
        if query and query.strip():
            matches = filter_by_search(candidates, query, CLIENT_SEARCH_FIELDS, CLIENT_DIGIT_FIELDS)
            return matches[:SPOUSE_SEARCH_LIMIT]
        return sort_items(candidates, "name")[:SPOUSE_BROWSE_LIMIT]

    async def get_clients_by_ids(self, client_ids: list[UUID]) -> list[Client]:
        return await self.repository.get_many(client_ids)

    async def check_duplicates(
        self,
        name: str,
        email: str,
        tax_id: str,
        phone: str | None = None,
        exclude_id: UUID | None = None,
    ) -> DuplicateFields:
        clients = await self.repository.list_all()
        return find_client_duplicates(clients, name, email, tax_id, phone=phone, exclude_id=exclude_id)
