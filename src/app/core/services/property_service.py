import logging
from uuid import UUID, uuid4
from datetime import datetime, UTC

from src.app.core.domain.models import (
    Property,
    PropertyStatus,
    PropertyType,
    PropertyWithOwners,
)
from src.app.core.services.duplicates import is_duplicate_property
from src.app.infrastructure.client_repository import ClientRepository
from src.app.infrastructure.property_repository import PropertyRepository
from src.client.schemas import CreatePropertyRequest, UpdatePropertyRequest
from src.shared.database.unit_of_work import UnitOfWork
from src.shared.exceptions import EntityNotFound
from src.shared.listing import Page, SortOrder, filter_by_search, normalize_for_search, paginate, sort_items

logger = logging.getLogger(__name__)

PROPERTY_SEARCH_FIELDS = ("street", "neighborhood", "city", "state")
PROPERTY_DIGIT_FIELDS = ("zip_code",)


class PropertyService:
    """Service for handling Property business logic."""

    def __init__(
        self,
        repository: PropertyRepository,
        client_repository: ClientRepository,
        unit_of_work: UnitOfWork,
    ):
        self.repository = repository
        self.client_repository = client_repository
        self.unit_of_work = unit_of_work

    async def create_property(self, request: CreatePropertyRequest) -> Property:
        now = datetime.now(UTC)
        prop = Property(
            id=uuid4(),
            status=PropertyStatus.ACTIVE,
            created_at=now,
            updated_at=now,
            **request.model_dump(),
        )
        async with self.unit_of_work:
            self.unit_of_work.add(prop)
        logger.info("Created property %s", prop.id)
        return prop

    async def update_property(self, property_id: UUID, request: UpdatePropertyRequest) -> Property:
        prop = await self.get_property(property_id)
        changes = request.model_dump(exclude_unset=True)
        updated = prop.model_copy(update={**changes, "updated_at": datetime.now(UTC)})
        async with self.unit_of_work:
            await self.unit_of_work.update(updated)
        return updated

    async def delete_property(self, property_id: UUID) -> Property:
        """Soft delete: the property is kept with status inactive."""
        prop = await self.get_property(property_id)
        deleted = prop.model_copy(update={"status": PropertyStatus.INACTIVE, "updated_at": datetime.now(UTC)})
        async with self.unit_of_work:
            await self.unit_of_work.update(deleted)
        logger.info("Deactivated property %s", property_id)
        return deleted

    async def get_property(self, property_id: UUID) -> Property:
        prop = await self.repository.get_by_id(property_id)
        if not prop:
            raise EntityNotFound("Property", property_id)
        return prop

    async def get_property_with_owners(self, property_id: UUID) -> PropertyWithOwners:
        """The property plus the owner records that still exist."""
        prop = await self.get_property(property_id)
        owners = await self.client_repository.get_many(prop.owner_ids)
        return PropertyWithOwners(property=prop, owners=owners)

    async def list_properties(
        self,
        page: int | None = None,
        page_size: int | None = None,
        search: str | None = None,
        status: PropertyStatus | None = None,
        type: PropertyType | None = None,
        city: str | None = None,
        sort_by: str | None = None,
        sort_order: SortOrder = SortOrder.ASC,
    ) -> Page[Property]:
        properties = await self.repository.list_all()
        if status is not None:
            properties = [prop for prop in properties if prop.status == status]
        if type is not None:
            properties = [prop for prop in properties if prop.type == type]
        if city and city.strip():
            wanted_city = normalize_for_search(city)
            properties = [prop for prop in properties if wanted_city in prop.city.lower()]
        properties = filter_by_search(properties, search, PROPERTY_SEARCH_FIELDS, PROPERTY_DIGIT_FIELDS)
        return paginate(sort_items(properties, sort_by, sort_order), page, page_size)

    async def search_properties(self, query: str) -> list[Property]:
        properties = await self.repository.list_all()
        return filter_by_search(properties, query, PROPERTY_SEARCH_FIELDS, PROPERTY_DIGIT_FIELDS)

    async def check_duplicate(
        self, street: str, number: str, zip_code: str, exclude_id: UUID | None = None
    ) -> bool:
        properties = await self.repository.list_all()
        return is_duplicate_property(properties, street, number, zip_code, exclude_id=exclude_id)

    async def list_by_client(self, client_id: UUID) -> list[Property]:
        """Non-inactive properties owned by the client."""
        return await self.repository.list_by_owner(client_id)
