from uuid import UUID

from sqlalchemy import select

from src.app.core.domain.models import Property, PropertyStatus
from src.shared.database.base_repo import BaseRepository
from src.shared.database.database import Database
from src.app.infrastructure.entities.property_entity import PropertyEntity
from src.app.infrastructure.mappers.property_mapper import PropertyMapper


class PropertyRepository(BaseRepository[PropertyEntity, Property]):
    """Repository for Property operations."""

    entity_class = PropertyEntity

    def __init__(self, db: Database, mapper: PropertyMapper):
        super().__init__(db, mapper)

    async def list_by_owner(self, client_id: UUID) -> list[Property]:
        """
        Get the properties a client owns, excluding inactive ones.

        Owner ids live in a JSON column, so membership is checked after loading.
        """
        properties = await self.find_all(
            select(PropertyEntity).where(PropertyEntity.status != PropertyStatus.INACTIVE)
        )
        return [prop for prop in properties if client_id in prop.owner_ids]
