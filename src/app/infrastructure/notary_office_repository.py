from typing import Optional

from sqlalchemy import select

from src.app.core.domain.models import NotaryOffice
from src.shared.database.base_repo import BaseRepository
from src.shared.database.database import Database
from src.app.infrastructure.entities.notary_office_entity import NotaryOfficeEntity
from src.app.infrastructure.mappers.notary_office_mapper import NotaryOfficeMapper


class NotaryOfficeRepository(BaseRepository[NotaryOfficeEntity, NotaryOffice]):
    """Repository for NotaryOffice operations."""

    entity_class = NotaryOfficeEntity

    def __init__(self, db: Database, mapper: NotaryOfficeMapper):
        super().__init__(db, mapper)

    async def get_by_code(self, code: str) -> Optional[NotaryOffice]:
        """Get a notary office by its registry code."""
        return await self.find_one(
            select(NotaryOfficeEntity).where(NotaryOfficeEntity.code == code)
        )
