from uuid import UUID

from sqlalchemy import func, select

from src.app.core.domain.models import Contract, ContractStatus, ContractTemplate, ContractTemplateStatus
from src.shared.database.base_repo import BaseRepository
from src.shared.database.database import Database
from src.app.infrastructure.entities.contract_entity import ContractEntity, ContractTemplateEntity
from src.app.infrastructure.mappers.contract_mapper import ContractMapper, ContractTemplateMapper


class ContractTemplateRepository(BaseRepository[ContractTemplateEntity, ContractTemplate]):
    """Repository for ContractTemplate operations."""

    entity_class = ContractTemplateEntity

    def __init__(self, db: Database, mapper: ContractTemplateMapper):
        super().__init__(db, mapper)

    async def get_active(self) -> list[ContractTemplate]:
        return await self.find_all(
            select(ContractTemplateEntity)
            .where(ContractTemplateEntity.status == ContractTemplateStatus.ACTIVE)
            .order_by(ContractTemplateEntity.name)
        )


class ContractRepository(BaseRepository[ContractEntity, Contract]):
    """Repository for Contract operations."""

    entity_class = ContractEntity

    def __init__(self, db: Database, mapper: ContractMapper):
        super().__init__(db, mapper)

    async def get_by_property_id(self, property_id: UUID) -> list[Contract]:
        """Get all contracts of a property, newest first."""
        return await self.find_all(
            select(ContractEntity)
            .where(ContractEntity.property_id == property_id)
            .order_by(ContractEntity.created_at.desc())
        )

    async def get_completed_by_client_id(self, client_id: UUID) -> list[Contract]:
        """Get a client's final and signed contracts, newest first."""
        return await self.find_all(
            select(ContractEntity)
            .where(
                ContractEntity.client_id == client_id,
                ContractEntity.status.in_([ContractStatus.FINAL, ContractStatus.SIGNED]),
            )
            .order_by(ContractEntity.created_at.desc())
        )

    async def count_by_template_id(self, template_id: UUID) -> int:
        async with self.db.session_maker() as session:
            result = await session.execute(
                select(func.count()).select_from(ContractEntity).where(ContractEntity.template_id == template_id)
            )
            return result.scalar_one()
