from uuid import UUID
from typing import Optional

from sqlalchemy import select

from src.app.core.domain.models import ClientDocument, PropertyDocument
from src.shared.database.base_repo import BaseRepository
from src.shared.database.database import Database
from src.app.infrastructure.entities.document_entity import ClientDocumentEntity, PropertyDocumentEntity
from src.app.infrastructure.mappers.document_mapper import ClientDocumentMapper, PropertyDocumentMapper


class ClientDocumentRepository(BaseRepository[ClientDocumentEntity, ClientDocument]):
    """Repository for ClientDocument operations."""

    entity_class = ClientDocumentEntity

    def __init__(self, db: Database, mapper: ClientDocumentMapper):
        super().__init__(db, mapper)

    async def get_by_client_id(self, client_id: UUID) -> list[ClientDocument]:
        """Get all documents linked to a client, oldest first."""
        documents = await self.find_all(
            select(ClientDocumentEntity).order_by(ClientDocumentEntity.created_at)
        )
        return [document for document in documents if client_id in document.client_ids]

    async def get_client_document_by_id(
        self, document_id: UUID, client_id: UUID
    ) -> Optional[ClientDocument]:
        """Get a document by its ID, provided it is linked to the client."""
        document = await self.get_by_id(document_id)
        if document is None or client_id not in document.client_ids:
            return None
        return document


class PropertyDocumentRepository(BaseRepository[PropertyDocumentEntity, PropertyDocument]):
    """Repository for PropertyDocument operations."""

    entity_class = PropertyDocumentEntity

    def __init__(self, db: Database, mapper: PropertyDocumentMapper):
        super().__init__(db, mapper)

    async def get_by_property_id(self, property_id: UUID) -> list[PropertyDocument]:
        return await self.find_all(
            select(PropertyDocumentEntity)
            .where(PropertyDocumentEntity.property_id == property_id)
            .order_by(PropertyDocumentEntity.created_at)
        )

    async def get_property_document_by_id(
        self, document_id: UUID, property_id: UUID
    ) -> Optional[PropertyDocument]:
        return await self.find_one(
            select(PropertyDocumentEntity).where(
                PropertyDocumentEntity.id == document_id,
                PropertyDocumentEntity.property_id == property_id,
            )
        )

    async def get_by_contract_id(self, contract_id: UUID) -> Optional[PropertyDocument]:
        """Get the stored PDF of a contract, if one was attached."""
        return await self.find_one(
            select(PropertyDocumentEntity).where(PropertyDocumentEntity.contract_id == contract_id)
        )
