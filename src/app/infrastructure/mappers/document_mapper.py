from uuid import UUID

from src.shared.database.base_mapper import BaseEntityMapper, ensure_utc
from src.app.core.domain.models import ClientDocument, PropertyDocument
from src.app.infrastructure.entities.document_entity import ClientDocumentEntity, PropertyDocumentEntity


class ClientDocumentMapper(BaseEntityMapper[ClientDocument, ClientDocumentEntity]):
    """Mapper for converting between ClientDocument domain model and ClientDocumentEntity."""

    @staticmethod
    def to_entity(model_instance: ClientDocument) -> ClientDocumentEntity:
        return ClientDocumentEntity(
            id=model_instance.id,
            name=model_instance.name,
            type=model_instance.type,
            storage_key=model_instance.storage_key,
            client_ids=[str(client_id) for client_id in model_instance.client_ids],
            mime_type=model_instance.mime_type,
            size=model_instance.size,
            created_at=model_instance.created_at,
        )

    @staticmethod
    def to_model(entity: ClientDocumentEntity) -> ClientDocument:
        return ClientDocument(
            id=entity.id,
            name=entity.name,
            type=entity.type,
            storage_key=entity.storage_key,
            client_ids=[UUID(client_id) for client_id in entity.client_ids],
            mime_type=entity.mime_type,
            size=entity.size,
            created_at=ensure_utc(entity.created_at),
        )


class PropertyDocumentMapper(BaseEntityMapper[PropertyDocument, PropertyDocumentEntity]):
    """Mapper for converting between PropertyDocument domain model and PropertyDocumentEntity."""

    @staticmethod
    def to_entity(model_instance: PropertyDocument) -> PropertyDocumentEntity:
        return PropertyDocumentEntity(
            id=model_instance.id,
            name=model_instance.name,
            type=model_instance.type,
            storage_key=model_instance.storage_key,
            property_id=model_instance.property_id,
            mime_type=model_instance.mime_type,
            size=model_instance.size,
            contract_id=model_instance.contract_id,
            created_at=model_instance.created_at,
        )

    @staticmethod
    def to_model(entity: PropertyDocumentEntity) -> PropertyDocument:
        return PropertyDocument(
            id=entity.id,
            name=entity.name,
            type=entity.type,
            storage_key=entity.storage_key,
            property_id=entity.property_id,
            mime_type=entity.mime_type,
            size=entity.size,
            contract_id=entity.contract_id,
            created_at=ensure_utc(entity.created_at),
        )
