from uuid import UUID

from src.shared.database.base_mapper import BaseEntityMapper, ensure_utc
from src.app.core.domain.models import Property
from src.app.infrastructure.entities.property_entity import PropertyEntity


class PropertyMapper(BaseEntityMapper[Property, PropertyEntity]):
    """Mapper for converting between Property domain model and PropertyEntity."""

    @staticmethod
    def to_entity(model_instance: Property) -> PropertyEntity:
        """Convert Property (domain model) to PropertyEntity (database entity)."""
        return PropertyEntity(
            id=model_instance.id,
            zip_code=model_instance.zip_code,
            street=model_instance.street,
            number=model_instance.number,
            complement=model_instance.complement,
            neighborhood=model_instance.neighborhood,
            city=model_instance.city,
            state=model_instance.state,
            type=model_instance.type,
            area=model_instance.area,
            value=model_instance.value,
            status=model_instance.status,
            owner_ids=[str(owner_id) for owner_id in model_instance.owner_ids],
            created_at=model_instance.created_at,
            updated_at=model_instance.updated_at,
        )

    @staticmethod
    def to_model(entity: PropertyEntity) -> Property:
        """Convert PropertyEntity (database entity) to Property (domain model)."""
        return Property(
            id=entity.id,
            zip_code=entity.zip_code,
            street=entity.street,
            number=entity.number,
            complement=entity.complement,
            neighborhood=entity.neighborhood,
            city=entity.city,
            state=entity.state,
            type=entity.type,
            area=entity.area,
            value=entity.value,
            status=entity.status,
            owner_ids=[UUID(owner_id) for owner_id in entity.owner_ids or []],
            created_at=ensure_utc(entity.created_at),
            updated_at=ensure_utc(entity.updated_at),
        )
