from src.shared.database.base_mapper import BaseEntityMapper, ensure_utc
from src.app.core.domain.models import Client
from src.app.infrastructure.entities.client_entity import ClientEntity


class ClientMapper(BaseEntityMapper[Client, ClientEntity]):
    """Mapper for converting between Client domain model and ClientEntity."""

    @staticmethod
    def to_entity(model_instance: Client) -> ClientEntity:
        """Convert a Client (domain model) to ClientEntity (database entity)."""
        return ClientEntity(
            id=model_instance.id,
            name=model_instance.name,
            email=str(model_instance.email),
            phone=model_instance.phone,
            tax_id=model_instance.tax_id,
            status=model_instance.status,
            marital_status=model_instance.marital_status,
            property_regime=model_instance.property_regime,
            spouse_id=model_instance.spouse_id,
            wedding_date=model_instance.wedding_date,
            father_name=model_instance.father_name,
            mother_name=model_instance.mother_name,
            created_at=model_instance.created_at,
            updated_at=model_instance.updated_at,
        )

    @staticmethod
    def to_model(entity: ClientEntity) -> Client:
        """Convert a ClientEntity (database entity) to Client (domain model)."""
        return Client(
            id=entity.id,
            name=entity.name,
            email=entity.email,
            phone=entity.phone,
            tax_id=entity.tax_id,
            status=entity.status,
            marital_status=entity.marital_status,
            property_regime=entity.property_regime,
            spouse_id=entity.spouse_id,
            wedding_date=entity.wedding_date,
            father_name=entity.father_name,
            mother_name=entity.mother_name,
            created_at=ensure_utc(entity.created_at),
            updated_at=ensure_utc(entity.updated_at),
        )
