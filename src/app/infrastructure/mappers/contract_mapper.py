from src.shared.database.base_mapper import BaseEntityMapper, ensure_utc
from src.app.core.domain.models import Contract, ContractTemplate
from src.app.infrastructure.entities.contract_entity import ContractEntity, ContractTemplateEntity


class ContractTemplateMapper(BaseEntityMapper[ContractTemplate, ContractTemplateEntity]):
    """Mapper for converting between ContractTemplate domain model and ContractTemplateEntity."""

    @staticmethod
    def to_entity(model_instance: ContractTemplate) -> ContractTemplateEntity:
        return ContractTemplateEntity(
            id=model_instance.id,
            name=model_instance.name,
            description=model_instance.description,
            content=model_instance.content,
            status=model_instance.status,
            created_at=model_instance.created_at,
            updated_at=model_instance.updated_at,
        )

    @staticmethod
    def to_model(entity: ContractTemplateEntity) -> ContractTemplate:
        return ContractTemplate(
            id=entity.id,
            name=entity.name,
            description=entity.description,
            content=entity.content,
            status=entity.status,
            created_at=ensure_utc(entity.created_at),
            updated_at=ensure_utc(entity.updated_at),
        )


class ContractMapper(BaseEntityMapper[Contract, ContractEntity]):
    """Mapper for converting between Contract domain model and ContractEntity."""

    @staticmethod
    def to_entity(model_instance: Contract) -> ContractEntity:
        return ContractEntity(
            id=model_instance.id,
            name=model_instance.name,
            description=model_instance.description,
            template_id=model_instance.template_id,
            property_id=model_instance.property_id,
            client_id=model_instance.client_id,
            notary_office_id=model_instance.notary_office_id,
            content=model_instance.content,
            status=model_instance.status,
            pdf_storage_key=model_instance.pdf_storage_key,
            created_at=model_instance.created_at,
            updated_at=model_instance.updated_at,
        )

    @staticmethod
    def to_model(entity: ContractEntity) -> Contract:
        return Contract(
            id=entity.id,
            name=entity.name,
            description=entity.description,
            template_id=entity.template_id,
            property_id=entity.property_id,
            client_id=entity.client_id,
            notary_office_id=entity.notary_office_id,
            content=entity.content,
            status=entity.status,
            pdf_storage_key=entity.pdf_storage_key,
            created_at=ensure_utc(entity.created_at),
            updated_at=ensure_utc(entity.updated_at),
        )
