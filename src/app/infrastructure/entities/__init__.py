"""Database entities for the infrastructure layer."""
from src.app.infrastructure.entities.client_entity import ClientEntity
from src.app.infrastructure.entities.notary_office_entity import NotaryOfficeEntity
from src.app.infrastructure.entities.property_entity import PropertyEntity
from src.app.infrastructure.entities.document_entity import ClientDocumentEntity, PropertyDocumentEntity
from src.app.infrastructure.entities.contract_entity import ContractEntity, ContractTemplateEntity

__all__ = [
    "ClientEntity",
    "NotaryOfficeEntity",
    "PropertyEntity",
    "ClientDocumentEntity",
    "PropertyDocumentEntity",
    "ContractTemplateEntity",
    "ContractEntity",
]
