"""Infrastructure mappers for converting between domain models and database entities."""
from src.app.infrastructure.mappers.client_mapper import ClientMapper
from src.app.infrastructure.mappers.notary_office_mapper import NotaryOfficeMapper
from src.app.infrastructure.mappers.property_mapper import PropertyMapper
from src.app.infrastructure.mappers.document_mapper import ClientDocumentMapper, PropertyDocumentMapper
from src.app.infrastructure.mappers.contract_mapper import ContractMapper, ContractTemplateMapper

__all__ = [
    "ClientMapper",
    "NotaryOfficeMapper",
    "PropertyMapper",
    "ClientDocumentMapper",
    "PropertyDocumentMapper",
    "ContractTemplateMapper",
    "ContractMapper",
]
