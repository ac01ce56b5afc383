"""Mappers for converting between domain models and API schemas."""
from typing import Callable, TypeVar

from src.app.core.domain.models import (
    Client,
    ClientDocument,
    Contract,
    ContractTemplate,
    ContractWithRelations,
    DuplicateFields,
    NotaryOffice,
    Property,
    PropertyDocument,
    PropertyWithOwners,
)
from src.client.schemas import (
    ClientDocumentResponse,
    ClientResponse,
    ContractDetailsResponse,
    ContractResponse,
    ContractTemplateResponse,
    DuplicateCheckResponse,
    NotaryOfficeResponse,
    PageResponse,
    PropertyDocumentResponse,
    PropertyResponse,
    PropertyWithOwnersResponse,
)
from src.shared.listing import Page

T = TypeVar("T")
R = TypeVar("R")


def to_page_response(page: Page[T], to_item: Callable[[T], R]) -> PageResponse[R]:
    """Convert a page of domain models using ``to_item`` for each entry."""
    return PageResponse(
        items=[to_item(item) for item in page.items],
        total=page.total,
        page=page.page,
        page_size=page.page_size,
        total_pages=page.total_pages,
    )


def to_client_response(client: Client) -> ClientResponse:
    return ClientResponse.model_validate(client)


def to_duplicate_check_response(duplicates: DuplicateFields) -> DuplicateCheckResponse:
    return DuplicateCheckResponse(
        name=duplicates.name,
        email=duplicates.email,
        phone=duplicates.phone,
        tax_id=duplicates.tax_id,
    )


def to_notary_office_response(office: NotaryOffice) -> NotaryOfficeResponse:
    return NotaryOfficeResponse.model_validate(office)


def to_property_response(prop: Property) -> PropertyResponse:
    return PropertyResponse.model_validate(prop)


def to_property_with_owners_response(result: PropertyWithOwners) -> PropertyWithOwnersResponse:
    return PropertyWithOwnersResponse(
        property=to_property_response(result.property),
        owners=[to_client_response(owner) for owner in result.owners],
    )


def to_client_document_response(document: ClientDocument) -> ClientDocumentResponse:
    return ClientDocumentResponse.model_validate(document)


def to_property_document_response(document: PropertyDocument) -> PropertyDocumentResponse:
    return PropertyDocumentResponse.model_validate(document)


def to_contract_template_response(template: ContractTemplate) -> ContractTemplateResponse:
    return ContractTemplateResponse.model_validate(template)


def to_contract_response(contract: Contract) -> ContractResponse:
    return ContractResponse.model_validate(contract)


def to_contract_details_response(details: ContractWithRelations) -> ContractDetailsResponse:
    """
    Convert a contract and its related records.

    Relations that no longer exist are returned as null.
    """
    return ContractDetailsResponse(
        contract=to_contract_response(details.contract),
        template=to_contract_template_response(details.template) if details.template else None,
        property=to_property_response(details.property) if details.property else None,
        client=to_client_response(details.client) if details.client else None,
        notary_office=to_notary_office_response(details.notary_office) if details.notary_office else None,
    )
