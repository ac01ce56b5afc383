"""API schemas for requests and responses shared by the service and the HTTP client."""
from datetime import date, datetime
from decimal import Decimal
from typing import Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

from src.app.core.domain.models import (
    ClientDocumentType,
    ClientStatus,
    ContractStatus,
    ContractTemplateStatus,
    MaritalStatus,
    NotaryOfficeStatus,
    PropertyDocumentType,
    PropertyRegime,
    PropertyStatus,
    PropertyType,
)

T = TypeVar("T")


def _strip_not_blank(v: str | None) -> str | None:
    if v is None:
        return v
    if not v.strip():
        raise ValueError("Field cannot be blank or only whitespace")
    return v.strip()


class PageResponse(BaseModel, Generic[T]):
    """One page of a listing."""
    items: list[T]
    total: int
    page: int
    page_size: int
    total_pages: int


# =============================================================================
# Clients
# =============================================================================

class CreateClientRequest(BaseModel):
    """Request schema for creating a new client, optionally paired with an existing spouse."""
    name: str = Field(..., min_length=1, description="Name cannot be blank")
    email: EmailStr = Field(..., description="Email address is required")
    phone: str | None = None
    tax_id: str = Field(..., min_length=1, description="CPF or CNPJ")
    status: ClientStatus = ClientStatus.ACTIVE
    marital_status: MaritalStatus | None = None
    property_regime: PropertyRegime | None = None
    spouse_id: UUID | None = None
    wedding_date: date | None = None
    father_name: str | None = None
    mother_name: str | None = None

    @field_validator("name", "tax_id")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Ensure required text fields are not just whitespace."""
        return _strip_not_blank(v)


class UpdateClientRequest(BaseModel):
    """
    Partial client update. Omitted fields are left unchanged; optional fields can be
    cleared with an explicit null. ``remove_spouse`` unlinks both spouses.
    """
    name: str | None = None
    email: EmailStr | None = None
    phone: str | None = None
    tax_id: str | None = None
    status: ClientStatus | None = None
    marital_status: MaritalStatus | None = None
    property_regime: PropertyRegime | None = None
    spouse_id: UUID | None = None
    wedding_date: date | None = None
    father_name: str | None = None
    mother_name: str | None = None
    remove_spouse: bool = False

    @field_validator("name", "tax_id")
    @classmethod
    def validate_not_blank(cls, v: str | None) -> str | None:
        return _strip_not_blank(v)

    @model_validator(mode="after")
    def required_fields_not_null(self) -> "UpdateClientRequest":
        for field in ("name", "email", "tax_id", "status"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class ClientResponse(BaseModel):
    """Response schema for client data returned by the API."""
    id: UUID
    name: str
    email: EmailStr
    phone: str | None = None
    tax_id: str
    status: ClientStatus
    marital_status: MaritalStatus | None = None
    property_regime: PropertyRegime | None = None
    spouse_id: UUID | None = None
    wedding_date: date | None = None
    father_name: str | None = None
    mother_name: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CheckDuplicatesRequest(BaseModel):
    name: str
    email: str
    phone: str | None = None
    tax_id: str
    exclude_id: UUID | None = None


class DuplicateCheckResponse(BaseModel):
    """Which identifying fields collide with another client."""
    name: bool = False
    email: bool = False
    phone: bool = False
    tax_id: bool = False

    model_config = {"from_attributes": True}


class ClientIdsRequest(BaseModel):
    ids: list[UUID] = Field(default_factory=list)


# =============================================================================
# Notary offices
# =============================================================================

class CreateNotaryOfficeRequest(BaseModel):
    """Request schema for creating a notary office."""
    name: str = Field(..., min_length=1)
    code: str = Field(..., min_length=1, description="Registry code, must be unique")
    zip_code: str | None = None
    street: str | None = None
    number: str | None = None
    complement: str | None = None
    neighborhood: str | None = None
    city: str | None = None
    state: str | None = None
    phone: str | None = None
    email: str | None = None
    status: NotaryOfficeStatus = NotaryOfficeStatus.ACTIVE

    @field_validator("name", "code")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        return _strip_not_blank(v)


class UpdateNotaryOfficeRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    code: str | None = Field(default=None, min_length=1)
    zip_code: str | None = None
    street: str | None = None
    number: str | None = None
    complement: str | None = None
    neighborhood: str | None = None
    city: str | None = None
    state: str | None = None
    phone: str | None = None
    email: str | None = None
    status: NotaryOfficeStatus | None = None


class NotaryOfficeResponse(BaseModel):
    id: UUID
    name: str
    code: str
    zip_code: str | None = None
    street: str | None = None
    number: str | None = None
    complement: str | None = None
    neighborhood: str | None = None
    city: str | None = None
    state: str | None = None
    phone: str | None = None
    email: str | None = None
    status: NotaryOfficeStatus
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# =============================================================================
# Properties
# =============================================================================

class CreatePropertyRequest(BaseModel):
    """Request schema for registering a property."""
    zip_code: str = Field(..., min_length=1)
    street: str = Field(..., min_length=1)
    number: str = Field(..., min_length=1)
    complement: str | None = None
    neighborhood: str
    city: str
    state: str
    type: PropertyType
    area: float = Field(..., ge=0, description="Area in square meters")
    value: Decimal = Field(..., ge=0)
    owner_ids: list[UUID] = Field(default_factory=list)


class UpdatePropertyRequest(BaseModel):
    zip_code: str | None = Field(default=None, min_length=1)
    street: str | None = Field(default=None, min_length=1)
    number: str | None = Field(default=None, min_length=1)
    complement: str | None = None
    neighborhood: str | None = None
    city: str | None = None
    state: str | None = None
    type: PropertyType | None = None
    area: float | None = Field(default=None, ge=0)
    value: Decimal | None = Field(default=None, ge=0)
    status: PropertyStatus | None = None
    owner_ids: list[UUID] | None = None


class PropertyResponse(BaseModel):
    id: UUID
    zip_code: str
    street: str
    number: str
    complement: str | None = None
    neighborhood: str
    city: str
    state: str
    type: PropertyType
    area: float
    value: Decimal
    status: PropertyStatus
    owner_ids: list[UUID]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class PropertyWithOwnersResponse(BaseModel):
    property: PropertyResponse
    owners: list[ClientResponse]


class CheckPropertyDuplicateRequest(BaseModel):
    street: str
    number: str
    zip_code: str
    exclude_id: UUID | None = None


class PropertyDuplicateResponse(BaseModel):
    is_duplicate: bool


# =============================================================================
# Documents
# =============================================================================

class ClientDocumentResponse(BaseModel):
    """Response schema for a client document."""
    id: UUID
    name: str
    type: ClientDocumentType
    storage_key: str
    client_ids: list[UUID]
    mime_type: str
    size: int
    created_at: datetime

    model_config = {"from_attributes": True}


class PropertyDocumentResponse(BaseModel):
    """Response schema for a property document."""
    id: UUID
    name: str
    type: PropertyDocumentType
    storage_key: str
    property_id: UUID
    mime_type: str
    size: int
    contract_id: UUID | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class DocumentDownloadResponse(BaseModel):
    """Response schema for document download URL."""
    id: UUID
    name: str
    download_url: str = Field(..., description="Pre-signed S3 URL for downloading the document")
    expires_in: int = Field(..., description="URL expiration time in seconds")


class MissingDocumentsResponse(BaseModel):
    client_id: UUID
    missing: list[ClientDocumentType]


# =============================================================================
# Contract templates
# =============================================================================

class CreateContractTemplateRequest(BaseModel):
    name: str = Field(..., min_length=1)
    description: str | None = None
    content: str = Field(..., min_length=1, description="Text with {{placeholder}} tokens")
    status: ContractTemplateStatus = ContractTemplateStatus.ACTIVE

    @field_validator("name")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        return _strip_not_blank(v)


class UpdateContractTemplateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    content: str | None = Field(default=None, min_length=1)
    status: ContractTemplateStatus | None = None


class ContractTemplateResponse(BaseModel):
    id: UUID
    name: str
    description: str | None = None
    content: str
    status: ContractTemplateStatus
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class TemplateRemovalResponse(BaseModel):
    """Whether the template was deactivated instead of deleted because contracts use it."""
    template_id: UUID
    soft_deleted: bool

    model_config = {"from_attributes": True}


class PlaceholderResponse(BaseModel):
    key: str
    label: str
    group: str

    model_config = {"from_attributes": True}


# =============================================================================
# Contracts
# =============================================================================

class CreateContractRequest(BaseModel):
    """
    Request schema for creating a contract.

    When ``content`` is omitted, the template is rendered with the client,
    property and notary office data.
    """
    name: str = Field(..., min_length=1)
    description: str | None = None
    template_id: UUID
    property_id: UUID
    client_id: UUID
    notary_office_id: UUID | None = None
    content: str | None = None
    status: ContractStatus = ContractStatus.DRAFT


class UpdateContractRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    content: str | None = None
    status: ContractStatus | None = None
    notary_office_id: UUID | None = None


class ContractResponse(BaseModel):
    id: UUID
    name: str
    description: str | None = None
    template_id: UUID | None = None
    property_id: UUID
    client_id: UUID
    notary_office_id: UUID | None = None
    content: str
    status: ContractStatus
    pdf_storage_key: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ContractDetailsResponse(BaseModel):
    """A contract together with the records it was generated from."""
    contract: ContractResponse
    template: ContractTemplateResponse | None = None
    property: PropertyResponse | None = None
    client: ClientResponse | None = None
    notary_office: NotaryOfficeResponse | None = None

    model_config = {"from_attributes": True}
