"""Domain models used in business logic."""
import uuid
from datetime import date, datetime, UTC
from decimal import Decimal
from enum import StrEnum
from typing import Any, ClassVar
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, model_validator


def utc_now() -> datetime:
    return datetime.now(UTC)


# =============================================================================
# Clients
# =============================================================================

class ClientStatus(StrEnum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    PENDING = "pending"


class MaritalStatus(StrEnum):
    SINGLE = "single"
    COMMON_LAW_MARRIAGE = "common_law_marriage"
    MARRIED = "married"
    WIDOWED = "widowed"
    DIVORCED = "divorced"


class PropertyRegime(StrEnum):
    PARTIAL_COMMUNION = "partial_communion"
    TOTAL_COMMUNION = "total_communion"
    TOTAL_SEPARATION = "total_separation"


class Client(BaseModel):
    """Domain model for Client used in business logic."""
    id: UUID = Field(default_factory=uuid.uuid4, description="Unique client ID")
    name: str = Field(..., min_length=1, description="Full name")
    email: EmailStr = Field(..., description="Email address is required")
    phone: str | None = None
    tax_id: str = Field(..., min_length=1, description="CPF or CNPJ, stored as typed")
    status: ClientStatus = ClientStatus.ACTIVE
    marital_status: MaritalStatus | None = None
    property_regime: PropertyRegime | None = None
    spouse_id: UUID | None = Field(default=None, description="Client this one is married to")
    wedding_date: date | None = None
    father_name: str | None = None
    mother_name: str | None = None
    created_at: datetime = Field(default_factory=utc_now, description="Creation timestamp")
    updated_at: datetime = Field(default_factory=utc_now, description="Last modification timestamp")

    model_config = {"from_attributes": True}


class ClientPatch(BaseModel):
    """
    Partial update of a client record.

    Only fields that were explicitly set are applied, so ``ClientPatch(spouse_id=None)``
    clears the link while ``ClientPatch()`` leaves it alone.
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
    updated_at: datetime | None = None

    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("name", "email", "tax_id", "status")

    @model_validator(mode="after")
    def required_fields_cannot_be_cleared(self) -> "ClientPatch":
        for field in self.REQUIRED_FIELDS:
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be cleared")
        return self

    def sets(self, field: str) -> bool:
        return field in self.model_fields_set

    def changes(self) -> dict[str, Any]:
        """Explicitly set fields, ready to be written to the store."""
        return self.model_dump(exclude_unset=True)

    def without(self, *fields: str) -> "ClientPatch":
        remaining = {k: v for k, v in self.changes().items() if k not in fields}
        return ClientPatch(**remaining)

    def merged(self, **values: Any) -> "ClientPatch":
        return ClientPatch(**{**self.changes(), **values})

    def apply_to(self, client: Client) -> Client:
        return client.model_copy(update=self.changes())


class DuplicateFields(BaseModel):
    """Which identifying fields of a candidate client collide with another client."""
    name: bool = False
    email: bool = False
    phone: bool = False
    tax_id: bool = False

    @property
    def found_any(self) -> bool:
        return self.name or self.email or self.phone or self.tax_id


# =============================================================================
# Notary offices
# =============================================================================

class NotaryOfficeStatus(StrEnum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class NotaryOffice(BaseModel):
    """Domain model for a notary office (cartorio)."""
    id: UUID = Field(default_factory=uuid.uuid4)
    name: str = Field(..., min_length=1)
    code: str = Field(..., min_length=1, description="Registry code, unique across offices")
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
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    model_config = {"from_attributes": True}


# =============================================================================
# Properties
# =============================================================================

class PropertyStatus(StrEnum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    PENDING = "pending"


class PropertyType(StrEnum):
    HOUSE = "house"
    APARTMENT = "apartment"
    LAND = "land"
    BUILDING = "building"


class Property(BaseModel):
    """Domain model for a real-estate property."""
    id: UUID = Field(default_factory=uuid.uuid4)
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
    status: PropertyStatus = PropertyStatus.ACTIVE
    owner_ids: list[UUID] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    model_config = {"from_attributes": True}


class PropertyWithOwners(BaseModel):
    property: Property
    owners: list[Client]


# =============================================================================
# Documents
# =============================================================================

class ClientDocumentType(StrEnum):
    CPF = "cpf"
    BIRTH_CERTIFICATE = "birth_certificate"
    MARRIAGE_CERTIFICATE = "marriage_certificate"
    IDENTITY = "identity"
    ADDRESS_PROOF = "address_proof"
    OTHER = "other"


class PropertyDocumentType(StrEnum):
    DEED = "deed"
    REGISTRATION = "registration"
    PROPERTY_TAX = "property_tax"
    LIEN_CERTIFICATE = "lien_certificate"
    BLUEPRINT = "blueprint"
    CONTRACT = "contract"
    OTHER = "other"


class ClientDocument(BaseModel):
    """A file attached to one or more clients (a marriage certificate belongs to both spouses)."""
    id: UUID = Field(default_factory=uuid.uuid4)
    name: str = Field(..., min_length=1)
    type: ClientDocumentType
    storage_key: str = Field(..., description="Blob store key of the file")
    client_ids: list[UUID] = Field(..., min_length=1)
    mime_type: str
    size: int = Field(..., ge=0, description="File size in bytes")
    created_at: datetime = Field(default_factory=utc_now)

    model_config = {"from_attributes": True}


class PropertyDocument(BaseModel):
    """A file attached to a property; contract PDFs carry the contract they came from."""
    id: UUID = Field(default_factory=uuid.uuid4)
    name: str = Field(..., min_length=1)
    type: PropertyDocumentType
    storage_key: str
    property_id: UUID
    mime_type: str
    size: int = Field(..., ge=0)
    contract_id: UUID | None = None
    created_at: datetime = Field(default_factory=utc_now)

    model_config = {"from_attributes": True}


# =============================================================================
# Contracts
# =============================================================================

class ContractTemplateStatus(StrEnum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class ContractStatus(StrEnum):
    DRAFT = "draft"
    FINAL = "final"
    SIGNED = "signed"

    @property
    def locks_content(self) -> bool:
        return self in (ContractStatus.FINAL, ContractStatus.SIGNED)


class ContractTemplate(BaseModel):
    """Contract text with {{placeholder}} tokens."""
    id: UUID = Field(default_factory=uuid.uuid4)
    name: str = Field(..., min_length=1)
    description: str | None = None
    content: str
    status: ContractTemplateStatus = ContractTemplateStatus.ACTIVE
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    model_config = {"from_attributes": True}


class Contract(BaseModel):
    """A contract generated for a client and a property."""
    id: UUID = Field(default_factory=uuid.uuid4)
    name: str = Field(..., min_length=1)
    description: str | None = None
    template_id: UUID | None = None
    property_id: UUID
    client_id: UUID
    notary_office_id: UUID | None = None
    content: str
    status: ContractStatus = ContractStatus.DRAFT
    pdf_storage_key: str | None = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    model_config = {"from_attributes": True}


class ContractWithRelations(BaseModel):
    contract: Contract
    template: ContractTemplate | None = None
    property: Property | None = None
    client: Client | None = None
    notary_office: NotaryOffice | None = None


class TemplateRemoval(BaseModel):
    """Outcome of removing a template: soft-deleted when contracts still reference it."""
    template_id: UUID
    soft_deleted: bool
