from src.client.escritura_client import EscrituraClient
from src.client.schemas import (
    CheckDuplicatesRequest,
    CheckPropertyDuplicateRequest,
    CreateClientRequest,
    CreateContractRequest,
    CreateContractTemplateRequest,
    CreateNotaryOfficeRequest,
    CreatePropertyRequest,
    UpdateClientRequest,
    UpdateContractRequest,
    UpdateContractTemplateRequest,
    UpdateNotaryOfficeRequest,
    UpdatePropertyRequest,
)

__all__ = [
    "EscrituraClient",
    "CheckDuplicatesRequest",
    "CheckPropertyDuplicateRequest",
    "CreateClientRequest",
    "CreateContractRequest",
    "CreateContractTemplateRequest",
    "CreateNotaryOfficeRequest",
    "CreatePropertyRequest",
    "UpdateClientRequest",
    "UpdateContractRequest",
    "UpdateContractTemplateRequest",
    "UpdateNotaryOfficeRequest",
    "UpdatePropertyRequest",
]
