"""Escritura HTTP Client for consuming the Escritura API."""
from uuid import UUID
from typing import Any, Optional
from httpx import AsyncClient, Response

from src.client.schemas import (
    CheckDuplicatesRequest,
    CheckPropertyDuplicateRequest,
    ClientDocumentResponse,
    ClientResponse,
    ContractDetailsResponse,
    ContractResponse,
    ContractTemplateResponse,
    CreateClientRequest,
    CreateContractRequest,
    CreateContractTemplateRequest,
    CreateNotaryOfficeRequest,
    CreatePropertyRequest,
    DocumentDownloadResponse,
    DuplicateCheckResponse,
    MissingDocumentsResponse,
    NotaryOfficeResponse,
    PageResponse,
    PlaceholderResponse,
    PropertyDocumentResponse,
    PropertyDuplicateResponse,
    PropertyResponse,
    PropertyWithOwnersResponse,
    TemplateRemovalResponse,
    UpdateClientRequest,
    UpdateContractRequest,
    UpdateContractTemplateRequest,
    UpdateNotaryOfficeRequest,
    UpdatePropertyRequest,
)


def _listing_params(**params: Any) -> dict[str, Any]:
    return {key: value for key, value in params.items() if value is not None}


class EscrituraClient:
    """HTTP client for interacting with the Escritura API."""

    def __init__(self, base_url: str, client: Optional[AsyncClient] = None, token: Optional[str] = None):
        """
        Initialize the Escritura client.

        Args:
            base_url: Base URL of the Escritura API (e.g., "http://localhost:8000")
            client: Optional httpx.AsyncClient instance. If not provided, a new one will be created.
            token: Bearer token sent with every request.
        """
        self.base_url = base_url.rstrip("/")
        self._client = client
        self._owns_client = client is None
        self._headers = {"Authorization": f"Bearer {token}"} if token else {}

    async def __aenter__(self):
        """Async context manager entry."""
        if self._owns_client:
            self._client = AsyncClient(base_url=self.base_url)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        if self._owns_client and self._client:
            await self._client.aclose()

    @property
    def client(self) -> AsyncClient:
        """Get the underlying httpx client."""
        if self._client is None:
            raise RuntimeError("Client not initialized. Use async context manager.")
        return self._client

    async def _request(self, method: str, path: str, **kwargs: Any) -> Response:
        response: Response = await self.client.request(method, path, headers=self._headers, **kwargs)
        response.raise_for_status()
        return response

    # =========================================================================
    # Clients
    # =========================================================================

    async def create_client(self, request: CreateClientRequest) -> ClientResponse:
        """
        Create a new client.

        Raises:
            httpx.HTTPStatusError: If the request fails (400 on an invalid spouse)
        """
        response = await self._request(
            "POST", "/api/v1/clients/", json=request.model_dump(mode="json", exclude_unset=True)
        )
        return ClientResponse(**response.json())

    async def get_client(self, client_id: UUID) -> ClientResponse:
        """
        Get a client by ID.

        Raises:
            httpx.HTTPStatusError: If the request fails (e.g., 404 if not found)
        """
        response = await self._request("GET", f"/api/v1/clients/{client_id}")
        return ClientResponse(**response.json())

    async def list_clients(
        self,
        page: int | None = None,
        page_size: int | None = None,
        search: str | None = None,
        status: str | None = None,
        sort_by: str | None = None,
        sort_order: str | None = None,
    ) -> PageResponse[ClientResponse]:
        params = _listing_params(
            page=page, page_size=page_size, search=search, status=status, sort_by=sort_by, sort_order=sort_order
        )
        response = await self._request("GET", "/api/v1/clients/", params=params)
        return PageResponse[ClientResponse](**response.json())

    async def update_client(self, client_id: UUID, request: UpdateClientRequest) -> ClientResponse:
        """
        Update a client. Only the fields set on the request are sent.

        Raises:
            httpx.HTTPStatusError: If the request fails
        """
        response = await self._request(
            "PATCH",
            f"/api/v1/clients/{client_id}",
            json=request.model_dump(mode="json", exclude_unset=True),
        )
        return ClientResponse(**response.json())

    async def delete_client(self, client_id: UUID) -> ClientResponse:
        response = await self._request("DELETE", f"/api/v1/clients/{client_id}")
        return ClientResponse(**response.json())

    async def search_clients(self, query: str) -> list[ClientResponse]:
        response = await self._request("GET", "/api/v1/clients/search", params={"query": query})
        return [ClientResponse(**client) for client in response.json()]

    async def search_spouse_candidates(
        self, query: str | None = None, exclude_id: UUID | None = None
    ) -> list[ClientResponse]:
        params = _listing_params(query=query, exclude_id=str(exclude_id) if exclude_id else None)
        response = await self._request("GET", "/api/v1/clients/spouse-candidates", params=params)
        return [ClientResponse(**client) for client in response.json()]

    async def get_clients_by_ids(self, client_ids: list[UUID]) -> list[ClientResponse]:
        response = await self._request(
            "POST", "/api/v1/clients/by-ids", json={"ids": [str(client_id) for client_id in client_ids]}
        )
        return [ClientResponse(**client) for client in response.json()]

    async def check_duplicates(self, request: CheckDuplicatesRequest) -> DuplicateCheckResponse:
        response = await self._request(
            "POST", "/api/v1/clients/check-duplicates", json=request.model_dump(mode="json")
        )
        return DuplicateCheckResponse(**response.json())

    # =========================================================================
    # Client documents
    # =========================================================================

    async def upload_document(
        self,
        client_id: UUID,
        document_type: str,
        filename: str,
        content: bytes,
        mime_type: str = "application/octet-stream",
        name: str | None = None,
    ) -> ClientDocumentResponse:
        """
        Upload a document for a client as multipart form data.

        Raises:
            httpx.HTTPStatusError: If the request fails
        """
        data = _listing_params(type=document_type, name=name)
        response = await self._request(
            "POST",
            f"/api/v1/clients/{client_id}/documents/",
            data=data,
            files={"file": (filename, content, mime_type)},
        )
        return ClientDocumentResponse(**response.json())

    async def get_document(self, client_id: UUID, document_id: UUID) -> ClientDocumentResponse:
        response = await self._request("GET", f"/api/v1/clients/{client_id}/documents/{document_id}")
        return ClientDocumentResponse(**response.json())

    async def list_documents(self, client_id: UUID) -> list[ClientDocumentResponse]:
        response = await self._request("GET", f"/api/v1/clients/{client_id}/documents/")
        return [ClientDocumentResponse(**doc) for doc in response.json()]

    async def get_missing_documents(self, client_id: UUID) -> MissingDocumentsResponse:
        response = await self._request("GET", f"/api/v1/clients/{client_id}/documents/missing-required")
        return MissingDocumentsResponse(**response.json())

    async def get_document_download_url(self, client_id: UUID, document_id: UUID) -> DocumentDownloadResponse:
        """
        Get a pre-signed URL for downloading document content.

        Raises:
            httpx.HTTPStatusError: If the request fails
        """
        response = await self._request(
            "GET", f"/api/v1/clients/{client_id}/documents/{document_id}/download"
        )
        return DocumentDownloadResponse(**response.json())

    async def remove_document(self, client_id: UUID, document_id: UUID) -> None:
        await self._request("DELETE", f"/api/v1/clients/{client_id}/documents/{document_id}")

    # =========================================================================
    # Notary offices
    # =========================================================================

    async def create_notary_office(self, request: CreateNotaryOfficeRequest) -> NotaryOfficeResponse:
        """
        Raises:
            httpx.HTTPStatusError: If the request fails (409 when the code is taken)
        """
        response = await self._request("POST", "/api/v1/notary-offices/", json=request.model_dump(mode="json"))
        return NotaryOfficeResponse(**response.json())

    async def get_notary_office(self, office_id: UUID) -> NotaryOfficeResponse:
        response = await self._request("GET", f"/api/v1/notary-offices/{office_id}")
        return NotaryOfficeResponse(**response.json())

    async def list_notary_offices(
        self,
        page: int | None = None,
        page_size: int | None = None,
        search: str | None = None,
        status: str | None = None,
        sort_by: str | None = None,
        sort_order: str | None = None,
    ) -> PageResponse[NotaryOfficeResponse]:
        params = _listing_params(
            page=page, page_size=page_size, search=search, status=status, sort_by=sort_by, sort_order=sort_order
        )
        response = await self._request("GET", "/api/v1/notary-offices/", params=params)
        return PageResponse[NotaryOfficeResponse](**response.json())

    async def update_notary_office(self, office_id: UUID, request: UpdateNotaryOfficeRequest) -> NotaryOfficeResponse:
        response = await self._request(
            "PATCH",
            f"/api/v1/notary-offices/{office_id}",
            json=request.model_dump(mode="json", exclude_unset=True),
        )
        return NotaryOfficeResponse(**response.json())

    async def remove_notary_office(self, office_id: UUID) -> None:
        await self._request("DELETE", f"/api/v1/notary-offices/{office_id}")

    # =========================================================================
    # Properties
    # =========================================================================

    async def create_property(self, request: CreatePropertyRequest) -> PropertyResponse:
        response = await self._request("POST", "/api/v1/properties/", json=request.model_dump(mode="json"))
        return PropertyResponse(**response.json())

    async def get_property(self, property_id: UUID) -> PropertyResponse:
        response = await self._request("GET", f"/api/v1/properties/{property_id}")
        return PropertyResponse(**response.json())

    async def get_property_with_owners(self, property_id: UUID) -> PropertyWithOwnersResponse:
        response = await self._request("GET", f"/api/v1/properties/{property_id}/owners")
        return PropertyWithOwnersResponse(**response.json())

    async def list_properties(
        self,
        page: int | None = None,
        page_size: int | None = None,
        search: str | None = None,
        status: str | None = None,
        property_type: str | None = None,
        city: str | None = None,
        sort_by: str | None = None,
        sort_order: str | None = None,
    ) -> PageResponse[PropertyResponse]:
        params = _listing_params(
            page=page,
            page_size=page_size,
            search=search,
            status=status,
            type=property_type,
            city=city,
            sort_by=sort_by,
            sort_order=sort_order,
        )
        response = await self._request("GET", "/api/v1/properties/", params=params)
        return PageResponse[PropertyResponse](**response.json())

    async def search_properties(self, query: str) -> list[PropertyResponse]:
        response = await self._request("GET", "/api/v1/properties/search", params={"query": query})
        return [PropertyResponse(**prop) for prop in response.json()]

    async def list_properties_by_client(self, client_id: UUID) -> list[PropertyResponse]:
        response = await self._request("GET", f"/api/v1/properties/by-client/{client_id}")
        return [PropertyResponse(**prop) for prop in response.json()]

    async def check_property_duplicate(self, request: CheckPropertyDuplicateRequest) -> PropertyDuplicateResponse:
        response = await self._request(
            "POST", "/api/v1/properties/check-duplicates", json=request.model_dump(mode="json")
        )
        return PropertyDuplicateResponse(**response.json())

    async def update_property(self, property_id: UUID, request: UpdatePropertyRequest) -> PropertyResponse:
        response = await self._request(
            "PATCH",
            f"/api/v1/properties/{property_id}",
            json=request.model_dump(mode="json", exclude_unset=True),
        )
        return PropertyResponse(**response.json())

    async def delete_property(self, property_id: UUID) -> PropertyResponse:
        response = await self._request("DELETE", f"/api/v1/properties/{property_id}")
        return PropertyResponse(**response.json())

    # =========================================================================
    # Property documents
    # =========================================================================

    async def upload_property_document(
        self,
        property_id: UUID,
        document_type: str,
        filename: str,
        content: bytes,
        mime_type: str = "application/octet-stream",
        name: str | None = None,
    ) -> PropertyDocumentResponse:
        data = _listing_params(type=document_type, name=name)
        response = await self._request(
            "POST",
            f"/api/v1/properties/{property_id}/documents/",
            data=data,
            files={"file": (filename, content, mime_type)},
        )
        return PropertyDocumentResponse(**response.json())

    async def list_property_documents(self, property_id: UUID) -> list[PropertyDocumentResponse]:
        response = await self._request("GET", f"/api/v1/properties/{property_id}/documents/")
        return [PropertyDocumentResponse(**doc) for doc in response.json()]

    async def get_property_document_download_url(
        self, property_id: UUID, document_id: UUID
    ) -> DocumentDownloadResponse:
        response = await self._request(
            "GET", f"/api/v1/properties/{property_id}/documents/{document_id}/download"
        )
        return DocumentDownloadResponse(**response.json())

    async def remove_property_document(self, property_id: UUID, document_id: UUID) -> None:
        await self._request("DELETE", f"/api/v1/properties/{property_id}/documents/{document_id}")

    # =========================================================================
    # Contract templates
    # =========================================================================

    async def create_template(self, request: CreateContractTemplateRequest) -> ContractTemplateResponse:
        response = await self._request(
            "POST", "/api/v1/contract-templates/", json=request.model_dump(mode="json")
        )
        return ContractTemplateResponse(**response.json())

    async def get_template(self, template_id: UUID) -> ContractTemplateResponse:
        response = await self._request("GET", f"/api/v1/contract-templates/{template_id}")
        return ContractTemplateResponse(**response.json())

    async def list_templates(
        self,
        page: int | None = None,
        page_size: int | None = None,
        search: str | None = None,
        status: str | None = None,
    ) -> PageResponse[ContractTemplateResponse]:
        params = _listing_params(page=page, page_size=page_size, search=search, status=status)
        response = await self._request("GET", "/api/v1/contract-templates/", params=params)
        return PageResponse[ContractTemplateResponse](**response.json())

    async def list_active_templates(self) -> list[ContractTemplateResponse]:
        response = await self._request("GET", "/api/v1/contract-templates/active")
        return [ContractTemplateResponse(**template) for template in response.json()]

    async def list_placeholders(self) -> list[PlaceholderResponse]:
        response = await self._request("GET", "/api/v1/contract-templates/placeholders")
        return [PlaceholderResponse(**placeholder) for placeholder in response.json()]

    async def update_template(
        self, template_id: UUID, request: UpdateContractTemplateRequest
    ) -> ContractTemplateResponse:
        response = await self._request(
            "PATCH",
            f"/api/v1/contract-templates/{template_id}",
            json=request.model_dump(mode="json", exclude_unset=True),
        )
        return ContractTemplateResponse(**response.json())

    async def remove_template(self, template_id: UUID) -> TemplateRemovalResponse:
        response = await self._request("DELETE", f"/api/v1/contract-templates/{template_id}")
        return TemplateRemovalResponse(**response.json())

    # =========================================================================
    # Contracts
    # =========================================================================

    async def create_contract(self, request: CreateContractRequest) -> ContractResponse:
        """
        Create a contract; the template is rendered when no content is given.

        Raises:
            httpx.HTTPStatusError: If the request fails (404 for unknown references)
        """
        response = await self._request(
            "POST", "/api/v1/contracts/", json=request.model_dump(mode="json", exclude_unset=True)
        )
        return ContractResponse(**response.json())

    async def get_contract(self, contract_id: UUID) -> ContractResponse:
        response = await self._request("GET", f"/api/v1/contracts/{contract_id}")
        return ContractResponse(**response.json())

    async def get_contract_details(self, contract_id: UUID) -> ContractDetailsResponse:
        response = await self._request("GET", f"/api/v1/contracts/{contract_id}/details")
        return ContractDetailsResponse(**response.json())

    async def list_contracts(
        self,
        page: int | None = None,
        page_size: int | None = None,
        search: str | None = None,
        status: str | None = None,
    ) -> PageResponse[ContractResponse]:
        params = _listing_params(page=page, page_size=page_size, search=search, status=status)
        response = await self._request("GET", "/api/v1/contracts/", params=params)
        return PageResponse[ContractResponse](**response.json())

    async def list_contracts_by_property(self, property_id: UUID) -> list[ContractResponse]:
        response = await self._request("GET", f"/api/v1/contracts/by-property/{property_id}")
        return [ContractResponse(**contract) for contract in response.json()]

    async def list_contracts_by_client(self, client_id: UUID) -> list[ContractResponse]:
        response = await self._request("GET", f"/api/v1/contracts/by-client/{client_id}")
        return [ContractResponse(**contract) for contract in response.json()]

    async def update_contract(self, contract_id: UUID, request: UpdateContractRequest) -> ContractResponse:
        """
        Raises:
            httpx.HTTPStatusError: If the request fails (400 when editing content of a final or signed contract)
        """
        response = await self._request(
            "PATCH",
            f"/api/v1/contracts/{contract_id}",
            json=request.model_dump(mode="json", exclude_unset=True),
        )
        return ContractResponse(**response.json())

    async def remove_contract(self, contract_id: UUID) -> None:
        await self._request("DELETE", f"/api/v1/contracts/{contract_id}")

    async def attach_contract_pdf(self, contract_id: UUID, content: bytes, filename: str = "contract.pdf") -> ContractResponse:
        response = await self._request(
            "PUT",
            f"/api/v1/contracts/{contract_id}/pdf",
            files={"file": (filename, content, "application/pdf")},
        )
        return ContractResponse(**response.json())
