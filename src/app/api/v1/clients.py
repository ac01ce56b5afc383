from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, Query, status
from dependency_injector.wiring import Provide, inject

from src.app.containers import Container
from src.app.core.domain.models import ClientStatus
from src.app.core.services.client_service import ClientService
from src.client.schemas import (
    CheckDuplicatesRequest,
    ClientIdsRequest,
    ClientResponse,
    CreateClientRequest,
    DuplicateCheckResponse,
    PageResponse,
    UpdateClientRequest,
)
from src.app.api.dependencies import PageParams, get_current_user, get_page_params
from src.app.api.mappers import to_client_response, to_duplicate_check_response, to_page_response
from src.shared.exceptions import EntityNotFound, DomainValidationError
from src.shared.listing import SortOrder
from src.app.logging import get_logger

router = APIRouter(prefix="/clients", tags=["clients"], dependencies=[Depends(get_current_user)])
logger = get_logger(__name__)


@router.post("/", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
@inject
async def create_client(
    request: CreateClientRequest,
    service: ClientService = Depends(Provide[Container.client_service]),
) -> ClientResponse:
    """
    Create a new client.

    When ``spouse_id`` names an existing client, that client is linked back and
    takes over the new client's marital status and property regime.
    """
    try:
        client = await service.create_client(request)
        return to_client_response(client)
    except DomainValidationError as e:
        logger.error(f"Failed to create client due to validation error: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/", response_model=PageResponse[ClientResponse])
@inject
async def list_clients(
    search: str | None = None,
    client_status: ClientStatus | None = Query(default=None, alias="status"),
    sort_by: str | None = None,
    sort_order: SortOrder = SortOrder.ASC,
    paging: PageParams = Depends(get_page_params),
    service: ClientService = Depends(Provide[Container.client_service]),
) -> PageResponse[ClientResponse]:
    """List clients with optional search over name, email, tax ID and phone digits."""
    page = await service.list_clients(
        page=paging.page,
        page_size=paging.page_size,
        search=search,
        status=client_status,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return to_page_response(page, to_client_response)


@router.get("/search", response_model=list[ClientResponse])
@inject
async def search_clients(
    query: str = Query(..., min_length=1),
    service: ClientService = Depends(Provide[Container.client_service]),
) -> list[ClientResponse]:
    clients = await service.search_clients(query)
    return [to_client_response(client) for client in clients]


@router.get("/spouse-candidates", response_model=list[ClientResponse])
@inject
async def search_spouse_candidates(
    query: str | None = None,
    exclude_id: UUID | None = None,
    service: ClientService = Depends(Provide[Container.client_service]),
) -> list[ClientResponse]:
    """Active or pending clients that can be picked as a spouse, excluding ``exclude_id``."""
    clients = await service.search_spouse_candidates(query=query, exclude_id=exclude_id)
    return [to_client_response(client) for client in clients]


@router.post("/by-ids", response_model=list[ClientResponse])
@inject
async def get_clients_by_ids(
    request: ClientIdsRequest,
    service: ClientService = Depends(Provide[Container.client_service]),
) -> list[ClientResponse]:
    """Clients for the given IDs; unknown IDs are skipped."""
    clients = await service.get_clients_by_ids(request.ids)
    return [to_client_response(client) for client in clients]


@router.post("/check-duplicates", response_model=DuplicateCheckResponse)
@inject
async def check_duplicates(
    request: CheckDuplicatesRequest,
    service: ClientService = Depends(Provide[Container.client_service]),
) -> DuplicateCheckResponse:
    """Report which of name, email, phone and tax ID are already used by another client."""
    duplicates = await service.check_duplicates(
        name=request.name,
        email=request.email,
        tax_id=request.tax_id,
        phone=request.phone,
        exclude_id=request.exclude_id,
    )
    return to_duplicate_check_response(duplicates)


@router.get("/{client_id}", response_model=ClientResponse)
@inject
async def get_client(
    client_id: UUID,
    service: ClientService = Depends(Provide[Container.client_service]),
) -> ClientResponse:
    """Get a client by ID."""
    try:
        client = await service.get_client(client_id)
        return to_client_response(client)
    except EntityNotFound as e:
        logger.error(f"Client not found: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.patch("/{client_id}", response_model=ClientResponse)
@inject
async def update_client(
    client_id: UUID,
    request: UpdateClientRequest,
    service: ClientService = Depends(Provide[Container.client_service]),
) -> ClientResponse:
    """
    Update a client.

    Spouse changes are mirrored: the new spouse is linked back, stale partners
    are unlinked, and ``remove_spouse`` unlinks both sides.
    """
    try:
        client = await service.update_client(client_id, request)
        return to_client_response(client)
    except EntityNotFound as e:
        logger.error(f"Failed to update client: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except DomainValidationError as e:
        logger.error(f"Failed to update client due to validation error: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("/{client_id}", response_model=ClientResponse)
@inject
async def delete_client(
    client_id: UUID,
    service: ClientService = Depends(Provide[Container.client_service]),
) -> ClientResponse:
    """Soft delete a client (status becomes inactive)."""
    try:
        client = await service.delete_client(client_id)
        return to_client_response(client)
    except EntityNotFound as e:
        logger.error(f"Failed to delete client: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
