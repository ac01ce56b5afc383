from uuid import UUID
from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status
from dependency_injector.wiring import Provide, inject

from src.app.containers import Container
from src.app.core.domain.models import ContractStatus
from src.app.core.services.contract_service import ContractService
from src.client.schemas import (
    ContractDetailsResponse,
    ContractResponse,
    CreateContractRequest,
    PageResponse,
    UpdateContractRequest,
)
from src.app.api.dependencies import PageParams, get_current_user, get_page_params
from src.app.api.mappers import to_contract_details_response, to_contract_response, to_page_response
from src.shared.exceptions import DomainValidationError, EntityNotFound
from src.shared.listing import SortOrder
from src.app.logging import get_logger

router = APIRouter(prefix="/contracts", tags=["contracts"], dependencies=[Depends(get_current_user)])
logger = get_logger(__name__)


@router.post("/", response_model=ContractResponse, status_code=status.HTTP_201_CREATED)
@inject
async def create_contract(
    request: CreateContractRequest,
    service: ContractService = Depends(Provide[Container.contract_service]),
) -> ContractResponse:
    """
    Create a contract.

    Without ``content`` the template is rendered: every known ``{{placeholder}}``
    is replaced with the client, property and notary office data.
    """
    try:
        contract = await service.create_contract(request)
        return to_contract_response(contract)
    except EntityNotFound as e:
        logger.error(f"Failed to create contract: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/", response_model=PageResponse[ContractResponse])
@inject
async def list_contracts(
    search: str | None = None,
    contract_status: ContractStatus | None = Query(default=None, alias="status"),
    sort_by: str | None = None,
    sort_order: SortOrder = SortOrder.ASC,
    paging: PageParams = Depends(get_page_params),
    service: ContractService = Depends(Provide[Container.contract_service]),
) -> PageResponse[ContractResponse]:
    page = await service.list_contracts(
        page=paging.page,
        page_size=paging.page_size,
        search=search,
        status=contract_status,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return to_page_response(page, to_contract_response)


@router.get("/by-property/{property_id}", response_model=list[ContractResponse])
@inject
async def list_contracts_by_property(
    property_id: UUID,
    service: ContractService = Depends(Provide[Container.contract_service]),
) -> list[ContractResponse]:
    contracts = await service.list_by_property(property_id)
    return [to_contract_response(contract) for contract in contracts]


@router.get("/by-client/{client_id}", response_model=list[ContractResponse])
@inject
async def list_contracts_by_client(
    client_id: UUID,
    service: ContractService = Depends(Provide[Container.contract_service]),
) -> list[ContractResponse]:
    """Final and signed contracts of the client, newest first."""
    contracts = await service.list_by_client(client_id)
    return [to_contract_response(contract) for contract in contracts]


@router.get("/{contract_id}", response_model=ContractResponse)
@inject
async def get_contract(
    contract_id: UUID,
    service: ContractService = Depends(Provide[Container.contract_service]),
) -> ContractResponse:
    try:
        return to_contract_response(await service.get_contract(contract_id))
    except EntityNotFound as e:
        logger.error(f"Contract not found: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/{contract_id}/details", response_model=ContractDetailsResponse)
@inject
async def get_contract_details(
    contract_id: UUID,
    service: ContractService = Depends(Provide[Container.contract_service]),
) -> ContractDetailsResponse:
    try:
        return to_contract_details_response(await service.get_contract_with_relations(contract_id))
    except EntityNotFound as e:
        logger.error(f"Contract not found: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.patch("/{contract_id}", response_model=ContractResponse)
@inject
async def update_contract(
    contract_id: UUID,
    request: UpdateContractRequest,
    service: ContractService = Depends(Provide[Container.contract_service]),
) -> ContractResponse:
    try:
        return to_contract_response(await service.update_contract(contract_id, request))
    except EntityNotFound as e:
        logger.error(f"Failed to update contract: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except DomainValidationError as e:
        logger.error(f"Rejected contract update: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("/{contract_id}", status_code=status.HTTP_204_NO_CONTENT)
@inject
async def remove_contract(
    contract_id: UUID,
    service: ContractService = Depends(Provide[Container.contract_service]),
) -> None:
    try:
        await service.remove_contract(contract_id)
    except EntityNotFound as e:
        logger.error(f"Failed to remove contract: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except RuntimeError as e:
        logger.error(f"Failed to delete stored PDF of contract {contract_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete contract PDF",
        )


@router.put("/{contract_id}/pdf", response_model=ContractResponse)
@inject
async def attach_contract_pdf(
    contract_id: UUID,
    file: UploadFile = File(...),
    service: ContractService = Depends(Provide[Container.contract_service]),
) -> ContractResponse:
    """Store the contract PDF and file it under the property's documents."""
    content = await file.read()
    try:
        return to_contract_response(await service.attach_pdf(contract_id, content))
    except EntityNotFound as e:
        logger.error(f"Failed to attach PDF: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except RuntimeError as e:
        logger.error(f"Failed to store PDF of contract {contract_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to store contract PDF",
        )
