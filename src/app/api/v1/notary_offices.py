from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, Query, status
from dependency_injector.wiring import Provide, inject

from src.app.containers import Container
from src.app.core.domain.models import NotaryOfficeStatus
from src.app.core.services.notary_office_service import NotaryOfficeService
from src.client.schemas import (
    CreateNotaryOfficeRequest,
    NotaryOfficeResponse,
    PageResponse,
    UpdateNotaryOfficeRequest,
)
from src.app.api.dependencies import PageParams, get_current_user, get_page_params
from src.app.api.mappers import to_notary_office_response, to_page_response
from src.shared.exceptions import ConflictingEntityFound, EntityNotFound
from src.shared.listing import SortOrder
from src.app.logging import get_logger

router = APIRouter(prefix="/notary-offices", tags=["notary-offices"], dependencies=[Depends(get_current_user)])
logger = get_logger(__name__)


@router.post("/", response_model=NotaryOfficeResponse, status_code=status.HTTP_201_CREATED)
@inject
async def create_notary_office(
    request: CreateNotaryOfficeRequest,
    service: NotaryOfficeService = Depends(Provide[Container.notary_office_service]),
) -> NotaryOfficeResponse:
    try:
        office = await service.create_notary_office(request)
        return to_notary_office_response(office)
    except ConflictingEntityFound as e:
        logger.error(f"Failed to create notary office: {e}")
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.get("/", response_model=PageResponse[NotaryOfficeResponse])
@inject
async def list_notary_offices(
    search: str | None = None,
    office_status: NotaryOfficeStatus | None = Query(default=None, alias="status"),
    sort_by: str | None = None,
    sort_order: SortOrder = SortOrder.ASC,
    paging: PageParams = Depends(get_page_params),
    service: NotaryOfficeService = Depends(Provide[Container.notary_office_service]),
) -> PageResponse[NotaryOfficeResponse]:
    page = await service.list_notary_offices(
        page=paging.page,
        page_size=paging.page_size,
        search=search,
        status=office_status,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return to_page_response(page, to_notary_office_response)


@router.get("/{office_id}", response_model=NotaryOfficeResponse)
@inject
async def get_notary_office(
    office_id: UUID,
    service: NotaryOfficeService = Depends(Provide[Container.notary_office_service]),
) -> NotaryOfficeResponse:
    try:
        return to_notary_office_response(await service.get_notary_office(office_id))
    except EntityNotFound as e:
        logger.error(f"Notary office not found: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.patch("/{office_id}", response_model=NotaryOfficeResponse)
@inject
async def update_notary_office(
    office_id: UUID,
    request: UpdateNotaryOfficeRequest,
    service: NotaryOfficeService = Depends(Provide[Container.notary_office_service]),
) -> NotaryOfficeResponse:
    try:
        office = await service.update_notary_office(office_id, request)
        return to_notary_office_response(office)
    except EntityNotFound as e:
        logger.error(f"Failed to update notary office: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ConflictingEntityFound as e:
        logger.error(f"Failed to update notary office: {e}")
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.delete("/{office_id}", status_code=status.HTTP_204_NO_CONTENT)
@inject
async def remove_notary_office(
    office_id: UUID,
    service: NotaryOfficeService = Depends(Provide[Container.notary_office_service]),
) -> None:
    try:
        await service.remove_notary_office(office_id)
    except EntityNotFound as e:
        logger.error(f"Failed to remove notary office: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
