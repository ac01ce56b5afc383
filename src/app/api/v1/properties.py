from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, Query, status
from dependency_injector.wiring import Provide, inject

from src.app.containers import Container
from src.app.core.domain.models import PropertyStatus, PropertyType
from src.app.core.services.property_service import PropertyService
from src.client.schemas import (
    CheckPropertyDuplicateRequest,
    CreatePropertyRequest,
    PageResponse,
    PropertyDuplicateResponse,
    PropertyResponse,
    PropertyWithOwnersResponse,
    UpdatePropertyRequest,
)
from src.app.api.dependencies import PageParams, get_current_user, get_page_params
from src.app.api.mappers import to_page_response, to_property_response, to_property_with_owners_response
from src.shared.exceptions import EntityNotFound
from src.shared.listing import SortOrder
from src.app.logging import get_logger

router = APIRouter(prefix="/properties", tags=["properties"], dependencies=[Depends(get_current_user)])
logger = get_logger(__name__)


@router.post("/", response_model=PropertyResponse, status_code=status.HTTP_201_CREATED)
@inject
async def create_property(
    request: CreatePropertyRequest,
    service: PropertyService = Depends(Provide[Container.property_service]),
) -> PropertyResponse:
    prop = await service.create_property(request)
    return to_property_response(prop)


@router.get("/", response_model=PageResponse[PropertyResponse])
@inject
async def list_properties(
    search: str | None = None,
    property_status: PropertyStatus | None = Query(default=None, alias="status"),
    property_type: PropertyType | None = Query(default=None, alias="type"),
    city: str | None = None,
    sort_by: str | None = None,
    sort_order: SortOrder = SortOrder.ASC,
    paging: PageParams = Depends(get_page_params),
    service: PropertyService = Depends(Provide[Container.property_service]),
) -> PageResponse[PropertyResponse]:
    """List properties filtered by status, type and city, with search over the address."""
    page = await service.list_properties(
        page=paging.page,
        page_size=paging.page_size,
        search=search,
        status=property_status,
        type=property_type,
        city=city,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return to_page_response(page, to_property_response)


@router.get("/search", response_model=list[PropertyResponse])
@inject
async def search_properties(
    query: str = Query(..., min_length=1),
    service: PropertyService = Depends(Provide[Container.property_service]),
) -> list[PropertyResponse]:
    properties = await service.search_properties(query)
    return [to_property_response(prop) for prop in properties]


@router.post("/check-duplicates", response_model=PropertyDuplicateResponse)
@inject
async def check_duplicate(
    request: CheckPropertyDuplicateRequest,
    service: PropertyService = Depends(Provide[Container.property_service]),
) -> PropertyDuplicateResponse:
    """A property is a duplicate when street, number and zip code match another one."""
    is_duplicate = await service.check_duplicate(
        street=request.street,
        number=request.number,
        zip_code=request.zip_code,
        exclude_id=request.exclude_id,
    )
    return PropertyDuplicateResponse(is_duplicate=is_duplicate)


@router.get("/by-client/{client_id}", response_model=list[PropertyResponse])
@inject
async def list_properties_by_client(
    client_id: UUID,
    service: PropertyService = Depends(Provide[Container.property_service]),
) -> list[PropertyResponse]:
    """Non-inactive properties owned by the client."""
    properties = await service.list_by_client(client_id)
    return [to_property_response(prop) for prop in properties]


@router.get("/{property_id}", response_model=PropertyResponse)
@inject
async def get_property(
    property_id: UUID,
    service: PropertyService = Depends(Provide[Container.property_service]),
) -> PropertyResponse:
    try:
        return to_property_response(await service.get_property(property_id))
    except EntityNotFound as e:
        logger.error(f"Property not found: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/{property_id}/owners", response_model=PropertyWithOwnersResponse)
@inject
async def get_property_with_owners(
    property_id: UUID,
    service: PropertyService = Depends(Provide[Container.property_service]),
) -> PropertyWithOwnersResponse:
    try:
        return to_property_with_owners_response(await service.get_property_with_owners(property_id))
    except EntityNotFound as e:
        logger.error(f"Property not found: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.patch("/{property_id}", response_model=PropertyResponse)
@inject
async def update_property(
    property_id: UUID,
    request: UpdatePropertyRequest,
    service: PropertyService = Depends(Provide[Container.property_service]),
) -> PropertyResponse:
    try:
        return to_property_response(await service.update_property(property_id, request))
    except EntityNotFound as e:
        logger.error(f"Failed to update property: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/{property_id}", response_model=PropertyResponse)
@inject
async def delete_property(
    property_id: UUID,
    service: PropertyService = Depends(Provide[Container.property_service]),
) -> PropertyResponse:
    """Soft delete a property (status becomes inactive)."""
    try:
        return to_property_response(await service.delete_property(property_id))
    except EntityNotFound as e:
        logger.error(f"Failed to delete property: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
