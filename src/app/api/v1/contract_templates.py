from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, Query, status
from dependency_injector.wiring import Provide, inject

from src.app.containers import Container
from src.app.core.domain.models import ContractTemplateStatus
from src.app.core.services.contract_template_service import ContractTemplateService
from src.client.schemas import (
    ContractTemplateResponse,
    CreateContractTemplateRequest,
    PageResponse,
    PlaceholderResponse,
    TemplateRemovalResponse,
    UpdateContractTemplateRequest,
)
from src.app.api.dependencies import PageParams, get_current_user, get_page_params
from src.app.api.mappers import to_contract_template_response, to_page_response
from src.shared.exceptions import EntityNotFound
from src.shared.listing import SortOrder
from src.app.logging import get_logger

router = APIRouter(prefix="/contract-templates", tags=["contract-templates"], dependencies=[Depends(get_current_user)])
logger = get_logger(__name__)


@router.post("/", response_model=ContractTemplateResponse, status_code=status.HTTP_201_CREATED)
@inject
async def create_template(
    request: CreateContractTemplateRequest,
    service: ContractTemplateService = Depends(Provide[Container.contract_template_service]),
) -> ContractTemplateResponse:
    template = await service.create_template(request)
    return to_contract_template_response(template)


@router.get("/", response_model=PageResponse[ContractTemplateResponse])
@inject
async def list_templates(
    search: str | None = None,
    template_status: ContractTemplateStatus | None = Query(default=None, alias="status"),
    sort_by: str | None = None,
    sort_order: SortOrder = SortOrder.ASC,
    paging: PageParams = Depends(get_page_params),
    service: ContractTemplateService = Depends(Provide[Container.contract_template_service]),
) -> PageResponse[ContractTemplateResponse]:
    page = await service.list_templates(
        page=paging.page,
        page_size=paging.page_size,
        search=search,
        status=template_status,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return to_page_response(page, to_contract_template_response)


@router.get("/active", response_model=list[ContractTemplateResponse])
@inject
async def list_active_templates(
    service: ContractTemplateService = Depends(Provide[Container.contract_template_service]),
) -> list[ContractTemplateResponse]:
    """Active templates ordered by name, for picking when generating a contract."""
    templates = await service.list_active_templates()
    return [to_contract_template_response(template) for template in templates]


@router.get("/placeholders", response_model=list[PlaceholderResponse])
async def list_placeholders() -> list[PlaceholderResponse]:
    """The ``{{key}}`` tokens a template may use."""
    return [
        PlaceholderResponse.model_validate(placeholder)
        for placeholder in ContractTemplateService.list_placeholders()
    ]


@router.get("/{template_id}", response_model=ContractTemplateResponse)
@inject
async def get_template(
    template_id: UUID,
    service: ContractTemplateService = Depends(Provide[Container.contract_template_service]),
) -> ContractTemplateResponse:
    try:
        return to_contract_template_response(await service.get_template(template_id))
    except EntityNotFound as e:
        logger.error(f"Contract template not found: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.patch("/{template_id}", response_model=ContractTemplateResponse)
@inject
async def update_template(
    template_id: UUID,
    request: UpdateContractTemplateRequest,
    service: ContractTemplateService = Depends(Provide[Container.contract_template_service]),
) -> ContractTemplateResponse:
    try:
        return to_contract_template_response(await service.update_template(template_id, request))
    except EntityNotFound as e:
        logger.error(f"Failed to update contract template: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/{template_id}", response_model=TemplateRemovalResponse)
@inject
async def remove_template(
    template_id: UUID,
    service: ContractTemplateService = Depends(Provide[Container.contract_template_service]),
) -> TemplateRemovalResponse:
    """
    Remove a template.

    Templates referenced by contracts are deactivated; ``soft_deleted`` tells
    which of the two happened.
    """
    try:
        removal = await service.remove_template(template_id)
        return TemplateRemovalResponse.model_validate(removal)
    except EntityNotFound as e:
        logger.error(f"Failed to remove contract template: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
