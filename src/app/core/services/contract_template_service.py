import logging
from uuid import UUID, uuid4
from datetime import datetime, UTC

from src.app.core.domain.models import ContractTemplate, ContractTemplateStatus, TemplateRemoval
from src.app.core.services.placeholders import PLACEHOLDERS, Placeholder
from src.app.infrastructure.contract_repository import ContractRepository, ContractTemplateRepository
from src.client.schemas import CreateContractTemplateRequest, UpdateContractTemplateRequest
from src.shared.database.unit_of_work import UnitOfWork
from src.shared.exceptions import EntityNotFound
from src.shared.listing import Page, SortOrder, filter_by_search, paginate, sort_items

logger = logging.getLogger(__name__)

TEMPLATE_SEARCH_FIELDS = ("name", "description")


class ContractTemplateService:
    """Service for handling ContractTemplate business logic."""

    def __init__(
        self,
        repository: ContractTemplateRepository,
        contract_repository: ContractRepository,
        unit_of_work: UnitOfWork,
    ):
        self.repository = repository
        self.contract_repository = contract_repository
        self.unit_of_work = unit_of_work

    async def create_template(self, request: CreateContractTemplateRequest) -> ContractTemplate:
        now = datetime.now(UTC)
        template = ContractTemplate(id=uuid4(), created_at=now, updated_at=now, **request.model_dump())
        async with self.unit_of_work:
            self.unit_of_work.add(template)
        return template

    async def update_template(self, template_id: UUID, request: UpdateContractTemplateRequest) -> ContractTemplate:
        """Only the fields set on the request change."""
        template = await self.get_template(template_id)
        changes = request.model_dump(exclude_unset=True)
        updated = template.model_copy(update={**changes, "updated_at": datetime.now(UTC)})
        async with self.unit_of_work:
            await self.unit_of_work.update(updated)
        return updated

    async def remove_template(self, template_id: UUID) -> TemplateRemoval:
        """
        Remove a template.

        A template still referenced by contracts is deactivated instead of deleted,
        so those contracts keep a valid reference.
        """
        template = await self.get_template(template_id)
        in_use = await self.contract_repository.count_by_template_id(template_id)

        async with self.unit_of_work:
            if in_use:
                await self.unit_of_work.update(template.model_copy(update={
                    "status": ContractTemplateStatus.INACTIVE,
                    "updated_at": datetime.now(UTC),
                }))
            else:
                await self.unit_of_work.delete(template)

        logger.info(
            "%s template %s (%d contracts reference it)",
            "Deactivated" if in_use else "Deleted", template_id, in_use,
        )
        return TemplateRemoval(template_id=template_id, soft_deleted=bool(in_use))

    async def get_template(self, template_id: UUID) -> ContractTemplate:
        template = await self.repository.get_by_id(template_id)
        if not template:
            raise EntityNotFound("ContractTemplate", template_id)
        return template

    async def list_templates(
        self,
        page: int | None = None,
        page_size: int | None = None,
        search: str | None = None,
        status: ContractTemplateStatus | None = None,
        sort_by: str | None = None,
        sort_order: SortOrder = SortOrder.ASC,
    ) -> Page[ContractTemplate]:
        templates = await self.repository.list_all()
        if status is not None:
            templates = [template for template in templates if template.status == status]
        templates = filter_by_search(templates, search, TEMPLATE_SEARCH_FIELDS)
        return paginate(sort_items(templates, sort_by, sort_order), page, page_size)

    async def list_active_templates(self) -> list[ContractTemplate]:
        return await self.repository.get_active()

    @staticmethod
    def list_placeholders() -> list[Placeholder]:
        return list(PLACEHOLDERS)
