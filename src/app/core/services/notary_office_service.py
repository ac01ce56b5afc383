import logging
from uuid import UUID, uuid4
from datetime import datetime, UTC

from sqlalchemy.exc import IntegrityError

from src.app.core.domain.models import NotaryOffice, NotaryOfficeStatus
from src.app.infrastructure.notary_office_repository import NotaryOfficeRepository
from src.client.schemas import CreateNotaryOfficeRequest, UpdateNotaryOfficeRequest
from src.shared.database.unit_of_work import UnitOfWork
from src.shared.exceptions import ConflictingEntityFound, EntityNotFound
from src.shared.listing import Page, SortOrder, filter_by_search, paginate, sort_items

logger = logging.getLogger(__name__)

NOTARY_OFFICE_SEARCH_FIELDS = ("name", "code", "street", "neighborhood", "city", "state")
NOTARY_OFFICE_DIGIT_FIELDS = ("zip_code",)


class NotaryOfficeService:
    """Service for handling NotaryOffice business logic."""

    def __init__(self, repository: NotaryOfficeRepository, unit_of_work: UnitOfWork):
        self.repository = repository
        self.unit_of_work = unit_of_work

    async def create_notary_office(self, request: CreateNotaryOfficeRequest) -> NotaryOffice:
        """Create a notary office; the registry code must not be in use."""
        if await self.repository.get_by_code(request.code):
            logger.warning("Notary office code %s already registered", request.code)
            raise ConflictingEntityFound("NotaryOffice", "code", request.code)

        now = datetime.now(UTC)
        office = NotaryOffice(id=uuid4(), created_at=now, updated_at=now, **request.model_dump())
        try:
            async with self.unit_of_work:
                self.unit_of_work.add(office)
        except IntegrityError as e:
            # a concurrent create took the code after the check above
            raise ConflictingEntityFound("NotaryOffice", "code", request.code) from e
        return office

    async def update_notary_office(self, office_id: UUID, request: UpdateNotaryOfficeRequest) -> NotaryOffice:
        office = await self.get_notary_office(office_id)
        changes = request.model_dump(exclude_unset=True)

        new_code = changes.get("code")
        if new_code and new_code != office.code:
            existing = await self.repository.get_by_code(new_code)
            if existing and existing.id != office_id:
                raise ConflictingEntityFound("NotaryOffice", "code", new_code)

        updated = office.model_copy(update={**changes, "updated_at": datetime.now(UTC)})
        async with self.unit_of_work:
            await self.unit_of_work.update(updated)
        return updated

    async def remove_notary_office(self, office_id: UUID) -> None:
        """Hard delete."""
        office = await self.get_notary_office(office_id)
        async with self.unit_of_work:
            await self.unit_of_work.delete(office)
        logger.info("Removed notary office %s", office_id)

    async def get_notary_office(self, office_id: UUID) -> NotaryOffice:
        office = await self.repository.get_by_id(office_id)
        if not office:
            raise EntityNotFound("NotaryOffice", office_id)
        return office

    async def list_notary_offices(
        self,
        page: int | None = None,
        page_size: int | None = None,
        search: str | None = None,
        status: NotaryOfficeStatus | None = None,
        sort_by: str | None = None,
        sort_order: SortOrder = SortOrder.ASC,
    ) -> Page[NotaryOffice]:
        offices = await self.repository.list_all()
        if status is not None:
            offices = [office for office in offices if office.status == status]
        offices = filter_by_search(offices, search, NOTARY_OFFICE_SEARCH_FIELDS, NOTARY_OFFICE_DIGIT_FIELDS)
        return paginate(sort_items(offices, sort_by, sort_order), page, page_size)
