"""Contract service: generation from templates, edits, PDF attachment."""
import logging
from uuid import UUID, uuid4
from datetime import datetime, UTC

from src.app.core.domain.models import (
    Contract,
    ContractStatus,
    ContractWithRelations,
    NotaryOffice,
    PropertyDocument,
    PropertyDocumentType,
)
from src.app.core.services.placeholders import render_contract
from src.app.infrastructure.client_repository import ClientRepository
from src.app.infrastructure.contract_repository import ContractRepository, ContractTemplateRepository
from src.app.infrastructure.document_repository import PropertyDocumentRepository
from src.app.infrastructure.notary_office_repository import NotaryOfficeRepository
from src.app.infrastructure.property_repository import PropertyRepository
from src.client.schemas import CreateContractRequest, UpdateContractRequest
from src.shared.blob_storage.s3_blober import S3BlobStorage
from src.shared.database.unit_of_work import UnitOfWork
from src.shared.exceptions import DomainValidationError, EntityNotFound
from src.shared.listing import Page, SortOrder, filter_by_search, paginate, sort_items

logger = logging.getLogger(__name__)

CONTRACT_SEARCH_FIELDS = ("name",)
CONTRACT_PDF_KEY_PATTERN = "contracts/{contract_id}/{file_id}.pdf"
PDF_MIME_TYPE = "application/pdf"


class ContractService:
    """Service for handling Contract business logic."""

    def __init__(
        self,
        repository: ContractRepository,
        template_repository: ContractTemplateRepository,
        property_repository: PropertyRepository,
        client_repository: ClientRepository,
        notary_office_repository: NotaryOfficeRepository,
        property_document_repository: PropertyDocumentRepository,
        unit_of_work: UnitOfWork,
        blob_storage: S3BlobStorage,
    ):
        self.repository = repository
        self.template_repository = template_repository
        self.property_repository = property_repository
        self.client_repository = client_repository
        self.notary_office_repository = notary_office_repository
        self.property_document_repository = property_document_repository
        self.unit_of_work = unit_of_work
        self.blob_storage = blob_storage

    async def _get_notary_office(self, office_id: UUID) -> NotaryOffice:
        office = await self.notary_office_repository.get_by_id(office_id)
        if not office:
            raise EntityNotFound("NotaryOffice", office_id)
        return office

    async def create_contract(self, request: CreateContractRequest) -> Contract:
        """
        Create a contract for a client and a property.

        When the request carries no content, the template is rendered with the
        client, property and notary office data.

        Raises:
            EntityNotFound: If the template, property, client or notary office does not exist
        """
        template = await self.template_repository.get_by_id(request.template_id)
        if not template:
            raise EntityNotFound("ContractTemplate", request.template_id)
        prop = await self.property_repository.get_by_id(request.property_id)
        if not prop:
            raise EntityNotFound("Property", request.property_id)
        client = await self.client_repository.get_by_id(request.client_id)
        if not client:
            raise EntityNotFound("Client", request.client_id)
        notary_office = None
        if request.notary_office_id:
            notary_office = await self._get_notary_office(request.notary_office_id)

        content = request.content
        if content is None:
            content = render_contract(template.content, client, prop, notary_office)

        now = datetime.now(UTC)
        contract = Contract(
            id=uuid4(),
            name=request.name,
            description=request.description,
            template_id=template.id,
            property_id=prop.id,
            client_id=client.id,
            notary_office_id=request.notary_office_id,
            content=content,
            status=request.status,
            created_at=now,
            updated_at=now,
        )
        async with self.unit_of_work:
            self.unit_of_work.add(contract)
        logger.info("Created contract %s from template %s", contract.id, template.id)
        return contract

    async def update_contract(self, contract_id: UUID, request: UpdateContractRequest) -> Contract:
        """
        Raises:
            EntityNotFound: If the contract or the requested notary office does not exist
            DomainValidationError: If content is edited on a final or signed contract
        """
        contract = await self.get_contract(contract_id)
        changes = request.model_dump(exclude_unset=True)

        if "content" in changes and contract.status.locks_content:
            raise DomainValidationError(f"Content of a {contract.status} contract cannot be edited")
        if changes.get("notary_office_id"):
            await self._get_notary_office(changes["notary_office_id"])

        updated = contract.model_copy(update={**changes, "updated_at": datetime.now(UTC)})
        async with self.unit_of_work:
            await self.unit_of_work.update(updated)
        return updated

    async def remove_contract(self, contract_id: UUID) -> None:
        """Delete the contract together with its PDF and the property document holding it."""
        contract = await self.get_contract(contract_id)
        linked_document = await self.property_document_repository.get_by_contract_id(contract_id)

        stored_keys = {contract.pdf_storage_key}
        if linked_document:
            stored_keys.add(linked_document.storage_key)
        for key in sorted(k for k in stored_keys if k):
            await self.blob_storage.delete_object(key)

        async with self.unit_of_work:
            if linked_document:
                await self.unit_of_work.delete(linked_document)
            await self.unit_of_work.delete(contract)
        logger.info("Removed contract %s", contract_id)

    async def get_contract(self, contract_id: UUID) -> Contract:
        contract = await self.repository.get_by_id(contract_id)
        if not contract:
            raise EntityNotFound("Contract", contract_id)
        return contract

    async def get_contract_with_relations(self, contract_id: UUID) -> ContractWithRelations:
        """The contract plus its template, property, client and notary office, where they still exist."""
        contract = await self.get_contract(contract_id)
        template = (
            await self.template_repository.get_by_id(contract.template_id) if contract.template_id else None
        )
        notary_office = (
            await self.notary_office_repository.get_by_id(contract.notary_office_id)
            if contract.notary_office_id else None
        )
        return ContractWithRelations(
            contract=contract,
            template=template,
            property=await self.property_repository.get_by_id(contract.property_id),
            client=await self.client_repository.get_by_id(contract.client_id),
            notary_office=notary_office,
        )

    async def list_contracts(
        self,
        page: int | None = None,
        page_size: int | None = None,
        search: str | None = None,
        status: ContractStatus | None = None,
        sort_by: str | None = None,
        sort_order: SortOrder = SortOrder.ASC,
    ) -> Page[Contract]:
        contracts = await self.repository.list_all()
        if status is not None:
            contracts = [contract for contract in contracts if contract.status == status]
        contracts = filter_by_search(contracts, search, CONTRACT_SEARCH_FIELDS)
        return paginate(sort_items(contracts, sort_by, sort_order), page, page_size)

    async def list_by_property(self, property_id: UUID) -> list[Contract]:
        return await self.repository.get_by_property_id(property_id)

    async def list_by_client(self, client_id: UUID) -> list[Contract]:
        """Final and signed contracts of the client, newest first."""
        return await self.repository.get_completed_by_client_id(client_id)

    async def attach_pdf(self, contract_id: UUID, content: bytes) -> Contract:
        """
        Store the contract's PDF, replacing any previous one.

        The PDF is also filed under the property as a ``contract`` document; an
        existing document for this contract is repointed rather than duplicated.

        Raises:
            EntityNotFound: If the contract does not exist
            RuntimeError: If the blob store rejects the upload
        """
        contract = await self.get_contract(contract_id)
        existing_document = await self.property_document_repository.get_by_contract_id(contract_id)

        storage_key = CONTRACT_PDF_KEY_PATTERN.format(contract_id=contract_id, file_id=uuid4())
        await self.blob_storage.upload_bytes(storage_key, content, PDF_MIME_TYPE)

        now = datetime.now(UTC)
        updated = contract.model_copy(update={"pdf_storage_key": storage_key, "updated_at": now})
        async with self.unit_of_work:
            await self.unit_of_work.update(updated)
            if existing_document:
                await self.unit_of_work.update(existing_document.model_copy(update={
                    "storage_key": storage_key,
                    "mime_type": PDF_MIME_TYPE,
                    "size": len(content),
                    "created_at": now,
                }))
            else:
                self.unit_of_work.add(PropertyDocument(
                    id=uuid4(),
                    name=contract.name,
                    type=PropertyDocumentType.CONTRACT,
                    storage_key=storage_key,
                    property_id=contract.property_id,
                    mime_type=PDF_MIME_TYPE,
                    size=len(content),
                    contract_id=contract_id,
                    created_at=now,
                ))

        # old blobs go only once the records point at the new key
        stale_keys = {contract.pdf_storage_key}
        if existing_document:
            stale_keys.add(existing_document.storage_key)
        for key in sorted(k for k in stale_keys if k):
            await self.blob_storage.delete_object(key)

        logger.info("Attached PDF %s to contract %s", storage_key, contract_id)
        return updated
