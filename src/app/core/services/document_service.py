"""Document services for client and property attachments."""
import logging
from uuid import UUID, uuid4

from src.app.core.domain.models import (
    Client,
    ClientDocument,
    ClientDocumentType,
    MaritalStatus,
    PropertyDocument,
    PropertyDocumentType,
)
from src.app.infrastructure.client_repository import ClientRepository
from src.app.infrastructure.document_repository import ClientDocumentRepository, PropertyDocumentRepository
from src.app.infrastructure.property_repository import PropertyRepository
from src.shared.blob_storage.s3_blober import S3BlobStorage
from src.shared.database.unit_of_work import UnitOfWork
from src.shared.exceptions import EntityNotFound

logger = logging.getLogger(__name__)

CLIENT_DOCUMENT_KEY_PATTERN = "clients/{client_id}/documents/{document_id}"
PROPERTY_DOCUMENT_KEY_PATTERN = "properties/{property_id}/documents/{document_id}"

REQUIRED_CLIENT_DOCUMENTS = [
    ClientDocumentType.CPF,
    ClientDocumentType.BIRTH_CERTIFICATE,
    ClientDocumentType.ADDRESS_PROOF,
]
MARRIED_STATUSES = (MaritalStatus.MARRIED, MaritalStatus.COMMON_LAW_MARRIAGE)


def required_document_types(client: Client) -> list[ClientDocumentType]:
    required = list(REQUIRED_CLIENT_DOCUMENTS)
    if client.marital_status in MARRIED_STATUSES:
        required.append(ClientDocumentType.MARRIAGE_CERTIFICATE)
    return required


class ClientDocumentService:
    """Service for handling documents attached to clients."""

    def __init__(
        self,
        client_repository: ClientRepository,
        document_repository: ClientDocumentRepository,
        unit_of_work: UnitOfWork,
        blob_storage: S3BlobStorage,
        download_url_expiration: int = 3600,
    ):
        """
        Initialize the client document service.

        Args:
            client_repository: Repository for client operations
            document_repository: Repository for client document operations
            unit_of_work: Unit of work for database transactions
            blob_storage: S3 blob storage for file operations
            download_url_expiration: Lifetime of download URLs in seconds
        """
        self.client_repository = client_repository
        self.document_repository = document_repository
        self.unit_of_work = unit_of_work
        self.blob_storage = blob_storage
        self.download_url_expiration = download_url_expiration

    async def _get_client(self, client_id: UUID) -> Client:
        client = await self.client_repository.get_by_id(client_id)
        if not client:
            raise EntityNotFound("Client", client_id)
        return client

    async def upload_document(
        self,
        client_id: UUID,
        name: str,
        document_type: ClientDocumentType,
        content: bytes,
        mime_type: str,
    ) -> ClientDocument:
        """
        Store a file in the blob store and record it against the client.

        A marriage certificate is linked to the client's current spouse as well.

        Raises:
            EntityNotFound: If the client does not exist
            RuntimeError: If the upload fails; no record is written
        """
        client = await self._get_client(client_id)

        client_ids = [client_id]
        if document_type == ClientDocumentType.MARRIAGE_CERTIFICATE and client.spouse_id:
            spouse = await self.client_repository.get_by_id(client.spouse_id)
            if spouse:
                client_ids.append(spouse.id)
            else:
                logger.warning("Spouse %s of client %s not found, certificate not shared", client.spouse_id, client_id)

        document_id = uuid4()
        storage_key = CLIENT_DOCUMENT_KEY_PATTERN.format(client_id=client_id, document_id=document_id)
        await self.blob_storage.upload_bytes(storage_key, content, mime_type)

        document = ClientDocument(
            id=document_id,
            name=name,
            type=document_type,
            storage_key=storage_key,
            client_ids=client_ids,
            mime_type=mime_type,
            size=len(content),
        )
        async with self.unit_of_work:
            self.unit_of_work.add(document)

        logger.info("Stored %s document %s for client %s", document_type, document_id, client_id)
        return document

    async def get_document(self, client_id: UUID, document_id: UUID) -> ClientDocument:
        document = await self.document_repository.get_client_document_by_id(document_id, client_id)
        if not document:
            raise EntityNotFound("ClientDocument", document_id)
        return document

    async def get_download_url(self, client_id: UUID, document_id: UUID) -> tuple[ClientDocument, str]:
        document = await self.get_document(client_id, document_id)
        url = await self.blob_storage.generate_presigned_url(document.storage_key, self.download_url_expiration)
        return document, url

    async def get_client_documents(self, client_id: UUID) -> list[ClientDocument]:
        """
        Get all documents linked to a client.

        Raises:
            EntityNotFound: If the client does not exist
        """
        await self._get_client(client_id)
        return await self.document_repository.get_by_client_id(client_id)

    async def remove_document(self, client_id: UUID, document_id: UUID) -> None:
        """Delete the stored file, then the record."""
        document = await self.get_document(client_id, document_id)
        await self.blob_storage.delete_object(document.storage_key)
        async with self.unit_of_work:
            await self.unit_of_work.delete(document)
        logger.info("Removed document %s of client %s", document_id, client_id)

    async def get_missing_required_documents(self, client_id: UUID) -> list[ClientDocumentType]:
        """Required document types the client has not uploaded yet."""
        client = await self._get_client(client_id)
        documents = await self.document_repository.get_by_client_id(client_id)
        present = {document.type for document in documents}
        return [doc_type for doc_type in required_document_types(client) if doc_type not in present]


class PropertyDocumentService:
    """Service for handling documents attached to properties."""

    def __init__(
        self,
        property_repository: PropertyRepository,
        document_repository: PropertyDocumentRepository,
        unit_of_work: UnitOfWork,
        blob_storage: S3BlobStorage,
        download_url_expiration: int = 3600,
    ):
        self.property_repository = property_repository
        self.document_repository = document_repository
        self.unit_of_work = unit_of_work
        self.blob_storage = blob_storage
        self.download_url_expiration = download_url_expiration

    async def _ensure_property_exists(self, property_id: UUID) -> None:
        if not await self.property_repository.get_by_id(property_id):
            raise EntityNotFound("Property", property_id)

    async def upload_document(
        self,
        property_id: UUID,
        name: str,
        document_type: PropertyDocumentType,
        content: bytes,
        mime_type: str,
    ) -> PropertyDocument:
        await self._ensure_property_exists(property_id)

        document_id = uuid4()
        storage_key = PROPERTY_DOCUMENT_KEY_PATTERN.format(property_id=property_id, document_id=document_id)
        await self.blob_storage.upload_bytes(storage_key, content, mime_type)

        document = PropertyDocument(
            id=document_id,
            name=name,
            type=document_type,
            storage_key=storage_key,
            property_id=property_id,
            mime_type=mime_type,
            size=len(content),
        )
        async with self.unit_of_work:
            self.unit_of_work.add(document)
        return document

    async def get_document(self, property_id: UUID, document_id: UUID) -> PropertyDocument:
        document = await self.document_repository.get_property_document_by_id(document_id, property_id)
        if not document:
            raise EntityNotFound("PropertyDocument", document_id)
        return document

    async def get_download_url(self, property_id: UUID, document_id: UUID) -> tuple[PropertyDocument, str]:
        document = await self.get_document(property_id, document_id)
        url = await self.blob_storage.generate_presigned_url(document.storage_key, self.download_url_expiration)
        return document, url

    async def get_property_documents(self, property_id: UUID) -> list[PropertyDocument]:
        await self._ensure_property_exists(property_id)
        return await self.document_repository.get_by_property_id(property_id)

    async def remove_document(self, property_id: UUID, document_id: UUID) -> None:
        document = await self.get_document(property_id, document_id)
        await self.blob_storage.delete_object(document.storage_key)
        async with self.unit_of_work:
            await self.unit_of_work.delete(document)
        logger.info("Removed document %s of property %s", document_id, property_id)
