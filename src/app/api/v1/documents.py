from uuid import UUID
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from dependency_injector.wiring import Provide, inject

from src.app.containers import Container
from src.app.core.domain.models import ClientDocumentType
from src.app.core.services.document_service import ClientDocumentService
from src.client.schemas import ClientDocumentResponse, DocumentDownloadResponse, MissingDocumentsResponse
from src.app.api.dependencies import get_current_user
from src.app.api.mappers import to_client_document_response
from src.shared.exceptions import EntityNotFound
from src.app.logging import get_logger

DEFAULT_MIME_TYPE = "application/octet-stream"

router = APIRouter(
    prefix="/clients/{client_id}/documents",
    tags=["documents"],
    dependencies=[Depends(get_current_user)],
)
logger = get_logger(__name__)


@router.post("/", response_model=ClientDocumentResponse, status_code=status.HTTP_201_CREATED)
@inject
async def upload_document(
    client_id: UUID,
    file: UploadFile = File(...),
    document_type: ClientDocumentType = Form(..., alias="type"),
    name: str | None = Form(default=None),
    service: ClientDocumentService = Depends(Provide[Container.client_document_service]),
) -> ClientDocumentResponse:
    """
    Upload a document for a client.

    This endpoint:
    1. Verifies the client exists
    2. Uploads the file to S3
    3. Creates the document record, shared with the spouse for marriage certificates

    Raises:
        HTTPException 404: If client not found
        HTTPException 500: If the file could not be stored
    """
    content = await file.read()
    try:
        document = await service.upload_document(
            client_id=client_id,
            name=name or file.filename or document_type.value,
            document_type=document_type,
            content=content,
            mime_type=file.content_type or DEFAULT_MIME_TYPE,
        )
        return to_client_document_response(document)
    except EntityNotFound as e:
        logger.error(f"Failed to upload document, client not found: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except RuntimeError as e:
        logger.error(f"Failed to store document for client {client_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to store document",
        )


@router.get("/", response_model=list[ClientDocumentResponse])
@inject
async def list_client_documents(
    client_id: UUID,
    service: ClientDocumentService = Depends(Provide[Container.client_document_service]),
) -> list[ClientDocumentResponse]:
    """Get all documents for a specific client."""
    try:
        documents = await service.get_client_documents(client_id)
        return [to_client_document_response(doc) for doc in documents]
    except EntityNotFound as e:
        logger.error(f"Client not found when listing documents: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/missing-required", response_model=MissingDocumentsResponse)
@inject
async def get_missing_required_documents(
    client_id: UUID,
    service: ClientDocumentService = Depends(Provide[Container.client_document_service]),
) -> MissingDocumentsResponse:
    """Required document types the client has not uploaded yet."""
    try:
        missing = await service.get_missing_required_documents(client_id)
        return MissingDocumentsResponse(client_id=client_id, missing=missing)
    except EntityNotFound as e:
        logger.error(f"Client not found when checking documents: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/{document_id}", response_model=ClientDocumentResponse)
@inject
async def get_document(
    client_id: UUID,
    document_id: UUID,
    service: ClientDocumentService = Depends(Provide[Container.client_document_service]),
) -> ClientDocumentResponse:
    try:
        document = await service.get_document(client_id, document_id)
        return to_client_document_response(document)
    except EntityNotFound as e:
        logger.error(f"Document not found for client {client_id}: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/{document_id}/download", response_model=DocumentDownloadResponse)
@inject
async def get_document_download_url(
    client_id: UUID,
    document_id: UUID,
    service: ClientDocumentService = Depends(Provide[Container.client_document_service]),
) -> DocumentDownloadResponse:
    """
    Get a pre-signed URL for downloading the document from S3.

    Raises:
        HTTPException 404: If document not found
        HTTPException 500: If URL generation fails
    """
    try:
        document, download_url = await service.get_download_url(client_id, document_id)
        return DocumentDownloadResponse(
            id=document.id,
            name=document.name,
            download_url=download_url,
            expires_in=service.download_url_expiration,
        )
    except EntityNotFound as e:
        logger.error(f"Document not found for download: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except RuntimeError as e:
        logger.error(f"Failed to generate download URL: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to generate download URL",
        )


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
@inject
async def remove_document(
    client_id: UUID,
    document_id: UUID,
    service: ClientDocumentService = Depends(Provide[Container.client_document_service]),
) -> None:
    """Delete the stored file and the document record."""
    try:
        await service.remove_document(client_id, document_id)
    except EntityNotFound as e:
        logger.error(f"Document not found for removal: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except RuntimeError as e:
        logger.error(f"Failed to delete stored document {document_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete document",
        )
