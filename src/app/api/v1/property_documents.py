from uuid import UUID
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from dependency_injector.wiring import Provide, inject

from src.app.containers import Container
from src.app.core.domain.models import PropertyDocumentType
from src.app.core.services.document_service import PropertyDocumentService
from src.client.schemas import DocumentDownloadResponse, PropertyDocumentResponse
from src.app.api.dependencies import get_current_user
from src.app.api.mappers import to_property_document_response
from src.shared.exceptions import EntityNotFound
from src.app.logging import get_logger

DEFAULT_MIME_TYPE = "application/octet-stream"

router = APIRouter(
    prefix="/properties/{property_id}/documents",
    tags=["property-documents"],
    dependencies=[Depends(get_current_user)],
)
logger = get_logger(__name__)


@router.post("/", response_model=PropertyDocumentResponse, status_code=status.HTTP_201_CREATED)
@inject
async def upload_property_document(
    property_id: UUID,
    file: UploadFile = File(...),
    document_type: PropertyDocumentType = Form(..., alias="type"),
    name: str | None = Form(default=None),
    service: PropertyDocumentService = Depends(Provide[Container.property_document_service]),
) -> PropertyDocumentResponse:
    """Upload a document for a property."""
    content = await file.read()
    try:
        document = await service.upload_document(
            property_id=property_id,
            name=name or file.filename or document_type.value,
            document_type=document_type,
            content=content,
            mime_type=file.content_type or DEFAULT_MIME_TYPE,
        )
        return to_property_document_response(document)
    except EntityNotFound as e:
        logger.error(f"Failed to upload document, property not found: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except RuntimeError as e:
        logger.error(f"Failed to store document for property {property_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to store document",
        )


@router.get("/", response_model=list[PropertyDocumentResponse])
@inject
async def list_property_documents(
    property_id: UUID,
    service: PropertyDocumentService = Depends(Provide[Container.property_document_service]),
) -> list[PropertyDocumentResponse]:
    try:
        documents = await service.get_property_documents(property_id)
        return [to_property_document_response(doc) for doc in documents]
    except EntityNotFound as e:
        logger.error(f"Property not found when listing documents: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/{document_id}/download", response_model=DocumentDownloadResponse)
@inject
async def get_property_document_download_url(
    property_id: UUID,
    document_id: UUID,
    service: PropertyDocumentService = Depends(Provide[Container.property_document_service]),
) -> DocumentDownloadResponse:
    try:
        document, download_url = await service.get_download_url(property_id, document_id)
        return DocumentDownloadResponse(
            id=document.id,
            name=document.name,
            download_url=download_url,
            expires_in=service.download_url_expiration,
        )
    except EntityNotFound as e:
        logger.error(f"Property document not found for download: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except RuntimeError as e:
        logger.error(f"Failed to generate download URL: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to generate download URL",
        )


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
@inject
async def remove_property_document(
    property_id: UUID,
    document_id: UUID,
    service: PropertyDocumentService = Depends(Provide[Container.property_document_service]),
) -> None:
    try:
        await service.remove_document(property_id, document_id)
    except EntityNotFound as e:
        logger.error(f"Property document not found for removal: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except RuntimeError as e:
        logger.error(f"Failed to delete stored document {document_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete document",
        )
