from decimal import Decimal
from uuid import uuid4

import pytest
import pytest_asyncio

from src.app.core.domain.models import (
    Client,
    ClientDocumentType,
    MaritalStatus,
    Property,
    PropertyDocumentType,
    PropertyType,
)
from src.app.core.services.document_service import ClientDocumentService, PropertyDocumentService
from src.shared.exceptions import EntityNotFound
from tests.conftest import PRESIGNED_URL


@pytest_asyncio.fixture
async def married_couple(client_repository):
    alice = Client(name="Alice Ramos", email="alice@example.com", tax_id="11122233344")
    bob = Client(
        name="Bob Ramos",
        email="bob@example.com",
        tax_id="55566677788",
        spouse_id=alice.id,
        marital_status=MaritalStatus.MARRIED,
    )
    alice = alice.model_copy(update={"spouse_id": bob.id, "marital_status": MaritalStatus.MARRIED})
    await client_repository.insert(alice)
    await client_repository.insert(bob)
    return alice, bob


@pytest_asyncio.fixture
async def stored_property(property_repository):
    prop = Property(
        zip_code="01310-100",
        street="Avenida Paulista",
        number="1000",
        neighborhood="Bela Vista",
        city="São Paulo",
        state="SP",
        type=PropertyType.APARTMENT,
        area=80.0,
        value=Decimal("500000.00"),
    )
    await property_repository.insert(prop)
    return prop


@pytest.mark.asyncio
async def test_upload_stores_blob_then_record(client_document_service: ClientDocumentService, married_couple, s3_storage):
    # Arrange
    alice, _ = married_couple

    # Act
    document = await client_document_service.upload_document(
        client_id=alice.id,
        name="cpf.pdf",
        document_type=ClientDocumentType.CPF,
        content=b"%PDF-1.4",
        mime_type="application/pdf",
    )

    # Assert
    assert document.storage_key == f"clients/{alice.id}/documents/{document.id}"
    assert document.client_ids == [alice.id]
    assert document.size == 8
    s3_storage.upload_bytes.assert_awaited_once_with(document.storage_key, b"%PDF-1.4", "application/pdf")
    stored = await client_document_service.get_document(alice.id, document.id)
    assert stored.name == "cpf.pdf"


@pytest.mark.asyncio
async def test_marriage_certificate_is_shared_with_spouse(client_document_service: ClientDocumentService, married_couple):
    alice, bob = married_couple

    document = await client_document_service.upload_document(
        client_id=alice.id,
        name="certidao.pdf",
        document_type=ClientDocumentType.MARRIAGE_CERTIFICATE,
        content=b"data",
        mime_type="application/pdf",
    )

    assert document.client_ids == [alice.id, bob.id]
    assert [doc.id for doc in await client_document_service.get_client_documents(bob.id)] == [document.id]


@pytest.mark.asyncio
async def test_failed_upload_writes_no_record(client_document_service: ClientDocumentService, married_couple, s3_storage):
    alice, _ = married_couple
    s3_storage.upload_bytes.side_effect = RuntimeError("S3 unavailable")

    with pytest.raises(RuntimeError):
        await client_document_service.upload_document(
            alice.id, "cpf.pdf", ClientDocumentType.CPF, b"data", "application/pdf"
        )

    assert await client_document_service.get_client_documents(alice.id) == []


@pytest.mark.asyncio
async def test_upload_for_unknown_client(client_document_service: ClientDocumentService, s3_storage):
    with pytest.raises(EntityNotFound):
        await client_document_service.upload_document(
            uuid4(), "cpf.pdf", ClientDocumentType.CPF, b"data", "application/pdf"
        )

    s3_storage.upload_bytes.assert_not_awaited()


@pytest.mark.asyncio
async def test_download_url_and_removal(client_document_service: ClientDocumentService, married_couple, s3_storage):
    # Arrange
    alice, _ = married_couple
    document = await client_document_service.upload_document(
        alice.id, "rg.png", ClientDocumentType.IDENTITY, b"img", "image/png"
    )

    # Act
    found, url = await client_document_service.get_download_url(alice.id, document.id)
    await client_document_service.remove_document(alice.id, document.id)

    # Assert
    assert found.id == document.id
    assert url == PRESIGNED_URL
    s3_storage.generate_presigned_url.assert_awaited_once_with(document.storage_key, 3600)
    s3_storage.delete_object.assert_awaited_once_with(document.storage_key)
    with pytest.raises(EntityNotFound):
        await client_document_service.get_document(alice.id, document.id)


@pytest.mark.asyncio
async def test_document_of_other_client_is_not_found(client_document_service: ClientDocumentService, married_couple, client_repository):
    alice, _ = married_couple
    stranger = Client(name="Zeca", email="zeca@example.com", tax_id="99988877766")
    await client_repository.insert(stranger)
    document = await client_document_service.upload_document(
        alice.id, "cpf.pdf", ClientDocumentType.CPF, b"data", "application/pdf"
    )

    with pytest.raises(EntityNotFound):
        await client_document_service.get_document(stranger.id, document.id)


@pytest.mark.asyncio
async def test_missing_required_documents(client_document_service: ClientDocumentService, married_couple):
    alice, _ = married_couple
    await client_document_service.upload_document(
        alice.id, "cpf.pdf", ClientDocumentType.CPF, b"data", "application/pdf"
    )

    missing = await client_document_service.get_missing_required_documents(alice.id)

    assert missing == [
        ClientDocumentType.BIRTH_CERTIFICATE,
        ClientDocumentType.ADDRESS_PROOF,
        ClientDocumentType.MARRIAGE_CERTIFICATE,
    ]


@pytest.mark.asyncio
async def test_property_document_lifecycle(property_document_service: PropertyDocumentService, stored_property, s3_storage):
    # Arrange & Act
    document = await property_document_service.upload_document(
        stored_property.id, "matricula.pdf", PropertyDocumentType.REGISTRATION, b"data", "application/pdf"
    )
    listed = await property_document_service.get_property_documents(stored_property.id)
    await property_document_service.remove_document(stored_property.id, document.id)

    # Assert
    assert document.storage_key == f"properties/{stored_property.id}/documents/{document.id}"
    assert [doc.id for doc in listed] == [document.id]
    assert await property_document_service.get_property_documents(stored_property.id) == []
    s3_storage.delete_object.assert_awaited_once_with(document.storage_key)


@pytest.mark.asyncio
async def test_property_document_for_unknown_property(property_document_service: PropertyDocumentService):
    with pytest.raises(EntityNotFound):
        await property_document_service.get_property_documents(uuid4())
