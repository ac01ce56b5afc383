from decimal import Decimal
from typing import cast
from uuid import uuid4

import pytest
from httpx import HTTPStatusError

from src.app.core.domain.models import Client, ClientDocumentType, MaritalStatus, Property, PropertyType
from tests.conftest import PRESIGNED_URL


def make_property() -> Property:
    return Property(
        zip_code="01310-100", street="Avenida Paulista", number="1000", neighborhood="Bela Vista",
        city="São Paulo", state="SP", type=PropertyType.APARTMENT, area=80.0, value=Decimal("500000.00"),
    )


@pytest.mark.asyncio
async def test_upload_and_list_client_documents(escritura_client, unit_of_work, s3_storage):
    # given
    client = Client(name="João da Silva", email="joao@example.com", tax_id="12345678909")
    async with unit_of_work:
        unit_of_work.add(client)

    # when
    uploaded = await escritura_client.upload_document(
        client.id, document_type="cpf", filename="cpf.pdf", content=b"%PDF-1.4", mime_type="application/pdf"
    )
    listed = await escritura_client.list_documents(client.id)

    # then
    assert uploaded.name == "cpf.pdf"
    assert uploaded.type == ClientDocumentType.CPF
    assert uploaded.size == 8
    assert uploaded.client_ids == [client.id]
    assert [doc.id for doc in listed] == [uploaded.id]
    s3_storage.upload_bytes.assert_awaited_once()


@pytest.mark.asyncio
async def test_upload_with_explicit_name(escritura_client, unit_of_work):
    client = Client(name="João da Silva", email="joao@example.com", tax_id="12345678909")
    async with unit_of_work:
        unit_of_work.add(client)

    uploaded = await escritura_client.upload_document(
        client.id, document_type="identity", filename="scan001.png", content=b"img", mime_type="image/png",
        name="RG frente",
    )

    assert uploaded.name == "RG frente"
    assert uploaded.mime_type == "image/png"


@pytest.mark.asyncio
async def test_upload_for_unknown_client(escritura_client):
    with pytest.raises(HTTPStatusError) as exc_info:
        await escritura_client.upload_document(uuid4(), document_type="cpf", filename="cpf.pdf", content=b"x")

    assert cast(HTTPStatusError, exc_info.value).response.status_code == 404


@pytest.mark.asyncio
async def test_upload_storage_failure(escritura_client, unit_of_work, s3_storage):
    client = Client(name="João da Silva", email="joao@example.com", tax_id="12345678909")
    async with unit_of_work:
        unit_of_work.add(client)
    s3_storage.upload_bytes.side_effect = RuntimeError("S3 upload failed")

    with pytest.raises(HTTPStatusError) as exc_info:
        await escritura_client.upload_document(client.id, document_type="cpf", filename="cpf.pdf", content=b"x")

    error = cast(HTTPStatusError, exc_info.value)
    assert error.response.status_code == 500
    assert "S3" not in error.response.json()["detail"]


@pytest.mark.asyncio
async def test_invalid_document_type_is_rejected(escritura_client, unit_of_work):
    client = Client(name="João da Silva", email="joao@example.com", tax_id="12345678909")
    async with unit_of_work:
        unit_of_work.add(client)

    with pytest.raises(HTTPStatusError) as exc_info:
        await escritura_client.upload_document(client.id, document_type="passport", filename="p.pdf", content=b"x")

    assert cast(HTTPStatusError, exc_info.value).response.status_code == 422


@pytest.mark.asyncio
async def test_download_url_and_remove(escritura_client, unit_of_work, s3_storage):
    # given
    client = Client(name="João da Silva", email="joao@example.com", tax_id="12345678909")
    async with unit_of_work:
        unit_of_work.add(client)
    uploaded = await escritura_client.upload_document(client.id, document_type="cpf", filename="cpf.pdf", content=b"x")

    # when
    download = await escritura_client.get_document_download_url(client.id, uploaded.id)
    await escritura_client.remove_document(client.id, uploaded.id)

    # then
    assert download.download_url == PRESIGNED_URL
    assert download.expires_in == 3600
    s3_storage.delete_object.assert_awaited_once_with(uploaded.storage_key)
    with pytest.raises(HTTPStatusError) as exc_info:
        await escritura_client.get_document(client.id, uploaded.id)
    assert cast(HTTPStatusError, exc_info.value).response.status_code == 404


@pytest.mark.asyncio
async def test_missing_documents_for_married_client(escritura_client, unit_of_work):
    client = Client(
        name="João da Silva", email="joao@example.com", tax_id="12345678909", marital_status=MaritalStatus.MARRIED
    )
    async with unit_of_work:
        unit_of_work.add(client)
    await escritura_client.upload_document(client.id, document_type="birth_certificate", filename="n.pdf", content=b"x")

    result = await escritura_client.get_missing_documents(client.id)

    assert result.client_id == client.id
    assert result.missing == [
        ClientDocumentType.CPF,
        ClientDocumentType.ADDRESS_PROOF,
        ClientDocumentType.MARRIAGE_CERTIFICATE,
    ]


@pytest.mark.asyncio
async def test_property_documents(escritura_client, unit_of_work, s3_storage):
    # given
    prop = make_property()
    async with unit_of_work:
        unit_of_work.add(prop)

    # when
    uploaded = await escritura_client.upload_property_document(
        prop.id, document_type="deed", filename="escritura.pdf", content=b"%PDF", mime_type="application/pdf"
    )
    listed = await escritura_client.list_property_documents(prop.id)
    download = await escritura_client.get_property_document_download_url(prop.id, uploaded.id)
    await escritura_client.remove_property_document(prop.id, uploaded.id)

    # then
    assert uploaded.property_id == prop.id
    assert [doc.id for doc in listed] == [uploaded.id]
    assert download.download_url == PRESIGNED_URL
    assert await escritura_client.list_property_documents(prop.id) == []


@pytest.mark.asyncio
async def test_property_documents_of_unknown_property(escritura_client):
    with pytest.raises(HTTPStatusError) as exc_info:
        await escritura_client.list_property_documents(uuid4())

    assert cast(HTTPStatusError, exc_info.value).response.status_code == 404
