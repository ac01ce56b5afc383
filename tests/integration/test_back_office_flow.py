"""End-to-end flows through the API with PostgreSQL and LocalStack."""
from decimal import Decimal

import httpx
import pytest

from src.app.core.domain.models import ClientDocumentType, MaritalStatus, PropertyType
from src.client import (
    CreateClientRequest,
    CreateContractRequest,
    CreateContractTemplateRequest,
    CreateNotaryOfficeRequest,
    CreatePropertyRequest,
    UpdateClientRequest,
)


@pytest.mark.asyncio
async def test_spouse_reassignment_is_persisted(escritura_client):
    # given
    ana = await escritura_client.create_client(CreateClientRequest(name="Ana", email="ana@example.com", tax_id="1"))
    bruno = await escritura_client.create_client(CreateClientRequest(
        name="Bruno", email="bruno@example.com", tax_id="2", spouse_id=ana.id, marital_status=MaritalStatus.MARRIED
    ))
    carla = await escritura_client.create_client(CreateClientRequest(name="Carla", email="carla@example.com", tax_id="3"))

    # when
    await escritura_client.update_client(ana.id, UpdateClientRequest(spouse_id=carla.id))

    # then
    assert (await escritura_client.get_client(ana.id)).spouse_id == carla.id
    assert (await escritura_client.get_client(carla.id)).spouse_id == ana.id
    assert (await escritura_client.get_client(bruno.id)).spouse_id is None


@pytest.mark.asyncio
async def test_shared_marriage_certificate_is_downloadable(escritura_client):
    # given
    ana = await escritura_client.create_client(CreateClientRequest(name="Ana", email="ana@example.com", tax_id="1"))
    bruno = await escritura_client.create_client(CreateClientRequest(
        name="Bruno", email="bruno@example.com", tax_id="2", spouse_id=ana.id, marital_status=MaritalStatus.MARRIED
    ))

    # when
    uploaded = await escritura_client.upload_document(
        bruno.id, document_type="marriage_certificate", filename="certidao.pdf", content=b"%PDF certidao",
        mime_type="application/pdf",
    )
    download = await escritura_client.get_document_download_url(ana.id, uploaded.id)
    async with httpx.AsyncClient() as raw:
        content = (await raw.get(download.download_url)).content

    # then
    assert set(uploaded.client_ids) == {ana.id, bruno.id}
    assert ClientDocumentType.MARRIAGE_CERTIFICATE not in (await escritura_client.get_missing_documents(ana.id)).missing
    assert content == b"%PDF certidao"


@pytest.mark.asyncio
async def test_contract_generation_and_pdf(escritura_client, s3_storage):
    # given
    client = await escritura_client.create_client(
        CreateClientRequest(name="João da Silva", email="joao@example.com", tax_id="123.456.789-09")
    )
    prop = await escritura_client.create_property(CreatePropertyRequest(
        zip_code="01310-100", street="Avenida Paulista", number="1000", neighborhood="Bela Vista",
        city="São Paulo", state="SP", type=PropertyType.APARTMENT, area=80.0, value=Decimal("350000"),
        owner_ids=[client.id],
    ))
    office = await escritura_client.create_notary_office(
        CreateNotaryOfficeRequest(name="1º Tabelionato de Notas", code="SP-001")
    )
    template = await escritura_client.create_template(CreateContractTemplateRequest(
        name="Compra e venda", content="{{client.name}} compra por {{property.value}} em {{notaryOffice.name}}"
    ))

    # when
    contract = await escritura_client.create_contract(CreateContractRequest(
        name="Venda Paulista", template_id=template.id, property_id=prop.id, client_id=client.id,
        notary_office_id=office.id,
    ))
    first = await escritura_client.attach_contract_pdf(contract.id, b"%PDF v1")
    second = await escritura_client.attach_contract_pdf(contract.id, b"%PDF v2")

    # then
    assert contract.content == "João da Silva compra por R$ 350.000,00 em 1º Tabelionato de Notas"
    assert await s3_storage.object_exists(first.pdf_storage_key) is False
    assert await s3_storage.download_bytes(second.pdf_storage_key) == b"%PDF v2"
    assert [p.id for p in await escritura_client.list_properties_by_client(client.id)] == [prop.id]

    await escritura_client.remove_contract(contract.id)
    assert await s3_storage.object_exists(second.pdf_storage_key) is False
    assert await escritura_client.list_property_documents(prop.id) == []
