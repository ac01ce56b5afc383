from decimal import Decimal
from typing import cast
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import HTTPStatusError

from src.app.core.domain.models import (
    Client,
    ContractStatus,
    ContractTemplateStatus,
    Property,
    PropertyDocumentType,
    PropertyType,
)
from src.client import (
    CreateContractRequest,
    CreateContractTemplateRequest,
    UpdateContractRequest,
    UpdateContractTemplateRequest,
)


@pytest_asyncio.fixture
async def parties(unit_of_work):
    client = Client(name="João da Silva", email="joao@example.com", tax_id="12345678909")
    prop = Property(
        zip_code="01310-100", street="Avenida Paulista", number="1000", neighborhood="Bela Vista",
        city="São Paulo", state="SP", type=PropertyType.APARTMENT, area=80.0, value=Decimal("500000.00"),
    )
    async with unit_of_work:
        unit_of_work.add(client)
        unit_of_work.add(prop)
    return client, prop


@pytest.mark.asyncio
async def test_template_endpoints(escritura_client):
    # given
    created = await escritura_client.create_template(
        CreateContractTemplateRequest(name="Compra e venda", content="Comprador: {{client.name}}")
    )

    # when
    updated = await escritura_client.update_template(
        created.id, UpdateContractTemplateRequest(status=ContractTemplateStatus.INACTIVE)
    )
    page = await escritura_client.list_templates(status="inactive")
    active = await escritura_client.list_active_templates()
    removal = await escritura_client.remove_template(created.id)

    # then
    assert updated.status == ContractTemplateStatus.INACTIVE
    assert [template.id for template in page.items] == [created.id]
    assert active == []
    assert removal.soft_deleted is False
    with pytest.raises(HTTPStatusError) as exc_info:
        await escritura_client.get_template(created.id)
    assert cast(HTTPStatusError, exc_info.value).response.status_code == 404


@pytest.mark.asyncio
async def test_list_placeholders(escritura_client):
    placeholders = await escritura_client.list_placeholders()

    by_key = {placeholder.key: placeholder for placeholder in placeholders}
    assert by_key["client.name"].group == "Cliente"
    assert "property.value" in by_key


@pytest.mark.asyncio
async def test_contract_flow(escritura_client, parties, s3_storage):
    # given
    client, prop = parties
    template = await escritura_client.create_template(
        CreateContractTemplateRequest(name="Compra e venda", content="Comprador: {{client.name}}")
    )

    # when
    contract = await escritura_client.create_contract(CreateContractRequest(
        name="Venda Paulista", template_id=template.id, property_id=prop.id, client_id=client.id
    ))
    with_pdf = await escritura_client.attach_contract_pdf(contract.id, b"%PDF-1.7")
    details = await escritura_client.get_contract_details(contract.id)
    documents = await escritura_client.list_property_documents(prop.id)

    # then
    assert contract.content == "Comprador: João da Silva"
    assert with_pdf.pdf_storage_key is not None
    assert details.client.id == client.id
    assert details.template.id == template.id
    assert details.notary_office is None
    assert [doc.type for doc in documents] == [PropertyDocumentType.CONTRACT]
    assert documents[0].contract_id == contract.id


@pytest.mark.asyncio
async def test_template_in_use_is_soft_removed(escritura_client, parties):
    client, prop = parties
    template = await escritura_client.create_template(
        CreateContractTemplateRequest(name="Compra e venda", content="texto")
    )
    await escritura_client.create_contract(CreateContractRequest(
        name="Venda", template_id=template.id, property_id=prop.id, client_id=client.id
    ))

    removal = await escritura_client.remove_template(template.id)

    assert removal.soft_deleted is True
    assert (await escritura_client.get_template(template.id)).status == ContractTemplateStatus.INACTIVE


@pytest.mark.asyncio
async def test_locked_content_is_bad_request(escritura_client, parties):
    client, prop = parties
    template = await escritura_client.create_template(
        CreateContractTemplateRequest(name="Compra e venda", content="texto")
    )
    contract = await escritura_client.create_contract(CreateContractRequest(
        name="Venda", template_id=template.id, property_id=prop.id, client_id=client.id,
        status=ContractStatus.SIGNED,
    ))

    with pytest.raises(HTTPStatusError) as exc_info:
        await escritura_client.update_contract(contract.id, UpdateContractRequest(content="outro texto"))

    assert cast(HTTPStatusError, exc_info.value).response.status_code == 400
    assert [c.id for c in await escritura_client.list_contracts_by_client(client.id)] == [contract.id]


@pytest.mark.asyncio
async def test_contract_with_unknown_template(escritura_client, parties):
    client, prop = parties

    with pytest.raises(HTTPStatusError) as exc_info:
        await escritura_client.create_contract(CreateContractRequest(
            name="Venda", template_id=uuid4(), property_id=prop.id, client_id=client.id
        ))

    assert cast(HTTPStatusError, exc_info.value).response.status_code == 404


@pytest.mark.asyncio
async def test_remove_contract(escritura_client, parties):
    client, prop = parties
    template = await escritura_client.create_template(
        CreateContractTemplateRequest(name="Compra e venda", content="texto")
    )
    contract = await escritura_client.create_contract(CreateContractRequest(
        name="Venda", template_id=template.id, property_id=prop.id, client_id=client.id
    ))

    await escritura_client.remove_contract(contract.id)

    assert await escritura_client.list_contracts_by_property(prop.id) == []
    with pytest.raises(HTTPStatusError) as exc_info:
        await escritura_client.remove_contract(contract.id)
    assert cast(HTTPStatusError, exc_info.value).response.status_code == 404
