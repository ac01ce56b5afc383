from typing import cast
from uuid import uuid4

import pytest
from httpx import HTTPStatusError

from src.app.core.domain.models import ClientStatus, MaritalStatus, PropertyRegime
from src.client import CheckDuplicatesRequest, CreateClientRequest, UpdateClientRequest


def client_request(name: str, email: str, tax_id: str, **fields) -> CreateClientRequest:
    return CreateClientRequest(name=name, email=email, tax_id=tax_id, **fields)


@pytest.mark.asyncio
async def test_create_client(escritura_client):
    """Test creating a client via API."""
    request = client_request("João da Silva", "joao@example.com", "123.456.789-09", phone="(11) 99999-0000")

    response = await escritura_client.create_client(request)

    assert response.name == "João da Silva"
    assert response.email == "joao@example.com"
    assert response.tax_id == "123.456.789-09"
    assert response.status == ClientStatus.ACTIVE
    assert response.id is not None
    assert response.created_at is not None


@pytest.mark.asyncio
async def test_create_client_with_spouse_links_both(escritura_client):
    # given
    spouse = await escritura_client.create_client(client_request("Maria Souza", "maria@example.com", "22233344455"))

    # when
    created = await escritura_client.create_client(client_request(
        "Pedro Souza",
        "pedro@example.com",
        "33344455566",
        spouse_id=spouse.id,
        marital_status=MaritalStatus.MARRIED,
        property_regime=PropertyRegime.PARTIAL_COMMUNION,
    ))

    # then
    linked_spouse = await escritura_client.get_client(spouse.id)
    assert created.spouse_id == spouse.id
    assert linked_spouse.spouse_id == created.id
    assert linked_spouse.marital_status == MaritalStatus.MARRIED
    assert linked_spouse.property_regime == PropertyRegime.PARTIAL_COMMUNION


@pytest.mark.asyncio
async def test_remove_spouse_unlinks_both(escritura_client):
    spouse = await escritura_client.create_client(client_request("Maria Souza", "maria@example.com", "22233344455"))
    created = await escritura_client.create_client(
        client_request("Pedro Souza", "pedro@example.com", "33344455566", spouse_id=spouse.id)
    )

    updated = await escritura_client.update_client(created.id, UpdateClientRequest(remove_spouse=True))

    assert updated.spouse_id is None
    assert (await escritura_client.get_client(spouse.id)).spouse_id is None


@pytest.mark.asyncio
async def test_self_spouse_is_bad_request(escritura_client):
    created = await escritura_client.create_client(client_request("Ana", "ana@example.com", "11122233344"))

    with pytest.raises(HTTPStatusError) as exc_info:
        await escritura_client.update_client(created.id, UpdateClientRequest(spouse_id=created.id))

    error = cast(HTTPStatusError, exc_info.value)
    assert error.response.status_code == 400


@pytest.mark.asyncio
async def test_get_client_not_found(escritura_client):
    """Test getting a non-existent client returns 404."""
    with pytest.raises(HTTPStatusError) as exc_info:
        await escritura_client.get_client(uuid4())

    error = cast(HTTPStatusError, exc_info.value)
    assert error.response.status_code == 404
    assert "not found" in error.response.json()["detail"]


@pytest.mark.asyncio
async def test_update_client_not_found(escritura_client):
    with pytest.raises(HTTPStatusError) as exc_info:
        await escritura_client.update_client(uuid4(), UpdateClientRequest(name="Ninguém"))

    assert cast(HTTPStatusError, exc_info.value).response.status_code == 404


@pytest.mark.asyncio
async def test_delete_client_is_soft(escritura_client):
    created = await escritura_client.create_client(client_request("Ana", "ana@example.com", "11122233344"))

    deleted = await escritura_client.delete_client(created.id)

    assert deleted.status == ClientStatus.INACTIVE
    assert (await escritura_client.get_client(created.id)).status == ClientStatus.INACTIVE


@pytest.mark.asyncio
async def test_list_clients_paged_and_sorted(escritura_client):
    # given
    for name, email, tax_id in [
        ("Carla", "carla@example.com", "1"),
        ("Ana", "ana@example.com", "2"),
        ("Bruno", "bruno@example.com", "3"),
    ]:
        await escritura_client.create_client(client_request(name, email, tax_id))

    # when
    first_page = await escritura_client.list_clients(page=1, page_size=2, sort_by="name")
    second_page = await escritura_client.list_clients(page=2, page_size=2, sort_by="name")
    descending = await escritura_client.list_clients(sort_by="name", sort_order="desc")

    # then
    assert [client.name for client in first_page.items] == ["Ana", "Bruno"]
    assert [client.name for client in second_page.items] == ["Carla"]
    assert first_page.total == 3
    assert first_page.total_pages == 2
    assert [client.name for client in descending.items] == ["Carla", "Bruno", "Ana"]


@pytest.mark.asyncio
async def test_list_clients_by_status_and_search(escritura_client):
    active = await escritura_client.create_client(
        client_request("Ana Lima", "ana@example.com", "111.222.333-44", phone="(11) 98888-7777")
    )
    await escritura_client.create_client(
        client_request("Ana Pendente", "pendente@example.com", "5", status=ClientStatus.PENDING)
    )

    by_status = await escritura_client.list_clients(status="pending")
    by_phone = await escritura_client.list_clients(search="988887777")

    assert [client.name for client in by_status.items] == ["Ana Pendente"]
    assert [client.id for client in by_phone.items] == [active.id]


@pytest.mark.asyncio
async def test_search_and_lookup_by_ids(escritura_client):
    first = await escritura_client.create_client(client_request("Ana Lima", "ana@example.com", "1"))
    second = await escritura_client.create_client(client_request("Bruno Reis", "bruno@example.com", "2"))

    found = await escritura_client.search_clients("lima")
    by_ids = await escritura_client.get_clients_by_ids([second.id, first.id])
    candidates = await escritura_client.search_spouse_candidates(exclude_id=first.id)

    assert [client.id for client in found] == [first.id]
    assert [client.id for client in by_ids] == [second.id, first.id]
    assert [client.id for client in candidates] == [second.id]


@pytest.mark.asyncio
async def test_check_duplicates(escritura_client):
    existing = await escritura_client.create_client(
        client_request("Ana Lima", "ana@example.com", "111.222.333-44")
    )

    result = await escritura_client.check_duplicates(CheckDuplicatesRequest(
        name="ANA LIMA", email="outra@example.com", tax_id="11122233344"
    ))
    excluded = await escritura_client.check_duplicates(CheckDuplicatesRequest(
        name="Ana Lima", email="ana@example.com", tax_id="11122233344", exclude_id=existing.id
    ))

    assert result.name is True
    assert result.tax_id is True
    assert result.email is False
    assert result.phone is False
    assert not any([excluded.name, excluded.email, excluded.phone, excluded.tax_id])


@pytest.mark.asyncio
async def test_requests_without_token_are_rejected(http_client):
    response = await http_client.get("/api/v1/clients/")

    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_requests_with_unknown_token_are_rejected(http_client):
    response = await http_client.get(
        "/api/v1/clients/", headers={"Authorization": "Bearer not-a-valid-token"}
    )

    assert response.status_code == 401
