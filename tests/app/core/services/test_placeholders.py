from datetime import date
from decimal import Decimal

import pytest

from src.app.core.domain.models import (
    Client,
    MaritalStatus,
    NotaryOffice,
    Property,
    PropertyRegime,
    PropertyType,
)
from src.app.core.services.placeholders import (
    PLACEHOLDERS,
    build_placeholder_values,
    format_area,
    format_currency,
    format_date_extended,
    format_phone,
    format_tax_id,
    format_zip_code,
    render_contract,
    replace_placeholders,
)

TODAY = date(2024, 3, 5)


@pytest.fixture
def client() -> Client:
    return Client(
        name="João da Silva",
        email="joao@example.com",
        tax_id="12345678901",
        phone="11987654321",
        marital_status=MaritalStatus.MARRIED,
        property_regime=PropertyRegime.PARTIAL_COMMUNION,
        father_name="José da Silva",
    )


@pytest.fixture
def prop() -> Property:
    return Property(
        zip_code="01310100",
        street="Avenida Paulista",
        number="1578",
        complement="Apto 42",
        neighborhood="Bela Vista",
        city="São Paulo",
        state="SP",
        type=PropertyType.APARTMENT,
        area=120.5,
        value=Decimal("350000.00"),
    )


@pytest.fixture
def notary_office() -> NotaryOffice:
    return NotaryOffice(name="1º Tabelionato de Notas", code="TAB-001", street="Rua Direita", number="10", city="São Paulo")


def test_formatters():
    assert format_tax_id("12345678901") == "123.456.789-01"
    assert format_tax_id("12345678000190") == "12.345.678/0001-90"
    assert format_tax_id("123") == "123"
    assert format_phone("11987654321") == "(11) 98765-4321"
    assert format_phone("1133334444") == "(11) 3333-4444"
    assert format_zip_code("01310100") == "01310-100"
    assert format_currency(Decimal("350000.00")) == "R$ 350.000,00"
    assert format_area(120.5) == "120,50 m²"
    assert format_date_extended(TODAY) == "5 de marco de 2024"


def test_every_catalogue_key_has_a_value(client, prop, notary_office):
    values = build_placeholder_values(client, prop, notary_office, TODAY)

    assert {placeholder.key for placeholder in PLACEHOLDERS} == set(values)


def test_render_contract_replaces_known_tokens(client, prop, notary_office):
    template = (
        "{{client.name}}, CPF {{ client.cpf }}, {{client.maritalStatus}} sob o regime de "
        "{{client.propertyRegime}}, compra o imóvel em {{property.address}} por {{property.value}}. "
        "Lavrado em {{notaryOffice.name}}, {{date.current}}."
    )

    rendered = render_contract(template, client, prop, notary_office, TODAY)

    assert rendered == (
        "João da Silva, CPF 123.456.789-01, Casado(a) sob o regime de "
        "Comunhão Parcial de Bens, compra o imóvel em Avenida Paulista, 1578, Apto 42 por R$ 350.000,00. "
        "Lavrado em 1º Tabelionato de Notas, 05/03/2024."
    )


def test_unknown_tokens_are_kept(client, prop):
    rendered = render_contract("{{client.name}} / {{buyer.nickname}}", client, prop, today=TODAY)

    assert rendered == "João da Silva / {{buyer.nickname}}"


def test_missing_notary_office_renders_empty(client, prop):
    rendered = render_contract("[{{notaryOffice.name}}]", client, prop, today=TODAY)

    assert rendered == "[]"


def test_replace_placeholders_with_custom_lookup():
    assert replace_placeholders("{{a}}-{{b}}", {"a": "1"}.get) == "1-{{b}}"
