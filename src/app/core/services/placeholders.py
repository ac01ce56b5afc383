"""
Contract template rendering.

Templates contain ``{{ key }}`` tokens that are replaced with client, property,
notary office and date values formatted the Brazilian way. Tokens with an
unknown key are left in the text untouched.
"""
import re
from datetime import date, datetime
from decimal import Decimal
from typing import Callable

from pydantic import BaseModel

from src.app.core.domain.models import (
    Client,
    MaritalStatus,
    NotaryOffice,
    Property,
    PropertyRegime,
    PropertyType,
)
from src.shared.listing import digits_only

PLACEHOLDER_PATTERN = re.compile(r"\{\{([^}]+)\}\}")

MONTHS_PT_BR = [
    "janeiro", "fevereiro", "marco", "abril", "maio", "junho",
    "julho", "agosto", "setembro", "outubro", "novembro", "dezembro",
]

MARITAL_STATUS_LABELS = {
    MaritalStatus.SINGLE: "Solteiro(a)",
    MaritalStatus.COMMON_LAW_MARRIAGE: "União Estável",
    MaritalStatus.MARRIED: "Casado(a)",
    MaritalStatus.WIDOWED: "Viúvo(a)",
    MaritalStatus.DIVORCED: "Divorciado(a)",
}

PROPERTY_REGIME_LABELS = {
    PropertyRegime.PARTIAL_COMMUNION: "Comunhão Parcial de Bens",
    PropertyRegime.TOTAL_COMMUNION: "Comunhão Total de Bens",
    PropertyRegime.TOTAL_SEPARATION: "Separação Total de Bens",
}

PROPERTY_TYPE_LABELS = {
    PropertyType.LAND: "Terreno",
    PropertyType.HOUSE: "Casa",
    PropertyType.APARTMENT: "Apartamento",
    PropertyType.BUILDING: "Prédio",
}


class Placeholder(BaseModel):
    key: str
    label: str
    group: str


PLACEHOLDERS: list[Placeholder] = [
    Placeholder(key="client.name", label="Nome", group="Cliente"),
    Placeholder(key="client.cpf", label="CPF", group="Cliente"),
    Placeholder(key="client.email", label="Email", group="Cliente"),
    Placeholder(key="client.phone", label="Telefone", group="Cliente"),
    Placeholder(key="client.maritalStatus", label="Estado Civil", group="Cliente"),
    Placeholder(key="client.propertyRegime", label="Regime de Bens", group="Cliente"),
    Placeholder(key="client.fatherName", label="Nome do Pai", group="Cliente"),
    Placeholder(key="client.motherName", label="Nome da Mãe", group="Cliente"),
    Placeholder(key="property.address", label="Endereço Completo", group="Imóvel"),
    Placeholder(key="property.street", label="Logradouro", group="Imóvel"),
    Placeholder(key="property.number", label="Número", group="Imóvel"),
    Placeholder(key="property.complement", label="Complemento", group="Imóvel"),
    Placeholder(key="property.neighborhood", label="Bairro", group="Imóvel"),
    Placeholder(key="property.city", label="Cidade", group="Imóvel"),
    Placeholder(key="property.state", label="Estado", group="Imóvel"),
    Placeholder(key="property.zipCode", label="CEP", group="Imóvel"),
    Placeholder(key="property.area", label="Área (m²)", group="Imóvel"),
    Placeholder(key="property.value", label="Valor", group="Imóvel"),
    Placeholder(key="property.type", label="Tipo", group="Imóvel"),
    Placeholder(key="notaryOffice.name", label="Nome", group="Cartório"),
    Placeholder(key="notaryOffice.code", label="Código", group="Cartório"),
    Placeholder(key="notaryOffice.address", label="Endereço", group="Cartório"),
    Placeholder(key="notaryOffice.city", label="Cidade", group="Cartório"),
    Placeholder(key="date.current", label="Data Atual", group="Data"),
    Placeholder(key="date.currentExtended", label="Data por Extenso", group="Data"),
]


def format_tax_id(tax_id: str) -> str:
    """CPF as 000.000.000-00, CNPJ as 00.000.000/0000-00; anything else unchanged."""
    digits = digits_only(tax_id)
    if len(digits) == 11:
        return f"{digits[:3]}.{digits[3:6]}.{digits[6:9]}-{digits[9:]}"
    if len(digits) == 14:
        return f"{digits[:2]}.{digits[2:5]}.{digits[5:8]}/{digits[8:12]}-{digits[12:]}"
    return tax_id


def format_phone(phone: str) -> str:
    digits = digits_only(phone)
    if len(digits) == 11:
        return f"({digits[:2]}) {digits[2:7]}-{digits[7:]}"
    if len(digits) == 10:
        return f"({digits[:2]}) {digits[2:6]}-{digits[6:]}"
    return phone


def format_zip_code(zip_code: str) -> str:
    digits = digits_only(zip_code)
    if len(digits) == 8:
        return f"{digits[:5]}-{digits[5:]}"
    return zip_code


def _pt_br_number(value: float | Decimal) -> str:
    # 1,234.56 -> 1.234,56
    return f"{value:,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")


def format_currency(value: float | Decimal) -> str:
    return f"R$ {_pt_br_number(value)}"


def format_area(area: float) -> str:
    return f"{_pt_br_number(area)} m²"


def format_date(value: date) -> str:
    return value.strftime("%d/%m/%Y")


def format_date_extended(value: date) -> str:
    return f"{value.day} de {MONTHS_PT_BR[value.month - 1]} de {value.year}"


def _join_address(*parts: str | None) -> str:
    return ", ".join(part for part in parts if part)


def _notary_office_address(office: NotaryOffice) -> str:
    if not office.street:
        return ""
    return _join_address(office.street, office.number, office.complement)


def build_placeholder_values(
    client: Client,
    prop: Property,
    notary_office: NotaryOffice | None = None,
    today: date | None = None,
) -> dict[str, str]:
    """Formatted value of every known placeholder key for the given records."""
    today = today or datetime.now().date()
    values = {
        "client.name": client.name,
        "client.cpf": format_tax_id(client.tax_id) if client.tax_id else "",
        "client.email": str(client.email),
        "client.phone": format_phone(client.phone) if client.phone else "",
        "client.maritalStatus": MARITAL_STATUS_LABELS.get(client.marital_status, ""),
        "client.propertyRegime": PROPERTY_REGIME_LABELS.get(client.property_regime, ""),
        "client.fatherName": client.father_name or "",
        "client.motherName": client.mother_name or "",
        "property.address": _join_address(prop.street, prop.number, prop.complement),
        "property.street": prop.street,
        "property.number": prop.number,
        "property.complement": prop.complement or "",
        "property.neighborhood": prop.neighborhood,
        "property.city": prop.city,
        "property.state": prop.state,
        "property.zipCode": format_zip_code(prop.zip_code),
        "property.area": format_area(prop.area),
        "property.value": format_currency(prop.value),
        "property.type": PROPERTY_TYPE_LABELS.get(prop.type, str(prop.type)),
        "notaryOffice.name": notary_office.name if notary_office else "",
        "notaryOffice.code": notary_office.code if notary_office else "",
        "notaryOffice.address": _notary_office_address(notary_office) if notary_office else "",
        "notaryOffice.city": (notary_office.city or "") if notary_office else "",
        "date.current": format_date(today),
        "date.currentExtended": format_date_extended(today),
    }
    return values


def replace_placeholders(template: str, lookup: Callable[[str], str | None]) -> str:
    """Replace every ``{{ key }}`` token whose trimmed key resolves; keep the rest as written."""

    def substitute(match: re.Match) -> str:
        value = lookup(match.group(1).strip())
        return match.group(0) if value is None else value

    return PLACEHOLDER_PATTERN.sub(substitute, template)


def render_contract(
    template: str,
    client: Client,
    prop: Property,
    notary_office: NotaryOffice | None = None,
    today: date | None = None,
) -> str:
    values = build_placeholder_values(client, prop, notary_office, today)
    return replace_placeholders(template, values.get)
