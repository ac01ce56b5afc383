"""Duplicate detection for client and property records."""
from typing import Iterable
from uuid import UUID

from src.app.core.domain.models import Client, DuplicateFields, Property
from src.shared.listing import digits_only, normalize_for_search


def find_client_duplicates(
    clients: Iterable[Client],
    name: str,
    email: str,
    tax_id: str,
    phone: str | None = None,
    exclude_id: UUID | None = None,
) -> DuplicateFields:
    """
    Report which identifying fields of a candidate collide with another client.

    Name and email compare trimmed and lowercased, phone and tax ID compare by
    digits only. An empty value never collides.
    """
    wanted_name = normalize_for_search(name)
    wanted_email = normalize_for_search(email)
    wanted_phone = digits_only(phone)
    wanted_tax_id = digits_only(tax_id)

    result = DuplicateFields()
    for client in clients:
        if exclude_id is not None and client.id == exclude_id:
            continue
        if wanted_name and normalize_for_search(client.name) == wanted_name:
            result.name = True
        if wanted_email and normalize_for_search(client.email) == wanted_email:
            result.email = True
        if wanted_phone and digits_only(client.phone) == wanted_phone:
            result.phone = True
        if wanted_tax_id and digits_only(client.tax_id) == wanted_tax_id:
            result.tax_id = True
    return result


def is_duplicate_property(
    properties: Iterable[Property],
    street: str,
    number: str,
    zip_code: str,
    exclude_id: UUID | None = None,
) -> bool:
    """A property is a duplicate when street, number and zip code all match another one."""
    wanted = (normalize_for_search(street), normalize_for_search(number), digits_only(zip_code))
    for candidate in properties:
        if exclude_id is not None and candidate.id == exclude_id:
            continue
        key = (
            normalize_for_search(candidate.street),
            normalize_for_search(candidate.number),
            digits_only(candidate.zip_code),
        )
        if key == wanted:
            return True
    return False
