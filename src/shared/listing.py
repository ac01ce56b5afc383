"""
Collection-agnostic search, sort and pagination helpers.

Records are read as attributes (pydantic models, dataclasses or ORM rows all work),
so the same helpers serve every listing endpoint.
"""
import locale
import math
import re
import unicodedata
from enum import StrEnum
from functools import cmp_to_key
from typing import Any, Generic, Iterable, Sequence, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10

_NON_DIGITS = re.compile(r"\D")


class SortOrder(StrEnum):
    ASC = "asc"
    DESC = "desc"


class Page(BaseModel, Generic[T]):
    """One page of a filtered, sorted collection."""
    items: list[T]
    total: int = Field(..., ge=0)
    page: int = Field(..., ge=1)
    page_size: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=0)

    model_config = {"arbitrary_types_allowed": True}


def digits_only(value: str | None) -> str:
    """Strip everything but digits (CPF, phone, CEP comparisons)."""
    if not value:
        return ""
    return _NON_DIGITS.sub("", value)


def normalize_for_search(value: str | None) -> str:
    if not value:
        return ""
    return value.lower().strip()


def matches_search(
    item: Any,
    search: str,
    text_fields: Sequence[str],
    digit_fields: Sequence[str] = (),
) -> bool:
    """
    Check whether a record matches a free-text search term.

    Text fields match on a case-insensitive substring. Digit fields (phone, zip code)
    match on the digits of the term, and only when the term contains digits.
    """
    term = normalize_for_search(search)
    if not term:
        return True

    for field in text_fields:
        value = getattr(item, field, None)
        if isinstance(value, str) and term in value.lower():
            return True

    term_digits = digits_only(search)
    if term_digits:
        for field in digit_fields:
            value = getattr(item, field, None)
            if isinstance(value, str) and term_digits in digits_only(value):
                return True

    return False


def filter_by_search(
    items: Iterable[T],
    search: str | None,
    text_fields: Sequence[str],
    digit_fields: Sequence[str] = (),
) -> list[T]:
    if not search or not search.strip():
        return list(items)
    return [item for item in items if matches_search(item, search, text_fields, digit_fields)]


def _collation_key(value: str) -> str:
    """Casefolded text with accents stripped, so 'Álvaro' sorts beside 'alvaro'."""
    decomposed = unicodedata.normalize("NFKD", value.casefold())
    return "".join(char for char in decomposed if not unicodedata.combining(char))


def _compare_values(a: Any, b: Any) -> int:
    if isinstance(a, str) and isinstance(b, str):
        # accents and case only break ties
        for left, right in ((_collation_key(a), _collation_key(b)), (a.casefold(), b.casefold()), (a, b)):
            result = locale.strcoll(left, right)
            if result:
                return result
        return 0
    # bool is an int subclass but ordering flags against numbers is meaningless
    if isinstance(a, bool) or isinstance(b, bool):
        return (a > b) - (a < b) if type(a) is type(b) else 0
    if isinstance(a, (int, float)) and isinstance(b, (int, float)):
        return (a > b) - (a < b)
    if type(a) is type(b):
        try:
            return (a > b) - (a < b)
        except TypeError:
            return 0
    return 0


def sort_items(
    items: Iterable[T],
    sort_by: str | None,
    sort_order: SortOrder | str = SortOrder.ASC,
) -> list[T]:
    """
    Stable sort by a named attribute.

    Records whose value is missing or None go last in both directions and keep
    their relative order. Values of different types compare as equal.
    """
    records = list(items)
    if not sort_by:
        return records

    descending = SortOrder(sort_order) == SortOrder.DESC
    present = [item for item in records if getattr(item, sort_by, None) is not None]
    missing = [item for item in records if getattr(item, sort_by, None) is None]

    def compare(a: T, b: T) -> int:
        result = _compare_values(getattr(a, sort_by), getattr(b, sort_by))
        return -result if descending else result

    return sorted(present, key=cmp_to_key(compare)) + missing


def paginate(items: Sequence[T], page: int | None = None, page_size: int | None = None) -> Page[T]:
    current_page = page or DEFAULT_PAGE
    current_page_size = page_size or DEFAULT_PAGE_SIZE
    if current_page < 1 or current_page_size < 1:
        raise ValueError("page and page_size must be positive")

    skip = (current_page - 1) * current_page_size
    total = len(items)
    return Page(
        items=list(items[skip:skip + current_page_size]),
        total=total,
        page=current_page,
        page_size=current_page_size,
        total_pages=math.ceil(total / current_page_size),
    )
