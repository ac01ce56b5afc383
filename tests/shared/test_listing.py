from dataclasses import dataclass

import pytest

from src.shared.listing import SortOrder, filter_by_search, paginate, sort_items


@dataclass
class Row:
    name: str | None = None
    phone: str | None = None
    value: object = None


def test_search_is_case_insensitive_substring():
    rows = [Row(name="Ana Souza"), Row(name="Bruno Lima"), Row(name="Mariana")]

    result = filter_by_search(rows, "ANA", ["name"])

    assert [row.name for row in result] == ["Ana Souza", "Mariana"]


def test_search_matches_digit_fields_only_when_term_has_digits():
    rows = [Row(name="Ana", phone="(11) 3333-4444"), Row(name="Bia", phone="(21) 5555-6666")]

    assert filter_by_search(rows, "3333 4444", ["name"], ["phone"]) == [rows[0]]
    assert filter_by_search(rows, "bia", ["name"], ["phone"]) == [rows[1]]


def test_blank_search_returns_everything():
    rows = [Row(name="Ana"), Row(name="Bia")]

    assert filter_by_search(rows, "   ", ["name"]) == rows
    assert filter_by_search(rows, None, ["name"]) == rows


def test_sort_puts_missing_values_last_in_both_directions():
    rows = [Row(name=None, value=1), Row(name="b"), Row(name="a"), Row(name=None, value=2)]

    ascending = sort_items(rows, "name", SortOrder.ASC)
    descending = sort_items(rows, "name", SortOrder.DESC)

    assert [row.name for row in ascending] == ["a", "b", None, None]
    assert [row.name for row in descending] == ["b", "a", None, None]
    assert [row.value for row in ascending[2:]] == [1, 2]


def test_sort_ignores_accents_and_case():
    rows = [Row(name="Zélia"), Row(name="Álvaro"), Row(name="bruno"), Row(name="Érica"), Row(name="Alice")]

    ascending = sort_items(rows, "name", SortOrder.ASC)
    descending = sort_items(rows, "name", SortOrder.DESC)

    assert [row.name for row in ascending] == ["Alice", "Álvaro", "bruno", "Érica", "Zélia"]
    assert [row.name for row in descending] == ["Zélia", "Érica", "bruno", "Álvaro", "Alice"]


def test_sort_accented_and_plain_spellings_stay_adjacent():
    rows = [Row(name="Joao"), Row(name="Maria"), Row(name="João"), Row(name="Jose")]

    result = [row.name for row in sort_items(rows, "name")]

    assert result[:2] in (["Joao", "João"], ["João", "Joao"])
    assert result[2:] == ["Jose", "Maria"]


def test_sort_numbers_and_mixed_types():
    numbers = [Row(value=3), Row(value=1), Row(value=2.5)]
    assert [row.value for row in sort_items(numbers, "value")] == [1, 2.5, 3]

    mixed = [Row(value="x"), Row(value=1)]
    assert [row.value for row in sort_items(mixed, "value")] == ["x", 1]


def test_sort_without_field_keeps_order():
    rows = [Row(name="b"), Row(name="a")]

    assert sort_items(rows, None) == rows


def test_paginate_returns_slice_and_totals():
    page = paginate(list(range(23)), page=3, page_size=10)

    assert page.items == [20, 21, 22]
    assert page.total == 23
    assert page.total_pages == 3
    assert page.page == 3


def test_paginate_defaults_and_out_of_range_page():
    page = paginate(list(range(5)))
    assert page.page == 1
    assert page.page_size == 10
    assert page.items == [0, 1, 2, 3, 4]

    empty = paginate(list(range(5)), page=4, page_size=2)
    assert empty.items == []
    assert empty.total_pages == 3


def test_paginate_rejects_non_positive_values():
    with pytest.raises(ValueError):
        paginate([1, 2], page=1, page_size=-1)
