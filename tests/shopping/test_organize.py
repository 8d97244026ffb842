"""Tests for list organization and plain-text export."""

from __future__ import annotations

from larder.models.shopping import ShoppingListItem
from larder.shopping.organize import ALL_ITEMS, capitalize_name, format_for_clipboard, organize_items

ITEMS = [
    ShoppingListItem(name="whole milk", quantity=2, unit="cup", department="Dairy & Eggs"),
    ShoppingListItem(name="water", quantity=1, department="Beverages"),
    ShoppingListItem(name="flour", quantity=750, unit="g", department="Pantry", notes="sifted"),
    ShoppingListItem(name="basil", quantity=1, unit="bunch", department="Produce", checked=True),
    ShoppingListItem(name="almond milk", quantity=1.5, unit="l", department="Beverages"),
]


def test_capitalize_name():
    assert capitalize_name("extra virgin olive oil") == "Extra Virgin Olive Oil"
    assert capitalize_name("") == ""


def test_organize_groups_by_department_and_hides_water():
    groups = organize_items(ITEMS)

    assert list(groups) == ["Produce", "Dairy & Eggs", "Pantry", "Beverages"]
    assert [item.name for item in groups["Beverages"]] == ["Almond Milk"]


def test_organize_search_is_case_insensitive():
    groups = organize_items(ITEMS, search="MILK")

    assert list(groups) == ["Dairy & Eggs", "Beverages"]


def test_organize_sorted_by_name():
    ascending = organize_items(ITEMS, sort="asc")
    descending = organize_items(ITEMS, sort="desc")

    assert list(ascending) == [ALL_ITEMS]
    assert [item.name for item in ascending[ALL_ITEMS]] == ["Almond Milk", "Basil", "Flour", "Whole Milk"]
    assert [item.name for item in descending[ALL_ITEMS]] == ["Whole Milk", "Flour", "Basil", "Almond Milk"]


def test_format_for_clipboard():
    text = format_for_clipboard(ITEMS)

    assert text == (
        "## Produce\n"
        "[x] 1 bunch Basil\n"
        "\n"
        "## Dairy & Eggs\n"
        "[ ] 2 cup Whole Milk\n"
        "\n"
        "## Pantry\n"
        "[ ] 750 g Flour (sifted)\n"
        "\n"
        "## Beverages\n"
        "[ ] 1.5 l Almond Milk"
    )


def test_format_for_clipboard_handles_empty_lists():
    assert format_for_clipboard([]) == ""
