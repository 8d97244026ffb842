"""Tests for grocery department classification."""

from __future__ import annotations

import pytest

from larder.models.shopping import ShoppingListItem
from larder.shopping.departments import (
    DEPARTMENT_DISPLAY_ORDER,
    OTHER,
    classify_department,
    department_rank,
    group_by_department,
)


@pytest.mark.parametrize(
    ("name", "department"),
    [
        ("spinach", "Produce"),
        ("Red Onion", "Produce"),
        ("eggplant", "Produce"),
        ("chicken thighs", "Meat & Seafood"),
        ("ribeye steak", "Meat & Seafood"),
        ("whole milk", "Dairy & Eggs"),
        ("eggs", "Dairy & Eggs"),
        ("sourdough bread", "Bakery"),
        ("all-purpose flour", "Pantry"),
        ("beef broth", "Pantry"),
        ("chicken stock", "Pantry"),
        ("tomato sauce", "Pantry"),
        ("peanut butter", "Pantry"),
        ("coconut milk", "Pantry"),
        ("ground black pepper", "Pantry"),
        ("vanilla ice cream", "Frozen"),
        ("frozen peas", "Frozen"),
        ("orange juice", "Beverages"),
        ("sparkling water", "Beverages"),
    ],
)
def test_classify_department(name, department):
    assert classify_department(name) == department


def test_classify_department_falls_back_to_other():
    assert classify_department("xyzabc123") == OTHER
    assert classify_department("") == OTHER
    assert classify_department("   ") == OTHER
    assert classify_department(None) == OTHER
    assert classify_department(42) == OTHER


def test_classify_department_does_not_match_inside_unrelated_words():
    assert classify_department("champagne") != "Meat & Seafood"
    assert classify_department("graham crackers") != "Meat & Seafood"


def test_department_rank_follows_display_order():
    ranks = [department_rank(name) for name in DEPARTMENT_DISPLAY_ORDER]
    assert ranks == sorted(ranks)
    assert department_rank("Unknown aisle") == department_rank(OTHER)
    assert department_rank(None) == department_rank(OTHER)


def test_group_by_department_orders_groups():
    items = [
        ShoppingListItem(name="wine", department="Beverages"),
        ShoppingListItem(name="mystery"),
        ShoppingListItem(name="kale", department="Produce"),
        ShoppingListItem(name="apples", department="Produce"),
    ]

    groups = group_by_department(items)

    assert list(groups) == ["Produce", "Beverages", OTHER]
    assert [item.name for item in groups["Produce"]] == ["kale", "apples"]
