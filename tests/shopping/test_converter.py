"""Tests for converting recipe ingredients into shopping items."""

from __future__ import annotations

import logging

import pytest

from larder.config import Settings
from larder.models.ingredient import Ingredient
from larder.models.shopping import ShoppingListItem
from larder.shopping.converter import (
    UNKNOWN_ITEM,
    ConversionOptions,
    build_basic_item,
    coerce_item_name,
    convert_ingredients,
)
from larder.shopping.packages import CatalogPackageSizeEnricher, EnrichmentResult
from larder.shopping.units import SMALL_CONTAINER

NO_PACKAGES = ConversionOptions(use_package_sizes=False)


class RecordingEnricher:
    """Enricher double that returns a canned result and records calls."""

    timeout = 1.0

    def __init__(self, result=None, error: Exception | None = None):
        self.result = result
        self.error = error
        self.calls: list[ShoppingListItem] = []

    def enrich(self, item: ShoppingListItem) -> EnrichmentResult:
        self.calls.append(item)
        if self.error is not None:
            raise self.error
        if self.result is None:
            return EnrichmentResult.success(item.model_copy(
                update={"name": "Flour (5 lb)", "quantity": 99, "unit": "lb", "recipe_id": "other", "shop_size_qty": 5}
            ))
        return self.result


def test_string_ingredient_becomes_single_count_item():
    items = convert_ingredients(["salt"], recipe_id="r1", options=NO_PACKAGES)

    assert len(items) == 1
    item = items[0]
    assert (item.name, item.quantity, item.unit) == ("salt", 1, "")
    assert item.department == "Pantry"
    assert item.recipe_id == "r1"


def test_metric_measurements_are_preferred_by_default():
    ingredient = {"qty_metric": 1500, "unit_metric": "g", "qty_imperial": 3.3, "unit_imperial": "lb", "item": "potatoes"}

    (item,) = convert_ingredients([ingredient], options=NO_PACKAGES)

    assert (item.quantity, item.unit) == (1.5, "kg")
    assert (item.shop_size_qty, item.shop_size_unit) == (1.5, "kg")
    assert item.department == "Produce"


def test_imperial_measurements_when_requested():
    ingredient = Ingredient(qty_metric=480, unit_metric="ml", qty_imperial=2, unit_imperial="cups", item="milk")

    (item,) = convert_ingredients([ingredient], options=ConversionOptions(unit_system="imperial", use_package_sizes=False))

    assert (item.quantity, item.unit) == (2, "cup")
    assert item.department == "Dairy & Eggs"


def test_falls_back_to_unmarked_quantity_and_unit():
    (item,) = convert_ingredients([{"qty": 2, "unit": "tsp", "item": "cumin"}], options=NO_PACKAGES)
    assert (item.quantity, item.unit) == (1, SMALL_CONTAINER)

    (item,) = convert_ingredients([{"item": "basil", "notes": "fresh"}], options=NO_PACKAGES)
    assert (item.quantity, item.unit) == (0, "")
    assert item.notes == "fresh"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("  garlic ", "garlic"),
        ({"item": "flour"}, "flour"),
        (Ingredient(item="rice"), "rice"),
        ("", UNKNOWN_ITEM),
        (None, UNKNOWN_ITEM),
        (42, UNKNOWN_ITEM),
        ({"name": "flour"}, UNKNOWN_ITEM),
    ],
)
def test_coerce_item_name(raw, expected):
    assert coerce_item_name(raw) == expected


def test_malformed_item_values_become_unknown_item():
    items = convert_ingredients(
        [{"qty": 1, "unit": "cup", "item": {"item": "oats"}}, {"qty": 2, "item": ["x"]}, 17],
        options=NO_PACKAGES,
    )

    assert [item.name for item in items] == ["oats", UNKNOWN_ITEM, UNKNOWN_ITEM]
    assert items[2].quantity == 1


def test_small_quantities_are_not_rounded_away():
    (item,) = convert_ingredients([{"qty": 0.125, "unit": "cup", "item": "milk"}], options=NO_PACKAGES)

    assert (item.quantity, item.unit) == (0.125, "cup")


def test_unparseable_quantities_are_treated_as_zero():
    item = build_basic_item({"qty": "a pinch", "unit": "g", "item": "salt"})

    assert item.quantity == 0
    assert item.unit == "g"


@pytest.mark.parametrize("count", [0, 1, 5, 25])
def test_output_length_matches_input_length(count):
    ingredients = [{"qty": index, "unit": "g", "item": f"thing {index}"} for index in range(count)]
    ingredients += ["water"] * (count % 2)

    items = convert_ingredients(ingredients, options=NO_PACKAGES)

    assert len(items) == len(ingredients)


def test_enricher_success_adds_package_details_and_keeps_merge_fields():
    enricher = RecordingEnricher()

    (item,) = convert_ingredients(["flour"], recipe_id="r9", enricher=enricher)

    assert (item.name, item.quantity, item.unit) == ("flour", 1, "")
    assert item.shop_size_qty == 5
    assert item.recipe_id == "r9"
    assert len(enricher.calls) == 1


def test_enricher_failure_keeps_basic_item(caplog):
    enricher = RecordingEnricher(result=EnrichmentResult.failure("model offline"))

    with caplog.at_level(logging.WARNING, logger="larder.shopping.converter"):
        (item,) = convert_ingredients([{"qty": 200, "unit": "g", "item": "rice"}], enricher=enricher)

    assert (item.quantity, item.unit) == (200, "g")
    assert "model offline" in caplog.text


def test_enricher_exception_is_downgraded_to_basic_item(caplog):
    enricher = RecordingEnricher(error=RuntimeError("kaboom"))

    with caplog.at_level(logging.WARNING, logger="larder.shopping.converter"):
        items = convert_ingredients(["eggs", "milk"], enricher=enricher)

    assert [item.quantity for item in items] == [1, 1]
    assert len(enricher.calls) == 2
    assert "kaboom" in caplog.text


def test_enricher_not_called_when_package_sizes_disabled():
    enricher = RecordingEnricher()

    convert_ingredients(["flour"], options=NO_PACKAGES, enricher=enricher)

    assert enricher.calls == []


def test_catalog_enrichment_end_to_end():
    (flour, saffron) = convert_ingredients(
        [{"qty_metric": 500, "unit_metric": "g", "item": "flour"}, "saffron"],
        enricher=CatalogPackageSizeEnricher(),
    )

    assert (flour.quantity, flour.unit) == (500, "g")
    assert (flour.shop_size_qty, flour.shop_size_unit) == (2, "lb")
    assert flour.package_notes
    assert flour.confidence == pytest.approx(0.8)
    assert (saffron.quantity, saffron.unit) == (1, "")
    assert saffron.confidence is None


def test_conversion_options_from_settings():
    settings = Settings(default_unit_system="imperial", use_package_sizes=False)

    options = ConversionOptions.from_settings(settings)
    assert options == ConversionOptions(unit_system="imperial", use_package_sizes=False)

    overridden = ConversionOptions.from_settings(settings, unit_system="metric", use_package_sizes=None)
    assert overridden.unit_system == "metric"
    assert overridden.use_package_sizes is False
