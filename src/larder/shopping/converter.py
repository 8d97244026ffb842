"""Convert recipe ingredients into shopping list items."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Iterable, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from larder import metrics
from larder.config import Settings, get_settings
from larder.models.ingredient import Ingredient, UnitSystem
from larder.models.shopping import ShoppingListItem
from larder.shopping.departments import classify_department
from larder.shopping.packages import PackageSizeEnricher
from larder.shopping.units import shopping_quantity

logger = logging.getLogger(__name__)

UNKNOWN_ITEM = "Unknown item"
# Merge-key fields, kept from the converted item after enrichment.
_PRESERVED_FIELDS = ("name", "quantity", "unit", "recipe_id")

IngredientLike = Union[Ingredient, str, Mapping, Any]


class ConversionOptions(BaseModel):
    """Per-call conversion preferences."""

    unit_system: UnitSystem = Field(default="metric")
    use_package_sizes: bool = Field(default=True)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_settings(cls, settings: Settings | None = None, **overrides: Any) -> "ConversionOptions":
        """Build options from application settings, letting explicit values win."""
        settings = settings or get_settings()
        payload: dict[str, Any] = {
            "unit_system": settings.default_unit_system,
            "use_package_sizes": settings.use_package_sizes,
        }
        payload.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**payload)


def coerce_item_name(raw: Any) -> str:
    """Return a display name for an ingredient ``item`` value of any shape."""

    if isinstance(raw, str):
        return raw.strip() or UNKNOWN_ITEM
    nested = raw.get("item") if isinstance(raw, Mapping) else getattr(raw, "item", None)
    if isinstance(nested, str) and nested.strip():
        return nested.strip()
    return UNKNOWN_ITEM


def _select_measurement(ingredient: Ingredient, unit_system: str) -> tuple[float, str]:
    if unit_system == "imperial":
        qty, unit = ingredient.qty_imperial, ingredient.unit_imperial
    else:
        qty, unit = ingredient.qty_metric, ingredient.unit_metric
    if qty is None:
        qty = ingredient.qty
    if not unit:
        unit = ingredient.unit
    return (qty if qty is not None else 0.0), (unit or "")


def build_basic_item(
    ingredient: IngredientLike,
    *,
    unit_system: str = "metric",
    recipe_id: Optional[str] = None,
) -> ShoppingListItem:
    """Create the deterministic shopping item for one ingredient (no enrichment)."""

    if isinstance(ingredient, str) or not isinstance(ingredient, (Ingredient, Mapping)):
        name = coerce_item_name(ingredient)
        return ShoppingListItem(
            name=name,
            quantity=1,
            unit="",
            department=classify_department(name),
            recipe_id=recipe_id,
        )

    if isinstance(ingredient, Mapping):
        ingredient = Ingredient.model_validate(dict(ingredient))

    name = coerce_item_name(ingredient.item)
    qty, unit = _select_measurement(ingredient, unit_system)
    practical = shopping_quantity(qty, unit)
    return ShoppingListItem(
        name=name,
        quantity=practical.qty,
        unit=practical.unit,
        notes=ingredient.notes or None,
        department=classify_department(name),
        recipe_id=recipe_id,
        shop_size_qty=practical.qty,
        shop_size_unit=practical.unit,
    )


def _apply_enrichment(item: ShoppingListItem, enricher: PackageSizeEnricher) -> ShoppingListItem:
    try:
        result = enricher.enrich(item)
    except Exception as exc:
        logger.warning("Package size enricher raised for %s: %s", item.name, exc)
        metrics.ENRICHMENT_RESULTS.labels(status="error").inc()
        return item

    metrics.ENRICHMENT_RESULTS.labels(status=result.status).inc()
    if result.ok:
        return result.item.model_copy(update={field: getattr(item, field) for field in _PRESERVED_FIELDS})
    if result.status == "skipped":
        logger.debug("No package size for %s: %s", item.name, result.reason)
    else:
        logger.warning("Package size enrichment failed for %s: %s", item.name, result.reason)
    return item


def convert_ingredients(
    ingredients: Iterable[IngredientLike],
    recipe_id: Optional[str] = None,
    options: Optional[ConversionOptions] = None,
    enricher: Optional[PackageSizeEnricher] = None,
) -> List[ShoppingListItem]:
    """Convert recipe ingredients into shopping items, one item per ingredient.

    Quantities are taken from the unit system in ``options`` (falling back to the
    unmarked ``qty``/``unit``), upgraded to shopping-practical units and classified by
    department. When package sizes are enabled and an enricher is given, each item gets
    one enrichment attempt; any skip or failure keeps the basic item.
    """
    options = options or ConversionOptions()
    entries = list(ingredients or [])
    logger.debug(
        "Converting %s ingredient(s) unit_system=%s package_sizes=%s",
        len(entries),
        options.unit_system,
        options.use_package_sizes,
    )

    items: List[ShoppingListItem] = []
    for ingredient in entries:
        item = build_basic_item(ingredient, unit_system=options.unit_system, recipe_id=recipe_id)
        if options.use_package_sizes and enricher is not None:
            item = _apply_enrichment(item, enricher)
        items.append(item)
    return items


__all__ = [
    "ConversionOptions",
    "UNKNOWN_ITEM",
    "build_basic_item",
    "coerce_item_name",
    "convert_ingredients",
]
