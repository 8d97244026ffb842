"""Unit canonicalization and shopping-practical quantity upgrades.

A single alias table backs every unit comparison in the package. The converter uses it
before applying the practical upgrade rules and the merge engine uses it to build match
keys, so an item normalized on the way in always matches itself on the way back.
"""

from __future__ import annotations

from typing import Any, Dict, NamedTuple, Optional

SMALL_CONTAINER = "small container"

_UNIT_ALIASES: Dict[str, tuple[str, ...]] = {
    "mg": ("mg", "milligram", "milligrams"),
    "g": ("g", "gr", "gm", "gms", "gram", "grams", "gramme", "grammes"),
    "kg": ("kg", "kgs", "kilo", "kilos", "kilogram", "kilograms"),
    "oz": ("oz", "ozs", "ounce", "ounces"),
    "lb": ("lb", "lbs", "pound", "pounds"),
    "ml": ("ml", "mls", "milliliter", "milliliters", "millilitre", "millilitres"),
    "l": ("l", "ltr", "liter", "liters", "litre", "litres"),
    "tsp": ("tsp", "tsps", "teaspoon", "teaspoons", "t"),
    "tbsp": ("tbsp", "tbsps", "tbs", "tbl", "tblsp", "tablespoon", "tablespoons"),
    "cup": ("cup", "cups", "c"),
    "fl oz": ("fl oz", "fl. oz", "floz", "fluid ounce", "fluid ounces"),
    "pint": ("pint", "pints", "pt"),
    "quart": ("quart", "quarts", "qt"),
    "gallon": ("gallon", "gallons", "gal"),
    "count": ("count", "ct", "ea", "each", "whole"),
    "clove": ("clove", "cloves"),
    "can": ("can", "cans"),
    "piece": ("piece", "pieces", "pc", "pcs"),
    "slice": ("slice", "slices"),
    "bunch": ("bunch", "bunches"),
    "head": ("head", "heads"),
    "package": ("package", "packages", "pkg", "pack", "packs"),
    "pinch": ("pinch", "pinches"),
    "sprig": ("sprig", "sprigs"),
    "stick": ("stick", "sticks"),
    SMALL_CONTAINER: (SMALL_CONTAINER, "small containers"),
}

UNIT_ALIASES: Dict[str, str] = {
    alias: canonical for canonical, aliases in _UNIT_ALIASES.items() for alias in aliases
}

# Factors to the family base unit (grams for weight, millilitres for volume).
WEIGHT_FACTORS: Dict[str, float] = {
    "mg": 0.001,
    "g": 1.0,
    "kg": 1000.0,
    "oz": 28.3495,
    "lb": 453.592,
}

VOLUME_FACTORS: Dict[str, float] = {
    "ml": 1.0,
    "l": 1000.0,
    "tsp": 4.92892,
    "tbsp": 14.7868,
    "cup": 240.0,
    "fl oz": 29.5735,
    "pint": 473.176,
    "quart": 946.353,
    "gallon": 3785.41,
}

COUNT_UNITS = frozenset(
    {"count", "clove", "can", "piece", "slice", "bunch", "head", "package", "stick", "sprig"}
)


class ShoppingQuantity(NamedTuple):
    """Quantity and unit chosen for purchasing."""

    qty: float
    unit: str


def canonical_unit(unit: Any) -> str:
    """Map a raw unit spelling to its canonical token.

    Unknown units come back lower-cased and stripped; missing units become ``""``.
    """
    if not isinstance(unit, str):
        return ""
    stripped = unit.strip()
    # Recipe shorthand distinguishes "T" (tablespoon) from "t" (teaspoon).
    if stripped == "T":
        return "tbsp"
    lowered = " ".join(stripped.lower().split())
    if lowered.endswith(".") and lowered != ".":
        lowered = lowered[:-1]
    return UNIT_ALIASES.get(lowered, lowered)


def unit_family(unit: Any) -> str:
    """Return ``weight``, ``volume``, ``count`` or ``other`` for a unit."""
    canonical = canonical_unit(unit)
    if canonical in WEIGHT_FACTORS:
        return "weight"
    if canonical in VOLUME_FACTORS:
        return "volume"
    if canonical in COUNT_UNITS:
        return "count"
    return "other"


def _as_number(value: Any) -> float:
    if isinstance(value, bool) or value is None:
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def trim_float_noise(value: float) -> float:
    """Drop binary float noise (0.1 + 0.2) while keeping small amounts intact."""
    return float(f"{value:.12g}")


def shopping_quantity(quantity: Any, unit: Any) -> ShoppingQuantity:
    """Convert a recipe measurement into a shopping-practical quantity.

    Rules are evaluated in order and the first match wins:

    * 1000 g or more becomes kilograms
    * 1000 ml or more becomes litres
    * 3 tsp or more becomes tablespoons
    * 16 tbsp or more becomes cups
    * 2 tsp/tbsp or less becomes one "small container" (nobody buys half a teaspoon)

    Anything else is returned with its canonical unit. The function never raises.
    """
    qty = _as_number(quantity)
    canonical = canonical_unit(unit)

    if canonical == "g" and qty >= 1000:
        return ShoppingQuantity(trim_float_noise(qty / 1000), "kg")
    if canonical == "ml" and qty >= 1000:
        return ShoppingQuantity(trim_float_noise(qty / 1000), "l")
    if canonical == "tsp" and qty >= 3:
        return ShoppingQuantity(trim_float_noise(qty / 3), "tbsp")
    if canonical == "tbsp" and qty >= 16:
        return ShoppingQuantity(trim_float_noise(qty / 16), "cup")
    if canonical in ("tsp", "tbsp") and qty <= 2:
        return ShoppingQuantity(1.0, SMALL_CONTAINER)
    return ShoppingQuantity(qty, canonical)


def convert_quantity(quantity: float, from_unit: Any, to_unit: Any) -> Optional[float]:
    """Convert ``quantity`` between two units of the same family.

    Returns ``None`` when the units are unknown or belong to different families.
    """
    source = canonical_unit(from_unit)
    target = canonical_unit(to_unit)
    if source == target:
        return float(quantity)
    for factors in (WEIGHT_FACTORS, VOLUME_FACTORS):
        if source in factors and target in factors:
            return float(quantity) * factors[source] / factors[target]
    return None


__all__ = [
    "SMALL_CONTAINER",
    "UNIT_ALIASES",
    "ShoppingQuantity",
    "canonical_unit",
    "convert_quantity",
    "shopping_quantity",
    "trim_float_noise",
    "unit_family",
]
