"""Recipe-to-shopping-list consolidation pipeline."""

from .converter import ConversionOptions, convert_ingredients
from .departments import DEPARTMENT_DISPLAY_ORDER, classify_department
from .merge import merge_shopping_items, normalize_item_name
from .organize import format_for_clipboard, organize_items
from .packages import build_package_size_enricher
from .units import canonical_unit, shopping_quantity

__all__ = [
    "ConversionOptions",
    "DEPARTMENT_DISPLAY_ORDER",
    "build_package_size_enricher",
    "canonical_unit",
    "classify_department",
    "convert_ingredients",
    "format_for_clipboard",
    "merge_shopping_items",
    "normalize_item_name",
    "organize_items",
    "shopping_quantity",
]
