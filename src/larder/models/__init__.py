"""Pydantic models defining shared data contracts."""

from larder.models.ingredient import Ingredient, Recipe, UnitSystem
from larder.models.shopping import PackageSize, ShoppingList, ShoppingListItem

__all__ = [
    "Ingredient",
    "Recipe",
    "UnitSystem",
    "PackageSize",
    "ShoppingList",
    "ShoppingListItem",
]
