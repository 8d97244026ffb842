"""Shopping list models."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

_TRUE_STRINGS = {"1", "true", "yes", "on"}


def _optional_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


class ShoppingListItem(BaseModel):
    """Single line on a shopping list.

    Items are stored inside the ``shopping_lists.items`` JSON column, so the recipe
    reference keeps its historical ``recipeId`` spelling on the wire.
    """

    name: str = Field(default="")
    quantity: float = Field(default=0.0)
    unit: str = Field(default="")
    checked: bool = Field(default=False)
    notes: Optional[str] = Field(default=None)
    department: Optional[str] = Field(default=None)
    recipe_id: Optional[str] = Field(default=None, alias="recipeId")
    shop_size_qty: Optional[float] = Field(default=None)
    shop_size_unit: Optional[str] = Field(default=None)
    package_notes: Optional[str] = Field(default=None)
    confidence: Optional[float] = Field(default=None, ge=0, le=1)

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("name", "unit", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> str:
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)

    @field_validator("quantity", mode="before")
    @classmethod
    def coerce_quantity(cls, value: Any) -> float:
        if value is None or isinstance(value, bool):
            return 0.0
        try:
            return float(value)
        except (TypeError, ValueError):
            return 0.0

    @field_validator("checked", mode="before")
    @classmethod
    def coerce_checked(cls, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            return value == 1
        if isinstance(value, str):
            return value.strip().lower() in _TRUE_STRINGS
        return False

    @field_validator("notes", "department", "shop_size_unit", "package_notes", mode="before")
    @classmethod
    def coerce_optional_text(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        return value if isinstance(value, str) else str(value)

    @field_validator("recipe_id", mode="before")
    @classmethod
    def coerce_recipe_id(cls, value: Any) -> Optional[str]:
        if value is None or value == "":
            return None
        return str(value)

    @field_validator("shop_size_qty", mode="before")
    @classmethod
    def coerce_shop_size_qty(cls, value: Any) -> Optional[float]:
        return _optional_float(value)

    @field_validator("confidence", mode="before")
    @classmethod
    def clamp_confidence(cls, value: Any) -> Optional[float]:
        number = _optional_float(value)
        if number is None:
            return None
        return min(1.0, max(0.0, number))

    def to_json(self) -> dict[str, Any]:
        """Serialize for the JSON items column, omitting unset optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ShoppingList(BaseModel):
    """Persisted shopping list owned by a single user."""

    id: str
    title: str
    user_id: str
    items: list[ShoppingListItem] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = Field(default=None)

    model_config = ConfigDict(frozen=True)


class PackageSize(BaseModel):
    """Retail packaging information for a grocery ingredient."""

    ingredient: str
    category: str
    package_sizes: list[float] = Field(default_factory=list)
    package_unit: str
    standard_qty: Optional[float] = Field(default=None)
    standard_unit: Optional[str] = Field(default=None)
    metric_equiv: Optional[str] = Field(default=None)
    notes: Optional[str] = Field(default=None)

    model_config = ConfigDict(frozen=True)


__all__ = ["ShoppingListItem", "ShoppingList", "PackageSize"]
