"""Recipe ingredient models consumed by the shopping pipeline."""

from __future__ import annotations

from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

UnitSystem = Literal["metric", "imperial"]


def _lenient_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


class Ingredient(BaseModel):
    """Single recipe ingredient with optional metric and imperial measurements.

    ``item`` is normally the ingredient name, but generated recipes occasionally nest it
    (``{"item": "flour"}``), so any JSON value is accepted and coerced downstream.
    """

    qty: Optional[float] = Field(default=None)
    unit: Optional[str] = Field(default=None)
    qty_metric: Optional[float] = Field(default=None)
    unit_metric: Optional[str] = Field(default=None)
    qty_imperial: Optional[float] = Field(default=None)
    unit_imperial: Optional[str] = Field(default=None)
    item: Any = Field(default=None)
    notes: Optional[str] = Field(default=None)

    model_config = ConfigDict(frozen=True)

    @field_validator("qty", "qty_metric", "qty_imperial", mode="before")
    @classmethod
    def coerce_quantity(cls, value: Any) -> Optional[float]:
        """Treat unparseable quantities ("a pinch") as missing."""
        return _lenient_float(value)

    @field_validator("unit", "unit_metric", "unit_imperial", "notes", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        return value if isinstance(value, str) else str(value)


class Recipe(BaseModel):
    """Recipe payload handed to the shopping-list operations."""

    id: Optional[str] = Field(default=None)
    title: str = Field(default="")
    ingredients: list[Union[str, Ingredient]] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        return str(value)


__all__ = ["Ingredient", "Recipe", "UnitSystem"]
