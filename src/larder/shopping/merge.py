"""Merge shopping items into an existing list without duplicating entries."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Optional, Tuple

from pydantic import ValidationError

from larder import metrics
from larder.models.shopping import ShoppingListItem
from larder.shopping.departments import department_rank
from larder.shopping.units import canonical_unit, trim_float_noise

logger = logging.getLogger(__name__)

DEFAULT_CONFIDENCE = 0.5
NOTES_SEPARATOR = "; "
RECIPE_ID_SEPARATOR = ","

_PUNCTUATION = re.compile(r"[.,/#!$%^&*;:{}=\-_`~()]")
_PACKAGE_FIELDS = ("shop_size_qty", "shop_size_unit", "package_notes")

MergeKey = Tuple[str, str]


def normalize_item_name(name: Any) -> str:
    """Lower-case a name, strip punctuation and collapse whitespace."""
    if not isinstance(name, str):
        return ""
    return " ".join(_PUNCTUATION.sub("", name.lower()).split())


def merge_key(item: ShoppingListItem) -> MergeKey:
    return normalize_item_name(item.name), canonical_unit(item.unit)


def _coerce_item(value: Any) -> Optional[ShoppingListItem]:
    if isinstance(value, ShoppingListItem):
        return value
    if isinstance(value, Mapping):
        try:
            return ShoppingListItem.model_validate(dict(value))
        except ValidationError as exc:
            logger.warning("Dropping unreadable shopping item %r: %s", value, exc)
            return None
    logger.warning("Dropping shopping item of unsupported type %s", type(value).__name__)
    return None


def _split(value: Optional[str], separator: str) -> List[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(separator) if part.strip()]


def _join_distinct(current: Optional[str], incoming: Optional[str], separator: str) -> Optional[str]:
    parts = _split(current, separator)
    for part in _split(incoming, separator):
        if part not in parts:
            parts.append(part)
    if not parts:
        return None
    return separator.join(parts)


def _combine_confidence(current: Optional[float], incoming: Optional[float]) -> Optional[float]:
    if current is None and incoming is None:
        return None
    return max(
        current if current is not None else DEFAULT_CONFIDENCE,
        incoming if incoming is not None else DEFAULT_CONFIDENCE,
    )


def combine_items(existing: ShoppingListItem, incoming: ShoppingListItem) -> ShoppingListItem:
    """Fold ``incoming`` into ``existing``.

    Quantities add up, distinct notes and recipe ids are joined, package details keep
    the first value seen and the checked flag of the existing entry is preserved.
    """
    update: Dict[str, Any] = {
        "quantity": trim_float_noise(existing.quantity + incoming.quantity),
        "notes": _join_distinct(existing.notes, incoming.notes, NOTES_SEPARATOR),
        "recipe_id": _join_distinct(existing.recipe_id, incoming.recipe_id, RECIPE_ID_SEPARATOR),
        "department": existing.department or incoming.department,
        "confidence": _combine_confidence(existing.confidence, incoming.confidence),
    }
    for field in _PACKAGE_FIELDS:
        current = getattr(existing, field)
        update[field] = current if current is not None else getattr(incoming, field)
    return existing.model_copy(update=update)


def sort_shopping_items(items: Iterable[ShoppingListItem]) -> List[ShoppingListItem]:
    """Order items by department display order, then by lower-cased name."""
    return sorted(items, key=lambda item: (department_rank(item.department), item.name.lower()))


def merge_shopping_items(existing: Any, new: Iterable[Any]) -> List[ShoppingListItem]:
    """Merge ``new`` items into ``existing`` and return the sorted result.

    Items match when their normalized names and canonical units agree. Matching items
    are combined (see :func:`combine_items`); new items that match nothing, including
    earlier items of the same batch, are appended. Inputs are never mutated.
    """
    if existing is None:
        existing = []
    elif not isinstance(existing, (list, tuple)):
        logger.warning("Existing shopping items are not a list (%s); starting fresh", type(existing).__name__)
        existing = []

    merged: List[ShoppingListItem] = []
    positions: Dict[MergeKey, int] = {}

    for raw in existing:
        item = _coerce_item(raw)
        if item is None:
            continue
        positions.setdefault(merge_key(item), len(merged))
        merged.append(item)

    combined = added = 0
    for raw in new or []:
        item = _coerce_item(raw)
        if item is None:
            continue
        key = merge_key(item)
        position = positions.get(key)
        if position is None:
            positions[key] = len(merged)
            merged.append(item)
            added += 1
        else:
            merged[position] = combine_items(merged[position], item)
            combined += 1

    if combined:
        metrics.MERGED_ITEMS.labels(result="combined").inc(combined)
    if added:
        metrics.MERGED_ITEMS.labels(result="added").inc(added)
    logger.debug("Merged shopping items combined=%s added=%s total=%s", combined, added, len(merged))
    return sort_shopping_items(merged)


__all__ = [
    "combine_items",
    "merge_key",
    "merge_shopping_items",
    "normalize_item_name",
    "sort_shopping_items",
]
