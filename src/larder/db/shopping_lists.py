"""Shopping list persistence helpers."""
# mypy: ignore-errors

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Optional, Union

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from larder.models.ingredient import Recipe
from larder.models.shopping import ShoppingList, ShoppingListItem
from larder.shopping.converter import ConversionOptions, convert_ingredients
from larder.shopping.merge import merge_shopping_items
from larder.shopping.packages import PackageSizeEnricher

from .models import ShoppingListORM, utcnow
from .repository import session_scope

logger = logging.getLogger(__name__)

RecipeLike = Union[Recipe, Mapping[str, Any]]
ItemLike = Union[ShoppingListItem, Mapping[str, Any]]


def _load_items(row: ShoppingListORM) -> List[ShoppingListItem]:
    raw = row.items if isinstance(row.items, list) else []
    return [ShoppingListItem.model_validate(entry) for entry in raw if isinstance(entry, dict)]


def _dump_items(items: Iterable[ShoppingListItem]) -> list[dict[str, Any]]:
    return [item.to_json() for item in items]


def _to_model(row: ShoppingListORM) -> ShoppingList:
    return ShoppingList.model_validate(
        {
            "id": row.id,
            "title": row.title,
            "user_id": row.user_id,
            "items": _load_items(row),
            "created_at": row.created_at,
            "updated_at": row.updated_at,
            "deleted_at": row.deleted_at,
        }
    )


def _get_active(session: Session, list_id: str) -> ShoppingListORM:
    row = session.get(ShoppingListORM, list_id)
    if row is None or row.deleted_at is not None:
        raise ValueError(f"Shopping list {list_id} not found")
    return row


def _write_items(row: ShoppingListORM, items: Iterable[ShoppingListItem]) -> None:
    row.items = _dump_items(items)
    row.updated_at = utcnow()


def _clean_title(title: str) -> str:
    cleaned = (title or "").strip()
    if not cleaned:
        raise ValueError("Shopping list title must not be empty")
    return cleaned


def _as_recipe(recipe: RecipeLike) -> Recipe:
    return recipe if isinstance(recipe, Recipe) else Recipe.model_validate(dict(recipe))


def _recipe_items(
    recipe: Recipe,
    options: Optional[ConversionOptions],
    enricher: Optional[PackageSizeEnricher],
) -> List[ShoppingListItem]:
    return convert_ingredients(recipe.ingredients, recipe_id=recipe.id, options=options, enricher=enricher)


def list_shopping_lists(user_id: str, search: Optional[str] = None) -> List[ShoppingList]:
    """Return a user's active lists, newest first, optionally filtered by title."""

    with session_scope() as session:
        query = select(ShoppingListORM).where(
            ShoppingListORM.user_id == user_id,
            ShoppingListORM.deleted_at.is_(None),
        )
        term = (search or "").strip().lower()
        if term:
            query = query.where(func.lower(ShoppingListORM.title).contains(term))
        rows = session.execute(query.order_by(ShoppingListORM.created_at.desc())).scalars().all()
        return [_to_model(row) for row in rows]


def get_shopping_list(list_id: str) -> Optional[ShoppingList]:
    with session_scope() as session:
        row = session.get(ShoppingListORM, list_id)
        if row is None or row.deleted_at is not None:
            return None
        return _to_model(row)


def create_shopping_list(
    title: str,
    user_id: str,
    items: Iterable[ItemLike] = (),
) -> ShoppingList:
    """Create a list; duplicate items in ``items`` are merged on the way in."""

    merged = merge_shopping_items([], list(items))
    with session_scope() as session:
        row = ShoppingListORM(title=_clean_title(title), user_id=user_id, items=_dump_items(merged))
        session.add(row)
        session.flush()
        logger.info("Created shopping list", extra={"list_id": row.id, "user_id": user_id})
        return _to_model(row)


def create_list_from_recipe(
    title: Optional[str],
    user_id: str,
    recipe: RecipeLike,
    options: Optional[ConversionOptions] = None,
    enricher: Optional[PackageSizeEnricher] = None,
) -> ShoppingList:
    recipe = _as_recipe(recipe)
    items = _recipe_items(recipe, options, enricher)
    return create_shopping_list(title or recipe.title, user_id, items)


def add_recipe_to_list(
    list_id: str,
    recipe: RecipeLike,
    options: Optional[ConversionOptions] = None,
    enricher: Optional[PackageSizeEnricher] = None,
) -> ShoppingList:
    """Convert a recipe and merge its ingredients into an existing list.

    Conversion (and any enrichment round-trips) happens before the session opens; the
    merge and write-back run inside a single transaction.
    """

    recipe = _as_recipe(recipe)
    new_items = _recipe_items(recipe, options, enricher)
    with session_scope() as session:
        row = _get_active(session, list_id)
        _write_items(row, merge_shopping_items(_load_items(row), new_items))
        session.flush()
        logger.info(
            "Added recipe to shopping list",
            extra={"list_id": list_id, "recipe_id": recipe.id},
        )
        return _to_model(row)


def add_item_to_list(list_id: str, item: ItemLike) -> ShoppingList:
    with session_scope() as session:
        row = _get_active(session, list_id)
        _write_items(row, merge_shopping_items(_load_items(row), [item]))
        session.flush()
        return _to_model(row)


def _check_index(items: List[ShoppingListItem], index: int) -> None:
    if index < 0 or index >= len(items):
        raise IndexError(f"Item index {index} out of range")


def toggle_item_checked(list_id: str, index: int) -> ShoppingList:
    with session_scope() as session:
        row = _get_active(session, list_id)
        items = _load_items(row)
        _check_index(items, index)
        items[index] = items[index].model_copy(update={"checked": not items[index].checked})
        _write_items(row, items)
        session.flush()
        return _to_model(row)


def remove_item(list_id: str, index: int) -> ShoppingList:
    with session_scope() as session:
        row = _get_active(session, list_id)
        items = _load_items(row)
        _check_index(items, index)
        del items[index]
        _write_items(row, items)
        session.flush()
        return _to_model(row)


def rename_shopping_list(list_id: str, title: str) -> ShoppingList:
    with session_scope() as session:
        row = _get_active(session, list_id)
        row.title = _clean_title(title)
        row.updated_at = utcnow()
        session.flush()
        return _to_model(row)


def soft_delete_shopping_list(list_id: str) -> None:
    """Hide a list from every query; rows are never removed."""

    with session_scope() as session:
        row = _get_active(session, list_id)
        row.deleted_at = utcnow()
        logger.info("Deleted shopping list", extra={"list_id": list_id})


__all__ = [
    "add_item_to_list",
    "add_recipe_to_list",
    "create_list_from_recipe",
    "create_shopping_list",
    "get_shopping_list",
    "list_shopping_lists",
    "remove_item",
    "rename_shopping_list",
    "soft_delete_shopping_list",
    "toggle_item_checked",
]
