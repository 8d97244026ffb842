"""Dependency definitions for the Larder API server."""

from __future__ import annotations

from typing import Any, Callable, List, Optional

from fastapi import Depends, HTTPException, Request, status

from larder.config import get_settings
from larder.db.shopping_lists import (
    add_item_to_list,
    add_recipe_to_list,
    create_list_from_recipe,
    create_shopping_list,
    get_shopping_list,
    list_shopping_lists,
    remove_item,
    rename_shopping_list,
    soft_delete_shopping_list,
    toggle_item_checked,
)
from larder.models.ingredient import Recipe
from larder.models.shopping import ShoppingList, ShoppingListItem
from larder.shopping.converter import ConversionOptions, convert_ingredients
from larder.shopping.merge import merge_shopping_items
from larder.shopping.packages import PackageSizeEnricher, build_package_size_enricher

IngredientConverter = Callable[[List[Any], Optional[str], ConversionOptions], List[ShoppingListItem]]
ItemMerger = Callable[[Any, List[Any]], List[ShoppingListItem]]
ShoppingListsProvider = Callable[[str, Optional[str]], List[ShoppingList]]
ShoppingListFetcher = Callable[[str], Optional[ShoppingList]]
ShoppingListCreator = Callable[[str, str, Optional[Recipe], ConversionOptions], ShoppingList]
ShoppingListRenamer = Callable[[str, str], ShoppingList]
ShoppingListDeleter = Callable[[str], None]
RecipeAdder = Callable[[str, Recipe, ConversionOptions], ShoppingList]
ItemAdder = Callable[[str, ShoppingListItem], ShoppingList]
ItemToggler = Callable[[str, int], ShoppingList]
ItemRemover = Callable[[str, int], ShoppingList]


def get_package_size_enricher() -> PackageSizeEnricher:
    """Return the enricher selected by the current settings."""

    return build_package_size_enricher(get_settings())


def get_ingredient_converter(
    enricher: PackageSizeEnricher = Depends(get_package_size_enricher),
) -> IngredientConverter:
    return lambda ingredients, recipe_id, options: convert_ingredients(
        ingredients,
        recipe_id=recipe_id,
        options=options,
        enricher=enricher,
    )


def get_item_merger() -> ItemMerger:
    return merge_shopping_items


def get_shopping_lists_provider() -> ShoppingListsProvider:
    return lambda user_id, search: list_shopping_lists(user_id, search=search)


def get_shopping_list_fetcher() -> ShoppingListFetcher:
    return get_shopping_list


def get_shopping_list_creator(
    enricher: PackageSizeEnricher = Depends(get_package_size_enricher),
) -> ShoppingListCreator:
    def _create(title: str, user_id: str, recipe: Optional[Recipe], options: ConversionOptions) -> ShoppingList:
        if recipe is None:
            return create_shopping_list(title, user_id)
        return create_list_from_recipe(title, user_id, recipe, options=options, enricher=enricher)

    return _create


def get_shopping_list_renamer() -> ShoppingListRenamer:
    return rename_shopping_list


def get_shopping_list_deleter() -> ShoppingListDeleter:
    return soft_delete_shopping_list


def get_recipe_adder(
    enricher: PackageSizeEnricher = Depends(get_package_size_enricher),
) -> RecipeAdder:
    return lambda list_id, recipe, options: add_recipe_to_list(
        list_id,
        recipe,
        options=options,
        enricher=enricher,
    )


def get_item_adder() -> ItemAdder:
    return add_item_to_list


def get_item_toggler() -> ItemToggler:
    return toggle_item_checked


def get_item_remover() -> ItemRemover:
    return remove_item


def require_api_token(
    request: Request,
    settings = Depends(get_settings),
) -> None:
    """Ensure requests carry the configured API token when required."""

    token = settings.api_token
    if not token:
        return

    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.split("Bearer ")[-1].strip() == token:
        return

    if request.headers.get("X-API-Key") == token:
        return

    if request.query_params.get("api_token") == token:
        return

    raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
