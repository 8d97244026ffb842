"""Command-line interface for Larder."""

from __future__ import annotations

import json
from typing import Any, List, Optional

import typer

from larder.config import get_settings
from larder.logging_utils import configure_logging
from larder.models.ingredient import Recipe
from larder.models.shopping import ShoppingListItem
from larder.shopping.converter import ConversionOptions, convert_ingredients
from larder.shopping.departments import classify_department
from larder.shopping.merge import merge_shopping_items
from larder.shopping.organize import format_for_clipboard
from larder.shopping.packages import build_package_size_enricher

app = typer.Typer(help="Larder shopping-list consolidation commands.")


def _load_json(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as fh:
        return json.load(fh)


def _echo_items(items: List[ShoppingListItem], pretty: bool) -> None:
    payload = [item.to_json() for item in items]
    if pretty:
        typer.echo(json.dumps(payload, indent=2, sort_keys=True))
    else:
        typer.echo(json.dumps(payload))


@app.callback()
def setup(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override LARDER_LOG_LEVEL."),
) -> None:
    settings = get_settings()
    configure_logging(log_level or settings.log_level, settings.log_format, [settings.api_token or ""])


@app.command()
def convert(
    ingredients_path: str = typer.Argument(..., help="JSON file with an ingredient list or a recipe object."),
    unit_system: Optional[str] = typer.Option(None, "--unit-system", help="metric or imperial."),
    recipe_id: Optional[str] = typer.Option(None, "--recipe-id", help="Recipe id attached to every item."),
    package_sizes: Optional[bool] = typer.Option(
        None,
        "--package-sizes/--no-package-sizes",
        help="Round quantities up to retail package sizes.",
    ),
    pretty: bool = typer.Option(False, "--pretty", help="Pretty-print output JSON."),
) -> None:
    """
    Convert recipe ingredients into shopping list items.
    """
    payload = _load_json(ingredients_path)
    if isinstance(payload, dict):
        recipe = Recipe.model_validate(payload)
        ingredients: List[Any] = list(recipe.ingredients)
        recipe_id = recipe_id or recipe.id
    else:
        ingredients = payload if isinstance(payload, list) else []

    settings = get_settings()
    try:
        options = ConversionOptions.from_settings(
            settings,
            unit_system=unit_system,
            use_package_sizes=package_sizes,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--unit-system") from exc

    enricher = build_package_size_enricher(settings) if options.use_package_sizes else None
    items = convert_ingredients(ingredients, recipe_id=recipe_id, options=options, enricher=enricher)
    _echo_items(items, pretty)


@app.command()
def merge(
    existing_path: str = typer.Argument(..., help="JSON file with the current shopping items."),
    new_path: str = typer.Argument(..., help="JSON file with the items to merge in."),
    pretty: bool = typer.Option(False, "--pretty", help="Pretty-print output JSON."),
) -> None:
    """Merge new shopping items into an existing list without duplicates."""

    new_items = _load_json(new_path)
    merged = merge_shopping_items(_load_json(existing_path), new_items if isinstance(new_items, list) else [])
    _echo_items(merged, pretty)


@app.command()
def export(
    items_path: str = typer.Argument(..., help="JSON file with shopping items."),
) -> None:
    """Print shopping items grouped by department as a checklist."""

    payload = _load_json(items_path)
    entries = payload if isinstance(payload, list) else []
    items = [ShoppingListItem.model_validate(entry) for entry in entries if isinstance(entry, dict)]
    typer.echo(format_for_clipboard(items))


@app.command()
def classify(names: List[str] = typer.Argument(..., help="Ingredient names to classify.")) -> None:
    """Print the grocery department for each name."""

    for name in names:
        typer.echo(f"{name}\t{classify_department(name)}")


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (LARDER_SERVER_HOST)."),
    port: Optional[int] = typer.Option(None, "--port", help="Bind port (LARDER_SERVER_PORT)."),
    reload: bool = typer.Option(False, "--reload", help="Restart on code changes."),
) -> None:
    """Run the HTTP API under uvicorn."""

    from larder.server.run import serve as run_server

    run_server(host=host, port=port, reload=reload or None)


def main(argv: Optional[list[str]] = None) -> None:
    """Entry point for the `larder` console script."""
    app(prog_name="larder", args=argv)


if __name__ == "__main__":
    main()
