"""ASGI application for Larder."""
# mypy: ignore-errors

from __future__ import annotations

import logging
from time import perf_counter
from typing import Any, Optional
from uuid import uuid4

from fastapi import Body, Depends, FastAPI, HTTPException, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from pydantic import BaseModel, Field

from larder import __version__, metrics
from larder.config import Settings, get_settings
from larder.logging_utils import configure_logging as configure_app_logging
from larder.models.ingredient import Recipe, UnitSystem
from larder.models.shopping import ShoppingList, ShoppingListItem
from larder.server import deps
from larder.shopping.converter import ConversionOptions
from larder.shopping.departments import classify_department
from larder.shopping.organize import SortOrder, format_for_clipboard, organize_items

logger = logging.getLogger(__name__)


def _json_safe(value: Any) -> Any:
    """Convert non-serializable values into JSON-safe representations."""

    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    if isinstance(value, bytes):
        try:
            return value.decode("utf-8")
        except UnicodeDecodeError:
            return value.hex()
    if isinstance(value, (list, tuple)):
        return [_json_safe(entry) for entry in value]
    if isinstance(value, dict):
        return {key: _json_safe(sub_value) for key, sub_value in value.items()}
    return repr(value)


def _normalize_validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Ensure validation error payloads can be serialized to JSON."""

    return [{key: _json_safe(value) for key, value in error.items()} for error in errors]


def _configure_logging(settings: Settings) -> None:
    configure_app_logging(settings.log_level, settings.log_format, [settings.api_token or ""])


def _conversion_options(
    unit_system: Optional[str],
    use_package_sizes: Optional[bool],
) -> ConversionOptions:
    return ConversionOptions.from_settings(
        get_settings(),
        unit_system=unit_system,
        use_package_sizes=use_package_sizes,
    )


def _not_found(exc: Exception) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


def _require_list(fetcher: deps.ShoppingListFetcher, list_id: str) -> ShoppingList:
    shopping_list = fetcher(list_id)
    if shopping_list is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Shopping list not found")
    return shopping_list


def create_app() -> FastAPI:
    """Create and configure a FastAPI application instance."""

    settings = get_settings()
    _configure_logging(settings)

    application = FastAPI(title="Larder Shopping Lists", version=__version__)
    logger.debug("Application created with log level %s", settings.log_level)

    if settings.log_requests:
        access_logger = logging.getLogger("larder.access")

        @application.middleware("http")
        async def log_request_response(request: Request, call_next):
            """Log request/response details without leaking sensitive data."""

            request_id = request.headers.get("X-Request-ID") or uuid4().hex
            request.state.request_id = request_id
            start = perf_counter()
            path = request.url.path
            method = request.method
            try:
                response: Response = await call_next(request)
            except Exception:
                duration_ms = (perf_counter() - start) * 1000
                access_logger.exception(
                    "HTTP %s %s status=500 duration_ms=%.2f",
                    method,
                    path,
                    duration_ms,
                    extra={"request_id": request_id},
                )
                metrics.REQUEST_COUNT.labels(method=method, path=path, status="500").inc()
                metrics.REQUEST_LATENCY.labels(method=method, path=path).observe(duration_ms / 1000.0)
                raise

            duration_ms = (perf_counter() - start) * 1000
            response.headers.setdefault("X-Request-ID", request_id)
            access_logger.info(
                "HTTP %s %s status=%s duration_ms=%.2f",
                method,
                path,
                response.status_code,
                duration_ms,
                extra={"request_id": request_id},
            )
            metrics.REQUEST_COUNT.labels(method=method, path=path, status=str(response.status_code)).inc()
            metrics.REQUEST_LATENCY.labels(method=method, path=path).observe(duration_ms / 1000.0)
            return response

    @application.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        body_preview: str | None = None
        if exc.body is not None:
            decoded = repr(_json_safe(exc.body))
            if len(decoded) > 2048:
                decoded = decoded[:2048] + "...(truncated)"
            body_preview = decoded

        log_kwargs: dict[str, Any] = {}
        request_id = getattr(request.state, "request_id", None)
        if request_id:
            log_kwargs["extra"] = {"request_id": request_id}

        logger.warning(
            "Validation error on %s %s: %s | body=%s",
            request.method,
            request.url.path,
            exc.errors(),
            body_preview,
            **log_kwargs,
        )
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": _normalize_validation_errors(exc.errors())},
        )

    @application.get("/health", summary="Liveness probe")
    def health() -> dict[str, str]:
        return {"status": "ok", "version": __version__}

    @application.get("/metrics", include_in_schema=False)
    def metrics_endpoint() -> Response:
        payload = generate_latest()
        return Response(content=payload, media_type=CONTENT_TYPE_LATEST)

    @application.post(
        "/convert",
        response_model=list[ShoppingListItem],
        summary="Convert recipe ingredients into shopping items",
    )
    def convert_endpoint(
        payload: ConvertRequest = Body(...),
        auth: None = Depends(deps.require_api_token),
        converter: deps.IngredientConverter = Depends(deps.get_ingredient_converter),
    ) -> list[ShoppingListItem]:
        options = _conversion_options(payload.unit_system, payload.use_package_sizes)
        return converter(payload.ingredients, payload.recipe_id, options)

    @application.post(
        "/merge",
        response_model=list[ShoppingListItem],
        summary="Merge shopping items into an existing list",
    )
    def merge_endpoint(
        payload: MergeRequest = Body(...),
        auth: None = Depends(deps.require_api_token),
        merger: deps.ItemMerger = Depends(deps.get_item_merger),
    ) -> list[ShoppingListItem]:
        return merger(payload.existing, payload.new)

    @application.get(
        "/shopping-lists",
        response_model=list[ShoppingList],
        summary="List a user's shopping lists",
    )
    def shopping_lists_list(
        user_id: str = Query(..., min_length=1, max_length=255),
        search: Optional[str] = Query(default=None, max_length=255),
        auth: None = Depends(deps.require_api_token),
        provider: deps.ShoppingListsProvider = Depends(deps.get_shopping_lists_provider),
    ) -> list[ShoppingList]:
        return provider(user_id, search)

    @application.post(
        "/shopping-lists",
        response_model=ShoppingList,
        status_code=status.HTTP_201_CREATED,
        summary="Create a shopping list, optionally from a recipe",
    )
    def shopping_lists_create(
        payload: ShoppingListCreateRequest = Body(...),
        auth: None = Depends(deps.require_api_token),
        creator: deps.ShoppingListCreator = Depends(deps.get_shopping_list_creator),
    ) -> ShoppingList:
        options = _conversion_options(payload.unit_system, payload.use_package_sizes)
        try:
            return creator(payload.title, payload.user_id, payload.recipe, options)
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    @application.get(
        "/shopping-lists/{list_id}",
        response_model=ShoppingList,
        summary="Fetch a shopping list",
    )
    def shopping_lists_get(
        list_id: str,
        auth: None = Depends(deps.require_api_token),
        fetcher: deps.ShoppingListFetcher = Depends(deps.get_shopping_list_fetcher),
    ) -> ShoppingList:
        return _require_list(fetcher, list_id)

    @application.patch(
        "/shopping-lists/{list_id}",
        response_model=ShoppingList,
        summary="Rename a shopping list",
    )
    def shopping_lists_update(
        list_id: str,
        payload: ShoppingListUpdateRequest = Body(...),
        auth: None = Depends(deps.require_api_token),
        renamer: deps.ShoppingListRenamer = Depends(deps.get_shopping_list_renamer),
    ) -> ShoppingList:
        update_payload = payload.model_dump(exclude_unset=True, exclude_none=True)
        if not update_payload:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="No fields provided for update",
            )
        try:
            return renamer(list_id, update_payload["title"])
        except ValueError as exc:
            raise _not_found(exc) from exc

    @application.delete(
        "/shopping-lists/{list_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        summary="Soft-delete a shopping list",
    )
    def shopping_lists_delete(
        list_id: str,
        auth: None = Depends(deps.require_api_token),
        deleter: deps.ShoppingListDeleter = Depends(deps.get_shopping_list_deleter),
    ) -> None:
        try:
            deleter(list_id)
        except ValueError as exc:
            raise _not_found(exc) from exc

    @application.post(
        "/shopping-lists/{list_id}/recipes",
        response_model=ShoppingList,
        summary="Merge a recipe's ingredients into a list",
    )
    def shopping_lists_add_recipe(
        list_id: str,
        payload: RecipeAddRequest = Body(...),
        auth: None = Depends(deps.require_api_token),
        adder: deps.RecipeAdder = Depends(deps.get_recipe_adder),
    ) -> ShoppingList:
        options = _conversion_options(payload.unit_system, payload.use_package_sizes)
        try:
            return adder(list_id, payload.recipe, options)
        except ValueError as exc:
            raise _not_found(exc) from exc

    @application.post(
        "/shopping-lists/{list_id}/items",
        response_model=ShoppingList,
        summary="Add a single item to a list",
    )
    def shopping_lists_add_item(
        list_id: str,
        payload: ItemCreateRequest = Body(...),
        auth: None = Depends(deps.require_api_token),
        adder: deps.ItemAdder = Depends(deps.get_item_adder),
    ) -> ShoppingList:
        try:
            return adder(list_id, payload.to_item())
        except ValueError as exc:
            raise _not_found(exc) from exc

    @application.post(
        "/shopping-lists/{list_id}/items/{index}/toggle",
        response_model=ShoppingList,
        summary="Toggle the checked state of an item",
    )
    def shopping_lists_toggle_item(
        list_id: str,
        index: int,
        auth: None = Depends(deps.require_api_token),
        toggler: deps.ItemToggler = Depends(deps.get_item_toggler),
    ) -> ShoppingList:
        try:
            return toggler(list_id, index)
        except (ValueError, IndexError) as exc:
            raise _not_found(exc) from exc

    @application.delete(
        "/shopping-lists/{list_id}/items/{index}",
        response_model=ShoppingList,
        summary="Remove an item from a list",
    )
    def shopping_lists_remove_item(
        list_id: str,
        index: int,
        auth: None = Depends(deps.require_api_token),
        remover: deps.ItemRemover = Depends(deps.get_item_remover),
    ) -> ShoppingList:
        try:
            return remover(list_id, index)
        except (ValueError, IndexError) as exc:
            raise _not_found(exc) from exc

    @application.get(
        "/shopping-lists/{list_id}/export",
        response_class=PlainTextResponse,
        summary="Export a list as plain text",
    )
    def shopping_lists_export(
        list_id: str,
        auth: None = Depends(deps.require_api_token),
        fetcher: deps.ShoppingListFetcher = Depends(deps.get_shopping_list_fetcher),
    ) -> str:
        return format_for_clipboard(_require_list(fetcher, list_id).items)

    @application.get(
        "/shopping-lists/{list_id}/organized",
        response_model=dict[str, list[ShoppingListItem]],
        summary="Search, sort and group a list for display",
    )
    def shopping_lists_organized(
        list_id: str,
        search: str = Query(default="", max_length=255),
        sort: SortOrder = Query(default="dept"),
        auth: None = Depends(deps.require_api_token),
        fetcher: deps.ShoppingListFetcher = Depends(deps.get_shopping_list_fetcher),
    ) -> dict[str, list[ShoppingListItem]]:
        return organize_items(_require_list(fetcher, list_id).items, search=search, sort=sort)

    return application


class ConvertRequest(BaseModel):
    ingredients: list[Any] = Field(default_factory=list)
    recipe_id: Optional[str] = Field(default=None, max_length=255)
    unit_system: Optional[UnitSystem] = None
    use_package_sizes: Optional[bool] = None


class MergeRequest(BaseModel):
    existing: Any = Field(default_factory=list)
    new: list[Any] = Field(default_factory=list)


class ShoppingListCreateRequest(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    user_id: str = Field(min_length=1, max_length=255)
    recipe: Optional[Recipe] = None
    unit_system: Optional[UnitSystem] = None
    use_package_sizes: Optional[bool] = None


class ShoppingListUpdateRequest(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)


class RecipeAddRequest(BaseModel):
    recipe: Recipe
    unit_system: Optional[UnitSystem] = None
    use_package_sizes: Optional[bool] = None


class ItemCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    quantity: float = Field(default=1.0, ge=0)
    unit: str = Field(default="", max_length=64)
    notes: Optional[str] = Field(default=None, max_length=500)
    department: Optional[str] = Field(default=None, max_length=64)

    def to_item(self) -> ShoppingListItem:
        name = self.name.strip()
        return ShoppingListItem(
            name=name,
            quantity=self.quantity,
            unit=self.unit.strip(),
            notes=self.notes,
            department=self.department or classify_department(name),
        )


ConvertRequest.model_rebuild()
MergeRequest.model_rebuild()
ShoppingListCreateRequest.model_rebuild()
ShoppingListUpdateRequest.model_rebuild()
RecipeAddRequest.model_rebuild()
ItemCreateRequest.model_rebuild()


app = create_app()

__all__ = ["app", "create_app"]
