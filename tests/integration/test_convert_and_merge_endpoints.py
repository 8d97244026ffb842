"""Integration tests for the stateless conversion and merge endpoints."""

from __future__ import annotations

from fastapi import status

from larder.models.shopping import ShoppingListItem
from larder.server import deps
from larder.shopping.packages import EnrichmentResult


class FixedSizeEnricher:
    timeout = 1.0

    def enrich(self, item: ShoppingListItem) -> EnrichmentResult:
        return EnrichmentResult.success(item.model_copy(update={"shop_size_qty": 5, "shop_size_unit": "lb", "confidence": 0.9}))


def test_health(client):
    response = client.get("/health")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == "ok"


def test_convert_endpoint_without_package_sizes(client, sample_recipe_payload):
    response = client.post(
        "/convert",
        json={
            "ingredients": sample_recipe_payload["ingredients"],
            "recipe_id": "recipe-1",
            "use_package_sizes": False,
        },
    )

    assert response.status_code == status.HTTP_200_OK
    items = response.json()
    assert [(item["name"], item["quantity"], item["unit"]) for item in items] == [
        ("flour", 500, "g"),
        ("milk", 480, "ml"),
        ("salt", 1, ""),
    ]
    assert all(item["recipeId"] == "recipe-1" for item in items)
    assert items[0]["department"] == "Pantry"


def test_convert_endpoint_imperial(client, sample_recipe_payload):
    response = client.post(
        "/convert",
        json={"ingredients": sample_recipe_payload["ingredients"][:2], "unit_system": "imperial", "use_package_sizes": False},
    )

    assert response.status_code == status.HTTP_200_OK
    assert [(item["quantity"], item["unit"]) for item in response.json()] == [(4, "cup"), (2, "cup")]


def test_convert_endpoint_uses_injected_enricher(app, client):
    app.dependency_overrides[deps.get_package_size_enricher] = lambda: FixedSizeEnricher()

    response = client.post("/convert", json={"ingredients": ["flour", {"qty": 2, "unit": "cup", "item": "rice"}]})

    assert response.status_code == status.HTTP_200_OK
    items = response.json()
    assert [(item["quantity"], item["unit"]) for item in items] == [(1, ""), (2, "cup")]
    assert [(item["shop_size_qty"], item["shop_size_unit"]) for item in items] == [(5, "lb"), (5, "lb")]
    assert all(item["confidence"] == 0.9 for item in items)


def test_convert_endpoint_tolerates_malformed_ingredients(client):
    response = client.post(
        "/convert",
        json={"ingredients": [{"item": {"item": "oats"}, "qty": "a few"}, 12, None], "use_package_sizes": False},
    )

    assert response.status_code == status.HTTP_200_OK
    assert [item["name"] for item in response.json()] == ["oats", "Unknown item", "Unknown item"]


def test_convert_endpoint_rejects_unknown_unit_system(client):
    response = client.post("/convert", json={"ingredients": ["salt"], "unit_system": "cubits"})

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert response.json()["detail"]


def test_merge_endpoint(client):
    response = client.post(
        "/merge",
        json={
            "existing": [{"name": "Flour", "quantity": 250, "unit": "g", "department": "Pantry"}],
            "new": [
                {"name": "flour", "quantity": 500, "unit": "grams", "department": "Pantry", "recipeId": "r1"},
                {"name": "milk", "quantity": 2, "unit": "cup", "department": "Dairy & Eggs", "recipeId": "r1"},
            ],
        },
    )

    assert response.status_code == status.HTTP_200_OK
    assert [(item["name"], item["quantity"]) for item in response.json()] == [("milk", 2), ("Flour", 750)]


def test_merge_endpoint_tolerates_non_list_existing(client):
    response = client.post("/merge", json={"existing": "oops", "new": [{"name": "salt"}]})

    assert response.status_code == status.HTTP_200_OK
    assert [item["name"] for item in response.json()] == ["salt"]
