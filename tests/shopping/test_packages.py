"""Tests for the package-size catalog and enrichers."""

from __future__ import annotations

import json

import httpx
import pytest

from larder.config import Settings
from larder.models.shopping import PackageSize, ShoppingListItem
from larder.shopping.packages import (
    CATALOG_CONFIDENCE,
    DEFAULT_LLM_CONFIDENCE,
    CatalogPackageSizeEnricher,
    EnrichmentResult,
    LLMPackageSizeEnricher,
    PackageSizeCatalog,
    build_package_size_enricher,
    calculate_optimal_purchase,
)

FLOUR = PackageSize(
    ingredient="flour",
    category="Pantry",
    package_sizes=[2, 5, 10],
    package_unit="lb",
    standard_qty=5,
    standard_unit="lb",
)


def _chat_response(content: str) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def _llm(handler, **kwargs) -> LLMPackageSizeEnricher:
    params = {"base_url": "http://llm.local/v1", "model": "test-model", "timeout": 2.0}
    params.update(kwargs)
    return LLMPackageSizeEnricher(transport=httpx.MockTransport(handler), **params)


def test_optimal_purchase_picks_smallest_covering_package():
    plan = calculate_optimal_purchase(500, "g", FLOUR)

    assert plan.quantity == 2
    assert plan.unit == "lb"
    assert plan.packages == 1


def test_optimal_purchase_buys_multiple_of_largest_package():
    plan = calculate_optimal_purchase(25, "lb", FLOUR)

    assert plan.packages == 3
    assert plan.package_size == 10
    assert plan.quantity == 30


def test_optimal_purchase_uses_standard_package_when_nothing_needed():
    plan = calculate_optimal_purchase(0, "g", FLOUR)

    assert plan.quantity == 5
    assert plan.packages == 1


def test_optimal_purchase_uses_raw_number_when_units_do_not_convert():
    plan = calculate_optimal_purchase(3, "cup", FLOUR)

    assert plan.quantity == 5


def test_catalog_matching_strategies():
    catalog = PackageSizeCatalog()

    assert len(catalog) > 40
    assert catalog.find_best_match("Flour").ingredient == "flour"
    assert catalog.find_best_match("low sodium chicken broth").ingredient == "broth"
    assert catalog.find_best_match("organic brown sugar").ingredient == "brown sugar"
    assert catalog.find_best_match("russet potato").ingredient == "potatoes"
    assert catalog.find_best_match("xyzabc123") is None
    assert catalog.find_best_match("") is None
    assert catalog.find_best_match(None) is None


def test_catalog_fuzzy_threshold_is_configurable():
    strict = PackageSizeCatalog([FLOUR], fuzzy_threshold=100)
    loose = PackageSizeCatalog([FLOUR], fuzzy_threshold=60)

    assert strict.find_best_match("FLOUR ") is FLOUR
    assert strict.find_best_match("flower") is None
    assert loose.find_best_match("flower") is FLOUR


def test_catalog_enricher_applies_package_size():
    enricher = CatalogPackageSizeEnricher(PackageSizeCatalog([FLOUR]))
    item = ShoppingListItem(name="flour", quantity=500, unit="g", department="Other", recipe_id="r1")

    result = enricher.enrich(item)

    assert result.ok
    enriched = result.item
    assert (enriched.quantity, enriched.unit) == (500, "g")
    assert (enriched.shop_size_qty, enriched.shop_size_unit) == (2, "lb")
    assert enriched.confidence == CATALOG_CONFIDENCE
    assert enriched.department == "Pantry"
    assert enriched.recipe_id == "r1"


def test_catalog_enricher_skips_unknown_items():
    enricher = CatalogPackageSizeEnricher(PackageSizeCatalog([FLOUR]))

    result = enricher.enrich(ShoppingListItem(name="saffron threads", quantity=1))

    assert not result.ok
    assert result.status == "skipped"
    assert result.reason == "no package size match"


def test_llm_enricher_openai_success():
    captured: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["payload"] = json.loads(request.content)
        content = json.dumps(
            {"shop_size_qty": 1, "shop_size_unit": "lb", "package_notes": "1 lb bag", "confidence": 0.9}
        )
        return httpx.Response(200, json=_chat_response(content))

    result = _llm(handler).enrich(ShoppingListItem(name="lentils", quantity=200, unit="g"))

    assert captured["url"] == "http://llm.local/v1/chat/completions"
    assert captured["payload"]["model"] == "test-model"
    assert "lentils" in captured["payload"]["messages"][1]["content"]
    assert result.ok
    assert (result.item.quantity, result.item.unit) == (200, "g")
    assert (result.item.shop_size_qty, result.item.shop_size_unit) == (1, "lb")
    assert result.item.package_notes == "1 lb bag"
    assert result.item.confidence == pytest.approx(0.9)


def test_llm_enricher_ollama_accepts_fenced_json_and_clamps_confidence():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/chat"
        content = '```json\n{"shop_size_qty": "12", "shop_size_unit": "count", "confidence": 3}\n```'
        return httpx.Response(200, json={"message": {"content": content}})

    enricher = _llm(handler, base_url="http://ollama.local:11434", provider="ollama")
    result = enricher.enrich(ShoppingListItem(name="eggs", quantity=6, unit="count"))

    assert result.ok
    assert result.item.quantity == 6
    assert result.item.shop_size_qty == 12
    assert result.item.confidence == 1.0


def test_llm_enricher_defaults_confidence():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=_chat_response('{"shop_size_qty": 2, "shop_size_unit": "can"}'))

    result = _llm(handler).enrich(ShoppingListItem(name="chickpeas", quantity=400, unit="g"))

    assert result.item.confidence == DEFAULT_LLM_CONFIDENCE


def test_llm_enricher_reports_timeouts():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    result = _llm(handler).enrich(ShoppingListItem(name="rice", quantity=1, unit="cup"))

    assert result.status == "failed"
    assert "timed out" in result.reason


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, json={"error": "boom"}),
        httpx.Response(200, json=_chat_response("no json here")),
        httpx.Response(200, json=_chat_response('{"shop_size_qty": 0, "shop_size_unit": "lb"}')),
        httpx.Response(200, json=_chat_response("[1, 2]")),
        httpx.Response(200, json={"choices": []}),
    ],
)
def test_llm_enricher_failures_become_results(response):
    enricher = _llm(lambda request: response)

    result = enricher.enrich(ShoppingListItem(name="oats", quantity=1, unit="cup"))

    assert isinstance(result, EnrichmentResult)
    assert result.status == "failed"
    assert result.item is None
    assert result.reason


def test_build_package_size_enricher_selects_implementation():
    assert isinstance(build_package_size_enricher(Settings()), CatalogPackageSizeEnricher)
    assert isinstance(
        build_package_size_enricher(Settings(enrich_llm_enabled=True)),
        CatalogPackageSizeEnricher,
    )

    enricher = build_package_size_enricher(
        Settings(enrich_llm_enabled=True, enrich_llm_base_url="http://llm.local/v1", enrich_timeout=3)
    )
    assert isinstance(enricher, LLMPackageSizeEnricher)
    assert enricher.timeout == 3
