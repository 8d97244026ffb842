"""Package-size enrichment for shopping items.

Enrichers record what a store actually sells for a shopping quantity (a 5 lb bag of
flour for 500 g) in the item's package fields and leave the quantity and unit alone.
They report their outcome through :class:`EnrichmentResult` instead of raising, so
callers can fall back to the basic conversion explicitly.
"""
# mypy: ignore-errors

from __future__ import annotations

import json
import logging
import math
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Protocol, Sequence

import httpx
from rapidfuzz import fuzz, process

from larder.config import Settings, get_settings
from larder.models.shopping import PackageSize, ShoppingListItem
from larder.shopping.package_data import PACKAGE_SIZE_ROWS
from larder.shopping.units import convert_quantity

logger = logging.getLogger(__name__)

CATALOG_CONFIDENCE = 0.8
DEFAULT_LLM_CONFIDENCE = 0.6

DEFAULT_PACKAGE_SIZES: tuple[PackageSize, ...] = tuple(
    PackageSize.model_validate(row) for row in PACKAGE_SIZE_ROWS
)

_WORD_RE = re.compile(r"[a-z][a-z\-']+")
_JSON_BLOCK_RE = re.compile(r"```(?:json)?\s*(\{.*?\})\s*```", re.DOTALL)


@dataclass(frozen=True)
class EnrichmentResult:
    """Outcome of a single enrichment attempt.

    ``status`` is ``enriched`` (``item`` holds the new item), ``skipped`` (the enricher
    had nothing to offer) or ``failed`` (the attempt broke; ``reason`` says why).
    """

    status: str
    item: Optional[ShoppingListItem] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "enriched" and self.item is not None

    @classmethod
    def success(cls, item: ShoppingListItem) -> "EnrichmentResult":
        return cls(status="enriched", item=item)

    @classmethod
    def skipped(cls, reason: str) -> "EnrichmentResult":
        return cls(status="skipped", reason=reason)

    @classmethod
    def failure(cls, reason: str) -> "EnrichmentResult":
        return cls(status="failed", reason=reason)


class PackageSizeEnricher(Protocol):
    """Capability that maps a shopping item onto realistic retail package sizes."""

    timeout: float

    def enrich(self, item: ShoppingListItem) -> EnrichmentResult:
        """Return an enriched copy of ``item`` or an explicit skip/failure result."""


@dataclass(frozen=True)
class PurchasePlan:
    """How much of a packaged product to buy."""

    quantity: float
    unit: str
    packages: int
    package_size: float


def calculate_optimal_purchase(
    needed_qty: float,
    needed_unit: str,
    package: PackageSize,
) -> PurchasePlan:
    """Pick the smallest package covering the need, or enough of the largest one."""

    sizes = sorted(size for size in package.package_sizes if size > 0)
    if needed_qty is None or needed_qty <= 0:
        return PurchasePlan(
            quantity=float(package.standard_qty or 1),
            unit=package.package_unit,
            packages=1,
            package_size=sizes[0] if sizes else 1.0,
        )

    converted = convert_quantity(needed_qty, needed_unit, package.package_unit)
    if converted is None:
        logger.debug(
            "No conversion from %r to %r for %s; using raw quantity",
            needed_unit,
            package.package_unit,
            package.ingredient,
        )
        converted = float(needed_qty)

    for size in sizes:
        if size >= converted:
            return PurchasePlan(quantity=size, unit=package.package_unit, packages=1, package_size=size)

    largest = sizes[-1] if sizes else 1.0
    packages = math.ceil(converted / largest)
    return PurchasePlan(
        quantity=round(largest * packages, 2),
        unit=package.package_unit,
        packages=packages,
        package_size=largest,
    )


class PackageSizeCatalog:
    """Lookup over known grocery package sizes."""

    def __init__(
        self,
        entries: Iterable[PackageSize] = DEFAULT_PACKAGE_SIZES,
        *,
        fuzzy_threshold: float = 88.0,
    ) -> None:
        self._entries: List[PackageSize] = list(entries)
        self._names: List[str] = [entry.ingredient.lower().strip() for entry in self._entries]
        self._fuzzy_threshold = fuzzy_threshold

    def __len__(self) -> int:
        return len(self._entries)

    def find_best_match(self, name: str) -> Optional[PackageSize]:
        """Return the catalog entry for ``name``.

        Tries an exact match, then catalog names contained in the item name (rightmost,
        then longest, wins so "chicken broth" is broth), then single-word catalog names
        that extend an item word ("potato" -> "potatoes"), and finally a rapidfuzz match
        above the configured threshold.
        """
        if not isinstance(name, str) or not self._entries:
            return None
        normalized = " ".join(name.lower().split())
        if not normalized:
            return None

        for index, candidate in enumerate(self._names):
            if candidate == normalized:
                return self._entries[index]

        padded = f" {normalized} "
        contained = []
        for index, candidate in enumerate(self._names):
            position = padded.rfind(f" {candidate} ")
            if position != -1:
                contained.append((position + len(candidate), len(candidate), index))
        if contained:
            return self._entries[max(contained)[2]]

        for word in reversed(_WORD_RE.findall(normalized)):
            if len(word) < 3:
                continue
            for index, candidate in enumerate(self._names):
                if " " not in candidate and candidate.startswith(word):
                    return self._entries[index]

        match = process.extractOne(
            normalized,
            self._names,
            scorer=fuzz.WRatio,
            score_cutoff=self._fuzzy_threshold,
        )
        if match:
            _, score, index = match
            logger.debug("Fuzzy package match for %r: %s (score %.1f)", name, self._names[index], score)
            return self._entries[index]
        return None


class CatalogPackageSizeEnricher:
    """Enrich items from the local package-size catalog."""

    def __init__(self, catalog: Optional[PackageSizeCatalog] = None, *, timeout: float = 1.0) -> None:
        self._catalog = catalog or PackageSizeCatalog()
        self.timeout = timeout

    def enrich(self, item: ShoppingListItem) -> EnrichmentResult:
        package = self._catalog.find_best_match(item.name)
        if package is None:
            return EnrichmentResult.skipped("no package size match")

        plan = calculate_optimal_purchase(item.quantity, item.unit, package)
        enriched = item.model_copy(
            update={
                "shop_size_qty": plan.quantity,
                "shop_size_unit": plan.unit,
                "package_notes": package.notes,
                "confidence": CATALOG_CONFIDENCE,
                "department": package.category or item.department,
            }
        )
        return EnrichmentResult.success(enriched)


ENRICH_SYSTEM_PROMPT = (
    "You convert recipe quantities into realistic grocery purchases. Given an ingredient and "
    "the amount a recipe needs, answer with the smallest standard retail package that covers "
    "it. Use only standard retail units (oz, lb, fl oz, gallon, count, bunch, can, bottle, "
    "package). Never answer with vague sizes such as \"small container\". The schema:\n"
    "{\n"
    '  "shop_size_qty": number,\n'
    '  "shop_size_unit": "string",\n'
    '  "package_notes": "short purchasing note",\n'
    '  "confidence": number between 0 and 1\n'
    "}\n"
    "Return only JSON."
)

ENRICH_USER_PROMPT = "Ingredient: {name}\nRecipe needs: {quantity} {unit}\nDepartment: {department}"


class LLMPackageSizeEnricher:
    """Ask an OpenAI/Ollama-compatible endpoint for a purchasable package size."""

    def __init__(
        self,
        *,
        base_url: str,
        model: str,
        provider: str = "openai",
        temperature: float = 0.0,
        max_tokens: int = 200,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._model = model
        self._provider = (provider or "openai").strip().lower()
        self._temperature = max(0.0, float(temperature))
        self._max_tokens = max(1, int(max_tokens))
        self._transport = transport
        self.timeout = float(timeout)

    def enrich(self, item: ShoppingListItem) -> EnrichmentResult:
        user_prompt = ENRICH_USER_PROMPT.format(
            name=item.name,
            quantity=_format_number(item.quantity),
            unit=item.unit or "(no unit)",
            department=item.department or "Other",
        )
        try:
            content = self._execute_chat(ENRICH_SYSTEM_PROMPT, user_prompt)
        except httpx.TimeoutException:
            return EnrichmentResult.failure(f"enrichment timed out after {self.timeout:.1f}s")
        except (httpx.HTTPError, ValueError) as exc:
            return EnrichmentResult.failure(f"enrichment request failed: {exc}")

        try:
            parsed = json.loads(_extract_json_blob(content))
        except json.JSONDecodeError as exc:
            snippet = content.strip().replace("\n", " ")[:200]
            return EnrichmentResult.failure(f"invalid JSON from enrichment model: {exc}: {snippet}")
        if not isinstance(parsed, dict):
            return EnrichmentResult.failure("enrichment model returned a non-object payload")

        quantity = _to_float(parsed.get("shop_size_qty"))
        unit = parsed.get("shop_size_unit")
        if quantity is None or quantity <= 0 or not isinstance(unit, str) or not unit.strip():
            return EnrichmentResult.failure("enrichment model returned no usable package size")

        confidence = _to_float(parsed.get("confidence"))
        if confidence is None:
            confidence = DEFAULT_LLM_CONFIDENCE
        notes = parsed.get("package_notes")
        enriched = item.model_copy(
            update={
                "shop_size_qty": quantity,
                "shop_size_unit": unit.strip(),
                "package_notes": notes.strip() if isinstance(notes, str) and notes.strip() else None,
                "confidence": min(1.0, max(0.0, confidence)),
            }
        )
        return EnrichmentResult.success(enriched)

    def _execute_chat(self, system: str, user: str) -> str:
        messages = [
            {"role": "system", "content": system},
            {"role": "user", "content": user},
        ]
        if self._provider == "ollama":
            endpoint = self._base_url
            if not endpoint.endswith("/api/chat"):
                endpoint = f"{endpoint}/api/chat"
            payload = {
                "model": self._model,
                "messages": messages,
                "stream": False,
                "format": "json",
                "options": {
                    "temperature": self._temperature,
                    "num_predict": self._max_tokens,
                },
            }
            body = self._post(endpoint, payload)
            content = ((body.get("message") or {}).get("content") or "").strip()
            if not content:
                raise ValueError("Ollama enrichment response did not include content.")
            return content

        endpoint = self._base_url
        if not endpoint.endswith("/chat/completions"):
            endpoint = f"{endpoint}/chat/completions"
        payload = {
            "model": self._model,
            "temperature": self._temperature,
            "max_tokens": self._max_tokens,
            "response_format": {"type": "json_object"},
            "messages": messages,
        }
        body = self._post(endpoint, payload)
        choices = body.get("choices") or []
        if not choices:
            raise ValueError("Enrichment LLM returned no choices.")
        content = ((choices[0].get("message") or {}).get("content") or "").strip()
        if not content:
            raise ValueError("Enrichment LLM returned an empty response.")
        return content

    def _post(self, endpoint: str, payload: dict[str, object]) -> dict:
        with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
            response = client.post(endpoint, json=payload)
        response.raise_for_status()
        return response.json()


def _to_float(value) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _format_number(value: float) -> str:
    return f"{value:g}"


def _extract_json_blob(text: str) -> str:
    match = _JSON_BLOCK_RE.search(text)
    if match:
        return match.group(1).strip()

    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end != -1 and end > start:
        return text[start : end + 1].strip()
    return text.strip()


def build_package_size_enricher(
    settings: Settings | None = None,
    *,
    entries: Sequence[PackageSize] | None = None,
) -> PackageSizeEnricher:
    """Return the LLM enricher when configured, otherwise the catalog enricher."""

    settings = settings or get_settings()
    if settings.enrich_llm_enabled:
        if settings.enrich_llm_base_url:
            return LLMPackageSizeEnricher(
                base_url=settings.enrich_llm_base_url,
                model=settings.enrich_llm_model,
                provider=settings.enrich_llm_provider,
                temperature=settings.enrich_llm_temperature,
                max_tokens=settings.enrich_llm_max_tokens,
                timeout=settings.enrich_timeout,
            )
        logger.debug("Enrichment LLM enabled but no base URL configured; using catalog.")

    catalog = PackageSizeCatalog(
        entries if entries is not None else DEFAULT_PACKAGE_SIZES,
        fuzzy_threshold=settings.package_match_threshold,
    )
    return CatalogPackageSizeEnricher(catalog)


__all__ = [
    "CatalogPackageSizeEnricher",
    "DEFAULT_PACKAGE_SIZES",
    "EnrichmentResult",
    "LLMPackageSizeEnricher",
    "PackageSizeCatalog",
    "PackageSizeEnricher",
    "PurchasePlan",
    "build_package_size_enricher",
    "calculate_optimal_purchase",
]
