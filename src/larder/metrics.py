"""Prometheus metrics definitions for Larder."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

REQUEST_COUNT = Counter(
    "larder_http_requests_total",
    "Total number of HTTP requests processed by the Larder API",
    ["method", "path", "status"],
)

REQUEST_LATENCY = Histogram(
    "larder_http_request_duration_seconds",
    "Latency of HTTP requests processed by the Larder API",
    ["method", "path"],
)

MERGED_ITEMS = Counter(
    "larder_merged_items_total",
    "Shopping items processed by the merge engine by outcome",
    ["result"],
)

ENRICHMENT_RESULTS = Counter(
    "larder_enrichment_total",
    "Package-size enrichment attempts by outcome",
    ["status"],
)

__all__ = [
    "REQUEST_COUNT",
    "REQUEST_LATENCY",
    "MERGED_ITEMS",
    "ENRICHMENT_RESULTS",
]
