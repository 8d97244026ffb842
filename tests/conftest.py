"""Shared pytest fixtures for the Larder test suite."""

from __future__ import annotations

from typing import Dict, Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from larder.config import get_settings
from larder.db.repository import reset_repository_state
from larder.server.app import create_app


@pytest.fixture()
def app() -> Generator[FastAPI, None, None]:
    """Create a new FastAPI app instance for each test and reset overrides."""

    application = create_app()
    yield application
    application.dependency_overrides.clear()


@pytest.fixture()
def client(app) -> TestClient:
    """Return a test client bound to the FastAPI app."""

    return TestClient(app)


@pytest.fixture()
def sample_recipe_payload() -> Dict[str, object]:
    """Recipe with metric and imperial measurements plus a bare string ingredient."""

    return {
        "id": "recipe-1",
        "title": "Pancakes",
        "ingredients": [
            {
                "qty_metric": 500,
                "unit_metric": "g",
                "qty_imperial": 4,
                "unit_imperial": "cups",
                "item": "flour",
            },
            {
                "qty_metric": 480,
                "unit_metric": "ml",
                "qty_imperial": 2,
                "unit_imperial": "cup",
                "item": "milk",
            },
            "salt",
        ],
    }


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Ensure each test uses an isolated SQLite database and catalog-only enrichment."""

    db_path = tmp_path / "test_larder.db"
    monkeypatch.setenv("LARDER_DATABASE_PATH", str(db_path))
    monkeypatch.delenv("LARDER_API_TOKEN", raising=False)
    monkeypatch.delenv("LARDER_ENRICH_LLM_ENABLED", raising=False)
    get_settings.cache_clear()
    reset_repository_state()
    yield
    reset_repository_state()
    monkeypatch.delenv("LARDER_DATABASE_PATH", raising=False)
    get_settings.cache_clear()
