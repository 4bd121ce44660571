"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import os

import pytest

from downloadables.core.models import DownloadableTypes


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    run_network = os.getenv("RUN_REQUIRES_NETWORK", "").lower() in {"1", "true", "yes"}
    for item in items:
        if "requires_network" in item.keywords and not run_network:
            item.add_marker(pytest.mark.skip(reason="requires network access"))


@pytest.fixture
def state() -> DownloadableTypes:
    """Empty bucket state."""
    return DownloadableTypes()


@pytest.fixture(autouse=True)
def clean_settings_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer environment variables out of settings tests."""
    for name in (
        "DOWNLOADABLES_DCS_DOMAIN",
        "DOWNLOADABLES_OFFLINE",
        "DOWNLOADABLES_REQUEST_TIMEOUT",
        "DOWNLOADABLES_CACHE_DB",
        "DOWNLOADABLES_CATALOG_MAX_AGE_HOURS",
        "DOWNLOADABLES_CACHE_MAX_DOCUMENTS",
    ):
        monkeypatch.delenv(name, raising=False)
