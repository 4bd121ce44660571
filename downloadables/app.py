"""Application bootstrap with dependency injection."""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path
from typing import Any, Optional

from . import __version__ as DOWNLOADABLES_VERSION
from .core.links import ManifestLoader
from .infrastructure.cache import DocumentCache
from .providers.caching import CachedDcsClient, ProviderConfig
from .providers.dcs import DcsClient
from .settings import Settings


class DownloadablesApp:
    """Wires the DCS client, the optional document cache and the manifest loader."""

    def __init__(
        self,
        settings: Settings,
        cache_path: Optional[Path] = None,
        offline: Optional[bool] = None,
    ):
        """Initialize the application.

        Args:
            settings: Resolved settings
            cache_path: SQLite cache path; overrides settings.cache_path
            offline: Overrides settings.offline when not None
        """
        self.settings = settings
        self.offline = settings.offline if offline is None else offline
        self.cache_path = cache_path or settings.cache_path

        self.client = DcsClient(
            settings.dcs_domain,
            timeout=settings.request_timeout,
            offline=self.offline,
        )

        self.cache: Optional[DocumentCache] = None
        self.cached_client: Optional[CachedDcsClient] = None
        self.manifest_loader: ManifestLoader = self.client.fetch_manifest
        if self.cache_path:
            self.cache = DocumentCache(
                self.cache_path,
                max_entries_per_namespace=settings.cache_max_documents,
            )
            self.cached_client = CachedDcsClient(
                self.client,
                self.cache,
                ProviderConfig(
                    provider_name="dcs",
                    client_version=DOWNLOADABLES_VERSION,
                    offline=self.offline,
                    catalog_max_age=timedelta(hours=settings.catalog_max_age_hours),
                ),
            )
            self.manifest_loader = self.cached_client.fetch_manifest

    def fetch_catalog(self) -> list[dict[str, Any]]:
        if self.cached_client is not None:
            return self.cached_client.fetch_catalog(self.settings.subjects)
        return self.client.fetch_catalog(self.settings.subjects)

    def close(self) -> None:
        """Clean up resources."""
        if self.cache:
            self.cache.close()
