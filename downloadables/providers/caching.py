"""Cache-first, offline-aware reads from DCS.

Wraps a DcsClient so that:
- link manifests are read from the cache first and written through on fetch
  (release assets do not change, so they never expire)
- catalog searches are reused while younger than ``catalog_max_age``, and an
  older copy is used when the service cannot be reached
- offline mode never touches the network; a cache miss is an error
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Iterable, Optional

from downloadables.errors import IOFailure, ManifestFetchError
from downloadables.infrastructure.cache import DocumentCache
from downloadables.infrastructure.provider_cache import provider_cache_key

from .dcs import DEFAULT_SUBJECTS, DcsClient, records_from_payload

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderConfig:
    """Configuration for a cached provider client."""

    # Provider identifier, used as cache key prefix and namespace
    provider_name: str

    # Client version - cache invalidation when implementation changes
    client_version: str

    # Cache schema version - cache invalidation when document handling changes
    cache_version: str = "v1"

    # Offline mode: cache miss -> error instead of network call
    offline: bool = False

    # Catalog searches older than this are refetched; None keeps them forever
    catalog_max_age: Optional[timedelta] = timedelta(hours=24)


class CachedDcsClient:
    """DCS reads through a DocumentCache.

    ``fetch_manifest`` has the manifest-loader signature, so it can be handed
    straight to ``aggregate`` as ``load_manifest``.
    """

    def __init__(self, client: DcsClient, cache: DocumentCache, config: ProviderConfig) -> None:
        self._client = client
        self._cache = cache
        self._config = config

    @property
    def manifest_namespace(self) -> str:
        return f"{self._config.provider_name}:manifest"

    @property
    def catalog_namespace(self) -> str:
        return f"{self._config.provider_name}:catalog"

    def cache_key(self, request_type: str, query: dict[str, str]) -> str:
        return provider_cache_key(
            provider=self._config.provider_name,
            request_type=request_type,
            query=query,
            version=self._config.cache_version,
            client_version=self._config.client_version,
        )

    def fetch_manifest(self, url: str) -> Any:
        key = self.cache_key("manifest", {"url": url})
        cached = self._cache.get(self.manifest_namespace, key)
        if cached is not None:
            logger.debug("Manifest cache hit for %s", url)
            return cached

        if self._config.offline:
            raise ManifestFetchError(url, "offline mode, not cached")

        document = self._client.fetch_manifest(url)
        self._cache.put(self.manifest_namespace, key, document)
        return document

    def fetch_catalog(self, subjects: Iterable[str] = DEFAULT_SUBJECTS) -> list[dict[str, Any]]:
        """Catalog records, from the cache when fresh enough.

        Raises:
            IOFailure: If the catalog is neither reachable nor cached
        """
        subjects = tuple(subjects)
        url = self._client.catalog_search_url(subjects)
        key = self.cache_key("catalog", {"domain": self._client.domain, "subjects": ",".join(subjects)})

        if self._config.offline:
            cached = self._cache.get(self.catalog_namespace, key)
            if cached is None:
                raise IOFailure(f"Catalog not cached for offline use: {url}")
            return records_from_payload(cached)

        cached = self._cache.get(self.catalog_namespace, key, max_age=self._config.catalog_max_age)
        if cached is not None:
            logger.debug("Catalog cache hit for %s", url)
            return records_from_payload(cached)

        payload = self._client.fetch_json(url)
        if payload is None:
            stale = self._cache.get(self.catalog_namespace, key)
            if stale is None:
                raise IOFailure(f"Catalog unavailable: {url}")
            logger.warning("Catalog unavailable; using cached copy of %s", url)
            return records_from_payload(stale)

        records = records_from_payload(payload)
        self._cache.put(self.catalog_namespace, key, payload)
        return records
