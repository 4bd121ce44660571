"""Door43 Content Service (DCS) client.

Fetches catalog search results and link manifests over HTTP. The
classification engine never calls this directly; the CLI hands its
``fetch_manifest`` to aggregation as the manifest loader.
"""

from __future__ import annotations

import http.client
import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, Iterable, Optional

from downloadables import __version__ as DOWNLOADABLES_VERSION
from downloadables.errors import IOFailure, ManifestFetchError

DEFAULT_DOMAIN = "git.door43.org"
DEFAULT_SUBJECTS = (
    "Open Bible Stories",
    "OBS Study Notes",
    "OBS Study Questions",
    "OBS Translation Notes",
    "OBS Translation Questions",
    "TSV OBS Study Notes",
    "TSV OBS Study Questions",
    "TSV OBS Translation Notes",
    "TSV OBS Translation Questions",
)

logger = logging.getLogger(__name__)


class DcsClient:
    """Minimal read-only client for the DCS catalog API."""

    def __init__(
        self,
        domain: str = DEFAULT_DOMAIN,
        *,
        useragent: Optional[str] = None,
        timeout: float = 10.0,
        offline: bool = False,
    ) -> None:
        if not domain:
            raise ValueError("DCS domain required")
        self._domain = domain
        self._useragent = useragent or f"downloadables/{DOWNLOADABLES_VERSION}"
        self._timeout = timeout
        self._offline = offline

    @property
    def domain(self) -> str:
        return self._domain

    def catalog_search_url(self, subjects: Iterable[str] = DEFAULT_SUBJECTS) -> str:
        """URL of a catalog search returning every release of the given subjects."""
        params = {
            "includeHistory": "1",
            "subject": ",".join(subjects),
        }
        return f"https://{self._domain}/api/catalog/v5/search?{urllib.parse.urlencode(params)}"

    def fetch_catalog(self, subjects: Iterable[str] = DEFAULT_SUBJECTS) -> list[dict[str, Any]]:
        """Fetch catalog records; raises IOFailure when the catalog is unavailable."""
        url = self.catalog_search_url(subjects)
        payload = self.fetch_json(url)
        if payload is None:
            raise IOFailure(f"Catalog unavailable: {url}")
        return records_from_payload(payload)

    def fetch_manifest(self, url: str) -> Any:
        """Fetch a link manifest document; raises ManifestFetchError on failure."""
        if self._offline:
            raise ManifestFetchError(url, "offline mode")
        document = self.fetch_json(url)
        if document is None:
            raise ManifestFetchError(url, "request failed")
        return document

    def fetch_json(self, url: str) -> Optional[Any]:
        """GET a JSON document; None on HTTP, network or decoding errors."""
        if self._offline:
            return None
        request = urllib.request.Request(
            url,
            headers={"User-Agent": self._useragent, "Accept": "application/json"},
        )
        try:
            with urllib.request.urlopen(request, timeout=self._timeout) as resp:
                return json.load(resp)
        except urllib.error.HTTPError as exc:
            logger.warning("DCS HTTP error %s for %s: %s", exc.code, url, exc)
        except urllib.error.URLError as exc:
            logger.warning("DCS request failed for %s: %s", url, exc)
        except (TimeoutError, http.client.HTTPException) as exc:
            logger.warning("DCS response for %s was not read completely: %r", url, exc)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            logger.warning("DCS returned invalid JSON for %s: %s", url, exc)
        return None


def records_from_payload(payload: Any) -> list[dict[str, Any]]:
    """Catalog records from a search response (``{"data": [...]}``) or a bare list."""
    if isinstance(payload, dict):
        payload = payload.get("data")
    if not isinstance(payload, list):
        raise IOFailure("Catalog payload has no record list")
    return [record for record in payload if isinstance(record, dict)]
