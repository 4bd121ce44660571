"""Link manifest detection and expansion.

Some releases publish a small JSON document (``links.json``,
``attachments.json``...) instead of the files themselves. The document holds
one asset record or an array of them; each record is classified as if the
release had listed it directly.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterator, Optional

from downloadables.errors import ManifestFetchError

from .models import Asset

LINK_MANIFEST_SUFFIXES = (
    "links.json",
    "link.json",
    "assets.json",
    "attachments.json",
    "files.json",
)

# Takes a manifest download URL, returns the decoded JSON document.
ManifestLoader = Callable[[str], Any]

logger = logging.getLogger(__name__)


def is_link_manifest(asset: Asset) -> bool:
    return asset.name.lower().endswith(LINK_MANIFEST_SUFFIXES)


def normalize_manifest(document: Any) -> list[Asset]:
    """Turn a manifest document into assets.

    A single record and an array of records are both accepted. Elements that
    are not objects are dropped.
    """
    records = document if isinstance(document, list) else [document]
    assets: list[Asset] = []
    for record in records:
        if not isinstance(record, dict):
            logger.debug("Skipping non-object manifest element: %r", record)
            continue
        assets.append(Asset.from_payload(record))
    return assets


def resolve_asset(asset: Asset, load_manifest: Optional[ManifestLoader]) -> Iterator[Asset]:
    """Yield the assets an asset stands for.

    Ordinary assets yield themselves. Link manifests are loaded and expanded;
    raises ManifestFetchError when that is not possible.
    """
    if not is_link_manifest(asset):
        yield asset
        return

    if load_manifest is None:
        raise ManifestFetchError(asset.download_url, "no manifest loader configured")
    if not asset.download_url:
        raise ManifestFetchError(asset.name, "manifest has no download URL")

    try:
        document = load_manifest(asset.download_url)
    except ManifestFetchError:
        raise
    except Exception as exc:
        # Loaders are caller code; whatever they raise stays with this asset.
        raise ManifestFetchError(asset.download_url, f"{type(exc).__name__}: {exc}") from exc

    if not isinstance(document, (dict, list)):
        raise ManifestFetchError(asset.download_url, "manifest is not an object or array")

    expanded = normalize_manifest(document)
    logger.debug("Expanded %s into %d assets", asset.name, len(expanded))
    yield from expanded
