"""Fold every release of one subject into a single DownloadableTypes."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Callable, Optional

from downloadables.errors import ManifestFetchError, ValidationError

from .classifier import classify
from .links import ManifestLoader, resolve_asset
from .models import Asset, CatalogEntry, DownloadableTypes

VIEW_ON_DOOR43_NAME = "View on Door43.org"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ManifestWarning:
    """A link manifest that could not be expanded."""

    entry: CatalogEntry
    asset: Asset
    message: str


WarningSink = Callable[[ManifestWarning], None]


def aggregate(
    entries: Iterable[CatalogEntry],
    load_manifest: Optional[ManifestLoader] = None,
    on_warning: Optional[WarningSink] = None,
) -> DownloadableTypes:
    """Classify every asset of every entry into one bucket state.

    Entries are processed in the given order, but order does not decide
    recency: only the version comparator does. Two synthetic links taken from
    the first entry (its Door43 page and its source archive) are classified
    last, through the same rules as any asset.

    Args:
        entries: Catalog entries of one subject
        load_manifest: Callable returning the JSON document at a manifest URL
        on_warning: Receives a ManifestWarning per manifest that failed

    Returns:
        The populated DownloadableTypes

    Raises:
        ValidationError: If entries is not a sequence of CatalogEntry
    """
    if entries is None or isinstance(entries, (str, bytes)) or not isinstance(entries, Iterable):
        raise ValidationError("entries must be a sequence of catalog entries")
    entries = list(entries)
    for entry in entries:
        if not isinstance(entry, CatalogEntry):
            raise ValidationError(f"Not a catalog entry: {entry!r}")

    state = DownloadableTypes()
    if not entries:
        return state

    for entry in entries:
        for asset in entry.assets:
            try:
                for resolved in resolve_asset(asset, load_manifest):
                    classify(state, resolved, entry.release_version)
            except ManifestFetchError as exc:
                logger.warning("Skipping link manifest %s of %s: %s", asset.name, entry.full_name, exc.reason)
                if on_warning is not None:
                    on_warning(ManifestWarning(entry=entry, asset=asset, message=str(exc)))

    top_entry = entries[0]
    for synthetic in synthetic_assets(top_entry):
        classify(state, synthetic, top_entry.release_version)
    return state


def synthetic_assets(entry: CatalogEntry) -> tuple[Asset, Asset]:
    """The web view link and source archive link listed with every subject."""
    return (
        Asset(name=VIEW_ON_DOOR43_NAME, download_url=entry.canonical_view_url),
        Asset(name=entry.archive_name, download_url=entry.archive_url),
    )
