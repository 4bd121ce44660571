"""Builders for assets, catalog entries and raw catalog records."""

from __future__ import annotations

from typing import Any, Iterable

from downloadables.core.models import Asset, CatalogEntry, CatalogItem

BASE_URL = "https://git.door43.org/unfoldingWord/en_obs/releases/download"


def asset(name: str, *, size: int = 1024, version: str = "v1", url: str | None = None) -> Asset:
    """Asset with a download URL under the release of ``version``."""
    return Asset(name=name, download_url=url or f"{BASE_URL}/{version}/{name}", size=size)


def entry(
    *assets: Asset,
    version: str = "v1",
    name: str = "en_obs",
    owner: str = "unfoldingWord",
    title: str = "Open Bible Stories",
) -> CatalogEntry:
    return CatalogEntry(
        name=name,
        full_name=f"{owner}/{name}",
        title=title,
        release_version=version,
        zipball_url=f"https://git.door43.org/{owner}/{name}/archive/{version}.zip",
        assets=list(assets),
        language="en",
        language_title="English",
        owner=owner,
        subject="Open Bible Stories",
    )


def catalog_record(
    *,
    language: str = "en",
    owner: str = "unfoldingWord",
    name: str = "en_obs",
    subject: str = "Open Bible Stories",
    title: str = "Open Bible Stories",
    tag: str = "v9",
    assets: Iterable[dict[str, Any]] = (),
    language_title: str = "English",
) -> dict[str, Any]:
    """A record shaped like the DCS catalog v5 search ``data`` items."""
    return {
        "name": name,
        "full_name": f"{owner}/{name}",
        "owner": owner,
        "language": language,
        "language_title": language_title,
        "language_direction": "ltr",
        "subject": subject,
        "title": title,
        "branch_or_tag_name": tag,
        "zipball_url": f"https://git.door43.org/{owner}/{name}/archive/{tag}.zip",
        "repo": {"owner": {"full_name": f"{owner} Org"}},
        "release": {
            "tag_name": tag,
            "assets": list(assets),
        },
    }


def names_in(items: Iterable[CatalogItem]) -> list[str]:
    return [item.name for item in items]
