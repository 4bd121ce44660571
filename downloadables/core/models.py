"""Core data models for downloadables."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Iterator, Optional


class Bucket(str, Enum):
    """Top-level group a catalog item is listed under."""
    TEXT = "text"
    AUDIO = "audio"
    VIDEO = "video"
    OTHER = "other"


class ItemKind(str, Enum):
    """How a catalog item was derived from its asset name."""
    LINK = "link"
    FILE = "file"
    MEDIA_VARIANT = "media_variant"
    CHAPTER_PARENT = "chapter_parent"
    CHAPTER = "chapter"


@dataclass(frozen=True)
class Asset:
    """One downloadable unit as advertised by an upstream release."""

    name: str
    download_url: str
    size: int = 0
    created_at: Optional[datetime] = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> Asset:
        """Build an asset from an upstream release asset record.

        Missing or mistyped fields become empty values; the classifier drops
        assets without a name or URL.
        """
        name = payload.get("name")
        url = payload.get("browser_download_url")
        return cls(
            name=name if isinstance(name, str) else "",
            download_url=url if isinstance(url, str) else "",
            size=parse_size(payload.get("size")),
            created_at=parse_timestamp(payload.get("created_at")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "browser_download_url": self.download_url,
            "size": self.size,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class FormatTag:
    """Semantic format of an item.

    ``mime`` is a MIME type (``text/markdown``), a host marker
    (``door43.org``) or a bare extension. ``content`` is only set when
    ``mime`` is a zip wrapping inner media.
    """

    mime: str = ""
    content: Optional[str] = None

    def __str__(self) -> str:
        if self.content:
            return f"{self.mime}; content={self.content}"
        return self.mime

    @property
    def is_zipped(self) -> bool:
        return self.mime == "application/zip"

    @property
    def effective_mime(self) -> str:
        """Inner content type for zip wrappers, else the outer type."""
        if self.is_zipped and self.content:
            return self.content
        return self.mime

    @property
    def leaf(self) -> str:
        """Last ``/`` segment of the effective mime (``mp3``, ``door43.org``)."""
        return self.effective_mime.rsplit("/", 1)[-1]


@dataclass(slots=True)
class CatalogItem:
    """A classified item in the output tree.

    An item with chapters is a chapter parent (e.g. a zip of per-chapter
    mp3 files); the zip asset itself may arrive later, or never.
    """

    name: str
    format: FormatTag
    version: str
    prefix: str
    extension: str
    kind: ItemKind
    asset: Optional[Asset] = None
    quality: Optional[str] = None
    chapters: list[Chapter] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": self.name,
            "kind": self.kind.value,
            "format": str(self.format),
            "version": self.version,
            "prefix": self.prefix,
            "extension": self.extension,
            "quality": self.quality,
            "asset": self.asset.to_dict() if self.asset else None,
        }
        if self.chapters:
            payload["chapters"] = [chapter.to_dict() for chapter in self.chapters]
        return payload


@dataclass(slots=True)
class Chapter(CatalogItem):
    """One segment of a chapter parent."""

    identifier: str = ""

    def to_dict(self) -> dict[str, Any]:
        payload = CatalogItem.to_dict(self)
        payload["identifier"] = self.identifier
        return payload


@dataclass(slots=True)
class DownloadableTypes:
    """Per-subject classification result: four disjoint ordered buckets."""

    text: list[CatalogItem] = field(default_factory=list)
    audio: list[CatalogItem] = field(default_factory=list)
    video: list[CatalogItem] = field(default_factory=list)
    other: list[CatalogItem] = field(default_factory=list)

    def bucket(self, bucket: Bucket) -> list[CatalogItem]:
        return getattr(self, bucket.value)

    def items(self) -> Iterator[tuple[Bucket, CatalogItem]]:
        for bucket in Bucket:
            for item in self.bucket(bucket):
                yield bucket, item

    def is_empty(self) -> bool:
        return not any(self.bucket(bucket) for bucket in Bucket)

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        return {
            bucket.value: [item.to_dict() for item in self.bucket(bucket)]
            for bucket in Bucket
        }


@dataclass(slots=True)
class CatalogEntry:
    """One catalog row: a release of one subject by one owner in one language."""

    name: str
    full_name: str
    title: str
    release_version: str
    zipball_url: str
    assets: list[Asset] = field(default_factory=list)
    language: str = ""
    language_title: str = ""
    language_direction: str = "ltr"
    owner: str = ""
    owner_full_name: str = ""
    subject: str = ""

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> CatalogEntry:
        """Build an entry from a DCS catalog search record."""
        release = payload.get("release") or {}
        repo_owner = (payload.get("repo") or {}).get("owner") or {}
        assets = [
            Asset.from_payload(asset)
            for asset in release.get("assets") or []
            if isinstance(asset, dict)
        ]
        return cls(
            name=payload.get("name") or "",
            full_name=payload.get("full_name") or "",
            title=payload.get("title") or "",
            release_version=release.get("tag_name") or payload.get("branch_or_tag_name") or "",
            zipball_url=payload.get("zipball_url") or "",
            assets=assets,
            language=payload.get("language") or "",
            language_title=payload.get("language_title") or "",
            language_direction=payload.get("language_direction") or "ltr",
            owner=payload.get("owner") or "",
            owner_full_name=repo_owner.get("full_name") or "",
            subject=payload.get("subject") or "",
        )

    @property
    def canonical_view_url(self) -> str:
        """Door43 page rendering this release."""
        return f"https://door43.org/u/{self.full_name}/{self.release_version}"

    @property
    def archive_url(self) -> str:
        return self.zipball_url

    @property
    def archive_name(self) -> str:
        return f"{self.name}-{self.release_version}.zip"


def parse_size(value: Any) -> int:
    """Parse a byte count, clamping junk and negatives to zero."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(value, 0)
    if isinstance(value, float):
        return max(int(value), 0)
    if isinstance(value, str):
        try:
            return max(int(value.strip()), 0)
        except ValueError:
            return 0
    return 0


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp as published by the catalog API."""
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    cleaned = value.strip()
    if cleaned.endswith("Z"):
        cleaned = cleaned[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(cleaned)
    except ValueError:
        return None
