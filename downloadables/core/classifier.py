"""Classification and de-duplication of release assets.

Every asset lands in exactly one bucket of a DownloadableTypes. Within a
bucket, each logical resource (its dedup key) is kept once, at the highest
version seen; on equal versions the first item seen stays. Segmented media
(one mp3/mp4 per chapter) is grouped under a synthesized parent zip.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from .formats import file_extension, infer_format, url_extension, url_host
from .models import Asset, Bucket, CatalogItem, Chapter, DownloadableTypes, FormatTag, ItemKind
from .naming import NameKind, ParsedName, parse_name
from .versions import chapter_sort_key, is_newer

_TEXT_FORMAT_TOKENS = ("markdown", "pdf", "docx", "odt", "epub", "door43")

logger = logging.getLogger(__name__)


def classify(
    state: DownloadableTypes,
    asset: Optional[Asset],
    release_version: str,
) -> DownloadableTypes:
    """Insert or merge one asset into the bucket state and return it.

    Never raises for bad data: assets without a name or URL are dropped,
    names outside the naming grammar become plain links.
    """
    if asset is None or not asset.name or not asset.download_url:
        logger.debug("Dropping malformed asset: %r", asset)
        return state

    parsed = parse_name(asset.name.lower())
    if parsed is None:
        _add_link(state, asset, release_version)
    elif parsed.kind is NameKind.SEGMENT_MEMBER:
        _add_chapter(state, asset, parsed)
    elif parsed.kind is NameKind.MEDIA_VARIANT:
        _add_media_variant(state, asset, parsed)
    else:
        _add_file(state, asset, parsed)
    return state


def bucket_for_format(fmt: FormatTag) -> Bucket:
    """Bucket for a generic file, chosen by format family."""
    mime = fmt.effective_mime
    if mime.startswith("audio/"):
        return Bucket.AUDIO
    if mime.startswith("video/"):
        return Bucket.VIDEO
    rendered = str(fmt)
    if any(token in rendered for token in _TEXT_FORMAT_TOKENS):
        return Bucket.TEXT
    return Bucket.OTHER


def _add_link(state: DownloadableTypes, asset: Asset, release_version: str) -> None:
    host = url_host(asset.download_url)
    item = CatalogItem(
        name=asset.name,
        format=infer_format(asset.name),
        version=release_version,
        prefix=host,
        extension=url_extension(asset.download_url),
        kind=ItemKind.LINK,
        asset=asset,
    )
    bucket = Bucket.TEXT if "door43.org" in host else Bucket.OTHER
    items = state.bucket(bucket)
    for existing in items:
        if existing.kind is ItemKind.LINK and existing.prefix == host and is_newer(existing.version, release_version):
            logger.debug("Ignoring link %s: %s already has release %s", asset.name, host, existing.version)
            return
    # Links on one host are distinct resources unless they share a title.
    lowered = asset.name.lower()
    _place(
        items,
        item,
        lambda existing: (
            existing.kind is ItemKind.LINK and existing.prefix == host and existing.name.lower() == lowered
        ),
    )


def _add_chapter(state: DownloadableTypes, asset: Asset, parsed: ParsedName) -> None:
    bucket = Bucket.VIDEO if parsed.extension == "mp4" else Bucket.AUDIO
    items = state.bucket(bucket)

    for existing in items:
        if (
            existing.prefix == parsed.prefix
            and existing.quality == parsed.quality
            and is_newer(existing.version, parsed.version)
        ):
            logger.debug("Ignoring %s: version %s is already listed", asset.name, existing.version)
            return

    parent_name = parsed.parent_name
    parent = next((existing for existing in items if existing.name.lower() == parent_name), None)
    if parent is None:
        parent = CatalogItem(
            name=parent_name,
            format=infer_format(parent_name),
            version=parsed.version,
            prefix=parsed.prefix,
            extension="zip",
            kind=ItemKind.CHAPTER_PARENT,
            quality=parsed.quality,
        )
        if not _place(items, parent, _media_key(parent)):
            logger.debug("Ignoring %s: an equal release of %s is already listed", asset.name, parent_name)
            return

    if any(chapter.identifier == parsed.segment_id for chapter in parent.chapters):
        return

    parent.kind = ItemKind.CHAPTER_PARENT
    parent.chapters.append(
        Chapter(
            name=asset.name,
            format=infer_format(asset.name),
            version=parsed.version,
            prefix=parsed.prefix,
            extension=parsed.extension,
            kind=ItemKind.CHAPTER,
            asset=asset,
            quality=parsed.quality,
            identifier=parsed.segment_id or "",
        )
    )
    parent.chapters.sort(key=lambda chapter: chapter_sort_key(chapter.identifier))


def _add_media_variant(state: DownloadableTypes, asset: Asset, parsed: ParsedName) -> None:
    bucket = Bucket.VIDEO if parsed.is_video_variant else Bucket.AUDIO
    items = state.bucket(bucket)
    lowered = asset.name.lower()

    # A parent synthesized from chapters adopts the zip that holds them.
    for existing in items:
        if existing.asset is None and existing.name.lower() == lowered:
            existing.asset = asset
            return

    item = CatalogItem(
        name=asset.name,
        format=infer_format(asset.name),
        version=parsed.version,
        prefix=parsed.prefix,
        extension=parsed.extension,
        kind=ItemKind.MEDIA_VARIANT,
        asset=asset,
        quality=parsed.quality,
    )
    _place(items, item, _media_key(item))


def _add_file(state: DownloadableTypes, asset: Asset, parsed: ParsedName) -> None:
    item = CatalogItem(
        name=asset.name,
        format=infer_format(asset.name),
        version=parsed.version,
        prefix=parsed.prefix,
        extension=parsed.extension or file_extension(asset.name.lower()),
        kind=ItemKind.FILE,
        asset=asset,
    )
    _place(
        state.bucket(bucket_for_format(item.format)),
        item,
        lambda existing: (
            existing.kind is ItemKind.FILE
            and existing.prefix == item.prefix
            and existing.extension == item.extension
            and existing.format == item.format
        ),
    )


def _media_key(item: CatalogItem) -> Callable[[CatalogItem], bool]:
    """Media variants and chapter parents share the (prefix, format, quality) key."""
    return lambda existing: (
        existing.kind in (ItemKind.MEDIA_VARIANT, ItemKind.CHAPTER_PARENT)
        and existing.prefix == item.prefix
        and existing.format == item.format
        and existing.quality == item.quality
    )


def _place(
    items: list[CatalogItem],
    item: CatalogItem,
    same_key: Callable[[CatalogItem], bool],
) -> bool:
    """Keep the highest version per key; returns True when ``item`` was stored.

    A newer item replaces the old one at its position. An older or equal one
    is discarded, so the first item seen wins ties.
    """
    for index, existing in enumerate(items):
        if not same_key(existing):
            continue
        if is_newer(item.version, existing.version):
            logger.debug("Replacing %s (%s) with %s (%s)", existing.name, existing.version, item.name, item.version)
            items[index] = item
            return True
        logger.debug("Keeping %s (%s) over %s (%s)", existing.name, existing.version, item.name, item.version)
        return False
    items.append(item)
    return True
