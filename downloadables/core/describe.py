"""Human-readable labels for classified items.

Produces the icon class, title, type label and size string a renderer shows
next to each download link. Pure: reads the item, never changes it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from .models import CatalogItem, Chapter

DEFAULT_CHAPTER_LABEL = "Chapter {number}:"

_SOURCE_ARCHIVE_RE = re.compile(r"https://git\.door43\.org/[^/]+/[^/]+/archive/", re.IGNORECASE)


@dataclass(frozen=True)
class _Style:
    icon_class: str
    type_label: str
    show_size: bool = True
    use_item_name: bool = False


_WEBSITE_YOUTUBE = _Style("fa-brands fa-youtube", "Website", show_size=False, use_item_name=True)
_WEBSITE_BLOOM = _Style("fa-book", "Website", show_size=False, use_item_name=True)

_STYLES: dict[str, _Style] = {
    "pdf": _Style("fa-file-pdf", "PDF"),
    "youtube": _WEBSITE_YOUTUBE,
    "youtube.com": _WEBSITE_YOUTUBE,
    "bloom": _WEBSITE_BLOOM,
    "bloomlibrary.org": _WEBSITE_BLOOM,
    "door43.org": _Style("fa-globe", "Website", show_size=False, use_item_name=True),
    "git.door43.org": _Style("fa-file-lines", "Source Files", show_size=False, use_item_name=True),
    "docx": _Style("fa-file-word", "Word Document"),
    "odt": _Style("fa-file-text", "OpenDocument Text"),
    "epub": _Style("fa-book", "ePub Book"),
    "markdown": _Style("fa-file-text", "Markdown"),
    "md": _Style("fa-file-text", "Markdown"),
    "html": _Style("fa-code", "HTML"),
    "usfm": _Style("fa-file-text", "USFM"),
    "mp3": _Style("fa-file-audio", "MP3"),
    "mp4": _Style("fa-file-video", "MP4"),
    "3gp": _Style("fa-file-video", "3GP"),
    "3gpp": _Style("fa-file-video", "3GP"),
    "zip": _Style("fa-file-zipper", "Zipped"),
}


@dataclass(frozen=True)
class Description:
    icon_class: str
    title: str
    type_label: str
    size_label: str


def describe(item: CatalogItem, chapter_label: str = DEFAULT_CHAPTER_LABEL) -> Optional[Description]:
    """Describe an item for display.

    Args:
        item: Classified item or chapter
        chapter_label: Template for the chapter prefix, with a ``{number}`` field

    Returns:
        Description, or None when the item has no asset to link to
    """
    asset = item.asset
    if asset is None:
        return None

    fmt = item.format
    style = _STYLES.get(fmt.leaf)
    if style is None:
        style = _Style("fa-file", str(fmt), use_item_name=True)

    title = item.name if style.use_item_name else asset.name
    type_label = style.type_label
    if fmt.leaf == "zip" and _SOURCE_ARCHIVE_RE.search(asset.download_url):
        type_label += ", Source Files"
    if item.quality and item.quality != type_label:
        type_label += f" – {item.quality}"

    size_label = ""
    if style.show_size and asset.size > 0:
        size_label = format_size(asset.size)
        if fmt.is_zipped:
            size_label += " zipped"

    if isinstance(item, Chapter):
        prefix = chapter_label.format(number=chapter_number(item.identifier))
        title = f"{prefix} {title}"

    return Description(
        icon_class=style.icon_class,
        title=title,
        type_label=type_label,
        size_label=size_label,
    )


def chapter_number(identifier: str) -> str:
    """Display form of a chapter identifier (``"007"`` -> ``"7"``)."""
    try:
        return f"{int(identifier):,}"
    except ValueError:
        return identifier


def format_size(size: int) -> str:
    """Human size string: ``950 Bytes``, ``2.0 KB``, ``1.4 MB``."""
    if size <= 0:
        return ""
    if size < 1000:
        return f"{size:,} Bytes"
    value = size / 1024
    for unit in ("KB", "MB"):
        if value < 1000:
            return f"{value:,.1f} {unit}"
        value /= 1024
    return f"{value:,.1f} GB"
