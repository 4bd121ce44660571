"""Format inference from asset names.

Maps a raw filename (or link title) to a FormatTag using the extension,
an embedded ``_<media>_`` marker for zipped media, and a few well-known hosts.
"""

from __future__ import annotations

import re
import urllib.parse

from .models import FormatTag

_EXTENSION_FORMATS: dict[str, str] = {
    "3gp": "video/3gp",
    "html": "text/html",
    "md": "text/markdown",
    "mp3": "audio/mp3",
    "mp4": "video/mp4",
    "pdf": "application/pdf",
    "txt": "text/txt",
    "usfm": "text/usfm",
    "doc": "application/doc",
    "docx": "application/docx",
    "epub": "application/epub",
    "odt": "application/odt",
}

_ZIPPED_MEDIA_RE = re.compile(r"_(mp3|3gp|mp4)_")

# Checked in order; the first host contained in the name wins.
_KNOWN_HOSTS = ("door43.org", "youtube.com", "bloomlibrary.org")


def file_extension(name: str) -> str:
    """Text after the last dot, or an empty string."""
    if not name or "." not in name:
        return ""
    return name.rsplit(".", 1)[1]


def url_extension(url: str) -> str:
    """Extension of the last path segment of a URL, ignoring query and fragment."""
    if not url:
        return ""
    path = urllib.parse.urlsplit(url).path
    return file_extension(path.rsplit("/", 1)[-1])


def url_host(url: str) -> str:
    """Network host of a URL, lower-cased; empty when there is none."""
    if not url:
        return ""
    try:
        host = urllib.parse.urlsplit(url.strip()).hostname
    except ValueError:
        return ""
    return host or ""


def infer_format(filename: str) -> FormatTag:
    """Derive a format tag from a filename. Never raises."""
    if not filename:
        return FormatTag()
    lowered = filename.lower()
    ext = file_extension(lowered)

    if ext in _EXTENSION_FORMATS:
        return FormatTag(_EXTENSION_FORMATS[ext])

    if ext == "zip":
        match = _ZIPPED_MEDIA_RE.search(lowered)
        if match:
            return FormatTag("application/zip", _EXTENSION_FORMATS[match.group(1)])
        return FormatTag("application/zip")

    for host in _KNOWN_HOSTS:
        if host in lowered:
            return FormatTag(host)
    if ext:
        return FormatTag(ext)
    return FormatTag(url_host(lowered))
