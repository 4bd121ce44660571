"""Filename parser for conventionally named release assets.

Conforming names look like ``<org>_<resource>_v<version>[_<info>].<ext>``:

    obs_en_v9_mp3_64kbps.zip   -> media variant (one quality tier, zipped)
    obs_en_v9_01_64kbps.mp3    -> segment member (chapter 01 of a parent zip)
    obs_en_v9.pdf              -> generic file

Anything else is not conforming and is treated as an opaque link.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

FILE_PARTS_PATTERN = re.compile(
    r"^(?P<org>[^_]+)_(?P<resource>[^_]+)_v(?P<version>[\d.\-]+)_*(?P<info>.*)\.(?P<ext>[^._]+)$"
)
SEGMENT_PATTERN = re.compile(r"^(?P<segment>\d+|mp\d|3gpp)_(?P<quality>[^_]+)$")

_SEGMENTED_EXTENSIONS = frozenset({"mp3", "mp4"})
_VIDEO_SEGMENT_TOKENS = frozenset({"mp4", "3gpp"})


class NameKind(str, Enum):
    """Shape of a conforming asset name."""
    SEGMENT_MEMBER = "segment_member"
    MEDIA_VARIANT = "media_variant"
    GENERIC = "generic"


@dataclass(frozen=True)
class ParsedName:
    """Decomposition of a conforming asset filename."""

    prefix: str
    version: str
    info: str
    extension: str
    kind: NameKind = NameKind.GENERIC
    segment_id: Optional[str] = None
    quality: Optional[str] = None

    @property
    def parent_name(self) -> Optional[str]:
        """Name of the zip that groups this segment with its siblings."""
        if self.kind is not NameKind.SEGMENT_MEMBER:
            return None
        return f"{self.prefix}_v{self.version}_{self.extension}_{self.quality}.zip"

    @property
    def is_video_variant(self) -> bool:
        return self.segment_id in _VIDEO_SEGMENT_TOKENS


def parse_name(filename: str) -> Optional[ParsedName]:
    """Parse a lower-cased asset filename.

    Returns None when the name does not follow the naming grammar.
    """
    match = FILE_PARTS_PATTERN.match(filename or "")
    if not match:
        return None

    prefix = f"{match.group('org')}_{match.group('resource')}"
    version = match.group("version")
    info = match.group("info")
    ext = match.group("ext")

    segment = SEGMENT_PATTERN.match(info)
    if segment and (ext == "zip" or ext in _SEGMENTED_EXTENSIONS):
        kind = NameKind.SEGMENT_MEMBER if ext in _SEGMENTED_EXTENSIONS else NameKind.MEDIA_VARIANT
        return ParsedName(
            prefix=prefix,
            version=version,
            info=info,
            extension=ext,
            kind=kind,
            segment_id=segment.group("segment"),
            quality=segment.group("quality"),
        )

    return ParsedName(prefix=prefix, version=version, info=info, extension=ext)
