"""Classification engine: format inference, name parsing, dedup and grouping."""

from .aggregate import ManifestWarning, aggregate
from .classifier import classify
from .describe import Description, describe, format_size
from .formats import infer_format
from .links import is_link_manifest, resolve_asset
from .models import Asset, Bucket, CatalogEntry, CatalogItem, Chapter, DownloadableTypes, FormatTag, ItemKind
from .naming import NameKind, ParsedName, parse_name
from .versions import compare_versions

__all__ = [
    "Asset",
    "Bucket",
    "CatalogEntry",
    "CatalogItem",
    "Chapter",
    "Description",
    "DownloadableTypes",
    "FormatTag",
    "ItemKind",
    "ManifestWarning",
    "NameKind",
    "ParsedName",
    "aggregate",
    "classify",
    "compare_versions",
    "describe",
    "format_size",
    "infer_format",
    "is_link_manifest",
    "parse_name",
    "resolve_asset",
]
