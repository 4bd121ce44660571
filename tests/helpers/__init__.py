"""Test helper utilities."""

from .catalog import asset, catalog_record, entry, names_in

__all__ = [
    "asset",
    "catalog_record",
    "entry",
    "names_in",
]
