"""Catalog service clients and cache/offline wrappers."""

from .caching import CachedDcsClient, ProviderConfig
from .dcs import DcsClient

__all__ = [
    "CachedDcsClient",
    "DcsClient",
    "ProviderConfig",
]
