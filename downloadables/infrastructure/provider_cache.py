"""Deterministic provider cache helpers."""

from __future__ import annotations

import json
from typing import Any


def canonical_json(payload: Any) -> str:
    """Return canonical JSON with stable ordering."""

    def normalize(value: Any) -> Any:
        if isinstance(value, dict):
            return {k: normalize(value[k]) for k in sorted(value)}
        if isinstance(value, list):
            return [normalize(item) for item in value]
        return value

    normalized = normalize(payload)
    return json.dumps(normalized, sort_keys=True, separators=(",", ":"), ensure_ascii=True)


def provider_cache_key(
    *,
    provider: str,
    request_type: str,
    query: dict[str, str],
    version: str,
    client_version: str,
) -> str:
    """Stable cache key: ``provider:request_type:version:client_version:k=v|k=v``.

    Query parameters are sorted so the key does not depend on dict order.
    """
    parts = [f"{key}={query[key]}" for key in sorted(query)]
    return f"{provider}:{request_type}:{version}:{client_version}:{'|'.join(parts)}"
