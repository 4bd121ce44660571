"""Application settings."""

from __future__ import annotations

from dataclasses import dataclass
import json
import os
from pathlib import Path
from typing import Any, Optional

from downloadables.providers.dcs import DEFAULT_DOMAIN, DEFAULT_SUBJECTS

_DEFAULT_TIMEOUT = 10.0
_DEFAULT_CATALOG_MAX_AGE_HOURS = 24.0
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class Settings:
    dcs_domain: str = DEFAULT_DOMAIN
    subjects: tuple[str, ...] = DEFAULT_SUBJECTS
    request_timeout: float = _DEFAULT_TIMEOUT
    offline: bool = False
    cache_path: Optional[Path] = None
    catalog_max_age_hours: float = _DEFAULT_CATALOG_MAX_AGE_HOURS
    cache_max_documents: Optional[int] = None


def load_settings(path: Optional[Path]) -> Settings:
    """Load settings from JSON config file, with environment variable overrides.

    Priority order:
    1. Environment variables
    2. JSON config file
    3. Defaults

    Args:
        path: Path to JSON config file, or None to use defaults only

    Returns:
        Settings object with resolved values

    Raises:
        ValueError: If a value has the wrong type or is out of range
    """
    json_settings: dict[str, Any] = {}
    if path and path.exists():
        json_settings = json.loads(path.read_text())
        if not isinstance(json_settings, dict):
            raise ValueError(f"Settings file must hold a JSON object: {path}")

    domain = os.getenv("DOWNLOADABLES_DCS_DOMAIN") or json_settings.get("dcs_domain", DEFAULT_DOMAIN)
    if not isinstance(domain, str) or not domain.strip():
        raise ValueError(f"Invalid DCS domain: {domain!r}")

    subjects = json_settings.get("subjects", list(DEFAULT_SUBJECTS))
    if not isinstance(subjects, list) or not all(isinstance(s, str) for s in subjects):
        raise ValueError("subjects must be a list of strings")

    timeout_raw = os.getenv("DOWNLOADABLES_REQUEST_TIMEOUT") or json_settings.get(
        "request_timeout", _DEFAULT_TIMEOUT
    )
    try:
        timeout = float(timeout_raw)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid request timeout: {timeout_raw!r}") from None
    if timeout <= 0:
        raise ValueError(f"Request timeout must be positive: {timeout}")

    env_offline = os.getenv("DOWNLOADABLES_OFFLINE")
    offline = _parse_bool(env_offline) if env_offline is not None else bool(json_settings.get("offline", False))

    cache_raw = os.getenv("DOWNLOADABLES_CACHE_DB") or json_settings.get("cache_path")
    cache_path = Path(cache_raw).expanduser() if cache_raw else None

    max_age_raw = os.getenv("DOWNLOADABLES_CATALOG_MAX_AGE_HOURS") or json_settings.get(
        "catalog_max_age_hours", _DEFAULT_CATALOG_MAX_AGE_HOURS
    )
    try:
        max_age = float(max_age_raw)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid catalog max age: {max_age_raw!r}") from None
    if max_age < 0:
        raise ValueError(f"Catalog max age must not be negative: {max_age}")

    max_documents_raw = os.getenv("DOWNLOADABLES_CACHE_MAX_DOCUMENTS") or json_settings.get("cache_max_documents")
    max_documents = None
    if max_documents_raw is not None:
        try:
            max_documents = int(max_documents_raw)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid cache size limit: {max_documents_raw!r}") from None
        if max_documents < 1:
            raise ValueError(f"Cache size limit must be positive: {max_documents}")

    return Settings(
        dcs_domain=domain.strip(),
        subjects=tuple(subjects),
        request_timeout=timeout,
        offline=offline,
        cache_path=cache_path,
        catalog_max_age_hours=max_age,
        cache_max_documents=max_documents,
    )


def default_config_path() -> Path:
    return Path.home() / ".config" / "downloadables" / "settings.json"


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean value: {value!r}")
