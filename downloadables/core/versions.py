"""Version comparison and chapter ordering."""

from __future__ import annotations

import re

_VERSION_SPLIT_RE = re.compile(r"[.\-]")
_NUMERIC_RE = re.compile(r"^[0-9]+$")


def version_components(version: str) -> list[str]:
    """Split a version string into components.

    A single leading ``v`` is dropped so release tags (``v12``) compare
    against filename versions (``12``).
    """
    cleaned = (version or "").strip()
    if cleaned[:1] in ("v", "V"):
        cleaned = cleaned[1:]
    if not cleaned:
        return []
    return _VERSION_SPLIT_RE.split(cleaned)


def compare_versions(left: str, right: str) -> int:
    """Compare two version strings; returns -1, 0 or 1.

    Components compare numerically when both parse as integers, else
    lexically. The shorter side is padded with ``"0"``.
    """
    left_parts = version_components(left)
    right_parts = version_components(right)
    width = max(len(left_parts), len(right_parts))
    left_parts += ["0"] * (width - len(left_parts))
    right_parts += ["0"] * (width - len(right_parts))
    for a, b in zip(left_parts, right_parts):
        if _NUMERIC_RE.match(a) and _NUMERIC_RE.match(b):
            a_key: int | str = int(a)
            b_key: int | str = int(b)
        else:
            a_key, b_key = a, b
        if a_key < b_key:
            return -1
        if a_key > b_key:
            return 1
    return 0


def is_newer(candidate: str, existing: str) -> bool:
    return compare_versions(candidate, existing) > 0


def chapter_sort_key(identifier: str) -> tuple[str, str]:
    """String ordering for chapter identifiers (``"01" < "02" < "10"``).

    Digits compare as characters, not numbers; case differences only break
    ties. Used with a stable sort so equal keys keep arrival order.
    """
    return (identifier.casefold(), identifier)
