"""CLI output: human-readable lines or a versioned JSON envelope."""

from __future__ import annotations

import json
from typing import Any, Iterable

SCHEMA_VERSION = "v1"


def json_envelope(command: str, payload: dict[str, Any]) -> str:
    """Single-line JSON with sorted keys; non-ASCII titles are kept as-is."""
    return json.dumps(
        {"schema_version": SCHEMA_VERSION, "command": command, "data": payload},
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )


def emit_output(
    *,
    command: str,
    payload: dict[str, Any],
    json_output: bool,
    output_sink=print,
    human_lines: Iterable[str] = (),
) -> None:
    if json_output:
        output_sink(json_envelope(command, payload))
        return
    for line in human_lines:
        output_sink(line)
