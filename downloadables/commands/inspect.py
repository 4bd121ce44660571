"""Inspect command - show how a single asset name is parsed and classified."""

from __future__ import annotations

from argparse import Namespace

from downloadables.commands.output import emit_output
from downloadables.core.classifier import classify
from downloadables.core.formats import infer_format
from downloadables.core.models import Asset, DownloadableTypes
from downloadables.core.naming import parse_name
from downloadables.errors import ValidationError


def run_inspect(args: Namespace, *, output_sink=print) -> int:
    """Parse a filename and report its format, name parts and bucket."""
    name = (getattr(args, "name", "") or "").strip()
    if not name:
        raise ValidationError("name is required")
    url = getattr(args, "url", None) or f"https://example.invalid/{name}"
    version = getattr(args, "release_version", None) or ""

    fmt = infer_format(name)
    parsed = parse_name(name.lower())
    state = classify(DownloadableTypes(), Asset(name=name, download_url=url), version)
    placements = [
        {"bucket": bucket.value, "name": item.name, "kind": item.kind.value}
        for bucket, item in state.items()
    ]

    payload = {
        "name": name,
        "format": str(fmt),
        "conforming": parsed is not None,
        "parsed": None,
        "placements": placements,
    }
    human_lines = [f"inspect: name={name}", f"inspect: format={fmt}"]
    if parsed is None:
        human_lines.append("inspect: not conforming (classified as a link)")
    else:
        payload["parsed"] = {
            "prefix": parsed.prefix,
            "version": parsed.version,
            "info": parsed.info,
            "extension": parsed.extension,
            "kind": parsed.kind.value,
            "segment_id": parsed.segment_id,
            "quality": parsed.quality,
            "parent_name": parsed.parent_name,
        }
        human_lines.append(
            f"inspect: prefix={parsed.prefix} version={parsed.version} "
            f"kind={parsed.kind.value} quality={parsed.quality or '-'}"
        )
        if parsed.parent_name:
            human_lines.append(f"inspect: parent={parsed.parent_name} chapter={parsed.segment_id}")
    for placement in placements:
        human_lines.append(f"inspect: bucket={placement['bucket']} kind={placement['kind']}")

    emit_output(
        command="inspect",
        payload=payload,
        json_output=getattr(args, "json", False),
        output_sink=output_sink,
        human_lines=human_lines,
    )
    return 0
