"""Build command - classify the catalog into per-subject downloadables."""

from __future__ import annotations

from argparse import Namespace
import json
from pathlib import Path
from typing import Any, Iterable, Optional

from downloadables.app import DownloadablesApp
from downloadables.commands.output import emit_output
from downloadables.core.aggregate import ManifestWarning, aggregate
from downloadables.core.describe import describe
from downloadables.core.library import (
    Language,
    build_library,
    index_langnames,
    language_heading,
    sorted_languages,
    sorted_owners,
    sorted_subject_ids,
    subject_title,
)
from downloadables.core.models import Bucket, CatalogItem, DownloadableTypes
from downloadables.errors import IOFailure, ValidationError
from downloadables.providers.dcs import records_from_payload

_BUCKET_LABELS = {
    Bucket.TEXT: "Text",
    Bucket.AUDIO: "Audio",
    Bucket.VIDEO: "Video",
    Bucket.OTHER: "Other",
}


def load_json_document(source: Path) -> Any:
    """Read a JSON document from disk."""
    try:
        text = source.read_text(encoding="utf-8")
    except OSError as exc:
        raise IOFailure(f"Cannot read {source}: {exc}") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValidationError(f"Invalid JSON in {source}: {exc}") from exc


def _load_records(args: Namespace, app: DownloadablesApp) -> list[dict[str, Any]]:
    catalog = getattr(args, "catalog", None)
    if catalog is None:
        return app.fetch_catalog()
    catalog = str(catalog)
    if catalog.startswith(("http://", "https://")):
        payload = app.client.fetch_json(catalog)
        if payload is None:
            raise IOFailure(f"Catalog unavailable: {catalog}")
        return records_from_payload(payload)
    return records_from_payload(load_json_document(Path(catalog)))


def _describe_item(item: CatalogItem) -> dict[str, Any]:
    payload = item.to_dict()
    description = describe(item)
    payload["description"] = (
        {
            "icon_class": description.icon_class,
            "title": description.title,
            "type_label": description.type_label,
            "size_label": description.size_label,
        }
        if description
        else None
    )
    if item.chapters:
        payload["chapters"] = [_describe_item(chapter) for chapter in item.chapters]
    return payload


def _item_line(item: CatalogItem, indent: str) -> str:
    description = describe(item)
    if description is None:
        return f"{indent}{item.name}"
    details = description.type_label
    if description.size_label:
        details += f", {description.size_label}"
    url = item.asset.download_url if item.asset else ""
    return f"{indent}{description.title} ({details}) <{url}>"


def _subject_lines(title: str, downloadables: DownloadableTypes) -> list[str]:
    lines = [f"    {title}"]
    for bucket in Bucket:
        items = downloadables.bucket(bucket)
        if not items:
            continue
        lines.append(f"      {_BUCKET_LABELS[bucket]}:")
        for item in items:
            lines.append(_item_line(item, "        - "))
            for chapter in item.chapters:
                lines.append(_item_line(chapter, "            - "))
    return lines


def _warning_payload(warning: ManifestWarning) -> dict[str, str]:
    return {
        "entry": warning.entry.full_name,
        "asset": warning.asset.name,
        "url": warning.asset.download_url,
        "message": warning.message,
    }


def _select_languages(languages: dict[str, Language], codes: Optional[Iterable[str]]) -> list[Language]:
    ordered = sorted_languages(languages)
    if not codes:
        return ordered
    wanted = set(codes)
    return [language for language in ordered if language.language in wanted]


def run_build(
    args: Namespace,
    *,
    app: DownloadablesApp | None = None,
    langnames: Optional[dict[str, dict[str, Any]]] = None,
    output_sink=print,
) -> int:
    """Classify every subject of the catalog and emit the result."""
    if app is None:
        raise ValidationError("app is required; construct it in the CLI composition root")
    json_output = getattr(args, "json", False)

    if langnames is None and getattr(args, "langnames", None):
        rows = load_json_document(Path(args.langnames))
        if not isinstance(rows, list):
            raise ValidationError(f"langnames must be a JSON array: {args.langnames}")
        langnames = index_langnames(rows)

    records = _load_records(args, app)
    languages = _select_languages(build_library(records), getattr(args, "language", None))

    warnings: list[ManifestWarning] = []
    language_payloads: list[dict[str, Any]] = []
    human_lines: list[str] = []
    subject_count = 0

    for language in languages:
        heading = language_heading(language, langnames)
        human_lines.append(heading)
        owner_payloads = []
        for owner in sorted_owners(language):
            human_lines.append(f"  Published by: {owner.display_name}")
            subject_payloads = []
            for subject_id in sorted_subject_ids(owner):
                subject = owner.subjects[subject_id]
                top_entry = subject.top_entry
                downloadables = aggregate(
                    subject.entries,
                    load_manifest=app.manifest_loader,
                    on_warning=warnings.append,
                )
                title = subject_title(top_entry, language.language) if top_entry else subject.subject
                subject_count += 1
                subject_payloads.append(
                    {
                        "id": subject_id,
                        "subject": subject.subject,
                        "title": title,
                        "downloadables": {
                            bucket.value: [_describe_item(item) for item in downloadables.bucket(bucket)]
                            for bucket in Bucket
                        },
                    }
                )
                human_lines.extend(_subject_lines(title, downloadables))
            owner_payloads.append(
                {
                    "name": owner.name,
                    "full_name": owner.full_name,
                    "subjects": subject_payloads,
                }
            )
        language_payloads.append(
            {
                "language": language.language,
                "title": language.title,
                "direction": language.direction,
                "heading": heading,
                "owners": owner_payloads,
            }
        )

    human_lines.append(
        f"build: languages={len(language_payloads)} subjects={subject_count} warnings={len(warnings)}"
    )
    for warning in warnings:
        human_lines.append(f"build: warning={warning.message}")

    emit_output(
        command="build",
        payload={
            "status": "OK",
            "languages": language_payloads,
            "warnings": [_warning_payload(warning) for warning in warnings],
        },
        json_output=json_output,
        output_sink=output_sink,
        human_lines=human_lines,
    )
    return 0
