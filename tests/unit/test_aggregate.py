"""Unit tests for catalog aggregation."""

from __future__ import annotations

import http.client

import pytest

from downloadables.core.aggregate import ManifestWarning, aggregate, synthetic_assets
from downloadables.core.models import ItemKind
from downloadables.errors import ManifestFetchError, ValidationError

from tests.helpers import asset, entry, names_in


def test_none_entries_is_a_precondition_failure() -> None:
    with pytest.raises(ValidationError):
        aggregate(None)


def test_non_entry_items_are_rejected() -> None:
    with pytest.raises(ValidationError):
        aggregate([{"name": "en_obs"}])


def test_empty_entries_yield_empty_state() -> None:
    assert aggregate([]).is_empty()


def test_synthetic_links_come_from_first_entry() -> None:
    newest = entry(asset("obs_en_v9.pdf", version="v9"), version="v9")
    older = entry(asset("obs_en_v8.pdf", version="v8"), version="v8")

    state = aggregate([newest, older])

    assert names_in(state.text) == ["obs_en_v9.pdf", "View on Door43.org", "en_obs-v9.zip"]
    view, archive = state.text[1], state.text[2]
    assert view.kind is ItemKind.LINK
    assert view.asset.download_url == "https://door43.org/u/unfoldingWord/en_obs/v9"
    assert archive.asset.download_url == "https://git.door43.org/unfoldingWord/en_obs/archive/v9.zip"
    assert archive.prefix == "git.door43.org"


def test_later_entries_are_not_assumed_newer() -> None:
    older = entry(asset("obs_en_v8.pdf", version="v8"), version="v8")
    newer = entry(asset("obs_en_v9.pdf", version="v9"), version="v9")

    state = aggregate([newer, older])
    assert names_in(state.text)[0] == "obs_en_v9.pdf"

    state = aggregate([older, newer])
    assert names_in(state.text)[0] == "obs_en_v9.pdf"


def test_manifest_expanded_with_entry_version() -> None:
    manifest = asset("attachments.json", version="v9")
    document = [
        {"name": "Watch on YouTube", "browser_download_url": "https://www.youtube.com/watch?v=1"},
        {"name": "obs_en_v9_mp3_64kbps.zip", "browser_download_url": "https://cdn/obs_en_v9_mp3_64kbps.zip"},
    ]
    loaded = []

    def loader(url):
        loaded.append(url)
        return document

    state = aggregate([entry(manifest, version="v9")], load_manifest=loader)

    assert loaded == [manifest.download_url]
    assert names_in(state.other) == ["Watch on YouTube"]
    assert state.other[0].version == "v9"
    assert names_in(state.audio) == ["obs_en_v9_mp3_64kbps.zip"]
    assert "attachments.json" not in names_in(item for _, item in state.items())


def test_manifest_failure_is_reported_and_build_continues() -> None:
    manifest = asset("links.json")
    pdf = asset("obs_en_v1.pdf")
    warnings: list[ManifestWarning] = []

    def loader(url):
        raise ManifestFetchError(url, "HTTP 404")

    state = aggregate([entry(manifest, pdf)], load_manifest=loader, on_warning=warnings.append)

    assert names_in(state.text)[0] == "obs_en_v1.pdf"
    assert len(warnings) == 1
    assert warnings[0].asset is manifest
    assert "HTTP 404" in warnings[0].message


def test_manifest_without_loader_is_reported(caplog: pytest.LogCaptureFixture) -> None:
    warnings: list[ManifestWarning] = []

    with caplog.at_level("WARNING", logger="downloadables.core.aggregate"):
        aggregate([entry(asset("files.json"))], on_warning=warnings.append)

    assert len(warnings) == 1
    assert "files.json" in caplog.text


def test_synthetic_assets() -> None:
    view, archive = synthetic_assets(entry(version="v3", name="es-419_obs", owner="Es-419_gl"))

    assert view.name == "View on Door43.org"
    assert view.download_url == "https://door43.org/u/Es-419_gl/es-419_obs/v3"
    assert archive.name == "es-419_obs-v3.zip"


def test_source_archive_kept_beside_release_links() -> None:
    state = aggregate([entry(asset("OBS print notes.pdf"), version="v9")])

    assert names_in(state.text) == ["OBS print notes.pdf", "View on Door43.org", "en_obs-v9.zip"]


def test_every_manifest_link_to_one_host_is_kept() -> None:
    document = [
        {"name": "Story 1 on YouTube", "browser_download_url": "https://www.youtube.com/watch?v=1"},
        {"name": "Story 2 on YouTube", "browser_download_url": "https://www.youtube.com/watch?v=2"},
    ]

    state = aggregate([entry(asset("links.json"), version="v9")], load_manifest=lambda url: document)

    assert names_in(state.other) == ["Story 1 on YouTube", "Story 2 on YouTube"]


def test_unexpected_loader_error_is_a_warning() -> None:
    warnings: list[ManifestWarning] = []

    def loader(url):
        raise http.client.IncompleteRead(b"")

    state = aggregate(
        [entry(asset("links.json"), asset("obs_en_v1.pdf"))],
        load_manifest=loader,
        on_warning=warnings.append,
    )

    assert names_in(state.text)[0] == "obs_en_v1.pdf"
    assert len(warnings) == 1
    assert "IncompleteRead" in warnings[0].message
