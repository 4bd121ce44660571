"""Unit tests for display descriptions."""

from __future__ import annotations

import pytest

from downloadables.core.aggregate import aggregate
from downloadables.core.classifier import classify
from downloadables.core.describe import chapter_number, describe, format_size
from downloadables.core.models import Asset, DownloadableTypes

from tests.helpers import asset, entry


@pytest.mark.parametrize(
    ("size", "expected"),
    [
        (0, ""),
        (-5, ""),
        (950, "950 Bytes"),
        (999, "999 Bytes"),
        (2048, "2.0 KB"),
        (1_500_000, "1.4 MB"),
        (3 * 1024 ** 3, "3.0 GB"),
    ],
)
def test_format_size(size: int, expected: str) -> None:
    assert format_size(size) == expected


@pytest.mark.parametrize(("identifier", "expected"), [("007", "7"), ("1000", "1,000"), ("intro", "intro")])
def test_chapter_number(identifier: str, expected: str) -> None:
    assert chapter_number(identifier) == expected


def test_pdf(state: DownloadableTypes) -> None:
    classify(state, asset("obs_en_v9.pdf", size=2048), "v9")

    description = describe(state.text[0])

    assert description.icon_class == "fa-file-pdf"
    assert description.title == "obs_en_v9.pdf"
    assert description.type_label == "PDF"
    assert description.size_label == "2.0 KB"


def test_zipped_audio_variant(state: DownloadableTypes) -> None:
    classify(state, asset("obs_en_v9_mp3_64kbps.zip", size=1_500_000), "v9")

    description = describe(state.audio[0])

    assert description.icon_class == "fa-file-audio"
    assert description.type_label == "MP3 – 64kbps"
    assert description.size_label == "1.4 MB zipped"


def test_chapter_parent_without_zip_has_no_description(state: DownloadableTypes) -> None:
    classify(state, asset("obs_en_v9_007_64kbps.mp3"), "v9")

    parent = state.audio[0]

    assert parent.asset is None
    assert describe(parent) is None
    chapter = describe(parent.chapters[0])
    assert chapter.title == "Chapter 7: obs_en_v9_007_64kbps.mp3"
    assert chapter.type_label == "MP3 – 64kbps"
    assert chapter.size_label == "1.0 KB"


def test_custom_chapter_label(state: DownloadableTypes) -> None:
    classify(state, asset("obs_en_v9_012_128kbps.mp3"), "v9")

    chapter = describe(state.audio[0].chapters[0], chapter_label="Kapitel {number}:")

    assert chapter.title.startswith("Kapitel 12: ")


def test_source_archive_and_view_link() -> None:
    state = aggregate([entry(version="v9")])
    view, archive = state.text

    view_description = describe(view)
    assert view_description.icon_class == "fa-globe"
    assert view_description.title == "View on Door43.org"
    assert view_description.type_label == "Website"

    archive_description = describe(archive)
    assert archive_description.icon_class == "fa-file-zipper"
    assert archive_description.type_label == "Zipped, Source Files"
    assert archive_description.size_label == ""


def test_plain_zip_is_not_source_files(state: DownloadableTypes) -> None:
    classify(state, asset("obs_en_v9_usfm.zip"), "v9")

    item = next(item for _, item in state.items())

    assert describe(item).type_label == "Zipped"


def test_website_hides_size(state: DownloadableTypes) -> None:
    classify(state, Asset(name="Watch on youtube.com", download_url="https://youtube.com/watch?v=1", size=5000), "v9")

    description = describe(state.other[0])

    assert description.icon_class == "fa-brands fa-youtube"
    assert description.type_label == "Website"
    assert description.title == "Watch on youtube.com"
    assert description.size_label == ""
