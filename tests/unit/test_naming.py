"""Unit tests for the asset filename parser."""

from __future__ import annotations

import pytest

from downloadables.core.naming import NameKind, parse_name


class TestConformingNames:
    """Names following <org>_<resource>_v<version>[_<info>].<ext>."""

    def test_generic_file(self):
        parsed = parse_name("obs_en_v9.pdf")

        assert parsed is not None
        assert parsed.prefix == "obs_en"
        assert parsed.version == "9"
        assert parsed.info == ""
        assert parsed.extension == "pdf"
        assert parsed.kind is NameKind.GENERIC
        assert parsed.parent_name is None

    def test_dotted_and_dashed_versions(self):
        assert parse_name("obs_en_v1.2.3.pdf").version == "1.2.3"
        assert parse_name("obs_en_v1-0_mp3_64kbps.zip").version == "1-0"

    def test_segment_member_mp3(self):
        parsed = parse_name("obs_en_v1_01_64kbps.mp3")

        assert parsed.kind is NameKind.SEGMENT_MEMBER
        assert parsed.segment_id == "01"
        assert parsed.quality == "64kbps"
        assert parsed.parent_name == "obs_en_v1_mp3_64kbps.zip"

    def test_segment_member_mp4(self):
        parsed = parse_name("obs_en_v6_12_720p.mp4")

        assert parsed.kind is NameKind.SEGMENT_MEMBER
        assert parsed.parent_name == "obs_en_v6_mp4_720p.zip"

    def test_media_variant_zip(self):
        parsed = parse_name("obs_en_v9_mp3_64kbps.zip")

        assert parsed.kind is NameKind.MEDIA_VARIANT
        assert parsed.segment_id == "mp3"
        assert parsed.quality == "64kbps"
        assert not parsed.is_video_variant
        assert parsed.parent_name is None

    @pytest.mark.parametrize("token", ["mp4", "3gpp"])
    def test_video_media_variant(self, token: str):
        parsed = parse_name(f"obs_en_v9_{token}_720p.zip")

        assert parsed.kind is NameKind.MEDIA_VARIANT
        assert parsed.is_video_variant

    def test_segment_pattern_with_other_extension_is_generic(self):
        parsed = parse_name("obs_en_v9_01_64kbps.pdf")

        assert parsed.kind is NameKind.GENERIC
        assert parsed.quality is None

    def test_info_without_quality_is_generic(self):
        parsed = parse_name("obs_en_v9_mp3.zip")

        assert parsed.kind is NameKind.GENERIC
        assert parsed.info == "mp3"

    def test_extra_underscores_before_info(self):
        parsed = parse_name("obs_en_v9__01_64kbps.mp3")

        assert parsed.kind is NameKind.SEGMENT_MEMBER
        assert parsed.segment_id == "01"

    def test_quality_with_multiple_underscores_is_generic(self):
        parsed = parse_name("obs_en_v9_01_64_kbps.mp3")

        assert parsed.kind is NameKind.GENERIC
        assert parsed.info == "01_64_kbps"

    def test_non_numeric_segment_id(self):
        parsed = parse_name("obs_en_v9_mp3_64kbps.mp3")

        assert parsed.kind is NameKind.SEGMENT_MEMBER
        assert parsed.segment_id == "mp3"


@pytest.mark.parametrize(
    "name",
    [
        "view on door43.org",
        "en_obs-v9.zip",
        "obs_en.pdf",
        "obs_en_vx.pdf",
        "obs_en_v9",
        "obs_en_v9_.tar_gz",
        "",
    ],
)
def test_non_conforming_names(name: str):
    assert parse_name(name) is None
