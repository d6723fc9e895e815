"""Unit tests for the asset catalog builder."""

from collections import Counter
from datetime import UTC, datetime
from types import SimpleNamespace

import pytest
from pydantic import ValidationError

from story_identity.catalog.builder import (
    build_catalog,
    chapter_groups,
    filter_by_media,
    find_group,
    media_kind_for,
    parse_asset_records,
)
from story_identity.models.assets import StorageEntry
from story_identity.models.config import CatalogConfig


class TestBuildCatalog:
    """Test build_catalog function."""

    def test_calibration_scenario(self, sample_raw_map: dict) -> None:
        """Test covers and chapters with two versions each."""
        catalog = build_catalog(sample_raw_map)

        frontcover = find_group(catalog, "frontcover")
        assert frontcover is not None
        assert len(frontcover.versions) == 2
        assert frontcover.latest_version.version_label == "v002"

        chapter = find_group(catalog, "chapter", 1)
        assert chapter is not None
        assert chapter.chapter_number == 1
        assert len(chapter.versions) == 2
        assert chapter.latest_version.version_label == "v002"
        assert [record.raw_key for record in chapter.versions] == [
            "chapter_1.png",
            "chapter_1_v002.png",
        ]

    def test_every_key_in_exactly_one_group(self, storage_raw_map: dict) -> None:
        """Test no key is lost or duplicated."""
        catalog = build_catalog(storage_raw_map)

        seen = Counter(record.raw_key for group in catalog for record in group.versions)
        assert set(seen) == set(storage_raw_map)
        assert all(count == 1 for count in seen.values())

    def test_numeric_version_order(self) -> None:
        """Test v010 ranks above v002 and v009."""
        raw_map = {
            "frontcover_v010.png": {"url": "u10"},
            "frontcover_v002.png": {"url": "u2"},
            "frontcover_v009.png": {"url": "u9"},
        }

        group = build_catalog(raw_map)[0]

        assert [record.version_label for record in group.versions] == ["v002", "v009", "v010"]
        assert group.latest_version.url == "u10"

    def test_numeric_order_across_padding_widths(self) -> None:
        """Test tokens of different widths compare as integers."""
        raw_map = {
            "backcover_v1000.png": {"url": "u1000"},
            "backcover_v999.png": {"url": "u999"},
            "backcover_v12.png": {"url": "u12"},
        }

        group = build_catalog(raw_map)[0]

        assert [record.version.number for record in group.versions] == [12, 999, 1000]
        assert group.latest_version.version_label == "v1000"

    def test_unversioned_sorts_before_explicit_v001(self) -> None:
        """Test the implicit version precedes an explicit v001 regardless of input order."""
        raw_map = {
            "chapter_1_v001.png": {"url": "explicit"},
            "chapter_1.png": {"url": "implicit"},
        }

        group = build_catalog(raw_map)[0]

        assert [record.url for record in group.versions] == ["implicit", "explicit"]

    def test_chapters_are_distinct_groups(self) -> None:
        """Test same type with different chapter numbers stays apart."""
        raw_map = {f"chapter_{n}.png": {"url": f"u{n}"} for n in (3, 1, 2)}

        catalog = build_catalog(raw_map)

        assert [group.chapter_number for group in catalog] == [1, 2, 3]
        assert all(len(group.versions) == 1 for group in catalog)

    def test_group_order(self, storage_raw_map: dict) -> None:
        """Test covers first, chapters by number, other slots last."""
        catalog = build_catalog(storage_raw_map)

        assert [(group.type, group.chapter_number) for group in catalog] == [
            ("frontcover", None),
            ("backcover", None),
            ("chapter", 1),
            ("chapter", 2),
            ("character_sheet", None),
        ]

    def test_custom_slot_order(self, sample_raw_map: dict) -> None:
        """Test slot order comes from configuration."""
        config = CatalogConfig(slot_order=["chapter", "frontcover"])

        catalog = build_catalog(sample_raw_map, config=config)

        assert [group.type for group in catalog] == ["chapter", "frontcover"]

    def test_unknown_slots_keep_first_seen_order(self) -> None:
        """Test slots outside slot_order follow input order."""
        raw_map = {
            "zebra.png": {"url": "z"},
            "alpha.png": {"url": "a"},
            "zebra_v002.png": {"url": "z2"},
        }

        catalog = build_catalog(raw_map)

        assert [group.type for group in catalog] == ["zebra", "alpha"]
        assert len(catalog[0].versions) == 2

    def test_deterministic(self, storage_raw_map: dict) -> None:
        """Test the same input gives the same catalog."""
        assert build_catalog(storage_raw_map) == build_catalog(dict(storage_raw_map))

    def test_empty_map(self) -> None:
        """Test an empty map gives an empty catalog."""
        assert build_catalog({}) == []

    def test_malformed_keys_preserved(self) -> None:
        """Test keys matching no naming pattern still form groups."""
        raw_map = {".png": {"url": "u1"}, "random file.jpg": {"url": "u2"}}

        catalog = build_catalog(raw_map)

        assert {group.type for group in catalog} == {".png", "random file"}

    def test_url_passed_through(self) -> None:
        """Test URLs are not rewritten."""
        url = "https://cdn.example.com/a b/frontcover.png?sig=abc%20def"

        catalog = build_catalog({"frontcover.png": {"url": url}})

        assert catalog[0].latest_version.url == url

    def test_accepts_storage_entries(self) -> None:
        """Test StorageEntry values are used directly."""
        catalog = build_catalog({"frontcover.png": StorageEntry(url="u1")})

        assert catalog[0].latest_version.url == "u1"

    def test_non_text_metadata_accepted(self) -> None:
        """Test datetime and epoch metadata are read instead of rejected."""
        raw_map = {
            "frontcover_v001.png": {
                "url": "u1",
                "timeCreated": datetime(2025, 6, 20, 10, 55, tzinfo=UTC),
                "size": 2048,
            },
            "frontcover_v002.png": {"url": "u2", "updated": 1718000000},
            "frontcover_v003.png": {"url": "u3", "updated": ["not", "a", "time"]},
        }

        versions = build_catalog(raw_map)[0].versions

        assert versions[0].timestamp == "2025-06-20T10:55:00+00:00"
        assert versions[1].timestamp == datetime.fromtimestamp(1718000000, UTC).isoformat()
        assert versions[2].timestamp is None

    def test_accepts_attribute_objects(self) -> None:
        """Test blob-like objects with a url attribute are read."""
        blob = SimpleNamespace(
            url="https://storage.googleapis.com/b/chapter_1.png",
            updated=datetime(2025, 6, 21, 8, 0, tzinfo=UTC),
            content_type="image/png",
        )

        record = build_catalog({"chapter_1.png": blob})[0].latest_version

        assert record.url == blob.url
        assert record.timestamp == "2025-06-21T08:00:00+00:00"

    def test_chapter_word_suffixes_join_chapter_group(self) -> None:
        """Test suffixed chapter keys land in their chapter slot."""
        raw_map = {
            "chapter_1.png": {"url": "c1"},
            "chapter_1_final.png": {"url": "c1-final"},
            "chapter_1_v002_final.png": {"url": "c1-v2-final"},
        }

        catalog = build_catalog(raw_map)

        assert len(catalog) == 1
        chapter = find_group(catalog, "chapter", 1)
        assert chapter is not None
        assert [record.url for record in chapter.versions] == ["c1", "c1-final", "c1-v2-final"]

    def test_missing_url_is_outside_the_input_shape(self) -> None:
        """Test a value without url is rejected by validation."""
        with pytest.raises(ValidationError):
            build_catalog({"frontcover.png": {"size": 10}})


class TestParseAssetRecords:
    """Test parse_asset_records function."""

    def test_timestamp_precedence(self) -> None:
        """Test timeCreated, then updated, then the key's own timestamp."""
        raw_map = {
            "frontcover_v001_2025-01-01T00-00-00-000Z.png": {
                "url": "a",
                "timeCreated": "2025-06-01T00:00:00Z",
                "updated": "2025-06-02T00:00:00Z",
            },
            "frontcover_v002_2025-01-01T00-00-00-000Z.png": {
                "url": "b",
                "updated": "2025-06-02T00:00:00Z",
            },
            "frontcover_v003_2025-01-01T00-00-00-000Z.png": {"url": "c"},
            "frontcover_v004.png": {"url": "d"},
        }

        timestamps = [record.timestamp for record in parse_asset_records(raw_map)]

        assert timestamps == [
            "2025-06-01T00:00:00Z",
            "2025-06-02T00:00:00Z",
            "2025-01-01T00-00-00-000Z",
            None,
        ]

    def test_record_fields(self) -> None:
        """Test filename and media kind are filled in."""
        record = parse_asset_records({"audio/chapter_2_v003.mp3": {"url": "u"}})[0]

        assert record.raw_key == "audio/chapter_2_v003.mp3"
        assert record.filename == "chapter_2_v003.mp3"
        assert record.media_kind == "audio"
        assert record.slot == ("chapter", 2)


class TestMediaKind:
    """Test media_kind_for and filter_by_media."""

    @pytest.mark.parametrize(
        ("filename", "kind"),
        [
            ("frontcover.png", "image"),
            ("frontcover.JPEG", "image"),
            ("chapter_1.mp3", "audio"),
            ("story_v002.html", "document"),
            ("notes.txt", "other"),
            ("no_extension", "other"),
        ],
    )
    def test_media_kind(self, filename: str, kind: str) -> None:
        """Test extension classification."""
        assert media_kind_for(filename) == kind

    def test_filter_by_media(self, storage_raw_map: dict) -> None:
        """Test only audio keys are kept."""
        audio = filter_by_media(storage_raw_map, "audio")

        assert list(audio) == ["audio/chapter_1.mp3"]

    def test_filtered_audio_catalog(self, storage_raw_map: dict) -> None:
        """Test building a catalog from the audio keys alone."""
        catalog = build_catalog(filter_by_media(storage_raw_map, "audio"))

        assert len(catalog) == 1
        assert catalog[0].chapter_number == 1
        assert catalog[0].latest_version.media_kind == "audio"


class TestLookups:
    """Test find_group and chapter_groups."""

    def test_find_missing_group(self, sample_raw_map: dict) -> None:
        """Test lookups for absent slots."""
        catalog = build_catalog(sample_raw_map)

        assert find_group(catalog, "backcover") is None
        assert find_group(catalog, "chapter", 2) is None
        assert find_group(catalog, "chapter") is None

    def test_chapter_groups(self, storage_raw_map: dict) -> None:
        """Test chapter groups in chapter order."""
        catalog = build_catalog(storage_raw_map)

        assert [group.chapter_number for group in chapter_groups(catalog)] == [1, 2]
