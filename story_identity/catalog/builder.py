"""Asset catalog builder.

Turns the flat key -> ``{url, ...}`` mapping produced by the generation
pipeline into one group per slot, each with its versions in ascending order.
"""

from collections.abc import Mapping
from typing import Any

from story_identity.catalog.grammar import build_rules, parse_asset_key, split_key
from story_identity.constants import CHAPTER_TYPE
from story_identity.models.assets import AssetGroup, AssetRecord, MediaKind, StorageEntry
from story_identity.models.config import CatalogConfig
from story_identity.utils.logging import get_logger

logger = get_logger(__name__)

RawAssetMap = Mapping[str, Any]


def media_kind_for(filename: str, config: CatalogConfig | None = None) -> MediaKind:
    """
    Classify a file by its extension.

    Examples:
        >>> media_kind_for("chapter_1.mp3")
        'audio'
        >>> media_kind_for("frontcover_v002.PNG")
        'image'
    """
    config = config or CatalogConfig()
    _, dot, extension = filename.rpartition(".")
    if not dot:
        return "other"

    extension = extension.lower()
    if extension in config.image_extensions:
        return "image"
    if extension in config.audio_extensions:
        return "audio"
    if extension in config.document_extensions:
        return "document"
    return "other"


def _as_entry(value: Any) -> StorageEntry:
    if isinstance(value, StorageEntry):
        return value
    return StorageEntry.model_validate(value)


def parse_asset_records(
    raw_map: RawAssetMap, config: CatalogConfig | None = None
) -> list[AssetRecord]:
    """
    Parse every key of the raw map into an AssetRecord, in map order.

    Storage metadata wins over a timestamp embedded in the key: ``timeCreated``
    first, then ``updated``.
    """
    config = config or CatalogConfig()
    rules = build_rules(config.cover_types)
    records = []

    for raw_key, value in raw_map.items():
        entry = _as_entry(value)
        parsed = parse_asset_key(raw_key, rules)
        filename, _ = split_key(raw_key)

        records.append(
            AssetRecord(
                raw_key=raw_key,
                url=entry.url,
                type=parsed.type,
                chapter_number=parsed.chapter_number,
                version=parsed.version,
                filename=filename,
                timestamp=entry.time_created or entry.updated or parsed.timestamp,
                media_kind=media_kind_for(filename, config),
            )
        )

    return records


def group_records(
    records: list[AssetRecord], config: CatalogConfig | None = None
) -> list[AssetGroup]:
    """
    Group records by slot and order the groups.

    Versions within a group are sorted by integer value (ties keep input
    order). Groups come out as ``config.slot_order`` lists them (chapters by
    number), then every other slot in first-seen order.
    """
    config = config or CatalogConfig()
    slots: dict[tuple[str, int | None], list[AssetRecord]] = {}

    for record in records:
        slots.setdefault(record.slot, []).append(record)

    groups = [
        AssetGroup(
            type=slot_type,
            chapter_number=chapter_number,
            versions=sorted(members, key=lambda record: record.version.sort_key),
        )
        for (slot_type, chapter_number), members in slots.items()
    ]

    rank = {slot_type: position for position, slot_type in enumerate(config.slot_order)}
    unranked = len(rank)

    def order(indexed: tuple[int, AssetGroup]) -> tuple[int, int, int]:
        first_seen, group = indexed
        chapter = group.chapter_number if group.chapter_number is not None else -1
        return (rank.get(group.type, unranked), chapter, first_seen)

    return [group for _, group in sorted(enumerate(groups), key=order)]


def build_catalog(raw_map: RawAssetMap, *, config: CatalogConfig | None = None) -> list[AssetGroup]:
    """
    Build the versioned asset catalog for one story.

    Every key ends up in exactly one group; keys that match no naming pattern
    form a slot of their own instead of being dropped.

    Args:
        raw_map: Mapping of asset key to a record with at least ``url``
        config: Catalog configuration (defaults apply when omitted)

    Returns:
        Asset groups, covers first, then chapters by number, then other slots

    Examples:
        >>> catalog = build_catalog({
        ...     "frontcover_v001.png": {"url": "https://cdn/f1.png"},
        ...     "frontcover_v002.png": {"url": "https://cdn/f2.png"},
        ... })
        >>> catalog[0].latest_version.version_label
        'v002'
    """
    config = config or CatalogConfig()
    records = parse_asset_records(raw_map, config)
    groups = group_records(records, config)

    logger.debug("Asset catalog built", keys=len(records), groups=len(groups))
    return groups


def find_group(
    groups: list[AssetGroup], type: str, chapter_number: int | None = None
) -> AssetGroup | None:
    """
    Find the group for a slot.

    Examples:
        >>> find_group([], "frontcover") is None
        True
    """
    for group in groups:
        if group.type == type and group.chapter_number == chapter_number:
            return group
    return None


def chapter_groups(groups: list[AssetGroup]) -> list[AssetGroup]:
    """Return the chapter groups, ordered by chapter number."""
    chapters = [group for group in groups if group.type == CHAPTER_TYPE]
    return sorted(chapters, key=lambda group: group.chapter_number or 0)


def filter_by_media(
    raw_map: RawAssetMap, kind: MediaKind, *, config: CatalogConfig | None = None
) -> dict[str, Any]:
    """
    Keep only the keys of one media kind.

    Meant to run before :func:`build_catalog` when a caller wants, say, the
    audio catalog alone.
    """
    config = config or CatalogConfig()
    return {
        raw_key: value
        for raw_key, value in raw_map.items()
        if media_kind_for(split_key(raw_key)[0], config) == kind
    }
