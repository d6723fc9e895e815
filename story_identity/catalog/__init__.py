"""Versioned asset catalog."""

from story_identity.catalog.builder import (
    build_catalog,
    chapter_groups,
    filter_by_media,
    find_group,
    group_records,
    media_kind_for,
    parse_asset_records,
)
from story_identity.catalog.grammar import (
    DEFAULT_RULES,
    KeyRule,
    ParsedKey,
    build_rules,
    parse_asset_key,
    split_key,
)
from story_identity.catalog.html import extract_image_urls, extract_images_from_html
from story_identity.catalog.presentation import (
    display_name,
    format_relative_time,
    format_version_number,
    parse_timestamp,
)
from story_identity.catalog.versioning import (
    extract_version_from_filename,
    generate_versioned_filename,
    latest_version,
    next_version,
)

__all__ = [
    # Builder
    "build_catalog",
    "parse_asset_records",
    "group_records",
    "find_group",
    "chapter_groups",
    "filter_by_media",
    "media_kind_for",
    # Grammar
    "KeyRule",
    "ParsedKey",
    "DEFAULT_RULES",
    "build_rules",
    "parse_asset_key",
    "split_key",
    # HTML
    "extract_image_urls",
    "extract_images_from_html",
    # Presentation
    "display_name",
    "format_version_number",
    "format_relative_time",
    "parse_timestamp",
    # Versioning
    "extract_version_from_filename",
    "generate_versioned_filename",
    "latest_version",
    "next_version",
]
