"""Utility functions and helpers."""

from story_identity.utils.config_loader import load_identity_config, load_yaml_config
from story_identity.utils.logging import get_logger, setup_logging
from story_identity.utils.slug import (
    generate_slug,
    is_valid_slug,
    require_valid_slug,
    slug_violation,
    truncate_slug,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "load_yaml_config",
    "load_identity_config",
    "generate_slug",
    "is_valid_slug",
    "require_valid_slug",
    "slug_violation",
    "truncate_slug",
]
