"""Pydantic data models for the library."""

from story_identity.models.assets import (
    AssetGroup,
    AssetRecord,
    AssetVersion,
    MediaKind,
    StorageEntry,
    Unversioned,
    Versioned,
    format_version_label,
)
from story_identity.models.config import (
    CatalogConfig,
    CollaboratorConfig,
    IdentityConfig,
    LoggingConfig,
    SlugConfig,
)

__all__ = [
    # Assets
    "AssetVersion",
    "Unversioned",
    "Versioned",
    "format_version_label",
    "MediaKind",
    "StorageEntry",
    "AssetRecord",
    "AssetGroup",
    # Config
    "SlugConfig",
    "CatalogConfig",
    "CollaboratorConfig",
    "LoggingConfig",
    "IdentityConfig",
]
