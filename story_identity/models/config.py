"""Configuration models for the slug resolver and asset catalog."""

from typing import Literal

from pydantic import BaseModel, Field, model_validator

from story_identity.constants import (
    DEFAULT_AUDIO_EXTENSIONS,
    DEFAULT_COVER_TYPES,
    DEFAULT_DOCUMENT_EXTENSIONS,
    DEFAULT_EXCLUDED_URL_MARKERS,
    DEFAULT_IMAGE_EXTENSIONS,
    DEFAULT_LOOKUP_TIMEOUT_SECONDS,
    DEFAULT_RETRY_ATTEMPTS,
    DEFAULT_RETRY_MAX_WAIT,
    DEFAULT_RETRY_MIN_WAIT,
    DEFAULT_SLOT_ORDER,
    DEFAULT_SLUG_MAX_ATTEMPTS,
    DEFAULT_STORAGE_HOST,
    SLUG_MAX_LENGTH,
    SLUG_MIN_LENGTH,
)


class SlugConfig(BaseModel):
    """Slug generation and collision resolution configuration."""

    min_length: int = Field(default=SLUG_MIN_LENGTH, ge=1)
    max_length: int = Field(default=SLUG_MAX_LENGTH, ge=1)
    max_attempts: int | None = Field(
        default=DEFAULT_SLUG_MAX_ATTEMPTS,
        ge=1,
        description="Existence checks before giving up (None = retry until free)",
    )
    transliterate: bool = Field(
        default=False, description="Transliterate non-ASCII letters instead of dropping them"
    )

    @model_validator(mode="after")
    def _check_length_bounds(self) -> "SlugConfig":
        if self.min_length > self.max_length:
            raise ValueError("min_length must not exceed max_length")
        return self


class CatalogConfig(BaseModel):
    """Asset catalog configuration."""

    slot_order: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SLOT_ORDER),
        description="Slot types listed first in the catalog, in this order",
    )
    cover_types: list[str] = Field(
        default_factory=lambda: list(DEFAULT_COVER_TYPES),
        description="Slot types whose keys may carry a bare timestamp suffix",
    )
    storage_host: str = Field(default=DEFAULT_STORAGE_HOST)
    image_extensions: list[str] = Field(default_factory=lambda: list(DEFAULT_IMAGE_EXTENSIONS))
    audio_extensions: list[str] = Field(default_factory=lambda: list(DEFAULT_AUDIO_EXTENSIONS))
    document_extensions: list[str] = Field(
        default_factory=lambda: list(DEFAULT_DOCUMENT_EXTENSIONS)
    )
    excluded_url_markers: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXCLUDED_URL_MARKERS),
        description="Image URLs containing any of these markers are skipped in HTML scans",
    )


class CollaboratorConfig(BaseModel):
    """Retry and deadline settings for existence-check collaborators."""

    retry_attempts: int = Field(default=DEFAULT_RETRY_ATTEMPTS, ge=1)
    retry_min_wait: float = Field(default=DEFAULT_RETRY_MIN_WAIT, ge=0.0)
    retry_max_wait: float = Field(default=DEFAULT_RETRY_MAX_WAIT, ge=0.0)
    timeout_seconds: float = Field(default=DEFAULT_LOOKUP_TIMEOUT_SECONDS, gt=0.0)


class LoggingConfig(BaseModel):
    """Logging configuration for loguru."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    serialize: bool = Field(default=False, description="Serialize file logs to JSON")
    colorize: bool = Field(default=True, description="Colorize console output")
    file_path: str | None = Field(default=None, description="Optional log file path")
    rotation: str = Field(default="500 MB", description="Log rotation size/time")
    retention: str = Field(default="30 days", description="Log retention period")
    compression: str = Field(default="zip", description="Compression format for rotated logs")


class IdentityConfig(BaseModel):
    """Complete library configuration."""

    slug: SlugConfig = Field(default_factory=SlugConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    collaborators: CollaboratorConfig = Field(default_factory=CollaboratorConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
