"""Content identity and versioned asset resolution.

Two stateless components:

- Slug resolution: derive a URL-safe slug from a title and make it unique
  against a caller-supplied existence oracle.
- Asset catalog: rebuild per-slot version histories from the flat
  key -> url mapping of a story's generated media.
"""

from loguru import logger

from story_identity.catalog import build_catalog, find_group
from story_identity.errors import (
    InvalidSlugError,
    SlugAlreadyRegisteredError,
    SlugCollisionExhaustedError,
    SlugLookupTimeoutError,
    StoryIdentityError,
)
from story_identity.resolver import (
    ensure_unique_slug,
    ensure_unique_slug_async,
    resolve_slug,
    resolve_slug_async,
)
from story_identity.utils.slug import generate_slug, is_valid_slug

__version__ = "1.0.0"

logger.disable(__name__)

__all__ = [
    "generate_slug",
    "is_valid_slug",
    "ensure_unique_slug",
    "ensure_unique_slug_async",
    "resolve_slug",
    "resolve_slug_async",
    "build_catalog",
    "find_group",
    "StoryIdentityError",
    "InvalidSlugError",
    "SlugCollisionExhaustedError",
    "SlugLookupTimeoutError",
    "SlugAlreadyRegisteredError",
]
