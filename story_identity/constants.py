"""Library-wide constants.

Contains the defaults shared by the slug resolver and the asset catalog
builder so that models, helpers and tests agree on the same values.
"""

# Slug syntax
SLUG_MIN_LENGTH = 3  # Shortest slug accepted by the validator
SLUG_MAX_LENGTH = 100  # Longest slug accepted by the validator
SLUG_PATTERN = r"^[a-z0-9]+(-[a-z0-9]+)*$"  # Lowercase words joined by single hyphens
SLUG_SEPARATOR = "-"

# Collision resolution
DEFAULT_SLUG_MAX_ATTEMPTS = 1000  # Oracle calls before giving up on a base slug

# Asset versions
VERSION_PREFIX = "v"
VERSION_PAD_WIDTH = 3  # v001, v002, ...
IMPLICIT_VERSION_NUMBER = 1  # Keys without a version token

# Asset slots
CHAPTER_TYPE = "chapter"
FRONT_COVER_TYPE = "frontcover"
BACK_COVER_TYPE = "backcover"
DEFAULT_SLOT_ORDER = [FRONT_COVER_TYPE, BACK_COVER_TYPE, CHAPTER_TYPE]
DEFAULT_COVER_TYPES = [FRONT_COVER_TYPE, BACK_COVER_TYPE]

# Media detection
DEFAULT_STORAGE_HOST = "storage.googleapis.com"
DEFAULT_IMAGE_EXTENSIONS = ["png", "jpg", "jpeg", "webp", "gif"]
DEFAULT_AUDIO_EXTENSIONS = ["mp3", "wav", "m4a", "ogg", "aac"]
DEFAULT_DOCUMENT_EXTENSIONS = ["html", "htm", "pdf", "md"]
DEFAULT_EXCLUDED_URL_MARKERS = ["logo"]

# Versioned documents
DEFAULT_DOCUMENT_STEM = "story"
DEFAULT_DOCUMENT_EXTENSION = "html"

# Collaborator adapters
DEFAULT_RETRY_ATTEMPTS = 3  # Attempts per oracle call
DEFAULT_RETRY_MIN_WAIT = 0.5  # Minimum wait between retries (seconds)
DEFAULT_RETRY_MAX_WAIT = 5.0  # Maximum wait between retries (seconds)
DEFAULT_LOOKUP_TIMEOUT_SECONDS = 10.0  # Deadline for a single async lookup

# Configuration
CONFIG_ENV_VAR = "STORY_IDENTITY_CONFIG"
DEFAULT_CONFIG_PATH = "config/identity.yaml"
