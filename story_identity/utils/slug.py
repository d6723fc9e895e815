"""URL slug generation and validation utilities.

Note: These helpers are pure. Collision resolution against an existence
oracle lives in story_identity/resolver.py.
"""

import re

from slugify import slugify

from story_identity.constants import SLUG_MAX_LENGTH, SLUG_MIN_LENGTH, SLUG_PATTERN, SLUG_SEPARATOR
from story_identity.errors import InvalidSlugError

_SLUG_RE = re.compile(SLUG_PATTERN)


def generate_slug(title: str, *, transliterate: bool = False) -> str:
    """Generate a slug candidate from free text.

    Lowercases, drops every character outside ``[a-z0-9\\s-]``, turns
    whitespace runs into one hyphen, collapses hyphen runs and trims edge
    hyphens. The result may be empty or too short; validate it with
    :func:`is_valid_slug` before use.

    Args:
        title: Input text (e.g., story title)
        transliterate: Map non-ASCII letters to ASCII first instead of dropping them

    Returns:
        Slug candidate

    Examples:
        >>> generate_slug("Hello World!")
        'hello-world'
        >>> generate_slug("  Multiple   Spaces  ")
        'multiple-spaces'
        >>> generate_slug("Café")
        'caf'
        >>> generate_slug("Café", transliterate=True)
        'cafe'
    """
    if transliterate:
        title = slugify(title, separator=SLUG_SEPARATOR)

    normalized = title.lower()
    # Keep only ASCII letters, digits, whitespace and hyphens
    normalized = re.sub(r"[^a-z0-9\s-]", "", normalized)
    normalized = re.sub(r"\s+", SLUG_SEPARATOR, normalized)
    normalized = re.sub(r"-+", SLUG_SEPARATOR, normalized)
    return normalized.strip(SLUG_SEPARATOR)


def slug_violation(
    candidate: str,
    *,
    min_length: int = SLUG_MIN_LENGTH,
    max_length: int = SLUG_MAX_LENGTH,
) -> str | None:
    """Describe why a candidate is not a valid slug, or return None if it is."""
    if len(candidate) < min_length:
        return f"shorter than {min_length} characters"
    if len(candidate) > max_length:
        return f"longer than {max_length} characters"
    if not _SLUG_RE.fullmatch(candidate):
        return "must be lowercase letters and digits joined by single hyphens"
    return None


def is_valid_slug(
    candidate: str,
    *,
    min_length: int = SLUG_MIN_LENGTH,
    max_length: int = SLUG_MAX_LENGTH,
) -> bool:
    """
    Check a candidate against the slug syntax.

    Examples:
        >>> is_valid_slug("hello-world")
        True
        >>> is_valid_slug("a")
        False
        >>> is_valid_slug("Hello-World")
        False
    """
    return slug_violation(candidate, min_length=min_length, max_length=max_length) is None


def require_valid_slug(
    candidate: str,
    *,
    min_length: int = SLUG_MIN_LENGTH,
    max_length: int = SLUG_MAX_LENGTH,
) -> str:
    """Return the candidate unchanged, or raise InvalidSlugError."""
    reason = slug_violation(candidate, min_length=min_length, max_length=max_length)
    if reason is not None:
        raise InvalidSlugError(candidate, reason)
    return candidate


def truncate_slug(slug: str, max_length: int = SLUG_MAX_LENGTH) -> str:
    """
    Shorten a slug to ``max_length``, cutting at a hyphen where possible.

    Examples:
        >>> truncate_slug("this-is-a-very-long-title", 12)
        'this-is-a'
        >>> truncate_slug("supercalifragilistic", 5)
        'super'
    """
    if len(slug) <= max_length:
        return slug

    cut = slug[:max_length]
    # Drop the partial trailing word unless the cut already lands on a boundary
    if slug[max_length] != SLUG_SEPARATOR and SLUG_SEPARATOR in cut:
        cut = cut.rsplit(SLUG_SEPARATOR, 1)[0]

    return cut.strip(SLUG_SEPARATOR)
