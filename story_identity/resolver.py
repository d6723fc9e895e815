"""Slug resolution: turn a title into a slug nobody else holds.

The resolver asks an injected existence oracle about one candidate at a time:
``base``, then ``base-1``, ``base-2``, ... until the oracle reports a free
slug. Oracle calls are strictly sequential; with an async oracle each call is
awaited before the next candidate is tried. Oracle failures propagate
unchanged and are never read as "free".

Two callers resolving the same base against a shared store can both see a
candidate as free. The returned slug is a hint that the persistence layer
must back with a uniqueness constraint.
"""

from collections.abc import Awaitable, Callable, Iterator
from itertools import count

from story_identity.constants import SLUG_MAX_LENGTH, SLUG_SEPARATOR
from story_identity.errors import InvalidSlugError, SlugCollisionExhaustedError
from story_identity.models.config import SlugConfig
from story_identity.utils.logging import get_logger
from story_identity.utils.slug import generate_slug, slug_violation, truncate_slug

logger = get_logger(__name__)

ExistsCheck = Callable[[str], bool]
AsyncExistsCheck = Callable[[str], Awaitable[bool]]


def _suffixed(base: str, counter: int, max_length: int) -> str | None:
    """Append ``-<counter>`` to base, shortening base so the result fits max_length.

    Returns None when max_length leaves no room for even one base character.
    """
    suffix = f"{SLUG_SEPARATOR}{counter}"
    room = max_length - len(suffix)
    if room < 1:
        return None
    stem = base if len(base) <= room else base[:room].rstrip(SLUG_SEPARATOR)
    return f"{stem}{suffix}"


def iter_slug_candidates(base: str, max_length: int = SLUG_MAX_LENGTH) -> Iterator[str]:
    """
    Yield the candidates tried for a base slug, in order.

    Ends only once a counter suffix no longer fits within ``max_length``.

    Examples:
        >>> from itertools import islice
        >>> list(islice(iter_slug_candidates("post"), 3))
        ['post', 'post-1', 'post-2']
    """
    yield base
    for counter in count(1):
        candidate = _suffixed(base, counter, max_length)
        if candidate is None:
            return
        yield candidate


def ensure_unique_slug(
    base: str,
    exists: ExistsCheck,
    *,
    max_attempts: int | None = None,
    max_length: int = SLUG_MAX_LENGTH,
) -> str:
    """
    Return the first candidate for ``base`` that ``exists`` reports as free.

    With ``max_attempts=None`` the search only ends when the oracle reports a
    free candidate; an oracle that always answers True never returns.

    Args:
        base: Valid base slug
        exists: Existence oracle, typically backed by a persistence lookup
        max_attempts: Maximum oracle calls, or None for no limit
        max_length: Longest slug allowed, suffix included

    Returns:
        A slug the oracle reported as free

    Raises:
        SlugCollisionExhaustedError: If max_attempts candidates were all taken,
            or max_length leaves no room for the next counter suffix
        Exception: Whatever the oracle raises, unchanged

    Examples:
        >>> ensure_unique_slug("post", {"post", "post-1"}.__contains__)
        'post-2'
    """
    attempts = 0

    for candidate in iter_slug_candidates(base, max_length):
        if max_attempts is not None and attempts >= max_attempts:
            logger.warning("Slug candidates exhausted", base=base, attempts=attempts)
            raise SlugCollisionExhaustedError(base, attempts)

        attempts += 1
        try:
            taken = exists(candidate)
        except Exception as e:
            logger.error("Existence check failed", slug=candidate, error=str(e))
            raise

        if not taken:
            _log_resolved(base, candidate, attempts)
            return candidate

        logger.debug("Slug already taken", slug=candidate, attempt=attempts)

    logger.warning(
        "No room left for a counter suffix", base=base, attempts=attempts, max_length=max_length
    )
    raise SlugCollisionExhaustedError(base, attempts)


async def ensure_unique_slug_async(
    base: str,
    exists: AsyncExistsCheck,
    *,
    max_attempts: int | None = None,
    max_length: int = SLUG_MAX_LENGTH,
) -> str:
    """
    Async variant of :func:`ensure_unique_slug` for an awaitable oracle.

    Each lookup is awaited to completion before the next candidate is tried.
    """
    attempts = 0

    for candidate in iter_slug_candidates(base, max_length):
        if max_attempts is not None and attempts >= max_attempts:
            logger.warning("Slug candidates exhausted", base=base, attempts=attempts)
            raise SlugCollisionExhaustedError(base, attempts)

        attempts += 1
        try:
            taken = await exists(candidate)
        except Exception as e:
            logger.error("Existence check failed", slug=candidate, error=str(e))
            raise

        if not taken:
            _log_resolved(base, candidate, attempts)
            return candidate

        logger.debug("Slug already taken", slug=candidate, attempt=attempts)

    logger.warning(
        "No room left for a counter suffix", base=base, attempts=attempts, max_length=max_length
    )
    raise SlugCollisionExhaustedError(base, attempts)


def _log_resolved(base: str, slug: str, attempts: int) -> None:
    if attempts > 1:
        logger.info("Slug collision resolved", base=base, slug=slug, attempts=attempts)
    else:
        logger.debug("Slug is free", slug=slug)


def prepare_base_slug(title: str, config: SlugConfig, fallback: str | None = None) -> str:
    """
    Build a valid base slug from a title.

    The generated candidate is shortened to ``config.max_length`` at a hyphen
    boundary. When it is still invalid (empty, too short), ``fallback`` is
    slugified and used instead.

    Raises:
        InvalidSlugError: If neither the title nor the fallback gives a valid slug
    """
    candidate = truncate_slug(
        generate_slug(title, transliterate=config.transliterate), config.max_length
    )
    reason = slug_violation(candidate, min_length=config.min_length, max_length=config.max_length)
    if reason is None:
        return candidate

    if fallback is None:
        logger.warning("Title does not yield a valid slug", title=title, slug=candidate)
        raise InvalidSlugError(candidate, reason)

    logger.warning(
        "Title does not yield a valid slug, using fallback",
        title=title,
        slug=candidate,
        reason=reason,
        fallback=fallback,
    )
    fallback_slug = truncate_slug(
        generate_slug(fallback, transliterate=config.transliterate), config.max_length
    )
    reason = slug_violation(
        fallback_slug, min_length=config.min_length, max_length=config.max_length
    )
    if reason is not None:
        raise InvalidSlugError(fallback_slug, reason)
    return fallback_slug


def resolve_slug(
    title: str,
    exists: ExistsCheck,
    *,
    config: SlugConfig | None = None,
    fallback: str | None = None,
) -> str:
    """
    Generate, validate and disambiguate a slug for a title.

    Args:
        title: Free-text title
        exists: Existence oracle
        config: Slug configuration (defaults apply when omitted)
        fallback: Text to slugify when the title gives no valid slug

    Returns:
        A valid slug the oracle reported as free

    Examples:
        >>> resolve_slug("My Story", {"my-story"}.__contains__)
        'my-story-1'
    """
    config = config or SlugConfig()
    base = prepare_base_slug(title, config, fallback)
    return ensure_unique_slug(
        base, exists, max_attempts=config.max_attempts, max_length=config.max_length
    )


async def resolve_slug_async(
    title: str,
    exists: AsyncExistsCheck,
    *,
    config: SlugConfig | None = None,
    fallback: str | None = None,
) -> str:
    """Async variant of :func:`resolve_slug`."""
    config = config or SlugConfig()
    base = prepare_base_slug(title, config, fallback)
    return await ensure_unique_slug_async(
        base, exists, max_attempts=config.max_attempts, max_length=config.max_length
    )
