"""Existence-check collaborators and adapters for the slug resolver.

The resolver never retries or times out on its own. Callers that want either
wrap their oracle with the adapters below before handing it over.
"""

import asyncio
from collections.abc import Iterable

from tenacity import AsyncRetrying, RetryCallState, Retrying, stop_after_attempt, wait_exponential

from story_identity.constants import SLUG_MAX_LENGTH, SLUG_MIN_LENGTH
from story_identity.errors import SlugAlreadyRegisteredError, SlugLookupTimeoutError
from story_identity.models.config import CollaboratorConfig
from story_identity.resolver import AsyncExistsCheck, ExistsCheck
from story_identity.utils.logging import get_logger
from story_identity.utils.slug import require_valid_slug

logger = get_logger(__name__)


class InMemorySlugRegistry:
    """Slug store with an explicit create/read/delete lifecycle.

    Useful as the persistence collaborator in tests and in single-process
    tools. Instances are independent; nothing is shared between them.
    """

    def __init__(
        self,
        slugs: Iterable[str] = (),
        *,
        min_length: int = SLUG_MIN_LENGTH,
        max_length: int = SLUG_MAX_LENGTH,
    ) -> None:
        self.min_length = min_length
        self.max_length = max_length
        self._slugs: set[str] = set()
        for slug in slugs:
            self.add(slug)

    def add(self, slug: str) -> None:
        """
        Register a slug.

        Raises:
            InvalidSlugError: If the slug is not valid
            SlugAlreadyRegisteredError: If the slug is already registered
        """
        require_valid_slug(slug, min_length=self.min_length, max_length=self.max_length)
        if slug in self._slugs:
            raise SlugAlreadyRegisteredError(slug)
        self._slugs.add(slug)
        logger.debug("Slug registered", slug=slug, total=len(self._slugs))

    def exists(self, slug: str) -> bool:
        return slug in self._slugs

    async def exists_async(self, slug: str) -> bool:
        return slug in self._slugs

    def discard(self, slug: str) -> bool:
        """Remove a slug; return whether it was registered."""
        if slug not in self._slugs:
            return False
        self._slugs.remove(slug)
        logger.debug("Slug released", slug=slug, total=len(self._slugs))
        return True

    def clear(self) -> None:
        self._slugs.clear()

    def __contains__(self, slug: object) -> bool:
        return slug in self._slugs

    def __len__(self) -> int:
        return len(self._slugs)


def _log_retry(retry_state: RetryCallState) -> None:
    error = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "Existence check failed, retrying",
        attempt=retry_state.attempt_number,
        error=str(error),
    )


def _retry_kwargs(config: CollaboratorConfig) -> dict:
    return {
        "stop": stop_after_attempt(config.retry_attempts),
        "wait": wait_exponential(multiplier=1, min=config.retry_min_wait, max=config.retry_max_wait),
        "before_sleep": _log_retry,
        "reraise": True,
    }


def with_retry(exists: ExistsCheck, config: CollaboratorConfig | None = None) -> ExistsCheck:
    """
    Wrap an oracle so failing lookups are retried with exponential backoff.

    After the last attempt the oracle's own exception is re-raised.

    Args:
        exists: Existence oracle
        config: Retry settings (defaults apply when omitted)

    Returns:
        Oracle with the same signature
    """
    config = config or CollaboratorConfig()

    def checked(candidate: str) -> bool:
        for attempt in Retrying(**_retry_kwargs(config)):
            with attempt:
                return exists(candidate)
        raise AssertionError("unreachable: tenacity re-raises on the last attempt")

    return checked


def with_retry_async(
    exists: AsyncExistsCheck, config: CollaboratorConfig | None = None
) -> AsyncExistsCheck:
    """Async variant of :func:`with_retry`."""
    config = config or CollaboratorConfig()

    async def checked(candidate: str) -> bool:
        async for attempt in AsyncRetrying(**_retry_kwargs(config)):
            with attempt:
                return await exists(candidate)
        raise AssertionError("unreachable: tenacity re-raises on the last attempt")

    return checked


def with_deadline(exists: AsyncExistsCheck, timeout_seconds: float) -> AsyncExistsCheck:
    """
    Wrap an async oracle so each lookup must finish within ``timeout_seconds``.

    Raises:
        SlugLookupTimeoutError: From the wrapped oracle when a lookup expires
        TimeoutError: The oracle's own, unchanged, when raised before the deadline
    """

    async def checked(candidate: str) -> bool:
        deadline = asyncio.timeout(timeout_seconds)
        try:
            async with deadline:
                return await exists(candidate)
        except TimeoutError as e:
            # The oracle's own TimeoutError is not a deadline expiry
            if not deadline.expired():
                raise
            logger.warning(
                "Existence check timed out", slug=candidate, timeout_seconds=timeout_seconds
            )
            raise SlugLookupTimeoutError(candidate, timeout_seconds) from e

    return checked
