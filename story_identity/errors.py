"""Exceptions raised by the slug resolver and its collaborator adapters."""


class StoryIdentityError(Exception):
    """Base exception for story identity errors."""


class InvalidSlugError(StoryIdentityError, ValueError):
    """A slug candidate does not satisfy the slug syntax."""

    def __init__(self, slug: str, reason: str):
        self.slug = slug
        self.reason = reason
        super().__init__(f"Invalid slug {slug!r}: {reason}")


class SlugCollisionExhaustedError(StoryIdentityError):
    """Every candidate tried for a base slug was already taken."""

    def __init__(self, base: str, attempts: int):
        self.base = base
        self.attempts = attempts
        super().__init__(f"No free slug for base {base!r} after {attempts} attempts")


class SlugLookupTimeoutError(StoryIdentityError, TimeoutError):
    """An existence lookup did not answer before its deadline."""

    def __init__(self, candidate: str, timeout_seconds: float):
        self.candidate = candidate
        self.timeout_seconds = timeout_seconds
        super().__init__(f"Existence lookup for {candidate!r} timed out after {timeout_seconds}s")


class SlugAlreadyRegisteredError(StoryIdentityError):
    """A slug registry already holds the slug being added."""

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f"Slug already registered: {slug!r}")
