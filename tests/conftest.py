"""Shared pytest fixtures and configuration."""

from pathlib import Path

import pytest

from story_identity.collaborators import InMemorySlugRegistry
from story_identity.models.config import CollaboratorConfig, IdentityConfig, SlugConfig

STORAGE = "https://storage.googleapis.com/generated-stories/story-42"


@pytest.fixture
def sample_raw_map() -> dict[str, dict[str, str]]:
    """Covers and a chapter, each with two versions."""
    return {
        "frontcover_v001.png": {"url": f"{STORAGE}/images/frontcover_v001.png"},
        "frontcover_v002.png": {"url": f"{STORAGE}/images/frontcover_v002.png"},
        "chapter_1.png": {"url": f"{STORAGE}/images/chapter_1.png"},
        "chapter_1_v002.png": {"url": f"{STORAGE}/images/chapter_1_v002.png"},
    }


@pytest.fixture
def storage_raw_map() -> dict[str, dict[str, str | int]]:
    """Raw map in storage-listing format, with metadata and mixed media."""
    return {
        "images/backcover_v001_2025-06-20T10-55-12-493Z.png": {
            "url": f"{STORAGE}/images/backcover_v001_2025-06-20T10-55-12-493Z.png",
            "timeCreated": "2025-06-20T10:55:12.493Z",
            "size": "48213",
            "contentType": "image/png",
        },
        "images/chapter_2_v003.jpg": {
            "url": f"{STORAGE}/images/chapter_2_v003.jpg",
            "updated": "2025-06-21T08:00:00Z",
        },
        "images/chapter_2__v001_2025-06-20T10-26-09-584Z.jpg": {
            "url": f"{STORAGE}/images/chapter_2__v001_2025-06-20T10-26-09-584Z.jpg",
        },
        "images/frontcover.png": {"url": f"{STORAGE}/images/frontcover.png", "size": 1024},
        "audio/chapter_1.mp3": {"url": f"{STORAGE}/audio/chapter_1.mp3"},
        "images/character_sheet_v002.webp": {"url": f"{STORAGE}/images/character_sheet_v002.webp"},
    }


@pytest.fixture
def slug_registry() -> InMemorySlugRegistry:
    """Registry pre-populated with a few taken slugs."""
    return InMemorySlugRegistry(["the-brave-knight", "the-brave-knight-1", "dragon-tales"])


@pytest.fixture
def fast_collaborator_config() -> CollaboratorConfig:
    """Retry settings without waiting between attempts."""
    return CollaboratorConfig(
        retry_attempts=3, retry_min_wait=0.0, retry_max_wait=0.0, timeout_seconds=0.05
    )


@pytest.fixture
def identity_config(fast_collaborator_config: CollaboratorConfig) -> IdentityConfig:
    """Library configuration tuned for tests."""
    return IdentityConfig(
        slug=SlugConfig(max_attempts=50),
        collaborators=fast_collaborator_config,
    )


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    """Create a temporary directory for tests."""
    return tmp_path
