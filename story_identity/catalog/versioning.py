"""Version numbers of whole-document uploads (``story_v001.html``, ...).

A legacy unversioned ``story.html`` counts as version 1.
"""

import re
from collections.abc import Iterable

from story_identity.constants import DEFAULT_DOCUMENT_EXTENSION, DEFAULT_DOCUMENT_STEM
from story_identity.models.assets import format_version_label


def _versioned_re(stem: str, extension: str) -> re.Pattern[str]:
    return re.compile(rf"{re.escape(stem)}_v(\d{{3,}})\.{re.escape(extension)}")


def _basename(filename: str) -> str:
    return filename.rsplit("/", 1)[-1]


def extract_version_from_filename(
    filename: str,
    stem: str = DEFAULT_DOCUMENT_STEM,
    extension: str = DEFAULT_DOCUMENT_EXTENSION,
) -> int:
    """
    Read the version number from a document filename.

    Examples:
        >>> extract_version_from_filename("story_v003.html")
        3
        >>> extract_version_from_filename("story.html")
        1
    """
    match = _versioned_re(stem, extension).fullmatch(_basename(filename))
    if match:
        return int(match.group(1))
    # Legacy and unrecognised names count as the first version
    return 1


def generate_versioned_filename(
    version: int,
    stem: str = DEFAULT_DOCUMENT_STEM,
    extension: str = DEFAULT_DOCUMENT_EXTENSION,
) -> str:
    """
    Build the filename for a document version.

    Examples:
        >>> generate_versioned_filename(2)
        'story_v002.html'
    """
    if version < 1:
        raise ValueError(f"Document versions start at 1, got {version}")
    return f"{stem}_{format_version_label(version)}.{extension}"


def latest_version(
    filenames: Iterable[str],
    stem: str = DEFAULT_DOCUMENT_STEM,
    extension: str = DEFAULT_DOCUMENT_EXTENSION,
) -> int:
    """
    Highest version among a listing, or 0 when no file belongs to the document.

    Examples:
        >>> latest_version(["story.html", "story_v002.html", "cover.png"])
        2
        >>> latest_version([])
        0
    """
    legacy = f"{stem}.{extension}"
    pattern = _versioned_re(stem, extension)
    versions = [
        extract_version_from_filename(name, stem, extension)
        for name in filenames
        if _basename(name) == legacy or pattern.fullmatch(_basename(name))
    ]
    return max(versions, default=0)


def next_version(
    filenames: Iterable[str],
    stem: str = DEFAULT_DOCUMENT_STEM,
    extension: str = DEFAULT_DOCUMENT_EXTENSION,
) -> int:
    """Version number for the next upload."""
    return latest_version(filenames, stem, extension) + 1
