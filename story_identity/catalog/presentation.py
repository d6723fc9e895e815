"""Human-readable labels for catalog entries."""

import re
from datetime import UTC, datetime

from story_identity.constants import BACK_COVER_TYPE, CHAPTER_TYPE, FRONT_COVER_TYPE
from story_identity.models.assets import AssetGroup, Unversioned, Versioned

_SLOT_NAMES = {
    FRONT_COVER_TYPE: "Front Cover",
    BACK_COVER_TYPE: "Back Cover",
}

# Timestamps embedded in filenames use "-" where ISO 8601 uses ":" and "."
_FILENAME_TIMESTAMP_RE = re.compile(
    r"(?P<date>\d{4}-\d{2}-\d{2})T(?P<h>\d{2})-(?P<m>\d{2})-(?P<s>\d{2})(?:-(?P<ms>\d{1,6}))?Z"
)


def display_name(group: AssetGroup) -> str:
    """Label a slot for display: "Front Cover", "Chapter 3", "Character Sheet"."""
    if group.type == CHAPTER_TYPE:
        if group.chapter_number is None:
            return "Chapter"
        return f"Chapter {group.chapter_number}"
    if group.type in _SLOT_NAMES:
        return _SLOT_NAMES[group.type]
    return group.type.replace("_", " ").replace("-", " ").title()


def format_version_number(version: str | Unversioned | Versioned) -> str:
    """
    Format a version token for display.

    Examples:
        >>> format_version_number("v002")
        'Version 2'
        >>> format_version_number("draft")
        'draft'
    """
    label = str(version)
    match = re.search(r"v(\d+)", label)
    if match:
        return f"Version {int(match.group(1))}"
    return label


def parse_timestamp(timestamp: str) -> datetime | None:
    """Parse an ISO 8601 or filename-style timestamp; naive values are taken as UTC."""
    match = _FILENAME_TIMESTAMP_RE.fullmatch(timestamp)
    if match:
        fraction = f".{match['ms']}" if match["ms"] else ""
        timestamp = f"{match['date']}T{match['h']}:{match['m']}:{match['s']}{fraction}+00:00"

    try:
        parsed = datetime.fromisoformat(timestamp)
    except ValueError:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _ago(amount: int, unit: str) -> str:
    if amount == 1:
        return f"1 {unit} ago"
    return f"{amount} {unit}s ago"


def format_relative_time(timestamp: str | None, *, now: datetime | None = None) -> str:
    """
    Describe how long ago a timestamp was.

    Examples:
        >>> now = datetime(2025, 6, 20, 12, 0, tzinfo=UTC)
        >>> format_relative_time("2025-06-20T11:55:00Z", now=now)
        '5 minutes ago'
        >>> format_relative_time("not a date", now=now)
        'unknown time'
    """
    parsed = parse_timestamp(timestamp) if timestamp else None
    if parsed is None:
        return "unknown time"

    now = now or datetime.now(UTC)
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)

    seconds = int((now - parsed).total_seconds())
    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24

    if seconds < 60:
        return "just now" if seconds <= 1 else f"{seconds} seconds ago"
    if minutes < 60:
        return _ago(minutes, "minute")
    if hours < 24:
        return _ago(hours, "hour")
    if days < 7:
        return _ago(days, "day")
    if days // 7 < 4:
        return _ago(days // 7, "week")
    if days // 30 < 12:
        return _ago(max(days // 30, 1), "month")
    return _ago(max(days // 365, 1), "year")
