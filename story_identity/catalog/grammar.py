"""Asset key grammar: an ordered chain of pattern rules.

Each rule pairs a regular expression with an extractor. Rules are tried in
order against the key's base name (directory and extension removed) and the
first match wins. The chain always ends with a catch-all, so every key parses.

Recognised shapes, in order::

    chapter_3                            chapter 3, implicit version
    chapter_3_v002                       chapter 3, v002
    chapter_3__v002_2025-06-20T10-26-09-584Z
    chapter_3_v002_2025-06-20T10-26-09-584Z
    chapter_3_2025-06-20T10-26-09-584Z   chapter 3, implicit version, timestamp
    chapter_3_final                      chapter 3, implicit version, no timestamp
    frontcover_v002                      any type, explicit version
    frontcover_v002_2025-06-20T10-54-21-533Z
    frontcover_2025-06-20T10-54-21-533Z  cover types only, timestamp
    frontcover                           any type, implicit version
"""

import re
from collections.abc import Callable, Iterable, Sequence
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field

from story_identity.constants import CHAPTER_TYPE, DEFAULT_COVER_TYPES
from story_identity.models.assets import AssetVersion, Unversioned, Versioned
from story_identity.utils.logging import get_logger

logger = get_logger(__name__)

_EXTENSION_RE = re.compile(r"\.[^/.]+$")

# Timestamps produced by the generation pipeline always start with the year
_TIMESTAMP = r"(?P<timestamp>\d.*)"


class ParsedKey(BaseModel):
    """Slot and version information extracted from one key."""

    model_config = ConfigDict(frozen=True)

    type: str = Field(description="Logical slot category")
    chapter_number: int | None = Field(default=None)
    version: AssetVersion = Field(default_factory=Unversioned)
    timestamp: str | None = Field(default=None, description="Timestamp embedded in the key")
    rule: str = Field(description="Name of the rule that matched")


class KeyRule(NamedTuple):
    """A named pattern with the extractor applied to its match."""

    name: str
    pattern: re.Pattern[str]
    extract: Callable[[re.Match[str]], dict]

    def apply(self, stem: str) -> ParsedKey | None:
        match = self.pattern.fullmatch(stem)
        if match is None:
            return None
        return ParsedKey(rule=self.name, **self.extract(match))


def _version(match: re.Match[str]) -> AssetVersion:
    digits = match.groupdict().get("version")
    if digits is None:
        return Unversioned()
    return Versioned(number=int(digits))


def _chapter(match: re.Match[str]) -> dict:
    groups = match.groupdict()
    timestamp = groups.get("timestamp")
    suffix = groups.get("suffix")
    # Any other chapter suffix ("final", "v002_alt") stays in the chapter slot
    if suffix and suffix[0].isdigit():
        timestamp = suffix
    return {
        "type": CHAPTER_TYPE,
        "chapter_number": int(match["chapter"]),
        "version": _version(match),
        "timestamp": timestamp,
    }


def _typed(match: re.Match[str]) -> dict:
    return {
        "type": match["type"],
        "version": _version(match),
        "timestamp": match.groupdict().get("timestamp"),
    }


def build_rules(cover_types: Iterable[str] = DEFAULT_COVER_TYPES) -> list[KeyRule]:
    """
    Build the ordered rule chain.

    Args:
        cover_types: Slot types whose keys may carry a bare timestamp suffix

    Returns:
        Rules in evaluation order, catch-all excluded
    """
    chapter = re.escape(CHAPTER_TYPE)
    rules = [
        KeyRule("chapter", re.compile(rf"{chapter}_(?P<chapter>\d+)"), _chapter),
        KeyRule(
            "chapter_versioned",
            re.compile(rf"{chapter}_(?P<chapter>\d+)_v(?P<version>\d+)"),
            _chapter,
        ),
        KeyRule(
            "chapter_versioned_timestamped",
            re.compile(rf"{chapter}_(?P<chapter>\d+)__?v(?P<version>\d+)_{_TIMESTAMP}"),
            _chapter,
        ),
        KeyRule(
            "chapter_suffixed",
            re.compile(rf"{chapter}_(?P<chapter>\d+)_(?P<suffix>.+)"),
            _chapter,
        ),
        KeyRule("versioned", re.compile(r"(?P<type>.+?)_v(?P<version>\d+)"), _typed),
        KeyRule(
            "versioned_timestamped",
            re.compile(rf"(?P<type>.+?)_v(?P<version>\d+)_{_TIMESTAMP}"),
            _typed,
        ),
    ]

    covers = [re.escape(cover) for cover in cover_types]
    if covers:
        rules.append(
            KeyRule(
                "cover_timestamped",
                re.compile(rf"(?P<type>{'|'.join(covers)})_{_TIMESTAMP}"),
                _typed,
            )
        )

    rules.append(KeyRule("unversioned", re.compile(r"(?P<type>.+)"), _typed))
    return rules


DEFAULT_RULES = build_rules()


def split_key(raw_key: str) -> tuple[str, str]:
    """
    Return ``(filename, stem)`` for a raw key.

    Examples:
        >>> split_key("story-1/images/chapter_1_v002.png")
        ('chapter_1_v002.png', 'chapter_1_v002')
    """
    filename = raw_key.rsplit("/", 1)[-1]
    stem = _EXTENSION_RE.sub("", filename)
    return filename, stem


def parse_asset_key(raw_key: str, rules: Sequence[KeyRule] | None = None) -> ParsedKey:
    """
    Parse one raw key into slot and version information.

    Never fails: a key no rule accepts becomes its own slot, typed by its
    base name, with an implicit version.

    Examples:
        >>> parsed = parse_asset_key("chapter_1_v002.png")
        >>> parsed.type, parsed.chapter_number, parsed.version.label
        ('chapter', 1, 'v002')
        >>> parse_asset_key("frontcover.png").version.label
        'v001'
    """
    filename, stem = split_key(raw_key)

    for rule in DEFAULT_RULES if rules is None else rules:
        parsed = rule.apply(stem)
        if parsed is not None:
            return parsed

    logger.debug("Asset key matched no pattern", key=raw_key)
    return ParsedKey(type=stem or filename or raw_key, rule="fallback")
