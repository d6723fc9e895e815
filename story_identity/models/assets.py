"""Asset data models for the catalog builder."""

from datetime import UTC, datetime
from typing import Annotated, Any, Literal

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    computed_field,
    model_validator,
)

from story_identity.constants import IMPLICIT_VERSION_NUMBER, VERSION_PAD_WIDTH, VERSION_PREFIX

MediaKind = Literal["image", "audio", "document", "other"]


def format_version_label(number: int) -> str:
    """
    Render a version number as a zero-padded token.

    Examples:
        >>> format_version_label(2)
        'v002'
        >>> format_version_label(1234)
        'v1234'
    """
    return f"{VERSION_PREFIX}{number:0{VERSION_PAD_WIDTH}d}"


class Unversioned(BaseModel):
    """Key without a version token; ranks as the first version of its slot."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["unversioned"] = "unversioned"

    @property
    def number(self) -> int:
        return IMPLICIT_VERSION_NUMBER

    @property
    def label(self) -> str:
        return format_version_label(self.number)

    @property
    def sort_key(self) -> tuple[int, int]:
        # Sorts before an explicit version with the same number
        return (self.number, 0)

    def __str__(self) -> str:
        return self.label


class Versioned(BaseModel):
    """Key carrying an explicit ``v<digits>`` token."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["versioned"] = "versioned"
    number: int = Field(ge=0, description="Integer value of the version token")

    @property
    def label(self) -> str:
        return format_version_label(self.number)

    @property
    def sort_key(self) -> tuple[int, int]:
        return (self.number, 1)

    def __str__(self) -> str:
        return self.label


AssetVersion = Annotated[Unversioned | Versioned, Field(discriminator="kind")]


def _as_timestamp(value: Any) -> str | None:
    """Normalize storage times to ISO text; unreadable values become None."""
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, int | float) and not isinstance(value, bool):
        return datetime.fromtimestamp(value, UTC).isoformat()
    if isinstance(value, str):
        return value
    return None


def _as_text(value: Any) -> str | None:
    if isinstance(value, str | int | float) and not isinstance(value, bool):
        return str(value)
    return None


Timestamp = Annotated[str | None, BeforeValidator(_as_timestamp)]
MetadataText = Annotated[str | None, BeforeValidator(_as_text)]


class StorageEntry(BaseModel):
    """Value side of the raw asset mapping supplied by the asset source.

    Accepts a mapping or any object with a ``url`` attribute (a storage blob,
    for instance). Only ``url`` is required; the storage metadata fields are
    read leniently when present and every other field is ignored.
    """

    model_config = ConfigDict(
        extra="ignore", populate_by_name=True, from_attributes=True, frozen=True
    )

    url: str = Field(description="Resource locator, passed through unmodified")
    time_created: Timestamp = Field(default=None, alias="timeCreated")
    updated: Timestamp = Field(default=None)
    size: MetadataText = Field(default=None)
    content_type: MetadataText = Field(default=None, alias="contentType")


class AssetRecord(BaseModel):
    """One parsed raw key."""

    model_config = ConfigDict(frozen=True)

    raw_key: str = Field(description="Original key from the asset source")
    url: str = Field(description="Resource locator")
    type: str = Field(description="Logical slot category")
    chapter_number: int | None = Field(default=None, description="Chapter index, chapters only")
    version: AssetVersion = Field(default_factory=Unversioned)
    filename: str = Field(description="Last path segment of the raw key")
    timestamp: str | None = Field(default=None, description="Creation time, when known")
    media_kind: MediaKind = Field(default="other")

    @property
    def slot(self) -> tuple[str, int | None]:
        return (self.type, self.chapter_number)

    @property
    def version_label(self) -> str:
        return self.version.label


class AssetGroup(BaseModel):
    """All versions generated for one slot, oldest first."""

    model_config = ConfigDict(frozen=True)

    type: str = Field(description="Logical slot category")
    chapter_number: int | None = Field(default=None, description="Chapter index, chapters only")
    versions: list[AssetRecord] = Field(min_length=1, description="Ascending by version")

    @model_validator(mode="after")
    def _check_members(self) -> "AssetGroup":
        for record in self.versions:
            if record.slot != self.slot:
                raise ValueError(
                    f"record {record.raw_key!r} belongs to slot {record.slot}, not {self.slot}"
                )
        return self

    @computed_field  # type: ignore[prop-decorator]
    @property
    def latest_version(self) -> AssetRecord:
        return self.versions[-1]

    @property
    def slot(self) -> tuple[str, int | None]:
        return (self.type, self.chapter_number)
