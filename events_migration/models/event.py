from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Frontmatter keys, in the order they are written.
FRONTMATTER_FIELDS: Tuple[str, ...] = (
    "title",
    "event_date",
    "end_date",
    "location",
    "url",
    "image",
    "excerpt",
)


class ExtractedEvent(BaseModel):
    """Raw values pulled out of one event ``<item>`` of the export."""

    model_config = ConfigDict(frozen=True)

    identifier: str
    title: str
    post_date: Optional[str] = None
    post_name: Optional[str] = None
    start: Optional[str] = None
    end: Optional[str] = None
    location: Optional[str] = None
    url: Optional[str] = None
    image_url: Optional[str] = None
    body: str = ""

    def report_item(self) -> Dict[str, Any]:
        return {"ID": self.identifier, "Slug": self.post_name, "Title": self.title}


class SkippedItem(BaseModel):
    """An item excluded from the output, with the reason why."""

    model_config = ConfigDict(frozen=True)

    identifier: Optional[str] = None
    title: Optional[str] = None
    code: str
    message: str = ""

    def report_item(self) -> Dict[str, Any]:
        return {"ID": self.identifier, "Slug": None, "Title": self.title}


class EventRecord(BaseModel):
    """A migrated event, ready to be serialized as frontmatter plus body.

    Optional fields that end up empty after stripping are stored as
    ``None`` and left out of the frontmatter entirely.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    title: str
    event_date: Optional[str] = Field(None, alias="eventDate")
    end_date: Optional[str] = Field(None, alias="endDate")
    location: Optional[str] = None
    url: Optional[str] = None
    image: Optional[str] = None
    excerpt: Optional[str] = None
    body: str = ""
    filename: str = Field(..., min_length=1)

    @field_validator("event_date", "end_date", "location", "url", "image", "excerpt")
    @classmethod
    def _empty_is_absent(cls, v: Optional[str]):
        return v or None

    def frontmatter(self) -> Dict[str, str]:
        """Present frontmatter values keyed by their output names, in order."""
        data = self.model_dump(by_alias=True, exclude_none=True, include=set(FRONTMATTER_FIELDS))
        order = [type(self).model_fields[name].alias or name for name in FRONTMATTER_FIELDS]
        return {key: data[key] for key in order if key in data}


class MigrationSummary(BaseModel):
    """Outcome of a run.  Never mutated; each update returns a new copy."""

    model_config = ConfigDict(frozen=True)

    migrated: int = 0
    skipped: int = 0
    written: Tuple[str, ...] = ()
    skipped_items: Tuple[SkippedItem, ...] = ()

    def with_migrated(self, filename: str) -> "MigrationSummary":
        return self.model_copy(
            update={"migrated": self.migrated + 1, "written": self.written + (filename,)}
        )

    def with_skipped(self, item: SkippedItem) -> "MigrationSummary":
        return self.model_copy(
            update={"skipped": self.skipped + 1, "skipped_items": self.skipped_items + (item,)}
        )
