from __future__ import annotations

from typing import Optional

from events_migration.models.event import EventRecord, ExtractedEvent
from events_migration.parsers.content import (
    DEFAULT_EXCERPT_LENGTH,
    clean_body,
    extract_excerpt,
    image_filename,
    normalize_timestamp,
    slugify,
)
from events_migration.utils.errors import ItemSkipped


def _present(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None


def output_filename(event: ExtractedEvent, event_date: Optional[str], extension: str = "md") -> str:
    """Derive ``<date>-<slug>.<ext>`` for ``event``.

    The date is the event start (UTC) when known, otherwise the date part of
    the post's creation timestamp.  The slug is the post name, else the
    slugified title, else the post id.  An event with none of them usable
    is skipped.
    """
    if event_date:
        date = event_date[:10]
    elif event.post_date:
        date = event.post_date.split(" ")[0].split("T")[0]
    else:
        raise ItemSkipped("MISSING_DATE")

    slug = slugify(event.post_name) or slugify(event.title) or slugify(event.identifier)
    if not slug:
        raise ItemSkipped("MISSING_SLUG")
    return f"{date}-{slug}.{extension}"


def build_event_record(
    event: ExtractedEvent,
    *,
    extension: str = "md",
    excerpt_length: int = DEFAULT_EXCERPT_LENGTH,
) -> EventRecord:
    """Normalize the raw fields of ``event`` into an :class:`EventRecord`.

    Optional values that fail normalization are left out.  The end date is
    dropped when it equals the start date.
    """
    event_date = normalize_timestamp(event.start)
    end_date = normalize_timestamp(event.end)
    if end_date == event_date:
        end_date = None

    body = clean_body(event.body)

    return EventRecord(
        title=event.title,
        event_date=event_date,
        end_date=end_date,
        location=_present(event.location),
        url=_present(event.url),
        image=image_filename(event.image_url),
        excerpt=extract_excerpt(body, excerpt_length) or None,
        body=body,
        filename=output_filename(event, event_date, extension),
    )
