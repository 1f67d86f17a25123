"""
Reading of WordPress WXR export files.

This module loads the export XML into an :class:`ExportDocument`, indexes
the attachments it contains and extracts the raw fields of every event
post.  Nothing here interprets dates or cleans text beyond stripping block
annotations; that is left to :mod:`events_migration.parsers.content`.

Element lookups match on local name plus a namespace pattern so that
exports written with any WXR version (``export/1.0/`` to ``export/1.2/``)
are understood.
"""

from __future__ import annotations

import html
import re
import xml.etree.ElementTree as ET
from pathlib import Path
from types import MappingProxyType
from typing import Iterator, List, Mapping, Optional, Pattern, Union

from events_migration.models.event import ExtractedEvent, SkippedItem
from events_migration.parsers.content import strip_block_comments
from events_migration.utils.errors import ParseError, ReadError

WP_NS = re.compile(r"wordpress\.org/export/[\d.]+/?$")
CONTENT_NS = re.compile(r"purl\.org/rss/1\.0/modules/content/?$")

ATTACHMENT_TYPE = "attachment"
EVENT_TYPE = "event"
LOCATION_DOMAIN = "event_location"

START_KEY = "evcal_srow"
END_KEY = "evcal_erow"
LINK_KEY = "evcal_lmlink"
THUMBNAIL_KEY = "_thumbnail_id"

# A field is either a bare string or an element wrapping one.
FieldValue = Union[str, ET.Element, None]


class ExportDocument:
    """A parsed export: the ordered ``<item>`` elements of its channel."""

    def __init__(self, root: ET.Element, path: Optional[Path] = None) -> None:
        channel = root if root.tag == "channel" else root.find("channel")
        if channel is None:
            raise ParseError(f"No <channel> element in {path or 'export'}")
        self.root = root
        self.path = path
        self.items: List[ET.Element] = channel.findall("item")

    def __len__(self) -> int:
        return len(self.items)


def read_export(path: Union[str, Path]) -> ExportDocument:
    """Load and parse the export at ``path``.

    Raises:
        ReadError: If the file does not exist or cannot be read.
        ParseError: If the file is not well-formed XML or has no channel.
    """
    path = Path(path)
    try:
        with open(path, "rb") as f:
            tree = ET.parse(f)
    except ET.ParseError as e:
        raise ParseError(f"Malformed XML in {path}: {e}") from e
    except OSError as e:
        raise ReadError(f"Cannot read export {path}: {e}") from e
    return ExportDocument(tree.getroot(), path)


def field_text(value: FieldValue) -> Optional[str]:
    """Normalize a bare-string or element-wrapped field to its string."""
    if value is None:
        return None
    if isinstance(value, ET.Element):
        return value.text
    return str(value)


def _matches(tag: str, name: str, ns: Optional[Pattern[str]]) -> bool:
    if tag.startswith("{"):
        uri, local = tag[1:].split("}", 1)
    else:
        uri, local = "", tag
    if local != name:
        return False
    return bool(ns.search(uri)) if ns is not None else not uri


def _findall(element: ET.Element, name: str, ns: Optional[Pattern[str]] = None) -> List[ET.Element]:
    return [child for child in element if _matches(child.tag, name, ns)]


def _find(element: ET.Element, name: str, ns: Optional[Pattern[str]] = None) -> Optional[ET.Element]:
    for child in element:
        if _matches(child.tag, name, ns):
            return child
    return None


def _text(element: ET.Element, name: str, ns: Optional[Pattern[str]] = None) -> Optional[str]:
    return field_text(_find(element, name, ns))


def _stripped(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None


def post_type(item: ET.Element) -> Optional[str]:
    return _stripped(_text(item, "post_type", WP_NS))


def build_attachment_index(document: ExportDocument) -> Mapping[str, str]:
    """Map attachment post ids to their source URLs.

    The ``guid`` is the canonical URL; ``wp:attachment_url`` is used when
    the guid is empty.  A later duplicate id replaces an earlier one.
    """
    index = {}
    for item in document.items:
        if post_type(item) != ATTACHMENT_TYPE:
            continue
        post_id = _stripped(_text(item, "post_id", WP_NS))
        url = _stripped(field_text(_find(item, "guid"))) or _stripped(
            _text(item, "attachment_url", WP_NS)
        )
        if post_id and url:
            index[post_id] = url
    return MappingProxyType(index)


def extract_meta(item: ET.Element, key: str) -> Optional[str]:
    """Return the value of the first ``wp:postmeta`` whose key is ``key``."""
    for meta in _findall(item, "postmeta", WP_NS):
        if _text(meta, "meta_key", WP_NS) == key:
            return _text(meta, "meta_value", WP_NS)
    return None


def extract_taxonomy(item: ET.Element, domain: str = LOCATION_DOMAIN) -> Optional[str]:
    """Return the first ``<category>`` value in ``domain``, entities decoded."""
    for category in _findall(item, "category"):
        if category.get("domain") == domain:
            value = field_text(category)
            return _stripped(html.unescape(value)) if value else None
    return None


def extract_event(
    item: ET.Element,
    attachments: Mapping[str, str],
    *,
    location_domain: str = LOCATION_DOMAIN,
) -> Union[ExtractedEvent, SkippedItem]:
    """Pull the raw event fields out of ``item``.

    Items without a post id or a ``<title>`` element come back as a
    :class:`SkippedItem` instead of raising.
    """
    identifier = _stripped(_text(item, "post_id", WP_NS))
    title_element = _find(item, "title")
    title = None if title_element is None else (title_element.text or "")

    if not identifier:
        return SkippedItem(identifier=None, title=title, code="MISSING_IDENTIFIER")
    if title is None:
        return SkippedItem(identifier=identifier, title=None, code="MISSING_TITLE")

    image_url = None
    thumbnail_id = _stripped(extract_meta(item, THUMBNAIL_KEY))
    if thumbnail_id and thumbnail_id in attachments:
        image_url = attachments[thumbnail_id]

    return ExtractedEvent(
        identifier=identifier,
        title=title,
        post_date=_stripped(_text(item, "post_date", WP_NS)),
        post_name=_stripped(_text(item, "post_name", WP_NS)),
        start=extract_meta(item, START_KEY),
        end=extract_meta(item, END_KEY),
        location=extract_taxonomy(item, location_domain),
        url=extract_meta(item, LINK_KEY),
        image_url=image_url,
        body=strip_block_comments(_text(item, "encoded", CONTENT_NS)),
    )


def iter_events(
    document: ExportDocument,
    attachments: Mapping[str, str],
    post_type_name: str = EVENT_TYPE,
    *,
    location_domain: str = LOCATION_DOMAIN,
) -> Iterator[Union[ExtractedEvent, SkippedItem]]:
    """Lazily extract every item of ``post_type_name`` in document order."""
    for item in document.items:
        if post_type(item) == post_type_name:
            yield extract_event(item, attachments, location_domain=location_domain)
