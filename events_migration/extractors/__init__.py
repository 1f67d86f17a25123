"""
Extractors for WordPress export files.

This subpackage parses a WXR XML export, indexes its attachments and pulls
the raw fields of every event post out of it, ready to be normalized into
static-site content records.
"""

from .wordpress_extractor import (
    ExportDocument,
    build_attachment_index,
    extract_event,
    extract_meta,
    extract_taxonomy,
    field_text,
    iter_events,
    read_export,
)

__all__ = [
    "ExportDocument",
    "build_attachment_index",
    "extract_event",
    "extract_meta",
    "extract_taxonomy",
    "field_text",
    "iter_events",
    "read_export",
]
