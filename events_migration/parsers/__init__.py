"""
Parsers and normalizers used by the migration pipeline.

Currently this subpackage exposes the content helpers from
:mod:`events_migration.parsers.content`.
"""

from .content import (
    clean_body,
    extract_excerpt,
    image_filename,
    normalize_timestamp,
    slugify,
    strip_block_comments,
)

__all__ = [
    "clean_body",
    "extract_excerpt",
    "image_filename",
    "normalize_timestamp",
    "slugify",
    "strip_block_comments",
]
