"""
Normalization of raw WordPress values into frontmatter-ready primitives.

Every function here is total: invalid input yields ``None`` (or an empty
string for the text helpers) instead of raising, so that a bad value only
drops the field it belongs to and never the whole event.
"""

from __future__ import annotations

import posixpath
import re
from datetime import datetime, timezone
from typing import Any, Optional
from urllib.parse import unquote, urlparse

from bs4 import BeautifulSoup

# Gutenberg block annotations: self-closing patterns, openers and closers.
# They can span several lines when the block attributes are pretty-printed.
_BLOCK_PATTERN_RE = re.compile(r"<!-- wp:pattern.*?/-->", re.DOTALL)
_BLOCK_OPEN_RE = re.compile(r"<!-- wp:.*?-->", re.DOTALL)
_BLOCK_CLOSE_RE = re.compile(r"<!-- /wp:.*?-->", re.DOTALL)

_EPOCH_RE = re.compile(r"[+-]?\d+")
_SLUG_SEPARATOR_RE = re.compile(r"[^a-z0-9]+")
_MARKDOWN_LINK_RE = re.compile(r"\[([^\]]+)\]\([^)]+\)")
_EMPHASIS_RE = re.compile(r"[*_`]")
_WHITESPACE_RE = re.compile(r"\s+")

ELLIPSIS = "..."
DEFAULT_EXCERPT_LENGTH = 160


def strip_block_comments(markup: Optional[str]) -> str:
    """Remove ``<!-- wp:... -->`` style block annotations from ``markup``."""
    if not markup:
        return ""
    text = _BLOCK_PATTERN_RE.sub("", markup)
    text = _BLOCK_OPEN_RE.sub("", text)
    return _BLOCK_CLOSE_RE.sub("", text)


def clean_body(markup: Optional[str]) -> str:
    return strip_block_comments(markup).strip()


def normalize_timestamp(value: Any) -> Optional[str]:
    """Convert whole epoch seconds to an ISO-8601 UTC instant.

    ``"1700000000"`` becomes ``"2023-11-14T22:13:20.000Z"``.  Empty,
    non-numeric and out-of-range values return ``None``.
    """
    if value is None or isinstance(value, bool):
        return None
    text = str(value).strip()
    if not _EPOCH_RE.fullmatch(text):
        return None
    try:
        moment = datetime.fromtimestamp(int(text), tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def slugify(text: Optional[str]) -> str:
    """Lower-case ``text`` and join its ``[a-z0-9]`` runs with hyphens."""
    if not text:
        return ""
    return _SLUG_SEPARATOR_RE.sub("-", text.lower()).strip("-")


def extract_excerpt(content: Any, max_length: int = DEFAULT_EXCERPT_LENGTH) -> str:
    """Build a plain-text summary of ``content``.

    Block annotations and tags are removed, Markdown links keep only their
    text, emphasis and code markers are dropped and whitespace is collapsed.
    Text longer than ``max_length`` is cut at the last space that keeps it
    within the limit (or hard at the limit when there is none) and gets an
    ellipsis.  Returns ``""`` when there is nothing to summarize.
    """
    if not content or not isinstance(content, str):
        return ""

    text = strip_block_comments(content)
    text = BeautifulSoup(text, "html.parser").get_text()
    text = _MARKDOWN_LINK_RE.sub(r"\1", text)
    text = _EMPHASIS_RE.sub("", text)
    text = _WHITESPACE_RE.sub(" ", text).strip()

    if len(text) <= max_length:
        return text

    cut = text.rfind(" ", 0, max_length + 1)
    if cut <= 0:
        cut = max_length
    return text[:cut] + ELLIPSIS


def image_filename(url: Optional[str]) -> Optional[str]:
    """Return the file name at the end of ``url``, ignoring query and fragment."""
    if not url or not url.strip():
        return None
    name = posixpath.basename(urlparse(url.strip()).path)
    return unquote(name) or None
