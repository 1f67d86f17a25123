"""
Exceptions and follow-up reports for the events migration.

Only a missing or malformed export (:class:`FatalInputError`) or a broken
configuration (:class:`ConfigError`) stops a run.  Everything else is tied
to a single event: :class:`ItemSkipped` and :class:`WriteFailure` drop that
event and the run carries on.

Per-event outcomes are appended as JSON Lines to ``errors.jsonl`` and
``success.jsonl`` in the run's report directory, keyed by post id, slug and
title, so that skipped events can be fixed by hand afterwards.  Writing a
report is best effort: a report directory that cannot be written to never
interrupts the migration itself.

``ERRORS`` holds the human readable text for every code; unknown codes are
reported as-is.
"""

from __future__ import annotations

import json
import os
from typing import Any, Dict, Mapping, Optional

ERRORS: Dict[str, str] = {
    "MISSING_IDENTIFIER": "Event item has no post id",
    "MISSING_TITLE": "Event item has no title",
    "MISSING_DATE": "Neither an event start nor a post date is available",
    "MISSING_SLUG": "No usable slug in post name, title or post id",
    "WRITE_FAILURE": "Failed to write event file",
    "FILENAME_COLLISION": "Event file overwritten by a later item",
    "IMAGE_NOT_IN_ASSETS": "Thumbnail not found in the assets directory",
    "UNEXPECTED": "Unexpected error while migrating event",
    "MIGRATED": "Event migrated successfully",
}

DEFAULT_REPORT_DIR = os.path.join("reports", "migration")
ERROR_LOG = "errors.jsonl"
OK_LOG = "success.jsonl"


class MigrationError(Exception):
    """Base class for all migration errors."""


class ConfigError(MigrationError):
    """The migration configuration is unreadable or invalid."""


class FatalInputError(MigrationError):
    """The export document cannot be used; the run stops before writing."""


class ReadError(FatalInputError):
    """The export file is missing or unreadable."""


class ParseError(FatalInputError):
    """The export file is not well-formed XML."""


class ItemSkipped(MigrationError):
    """A single event cannot be migrated; the run continues without it."""

    def __init__(self, code: str, message: Optional[str] = None) -> None:
        self.code = code
        super().__init__(message or ERRORS.get(code, code))


class WriteFailure(MigrationError):
    """An event file could not be written to disk."""


def _write_jsonl(report_dir: str, filename: str, data: Dict[str, Any]) -> bool:
    """Append ``data`` as one JSON line; ``False`` if the report is not writable."""
    path = os.path.join(report_dir, filename)
    try:
        os.makedirs(report_dir, exist_ok=True)
        with open(path, "a", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False)
            f.write("\n")
    except OSError as e:
        print(f"[WARNING] Could not write report {path}: {e}")
        return False
    return True


def _entry(code: str, item: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "code": code,
        "message": ERRORS.get(code, code),
        "id": item.get("ID"),
        "slug": item.get("Slug"),
        "title": item.get("Title"),
    }


def report_error(
    code: str,
    item: Mapping[str, Any],
    exc: Optional[BaseException] = None,
    *,
    report_dir: str = DEFAULT_REPORT_DIR,
) -> Dict[str, Any]:
    """Record a problem with one event in ``errors.jsonl``.

    ``item`` is an event's report mapping (``ID``, ``Slug``, ``Title``).
    When ``exc`` is given its text is stored under ``error``.  Nothing is
    printed; the caller logs the event at the level it sees fit.

    Returns the entry, whether or not it reached the disk.
    """
    entry = _entry(code, item)
    if exc is not None:
        entry["error"] = str(exc)
    _write_jsonl(report_dir, ERROR_LOG, entry)
    return entry


def report_ok(
    code: str,
    item: Mapping[str, Any],
    extra: Optional[Dict[str, Any]] = None,
    *,
    report_dir: str = DEFAULT_REPORT_DIR,
) -> Dict[str, Any]:
    """Record a migrated event in ``success.jsonl``, merged with ``extra``."""
    entry = _entry(code, item)
    if extra:
        entry.update(extra)
    _write_jsonl(report_dir, OK_LOG, entry)
    return entry
