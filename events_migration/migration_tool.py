"""
High-level orchestration of the WordPress events → static-site migration.

This module defines an :class:`EventMigrationTool` class that ties together
the extractors, parsers, migrators and utilities into a complete pipeline.
A run reads the WXR export, indexes its attachments, converts every event
post into a Markdown file with YAML frontmatter and reports how many events
were migrated or skipped.

Configuration is supplied as a :class:`MigrationConfig`, a dictionary of
its fields, or a JSON file path.  Nothing is read from module-level path
constants, so runs against fixture directories need no global state.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, FrozenSet, Optional, Union

from events_migration.extractors.wordpress_extractor import (
    build_attachment_index,
    iter_events,
    read_export,
)
from events_migration.migrators.content_writer import write_record
from events_migration.migrators.record_builder import build_event_record
from events_migration.models.config import MigrationConfig
from events_migration.models.event import (
    EventRecord,
    ExtractedEvent,
    MigrationSummary,
    SkippedItem,
)
from events_migration.utils.errors import (
    ERRORS,
    FatalInputError,
    ItemSkipped,
    WriteFailure,
    report_error,
    report_ok,
)
from events_migration.utils.pre_flight_checks import index_assets, run_pre_flight_checks

LOG_FILE = "migration.log"


class RunState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    MIGRATING = "migrating"
    DONE = "done"


class EventMigrationTool:
    """
    Encapsulates the state of one migration run.  A run moves from
    ``LOADING`` (export parsed, attachments indexed) to ``MIGRATING`` (one
    event at a time) to ``DONE``.  Problems with the export itself abort
    the run; problems with a single event only skip that event.
    """

    def __init__(
        self,
        config: Optional[Union[MigrationConfig, Dict[str, Any]]] = None,
        *,
        config_file: Optional[str] = None,
    ) -> None:
        if isinstance(config, MigrationConfig):
            self.config = config
        else:
            self.config = MigrationConfig.from_file(config_file, **(config or {}))
        self.state = RunState.IDLE
        self.summary: Optional[MigrationSummary] = None
        self._assets: Optional[FrozenSet[str]] = None
        self._log_failed = False

    @property
    def report_dir(self) -> str:
        return str(self.config.reports_dir)

    def log_message(self, message: str, level: str = "INFO") -> None:
        print(f"[{level}] {message}")
        # Append to log file; the console line above stays when that fails
        path = os.path.join(self.report_dir, LOG_FILE)
        try:
            os.makedirs(self.report_dir, exist_ok=True)
            with open(path, "a", encoding="utf-8") as f:
                f.write(f"{level}: {message}\n")
        except OSError as e:
            if not self._log_failed:
                self._log_failed = True
                print(f"[WARNING] Could not write log file {path}: {e}")

    def run(self) -> MigrationSummary:
        """
        Migrate every event of the configured export.

        Once the export is parsed the run always finishes: events that
        cannot be built or written are counted as skipped.  The tool ends in
        ``DONE`` whatever happens.

        :return: The final :class:`MigrationSummary`.
        :raises FatalInputError: If the export is missing or malformed.
        :raises RuntimeError: If called while a run is in progress.
        """
        if self.state in (RunState.LOADING, RunState.MIGRATING):
            raise RuntimeError(f"Migration already in progress ({self.state.value}).")

        self.state = RunState.LOADING
        self.summary = None
        self._log_failed = False
        try:
            self.summary = self._run()
        finally:
            self.state = RunState.DONE
        return self.summary

    def _run(self) -> MigrationSummary:
        self.log_message(f"Parsing WordPress export {self.config.export_path}")
        try:
            document = read_export(self.config.export_path)
        except FatalInputError as e:
            self.log_message(f"Migration aborted: {e}", level="ERROR")
            raise

        for warning in run_pre_flight_checks(self.config):
            self.log_message(warning, level="WARNING")

        attachments = build_attachment_index(document)
        self.log_message(f"Found {len(attachments)} attachments")
        assets_dir = self.config.assets_dir
        self._assets = index_assets(assets_dir) if assets_dir and Path(assets_dir).is_dir() else None

        self.state = RunState.MIGRATING
        summary = MigrationSummary()
        owners: Dict[str, str] = {}

        events = iter_events(
            document,
            attachments,
            self.config.post_type,
            location_domain=self.config.location_domain,
        )
        for extracted in events:
            if isinstance(extracted, SkippedItem):
                summary = self._skip(summary, extracted)
                continue
            summary = self._migrate(summary, extracted, owners)

        self.log_message(
            f"Migration complete: {summary.migrated} events migrated, {summary.skipped} skipped"
        )
        return summary

    def _migrate(
        self, summary: MigrationSummary, event: ExtractedEvent, owners: Dict[str, str]
    ) -> MigrationSummary:
        item = event.report_item()
        try:
            record = build_event_record(
                event,
                extension=self.config.extension,
                excerpt_length=self.config.excerpt_length,
            )
            self._check_record(record, event, owners)
            write_record(record, self.config.output_dir)
        except ItemSkipped as e:
            return self._skip(summary, self._skipped(event, e.code, str(e)), exc=e)
        except WriteFailure as e:
            return self._skip(summary, self._skipped(event, "WRITE_FAILURE", str(e)), exc=e)
        except Exception as e:
            return self._skip(summary, self._skipped(event, "UNEXPECTED", str(e)), exc=e)

        owners[record.filename] = event.identifier
        report_ok("MIGRATED", item, {"file": record.filename}, report_dir=self.report_dir)
        self.log_message(f"Migrated: {record.filename}")
        return summary.with_migrated(record.filename)

    def _check_record(self, record: EventRecord, event: ExtractedEvent, owners: Dict[str, str]) -> None:
        item = event.report_item()
        previous = owners.get(record.filename)
        if previous is not None and previous != event.identifier:
            self.log_message(
                f"{record.filename} from event {previous} is overwritten by event {event.identifier}",
                level="WARNING",
            )
            report_error("FILENAME_COLLISION", item, report_dir=self.report_dir)
        if record.image and self._assets is not None and record.image not in self._assets:
            self.log_message(
                f"Image {record.image} for event {event.identifier} not found in {self.config.assets_dir}",
                level="WARNING",
            )
            report_error("IMAGE_NOT_IN_ASSETS", item, report_dir=self.report_dir)

    @staticmethod
    def _skipped(event: ExtractedEvent, code: str, message: str) -> SkippedItem:
        return SkippedItem(identifier=event.identifier, title=event.title, code=code, message=message)

    def _skip(
        self, summary: MigrationSummary, skipped: SkippedItem, exc: Optional[BaseException] = None
    ) -> MigrationSummary:
        message = skipped.message or ERRORS.get(skipped.code, skipped.code)
        self.log_message(
            f"Skipped event {skipped.identifier or '?'} '{skipped.title or ''}': {message}",
            level="WARNING",
        )
        report_error(skipped.code, skipped.report_item(), exc, report_dir=self.report_dir)
        if not skipped.message:
            skipped = skipped.model_copy(update={"message": message})
        return summary.with_skipped(skipped)
