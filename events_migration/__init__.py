"""
Top-level package for the WordPress events → static-site migration utility.

This package bundles all components required to read a WordPress WXR
export, extract its event posts, normalize their dates and text and write
one Markdown file with YAML frontmatter per event.  Modules are split into
subpackages:

* :mod:`events_migration.extractors` – export reading and field extraction
* :mod:`events_migration.parsers` – timestamp, slug, excerpt and body helpers
* :mod:`events_migration.migrators` – record assembly and file emission
* :mod:`events_migration.models` – pydantic models for records and config
* :mod:`events_migration.utils` – errors, reports and pre-flight checks

Each layer has no direct knowledge of configuration or execution strategy;
orchestration is handled in the migration_tool.
"""

from .migration_tool import EventMigrationTool, RunState
from .models import MigrationConfig, MigrationSummary

__all__ = ["EventMigrationTool", "MigrationConfig", "MigrationSummary", "RunState"]

__version__ = "0.1.0"
