"""
Pydantic models shared by the migration pipeline.
"""

from .config import MigrationConfig
from .event import (
    FRONTMATTER_FIELDS,
    EventRecord,
    ExtractedEvent,
    MigrationSummary,
    SkippedItem,
)

__all__ = [
    "FRONTMATTER_FIELDS",
    "EventRecord",
    "ExtractedEvent",
    "MigrationConfig",
    "MigrationSummary",
    "SkippedItem",
]
