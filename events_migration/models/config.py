from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from events_migration.utils.errors import ConfigError


def _env_path(name: str, default: Optional[str]) -> Optional[str]:
    return os.getenv(name) or default


class MigrationConfig(BaseModel):
    """Paths and knobs for one migration run.

    The three path settings mirror the locations the migration needs to
    know about: the WordPress export, the directory receiving the event
    files and the directory holding the exported media.  Everything else
    has a sensible default.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    export_path: Path = Field(
        default_factory=lambda: Path(_env_path("EVENTS_EXPORT_PATH", "docs/export.xml"))
    )
    output_dir: Path = Field(
        default_factory=lambda: Path(_env_path("EVENTS_OUTPUT_DIR", "src/data/events"))
    )
    assets_dir: Optional[Path] = Field(
        default_factory=lambda: Path(_env_path("EVENTS_ASSETS_DIR", "../wp-export/output/"))
    )
    reports_dir: Path = Path("reports/migration")
    post_type: str = "event"
    location_domain: str = "event_location"
    extension: str = "md"
    excerpt_length: int = Field(160, gt=0)

    @field_validator("extension", mode="before")
    @classmethod
    def _strip_dot(cls, v: Any):
        if isinstance(v, str):
            return v.strip().lstrip(".")
        return v

    @field_validator("assets_dir", mode="before")
    @classmethod
    def _empty_assets_dir(cls, v: Any):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @classmethod
    def from_file(cls, config_file: Optional[str], **overrides: Any) -> "MigrationConfig":
        """Load the ``migration`` section of a JSON config file.

        A missing file is not an error; defaults (and environment variables)
        are used instead.  Keyword ``overrides`` whose value is not ``None``
        win over the file.

        Raises:
            ConfigError: If the file is not a JSON object or a value is invalid.
        """
        data: Dict[str, Any] = {}
        if config_file and os.path.exists(config_file):
            try:
                with open(config_file, "r", encoding="utf-8") as f:
                    raw = json.load(f)
            except (OSError, ValueError) as e:
                raise ConfigError(f"Cannot read config file {config_file}: {e}") from e
            section = raw.get("migration", raw) if isinstance(raw, dict) else None
            if not isinstance(section, dict):
                raise ConfigError(f"Config file {config_file} must hold a JSON object.")
            data.update(section)
        data.update({k: v for k, v in overrides.items() if v is not None})
        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid migration config: {e}") from e
