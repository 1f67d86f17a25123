import os
from pathlib import Path
from typing import TYPE_CHECKING, FrozenSet, List, Optional

if TYPE_CHECKING:
    from events_migration.models.config import MigrationConfig


def index_assets(assets_dir: Optional[Path]) -> FrozenSet[str]:
    """Return the names of every file below ``assets_dir``.

    WordPress exports its uploads in ``YYYY/MM`` folders, so the search is
    recursive.  A missing directory yields an empty set.
    """
    if not assets_dir or not Path(assets_dir).is_dir():
        return frozenset()
    return frozenset(p.name for p in Path(assets_dir).rglob("*") if p.is_file())


def run_pre_flight_checks(config: "MigrationConfig") -> List[str]:
    """
    Verifies that the local environment is ready for a migration run.

    Nothing here stops the run: an unusable output directory only means
    every event will later be skipped as a write failure.

    Args:
        config: The migration configuration.

    Returns:
        A list of warnings, empty when everything looks fine.
    """
    warnings: List[str] = []

    output_dir = Path(config.output_dir)
    if output_dir.exists() and not output_dir.is_dir():
        warnings.append(f"Output path {output_dir} exists and is not a directory; no event can be written.")
    else:
        try:
            os.makedirs(output_dir, exist_ok=True)
        except OSError as e:
            warnings.append(f"Cannot create output directory {output_dir}: {e}")
        else:
            if not os.access(output_dir, os.W_OK):
                warnings.append(f"Output directory {output_dir} is not writable.")

    if config.assets_dir is None:
        warnings.append("No assets directory configured; event images will not be checked.")
    elif not Path(config.assets_dir).is_dir():
        warnings.append(f"Assets directory {config.assets_dir} not found; event images will not be checked.")

    return warnings
