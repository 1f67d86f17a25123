"""
Utility helpers used by the migration tool.

This subpackage exposes the error types, structured report logging and the
pre-flight checks run before a migration.
"""

from .errors import (
    ERRORS,
    ConfigError,
    FatalInputError,
    ItemSkipped,
    MigrationError,
    ParseError,
    ReadError,
    WriteFailure,
    report_error,
    report_ok,
)
from .pre_flight_checks import index_assets, run_pre_flight_checks

__all__ = [
    "ERRORS",
    "ConfigError",
    "FatalInputError",
    "ItemSkipped",
    "MigrationError",
    "ParseError",
    "ReadError",
    "WriteFailure",
    "index_assets",
    "report_error",
    "report_ok",
    "run_pre_flight_checks",
]
