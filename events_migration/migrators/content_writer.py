"""
Serialization of event records to Markdown files with YAML frontmatter.

Each file starts with a ``---`` delimited block holding the record's
frontmatter in a fixed key order, followed by the cleaned body markup.
Existing files with the same name are replaced.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Union

import yaml

from events_migration.models.event import EventRecord
from events_migration.utils.errors import WriteFailure

FRONTMATTER_DELIMITER = "---"


class _Quoted(str):
    """A frontmatter value that is always emitted double quoted."""


class _FrontmatterDumper(yaml.SafeDumper):
    pass


def _represent_quoted(dumper: yaml.SafeDumper, data: _Quoted) -> yaml.ScalarNode:
    return dumper.represent_scalar("tag:yaml.org,2002:str", str(data), style='"')


_FrontmatterDumper.add_representer(_Quoted, _represent_quoted)


def render_frontmatter(record: EventRecord) -> str:
    data = {key: _Quoted(value) for key, value in record.frontmatter().items()}
    return yaml.dump(
        data,
        Dumper=_FrontmatterDumper,
        sort_keys=False,
        allow_unicode=True,
        width=float("inf"),
    ).strip()


def render_document(record: EventRecord) -> str:
    """Return the full file content for ``record``."""
    return (
        f"{FRONTMATTER_DELIMITER}\n"
        f"{render_frontmatter(record)}\n"
        f"{FRONTMATTER_DELIMITER}\n"
        f"{record.body}"
    )


def write_record(record: EventRecord, directory: Union[str, Path]) -> Path:
    """Write ``record`` to ``directory/record.filename``.

    The directory is created when missing.

    Raises:
        WriteFailure: If the directory or the file cannot be written.
    """
    target = Path(directory) / record.filename
    try:
        os.makedirs(directory, exist_ok=True)
        with open(target, "w", encoding="utf-8", newline="\n") as f:
            f.write(render_document(record))
    except OSError as e:
        raise WriteFailure(f"Cannot write {target}: {e}") from e
    return target
