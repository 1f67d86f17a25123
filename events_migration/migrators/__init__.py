"""
Record assembly and file emission.

This subpackage turns extracted events into :class:`EventRecord` objects and
writes them as Markdown files with YAML frontmatter.
"""

from .content_writer import render_document, write_record
from .record_builder import build_event_record, output_filename

__all__ = ["build_event_record", "output_filename", "render_document", "write_record"]
