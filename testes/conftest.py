import os
import sys
from xml.sax.saxutils import escape, quoteattr

import pytest

# Ensure project root is on sys.path for imports when running tests directly
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

WXR_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0"
    xmlns:excerpt="http://wordpress.org/export/{version}/excerpt/"
    xmlns:content="http://purl.org/rss/1.0/modules/content/"
    xmlns:dc="http://purl.org/dc/elements/1.1/"
    xmlns:wp="http://wordpress.org/export/{version}/">
<channel>
    <title>Example Site</title>
    <link>https://example.org</link>
    <wp:wxr_version>{version}</wp:wxr_version>
{items}
</channel>
</rss>
"""


def attachment_item(post_id="5", url="https://x/img.jpg", guid_attr=True, attachment_url=None):
    guid = ""
    if url is not None:
        attr = ' isPermaLink="false"' if guid_attr else ""
        guid = f"<guid{attr}>{escape(url)}</guid>"
    extra = f"<wp:attachment_url>{escape(attachment_url)}</wp:attachment_url>" if attachment_url else ""
    return f"""
    <item>
        <title>image</title>
        {guid}
        <wp:post_id>{post_id}</wp:post_id>
        <wp:post_type><![CDATA[attachment]]></wp:post_type>
        {extra}
    </item>"""


def event_item(
    post_id="10",
    title="Community Meetup",
    post_name="community-meetup",
    post_date="2023-10-01 12:00:00",
    meta=None,
    categories=None,
    content="",
    post_type="event",
):
    """Render one ``<item>``.  ``None`` for a scalar field omits its element."""
    parts = []
    if title is not None:
        parts.append(f"<title>{escape(title)}</title>")
    if post_id is not None:
        parts.append(f"<wp:post_id>{post_id}</wp:post_id>")
    if post_date is not None:
        parts.append(f"<wp:post_date><![CDATA[{post_date}]]></wp:post_date>")
    if post_name is not None:
        parts.append(f"<wp:post_name><![CDATA[{post_name}]]></wp:post_name>")
    parts.append(f"<wp:post_type><![CDATA[{post_type}]]></wp:post_type>")
    parts.append(f"<content:encoded><![CDATA[{content}]]></content:encoded>")
    parts.append("<excerpt:encoded><![CDATA[Not the body]]></excerpt:encoded>")
    for domain, value in categories or []:
        parts.append(f"<category domain={quoteattr(domain)} nicename=\"x\"><![CDATA[{value}]]></category>")
    for key, value in meta or []:
        parts.append(
            "<wp:postmeta>"
            f"<wp:meta_key><![CDATA[{key}]]></wp:meta_key>"
            f"<wp:meta_value><![CDATA[{value}]]></wp:meta_value>"
            "</wp:postmeta>"
        )
    body = "\n        ".join(parts)
    return f"""
    <item>
        {body}
    </item>"""


def wxr(*items, version="1.2"):
    return WXR_TEMPLATE.format(items="".join(items), version=version)


@pytest.fixture
def write_export(tmp_path):
    """Write a WXR document built from ``items`` and return its path."""

    def _write(*items, version="1.2", name="export.xml"):
        path = tmp_path / name
        path.write_text(wxr(*items, version=version), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_config(tmp_path):
    from events_migration.models.config import MigrationConfig

    def _make(export_path, **overrides):
        values = {
            "export_path": export_path,
            "output_dir": tmp_path / "events",
            "assets_dir": None,
            "reports_dir": tmp_path / "reports",
        }
        values.update(overrides)
        return MigrationConfig(**values)

    return _make
