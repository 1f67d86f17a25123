import os
import sys

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import pytest
pytest.importorskip("yaml")

import yaml

from events_migration.migrators.content_writer import render_document, write_record
from events_migration.models.event import EventRecord
from events_migration.utils.errors import WriteFailure


def make_record(**overrides):
    values = {
        "title": "Community Meetup",
        "event_date": "2023-11-14T22:13:20.000Z",
        "location": "Berlin",
        "body": "<p>Hi</p>",
        "filename": "2023-11-14-community-meetup.md",
    }
    values.update(overrides)
    return EventRecord(**values)


def test_render_document_layout():
    assert render_document(make_record()) == (
        "---\n"
        'title: "Community Meetup"\n'
        'eventDate: "2023-11-14T22:13:20.000Z"\n'
        'location: "Berlin"\n'
        "---\n"
        "<p>Hi</p>"
    )


def test_render_document_full_field_order():
    record = make_record(
        end_date="2023-11-15T00:13:20.000Z",
        url="https://meetup.example.org",
        image="img.jpg",
        excerpt="Hi",
    )
    header = render_document(record).split("---\n")[1]
    keys = [line.split(":", 1)[0] for line in header.splitlines()]
    assert keys == ["title", "eventDate", "endDate", "location", "url", "image", "excerpt"]


def test_render_document_escapes_and_keeps_unicode():
    record = make_record(title='Say "Hallo" im Café: #1', excerpt="x" * 300)
    document = render_document(record)
    assert 'title: "Say \\"Hallo\\" im Café: #1"' in document
    header = document.split("---\n")[1]
    assert len(header.splitlines()) == 4
    assert yaml.safe_load(header)["title"] == 'Say "Hallo" im Café: #1'


def test_render_document_parses_back_as_yaml():
    record = make_record(url="https://example.org/?a=1&b=2", excerpt="- not a list")
    header = render_document(record).split("---\n")[1]
    assert yaml.safe_load(header) == {
        "title": "Community Meetup",
        "eventDate": "2023-11-14T22:13:20.000Z",
        "location": "Berlin",
        "url": "https://example.org/?a=1&b=2",
        "excerpt": "- not a list",
    }


def test_write_record_creates_directory(tmp_path):
    target_dir = tmp_path / "src" / "data" / "events"
    path = write_record(make_record(), target_dir)
    assert path == target_dir / "2023-11-14-community-meetup.md"
    assert path.read_text(encoding="utf-8") == render_document(make_record())


def test_write_record_overwrites(tmp_path):
    write_record(make_record(body="old"), tmp_path)
    path = write_record(make_record(body="new"), tmp_path)
    assert path.read_text(encoding="utf-8").endswith("---\nnew")


def test_write_record_failure_raises_write_failure(tmp_path):
    (tmp_path / "2023-11-14-community-meetup.md").mkdir()
    with pytest.raises(WriteFailure):
        write_record(make_record(), tmp_path)
