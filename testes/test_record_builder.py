import os
import sys

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import pytest
from pydantic import ValidationError

from events_migration.migrators.record_builder import build_event_record, output_filename
from events_migration.models.event import EventRecord, ExtractedEvent
from events_migration.utils.errors import ItemSkipped


def make_event(**overrides):
    values = {
        "identifier": "10",
        "title": "Community Meetup",
        "post_date": "2023-10-01 12:00:00",
        "post_name": "community-meetup",
    }
    values.update(overrides)
    return ExtractedEvent(**values)


def test_start_without_end_sets_only_event_date():
    record = build_event_record(make_event(start="1700000000"))
    assert record.event_date == "2023-11-14T22:13:20.000Z"
    assert record.end_date is None
    assert "endDate" not in record.frontmatter()


def test_end_equal_to_start_is_omitted():
    record = build_event_record(make_event(start="1700000000", end="1700000000"))
    assert record.end_date is None


def test_distinct_end_is_kept():
    record = build_event_record(make_event(start="1700000000", end="1700007200"))
    assert record.end_date == "2023-11-15T00:13:20.000Z"


def test_invalid_timestamps_are_omitted():
    record = build_event_record(make_event(start="soon", end=""))
    assert record.event_date is None
    assert record.end_date is None
    assert record.filename == "2023-10-01-community-meetup.md"


def test_filename_prefers_event_start_date():
    record = build_event_record(make_event(start="1700000000"))
    assert record.filename == "2023-11-14-community-meetup.md"


def test_filename_falls_back_to_post_date():
    record = build_event_record(make_event())
    assert record.filename == "2023-10-01-community-meetup.md"


def test_filename_slug_from_title_then_identifier():
    assert build_event_record(make_event(post_name=None, title="Summer BBQ!")).filename == (
        "2023-10-01-summer-bbq.md"
    )
    assert build_event_record(make_event(post_name=None, title="")).filename == "2023-10-01-10.md"


def test_filename_normalizes_post_name_and_extension():
    event = make_event(post_name="Caf%C3%A9 Night")
    assert output_filename(event, None, "mdx") == "2023-10-01-caf-c3-a9-night.mdx"


def test_missing_dates_skip_item():
    with pytest.raises(ItemSkipped) as excinfo:
        build_event_record(make_event(post_date=None))
    assert excinfo.value.code == "MISSING_DATE"


def test_unusable_slug_skips_item():
    with pytest.raises(ItemSkipped) as excinfo:
        build_event_record(make_event(post_name="???", title="!!!", identifier="---"))
    assert excinfo.value.code == "MISSING_SLUG"


def test_optional_fields_are_stripped_or_omitted():
    record = build_event_record(
        make_event(location="  Berlin  ", url="   ", image_url="https://x/img.jpg?ver=2")
    )
    assert record.location == "Berlin"
    assert record.url is None
    assert record.image == "img.jpg"


def test_excerpt_comes_from_cleaned_body():
    record = build_event_record(
        make_event(body="\n<!-- wp:paragraph -->\n<p>Join <em>us</em></p>\n<!-- /wp:paragraph -->\n")
    )
    assert record.body == "<p>Join <em>us</em></p>"
    assert record.excerpt == "Join us"


def test_empty_body_has_no_excerpt():
    record = build_event_record(make_event(body=""))
    assert record.excerpt is None
    assert record.body == ""


def test_excerpt_length_is_configurable():
    record = build_event_record(make_event(body="one two three four"), excerpt_length=8)
    assert record.excerpt == "one two..."


def test_empty_title_is_still_written():
    record = build_event_record(make_event(title=""))
    assert record.frontmatter() == {"title": ""}


def test_assembly_is_deterministic():
    event = make_event(start="1700000000", location="Berlin", body="<p>Hi</p>")
    assert build_event_record(event) == build_event_record(event)


def test_frontmatter_order_and_aliases():
    record = EventRecord(
        title="T",
        excerpt="E",
        image="i.jpg",
        url="https://u",
        location="L",
        end_date="2023-11-15T00:00:00.000Z",
        event_date="2023-11-14T00:00:00.000Z",
        filename="f.md",
    )
    assert list(record.frontmatter()) == [
        "title",
        "eventDate",
        "endDate",
        "location",
        "url",
        "image",
        "excerpt",
    ]


def test_record_is_immutable():
    record = build_event_record(make_event())
    with pytest.raises(ValidationError):
        record.title = "changed"
