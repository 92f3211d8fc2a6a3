"""Tests for the order-preserving YAML codec."""

import pytest

from chlog.changelog.codec import dump_version, dumps, loads
from chlog.errors import DecodeError
from chlog.models import Changelog, Version


def test_decode_preserves_document_order(sample_changelog: Changelog):
    assert sample_changelog.project == "demo"
    assert [v.version for v in sample_changelog.versions] == ["unreleased", "1.1.0", "v1.0.0"]
    assert sample_changelog.versions[1].public.names() == ["fixed", "added"]
    assert sample_changelog.versions[1].public.entries("fixed") == ["Fix login timeout", "Fix login redirect"]


def test_decode_splits_internal_changes(sample_changelog: Changelog):
    unreleased = sample_changelog.versions[0]
    assert unreleased.public.names() == ["added"]
    assert unreleased.internal.entries("changed") == ["Refactor auth middleware"]
    assert unreleased.date == ""


def test_decode_keeps_scalars_as_raw_text(sample_changelog: Changelog):
    # An unquoted date is kept as text, not converted to a date object
    assert sample_changelog.versions[2].date == "2024-01-15"

    changelog = loads("project: p\nversions:\n  1.0:\n    date: 2024-01-01\n    added:\n      - 42\n")
    assert changelog.versions[0].version == "1.0"
    assert changelog.versions[0].public.entries("added") == ["42"]


def test_decode_null_values_are_empty():
    changelog = loads("project: p\nversions:\n  unreleased:\n  1.0.0:\n    date: '2024-01-01'\n    added:\n    internal:\n")
    assert changelog.versions[0].is_empty()
    assert changelog.versions[1].is_empty()


def test_decode_keeps_blank_entries_for_validation():
    changelog = loads("project: p\nversions:\n  unreleased:\n    added:\n      - ''\n      -\n")
    assert changelog.versions[0].public.entries("added") == ["", ""]


@pytest.mark.parametrize(
    "text, message",
    [
        ("project: p\ntitle: x\n", 'unknown field "title"'),
        ("project: p\nversions: [a, b]\n", "versions: expected mapping"),
        ("project: p\nversions: nope\n", "versions: expected mapping"),
        (
            "project: p\nversions:\n  1.0.0:\n    date: '2024-01-01'\n  1.0.0:\n    date: '2024-01-02'\n",
            'versions: duplicate key "1.0.0"',
        ),
        ("project: p\nversions:\n  unreleased: [a]\n", "versions.unreleased: expected mapping"),
        ("project: p\nversions:\n  unreleased:\n    added: Dark mode\n", "versions.unreleased.added: expected list"),
        ("project: p\nversions:\n  unreleased:\n    internal: [a]\n", "versions.unreleased.internal: expected mapping"),
        ("project: p\nversions:\n  unreleased:\n    added:\n      - {a: b}\n", "versions.unreleased.added[0]"),
        (
            "project: p\nversions:\n  unreleased:\n    added: [a]\n    added: [b]\n",
            'versions.unreleased: duplicate key "added"',
        ),
        ("- just\n- a list\n", "expected mapping at document root"),
        ("", "empty document"),
        ("project: [unclosed\n", "decoding YAML"),
    ],
)
def test_decode_errors(text: str, message: str):
    with pytest.raises(DecodeError) as excinfo:
        loads(text)
    assert message in str(excinfo.value)


def test_round_trip(sample_changelog: Changelog):
    assert loads(dumps(sample_changelog)) == sample_changelog


def test_round_trip_tricky_text():
    v = Version(version="unreleased")
    for text in ["Fix: colon in text", "- leading dash", "# not a comment", "yes", "123", "multi\nline", "'quoted'"]:
        v.public.append("fixed", text)
    v.public.append("custom-category", "café ✓")
    v.internal.append("security", "null")
    changelog = Changelog(project="tricky: name", versions=[v])

    assert loads(dumps(changelog)) == changelog


def test_encode_quotes_ambiguous_version_keys():
    changelog = Changelog(project="p", versions=[Version(version="1.0", date="2024-01-01")])
    changelog.versions[0].public.append("added", "A")

    text = dumps(changelog)

    assert "'1.0':" in text
    assert loads(text).versions[0].version == "1.0"


def test_encode_layout_and_omissions():
    unreleased = Version(version="unreleased")
    released = Version(version="1.0.0", date="2024-01-01")
    released.public.append("fixed", "F")
    released.public.append("added", "A")
    released.internal.append("changed", "C")
    changelog = Changelog(project="demo", versions=[unreleased, released])

    text = dumps(changelog)
    lines = text.splitlines()

    assert lines[0] == "project: demo"
    assert lines[1] == "versions:"
    assert "  unreleased: {}" in lines
    assert text.index("fixed:") < text.index("added:") < text.index("internal:")
    assert text.index("date:") < text.index("fixed:")
    assert "date" not in text.split("1.0.0")[0]


def test_encode_skips_empty_categories_and_internal():
    v = Version(version="1.0.0", date="2024-01-01")
    v.public.append("added", "A")
    v.public.append("fixed", "F")
    v.public.remove("fixed", "F")
    text = dumps(Changelog(project="p", versions=[v]))

    assert "fixed" not in text
    assert "internal" not in text


def test_dump_version_single_mapping():
    v = Version(version="unreleased")
    v.public.append("added", "Add dark mode")
    v.internal.append("changed", "Simplify handler")

    text = dump_version(v)

    assert text.startswith("unreleased:\n")
    assert "Add dark mode" in text
    assert "internal:" in text
