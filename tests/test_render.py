"""Tests for markdown and terminal rendering."""

from chlog.models import Changelog, Version
from chlog.render import comparison_links, render_markdown, render_version_markdown
from chlog.terminal import format_changelog, format_version, wrap_entry


def test_render_markdown_public(sample_changelog: Changelog):
    text = render_markdown(sample_changelog)

    assert text.startswith("# Changelog\n\nAll notable changes to demo will be documented in this file.\n\n")
    assert "[Keep a Changelog](https://keepachangelog.com/en/1.1.0/)" in text
    assert "## [Unreleased]\n\n### Added\n\n- Dark mode\n\n" in text
    assert "## [1.1.0] - 2024-03-01\n\n### Fixed\n\n- Fix login timeout\n- Fix login redirect\n\n### Added\n\n" in text
    assert "## [v1.0.0] - 2024-01-15" in text
    assert "Refactor auth middleware" not in text
    assert "/compare/" not in text


def test_render_markdown_with_internal(sample_changelog: Changelog):
    text = render_markdown(sample_changelog, include_internal=True)
    assert "### Changed\n\n- Refactor auth middleware\n" in text


def test_render_is_deterministic(sample_changelog: Changelog):
    assert render_markdown(sample_changelog) == render_markdown(sample_changelog)


def test_render_version_markdown_skips_empty_categories():
    v = Version(version="2.0.0", date="2024-06-01")
    v.public.append("security", "Patch CVE")
    v.public.append("added", "Temp")
    v.public.remove("added", "Temp")

    assert render_version_markdown(v) == "## [2.0.0] - 2024-06-01\n\n### Security\n\n- Patch CVE\n\n"


def test_comparison_links_github(sample_changelog: Changelog):
    links = comparison_links(sample_changelog, "https://github.com/acme/app/")
    assert links == [
        "[Unreleased]: https://github.com/acme/app/compare/v1.1.0...HEAD\n",
        "[1.1.0]: https://github.com/acme/app/compare/v1.0.0...v1.1.0\n",
    ]


def test_comparison_links_gitlab(sample_changelog: Changelog):
    text = render_markdown(sample_changelog, repo_url="https://gitlab.com/acme/app")
    assert text.endswith("[1.1.0]: https://gitlab.com/acme/app/-/compare/v1.0.0...v1.1.0\n")


def test_comparison_links_single_version():
    changelog = Changelog(project="p", versions=[Version(version="unreleased")])
    assert comparison_links(changelog, "https://github.com/acme/app") == []


def test_format_changelog_plain(sample_changelog: Changelog):
    plain = format_changelog(sample_changelog).plain

    assert plain.startswith("demo Changelog\n\n[Unreleased]\n  + Added\n    - Dark mode\n")
    assert "[1.1.0] - 2024-03-01\n  x Fixed\n    - Fix login timeout\n" in plain
    assert "Refactor" not in plain


def test_format_version_unknown_category_and_internal():
    v = Version(version="unreleased")
    v.public.append("performance", "Faster")
    v.internal.append("changed", "Refactor")

    plain = format_version(v, include_internal=True).plain

    assert plain == "[Unreleased]\n  * Performance\n    - Faster\n  ~ Changed\n    - Refactor\n"


def test_wrap_entry():
    assert wrap_entry("short", 20) == "short"
    wrapped = wrap_entry("one two three four five", 10)
    assert wrapped.splitlines()[0] == "one two"
    assert all(line.startswith("      ") for line in wrapped.splitlines()[1:])
