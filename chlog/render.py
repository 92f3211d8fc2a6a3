"""Render a changelog as Keep a Changelog markdown."""

from __future__ import annotations

from .changelog.query import normalize_version
from .models import Changelog, Version

KEEP_A_CHANGELOG_URL = "https://keepachangelog.com/en/1.1.0/"


def render_markdown(
    changelog: Changelog,
    include_internal: bool = False,
    repo_url: str | None = None,
) -> str:
    """Render the full CHANGELOG.md text.

    Args:
        changelog: Changelog to render
        include_internal: Merge internal entries into each category
        repo_url: Repository URL for compare links at the bottom (omitted if None)
    """
    parts = [
        "# Changelog\n\n",
        f"All notable changes to {changelog.project} will be documented in this file.\n\n",
        f"The format is based on [Keep a Changelog]({KEEP_A_CHANGELOG_URL}).\n\n",
    ]
    parts.extend(render_version_markdown(v, include_internal) for v in changelog.versions)
    if repo_url:
        parts.extend(comparison_links(changelog, repo_url))
    return "".join(parts)


def render_version_markdown(version: Version, include_internal: bool = False) -> str:
    """Render one version: heading, then a section per category in stored order."""
    lines = [f"## {version_heading(version)}", ""]
    for bucket in version.changes(include_internal).categories:
        if not bucket.entries:
            continue
        lines.append(f"### {title_case(bucket.name)}")
        lines.append("")
        lines.extend(f"- {entry}" for entry in bucket.entries)
        lines.append("")
    return "\n".join(lines) + "\n"


def version_heading(version: Version) -> str:
    if version.is_unreleased:
        return "[Unreleased]"
    return f"[{version.version}] - {version.date}"


def title_case(name: str) -> str:
    return name[:1].upper() + name[1:]


def comparison_links(changelog: Changelog, repo_url: str) -> list[str]:
    """Reference links comparing each version to the one below it."""
    repo_url = repo_url.rstrip("/")
    compare = "/-/compare/" if "gitlab" in repo_url else "/compare/"
    versions = changelog.versions

    links = []
    for i, v in enumerate(versions):
        if i + 1 >= len(versions) or versions[i + 1].is_unreleased:
            continue
        prev = _tag(versions[i + 1].version)
        if v.is_unreleased:
            links.append(f"[Unreleased]: {repo_url}{compare}{prev}...HEAD\n")
        else:
            links.append(f"[{v.version}]: {repo_url}{compare}{prev}...{_tag(v.version)}\n")
    return links


def _tag(version: str) -> str:
    return "v" + normalize_version(version)
