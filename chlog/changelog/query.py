"""Read-only lookups over a changelog.

Versions are never sorted here: "latest" means first in document order,
which is newest first by convention.
"""

from __future__ import annotations

from ..errors import VersionNotFoundError
from ..models import Changelog, Entry, Version


def normalize_version(version: str) -> str:
    """Lowercase and strip one leading "v" (``V1.0.0`` -> ``1.0.0``)."""
    v = version.lower()
    return v[1:] if v.startswith("v") else v


def get_version(changelog: Changelog, version: str) -> Version:
    """Find a version by identifier, ignoring case and a "v" prefix."""
    normalized = normalize_version(version)
    for v in changelog.versions:
        if normalize_version(v.version) == normalized:
            return v
    raise VersionNotFoundError(version)


def get_unreleased(changelog: Changelog) -> Version | None:
    for v in changelog.versions:
        if v.is_unreleased:
            return v
    return None


def has_unreleased(changelog: Changelog) -> bool:
    return get_unreleased(changelog) is not None


def get_latest_release(changelog: Changelog) -> Version | None:
    """First released (non-unreleased) version in document order."""
    for v in changelog.versions:
        if not v.is_unreleased:
            return v
    return None


def list_versions(changelog: Changelog) -> list[str]:
    return [v.version for v in changelog.versions]


def flatten_version(version: Version, include_internal: bool = False) -> list[Entry]:
    """Entries of one version in stored category and entry order."""
    changes = version.changes(include_internal)
    return [
        Entry(text=text, category=bucket.name, version=version.version)
        for bucket in changes.categories
        for text in bucket.entries
    ]


def all_entries(changelog: Changelog, include_internal: bool = False) -> list[Entry]:
    """All entries across versions, in document order."""
    entries: list[Entry] = []
    for v in changelog.versions:
        entries.extend(flatten_version(v, include_internal))
    return entries


def last_n(changelog: Changelog, n: int, include_internal: bool = False) -> list[Entry]:
    """The first ``n`` entries of ``all_entries`` (the most recent ones)."""
    return all_entries(changelog, include_internal)[:n]


def version_count(changelog: Changelog) -> int:
    return len(changelog.versions)


def entry_count(changelog: Changelog, include_internal: bool = False) -> int:
    return sum(v.changes(include_internal).count() for v in changelog.versions)
