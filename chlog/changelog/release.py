"""Release lifecycle: promote the unreleased block to a dated version."""

from __future__ import annotations

from ..errors import ReleaseError, VersionNotFoundError
from ..models import UNRELEASED, Changelog, Version
from .query import get_unreleased, get_version


def release(changelog: Changelog, version: str, date: str) -> Version:
    """Stamp the unreleased block as ``version``/``date`` and start a new one.

    The promoted block keeps its entries and its position; a fresh, empty
    unreleased block is inserted at the front. Returns the promoted version.
    """
    unreleased = get_unreleased(changelog)
    if unreleased is None:
        raise ReleaseError("no unreleased version found")

    if unreleased.is_empty():
        raise ReleaseError("unreleased version has no entries")

    try:
        get_version(changelog, version)
    except VersionNotFoundError:
        pass
    else:
        raise ReleaseError(f'version "{version}" already exists')

    unreleased.version = version
    unreleased.date = date

    changelog.versions.insert(0, Version(version=UNRELEASED))
    return unreleased


def ensure_unreleased(changelog: Changelog) -> Version:
    """Return the unreleased block, creating an empty one at the front if missing."""
    unreleased = get_unreleased(changelog)
    if unreleased is None:
        unreleased = Version(version=UNRELEASED)
        changelog.versions.insert(0, unreleased)
    return unreleased
