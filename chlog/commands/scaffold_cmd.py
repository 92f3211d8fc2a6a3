"""Scaffold command - draft entries from conventional commits since the last tag."""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path

from ..changelog.codec import dump_version
from ..changelog.query import get_version
from ..changelog.scaffold import scaffold
from ..config import Config
from ..errors import ChangelogError, VersionNotFoundError
from ..git import git_log, latest_tag
from ..models import Changelog, Version
from .common import file_ref, open_changelog, report_error, success, version_ref, warn, write_changelog

logger = logging.getLogger(__name__)


def run_scaffold(changelog_path: Path, cfg: Config, *, write: bool = False, version: str = "") -> int:
    """Classify commits since the latest tag into changelog entries.

    Without ``write`` the drafted version is printed as YAML; with it the
    entries are merged into the changelog file.
    """
    since = latest_tag()
    logger.debug("scaffolding commits since %s", since or "the first commit")
    commits = git_log(since)
    if not commits:
        warn("No commits found")
        return 0

    drafted = scaffold(commits, version)
    if drafted.is_empty():
        warn("No conventional commits found")
        return 0

    if not write:
        print(dump_version(drafted), end="")
        return 0

    try:
        changelog = open_changelog(changelog_path, cfg)
        target = merge_scaffold(changelog, drafted)
        write_changelog(changelog, changelog_path)
    except ChangelogError as exc:
        report_error(exc)
        return 1

    success(f"Updated {file_ref(changelog_path)} with {drafted.count()} entries in {version_ref(target.version)}")
    return 0


def merge_scaffold(changelog: Changelog, drafted: Version) -> Version:
    """Fold a drafted version into the changelog and return the version it landed in.

    Entries merge into an existing version with the same identifier. A new
    released version is prepended with today's date.
    """
    try:
        existing = get_version(changelog, drafted.version)
    except VersionNotFoundError:
        if not drafted.is_unreleased and not drafted.date:
            drafted.date = date.today().isoformat()
        changelog.versions.insert(0, drafted)
        return drafted

    existing.public.merge(drafted.public)
    existing.internal.merge(drafted.internal)
    return existing
