"""Commands that create or modify CHANGELOG.yaml: init, add, remove, release."""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path

from rich.markup import escape

from ..changelog.codec import RESERVED_VERSION_KEYS
from ..changelog.query import get_version, normalize_version
from ..changelog.release import ensure_unreleased, release
from ..changelog.validation import DATE_PATTERN
from ..config import Config, save_config
from ..errors import ChangelogError, MultipleMatchError
from ..git import detect_repo_url
from ..models import UNRELEASED, Changelog, Version
from .common import (
    category_ref,
    file_ref,
    open_changelog,
    plural_entries,
    report_error,
    success,
    version_ref,
    write_changelog,
)

logger = logging.getLogger(__name__)

INITIAL_ENTRY = "Initial project setup"


def run_init(changelog_path: Path, config_path: Path, project: str) -> int:
    """Create a starter changelog and, unless present, a config file.

    Returns:
        Exit code (0 = created, 1 = changelog already exists or write failed)
    """
    if changelog_path.exists():
        report_error(f"{changelog_path} already exists")
        return 1

    changelog = Changelog(project=project, versions=[Version(version=UNRELEASED)])
    changelog.versions[0].public.append("added", INITIAL_ENTRY)

    try:
        write_changelog(changelog, changelog_path)
    except ChangelogError as exc:
        report_error(exc)
        return 1
    success(f"Created {file_ref(changelog_path)} for project \"{escape(project)}\"")

    if config_path.exists():
        success(f"{file_ref(config_path)} already exists, skipping config creation")
        return 0

    cfg = Config()
    repo_url = detect_repo_url()
    if repo_url:
        cfg.repo_url = repo_url
        success(f"Detected repo URL: {escape(repo_url)}")

    try:
        save_config(cfg, config_path)
    except OSError as exc:
        report_error(f"creating {config_path}: {exc}")
        return 1
    success(f"Created {file_ref(config_path)}")
    return 0


def run_add(
    changelog_path: Path,
    cfg: Config,
    category: str,
    entries: list[str],
    *,
    version: str = UNRELEASED,
    internal: bool = False,
) -> int:
    """Append entries to a category of the unreleased block or an existing version."""
    category = category.strip().lower()
    try:
        check_category(category, cfg)
        if any(not text.strip() for text in entries):
            raise ChangelogError("entry text must not be empty")

        changelog = open_changelog(changelog_path, cfg)
        target = resolve_version_for_add(changelog, version)

        changes = target.internal if internal else target.public
        for text in entries:
            changes.append(category, text)

        write_changelog(changelog, changelog_path)
    except ChangelogError as exc:
        report_error(exc)
        return 1

    label = "internal" if internal else "public"
    success(
        f"Added {len(entries)} {label} {category_ref(category)} {plural_entries(len(entries))}"
        f" to {version_ref(target.version)}"
    )
    return 0


def run_remove(
    changelog_path: Path,
    cfg: Config,
    text: str,
    *,
    category: str,
    version: str = UNRELEASED,
    internal: bool = False,
    match: bool = False,
) -> int:
    """Remove one entry, by exact text or by unique case-insensitive substring."""
    category = category.strip().lower()
    try:
        if not text.strip():
            raise ChangelogError("entry text must not be empty")

        changelog = open_changelog(changelog_path, cfg)
        target = get_version(changelog, version)
        changes = target.internal if internal else target.public
        removed = changes.remove(category, text, match=match)

        write_changelog(changelog, changelog_path)
    except MultipleMatchError as exc:
        report_error(format_multiple_match(exc))
        return 1
    except ChangelogError as exc:
        report_error(exc)
        return 1

    label = "internal" if internal else "public"
    success(
        f"Removed {label} {category_ref(category)} entry from {version_ref(target.version)}: {escape(removed)}"
    )
    return 0


def run_release(changelog_path: Path, cfg: Config, version: str, release_date: str | None = None) -> int:
    """Promote the unreleased block to ``version`` dated ``release_date`` (default today)."""
    release_date = release_date or date.today().isoformat()
    try:
        if not version.strip():
            raise ChangelogError("version must not be empty")
        if not DATE_PATTERN.fullmatch(release_date):
            raise ChangelogError(f'invalid date format "{release_date}", expected YYYY-MM-DD')

        changelog = open_changelog(changelog_path, cfg)
        release(changelog, version, release_date)
        write_changelog(changelog, changelog_path)
    except ChangelogError as exc:
        report_error(exc)
        return 1

    logger.info("released %s on %s", version, release_date)
    success(f"Released {version_ref(version)} ({release_date}) - unreleased block reset")
    return 0


def check_category(category: str, cfg: Config) -> None:
    """Reject reserved keys and, in strict mode, categories outside the allow-list."""
    if category in RESERVED_VERSION_KEYS:
        raise ChangelogError(f'"{category}" is a reserved key and cannot be used as a category')
    allowed = cfg.allowed_categories()
    if allowed is not None and category not in allowed:
        raise ChangelogError(f'unknown category "{category}" (allowed: {", ".join(allowed)})')


def resolve_version_for_add(changelog: Changelog, version: str) -> Version:
    """The unreleased block (created if missing) or an existing version."""
    if normalize_version(version) == UNRELEASED:
        return ensure_unreleased(changelog)
    try:
        return get_version(changelog, version)
    except ChangelogError as exc:
        raise ChangelogError(f'version "{version}" not found - can only add to existing versions') from exc


def format_multiple_match(exc: MultipleMatchError) -> str:
    lines = [f'multiple entries match "{exc.text}" in {exc.category}:']
    lines.extend(f"  - {m}" for m in exc.matches)
    lines.append("use exact text to remove a specific entry")
    return "\n".join(lines)
