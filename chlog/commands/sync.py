"""Markdown generation and verification: sync, check, validate."""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console

from ..config import Config
from ..errors import ChangelogError
from ..git import detect_repo_url
from ..models import Changelog
from ..render import render_markdown
from .common import file_ref, open_changelog, report_error, success

logger = logging.getLogger(__name__)

# check exit codes
IN_SYNC = 0
OUT_OF_SYNC = 1
LOAD_FAILED = 2


def markdown_targets(changelog_path: Path, cfg: Config, internal: bool, split: bool) -> list[tuple[Path, bool]]:
    """(output path, include internal) pairs, relative to the changelog's directory."""
    base = changelog_path.parent
    if split:
        return [(base / cfg.public_file_path, False), (base / cfg.internal_file_path, True)]
    return [(base / cfg.public_file_path, internal or cfg.include_internal)]


def resolve_repo_url(cfg: Config) -> str | None:
    """Configured repo URL, falling back to the git remote."""
    return cfg.repo_url or detect_repo_url()


def run_sync(changelog_path: Path, cfg: Config, *, internal: bool = False, split: bool = False) -> int:
    """Write CHANGELOG.md (and the internal file with ``split``) from the YAML."""
    try:
        changelog = open_changelog(changelog_path, cfg)
        repo_url = resolve_repo_url(cfg)
        for path, include_internal in markdown_targets(changelog_path, cfg, internal, split):
            _sync_file(changelog, path, include_internal, repo_url)
    except ChangelogError as exc:
        report_error(exc)
        return 1
    return 0


def _sync_file(changelog: Changelog, path: Path, include_internal: bool, repo_url: str | None) -> None:
    rendered = render_markdown(changelog, include_internal, repo_url)
    if path.exists() and path.read_text(encoding="utf-8") == rendered:
        success(f"{file_ref(path)} is up to date")
        return

    try:
        path.write_text(rendered, encoding="utf-8")
    except OSError as exc:
        raise ChangelogError(f"writing {path}: {exc}") from exc
    logger.debug("wrote %d bytes to %s", len(rendered), path)
    success(f"Generated {file_ref(path)}")


def run_check(changelog_path: Path, cfg: Config, *, internal: bool = False, split: bool = False) -> int:
    """Verify the markdown files match what sync would write.

    Returns:
        0 = in sync, 1 = out of sync or missing, 2 = the YAML failed to load
    """
    console = Console(stderr=True)
    try:
        changelog = open_changelog(changelog_path, cfg)
    except ChangelogError as exc:
        report_error(f"validation error: {exc}")
        return LOAD_FAILED

    repo_url = resolve_repo_url(cfg)
    for path, include_internal in markdown_targets(changelog_path, cfg, internal, split):
        if not path.exists():
            console.print(f"{path} not found - run 'chlog sync' first", style="yellow", markup=False)
            return OUT_OF_SYNC
        rendered = render_markdown(changelog, include_internal, repo_url)
        if path.read_text(encoding="utf-8") != rendered:
            console.print(f"{path} is out of sync - run 'chlog sync'", style="yellow", markup=False)
            return OUT_OF_SYNC
        success(f"{file_ref(path)} is in sync")
    return IN_SYNC


def run_validate(changelog_path: Path, cfg: Config) -> int:
    """Decode and validate the YAML, reporting every violation found."""
    try:
        open_changelog(changelog_path, cfg)
    except ChangelogError as exc:
        report_error(exc)
        return 1
    success(f"{file_ref(changelog_path)} is valid")
    return 0
