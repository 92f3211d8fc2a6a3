"""Read-only display commands: show and extract."""

from __future__ import annotations

from pathlib import Path

from rich.console import Console

from ..changelog.query import get_version, last_n
from ..config import Config
from ..errors import ChangelogError
from ..render import render_version_markdown
from ..terminal import format_changelog, format_version
from .common import open_changelog, report_error


def run_show(
    changelog_path: Path,
    cfg: Config,
    version: str | None = None,
    *,
    last: int = 0,
    plain: bool = False,
    internal: bool = False,
) -> int:
    """Print the changelog, a single version, or the last N entries.

    Returns:
        Exit code (0 = success, 1 = load error or version not found)
    """
    include_internal = internal or cfg.include_internal
    try:
        changelog = open_changelog(changelog_path, cfg)
        target = get_version(changelog, version) if version else None
    except ChangelogError as exc:
        report_error(exc)
        return 1

    if target is None and last > 0:
        for entry in last_n(changelog, last, include_internal):
            print(f"[{entry.version}] {entry.category}: {entry.text}")
        return 0

    if target is not None:
        text = format_version(target, include_internal)
    else:
        text = format_changelog(changelog, include_internal)

    if plain:
        print(text.plain, end="")
    else:
        Console().print(text, end="", soft_wrap=True)
    return 0


def run_extract(changelog_path: Path, cfg: Config, version: str, *, internal: bool = False) -> int:
    """Print one version as markdown, e.g. for release notes."""
    try:
        changelog = open_changelog(changelog_path, cfg)
        target = get_version(changelog, version)
    except ChangelogError as exc:
        report_error(exc)
        return 1

    print(render_version_markdown(target, internal or cfg.include_internal), end="")
    return 0
