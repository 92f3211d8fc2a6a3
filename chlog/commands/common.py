"""Helpers shared by command implementations."""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from ..changelog.loader import load_changelog, save_changelog
from ..config import Config
from ..errors import ChangelogError
from ..models import Changelog
from ..terminal import CATEGORY_STYLES

logger = logging.getLogger(__name__)


def open_changelog(path: Path, cfg: Config) -> Changelog:
    """Load and validate the changelog using the configured category allow-list."""
    try:
        changelog = load_changelog(path, cfg.allowed_categories())
    except FileNotFoundError as exc:
        raise ChangelogError(f"{path} not found - run 'chlog init' first") from exc
    except OSError as exc:
        raise ChangelogError(f"opening changelog: {exc}") from exc
    logger.debug("loaded %s: %d versions", path, len(changelog.versions))
    return changelog


def write_changelog(changelog: Changelog, path: Path) -> None:
    try:
        save_changelog(changelog, path)
    except OSError as exc:
        raise ChangelogError(f"saving {path}: {exc}") from exc
    logger.debug("saved %s", path)


def report_error(message: object) -> None:
    Console(stderr=True).print(f"Error: {escape(str(message))}", style="bold red", soft_wrap=True)


def success(message: str) -> None:
    Console().print(message, style="green", soft_wrap=True)


def warn(message: str) -> None:
    Console().print(message, style="yellow", soft_wrap=True)


def version_ref(version: str) -> str:
    return f"[bold magenta]{escape(version)}[/]"


def category_ref(category: str) -> str:
    if category not in CATEGORY_STYLES:
        return escape(category)
    _, style = CATEGORY_STYLES[category]
    return f"[{style}]{escape(category)}[/]"


def file_ref(path: Path | str) -> str:
    return f"[cyan]{escape(str(path))}[/]"


def plural_entries(n: int) -> str:
    return "entry" if n == 1 else "entries"
