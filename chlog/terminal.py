"""Terminal formatting for ``chlog show``."""

from __future__ import annotations

import textwrap

from rich.text import Text

from .models import Changelog, Version
from .render import title_case, version_heading

# category -> (icon, rich style)
CATEGORY_STYLES: dict[str, tuple[str, str]] = {
    "added": ("+", "green"),
    "changed": ("~", "yellow"),
    "deprecated": ("!", "yellow"),
    "removed": ("-", "red"),
    "fixed": ("x", "cyan"),
    "security": ("🔒", "magenta"),
}

DEFAULT_STYLE = ("*", "default")

ENTRY_INDENT = "    - "


def format_changelog(
    changelog: Changelog,
    include_internal: bool = False,
    width: int = 80,
    styles: dict[str, tuple[str, str]] | None = None,
) -> Text:
    text = Text()
    text.append(f"{changelog.project} Changelog", style="bold")
    text.append("\n\n")
    for i, version in enumerate(changelog.versions):
        if i:
            text.append("\n")
        text.append_text(format_version(version, include_internal, width, styles))
    return text


def format_version(
    version: Version,
    include_internal: bool = False,
    width: int = 80,
    styles: dict[str, tuple[str, str]] | None = None,
) -> Text:
    """Heading, then one icon-prefixed section per category in stored order."""
    styles = CATEGORY_STYLES if styles is None else styles
    text = Text()
    text.append(version_heading(version), style="bold")
    text.append("\n")

    for bucket in version.changes(include_internal).categories:
        if not bucket.entries:
            continue
        icon, style = styles.get(bucket.name, DEFAULT_STYLE)
        text.append(f"  {icon} {title_case(bucket.name)}", style=style)
        text.append("\n")
        for entry in bucket.entries:
            text.append(ENTRY_INDENT + wrap_entry(entry, width - len(ENTRY_INDENT)))
            text.append("\n")
    return text


def wrap_entry(entry: str, width: int) -> str:
    """Wrap at word boundaries, indenting continuation lines under the text."""
    if width <= 0 or len(entry) <= width:
        return entry
    return textwrap.fill(entry, width=width, subsequent_indent=" " * len(ENTRY_INDENT))
