"""Load and save changelog files."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from ..errors import DecodeError, ValidationFailed
from ..models import DEFAULT_CATEGORIES, Changelog
from .codec import dumps, loads
from .validation import validate


def parse_changelog(
    text: str,
    allowed_categories: Sequence[str] | None = DEFAULT_CATEGORIES,
) -> Changelog:
    """Decode and validate YAML text.

    Raises:
        DecodeError: the document is malformed
        ValidationFailed: the document decoded but broke one or more rules
    """
    changelog = loads(text)
    errors = validate(changelog, allowed_categories)
    if errors:
        raise ValidationFailed(errors)
    return changelog


def load_changelog(
    path: Path,
    allowed_categories: Sequence[str] | None = DEFAULT_CATEGORIES,
) -> Changelog:
    """Read, decode and validate a changelog file.

    A missing file raises FileNotFoundError so callers can suggest ``init``.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError(f"decoding YAML: {exc}") from exc
    return parse_changelog(text, allowed_categories)


def save_changelog(changelog: Changelog, path: Path) -> None:
    path.write_text(dumps(changelog), encoding="utf-8")
