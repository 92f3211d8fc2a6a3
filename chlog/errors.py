"""Exceptions raised by changelog operations.

Every failure is a ChangelogError so the command layer can report it with a
single handler. Each class carries the context needed for a precise message.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .changelog.validation import ValidationError


class ChangelogError(Exception):
    """Base class for all chlog errors."""


class DecodeError(ChangelogError):
    """The YAML document is malformed or does not have the changelog shape."""


class ValidationFailed(ChangelogError):
    """A decoded changelog broke one or more validation rules."""

    def __init__(self, errors: list["ValidationError"]):
        self.errors = list(errors)
        lines = "\n  ".join(str(e) for e in self.errors)
        super().__init__(f"validation failed:\n  {lines}")


class VersionNotFoundError(ChangelogError):
    def __init__(self, version: str):
        self.version = version
        super().__init__(f'version "{version}" not found')


class CategoryNotFoundError(ChangelogError):
    def __init__(self, category: str):
        self.category = category
        super().__init__(f'category "{category}" not found')


class EntryNotFoundError(ChangelogError):
    def __init__(self, category: str, text: str):
        self.category = category
        self.text = text
        super().__init__(f'entry "{text}" not found in {category}')


class MultipleMatchError(ChangelogError):
    """A substring removal matched more than one entry.

    Nothing is removed; ``matches`` lists the candidate entries so the caller
    can ask for the exact text.
    """

    def __init__(self, category: str, text: str, matches: list[str]):
        self.category = category
        self.text = text
        self.matches = list(matches)
        super().__init__(f'multiple entries match "{text}" in {category}: {len(self.matches)} matches')


class ReleaseError(ChangelogError):
    """A release precondition was not met."""


class ConfigError(ChangelogError):
    """The config file could not be read or parsed."""
