"""Data models for changelog documents."""

from __future__ import annotations

from dataclasses import dataclass, field

from .errors import CategoryNotFoundError, EntryNotFoundError, MultipleMatchError

# Identifier of the pending version, compared case-insensitively
UNRELEASED = "unreleased"

# Keep a Changelog categories, in canonical order
DEFAULT_CATEGORIES: tuple[str, ...] = (
    "added",
    "changed",
    "deprecated",
    "removed",
    "fixed",
    "security",
)


@dataclass
class Category:
    """A named bucket of entries within a Changes value."""

    name: str
    entries: list[str] = field(default_factory=list)


@dataclass
class Changes:
    """Ordered category buckets.

    Category order is insertion order and is written back to the document as
    is. A bucket never lingers empty after a removal.
    """

    categories: list[Category] = field(default_factory=list)

    def _index(self, category: str) -> int:
        for i, bucket in enumerate(self.categories):
            if bucket.name == category:
                return i
        return -1

    def names(self) -> list[str]:
        """Category names in stored order."""
        return [bucket.name for bucket in self.categories]

    def entries(self, category: str) -> list[str]:
        """Entries of a category (empty if the bucket does not exist)."""
        idx = self._index(category)
        if idx == -1:
            return []
        return list(self.categories[idx].entries)

    def count(self) -> int:
        return sum(len(bucket.entries) for bucket in self.categories)

    def is_empty(self) -> bool:
        return self.count() == 0

    def append(self, category: str, text: str) -> None:
        """Append an entry, creating the bucket at the end if needed.

        Text is not checked here; empty entries are reported by validation.
        """
        idx = self._index(category)
        if idx == -1:
            self.categories.append(Category(name=category, entries=[text]))
        else:
            self.categories[idx].entries.append(text)

    def remove(self, category: str, text: str, match: bool = False) -> str:
        """Remove one entry from a category and return its text.

        With ``match`` the text is a case-insensitive substring that must
        select exactly one entry; several candidates raise
        MultipleMatchError and leave the entries untouched.
        """
        idx = self._index(category)
        if idx == -1:
            raise CategoryNotFoundError(category)

        if not match:
            return self._remove_exact(idx, text)

        needle = text.lower()
        matches = [entry for entry in self.categories[idx].entries if needle in entry.lower()]
        if not matches:
            raise EntryNotFoundError(category, text)
        if len(matches) > 1:
            raise MultipleMatchError(category, text, matches)
        return self._remove_exact(idx, matches[0])

    def _remove_exact(self, idx: int, text: str) -> str:
        bucket = self.categories[idx]
        try:
            pos = bucket.entries.index(text)
        except ValueError:
            raise EntryNotFoundError(bucket.name, text) from None

        removed = bucket.entries.pop(pos)
        if not bucket.entries:
            del self.categories[idx]
        return removed

    def merge(self, other: Changes) -> None:
        """Append every entry of ``other`` after the existing ones."""
        for bucket in other.categories:
            for entry in bucket.entries:
                self.append(bucket.name, entry)

    def merged_with(self, other: Changes) -> Changes:
        """Return a new Changes holding these entries followed by ``other``'s."""
        merged = self.clone()
        merged.merge(other)
        return merged

    def clone(self) -> Changes:
        return Changes(categories=[Category(name=b.name, entries=list(b.entries)) for b in self.categories])


@dataclass
class Version:
    """A released version or the pending unreleased block."""

    version: str
    date: str = ""  # YYYY-MM-DD, empty for the unreleased block
    public: Changes = field(default_factory=Changes)
    internal: Changes = field(default_factory=Changes)

    @property
    def is_unreleased(self) -> bool:
        return self.version.lower() == UNRELEASED

    def count(self) -> int:
        """Total entries across public and internal changes."""
        return self.public.count() + self.internal.count()

    def is_empty(self) -> bool:
        return self.count() == 0

    def changes(self, include_internal: bool = False) -> Changes:
        """Public changes, or public merged with internal ones."""
        if include_internal:
            return self.public.merged_with(self.internal)
        return self.public


@dataclass
class Changelog:
    """Root of a changelog document. Versions are kept newest first."""

    project: str
    versions: list[Version] = field(default_factory=list)


@dataclass(frozen=True)
class Entry:
    """A single flattened entry with the category and version it came from."""

    text: str
    category: str
    version: str
