"""Scaffold changelog entries from conventional commit subjects.

Maps ``type(scope)!: description`` subjects to a changelog category and
audience:

- feat -> added, fix -> fixed, deprecate -> deprecated, remove -> removed
- refactor / perf -> changed, internal by default
- chore, docs, style, test, ci, build -> skipped
- a ``!`` marker forces a public "changed" entry prefixed "BREAKING: "
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from ..models import UNRELEASED, Version

CONVENTIONAL_PATTERN = re.compile(r"^(\w+)(?:\([\w-]+\))?(!)?\s*:\s*(.+)$")

COMMIT_TYPE_CATEGORIES = {
    "feat": "added",
    "fix": "fixed",
    "refactor": "changed",
    "perf": "changed",
    "deprecate": "deprecated",
    "remove": "removed",
}

INTERNAL_TYPES = frozenset({"refactor", "perf"})

SKIPPED_TYPES = frozenset({"chore", "docs", "style", "test", "ci", "build"})

BREAKING_PREFIX = "BREAKING: "


@dataclass(frozen=True)
class CommitRecord:
    """A commit as reported by the git log collaborator."""

    hash: str
    subject: str


@dataclass(frozen=True)
class ConventionalCommit:
    """Classification of a single commit subject."""

    category: str
    description: str
    breaking: bool = False
    internal: bool = False


def parse_conventional_commit(subject: str) -> ConventionalCommit | None:
    """Classify a commit subject, or return None if it has no changelog value."""
    m = CONVENTIONAL_PATTERN.match(subject)
    if not m:
        return None

    commit_type = m.group(1).lower()
    breaking = m.group(2) == "!"
    description = clean_description(m.group(3))

    if commit_type in SKIPPED_TYPES and not breaking:
        return None

    category = COMMIT_TYPE_CATEGORIES.get(commit_type)
    if category is None and not breaking:
        return None

    if not description:
        return None

    if breaking:
        return ConventionalCommit(
            category="changed",
            description=BREAKING_PREFIX + description,
            breaking=True,
            internal=False,
        )

    return ConventionalCommit(
        category=category,
        description=description,
        internal=commit_type in INTERNAL_TYPES,
    )


def clean_description(text: str) -> str:
    """Keep the first sentence, trimmed, with its first letter capitalized."""
    s = text.strip()
    for i, ch in enumerate(s):
        if ch in ".!?":
            s = s[:i]
            break
    s = s.strip()
    if s:
        s = s[0].upper() + s[1:]
    return s


def scaffold(commits: Iterable[CommitRecord], version: str = UNRELEASED) -> Version:
    """Build a Version from commits, in the order given.

    The result is not attached to any changelog; merging it is up to the
    caller.
    """
    result = Version(version=version or UNRELEASED)
    for commit in commits:
        parsed = parse_conventional_commit(commit.subject)
        if parsed is None:
            continue
        target = result.internal if parsed.internal else result.public
        target.append(parsed.category, parsed.description)
    return result
