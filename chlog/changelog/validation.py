"""Validation rules for decoded changelogs."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from ..models import DEFAULT_CATEGORIES, UNRELEASED, Changelog, Changes
from .query import normalize_version

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@dataclass(frozen=True)
class ValidationError:
    """A single rule violation, located by field path."""

    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


def validate(
    changelog: Changelog,
    allowed_categories: Sequence[str] | None = DEFAULT_CATEGORIES,
) -> list[ValidationError]:
    """Check a changelog for structural and semantic errors.

    Every violation found is returned; nothing is raised and the changelog is
    not modified. Pass ``allowed_categories=None`` to accept any category
    name.
    """
    errors: list[ValidationError] = []

    if not changelog.project.strip():
        errors.append(ValidationError("project", "must not be empty"))

    allowed = set(allowed_categories) if allowed_categories is not None else None
    seen: set[str] = set()
    unreleased_count = 0

    for i, version in enumerate(changelog.versions):
        prefix = f"versions[{i}]"

        if not version.version.strip():
            errors.append(ValidationError(f"{prefix}.version", "must not be empty"))
            continue

        # A repeated unreleased block is reported once, as such, not as a duplicate
        normalized = normalize_version(version.version)
        if normalized == UNRELEASED:
            unreleased_count += 1
            if unreleased_count > 1:
                errors.append(ValidationError(f"{prefix}.version", "only one unreleased version allowed"))
        elif normalized in seen:
            errors.append(ValidationError(f"{prefix}.version", f'duplicate version "{version.version}"'))
        seen.add(normalized)

        if not version.is_unreleased:
            if not version.date:
                errors.append(ValidationError(f"{prefix}.date", "date required for released versions"))
            elif not DATE_PATTERN.fullmatch(version.date):
                errors.append(
                    ValidationError(
                        f"{prefix}.date",
                        f'invalid date format "{version.date}", expected YYYY-MM-DD',
                    )
                )
            if version.is_empty():
                errors.append(ValidationError(f"{prefix}.changes", "must have at least one entry"))

        errors.extend(_check_changes(version.public, f"{prefix}.changes", allowed))
        errors.extend(_check_changes(version.internal, f"{prefix}.internal", allowed))

    return errors


def _check_changes(changes: Changes, prefix: str, allowed: set[str] | None) -> list[ValidationError]:
    errors = []
    for bucket in changes.categories:
        if allowed is not None and bucket.name not in allowed:
            errors.append(ValidationError(f"{prefix}.{bucket.name}", f'unknown category "{bucket.name}"'))
        for j, entry in enumerate(bucket.entries):
            if not entry.strip():
                errors.append(ValidationError(f"{prefix}.{bucket.name}[{j}]", "entry must not be empty"))
    return errors
