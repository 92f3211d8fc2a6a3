"""Changelog document handling: codec, validation, queries and lifecycle."""

from .codec import document_to_model, dump_version, dumps, loads, model_to_document
from .loader import load_changelog, parse_changelog, save_changelog
from .query import (
    all_entries,
    entry_count,
    get_latest_release,
    get_unreleased,
    get_version,
    last_n,
    normalize_version,
    version_count,
)
from .release import ensure_unreleased, release
from .scaffold import CommitRecord, parse_conventional_commit, scaffold
from .validation import ValidationError, validate

__all__ = [
    "CommitRecord",
    "ValidationError",
    "all_entries",
    "document_to_model",
    "dump_version",
    "dumps",
    "ensure_unreleased",
    "entry_count",
    "get_latest_release",
    "get_unreleased",
    "get_version",
    "last_n",
    "load_changelog",
    "loads",
    "model_to_document",
    "normalize_version",
    "parse_changelog",
    "parse_conventional_commit",
    "release",
    "save_changelog",
    "scaffold",
    "validate",
    "version_count",
]
