"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from chlog.changelog.codec import loads
from chlog.config import Config
from chlog.models import Changelog

SAMPLE_YAML = """\
project: demo
versions:
  unreleased:
    added:
      - Dark mode
    internal:
      changed:
        - Refactor auth middleware
  1.1.0:
    date: "2024-03-01"
    fixed:
      - Fix login timeout
      - Fix login redirect
    added:
      - Export to CSV
  v1.0.0:
    date: 2024-01-15
    added:
      - Initial release
"""


@pytest.fixture
def sample_yaml() -> str:
    """A valid changelog document with public, internal and released entries."""
    return SAMPLE_YAML


@pytest.fixture
def sample_changelog(sample_yaml: str) -> Changelog:
    return loads(sample_yaml)


@pytest.fixture
def changelog_file(tmp_path: Path, sample_yaml: str) -> Path:
    """Sample changelog written to a temporary project directory."""
    path = tmp_path / "CHANGELOG.yaml"
    path.write_text(sample_yaml, encoding="utf-8")
    return path


@pytest.fixture
def cfg() -> Config:
    return Config()
