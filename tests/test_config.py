"""Tests for .chlog.yaml loading and saving."""

from pathlib import Path

import pytest

from chlog.config import Config, load_config, save_config
from chlog.errors import ConfigError
from chlog.models import DEFAULT_CATEGORIES


def test_missing_file_gives_defaults(tmp_path: Path):
    cfg = load_config(tmp_path / ".chlog.yaml")
    assert cfg == Config()
    assert cfg.public_file_path == "CHANGELOG.md"
    assert cfg.internal_file_path == "CHANGELOG-internal.md"
    assert cfg.allowed_categories() == list(DEFAULT_CATEGORIES)


def test_empty_file_gives_defaults(tmp_path: Path):
    path = tmp_path / ".chlog.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == Config()


def test_load_all_fields(tmp_path: Path):
    path = tmp_path / ".chlog.yaml"
    path.write_text(
        "repo_url: https://github.com/acme/app\n"
        "include_internal: true\n"
        "public_file: docs/CHANGES.md\n"
        "internal_file: docs/INTERNAL.md\n"
        "categories: [Added, performance]\n"
        "strict_categories: true\n",
        encoding="utf-8",
    )

    cfg = load_config(path)

    assert cfg.repo_url == "https://github.com/acme/app"
    assert cfg.include_internal
    assert cfg.public_file_path == "docs/CHANGES.md"
    assert cfg.internal_file_path == "docs/INTERNAL.md"
    assert cfg.allowed_categories() == ["added", "performance"]


def test_non_strict_disables_allow_list():
    assert Config(strict_categories=False, categories=["x"]).allowed_categories() is None


@pytest.mark.parametrize(
    "text, message",
    [
        ("- a\n- b\n", "expected a mapping"),
        ("categories: 3\n", "categories must be a list"),
        ("strict_categories: maybe\n", "strict_categories must be true or false"),
        ("include_internal: \"false\"\n", "include_internal must be true or false"),
        ("repo_url: [unclosed\n", "parsing config"),
    ],
)
def test_invalid_config(tmp_path: Path, text: str, message: str):
    path = tmp_path / ".chlog.yaml"
    path.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError, match=message):
        load_config(path)


def test_save_writes_only_non_defaults(tmp_path: Path):
    path = tmp_path / ".chlog.yaml"
    save_config(Config(repo_url="https://gitlab.com/acme/app"), path)

    assert path.read_text(encoding="utf-8") == "repo_url: https://gitlab.com/acme/app\n"
    assert load_config(path).repo_url == "https://gitlab.com/acme/app"


def test_save_default_config_round_trips(tmp_path: Path):
    path = tmp_path / ".chlog.yaml"
    cfg = Config(categories=["added", "fixed"], strict_categories=False)
    save_config(cfg, path)
    assert load_config(path) == cfg
