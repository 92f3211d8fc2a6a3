"""Project configuration read from ``.chlog.yaml``."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigError
from .models import DEFAULT_CATEGORIES

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = ".chlog.yaml"
DEFAULT_PUBLIC_FILE = "CHANGELOG.md"
DEFAULT_INTERNAL_FILE = "CHANGELOG-internal.md"


@dataclass
class Config:
    repo_url: str = ""
    include_internal: bool = False
    public_file: str = ""
    internal_file: str = ""
    categories: list[str] = field(default_factory=list)
    strict_categories: bool | None = None  # None = unset, strict by default

    def allowed_categories(self) -> list[str] | None:
        """Category allow-list for validation, or None when not strict."""
        if self.strict_categories is False:
            return None
        if self.categories:
            return list(self.categories)
        return list(DEFAULT_CATEGORIES)

    @property
    def public_file_path(self) -> str:
        return self.public_file or DEFAULT_PUBLIC_FILE

    @property
    def internal_file_path(self) -> str:
        return self.internal_file or DEFAULT_INTERNAL_FILE

    def to_dict(self) -> dict[str, Any]:
        """Only the keys that differ from their defaults."""
        data: dict[str, Any] = {}
        if self.repo_url:
            data["repo_url"] = self.repo_url
        if self.include_internal:
            data["include_internal"] = True
        if self.public_file:
            data["public_file"] = self.public_file
        if self.internal_file:
            data["internal_file"] = self.internal_file
        if self.categories:
            data["categories"] = list(self.categories)
        if self.strict_categories is not None:
            data["strict_categories"] = self.strict_categories
        return data


def _coerce_str(value: Any) -> str:
    return str(value).strip() if value is not None else ""


def load_config(path: Path) -> Config:
    """Read a config file. A missing file yields the default config."""
    if not path.exists():
        logger.debug("config %s not found, using defaults", path)
        return Config()

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"parsing config {path}: {exc}") from exc

    if data is None:
        return Config()
    if not isinstance(data, dict):
        raise ConfigError(f"parsing config {path}: expected a mapping")

    categories = data.get("categories") or []
    if isinstance(categories, str):
        categories = [categories]
    if not isinstance(categories, list):
        raise ConfigError(f"parsing config {path}: categories must be a list")

    include_internal = data.get("include_internal", False)
    if include_internal is None:
        include_internal = False
    if not isinstance(include_internal, bool):
        raise ConfigError(f"parsing config {path}: include_internal must be true or false")

    strict = data.get("strict_categories")
    if strict is not None and not isinstance(strict, bool):
        raise ConfigError(f"parsing config {path}: strict_categories must be true or false")

    cfg = Config(
        repo_url=_coerce_str(data.get("repo_url")),
        include_internal=include_internal,
        public_file=_coerce_str(data.get("public_file")),
        internal_file=_coerce_str(data.get("internal_file")),
        categories=[_coerce_str(c).lower() for c in categories if _coerce_str(c)],
        strict_categories=strict,
    )
    logger.debug("loaded config from %s: %s", path, cfg)
    return cfg


def save_config(cfg: Config, path: Path) -> None:
    text = yaml.safe_dump(cfg.to_dict(), sort_keys=False, allow_unicode=True)
    path.write_text(text, encoding="utf-8")
