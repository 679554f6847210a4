# === FILE: web_scout/config.py ===
"""
Loading and validation of WebScout settings.

Pydantic describes the schema; files may be YAML or JSON. The ``SEARXNG_URL``
environment variable overrides the metasearch endpoint.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Dict, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; WebScout/0.1.0)"
DEFAULT_SEARXNG_URL = "http://localhost:8080"
SEARXNG_ENV = "SEARXNG_URL"


class CrawlSettings(BaseModel):
    """Defaults and hard limits for multi-page crawls."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    max_depth: int = Field(2, ge=0, description="Default link depth.")
    max_pages: int = Field(10, ge=1, description="Default page budget.")
    max_depth_limit: int = Field(5, ge=0, description="Callers are clamped to this depth.")
    max_pages_limit: int = Field(50, ge=1, description="Callers are clamped to this many pages.")
    same_domain: bool = Field(True, description="Stay on the seed's host by default.")
    timeout: float = Field(15.0, gt=0, description="Per-page timeout (seconds).")
    max_redirects: int = Field(3, ge=0, description="Redirects followed per page.")
    content_limit: int = Field(5000, ge=0, description="Characters kept per page.")
    frontier_factor: int = Field(2, ge=1, description="Frontier admission cap as a multiple of max_pages.")

    @model_validator(mode="after")
    def _defaults_within_limits(self) -> CrawlSettings:
        if self.max_depth > self.max_depth_limit:
            raise ValueError("max_depth exceeds max_depth_limit")
        if self.max_pages > self.max_pages_limit:
            raise ValueError("max_pages exceeds max_pages_limit")
        return self


class FetchSettings(BaseModel):
    """Single-page fetch profile."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    timeout: float = Field(30.0, gt=0)
    max_redirects: int = Field(10, ge=0)
    content_limit: int = Field(10_000, ge=0)


class SearchSettings(BaseModel):
    """SearXNG endpoint and result rendering."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    base_url: str = Field(DEFAULT_SEARXNG_URL, min_length=1)
    timeout: float = Field(30.0, gt=0)
    excerpt_length: int = Field(500, ge=1)

    @field_validator("base_url", mode="before")
    def _strip_trailing_slash(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.rstrip("/")
        return v


class Settings(BaseModel):
    """Top-level settings object passed through the whole program."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="User-Agent header.")
    crawl: CrawlSettings = Field(default_factory=CrawlSettings)
    fetch: FetchSettings = Field(default_factory=FetchSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def _apply_env(data: Dict[str, Any]) -> Dict[str, Any]:
    searxng = os.environ.get(SEARXNG_ENV)
    if searxng:
        search = dict(data.get("search") or {})
        search["base_url"] = searxng
        data = {**data, "search": search}
    return data


def load_config(path: Union[str, Path, None] = None) -> Settings:
    """
    Read YAML or JSON and return validated :class:`Settings`.

    With ``path=None`` the default ``configs/default.yaml`` is used when it
    exists, otherwise built-in defaults. An explicit missing path raises
    FileNotFoundError.
    """
    if path is None:
        data: Dict[str, Any] = _read_yaml(_DEFAULT_CFG) if _DEFAULT_CFG.is_file() else {}
        return Settings(**_apply_env(data))

    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Unsupported config format: {suffix}")

    return Settings(**_apply_env(data))


__all__ = [
    "CrawlSettings",
    "FetchSettings",
    "SearchSettings",
    "Settings",
    "load_config",
    "DEFAULT_SEARXNG_URL",
    "SEARXNG_ENV",
]
