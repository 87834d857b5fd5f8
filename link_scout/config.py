"""
Loading and validation of the LinkScout crawler configuration.
Pydantic describes the schema and checks the values.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, List, Literal, Optional, Union
from urllib.parse import urlsplit

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    field_validator,
    model_validator,
)

DEFAULT_BLOCKED_EXTENSIONS: tuple[str, ...] = (".pdf", ".zip", ".doc")
DEFAULT_NOT_FOUND_PHRASES: tuple[str, ...] = ("404", "page not found", "not found")


class CrawlerConfig(BaseModel):
    """Configuration of a single crawl run."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    start_url: HttpUrl = Field(..., description="Entry point; also defines the crawled origin.")
    concurrency: int = Field(10, ge=1, description="Maximum simultaneous crawl attempts per batch.")
    pool_size: int = Field(15, ge=1, description="Number of reusable page fetchers.")
    navigation_timeout: float = Field(20.0, gt=0, description="Timeout for one navigation (seconds).")
    wait_until: Literal["commit", "domcontentloaded", "load", "networkidle"] = Field(
        "domcontentloaded", description="Readiness policy for browser navigation."
    )
    blocked_extensions: List[str] = Field(
        default_factory=lambda: list(DEFAULT_BLOCKED_EXTENSIONS),
        description="Requests ending with these extensions are aborted.",
    )
    not_found_phrases: List[str] = Field(
        default_factory=lambda: list(DEFAULT_NOT_FOUND_PHRASES),
        description="Visible-text markers of a rendered not-found page.",
    )
    backend: Literal["playwright", "http"] = Field("playwright", description="Page fetcher backend.")
    headless: bool = Field(True, description="Run the browser without a window.")
    browser_args: List[str] = Field(
        default_factory=lambda: ["--no-sandbox", "--disable-setuid-sandbox"],
        description="Extra Chromium command-line switches.",
    )
    user_agent: Optional[str] = Field(None, min_length=1, description="User-Agent override.")
    report_path: Path = Field(Path("errores_404.csv"), description="CSV report destination.")

    @field_validator("blocked_extensions", mode="after")
    def _normalize_extensions(cls, v: List[str]) -> List[str]:
        normalized = []
        for ext in v:
            ext = ext.strip().lower()
            if not ext:
                continue
            normalized.append(ext if ext.startswith(".") else f".{ext}")
        return normalized

    @field_validator("not_found_phrases", mode="after")
    def _lower_phrases(cls, v: List[str]) -> List[str]:
        phrases = [p.lower() for p in v if p.strip()]
        if not phrases:
            raise ValueError("not_found_phrases must contain at least one phrase")
        return phrases

    @model_validator(mode="after")
    def _check_pool_covers_concurrency(self) -> CrawlerConfig:
        # attempts above pool_size would wait forever for a fetcher
        if self.pool_size < self.concurrency:
            raise ValueError(
                f"pool_size ({self.pool_size}) must be >= concurrency ({self.concurrency})"
            )
        return self

    @property
    def origin(self) -> str:
        """``scheme://host[:port]`` of the start URL."""
        parts = urlsplit(str(self.start_url))
        return f"{parts.scheme}://{parts.netloc}"

    def with_overrides(self, **overrides: Any) -> CrawlerConfig:
        """Return a re-validated copy with the non-``None`` overrides applied."""
        data = self.model_dump(mode="json")
        data.update({k: v for k, v in overrides.items() if v is not None})
        return CrawlerConfig(**data)


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


def load_config(path: Union[str, Path, None]) -> CrawlerConfig:
    """
    Read a YAML or JSON file and return a validated CrawlerConfig.
    Raises FileNotFoundError when the file (or the default one) is missing.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(_DEFAULT_CFG))
        path_obj = _DEFAULT_CFG
    else:
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

    return CrawlerConfig(**data)


__all__ = ["CrawlerConfig", "load_config", "DEFAULT_BLOCKED_EXTENSIONS", "DEFAULT_NOT_FOUND_PHRASES"]
