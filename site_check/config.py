# === FILE: site_check/config.py ===
"""
Loading and validation of the SiteCheck configuration.
Pydantic describes the schema and checks the data.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Literal, Optional, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    ValidationError,
    field_validator,
)

from site_check.crawler.link_extractor import UrlScope, origin_of


class CheckerConfig(BaseModel):
    """Settings for one crawl or smoke run."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    start_url: HttpUrl = Field(..., description="Page the run starts from.")
    path_prefix: Optional[str] = Field(
        None, description="Only paths starting with this prefix are in scope (default: start URL path)."
    )

    # full crawl
    max_pages: int = Field(120, ge=1, description="Page ceiling for the crawl.")
    max_failures: int = Field(30, ge=1, description="Failure ceiling for the crawl.")
    page_timeout: float = Field(45.0, gt=0, description="Navigation timeout per page (seconds).")
    settle_delay: float = Field(1.5, ge=0, description="Wait after load for lazy resources (seconds).")
    report_cap: int = Field(200, ge=1, description="Max failures printed in the crawl dump.")

    # smoke check
    smoke_timeout: float = Field(60.0, gt=0, description="Navigation timeout for smoke pages (seconds).")
    smoke_settle_delay: float = Field(0.8, ge=0, description="Pause between smoke pages (seconds).")
    min_body_chars: int = Field(50, ge=0, description="Visible body text must be longer than this.")
    sample_links: int = Field(3, ge=0, description="Number of in-scope links sampled by the smoke check.")
    smoke_report_cap: int = Field(50, ge=1, description="Max failures printed by the smoke check.")

    # browser
    browser: Literal["chromium", "firefox", "webkit"] = Field("chromium", description="Playwright engine.")
    headless: bool = Field(True, description="Run the browser without a window.")
    user_agent: Optional[str] = Field(None, min_length=1, description="User-Agent override.")

    @field_validator("path_prefix")
    def _check_prefix(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.startswith("/"):
            raise ValueError("path_prefix must start with '/'")
        return v

    @property
    def origin(self) -> str:
        origin = origin_of(str(self.start_url))
        if origin is None:  # pragma: no cover - HttpUrl already guarantees it
            raise ValueError(f"start_url has no usable origin: {self.start_url}")
        return origin

    @property
    def scope(self) -> UrlScope:
        return UrlScope.from_url(str(self.start_url), self.path_prefix)


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


def load_config(path: Union[str, Path, None]) -> CheckerConfig:
    """
    Read YAML or JSON and return a validated CheckerConfig.
    Raises FileNotFoundError when the file is missing.
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

    return CheckerConfig(**data)


__all__ = ["CheckerConfig", "load_config", "ValidationError"]
