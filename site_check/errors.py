# File: site_check/errors.py
"""site_check.errors: exceptions raised by checks and surfaced by the CLI."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:  # pragma: no cover
    from site_check.crawler.models import Failure

__all__ = ["SiteCheckError", "BrowserError", "ContentCheckError", "FailuresFoundError"]


class SiteCheckError(Exception):
    """Base class for every SiteCheck error."""


class BrowserError(SiteCheckError):
    """The browser engine could not be started."""


class ContentCheckError(SiteCheckError):
    """A page loaded but did not render meaningful content."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class FailuresFoundError(SiteCheckError):
    """Resource failures were recorded during a run."""

    def __init__(self, failures: Sequence["Failure"]) -> None:
        self.failures = list(failures)
        super().__init__(f"{len(self.failures)} resource failures found")
