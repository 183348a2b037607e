# site_check/crawler/models.py
"""
Data models for the SiteCheck crawler and smoke check.
"""
from __future__ import annotations

import enum
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from site_check.errors import FailuresFoundError


class FailureKind(str, enum.Enum):
    HTTP_ERROR = "http-error"
    REQUEST_FAILED = "request-failed"
    TIMEOUT = "timeout"


class StopReason(str, enum.Enum):
    """Why the crawl loop stopped."""

    EXHAUSTED = "exhausted"
    PAGE_LIMIT = "page-limit"
    FAILURE_LIMIT = "failure-limit"


@dataclass(frozen=True, slots=True)
class Failure:
    """One failed navigation, network request or error response, keyed to the page being checked."""

    page_url: str
    resource_url: str
    kind: FailureKind
    status: Optional[int] = None
    resource_type: Optional[str] = None
    error_text: Optional[str] = None

    @property
    def label(self) -> str:
        if self.kind is FailureKind.REQUEST_FAILED:
            return f"{self.kind.value}:{self.error_text or ''}"
        return self.kind.value

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["kind"] = self.kind.value
        return data

    def format(self) -> str:
        status = "" if self.status is None else self.status
        return (
            f"- [{self.kind.value}] page={self.page_url}\n"
            f"  resource={self.resource_url}\n"
            f"  status={status} type={self.resource_type or ''} err={self.error_text or ''}\n"
        )


@dataclass(slots=True)
class CrawlResult:
    """Outcome of a full crawl."""

    start_url: str
    visited: List[str] = field(default_factory=list)
    failures: List[Failure] = field(default_factory=list)
    stop_reason: StopReason = StopReason.EXHAUSTED
    pending: int = 0

    @property
    def ok(self) -> bool:
        return not self.failures

    def assert_clean(self) -> None:
        if self.failures:
            raise FailuresFoundError(self.failures)


@dataclass(slots=True)
class SmokeResult:
    """Outcome of a smoke check."""

    start_url: str
    checked: List[str] = field(default_factory=list)
    samples: List[str] = field(default_factory=list)
    failures: List[Failure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def assert_clean(self) -> None:
        if self.failures:
            raise FailuresFoundError(self.failures)
