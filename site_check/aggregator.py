# File: site_check/aggregator.py
"""site_check.aggregator: report model shared by the CLI, JSON and HTML output."""

from __future__ import annotations

import json
from collections import Counter
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, TypedDict, Union

from site_check.crawler.models import CrawlResult, Failure, SmokeResult


class FailureInfo(TypedDict, total=False):
    """One failure as it appears in reports."""

    page_url: str
    resource_url: str
    kind: str
    status: Optional[int]
    resource_type: Optional[str]
    error_text: Optional[str]


@dataclass(slots=True)
class CheckReport:
    """Results of a crawl or smoke run: pages, failures and per-kind counts."""

    scenario: str
    start_url: str
    pages: List[str] = field(default_factory=list)
    failures: List[FailureInfo] = field(default_factory=list)
    summary: Dict[str, int] = field(default_factory=dict)
    stop_reason: Optional[str] = None
    samples: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def json(self, *, pretty: bool = False) -> str:
        """JSON representation of the report."""
        return json.dumps(asdict(self), ensure_ascii=False, indent=2 if pretty else None)


def summarize(failures: List[Failure]) -> Dict[str, int]:
    """Count failures per kind, in first-seen order."""
    return dict(Counter(f.kind.value for f in failures))


def aggregate_results(result: Union[CrawlResult, SmokeResult, Any]) -> CheckReport:
    """Turn a CrawlResult or SmokeResult into a CheckReport."""
    if isinstance(result, CrawlResult):
        report = CheckReport(
            scenario="crawl",
            start_url=result.start_url,
            pages=list(result.visited),
            stop_reason=result.stop_reason.value,
        )
    elif isinstance(result, SmokeResult):
        report = CheckReport(
            scenario="smoke",
            start_url=result.start_url,
            pages=list(result.checked),
            samples=list(result.samples),
        )
    else:
        raise TypeError(f"Cannot aggregate {type(result).__name__}")
    report.failures = [FailureInfo(**f.to_dict()) for f in result.failures]  # type: ignore[typeddict-item]
    report.summary = summarize(result.failures)
    return report


__all__ = ["CheckReport", "FailureInfo", "aggregate_results", "summarize"]
