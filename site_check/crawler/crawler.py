# === FILE: site_check/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import time
from collections import deque
from typing import Any, Deque, List, Set

from playwright.async_api import Error as PlaywrightError

from site_check.config import CheckerConfig
from site_check.crawler.link_extractor import extract_links, normalize_url
from site_check.crawler.models import CrawlResult, Failure, FailureKind, StopReason
from site_check.crawler.observers import observe
from site_check.logger import logger

__all__ = ("SiteCrawler", "log_failures")


def log_failures(failures: List[Failure], cap: int) -> None:
    """Dump the first *cap* failures as human-readable blocks."""
    if not failures:
        return
    logger.info("==== FAILURES (first %d) ====", cap)
    for failure in failures[:cap]:
        logger.info("%s", failure.format())


class SiteCrawler:
    """Breadth-first crawl of one site subsection through a single browser page."""

    def __init__(self, config: CheckerConfig) -> None:
        self.config = config
        self.scope = config.scope
        self.logger = logger

    async def crawl(self, page: Any) -> CrawlResult:
        cfg = self.config
        start_url = str(cfg.start_url)
        self.logger.info("Crawl start: %s (prefix %s)", start_url, self.scope.path_prefix)
        started = time.monotonic()

        queue: Deque[str] = deque([normalize_url(start_url, self.scope) or start_url])
        visited: Set[str] = set()
        result = CrawlResult(start_url=start_url)

        while queue and len(visited) < cfg.max_pages and len(result.failures) < cfg.max_failures:
            raw = queue.popleft()
            url = normalize_url(raw, self.scope) or raw
            if url in visited:
                continue
            visited.add(url)
            result.visited.append(url)

            page_failures: List[Failure] = []
            with observe(page, page_failures, lambda: url):
                for link in await self._load(page, url, page_failures):
                    if link not in visited:
                        queue.append(link)

            result.failures.extend(page_failures)
            self.logger.info(
                "[crawl] visited=%d/%d queue=%d newFailures=%d totalFailures=%d url=%s",
                len(visited), cfg.max_pages, len(queue), len(page_failures), len(result.failures), url,
            )

        result.pending = len(queue)
        if not queue:
            result.stop_reason = StopReason.EXHAUSTED
        elif len(result.failures) >= cfg.max_failures:
            result.stop_reason = StopReason.FAILURE_LIMIT
        else:
            result.stop_reason = StopReason.PAGE_LIMIT

        duration = time.monotonic() - started
        self.logger.info(
            "Crawl done: %d pages, %d failures in %.2f s (%s)",
            len(result.visited), len(result.failures), duration, result.stop_reason.value,
        )
        log_failures(result.failures, cfg.report_cap)
        return result

    async def _load(self, page: Any, url: str, sink: List[Failure]) -> List[str]:
        """Navigate, let lazy resources start and return the page's in-scope links."""
        try:
            await page.goto(url, wait_until="domcontentloaded", timeout=self.config.page_timeout * 1000)
            await page.wait_for_timeout(self.config.settle_delay * 1000)
            return await extract_links(page, self.scope)
        except (PlaywrightError, asyncio.TimeoutError) as exc:
            self.logger.warning("Navigation failed %s: %s", url, exc)
            sink.append(
                Failure(
                    page_url=url,
                    resource_url=url,
                    kind=FailureKind.TIMEOUT,
                    error_text=str(exc),
                )
            )
            return []
