# site_check/crawler/smoke.py
"""
Smoke check: the landing page plus a few sampled in-scope links.

No queue and no per-page attribution: one set of same-origin observers stays
attached for the whole run.
"""
from __future__ import annotations

from typing import Any

from site_check.config import CheckerConfig
from site_check.crawler.link_extractor import extract_links
from site_check.crawler.models import SmokeResult
from site_check.crawler.observers import observe
from site_check.errors import ContentCheckError
from site_check.logger import logger


def log_smoke_failures(result: SmokeResult, cap: int) -> None:
    if not result.failures:
        return
    logger.error("Same-origin failures: %d", len(result.failures))
    for failure in result.failures[:cap]:
        logger.error("[%s] %s (%s)", failure.label, failure.resource_url, failure.resource_type or "")


def finish_smoke(result: SmokeResult, cap: int) -> SmokeResult:
    """Log up to *cap* failures, then raise :class:`FailuresFoundError` if there were any."""
    log_smoke_failures(result, cap)
    result.assert_clean()
    return result


class SmokeChecker:
    """Fast single-pass check of the start page and its first in-scope links."""

    def __init__(self, config: CheckerConfig) -> None:
        self.config = config
        self.scope = config.scope
        self.logger = logger
        self._current = str(config.start_url)

    async def run(self, page: Any) -> SmokeResult:
        cfg = self.config
        result = SmokeResult(start_url=str(cfg.start_url))
        self.logger.info("Smoke start: %s", result.start_url)

        with observe(page, result.failures, lambda: self._current, origin=cfg.origin):
            await self._check_page(page, result.start_url)
            result.checked.append(result.start_url)

            result.samples = (await extract_links(page, self.scope))[: cfg.sample_links]
            self.logger.info("Sampled %d links: %s", len(result.samples), ", ".join(result.samples))

            for url in result.samples:
                await self._check_page(page, url)
                result.checked.append(url)
                await page.wait_for_timeout(cfg.smoke_settle_delay * 1000)

        self.logger.info("Smoke done: %d pages, %d failures", len(result.checked), len(result.failures))
        return result

    async def check(self, page: Any) -> SmokeResult:
        """Run and raise :class:`FailuresFoundError` if any same-origin failure was seen."""
        return finish_smoke(await self.run(page), self.config.smoke_report_cap)

    async def _check_page(self, page: Any, url: str) -> None:
        self._current = url
        await page.goto(url, wait_until="domcontentloaded", timeout=self.config.smoke_timeout * 1000)

        title = (await page.title()).strip()
        if not title:
            raise ContentCheckError(url, "empty <title>")

        body = (await page.inner_text("body")).strip()
        if len(body) <= self.config.min_body_chars:
            raise ContentCheckError(
                url, f"visible body text has {len(body)} chars, need more than {self.config.min_body_chars}"
            )
        self.logger.info("[smoke] ok title=%r body=%d chars url=%s", title, len(body), url)


__all__ = ["SmokeChecker", "finish_smoke", "log_smoke_failures"]
