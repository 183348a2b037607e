# File: site_check/engine.py
"""site_check.engine: runs a crawl or smoke check in a fresh browser and builds reports."""

from __future__ import annotations

from typing import Union

from site_check.aggregator import CheckReport, aggregate_results
from site_check.browser import open_page
from site_check.config import CheckerConfig
from site_check.crawler.crawler import SiteCrawler
from site_check.crawler.models import CrawlResult, SmokeResult
from site_check.crawler.smoke import SmokeChecker
from site_check.logger import logger

__all__ = ["run_crawl", "run_smoke", "build_report"]


async def run_crawl(cfg: CheckerConfig) -> CrawlResult:
    """
    Crawl the configured subsection breadth-first.

    Parameters
    ----------
    cfg : CheckerConfig
        Run configuration.

    Returns
    -------
    CrawlResult
        Visited pages and every recorded failure.
    """
    logger.info("Starting crawl…")
    async with open_page(cfg) as page:
        return await SiteCrawler(cfg).crawl(page)


async def run_smoke(cfg: CheckerConfig) -> SmokeResult:
    """Run the smoke check. Content problems raise :class:`ContentCheckError`."""
    logger.info("Starting smoke check…")
    async with open_page(cfg) as page:
        return await SmokeChecker(cfg).run(page)


def build_report(result: Union[CrawlResult, SmokeResult]) -> CheckReport:
    return aggregate_results(result)
