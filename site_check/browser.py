# File: site_check/browser.py
"""site_check.browser: Playwright page lifecycle for one check run."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page, async_playwright

from site_check.config import CheckerConfig
from site_check.errors import BrowserError
from site_check.logger import logger

_LAUNCH_ARGS = {
    "chromium": ["--disable-gpu", "--no-sandbox", "--disable-dev-shm-usage"],
}


@asynccontextmanager
async def open_page(config: CheckerConfig) -> AsyncIterator[Page]:
    """Launch the configured browser and yield a single page reused for every navigation."""
    async with async_playwright() as pw:
        try:
            browser = await getattr(pw, config.browser).launch(
                headless=config.headless,
                args=_LAUNCH_ARGS.get(config.browser, []),
            )
        except PlaywrightError as exc:
            raise BrowserError(f"Cannot launch {config.browser}: {exc}") from exc
        logger.debug("Browser started: %s %s", config.browser, browser.version)
        try:
            context = await browser.new_context(user_agent=config.user_agent)
            page = await context.new_page()
            yield page
        finally:
            await browser.close()


__all__ = ["open_page"]
