# File: tests/conftest.py
import logging
from collections import defaultdict
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import urljoin

import pytest

from site_check.config import CheckerConfig
from site_check.logger import LOGGER_NAME

START_URL = "https://example.test/a"


def pytest_configure(config):
    """Register custom markers so that `--strict-markers` does not fail."""
    config.addinivalue_line(
        "markers",
        "browser: needs a real Playwright browser (skipped when it cannot launch)",
    )


# --------------------------------------------------------------------------- #
#                              In-memory browser                              #
# --------------------------------------------------------------------------- #


class FakeRequest:
    def __init__(self, url: str, resource_type: str = "document", failure: Optional[str] = None):
        self.url = url
        self.resource_type = resource_type
        self.failure = failure


class FakeResponse:
    def __init__(self, url: str, status: int, request: FakeRequest):
        self.url = url
        self.status = status
        self.request = request


class FakePage:
    """
    Minimal stand-in for a Playwright page.

    *site* maps URLs to dicts with optional keys: ``links`` (raw hrefs),
    ``resources`` and ``lazy`` (dicts with ``url``, ``type`` and either
    ``status`` or ``failure``), ``error`` (exception raised by goto),
    ``status``, ``title`` and ``body``. Unknown URLs answer 404.
    """

    def __init__(self, site: Dict[str, Dict[str, Any]]):
        self.site = site
        self.url = "about:blank"
        self.listeners: Dict[str, List[Callable]] = defaultdict(list)
        self.visits: List[str] = []
        self.goto_kwargs: List[Dict[str, Any]] = []
        self.waits: List[float] = []
        self._lazy: List[Dict[str, Any]] = []

    # event emitter ----------------------------------------------------------
    def on(self, event: str, handler: Callable) -> None:
        self.listeners[event].append(handler)

    def remove_listener(self, event: str, handler: Callable) -> None:
        self.listeners[event].remove(handler)

    def listener_count(self) -> int:
        return sum(len(v) for v in self.listeners.values())

    def _emit_resource(self, res: Dict[str, Any]) -> None:
        request = FakeRequest(res["url"], res.get("type", "image"), res.get("failure"))
        if "failure" in res:
            for handler in list(self.listeners["requestfailed"]):
                handler(request)
        else:
            response = FakeResponse(res["url"], res.get("status", 200), request)
            for handler in list(self.listeners["response"]):
                handler(response)

    # navigation -------------------------------------------------------------
    async def goto(self, url: str, **kwargs: Any) -> None:
        self.visits.append(url)
        self.goto_kwargs.append(kwargs)
        self.url = url
        self._lazy = []
        entry = self.site.get(url)
        if entry is None:
            self._emit_resource({"url": url, "type": "document", "status": 404})
            return
        if "error" in entry:
            raise entry["error"]
        self._emit_resource({"url": url, "type": "document", "status": entry.get("status", 200)})
        for res in entry.get("resources", []):
            self._emit_resource(res)
        self._lazy = list(entry.get("lazy", []))

    async def wait_for_timeout(self, timeout: float) -> None:
        self.waits.append(timeout)
        lazy, self._lazy = self._lazy, []
        for res in lazy:
            self._emit_resource(res)

    # DOM --------------------------------------------------------------------
    def _entry(self) -> Dict[str, Any]:
        return self.site.get(self.url, {})

    async def eval_on_selector_all(self, selector: str, expression: str) -> List[Any]:
        assert selector == "a[href]"
        out: List[Any] = []
        for href in self._entry().get("links", []):
            out.append(urljoin(self.url, href) if isinstance(href, str) else href)
        return out

    async def title(self) -> str:
        return self._entry().get("title", "")

    async def inner_text(self, selector: str) -> str:
        assert selector == "body"
        return self._entry().get("body", "")


# --------------------------------------------------------------------------- #
#                                  Fixtures                                   #
# --------------------------------------------------------------------------- #


@pytest.fixture()
def make_page() -> Callable[[Dict[str, Dict[str, Any]]], FakePage]:
    """Factory building a FakePage over a URL -> page-entry mapping."""
    return FakePage


@pytest.fixture()
def make_config() -> Callable[..., CheckerConfig]:
    """Factory for CheckerConfig with instant settle delays."""

    def _make(**overrides: Any) -> CheckerConfig:
        data: Dict[str, Any] = {
            "start_url": START_URL,
            "settle_delay": 0,
            "smoke_settle_delay": 0,
        }
        data.update(overrides)
        return CheckerConfig(**data)

    return _make


@pytest.fixture(autouse=True)
def _restore_log_handlers():
    """CLI runs rebind handlers to CliRunner streams; put the originals back."""
    lg = logging.getLogger(LOGGER_NAME)
    handlers, level = list(lg.handlers), lg.level
    yield
    lg.handlers[:] = handlers
    lg.setLevel(level)


@pytest.fixture()
def site_log(caplog):
    """Route the project logger (propagate=False) into caplog."""
    lg = logging.getLogger(LOGGER_NAME)
    lg.addHandler(caplog.handler)
    caplog.set_level(logging.INFO, logger=LOGGER_NAME)
    yield caplog
    lg.removeHandler(caplog.handler)
