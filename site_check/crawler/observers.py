# site_check/crawler/observers.py
"""
Network observers attached to a browser page.

:func:`observe` is the subscription handle: listeners are registered on entry
and removed on exit, whatever happens inside the block.
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Callable, Iterator, List, Optional

from site_check.crawler.link_extractor import is_same_origin
from site_check.crawler.models import Failure, FailureKind

PageUrlT = Callable[[], str]


def failed_request_handler(
    sink: List[Failure], page_url: PageUrlT, origin: Optional[str] = None
) -> Callable[[Any], None]:
    """Build a ``requestfailed`` listener appending ``request-failed`` records to *sink*."""

    def on_request_failed(request: Any) -> None:
        if origin is not None and not is_same_origin(request.url, origin):
            return
        sink.append(
            Failure(
                page_url=page_url(),
                resource_url=request.url,
                kind=FailureKind.REQUEST_FAILED,
                resource_type=request.resource_type,
                error_text=request.failure,
            )
        )

    return on_request_failed


def error_response_handler(
    sink: List[Failure], page_url: PageUrlT, origin: Optional[str] = None
) -> Callable[[Any], None]:
    """Build a ``response`` listener appending ``http-error`` records for status >= 400."""

    def on_response(response: Any) -> None:
        status = response.status
        if status < 400:
            return
        if origin is not None and not is_same_origin(response.url, origin):
            return
        sink.append(
            Failure(
                page_url=page_url(),
                resource_url=response.url,
                kind=FailureKind.HTTP_ERROR,
                status=status,
                resource_type=response.request.resource_type,
            )
        )

    return on_response


@contextmanager
def observe(
    page: Any,
    sink: List[Failure],
    page_url: PageUrlT,
    origin: Optional[str] = None,
) -> Iterator[List[Failure]]:
    """
    Record failed requests and error responses of *page* into *sink*.

    With *origin* set, only events for that origin are kept.
    """
    on_request_failed = failed_request_handler(sink, page_url, origin)
    on_response = error_response_handler(sink, page_url, origin)
    page.on("requestfailed", on_request_failed)
    page.on("response", on_response)
    try:
        yield sink
    finally:
        page.remove_listener("requestfailed", on_request_failed)
        page.remove_listener("response", on_response)


__all__ = ["observe", "failed_request_handler", "error_response_handler"]
