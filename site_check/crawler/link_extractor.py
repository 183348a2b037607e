# site_check/crawler/link_extractor.py
"""
URL normalization and link extraction for SiteCheck.

A URL is *in scope* when it shares the allowed origin and its path starts with
the allowed prefix. Everything else normalizes to ``None``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional
from urllib.parse import SplitResult, quote, urljoin, urlsplit, urlunsplit

_DEFAULT_PORTS = {"http": 80, "https": 443}

# browsers trim C0 controls and space from both ends and drop tab/newline anywhere
_TRIM_CHARS = "".join(chr(c) for c in range(0x21))
_TAB_NEWLINE = str.maketrans("", "", "\t\n\r")

# printable ASCII minus the path percent-encode set (space " # < > ? ` { })
_PATH_SAFE = "!$%&'()*+,-./:;=@[\\]^_|~"

_SINGLE_DOT = {".", "%2e"}
_DOUBLE_DOT = {"..", ".%2e", "%2e.", "%2e%2e"}

#: collects the resolved ``href`` property of every anchor in the document
_ANCHOR_HREFS_JS = "anchors => anchors.map(a => a.href).filter(Boolean)"


@dataclass(frozen=True, slots=True)
class UrlScope:
    """Allowed origin plus path prefix."""

    origin: str
    path_prefix: str

    @classmethod
    def from_url(cls, start_url: str, path_prefix: Optional[str] = None) -> UrlScope:
        origin = origin_of(start_url)
        if origin is None:
            raise ValueError(f"URL has no http(s) origin: {start_url}")
        if path_prefix is None:
            path_prefix = urlsplit(start_url).path or "/"
        return cls(origin=origin, path_prefix=path_prefix)


def _netloc(parts: SplitResult) -> Optional[str]:
    """Lower-cased ``host[:port]`` without credentials or the default port."""
    host = parts.hostname
    if not host:
        return None
    try:
        port = parts.port
    except ValueError:
        return None
    if ":" in host:
        host = f"[{host}]"
    if port is None or port == _DEFAULT_PORTS.get(parts.scheme.lower()):
        return host
    return f"{host}:{port}"


def origin_of(url: str) -> Optional[str]:
    """Return ``scheme://host[:port]`` for http(s) URLs, else ``None``."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return None
    scheme = parts.scheme.lower()
    if scheme not in _DEFAULT_PORTS:
        return None
    netloc = _netloc(parts)
    if netloc is None:
        return None
    return f"{scheme}://{netloc}"


def is_same_origin(url: str, origin: str) -> bool:
    return origin_of(url) == origin


def _remove_dot_segments(path: str) -> str:
    """Resolve ``.`` and ``..`` segments (plain or percent-encoded) of an absolute path."""
    segments = path.split("/")[1:]
    out: List[str] = []
    for segment in segments:
        lowered = segment.lower()
        if lowered in _DOUBLE_DOT:
            if out:
                out.pop()
        elif lowered not in _SINGLE_DOT:
            out.append(segment)
    if segments and segments[-1].lower() in _SINGLE_DOT | _DOUBLE_DOT:
        out.append("")
    return "/" + "/".join(out)


def normalize_url(raw: str, scope: UrlScope) -> Optional[str]:
    """
    Resolve *raw* against the scope origin and canonicalize it.

    Returns ``None`` when the URL cannot be parsed, leaves the origin or falls
    outside the path prefix. Query string and fragment are dropped, dot
    segments are resolved and the path is percent-encoded the way a browser
    serializes it, so the prefix check sees the path the browser would load.
    """
    cleaned = raw.strip(_TRIM_CHARS).translate(_TAB_NEWLINE)
    try:
        parts = urlsplit(urljoin(scope.origin + "/", cleaned))
    except ValueError:
        return None
    scheme = parts.scheme.lower()
    if scheme not in _DEFAULT_PORTS:
        return None
    netloc = _netloc(parts)
    if netloc is None or f"{scheme}://{netloc}" != scope.origin:
        return None
    path = quote(_remove_dot_segments(parts.path or "/"), safe=_PATH_SAFE)
    if not path.startswith(scope.path_prefix):
        return None
    return urlunsplit((scheme, netloc, path, "", ""))


async def extract_links(page: Any, scope: UrlScope) -> List[str]:
    """
    Return distinct in-scope URLs linked from the page's anchors.

    Order is the order of first occurrence in the document.
    """
    hrefs = await page.eval_on_selector_all("a[href]", _ANCHOR_HREFS_JS)
    links: List[str] = []
    seen: set[str] = set()
    for href in hrefs:
        if not isinstance(href, str):
            continue
        url = normalize_url(href, scope)
        if url is not None and url not in seen:
            seen.add(url)
            links.append(url)
    return links


__all__ = ["UrlScope", "origin_of", "is_same_origin", "normalize_url", "extract_links"]
