"""Link extraction and candidate filtering for discussion content."""

import logging
from typing import Iterable, List, Optional, Set
from urllib.parse import urljoin, urlsplit

from bs4 import BeautifulSoup

logger = logging.getLogger("showcase_scraper")

DEFAULT_PORTS = {"http": 80, "https": 443}

# Origin of absolute URLs whose scheme has no host/port origin (mailto:, tel:, ...)
OPAQUE_ORIGIN = "null"


def get_origin(url: str) -> str:
    """Reduce a URL to its origin (scheme, host and non-default port).

    Args:
        url: Absolute URL.

    Returns:
        Origin string such as ``https://example.com`` or ``http://localhost:8080``.
        Absolute URLs with any other scheme get the opaque origin ``"null"``.

    Raises:
        ValueError: If the string is not an absolute URL, or is an http(s) URL
            with no host or an invalid port.
    """
    parts = urlsplit(url.strip())
    scheme = parts.scheme.lower()
    if not scheme:
        raise ValueError(f"Not an absolute URL: {url!r}")
    if scheme not in DEFAULT_PORTS:
        return OPAQUE_ORIGIN

    host = parts.hostname
    if not host:
        raise ValueError(f"URL has no host: {url!r}")
    if ":" in host:
        host = f"[{host}]"

    # Accessing .port raises ValueError for out-of-range or non-numeric ports
    port = parts.port
    if port is None or port == DEFAULT_PORTS[scheme]:
        return f"{scheme}://{host}"
    return f"{scheme}://{host}:{port}"


def normalize_origins(urls: Iterable[str]) -> Set[str]:
    """Convert a list of URLs (possibly with paths) into a set of origins."""
    return {get_origin(url) for url in urls}


def extract_links(html: str, base_url: Optional[str] = None) -> List[str]:
    """Extract unique link targets from an HTML blob.

    Args:
        html: HTML to parse. Malformed markup is parsed best-effort.
        base_url: Optional base URL used to resolve relative hrefs.

    Returns:
        List of hrefs in first-occurrence order with exact duplicates removed.
    """
    if not html:
        return []

    soup = BeautifulSoup(html, "html.parser")
    links = []
    seen = set()

    for anchor in soup.find_all("a", href=True):
        href = anchor["href"].strip()
        if base_url and href:
            href = urljoin(base_url, href)
        if not href or href in seen:
            continue
        seen.add(href)
        links.append(href)

    return links


def filter_links(
    urls: Iterable[str],
    blocked_origins: Set[str],
    known_origins: Set[str],
) -> List[str]:
    """Drop URLs that are blocked or already in the showcase.

    Args:
        urls: Candidate URLs as returned by ``extract_links``.
        blocked_origins: Origins that must never be added.
        known_origins: Origins of existing showcase entries.

    Returns:
        The remaining URLs, in input order.
    """
    kept = []
    for url in urls:
        try:
            origin = get_origin(url)
        except ValueError as e:
            logger.warning(f"Error parsing URL: {url} ({e})")
            continue

        if origin in blocked_origins or origin in known_origins:
            continue
        kept.append(url)

    return kept
