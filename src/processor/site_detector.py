"""Heuristic detection of sites built with Astro.

Detection is best-effort: each check looks for a signal Astro leaves in the
rendered HTML. Checks run in order and stop at the first match, so the cheap
raw-text check runs before the document is parsed.
"""

import logging
import re
from functools import cached_property
from typing import Callable, Iterable, Sequence
from urllib.parse import urljoin, urlsplit

import requests
from bs4 import BeautifulSoup

from constants import USER_AGENT

logger = logging.getLogger("showcase_scraper")

# Component-scoped attribute, e.g. data-astro-cid-x2cvkf3a. The hash is part
# of the attribute name so it can't be matched with a CSS selector.
COMPONENT_ID_PATTERN = re.compile(r"<\w+ [^>]*?data-astro-cid-\w+[^>]*?>")

MARKER_SELECTORS = [
    "astro-island",
    '[class*="astro-"]',
    "[astro-script]",
    "[astro-icon]",
    "[data-astro-prefetch]",
    "[data-astro-reload]",
    "[data-astro-history]",
    'meta[name="astro-view-transitions-fallback"]',
]

# hoisted.{hash}.js bundles
HOISTED_SCRIPT_PATTERN = re.compile(r"/hoisted\.[a-z0-9]+\.js$")
# Astro v1 hashed files in /assets/
LEGACY_ASSET_PATTERN = re.compile(r"^/assets/.+\.[a-z0-9_]+\.(css|js|jpeg|jpg|webp|avif|png)$")


class PageDocument:
    """Raw page content with a lazily parsed document."""

    def __init__(self, raw: str, url: str = ""):
        self.raw = raw
        self.url = url

    @cached_property
    def soup(self) -> BeautifulSoup:
        return BeautifulSoup(self.raw, "html.parser")


Check = Callable[[PageDocument], bool]


def has_component_id_attribute(doc: PageDocument) -> bool:
    """Test for an element carrying an Astro component ID attribute."""
    return COMPONENT_ID_PATTERN.search(doc.raw) is not None


def has_astro_generator(doc: PageDocument) -> bool:
    """Test for <meta name="generator" content="Astro ...">."""
    generator = doc.soup.find("meta", attrs={"name": "generator"})
    if generator is None:
        return False
    return (generator.get("content") or "").startswith("Astro")


def has_astro_markers(doc: PageDocument) -> bool:
    """Test for Astro-specific elements, classes and attributes."""
    return doc.soup.select_one(", ".join(MARKER_SELECTORS)) is not None


def is_astro_asset_path(path: str) -> bool:
    """Return True if a URL path follows an Astro build output convention."""
    return (
        path.startswith("/_astro/")
        or HOISTED_SCRIPT_PATTERN.search(path) is not None
        or LEGACY_ASSET_PATTERN.match(path) is not None
    )


def has_astro_asset_url(doc: PageDocument) -> bool:
    """Test for href/src attributes pointing at Astro build assets."""
    base = doc.url or "http://localhost/"
    for attr in ("href", "src"):
        for element in doc.soup.find_all(attrs={attr: True}):
            value = element.get(attr)
            if not value:
                continue
            try:
                path = urlsplit(urljoin(base, value)).path
            except ValueError:
                continue
            if is_astro_asset_path(path):
                return True
    return False


ASTRO_CHECKS: Sequence[Check] = (
    has_component_id_attribute,
    has_astro_generator,
    has_astro_markers,
    has_astro_asset_url,
)


def is_astro_page(raw: str, url: str = "", checks: Sequence[Check] = ASTRO_CHECKS) -> bool:
    """Decide whether page content looks like it was built with Astro.

    Args:
        raw: Response body of the page.
        url: URL the body was fetched from, used to resolve relative asset paths.
        checks: Ordered checks; evaluation stops at the first match.

    Returns:
        True if any check matched.
    """
    doc = PageDocument(raw, url)
    for check in checks:
        if check(doc):
            logger.debug(f"{url or 'page'} matched {getattr(check, '__name__', check)}")
            return True
    return False


def is_starlight(generator_values: Iterable[str]) -> bool:
    """Return True if any generator meta value names Starlight."""
    return any((value or "").startswith("Starlight") for value in generator_values)


class AstroSiteDetector:
    """Fetch live pages and classify them with ``is_astro_page``."""

    def __init__(self, timeout: int = 15, checks: Sequence[Check] = ASTRO_CHECKS):
        """Initialize the detector.

        Args:
            timeout: Request timeout in seconds.
            checks: Ordered detection checks.
        """
        self.timeout = timeout
        self.checks = checks
        self.session = requests.Session()
        self.session.headers.update({
            "User-Agent": USER_AGENT,
            "Accept": "text/html,application/xhtml+xml,*/*;q=0.8",
        })

    def is_astro_site(self, url: str) -> bool:
        """Try to decide if a given webpage is built with Astro.

        Unreachable pages are reported as not built with Astro.
        """
        try:
            response = self.session.get(url, timeout=self.timeout)
            raw = response.text
        except requests.RequestException as e:
            logger.error(f"Failed to fetch {url}: {e}")
            return False

        return is_astro_page(raw, url=url, checks=self.checks)
