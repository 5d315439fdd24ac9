#!/usr/bin/env python3
"""Astro Showcase Scraper - Main Entry Point.

Extracts links from the showcase GitHub Discussion, checks which of them are
built with Astro, and adds new Astro sites to the showcase content collection.
"""

import os
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Set
from urllib.parse import urlsplit

# Load environment variables from .env file
from dotenv import load_dotenv
load_dotenv(Path(__file__).parent.parent / ".env")

# Add src directory to Python path
sys.path.insert(0, str(Path(__file__).parent))

from constants import (
    BLOCKED_ORIGINS,
    DEFAULT_IMAGE_URL_PREFIX,
    DEFAULT_SHOWCASE_DIR,
    STARLIGHT_CATEGORY,
)
from utils.logger import setup_logger
from utils.showcase_store import ShowcaseEntry, ShowcaseStore
from scrapers.github_discussion import (
    DiscussionFetchError,
    GitHubDiscussionClient,
    MissingCredentialsError,
)
from scrapers.site_capture import SiteCapturer
from processor.link_extractor import extract_links, filter_links, normalize_origins
from processor.site_detector import AstroSiteDetector
from generator.pr_body import build_pr_body, set_action_output
from generator.screenshots import save_screenshots

# Read version from VERSION file
_version_file = Path(__file__).parent.parent / "VERSION"
__version__ = _version_file.read_text().strip() if _version_file.exists() else "0.0.0"


@dataclass
class ScrapedSite:
    """A site successfully added to the showcase."""

    url: str
    title: Optional[str]


@dataclass
class CaptureResult:
    """Result of trying to add one site to the showcase."""

    success: bool
    title: Optional[str] = None


@dataclass
class RunOutcome:
    """What happened to each candidate URL during a run.

    Every candidate ends up in either ``astro`` or ``non_astro``; every
    ``astro`` URL ends up in either ``scraped`` or ``failed``.
    """

    astro: List[str] = field(default_factory=list)
    non_astro: List[str] = field(default_factory=list)
    scraped: List[ScrapedSite] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)


def add_showcase_site(url: str, capturer: SiteCapturer, store: ShowcaseStore) -> CaptureResult:
    """Scrape a site and add it to the showcase.

    Writes both screenshot variants, then the entry file. Failures are
    logged and reported as an unsuccessful result.

    Args:
        url: URL of the site to add.
        capturer: Capturer sharing the run's browser.
        store: Showcase content collection.

    Returns:
        CaptureResult with the page title on success.
    """
    import logging
    logger = logging.getLogger("showcase_scraper")

    logger.info(f"Scraping {url}")
    try:
        site = capturer.capture(url)
        hostname = urlsplit(url).hostname
        if not hostname:
            raise ValueError(f"URL has no hostname: {url}")

        hires_path, standard_path = store.image_paths(hostname)
        save_screenshots(site.screenshot, hires_path, standard_path)

        entry = ShowcaseEntry(
            title=site.title,
            image=store.image_ref(hostname),
            url=url,
            date_added=datetime.now(timezone.utc),
            categories=[STARLIGHT_CATEGORY] if site.is_starlight else [],
        )
        store.write_entry(hostname, entry)
    except Exception as e:
        logger.error(f"Scraping failed for {url}: {e}", exc_info=True)
        return CaptureResult(success=False)

    return CaptureResult(success=True, title=site.title)


def classify_links(urls: Iterable[str], detector: AstroSiteDetector, outcome: RunOutcome) -> None:
    """Sort candidate URLs into the Astro and non-Astro lists."""
    for url in urls:
        if detector.is_astro_site(url):
            outcome.astro.append(url)
        else:
            outcome.non_astro.append(url)


def capture_sites(outcome: RunOutcome, capturer: SiteCapturer, store: ShowcaseStore) -> None:
    """Add every Astro site to the showcase, one at a time."""
    for url in outcome.astro:
        result = add_showcase_site(url, capturer, store)
        if result.success:
            outcome.scraped.append(ScrapedSite(url=url, title=result.title))
        else:
            outcome.failed.append(url)


def run(
    client: GitHubDiscussionClient,
    detector: AstroSiteDetector,
    store: ShowcaseStore,
    blocked_origins: Set[str],
    capturer_factory: Callable[[], SiteCapturer] = SiteCapturer,
    dry_run: bool = False,
) -> RunOutcome:
    """Extract and filter links, test them, and add new Astro sites.

    Args:
        client: Discussion client used as the data source.
        detector: Astro detector for candidate URLs.
        store: Showcase content collection.
        blocked_origins: Origins that must never be added.
        capturer_factory: Creates the browser-backed capturer for the run.
        dry_run: Classify candidates without capturing or writing anything.

    Returns:
        RunOutcome for the run.

    Raises:
        DiscussionFetchError: If the discussion can't be fetched.
    """
    import logging
    logger = logging.getLogger("showcase_scraper")

    comments_html = client.get_comments_html()

    logger.info("Extracting URLs...")
    known_origins = store.load_known_origins()
    urls = filter_links(extract_links(comments_html), blocked_origins, known_origins)

    outcome = RunOutcome()
    logger.info(f"Searching {len(urls)} URL(s) for sites built with Astro...")
    classify_links(urls, detector, outcome)

    if dry_run:
        logger.info(f"Dry run: skipping {len(outcome.astro)} Astro site(s)")
        return outcome

    if outcome.astro:
        logger.info(f"Scraping {len(outcome.astro)} new Astro site(s)...")
        with capturer_factory() as capturer:
            capture_sites(outcome, capturer, store)

    logger.info(
        f"Run complete: {len(outcome.scraped)} added, {len(outcome.failed)} failed, "
        f"{len(outcome.non_astro)} not Astro"
    )
    return outcome


def publish_summary(outcome: RunOutcome) -> str:
    """Expose the PR body as the ``prBody`` action output, or print it."""
    body = build_pr_body(outcome)
    if not set_action_output("prBody", body):
        print(body)
    return body


def main():
    """Main showcase workflow - scrape the discussion and update the showcase."""

    logger = setup_logger(
        log_file=os.getenv("LOG_FILE", "logs/showcase.log")
    )

    logger.info("=" * 50)
    logger.info(f"Showcase Scraper v{__version__} started at {datetime.now()}")
    logger.info("=" * 50)

    try:
        client = GitHubDiscussionClient()
        store = ShowcaseStore(
            content_dir=os.getenv("SHOWCASE_DIR", DEFAULT_SHOWCASE_DIR),
            image_url_prefix=os.getenv("SHOWCASE_IMAGE_PREFIX", DEFAULT_IMAGE_URL_PREFIX),
        )
        outcome = run(
            client,
            AstroSiteDetector(),
            store,
            normalize_origins(BLOCKED_ORIGINS),
        )
        publish_summary(outcome)
    except (MissingCredentialsError, DiscussionFetchError) as e:
        logger.error(f"Showcase update aborted: {e}", exc_info=True)
        sys.exit(1)
    except Exception as e:
        logger.error(f"Error during showcase update: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
