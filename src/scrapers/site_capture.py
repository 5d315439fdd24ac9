"""Render showcase candidates with Playwright and capture screenshots."""

import logging
from dataclasses import dataclass

from playwright.sync_api import sync_playwright

from constants import (
    DEVICE_SCALE_FACTOR,
    SETTLE_DELAY_MS,
    SETTLE_IDLE_TIMEOUT_MS,
    VIEWPORT,
)
from processor.site_detector import is_starlight

logger = logging.getLogger("showcase_scraper")

# Some pages animate elements in on load: wait a fixed delay plus one frame,
# then wait for the page to go idle.
SETTLE_SCRIPT = f"""
() => new Promise((resolve) => {{
    setTimeout(
        () => requestAnimationFrame(() => requestIdleCallback(resolve, {{ timeout: {SETTLE_IDLE_TIMEOUT_MS} }})),
        {SETTLE_DELAY_MS},
    );
}})
"""


@dataclass
class CapturedSite:
    """Metadata and screenshot captured from a live page."""

    url: str
    title: str
    screenshot: bytes
    is_starlight: bool = False


class SiteCapturer:
    """Load pages in headless Chromium and screenshot them.

    One browser is shared for the whole run; each capture gets its own
    browser context which is always closed afterwards.

    By default only the 1280x720 viewport is captured, since the showcase
    thumbnails are cut from it. Pass ``full_page=True`` to capture the
    whole scrollable page.
    """

    def __init__(self, headless: bool = True, browser=None, full_page: bool = False):
        """Initialize the capturer.

        Args:
            headless: Run browser in headless mode (default: True).
            browser: Existing Playwright browser to use instead of launching one.
            full_page: Capture the full scrollable page instead of the viewport.
        """
        self.headless = headless
        self.full_page = full_page
        self.playwright = None
        self.browser = browser

        if self.browser is None:
            self.playwright = sync_playwright().start()
            try:
                self.browser = self.playwright.chromium.launch(headless=headless)
            except Exception:
                self.playwright.stop()
                self.playwright = None
                raise
            logger.info("Playwright browser initialized successfully")

    def _wait_for_settle(self, page) -> None:
        page.evaluate(SETTLE_SCRIPT)

    def _read_generators(self, page) -> list:
        values = []
        for generator in page.query_selector_all('meta[name="generator"]'):
            content = generator.get_property("content").json_value()
            if isinstance(content, str):
                values.append(content)
        return values

    def capture(self, url: str) -> CapturedSite:
        """Load a URL, extract page metadata and take a screenshot.

        Args:
            url: URL of the page to visit.

        Returns:
            CapturedSite with title, screenshot bytes and Starlight flag.

        Raises:
            Any Playwright error from navigation, evaluation or screenshotting.
        """
        logger.debug("Creating new page")
        context = self.browser.new_context(
            viewport=VIEWPORT,
            device_scale_factor=DEVICE_SCALE_FACTOR,
        )
        try:
            page = context.new_page()
            logger.debug(f"Navigating to {url}")
            page.goto(url)

            logger.debug("Waiting for page to settle")
            self._wait_for_settle(page)

            title = page.title()

            logger.debug("Testing if built with Starlight")
            starlight = is_starlight(self._read_generators(page))

            logger.debug("Taking screenshot")
            screenshot = page.screenshot(full_page=self.full_page)
        finally:
            logger.debug("Closing page")
            context.close()

        return CapturedSite(url=url, title=title, screenshot=screenshot, is_starlight=starlight)

    def close(self):
        """Clean up browser and Playwright resources.

        Safe to call multiple times.
        """
        if self.browser:
            try:
                self.browser.close()
                logger.debug("Browser closed")
            except Exception as e:
                logger.debug(f"Error closing browser: {e}")
            self.browser = None

        if self.playwright:
            try:
                self.playwright.stop()
                logger.debug("Playwright stopped")
            except Exception as e:
                logger.debug(f"Error stopping Playwright: {e}")
            self.playwright = None

    def __enter__(self):
        """Support context manager protocol."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Clean up on context manager exit."""
        self.close()
        return False
