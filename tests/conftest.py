"""Pytest configuration and shared fixtures."""

import pytest
from pathlib import Path

# Add src to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


@pytest.fixture
def showcase_dir(tmp_path):
    """Create a showcase content directory with two existing entries."""
    content_dir = tmp_path / "showcase"
    content_dir.mkdir()
    (content_dir / "example.com.md").write_text(
        "---\n"
        "title: Example\n"
        "image: /src/content/showcase/_images/example.com.webp\n"
        "url: https://example.com/blog/\n"
        "dateAdded: 2024-06-19T10:00:00.000Z\n"
        "---\n",
        encoding="utf-8",
    )
    (content_dir / "docs.dev.md").write_text(
        "---\n"
        "title: Docs\n"
        "image: /src/content/showcase/_images/docs.dev.webp\n"
        "url: https://docs.dev\n"
        "dateAdded: 2024-07-08T10:00:00.000Z\n"
        "categories:\n"
        "  - starlight\n"
        "---\n",
        encoding="utf-8",
    )
    return content_dir


@pytest.fixture
def png_screenshot():
    """Create an in-memory PNG matching a 1280x720 viewport at 1.4x."""
    from io import BytesIO
    from PIL import Image

    buffer = BytesIO()
    Image.new("RGB", (1792, 1008), color=(23, 25, 35)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def mock_browser():
    """Mock Playwright browser whose pages load successfully."""
    from unittest.mock import MagicMock

    browser = MagicMock()
    context = MagicMock()
    page = MagicMock()
    browser.new_context.return_value = context
    context.new_page.return_value = page
    page.title.return_value = "Example Site"
    page.query_selector_all.return_value = []
    page.screenshot.return_value = b"png-bytes"
    return browser
