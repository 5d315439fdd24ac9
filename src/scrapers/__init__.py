"""Scrapers for the discussion data source and live showcase sites."""

from .github_discussion import GitHubDiscussionClient
from .site_capture import SiteCapturer

__all__ = ["GitHubDiscussionClient", "SiteCapturer"]
