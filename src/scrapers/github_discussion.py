"""Client for reading a GitHub Discussion through the GraphQL API."""

import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional

import requests

from constants import (
    DEFAULT_DISCUSSION,
    DEFAULT_ORG,
    DEFAULT_REPO,
    DISCUSSION_PAGE_SIZE,
    GITHUB_GRAPHQL_URL,
    USER_AGENT,
)

logger = logging.getLogger("showcase_scraper")

DISCUSSION_COMMENTS_QUERY = """
query($owner: String!, $name: String!, $number: Int!, $first: Int!, $after: String) {
  repository(owner: $owner, name: $name) {
    discussion(number: $number) {
      bodyHTML
      comments(first: $first, after: $after) {
        pageInfo {
          endCursor
          hasNextPage
        }
        nodes {
          bodyHTML
        }
      }
    }
  }
}
"""


class MissingCredentialsError(RuntimeError):
    """Raised when no GitHub token is available."""


class DiscussionFetchError(RuntimeError):
    """Raised when the discussion can't be fetched completely."""


@dataclass
class DiscussionPage:
    """One page of discussion comments."""

    body_html: str
    comments_html: List[str] = field(default_factory=list)
    end_cursor: Optional[str] = None
    has_next_page: bool = False


class GitHubDiscussionClient:
    """Fetch the root post and all comments of a GitHub Discussion.

    Comments are paged with the cursor returned by the previous page, so
    pages are always fetched one after another.
    """

    def __init__(
        self,
        token: str = None,
        org: str = DEFAULT_ORG,
        repo: str = DEFAULT_REPO,
        discussion: int = DEFAULT_DISCUSSION,
        page_size: int = DISCUSSION_PAGE_SIZE,
        timeout: int = 30,
    ):
        """Initialize the client.

        Args:
            token: GitHub token (or set GITHUB_TOKEN env var).
            org: GitHub user or organization owning the repository.
            repo: Repository name.
            discussion: Discussion number used as the data source.
            page_size: Comments requested per page.
            timeout: Request timeout in seconds.

        Raises:
            MissingCredentialsError: If no token is provided or configured.
        """
        self.token = token or os.getenv("GITHUB_TOKEN")
        if not self.token:
            raise MissingCredentialsError("GITHUB_TOKEN env variable must be set to run.")

        self.org = org
        self.repo = repo
        self.discussion = discussion
        self.page_size = page_size
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            "Authorization": f"bearer {self.token}",
            "User-Agent": USER_AGENT,
            "Accept": "application/json",
        })

    @property
    def label(self) -> str:
        return f"{self.org}/{self.repo} discussion #{self.discussion}"

    def fetch_page(self, after: Optional[str] = None) -> DiscussionPage:
        """Fetch a single page of comments.

        Args:
            after: Cursor returned by the previous page, or None for the first page.

        Returns:
            DiscussionPage with the root body and this page's comments.

        Raises:
            DiscussionFetchError: On transport, HTTP, or GraphQL errors.
        """
        variables = {
            "owner": self.org,
            "name": self.repo,
            "number": self.discussion,
            "first": self.page_size,
            "after": after,
        }

        try:
            response = self.session.post(
                GITHUB_GRAPHQL_URL,
                json={"query": DISCUSSION_COMMENTS_QUERY, "variables": variables},
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise DiscussionFetchError(f"Failed to fetch {self.label}: {e}") from e
        except ValueError as e:
            raise DiscussionFetchError(f"Invalid JSON response for {self.label}: {e}") from e

        if data.get("errors"):
            messages = "; ".join(err.get("message", str(err)) for err in data["errors"])
            raise DiscussionFetchError(f"GraphQL errors for {self.label}: {messages}")

        discussion = ((data.get("data") or {}).get("repository") or {}).get("discussion")
        if not discussion:
            raise DiscussionFetchError(f"{self.label} not found")

        comments = discussion.get("comments") or {}
        page_info = comments.get("pageInfo") or {}
        return DiscussionPage(
            body_html=discussion.get("bodyHTML") or "",
            comments_html=[node.get("bodyHTML") or "" for node in comments.get("nodes") or [] if node],
            end_cursor=page_info.get("endCursor"),
            has_next_page=bool(page_info.get("hasNextPage")),
        )

    def get_comments_html(self) -> str:
        """Get the HTML of the discussion post and all of its comments.

        Returns:
            Concatenated HTML: the root post first, then comments in server order.
        """
        logger.info(f"Fetching comments from {self.label}...")
        parts = []
        after = None
        pages = 0

        while True:
            page = self.fetch_page(after=after)
            pages += 1

            # Main discussion post comes first
            if pages == 1:
                parts.append(page.body_html)
            parts.extend(page.comments_html)

            if not page.has_next_page:
                break
            if not page.end_cursor:
                raise DiscussionFetchError(
                    f"{self.label} reported another page without a cursor"
                )
            after = page.end_cursor

        logger.info(f"Fetched {len(parts) - 1} comments in {pages} page(s)")
        return "".join(parts)
