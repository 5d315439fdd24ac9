"""Pull request body and GitHub Actions output for a scraper run."""

import logging
import os
import uuid
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional
from urllib.parse import urlsplit

if TYPE_CHECKING:
    from main import RunOutcome

logger = logging.getLogger("showcase_scraper")

PR_INTRO = (
    "This PR is auto-generated by a GitHub action that runs every Monday to update "
    "the Astro showcase with data from GitHub and NPM."
)

ADDED_HEADER = "#### Sites added in this PR 🆕"
FAILED_HEADER = "#### Sites that failed while scraping 🚨"
NON_ASTRO_HEADER = "#### Sites that are maybe not built with Astro 🤔"

FAILED_NOTE = (
    "These sites are new additions and appear to be built with Astro, but something went "
    "wrong while trying to scrape them. You might want to add them to the showcase manually."
)
NON_ASTRO_NOTE = (
    "We couldn’t detect that these sites were built with Astro. You might want to check manually."
)


def format_short_link(url: str) -> str:
    """Format a URL as a Markdown link labelled with its host."""
    host = urlsplit(url).netloc or url
    return f"[{host}]({url})"


def build_pr_body(outcome: "RunOutcome") -> str:
    """Build the pull request description for a run.

    Sections with nothing to report are left out.

    Args:
        outcome: Result of the run.

    Returns:
        Markdown text.
    """
    lines: List[str] = [PR_INTRO, ""]

    if outcome.scraped:
        lines.extend([ADDED_HEADER, ""])
        lines.extend(f"- [{site.title}]({site.url})" for site in outcome.scraped)
        lines.append("")

    if outcome.failed:
        lines.extend([FAILED_HEADER, "", FAILED_NOTE, ""])
        lines.extend(f"- {url}" for url in outcome.failed)
        lines.append("")

    if outcome.non_astro:
        lines.extend([NON_ASTRO_HEADER, "", NON_ASTRO_NOTE, ""])
        lines.append(", ".join(format_short_link(url) for url in outcome.non_astro))

    return "\n".join(lines)


def set_action_output(name: str, value: str, output_path: Optional[str] = None) -> bool:
    """Expose a value to later steps of a GitHub Actions job.

    Args:
        name: Output name.
        value: Output value, may span multiple lines.
        output_path: Output file (defaults to the GITHUB_OUTPUT env var).

    Returns:
        True if the output was written, False if no output file is configured.
    """
    output_path = output_path or os.getenv("GITHUB_OUTPUT")
    if not output_path:
        return False

    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    with Path(output_path).open("a", encoding="utf-8") as f:
        f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
    logger.debug(f"Set action output '{name}'")
    return True
