"""Command-line interface for showcase scraper management."""

import argparse
import sys
from typing import List, Optional

from constants import (
    BLOCKED_ORIGINS,
    DEFAULT_DISCUSSION,
    DEFAULT_IMAGE_URL_PREFIX,
    DEFAULT_ORG,
    DEFAULT_REPO,
    DEFAULT_SHOWCASE_DIR,
)
from main import publish_summary, run
from processor.link_extractor import normalize_origins
from processor.site_detector import AstroSiteDetector
from scrapers.github_discussion import (
    DiscussionFetchError,
    GitHubDiscussionClient,
    MissingCredentialsError,
)
from utils.logger import setup_logger
from utils.showcase_store import ShowcaseStore


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog='showcase-scraper',
        description='Astro showcase scraper CLI'
    )
    parser.add_argument('--showcase-dir', default=DEFAULT_SHOWCASE_DIR,
                        help='Showcase content directory')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # run
    run_parser = subparsers.add_parser('run', help='Scrape the discussion and update the showcase')
    run_parser.add_argument('--org', default=DEFAULT_ORG, help='GitHub user or org')
    run_parser.add_argument('--repo', default=DEFAULT_REPO, help='GitHub repository')
    run_parser.add_argument('--discussion', type=int, default=DEFAULT_DISCUSSION,
                            help='Discussion number')
    run_parser.add_argument('--image-prefix', default=DEFAULT_IMAGE_URL_PREFIX,
                            help='Prefix for the image field of new entries')
    run_parser.add_argument('--dry-run', action='store_true',
                            help='Classify candidates without capturing them')

    # check <url> [<url> ...]
    check_parser = subparsers.add_parser('check', help='Test if URLs are built with Astro')
    check_parser.add_argument('urls', nargs='+', metavar='URL', help='URL to test')

    # known
    subparsers.add_parser('known', help='List origins already in the showcase')

    return parser


def handle_run(
    showcase_dir: str,
    org: str = DEFAULT_ORG,
    repo: str = DEFAULT_REPO,
    discussion: int = DEFAULT_DISCUSSION,
    image_prefix: str = DEFAULT_IMAGE_URL_PREFIX,
    dry_run: bool = False,
) -> int:
    """Handle run command.

    Returns:
        Exit code.
    """
    try:
        client = GitHubDiscussionClient(org=org, repo=repo, discussion=discussion)
        outcome = run(
            client,
            AstroSiteDetector(),
            ShowcaseStore(content_dir=showcase_dir, image_url_prefix=image_prefix),
            normalize_origins(BLOCKED_ORIGINS),
            dry_run=dry_run,
        )
    except (MissingCredentialsError, DiscussionFetchError) as e:
        print(f"Error: {e}")
        return 1

    publish_summary(outcome)
    return 0


def handle_check(urls: List[str]) -> int:
    """Handle check command.

    Returns:
        Exit code (0 if every URL looks like an Astro site).
    """
    detector = AstroSiteDetector()
    all_astro = True
    for url in urls:
        is_astro = detector.is_astro_site(url)
        all_astro = all_astro and is_astro
        print(f"{url}: {'astro' if is_astro else 'not astro'}")
    return 0 if all_astro else 1


def handle_known(showcase_dir: str) -> int:
    """Handle known command.

    Returns:
        Exit code.
    """
    origins = ShowcaseStore(content_dir=showcase_dir).load_known_origins()
    for origin in sorted(origins):
        print(origin)
    print(f"\n{len(origins)} site(s) in the showcase")
    return 0


def main(args: Optional[list] = None) -> int:
    """Main entry point for CLI.

    Args:
        args: Command line arguments (defaults to sys.argv).

    Returns:
        Exit code (0 for success).
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    if not parsed.command:
        parser.print_help()
        return 1

    import logging
    setup_logger(level=logging.DEBUG if parsed.verbose else logging.INFO)

    if parsed.command == 'run':
        return handle_run(
            parsed.showcase_dir,
            org=parsed.org,
            repo=parsed.repo,
            discussion=parsed.discussion,
            image_prefix=parsed.image_prefix,
            dry_run=parsed.dry_run,
        )

    if parsed.command == 'check':
        return handle_check(parsed.urls)

    if parsed.command == 'known':
        return handle_known(parsed.showcase_dir)

    return 0


if __name__ == '__main__':
    sys.exit(main())
