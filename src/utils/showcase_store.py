"""Markdown content collection holding the showcase entries.

Each entry is one ``{hostname}.md`` file whose YAML front matter describes
the site. The files double as the deduplication ledger between runs.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Iterator, List, Optional, Set, Tuple

import yaml

from constants import DEFAULT_IMAGE_URL_PREFIX, DEFAULT_SHOWCASE_DIR, IMAGE_SUBDIR
from processor.link_extractor import get_origin

logger = logging.getLogger("showcase_scraper")

FRONT_MATTER_DELIMITER = "---"


@dataclass
class ShowcaseEntry:
    """A site in the showcase."""

    title: str
    image: str
    url: str
    date_added: datetime
    categories: List[str] = field(default_factory=list)

    def to_front_matter(self) -> dict:
        """Return the front matter mapping, in file order."""
        data = {
            "title": self.title,
            "image": self.image,
            "url": self.url,
            "dateAdded": self.date_added,
        }
        if self.categories:
            data["categories"] = list(self.categories)
        return data

    @classmethod
    def from_front_matter(cls, data: dict) -> "ShowcaseEntry":
        """Build an entry from parsed front matter.

        Raises:
            KeyError: If the ``url`` field is missing.
        """
        return cls(
            title=data.get("title") or "",
            image=data.get("image") or "",
            url=data["url"],
            date_added=data.get("dateAdded"),
            categories=data.get("categories") or [],
        )


def parse_front_matter(text: str) -> Optional[dict]:
    """Parse the YAML front matter at the top of a Markdown file.

    Returns:
        The parsed mapping, or None if the file has no front matter block.
    """
    lines = text.splitlines()
    if not lines or lines[0].strip() != FRONT_MATTER_DELIMITER:
        return None

    for index, line in enumerate(lines[1:], start=1):
        if line.strip() == FRONT_MATTER_DELIMITER:
            data = yaml.safe_load("\n".join(lines[1:index]))
            return data if isinstance(data, dict) else {}
    return None


def render_front_matter(data: dict, body: str = "") -> str:
    """Render a Markdown document with YAML front matter."""
    header = yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    return f"{FRONT_MATTER_DELIMITER}\n{header}{FRONT_MATTER_DELIMITER}\n{body}"


class ShowcaseStore:
    """Read and append showcase entries in a content directory."""

    def __init__(
        self,
        content_dir: str = DEFAULT_SHOWCASE_DIR,
        image_url_prefix: str = DEFAULT_IMAGE_URL_PREFIX,
    ):
        """Initialize the store.

        Args:
            content_dir: Directory containing one Markdown file per entry.
            image_url_prefix: Prefix written to the ``image`` field of new entries.
        """
        self.content_dir = Path(content_dir)
        self.image_dir = self.content_dir / IMAGE_SUBDIR
        self.image_url_prefix = image_url_prefix.rstrip("/")

    def iter_entries(self) -> Iterator[ShowcaseEntry]:
        """Yield every parseable entry in the content directory."""
        if not self.content_dir.is_dir():
            logger.warning(f"Showcase directory not found: {self.content_dir}")
            return

        for path in sorted(self.content_dir.glob("*.md")):
            try:
                data = parse_front_matter(path.read_text(encoding="utf-8"))
            except (OSError, yaml.YAMLError) as e:
                logger.warning(f"Failed to read showcase entry {path.name}: {e}")
                continue

            if not data or not data.get("url"):
                logger.warning(f"Skipping showcase entry without a URL: {path.name}")
                continue

            yield ShowcaseEntry.from_front_matter(data)

    def load_known_origins(self) -> Set[str]:
        """Get the origins of sites already added to the showcase."""
        origins = set()
        for entry in self.iter_entries():
            try:
                origins.add(get_origin(str(entry.url)))
            except ValueError as e:
                logger.warning(f"Invalid URL in showcase entry: {entry.url} ({e})")
        logger.debug(f"Loaded {len(origins)} known showcase origins")
        return origins

    def image_paths(self, hostname: str) -> Tuple[Path, Path]:
        """Return the (high density, standard density) screenshot paths."""
        return (
            self.image_dir / f"{hostname}@2x.webp",
            self.image_dir / f"{hostname}.webp",
        )

    def image_ref(self, hostname: str) -> str:
        """Return the value stored in an entry's ``image`` field."""
        return f"{self.image_url_prefix}/{hostname}.webp"

    def entry_path(self, hostname: str) -> Path:
        return self.content_dir / f"{hostname}.md"

    def write_entry(self, hostname: str, entry: ShowcaseEntry) -> Path:
        """Write an entry file, replacing any file for the same hostname."""
        path = self.entry_path(hostname)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(render_front_matter(entry.to_front_matter()), encoding="utf-8")
        logger.info(f"Wrote {path}")
        return path
