# ABOUTME: Hyperlink extraction from a feed entry's rendered body using BeautifulSoup
# ABOUTME: Yields hrefs in document order followed by a path-safe version of the entry title

from bs4 import BeautifulSoup

from album_archiver.extraction.models import FeedEntry
from album_archiver.utils.logging import get_logger

TITLE_SEPARATOR = "-"

logger = get_logger(__name__)


def clean_title(title: str) -> str:
    """Replace path separators in a title and trim surrounding whitespace."""
    return title.replace("/", TITLE_SEPARATOR).strip()


def extract_links(entry: FeedEntry) -> tuple[str, ...]:
    """Extract the hyperlink targets of an entry, followed by its cleaned title.

    Anchors without an ``href`` are skipped. Malformed markup never raises; it
    just yields fewer links, which the record builder then discards.
    """
    soup = BeautifulSoup(entry.body or "", "html.parser")
    hrefs = [anchor.get("href") for anchor in soup.find_all("a")]
    links = tuple(str(href) for href in hrefs if href is not None)

    logger.debug("Extracted entry links", entry_id=entry.entry_id, link_count=len(links))
    return (*links, clean_title(entry.title))
