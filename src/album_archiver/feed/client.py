# ABOUTME: Feed client fetching a batch of saved entries for a pagination cursor
# ABOUTME: httpx retrieves the document, feedparser turns it into immutable FeedEntry models

import feedparser
import httpx

from album_archiver.errors import FeedFetchError
from album_archiver.extraction.models import FeedEntry
from album_archiver.utils.logging import get_logger

logger = get_logger(__name__)


def batch_url(feed_url: str, cursor: str) -> str:
    """The feed URL for a cursor; an empty cursor requests the most recent entries."""
    url = httpx.URL(feed_url)
    if cursor:
        url = url.copy_merge_params({"after": cursor})
    return str(url)


def _entry_body(entry: feedparser.FeedParserDict) -> str:
    contents = entry.get("content") or []
    if contents and contents[0].get("value"):
        return contents[0]["value"]
    return entry.get("summary", "")


def parse_entries(document: bytes | str) -> list[FeedEntry]:
    """Parse a feed document into entries, skipping any without an identifier.

    Raises:
        FeedFetchError: If the document is malformed and yields no entries
    """
    parsed = feedparser.parse(document)
    if parsed.bozo and not parsed.entries:
        raise FeedFetchError(f"Feed could not be parsed: {parsed.get('bozo_exception')}")

    entries: list[FeedEntry] = []
    for entry in parsed.entries:
        entry_id = entry.get("id")
        if not entry_id:
            logger.debug("Skipping feed entry without id", title=entry.get("title"))
            continue
        entries.append(FeedEntry(title=entry.get("title", ""), body=_entry_body(entry), entry_id=entry_id))
    return entries


class FeedClient:
    """Retrieves feed batches through the shared connection pool."""

    def __init__(self, client: httpx.AsyncClient, feed_url: str):
        if not feed_url:
            raise FeedFetchError("Feed URL required - set ALBUM_ARCHIVER_FEED_URL")
        self.http_client = client
        self.feed_url = feed_url
        self.logger = get_logger(__name__)

    async def fetch_batch(self, cursor: str = "") -> list[FeedEntry]:
        """Fetch the batch of entries that follows ``cursor``.

        Raises:
            FeedFetchError: If the request fails or the feed cannot be parsed
        """
        url = batch_url(self.feed_url, cursor)
        self.logger.debug("Fetching feed batch", cursor=cursor or None)

        try:
            response = await self.http_client.get(url, follow_redirects=True)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise FeedFetchError(f"Feed request failed for cursor {cursor or '<latest>'}: {e}") from e

        entries = parse_entries(response.content)
        self.logger.info("Fetched feed batch", cursor=cursor or None, entry_count=len(entries))
        return entries
