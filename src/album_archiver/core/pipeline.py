# ABOUTME: Batch pipeline - fetch a feed batch and push it through extraction and album download
# ABOUTME: Album failures stay inside their album; only feed failures fail the batch

import asyncio

from album_archiver.albums.downloader import AlbumDownloader
from album_archiver.core.models import BatchResult
from album_archiver.extraction import build_records, extract_links, filter_albums, resolve_metadata
from album_archiver.extraction.models import FeedEntry
from album_archiver.feed.client import FeedClient
from album_archiver.utils.logging import get_logger


class ArchivePipeline:
    """Runs every stage for one feed batch."""

    def __init__(self, feed_client: FeedClient, downloader: AlbumDownloader, verbose: bool = False):
        self.feed_client = feed_client
        self.downloader = downloader
        self.verbose = verbose
        self.logger = get_logger(__name__)

    async def fetch_batch(self, cursor: str) -> list[FeedEntry]:
        """Stage 1: retrieve the entries after ``cursor``.

        Raises:
            FeedFetchError: If the batch cannot be fetched
        """
        return await self.feed_client.fetch_batch(cursor)

    async def process_entries(self, cursor: str, entries: list[FeedEntry]) -> BatchResult:
        """Stage 2: extract album targets from the entries and archive each of them."""
        link_sequences = []
        for entry in entries:
            links = extract_links(entry)
            if self.verbose:
                self.logger.info("Feed entry", entry_id=entry.entry_id, title=entry.title, links=list(links))
            link_sequences.append(links)

        records = build_records(link_sequences)
        albums = [resolve_metadata(target) for target in filter_albums(records)]
        self.logger.info(
            "Batch extracted",
            cursor=cursor or None,
            entry_count=len(entries),
            record_count=len(records),
            album_count=len(albums),
        )

        # All albums settle before the batch counts as processed
        album_results = await asyncio.gather(*(self.downloader.download_album(album) for album in albums))

        return BatchResult(
            cursor=cursor,
            entry_count=len(entries),
            last_entry_id=entries[-1].entry_id if entries else None,
            albums=list(album_results),
        )

    async def process_batch(self, cursor: str) -> BatchResult:
        """Fetch the batch after ``cursor`` and archive every album it references."""
        entries = await self.fetch_batch(cursor)
        return await self.process_entries(cursor, entries)
