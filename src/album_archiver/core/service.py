# ABOUTME: High-level service API wiring config, the shared HTTP pool, pipeline and cursor queue
# ABOUTME: Owns the connection pool lifetime so every fetch in a run shares one admission limit

from __future__ import annotations

import httpx

from album_archiver.albums.downloader import AlbumDownloader
from album_archiver.albums.provider import ImgurAlbumProvider
from album_archiver.config import Config, get_config
from album_archiver.core.models import BatchOutcome
from album_archiver.core.pipeline import ArchivePipeline
from album_archiver.core.queue import CompletionCallback, FeedCursorQueue, StartCallback
from album_archiver.extraction import ResolvedAlbum, build_records, extract_links, filter_albums, resolve_metadata
from album_archiver.extraction.models import FeedEntry
from album_archiver.feed.client import FeedClient
from album_archiver.utils.logging import get_logger


def build_http_client(config: Config) -> httpx.AsyncClient:
    """Create the connection pool shared by feed, album API and image fetches."""
    return httpx.AsyncClient(
        limits=httpx.Limits(max_connections=config.max_sockets, max_keepalive_connections=config.max_sockets),
        timeout=httpx.Timeout(config.request_timeout),
        headers={"User-Agent": config.user_agent},
        follow_redirects=True,
    )


class ArchiveService:
    """Service for archiving the albums referenced by a saved-links feed."""

    def __init__(self, config: Config | None = None, client: httpx.AsyncClient | None = None):
        self.config = config or get_config()
        self.http_client = client or build_http_client(self.config)  # Allow for dependency injection
        self.logger = get_logger(__name__)

        self.feed_client = FeedClient(self.http_client, self.config.feed_url)
        self.provider = ImgurAlbumProvider(
            self.http_client, self.config.imgur_client_id, api_base=self.config.album_api_base
        )
        self.downloader = AlbumDownloader(self.http_client, self.provider, self.config.destination_root)
        self.pipeline = ArchivePipeline(self.feed_client, self.downloader, verbose=self.config.verbose)

    def create_queue(
        self,
        on_batch_start: StartCallback | None = None,
        on_batch_complete: CompletionCallback | None = None,
    ) -> FeedCursorQueue:
        return FeedCursorQueue(
            self.pipeline.fetch_batch,
            self.pipeline.process_entries,
            single_batch=self.config.single_batch,
            delay_seconds=self.config.batch_delay_seconds,
            on_batch_start=on_batch_start,
            on_batch_complete=on_batch_complete,
        )

    async def run(
        self,
        on_batch_start: StartCallback | None = None,
        on_batch_complete: CompletionCallback | None = None,
    ) -> list[BatchOutcome]:
        """Walk the feed from the configured start cursor until it is exhausted or a batch fails."""
        self.logger.info(
            "Starting feed walk",
            start_cursor=self.config.start_cursor or None,
            single_batch=self.config.single_batch,
            destination=str(self.config.destination_root),
            max_sockets=self.config.max_sockets,
        )
        queue = self.create_queue(on_batch_start, on_batch_complete)
        return await queue.run(self.config.start_cursor)

    async def preview(self, cursor: str = "") -> tuple[list[FeedEntry], list[ResolvedAlbum]]:
        """Fetch one batch and return its entries and album targets without downloading."""
        entries = await self.feed_client.fetch_batch(cursor)
        records = build_records(extract_links(entry) for entry in entries)
        return entries, [resolve_metadata(target) for target in filter_albums(records)]

    async def close(self) -> None:
        """Release the shared connection pool."""
        await self.http_client.aclose()
