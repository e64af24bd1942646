# ABOUTME: Album download orchestration - resolve, fetch pages concurrently, assemble the PDF
# ABOUTME: Resumable: existing pages are never refetched and complete albums cost zero requests

import asyncio
import json
import unicodedata
from pathlib import Path

import httpx

from album_archiver.albums.document import assemble_document
from album_archiver.albums.models import AlbumImage, AlbumResult, DownloadedPage
from album_archiver.albums.provider import ImgurAlbumProvider
from album_archiver.errors import AlbumResolutionError, DocumentAssemblyError
from album_archiver.extraction.models import ResolvedAlbum
from album_archiver.utils.files import write_bytes_atomic
from album_archiver.utils.logging import get_logger, with_album_context

MANIFEST_NAME = "missing_pages.json"
DECORATIVE_CATEGORIES = {"So", "Sk", "Cf", "Cs", "Co"}
# Leaves room for ".pdf" and temp-file affixes under the usual 255-byte name limit
MAX_TITLE_BYTES = 200


def _is_decorative(char: str) -> bool:
    if ord(char) < 128:
        return False
    return ord(char) > 0xFFFF or unicodedata.category(char) in DECORATIVE_CATEGORIES or 0xFE00 <= ord(char) <= 0xFE0F


def sanitize_title(title: str, fallback: str) -> str:
    """Strip emoji and other decorative symbols so the title is usable as a directory name."""
    kept = "".join(char for char in title if not _is_decorative(char))
    cleaned = " ".join(kept.replace("/", "-").split())
    cleaned = cleaned.encode("utf-8")[:MAX_TITLE_BYTES].decode("utf-8", "ignore").rstrip()
    if not cleaned.strip("."):
        return fallback
    return cleaned


def page_filename(index: int, extension: str) -> str:
    """File name for a page: two-digit zero padding up to index 9, plain digits beyond."""
    return f"page_{index:02d}.{extension}"


class AlbumDownloader:
    """Downloads album pages through a shared connection pool and builds one PDF per album."""

    def __init__(self, client: httpx.AsyncClient, provider: ImgurAlbumProvider, destination_root: Path):
        self.http_client = client
        self.provider = provider
        self.destination_root = Path(destination_root)
        self.logger = get_logger(__name__)

    def album_dir(self, album: ResolvedAlbum) -> Path:
        return self.destination_root / album.category_name / sanitize_title(album.title, album.album_id)

    def document_path(self, album: ResolvedAlbum) -> Path:
        album_dir = self.album_dir(album)
        return album_dir / f"{album_dir.name}.pdf"

    async def download_album(self, album: ResolvedAlbum) -> AlbumResult:
        """Archive one album. Never raises for album-level failures; they are logged and reported."""
        result = AlbumResult(album=album)

        with with_album_context(album.album_id, album.title, category=album.category_name) as logger:
            try:
                return await self._archive(album, result, logger)
            except Exception as e:
                logger.error("Album download failed", error=str(e), error_type=type(e).__name__)
                result.error = str(e)
                return result

    async def _archive(self, album: ResolvedAlbum, result: AlbumResult, logger) -> AlbumResult:
        album_dir = self.album_dir(album)
        document = self.document_path(album)
        manifest = album_dir / MANIFEST_NAME

        if await asyncio.to_thread(self._is_archived, document, manifest):
            logger.info("Album already archived, skipping", document=str(document))
            return AlbumResult(album=album, skipped=True, document=document)

        try:
            images = await self.provider.resolve(album.album_id)
        except AlbumResolutionError as e:
            logger.error("Album resolution failed", error=str(e))
            return result

        result.resolved = True
        result.image_count = len(images)
        if not images:
            logger.info("Album has no images, nothing to download")
            return result

        await asyncio.to_thread(album_dir.mkdir, parents=True, exist_ok=True)
        fetched = await asyncio.gather(
            *(self.fetch_page(album, image, index, album_dir) for index, image in enumerate(images))
        )
        result.pages = [page for page in fetched if page is not None]
        result.missing_pages = [index for index, page in enumerate(fetched) if page is None]

        if not result.pages:
            logger.warning("No pages downloaded, skipping document", image_count=len(images))
            return result

        try:
            assembled = await assemble_document(result.pages, document)
        except DocumentAssemblyError as e:
            logger.error("Document assembly failed", error=str(e))
            return result
        result.document = assembled.path
        result.undecodable_pages = assembled.undecodable_pages

        await asyncio.to_thread(
            self._update_manifest, manifest, album, images, result.missing_pages, result.undecodable_pages
        )
        if result.undecodable_pages:
            logger.warning("Left undecodable pages out of document", undecodable_pages=result.undecodable_pages)
        if result.missing_pages:
            logger.warning(
                "Album archived with missing pages",
                missing_pages=result.missing_pages,
                page_count=len(result.pages),
            )
        else:
            logger.info("Album archived", page_count=len(result.pages), document=str(document))
        return result

    async def fetch_page(
        self, album: ResolvedAlbum, image: AlbumImage, index: int, album_dir: Path
    ) -> DownloadedPage | None:
        """Fetch one page unless it is already on disk; None when the fetch fails."""
        destination = album_dir / page_filename(index, image.extension)
        if await asyncio.to_thread(destination.exists):
            return DownloadedPage(path=destination, index=index)

        try:
            response = await self.http_client.get(image.link)
            response.raise_for_status()
            await asyncio.to_thread(write_bytes_atomic, destination, response.content)
        except (httpx.HTTPError, OSError) as e:
            self.logger.error(
                "Page download failed",
                album_title=album.title,
                album_id=album.album_id,
                page_index=index,
                link=image.link,
                error=str(e),
                error_type=type(e).__name__,
            )
            return None

        return DownloadedPage(path=destination, index=index)

    @staticmethod
    def _is_archived(document: Path, manifest: Path) -> bool:
        """A document counts as final unless its manifest still lists pages to fetch."""
        if not document.exists():
            return False
        if not manifest.exists():
            return True
        try:
            recorded = json.loads(manifest.read_text(encoding="utf-8"))
        except ValueError:
            return False
        return isinstance(recorded, dict) and not recorded.get("missing_pages")

    @staticmethod
    def _update_manifest(
        manifest: Path,
        album: ResolvedAlbum,
        images: list[AlbumImage],
        missing_pages: list[int],
        undecodable_pages: list[int],
    ) -> None:
        """Record which pages the document lacks; only missing ones are retried by a later run."""
        if not missing_pages and not undecodable_pages:
            manifest.unlink(missing_ok=True)
            return
        payload = {
            "album_id": album.album_id,
            "title": album.title,
            "missing_pages": [{"index": index, "link": images[index].link} for index in missing_pages],
            "undecodable_pages": [{"index": index, "link": images[index].link} for index in undecodable_pages],
        }
        write_bytes_atomic(manifest, json.dumps(payload, indent=2).encode("utf-8"))
