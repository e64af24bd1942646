# ABOUTME: Album resolution, page download and PDF assembly
# ABOUTME: Pipeline Stage 2: ResolvedAlbum → ordered AlbumImages → DownloadedPages → PDF document

from .document import assemble_document
from .downloader import AlbumDownloader, page_filename, sanitize_title
from .models import AlbumImage, AlbumResult, AssembledDocument, DownloadedPage
from .provider import ImgurAlbumProvider

__all__ = [
    "AlbumDownloader",
    "AlbumImage",
    "AlbumResult",
    "AssembledDocument",
    "DownloadedPage",
    "ImgurAlbumProvider",
    "assemble_document",
    "page_filename",
    "sanitize_title",
]
