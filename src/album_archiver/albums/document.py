# ABOUTME: PDF assembly from downloaded album pages using Pillow
# ABOUTME: Every page keeps its image's native size; order follows tracked page indices

import asyncio
from collections.abc import Sequence
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from album_archiver.albums.models import AssembledDocument, DownloadedPage
from album_archiver.errors import DocumentAssemblyError
from album_archiver.utils.files import atomic_destination

# At 72 dpi one pixel maps to one PDF point, so page size equals image size
PDF_RESOLUTION = 72.0


def _load_rgb(path: Path) -> Image.Image:
    with Image.open(path) as raw_image:
        return raw_image.convert("RGB")


def _write_pdf(pages: Sequence[DownloadedPage], destination: Path) -> list[int]:
    images: list[Image.Image] = []
    undecodable: list[int] = []
    try:
        for page in pages:
            try:
                images.append(_load_rgb(page.path))
            except UnidentifiedImageError:
                # Videos and other non-image album items
                undecodable.append(page.index)
        if not images:
            raise DocumentAssemblyError(f"No decodable pages for {destination.name}")

        first, *rest = images
        with atomic_destination(destination) as tmp_path:
            first.save(tmp_path, format="PDF", save_all=True, append_images=rest, resolution=PDF_RESOLUTION)
    finally:
        for image in images:
            image.close()
    return undecodable


async def assemble_document(pages: Sequence[DownloadedPage], destination: Path) -> AssembledDocument:
    """Combine downloaded pages into one PDF, one page per image in index order.

    Pages Pillow cannot identify (videos, unknown formats) are left out and
    reported on the returned document.

    Args:
        pages: Successfully downloaded pages, in any order
        destination: Output PDF path

    Returns:
        The written document and the indices of the pages it left out

    Raises:
        DocumentAssemblyError: If no page is decodable or the document cannot be written
    """
    if not pages:
        raise DocumentAssemblyError(f"No pages to assemble into {destination.name}")

    ordered = sorted(pages, key=lambda page: page.index)
    try:
        undecodable = await asyncio.to_thread(_write_pdf, ordered, destination)
    except (OSError, Image.DecompressionBombError) as e:
        raise DocumentAssemblyError(f"Failed to assemble {destination.name}: {e}") from e
    return AssembledDocument(path=destination, undecodable_pages=undecodable)
