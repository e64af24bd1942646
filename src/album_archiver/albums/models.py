# ABOUTME: Models for provider images, downloaded pages and per-album outcomes
# ABOUTME: Page indices follow the provider's ordering and drive document page order

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from album_archiver.extraction.models import ResolvedAlbum


class AlbumImage(BaseModel):
    """One image of an album as listed by the provider."""

    model_config = ConfigDict(frozen=True)

    link: str
    mime_type: str = Field(default="image/jpeg")

    @property
    def extension(self) -> str:
        """File extension taken verbatim from the MIME subtype."""
        return self.mime_type.rsplit("/", 1)[-1]


class DownloadedPage(BaseModel):
    """An image stored on disk together with its position in the album."""

    model_config = ConfigDict(frozen=True)

    path: Path
    index: int


class AlbumResult(BaseModel):
    """Outcome of archiving one album."""

    album: ResolvedAlbum
    resolved: bool = False
    skipped: bool = False
    image_count: int = 0
    pages: list[DownloadedPage] = Field(default_factory=list)
    missing_pages: list[int] = Field(default_factory=list)
    undecodable_pages: list[int] = Field(default_factory=list)
    document: Path | None = None
    error: str | None = None

    @property
    def complete(self) -> bool:
        if self.skipped:
            return True
        if not self.resolved or self.error is not None or self.missing_pages:
            return False
        return self.document is not None or self.image_count == 0


class AssembledDocument(BaseModel):
    """A written PDF and the downloaded pages it had to leave out."""

    model_config = ConfigDict(frozen=True)

    path: Path
    undecodable_pages: list[int] = Field(default_factory=list)
