# ABOUTME: Record building, album filtering and metadata derivation for extracted link sequences
# ABOUTME: Pure functions: wrong-arity sequences are dropped, album targets resolved by copy

from collections.abc import Iterable, Sequence
from urllib.parse import urlparse

from album_archiver.extraction.models import RECORD_FIELDS, AlbumTarget, LinkRecord, ResolvedAlbum
from album_archiver.utils.logging import get_logger

ALBUM_HOST = "imgur.com"
SINGLE_IMAGE_SUFFIXES = (".jpg", ".png")

logger = get_logger(__name__)


def build_records(sequences: Iterable[Sequence[str]]) -> list[LinkRecord]:
    """Map exactly-five-element link sequences onto LinkRecords.

    Sequences of any other length are not image posts and are dropped silently.
    """
    records: list[LinkRecord] = []
    for sequence in sequences:
        if len(sequence) != len(RECORD_FIELDS):
            logger.debug("Dropping entry with unexpected link count", link_count=len(sequence))
            continue
        records.append(LinkRecord(**dict(zip(RECORD_FIELDS, sequence, strict=True))))
    return records


def is_album_link(link: str) -> bool:
    """Whether a link points at a provider album instead of a single image file."""
    parsed = urlparse(link)
    host = (parsed.hostname or "").lower()
    if not host.endswith(ALBUM_HOST):
        return False
    return not parsed.path.lower().endswith(SINGLE_IMAGE_SUFFIXES)


def filter_albums(records: Iterable[LinkRecord]) -> list[AlbumTarget]:
    """Select the records whose link is an external album reference."""
    return [AlbumTarget(**record.model_dump()) for record in records if is_album_link(record.link)]


def last_path_segment(value: str) -> str:
    """Strip one trailing separator and return what follows the last remaining one.

    Example: "/r/aww/" -> "aww", "https://imgur.com/a/abcd12/" -> "abcd12"
    """
    if value.endswith("/"):
        value = value[:-1]
    return value.rsplit("/", 1)[-1]


def resolve_metadata(target: AlbumTarget) -> ResolvedAlbum:
    """Derive the category directory and album ID for an album target."""
    return ResolvedAlbum(
        **target.model_dump(),
        category_name=last_path_segment(target.subreddit),
        album_id=last_path_segment(target.link),
    )
