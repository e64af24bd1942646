# ABOUTME: Feed entry extraction layer - links, typed records, album targets
# ABOUTME: Pipeline Stage 1: Feed entry → LinkRecord → AlbumTarget → ResolvedAlbum

"""
Extraction Layer: Pure transforms from feed entries to album targets

This layer handles:
- Hyperlink extraction from an entry's rendered body
- Positional mapping of link sequences onto typed records
- Selection of records that point at external albums
- Derivation of filesystem-safe category names and album identifiers

Data Flow: FeedEntry → extract_links → build_records → filter_albums → resolve_metadata
"""

from .links import extract_links
from .models import AlbumTarget, FeedEntry, LinkRecord, ResolvedAlbum
from .records import build_records, filter_albums, is_album_link, last_path_segment, resolve_metadata

__all__ = [
    "AlbumTarget",
    "FeedEntry",
    "LinkRecord",
    "ResolvedAlbum",
    "build_records",
    "extract_links",
    "filter_albums",
    "is_album_link",
    "last_path_segment",
    "resolve_metadata",
]
