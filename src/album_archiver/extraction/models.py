# ABOUTME: Immutable Pydantic models for feed entries and the records derived from them
# ABOUTME: Each stage produces new instances; nothing downstream mutates an upstream record

from pydantic import BaseModel, ConfigDict, Field

RECORD_FIELDS = ("poster", "subreddit", "link", "comments", "title")


class FeedEntry(BaseModel):
    """One entry of a feed batch as handed over by the feed client."""

    model_config = ConfigDict(frozen=True)

    title: str
    body: str = Field(default="", description="Rendered HTML body of the entry")
    entry_id: str = Field(description="Unique entry identifier, doubles as the pagination cursor")


class LinkRecord(BaseModel):
    """The five positional fields of a saved link post."""

    model_config = ConfigDict(frozen=True)

    poster: str
    subreddit: str
    link: str
    comments: str
    title: str


class AlbumTarget(LinkRecord):
    """A record whose link points at an external album rather than a single image."""


class ResolvedAlbum(AlbumTarget):
    """An album target with its derived category directory and provider album ID."""

    category_name: str
    album_id: str
