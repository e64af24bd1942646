# ABOUTME: Batch-level results exchanged between the pipeline and the cursor queue
# ABOUTME: BatchResult carries the continuation data; BatchOutcome adds success or failure

from pydantic import BaseModel, ConfigDict, Field

from album_archiver.albums.models import AlbumResult


class BatchResult(BaseModel):
    """What one pipeline run over a feed batch produced."""

    cursor: str
    entry_count: int = 0
    last_entry_id: str | None = None
    albums: list[AlbumResult] = Field(default_factory=list)

    @property
    def incomplete_albums(self) -> list[AlbumResult]:
        return [album for album in self.albums if not album.complete]


class BatchOutcome(BaseModel):
    """Completion report for one dequeued cursor."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    cursor: str
    result: BatchResult | None = None
    error: BaseException | None = None

    @property
    def success(self) -> bool:
        return self.error is None
