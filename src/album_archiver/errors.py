# ABOUTME: Exception hierarchy shared by the feed, album and document stages
# ABOUTME: Batch-level errors propagate to the queue; album-level errors are logged and contained


class ArchiverError(Exception):
    """Base exception for album archiver failures."""

    pass


class FeedFetchError(ArchiverError):
    """Raised when a feed batch cannot be retrieved or parsed."""

    pass


class AlbumResolutionError(ArchiverError):
    """Raised when the album provider cannot resolve an album to its images."""

    pass


class DocumentAssemblyError(ArchiverError):
    """Raised when downloaded pages cannot be combined into a document."""

    pass
