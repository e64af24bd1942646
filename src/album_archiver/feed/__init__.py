# ABOUTME: Saved-links feed access
# ABOUTME: Fetches one batch of entries per pagination cursor over the shared HTTP pool

from .client import FeedClient, batch_url, parse_entries

__all__ = ["FeedClient", "batch_url", "parse_entries"]
