# ABOUTME: Batch orchestration layer
# ABOUTME: Pipeline Stage 3: Feed cursor → processed batch → next cursor

"""
Core Layer: Batch pipeline and cursor queue

This layer handles:
- Wiring one feed batch through extraction and album download
- Computing the continuation cursor from a processed batch
- Strictly sequential, rate-limited walking of the feed

Data Flow: cursor → FeedCursorQueue → ArchivePipeline.fetch_batch → process_entries → BatchResult
"""

from .models import BatchOutcome, BatchResult
from .pipeline import ArchivePipeline
from .queue import FeedCursorQueue, QueueState, next_cursor

__all__ = [
    "ArchivePipeline",
    "BatchOutcome",
    "BatchResult",
    "FeedCursorQueue",
    "QueueState",
    "next_cursor",
]
