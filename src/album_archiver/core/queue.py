# ABOUTME: Single-lane cursor queue walking the feed backward one batch at a time
# ABOUTME: Each processed batch yields at most one follow-up cursor; failures halt the walk

import asyncio
from collections import deque
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from album_archiver.core.models import BatchOutcome, BatchResult
from album_archiver.utils.logging import get_logger

BatchFetcher = Callable[[str], Awaitable[Sequence[Any]]]
BatchProcessor = Callable[[str, Any], Awaitable[BatchResult]]
StartCallback = Callable[[str], None]
CompletionCallback = Callable[[BatchOutcome], None]


class QueueState:
    """Queue lifecycle constants."""

    IDLE = "idle"
    FETCHING = "fetching"
    PROCESSING = "processing"
    WAITING = "waiting"


def next_cursor(result: BatchResult, single_batch: bool) -> str | None:
    """The cursor for the next older batch, or None when the walk should stop."""
    if single_batch or result.entry_count == 0:
        return None
    return result.last_entry_id


class FeedCursorQueue:
    """Strictly sequential queue of feed cursors.

    Each cursor goes idle -> fetching -> processing, then either enqueues the
    next cursor or stops. Batch N+1 is never started before batch N has fully
    settled, and the queue waits ``delay_seconds`` before dequeuing it.
    """

    def __init__(
        self,
        fetch_batch: BatchFetcher,
        process_entries: BatchProcessor,
        *,
        single_batch: bool = False,
        delay_seconds: float = 0.0,
        on_batch_start: StartCallback | None = None,
        on_batch_complete: CompletionCallback | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.fetch_batch = fetch_batch
        self.process_entries = process_entries
        self.single_batch = single_batch
        self.delay_seconds = delay_seconds
        self.on_batch_start = on_batch_start
        self.on_batch_complete = on_batch_complete
        self._sleep = sleep
        self._pending: deque[str] = deque()
        self.state = QueueState.IDLE
        self.logger = get_logger(__name__)

    def __len__(self) -> int:
        return len(self._pending)

    def enqueue(self, cursor: str) -> None:
        self._pending.append(cursor)

    async def run(self, initial_cursor: str = "") -> list[BatchOutcome]:
        """Process cursors until the lane is empty or a batch fails.

        Args:
            initial_cursor: Starting token; empty means the most recent entries

        Returns:
            One outcome per processed batch, in processing order
        """
        self.enqueue(initial_cursor)
        outcomes: list[BatchOutcome] = []

        while self._pending:
            cursor = self._pending.popleft()
            if self.on_batch_start is not None:
                self.on_batch_start(cursor)

            outcome = await self._run_one(cursor)
            outcomes.append(outcome)

            if self.on_batch_complete is not None:
                self.on_batch_complete(outcome)

            if not outcome.success:
                self.logger.error("Batch failed, stopping feed walk", cursor=cursor or None, error=str(outcome.error))
                self._pending.clear()
                break

            follow_up = next_cursor(outcome.result, self.single_batch)
            if follow_up is not None:
                self.enqueue(follow_up)

            if self._pending and self.delay_seconds > 0:
                self.state = QueueState.WAITING
                await self._sleep(self.delay_seconds)

        self.state = QueueState.IDLE
        self.logger.info("Feed walk finished", batches=len(outcomes))
        return outcomes

    async def _run_one(self, cursor: str) -> BatchOutcome:
        try:
            self.state = QueueState.FETCHING
            entries = await self.fetch_batch(cursor)
            self.state = QueueState.PROCESSING
            result = await self.process_entries(cursor, entries)
        except Exception as e:
            return BatchOutcome(cursor=cursor, error=e)
        return BatchOutcome(cursor=cursor, result=result)
