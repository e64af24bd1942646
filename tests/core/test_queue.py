# ABOUTME: Tests for the single-lane feed cursor queue
# ABOUTME: Covers continuation cursors, stop conditions, delays, lifecycle states, failure halting and sequencing

import asyncio

import pytest

from album_archiver.core.models import BatchOutcome, BatchResult
from album_archiver.core.queue import FeedCursorQueue, QueueState, next_cursor
from album_archiver.errors import FeedFetchError


def _result(cursor: str, ids: list[str]) -> BatchResult:
    return BatchResult(cursor=cursor, entry_count=len(ids), last_entry_id=ids[-1] if ids else None)


class ScriptedFeed:
    """Fetch and process steps driven by pre-scripted entry ids per cursor."""

    def __init__(self, batches: dict[str, list[str] | Exception]):
        self.batches = batches
        self.cursors: list[str] = []
        self.states: list[tuple[str, str]] = []
        self.queue: FeedCursorQueue | None = None
        self.active = 0
        self.max_active = 0

    def _record(self, step: str) -> None:
        if self.queue is not None:
            self.states.append((step, self.queue.state))

    async def fetch(self, cursor: str) -> list[str]:
        self.cursors.append(cursor)
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        self._record("fetch")
        try:
            await asyncio.sleep(0)
            batch = self.batches[cursor]
            if isinstance(batch, Exception):
                raise batch
            return batch
        finally:
            self.active -= 1

    async def process(self, cursor: str, entries: list[str]) -> BatchResult:
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        self._record("process")
        try:
            await asyncio.sleep(0)
            return _result(cursor, entries)
        finally:
            self.active -= 1

    def queue_for(self, **kwargs) -> FeedCursorQueue:
        kwargs.setdefault("sleep", RecordingSleep())
        self.queue = FeedCursorQueue(self.fetch, self.process, **kwargs)
        return self.queue


class RecordingSleep:
    def __init__(self):
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class TestNextCursor:
    def test_last_entry_id_continues(self):
        assert next_cursor(_result("", ["a", "b", "c"]), single_batch=False) == "c"

    def test_single_batch_stops(self):
        assert next_cursor(_result("", ["a", "b", "c"]), single_batch=True) is None

    def test_empty_batch_stops(self):
        assert next_cursor(_result("c", []), single_batch=False) is None


class TestFeedCursorQueue:
    @pytest.mark.asyncio
    async def test_walks_backward_until_empty_batch(self):
        feed = ScriptedFeed({"": ["a", "b", "c"], "c": ["d", "e"], "e": []})
        sleep = RecordingSleep()
        queue = feed.queue_for(delay_seconds=2.5, sleep=sleep)

        outcomes = await queue.run("")

        assert feed.cursors == ["", "c", "e"]
        assert [outcome.cursor for outcome in outcomes] == ["", "c", "e"]
        assert all(outcome.success for outcome in outcomes)
        assert sleep.calls == [2.5, 2.5]
        assert len(queue) == 0
        assert queue.state == QueueState.IDLE

    @pytest.mark.asyncio
    async def test_single_batch_enqueues_nothing(self):
        feed = ScriptedFeed({"": ["a", "b", "c"]})
        sleep = RecordingSleep()

        outcomes = await feed.queue_for(single_batch=True, delay_seconds=1.0, sleep=sleep).run("")

        assert feed.cursors == [""]
        assert len(outcomes) == 1
        assert sleep.calls == []

    @pytest.mark.asyncio
    async def test_starts_from_configured_cursor(self):
        feed = ScriptedFeed({"t3_old": []})

        await feed.queue_for().run("t3_old")

        assert feed.cursors == ["t3_old"]

    @pytest.mark.asyncio
    async def test_states_follow_fetch_then_process(self):
        feed = ScriptedFeed({"": ["a"], "a": []})
        queue = feed.queue_for()

        await queue.run("")

        assert feed.states == [
            ("fetch", QueueState.FETCHING),
            ("process", QueueState.PROCESSING),
            ("fetch", QueueState.FETCHING),
            ("process", QueueState.PROCESSING),
        ]
        assert queue.state == QueueState.IDLE

    @pytest.mark.asyncio
    async def test_waiting_state_during_delay(self):
        feed = ScriptedFeed({"": ["a"], "a": []})
        seen: list[str] = []

        async def sleep(seconds: float) -> None:
            seen.append(queue.state)

        queue = feed.queue_for(delay_seconds=1.0, sleep=sleep)
        await queue.run("")

        assert seen == [QueueState.WAITING]

    @pytest.mark.asyncio
    async def test_start_hook_sees_every_cursor_before_fetch(self):
        feed = ScriptedFeed({"": ["a"], "a": ["b"], "b": []})
        started: list[tuple[str, int]] = []

        await feed.queue_for(on_batch_start=lambda cursor: started.append((cursor, len(feed.cursors)))).run("")

        assert started == [("", 0), ("a", 1), ("b", 2)]

    @pytest.mark.asyncio
    async def test_failed_batch_halts_and_reports(self):
        error = FeedFetchError("feed down")
        feed = ScriptedFeed({"": ["a"], "a": error})
        reported: list[BatchOutcome] = []

        outcomes = await feed.queue_for(on_batch_complete=reported.append).run("")

        assert feed.cursors == ["", "a"]
        assert [outcome.success for outcome in reported] == [True, False]
        assert reported[-1].error is error
        assert outcomes == reported

    @pytest.mark.asyncio
    async def test_callback_invoked_once_per_batch(self):
        feed = ScriptedFeed({"": ["a"], "a": ["b"], "b": []})
        reported: list[BatchOutcome] = []

        await feed.queue_for(on_batch_complete=reported.append).run("")

        assert [outcome.result.entry_count for outcome in reported] == [1, 1, 0]

    @pytest.mark.asyncio
    async def test_batches_never_overlap(self):
        feed = ScriptedFeed({"": ["a"], "a": ["b"], "b": ["c"], "c": []})

        await feed.queue_for().run("")

        assert feed.max_active == 1

    @pytest.mark.asyncio
    async def test_backlog_is_processed_in_order(self):
        feed = ScriptedFeed({"x": [], "y": [], "": []})
        queue = feed.queue_for()
        queue.enqueue("x")
        queue.enqueue("y")

        await queue.run("")

        assert feed.cursors == ["x", "y", ""]
