# ABOUTME: Batch progress display using Rich's spinner columns
# ABOUTME: Shows which feed batch the queue is working on during interactive runs

from typing import Any

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn


class BatchProgressTracker:
    """Updates the spinner description as batches start and finish."""

    def __init__(self, progress: Progress, task_id: Any):
        self.progress = progress
        self.task_id = task_id
        self.batches = 0
        self.albums = 0

    def batch_started(self, cursor: str) -> None:
        label = cursor or "latest"
        self.progress.update(self.task_id, description=f"📥 Batch {self.batches + 1} (after {label})")

    def batch_finished(self, album_count: int) -> None:
        self.batches += 1
        self.albums += album_count
        self.progress.update(
            self.task_id, description=f"🗂️ {self.batches} batches, {self.albums} albums archived so far"
        )


def create_batch_progress(
    console: Console, initial_description: str = "📡 Fetching saved feed..."
) -> tuple[Progress, BatchProgressTracker]:
    """Create a transient spinner progress display.

    Args:
        console: Rich console instance
        initial_description: Initial progress description

    Returns:
        Tuple of (progress, tracker)
    """
    progress = Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )

    task_id = progress.add_task(initial_description, total=None)
    return progress, BatchProgressTracker(progress, task_id)
