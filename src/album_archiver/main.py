# ABOUTME: Main CLI application entry point using asyncclick for native async support
# ABOUTME: Provides commands to archive feed albums, preview a batch and inspect logging

from pathlib import Path

import asyncclick as click
from rich.console import Console
from rich.panel import Panel

from album_archiver.config import get_config
from album_archiver.core.models import BatchOutcome
from album_archiver.errors import FeedFetchError
from album_archiver.utils.logging import (
    LoggingMode,
    configure_logging,
    create_batch_progress,
    get_logging_status,
    with_pipeline_context,
)
from album_archiver.utils.rich_tables import (
    create_album_results_table,
    create_album_targets_table,
    create_batch_summary_table,
    create_logging_status_table,
    print_rich_table,
)

console = Console()


@click.command()
@click.option("--start-cursor", default=None, help="Entry ID to continue after (default: most recent)")
@click.option("--single-batch", is_flag=True, help="Process only one feed batch")
@click.option("--destination", type=click.Path(path_type=Path), default=None, help="Album output root")
@click.option("--max-sockets", type=click.IntRange(min=1), default=None, help="Connection pool size")
@click.option("--delay", type=click.FloatRange(min=0.0), default=None, help="Seconds to wait between batches")
@click.option("--verbose", "-v", is_flag=True, help="Log every feed entry and its links")
@click.pass_context
async def run(
    ctx,
    start_cursor: str | None,
    single_batch: bool,
    destination: Path | None,
    max_sockets: int | None,
    delay: float | None,
    verbose: bool,
):
    """
    🗂️ Archive every album referenced by the saved feed.

    Walks the feed backward batch by batch, downloads each album's images and
    assembles one PDF per album. Reruns skip anything already on disk.
    """
    overrides = {
        "start_cursor": start_cursor,
        "destination_root": destination,
        "max_sockets": max_sockets,
        "batch_delay_seconds": delay,
    }
    config = get_config().model_copy(update={key: value for key, value in overrides.items() if value is not None})
    config = config.model_copy(
        update={"single_batch": single_batch or config.single_batch, "verbose": verbose or config.verbose}
    )

    outcomes = await _run_async(config, ctx.obj["json_output"])
    if any(not outcome.success for outcome in outcomes):
        ctx.exit(1)


async def _run_async(config, json_output: bool) -> list[BatchOutcome]:
    """Run the feed walk with optional progress display."""
    from album_archiver.core.service import ArchiveService

    if not config.feed_url:
        console.print("[red]❌ No feed URL configured - set ALBUM_ARCHIVER_FEED_URL[/red]")
        return [BatchOutcome(cursor=config.start_cursor, error=FeedFetchError("Feed URL not configured"))]

    if not config.imgur_client_id and not json_output:
        console.print("[yellow]⚠️ ALBUM_ARCHIVER_IMGUR_CLIENT_ID is not set; album lookups will be rejected[/yellow]")

    with with_pipeline_context("feed_walk", destination=str(config.destination_root)) as logger:
        service = ArchiveService(config)
        try:
            if json_output:
                outcomes = await service.run()
            else:
                console.print(
                    Panel.fit(
                        f"🗂️ [bold cyan]Album Archiver[/bold cyan]\nSaving to {config.destination_root}",
                        border_style="magenta",
                    )
                )
                progress, tracker = create_batch_progress(console)

                def on_batch_complete(outcome: BatchOutcome) -> None:
                    if outcome.success:
                        tracker.batch_finished(len(outcome.result.albums))

                with progress:
                    outcomes = await service.run(
                        on_batch_start=tracker.batch_started, on_batch_complete=on_batch_complete
                    )
        finally:
            await service.close()

        logger.info("Feed walk complete", batches=len(outcomes))

    if not json_output:
        results = [outcome.result for outcome in outcomes if outcome.success]
        if any(result.albums for result in results):
            print_rich_table(console, create_album_results_table(results))
        print_rich_table(console, create_batch_summary_table(outcomes))

    return outcomes


@click.command()
@click.option("--cursor", default="", help="Entry ID to list entries after (default: most recent)")
@click.pass_context
async def preview(ctx, cursor: str):
    """
    🔎 Show the album targets of one feed batch without downloading.
    """
    from album_archiver.core.service import ArchiveService

    config = get_config()
    if not config.feed_url:
        console.print("[red]❌ No feed URL configured - set ALBUM_ARCHIVER_FEED_URL[/red]")
        ctx.exit(1)

    service = ArchiveService(config)
    try:
        entries, albums = await service.preview(cursor)
    except FeedFetchError as e:
        console.print(f"[red]❌ {e}[/red]")
        ctx.exit(1)
    finally:
        await service.close()

    if ctx.obj["json_output"]:
        for album in albums:
            click.echo(album.model_dump_json())
        return

    console.print(f"📰 {len(entries)} entries, 🖼️ {len(albums)} album targets")
    if albums:
        print_rich_table(console, create_album_targets_table(albums))
    if entries:
        console.print(f"🔖 Next cursor: [bold]{entries[-1].entry_id}[/bold]")


def _initialize_logging(json_output: bool, log_level: str | None = None, log_file: str | None = None) -> None:
    """Initialize logging configuration."""
    config = get_config()
    mode = LoggingMode.PRODUCTION if json_output else LoggingMode.INTERACTIVE

    # Use config defaults when CLI parameters are not provided
    final_log_level = log_level or config.log_level
    final_log_file = log_file or (str(config.log_file) if config.log_file else None)

    configure_logging(mode=mode, log_level=final_log_level, log_file=final_log_file)


@click.command(name="logging-status")
def logging_status():
    """
    📊 Show current logging configuration and status.
    """
    status = get_logging_status()
    print_rich_table(console, create_logging_status_table(status))


@click.group(invoke_without_command=True)
@click.option("--json", is_flag=True, help="Output structured JSON logs instead of rich interface")
@click.option("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ERROR)")
@click.option("--log-file", help="Custom log file path")
@click.pass_context
def app(ctx, json: bool, log_level: str | None, log_file: str | None):
    """
    🗂️ Album Archiver - saved feed album downloader

    Turns the image albums linked from a saved-links feed into one PDF per album.
    """
    ctx.ensure_object(dict)
    ctx.obj["json_output"] = json

    # Initialize logging once here instead of in each command
    _initialize_logging(json, log_level, log_file)

    # Show help if no command provided
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


app.add_command(run)
app.add_command(preview)
app.add_command(logging_status)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
