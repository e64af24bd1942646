# ABOUTME: Rich table utilities for run summaries, feed previews and logging status
# ABOUTME: Provides pre-configured table generators for the CLI's display patterns

from typing import Any

from rich.box import ROUNDED
from rich.console import Console
from rich.table import Table


def create_key_value_table(
    title: str,
    data: dict[str, str],
    title_style: str = "bold cyan",
    key_style: str = "bold blue",
    value_style: str = "green",
    box_style=ROUNDED,
) -> Table:
    """Create a two-column key/value table.

    Args:
        title: Table title with emoji/styling
        data: Dictionary of key-value pairs to display
        title_style: Style for the table title
        key_style: Style for the key column
        value_style: Style for the value column
        box_style: Border style for the table

    Returns:
        Formatted Rich table ready for printing
    """
    table = Table(
        title=f"[{title_style}]{title}[/{title_style}]",
        box=box_style,
        show_header=True,
        header_style="bold magenta",
        border_style="cyan",
        title_justify="left",
        expand=False,
    )

    table.add_column("Field", style=key_style, no_wrap=False)
    table.add_column("Value", style=value_style, no_wrap=False)

    for key, value in data.items():
        table.add_row(key, str(value))

    return table


def create_multi_column_table(
    title: str,
    columns: list[tuple[str, str]],
    rows: list[list[str]],
    title_style: str = "bold cyan",
    header_style: str = "bold magenta",
    alternate_row_styles: list[str] | None = None,
    box_style=ROUNDED,
) -> Table:
    """Create a multi-column table with zebra striping.

    Args:
        title: Table title with emoji/styling
        columns: List of (column_name, column_style) tuples
        rows: List of row data
        title_style: Style for the table title
        header_style: Style for column headers
        alternate_row_styles: Alternating row styles for zebra striping
        box_style: Border style for the table

    Returns:
        Formatted Rich table ready for printing
    """
    table = Table(
        title=f"[{title_style}]{title}[/{title_style}]",
        box=box_style,
        show_header=True,
        header_style=header_style,
        border_style="cyan",
        title_justify="left",
        row_styles=alternate_row_styles or ["", "dim"],
        expand=True,
    )

    for name, style in columns:
        table.add_column(name, style=style)

    for row in rows:
        table.add_row(*row)

    return table


def _album_status(album: Any) -> str:
    if album.skipped:
        return "⏭️ already archived"
    if album.error is not None:
        return "❌ failed"
    if not album.resolved:
        return "❌ unresolved"
    if album.document is None:
        return "⚠️ no document"
    if album.missing_pages:
        return f"⚠️ missing {', '.join(str(index) for index in album.missing_pages)}"
    if album.undecodable_pages:
        return f"✅ archived, left out {', '.join(str(index) for index in album.undecodable_pages)}"
    return "✅ archived"


def create_album_results_table(batches: list[Any]) -> Table:
    """Summarize every album processed across the given batch results."""
    rows = []
    for batch in batches:
        for album in batch.albums:
            rows.append(
                [
                    album.album.category_name,
                    album.album.title,
                    album.album.album_id,
                    f"{len(album.pages)}/{album.image_count}" if album.resolved else "-",
                    _album_status(album),
                ]
            )

    return create_multi_column_table(
        title="🗂️ Archived Albums",
        columns=[
            ("Category", "bold blue"),
            ("Title", "white"),
            ("Album", "cyan"),
            ("Pages", "green"),
            ("Status", "yellow"),
        ],
        rows=rows,
    )


def create_album_targets_table(albums: list[Any]) -> Table:
    """List the album targets found in a feed batch without downloading them."""
    return create_multi_column_table(
        title="🔎 Album Targets",
        columns=[("Category", "bold blue"), ("Title", "white"), ("Album", "cyan"), ("Link", "dim")],
        rows=[[album.category_name, album.title, album.album_id, album.link] for album in albums],
    )


def create_batch_summary_table(outcomes: list[Any]) -> Table:
    """Key/value overview of a feed walk."""
    succeeded = [outcome for outcome in outcomes if outcome.success]
    albums = [album for outcome in succeeded for album in outcome.result.albums]
    failed = [outcome for outcome in outcomes if not outcome.success]

    data = {
        "📦 Batches": str(len(outcomes)),
        "📰 Entries": str(sum(outcome.result.entry_count for outcome in succeeded)),
        "🖼️ Albums": str(len(albums)),
        "⚠️ Incomplete": str(sum(1 for album in albums if not album.complete)),
    }
    if succeeded and succeeded[-1].result.last_entry_id:
        data["🔖 Last Cursor"] = succeeded[-1].result.last_entry_id
    if failed:
        data["🚨 Failed Batch"] = f"{failed[0].cursor or '<latest>'}: {failed[0].error}"

    return create_key_value_table(title="📊 Feed Walk Summary", data=data, title_style="bold green")


def create_logging_status_table(status: dict[str, Any]) -> Table:
    """Create a logging configuration status table.

    Args:
        status: Logging status dictionary

    Returns:
        Styled logging configuration table
    """
    logging_data = {
        "🔧 Mode": status["mode"].title(),
        "📁 Log Directory": status["log_directory"] or "N/A (production mode)",
        "🔇 Suppressed Libraries": ", ".join(status["third_party_suppressed"]),
    }

    if status["log_files"]["main"]:
        logging_data["📝 Main Log"] = status["log_files"]["main"]
    if status["log_files"]["json"]:
        logging_data["📊 JSON Log"] = status["log_files"]["json"]
    if status["log_files"]["errors"]:
        logging_data["🚨 Error Log"] = status["log_files"]["errors"]

    return create_key_value_table(
        title="🔍 Logging Configuration",
        data=logging_data,
        title_style="bold green",
        key_style="blue",
        value_style="white",
    )


def print_rich_table(console: Console, table: Table) -> None:
    """Print a rich table with consistent spacing and style.

    Args:
        console: Rich console instance
        table: Configured table to print
    """
    console.print()  # Add spacing before
    console.print(table)
    console.print()  # Add spacing after
