#!/usr/bin/env python3
"""
Command-line interface for KillTracker.
"""

import asyncio
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .config.loader import load_and_apply_config
from .config.settings import TrackerSettings
from .database.backends import open_backend
from .database.storage import AggregateStore
from .export import EXPORTERS, PET_NO, PET_YES, default_export_filename
from .parser.events import ItemAcquiredEvent, KillCountEvent
from .parser.extractor import EventExtractor
from .parser.parser import ChatLogParser
from .streaming.dedup import LineDeduplicator
from .streaming.poller import PollLoop
from .streaming.processor import ChatStreamProcessor, TrackerStatus
from .streaming.source import FileLineSource


# Set up rich console for pretty output
console = Console()

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
    handlers=[RichHandler(console=console, rich_tracebacks=True)],
)
logger = logging.getLogger(__name__)

STATUS_STYLES = {
    TrackerStatus.READY: "yellow",
    TrackerStatus.RUNNING: "green",
    TrackerStatus.SOURCE_UNAVAILABLE: "dark_orange",
    TrackerStatus.STOPPED: "blue",
    TrackerStatus.ERROR: "red",
}


def _build_processor(settings: TrackerSettings, store: AggregateStore) -> ChatStreamProcessor:
    return ChatStreamProcessor(
        store,
        parser=ChatLogParser(debug_size=settings.debug_buffer_size),
        dedup=LineDeduplicator(settings.dedup_capacity, settings.dedup_retain),
        window=settings.window_size,
    )


def _print_status(status: TrackerStatus, message: str):
    style = STATUS_STYLES.get(status, "white")
    console.print(f"[{style}]● {message}[/{style}]")


def display_records(store: AggregateStore):
    """Display stored records as a table."""
    records = store.records()
    if not records:
        console.print("[dim]No data yet. Kill something scary.[/dim]")
        return

    table = Table(title=f"Kill Records ({len(records)})")
    table.add_column("Boss", style="cyan")
    table.add_column("Mode", width=6)
    table.add_column("KC", justify="right")
    table.add_column("Pet", justify="center")
    table.add_column("Updated", style="dim")

    for _, record in records:
        table.add_row(
            record.subject,
            record.mode.label,
            f"{record.kill_count:,}",
            PET_YES if record.pet_acquired else PET_NO,
            record.updated_at.strftime("%Y-%m-%d %H:%M"),
        )

    console.print(table)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="YAML config file")
@click.option("--store", "store_path", type=click.Path(dir_okay=False), help="Record store path (.json or .db)")
@click.pass_context
def cli(ctx, verbose, config_path, store_path):
    """KillTracker - boss kill count and pet drop tracker"""
    settings = load_and_apply_config(config_path, TrackerSettings.from_env())
    if store_path:
        settings.store_path = store_path

    settings.setup_logging()
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        settings.validate()
    except ValueError as e:
        raise click.UsageError(str(e))

    ctx.obj = {
        "settings": settings,
        "store": AggregateStore(open_backend(settings.store_path)),
    }


@cli.command()
@click.argument("chat_log", type=click.Path(dir_okay=False))
@click.option("--interval-ms", type=click.IntRange(min=1), default=None, help="Poll interval (default from settings)")
@click.pass_context
def track(ctx, chat_log, interval_ms):
    """Poll a chat log file and track kills until Ctrl-C."""
    settings = ctx.obj["settings"]
    store = ctx.obj["store"]
    if interval_ms:
        settings.poll_interval_ms = interval_ms

    settings.log_configuration()
    source = FileLineSource(chat_log, window=settings.window_size)
    poller = PollLoop(
        source,
        _build_processor(settings, store),
        interval=settings.poll_interval,
        status_sink=_print_status,
    )

    async def _run():
        await poller.start()
        try:
            await poller.wait()
        finally:
            await poller.stop()

    console.print(f"[bold green]Tracking chat log:[/bold green] {chat_log}")
    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        pass

    display_records(store)


@cli.command()
@click.argument("lines_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def replay(ctx, lines_file):
    """Feed a saved chat transcript through the tracker once."""
    settings = ctx.obj["settings"]
    store = ctx.obj["store"]

    processor = _build_processor(settings, store)

    with open(lines_file, "r", encoding="utf-8", errors="ignore") as f:
        lines = [line.rstrip("\r\n") for line in f]

    cycle = processor.process_lines(lines)
    stats = processor.parser.get_stats()

    console.print(f"[bold green]✓ Replay Complete[/bold green]")
    console.print(f"  Lines: {cycle.lines_fetched:,} ({cycle.new_lines:,} unique)")
    console.print(f"  Kill messages: {stats['kill_events']:,}")
    console.print(f"  Pet drops: {stats['item_events']:,}")
    console.print(f"  Store writes: {cycle.merges:,}")

    display_records(store)


@cli.command()
@click.pass_context
def show(ctx):
    """Show stored kill records."""
    display_records(ctx.obj["store"])


@cli.command()
@click.option("--format", "fmt", type=click.Choice(sorted(EXPORTERS)), default="text")
@click.option("--output", "-o", help="Output file, '-' for stdout")
@click.pass_context
def export(ctx, fmt, output):
    """Export stored kill records."""
    store = ctx.obj["store"]
    records = store.records()
    text = EXPORTERS[fmt](records)

    if output == "-":
        click.echo(text)
        return

    output = output or default_export_filename(fmt)
    try:
        Path(output).write_text(text, encoding="utf-8")
    except OSError as e:
        console.print(f"[dark_orange]Export failed: {e}[/dark_orange]")
        return

    console.print(f"[green]Exported {len(records)} records to {output}[/green]")


@cli.command()
@click.confirmation_option(prompt="Delete all stored kill records?")
@click.pass_context
def clear(ctx):
    """Delete all stored kill records."""
    ctx.obj["store"].clear()
    console.print("[green]Cleared all stored data.[/green]")


@cli.command("parse-line")
@click.argument("text")
def parse_line(text):
    """Show what the tracker extracts from one chat line."""
    event = EventExtractor().extract(text)

    if isinstance(event, KillCountEvent):
        console.print("[bold]Kill count[/bold]")
        console.print(f"  Boss: {event.subject_raw}")
        console.print(f"  Mode: {event.mode.label}")
        console.print(f"  KC: {event.kill_count}")
        console.print(f"  Key: {event.record_key}")
    elif isinstance(event, ItemAcquiredEvent):
        console.print("[bold]Pet drop[/bold]")
        console.print(f"  Item: {event.item_name} x{event.quantity}")
    else:
        console.print("[dim]No event[/dim]")


def main():
    """Entry point for the killtracker command."""
    cli()


if __name__ == "__main__":
    main()
