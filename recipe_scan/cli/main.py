"""
Command-line interface for recipe scanning.
"""

import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.table import Table
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn, TimeElapsedColumn
from rich.panel import Panel

from recipe_scan import __version__

console = Console()


@click.group()
@click.version_option(version=__version__)
def cli():
    """Recipe Scan - turn photographed recipe pages into structured records."""
    pass


def _load_groups(input_dir: str, threshold: Optional[float]):
    from recipe_scan.config import get_settings
    from recipe_scan.errors import EmptyInputError
    from recipe_scan.grouping import group_by_time
    from recipe_scan.inputs import discover_items

    settings = get_settings()
    try:
        items = discover_items(input_dir)
    except EmptyInputError as e:
        console.print(f"[red]✗[/red] {e.message}")
        sys.exit(1)

    threshold = threshold if threshold is not None else settings.group_threshold_seconds
    return items, group_by_time(items, threshold), threshold


@cli.command()
@click.argument("input_dir", type=click.Path(exists=True, file_okay=False))
@click.option(
    "--threshold", "-t",
    type=float,
    default=None,
    help="Largest gap in seconds between shots of one recipe"
)
def groups(input_dir: str, threshold: Optional[float]):
    """Preview how photos will be grouped, without calling the service."""
    from recipe_scan.observability.logging import setup_logging

    setup_logging(log_level="WARNING", log_format="console")

    items, grouped, threshold = _load_groups(input_dir, threshold)

    table = Table(title=f"{len(grouped)} groups from {len(items)} photos (threshold {threshold:g}s)")
    table.add_column("#", style="cyan", justify="right")
    table.add_column("First shot", style="green")
    table.add_column("Photos")

    for index, group in enumerate(grouped, start=1):
        table.add_row(
            str(index),
            group.items[0].timestamp.strftime("%Y-%m-%d %H:%M:%S"),
            "\n".join(group.names)
        )

    console.print(table)


@cli.command()
@click.argument("input_dir", type=click.Path(exists=True, file_okay=False))
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False),
    default="recipes.csv",
    show_default=True,
    help="CSV file to write"
)
@click.option(
    "--text-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Also write one .txt file per recipe into this directory"
)
@click.option(
    "--workers", "-w",
    type=click.IntRange(min=1),
    default=None,
    help="Number of groups processed in parallel"
)
@click.option(
    "--threshold", "-t",
    type=float,
    default=None,
    help="Largest gap in seconds between shots of one recipe"
)
@click.option(
    "--max-retries",
    type=click.IntRange(min=1),
    default=None,
    help="Attempts per service call"
)
@click.option(
    "--initial-delay",
    type=float,
    default=None,
    help="First backoff delay in seconds"
)
@click.option(
    "--tag",
    "tags",
    multiple=True,
    help="Tag added to every recipe (can be specified multiple times)"
)
@click.option(
    "--log-format",
    type=click.Choice(["console", "json"]),
    default=None,
    help="Log output format"
)
def scan(
    input_dir: str,
    output: str,
    text_dir: Optional[str],
    workers: Optional[int],
    threshold: Optional[float],
    max_retries: Optional[int],
    initial_delay: Optional[float],
    tags: tuple,
    log_format: Optional[str]
):
    """Extract recipes from the photos in a directory."""
    from recipe_scan.batch import run_batch
    from recipe_scan.config import get_settings
    from recipe_scan.errors import ConfigurationError
    from recipe_scan.export import write_csv, write_text_files
    from recipe_scan.observability.logging import batch_context, setup_logging
    from recipe_scan.pipeline import ExtractionPipeline
    from recipe_scan.preprocessing import ImageEncoder
    from recipe_scan.service import RecipeServiceClient

    settings = get_settings()
    setup_logging(log_format=log_format)

    retry_overrides = {}
    if max_retries is not None:
        retry_overrides["max_attempts"] = max_retries
    if initial_delay is not None:
        retry_overrides["initial_delay"] = initial_delay
    if retry_overrides:
        settings = settings.model_copy(update={"retry": settings.retry.model_copy(update=retry_overrides)})

    items, grouped, _ = _load_groups(input_dir, threshold)
    console.print(f"Found [cyan]{len(items)}[/cyan] photos in [cyan]{len(grouped)}[/cyan] groups")

    try:
        client = RecipeServiceClient.from_settings(settings)
    except ConfigurationError as e:
        console.print(f"[red]✗[/red] {e.message}")
        sys.exit(1)

    pipeline = ExtractionPipeline(
        client,
        encoder=ImageEncoder(settings.image),
        batch_tags=list(tags) or settings.batch_tags
    )

    with batch_context(input_dir), Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=console
    ) as progress:
        task = progress.add_task("Extracting recipes...", total=len(grouped))
        result = run_batch(
            grouped,
            pipeline,
            concurrency=workers or settings.concurrency,
            on_progress=lambda completed, total: progress.update(task, completed=completed)
        )

    output_path = Path(output)
    write_csv(result.records, output_path)

    text_output = text_dir or (str(output_path.with_suffix("")) + "_txt" if settings.text_export else None)
    if text_output and result.records:
        write_text_files(result.records, text_output)

    _print_summary(result, output_path, text_output)


def _print_summary(result, output_path: Path, text_output: Optional[str]):
    console.print()
    summary = (
        f"[green]Recipes:[/green] {result.success_count}\n"
        f"[yellow]Skipped:[/yellow] {result.skip_count}\n"
        f"[cyan]CSV:[/cyan] {output_path}"
    )
    if text_output and result.records:
        summary += f"\n[cyan]Text files:[/cyan] {text_output}"
    console.print(Panel(summary, title="Batch Processing Complete"))

    if result.skipped:
        table = Table(title="Skipped groups")
        table.add_column("Photos", style="cyan")
        table.add_column("Reason", style="yellow")
        for entry in result.skipped:
            table.add_row(entry.group_label.replace(", ", "\n"), entry.reason)
        console.print(table)


if __name__ == "__main__":
    cli()
