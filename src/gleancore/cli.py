"""Command-line interface for GleanCore."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import IO, Optional

import click
import structlog
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from gleancore import __version__
from gleancore.config import Config, find_config_file
from gleancore.extractor import ContentExtractor
from gleancore.observability import configure_logging
from gleancore.protocols import ExtractedContent
from gleancore.quality import QualityAssessor

console = Console()
logger = structlog.get_logger(__name__)


def _load_config(config_path: Optional[Path]) -> Config:
    path = config_path or find_config_file()
    if path is not None:
        return Config.from_yaml(path)
    return Config()


def _extract(ctx: click.Context, source: IO[str], base_url: str) -> ExtractedContent:
    config: Config = ctx.obj["config"]
    html = source.read()
    return asyncio.run(ContentExtractor(config.extraction).extract_content(html, base_url))


def _summary_table(content: ExtractedContent) -> Table:
    table = Table(title=content.title, show_header=True, header_style="bold magenta")
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    metadata = content.metadata
    table.add_row("Description", content.description or "-")
    table.add_row("Author", metadata.author or "-")
    table.add_row("Published", metadata.publish_date.isoformat() if metadata.publish_date else "-")
    table.add_row("Category", metadata.category or "-")
    table.add_row("Tags", ", ".join(metadata.tags) or "-")
    table.add_row("Language", metadata.language or "-")
    table.add_row("Words", str(content.word_count))
    table.add_row("Reading time", f"{content.reading_time} min")
    table.add_row("Images", str(len(content.images)))
    table.add_row("Videos", str(len(content.videos)))
    table.add_row("Audio", str(len(content.audios)))
    table.add_row("Links", str(len(content.links)))
    return table


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "-c", type=click.Path(exists=True, dir_okay=False), help="Configuration file path")
@click.option(
    "--log-level",
    default="WARNING",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level",
)
@click.pass_context
def cli(ctx: click.Context, config: Optional[str], log_level: str) -> None:
    """GleanCore - heuristic article extraction from raw HTML."""
    ctx.ensure_object(dict)
    loaded = _load_config(Path(config) if config else None)
    monitoring = loaded.monitoring.model_copy(update={"log_level": log_level.upper()})
    configure_logging(monitoring)
    ctx.obj["config"] = loaded


@cli.command()
@click.argument("source", type=click.File("r", encoding="utf-8", errors="replace"))
@click.option("--base-url", required=True, help="URL the page was fetched from")
@click.option("--json", "as_json", is_flag=True, help="Print the full result as JSON")
@click.pass_context
def extract(ctx: click.Context, source: IO[str], base_url: str, as_json: bool) -> None:
    """Extract article content from an HTML file ('-' reads stdin)."""
    content = _extract(ctx, source, base_url)

    if as_json:
        click.echo(json.dumps(content.to_dict(), indent=2, ensure_ascii=False))
        return

    console.print(_summary_table(content))
    if content.main_text:
        preview = content.main_text[:500] + ("..." if len(content.main_text) > 500 else "")
        console.print(Panel(preview, title="Main text", border_style="blue"))


@cli.command()
@click.argument("source", type=click.File("r", encoding="utf-8", errors="replace"))
@click.option("--base-url", required=True, help="URL the page was fetched from")
@click.pass_context
def assess(ctx: click.Context, source: IO[str], base_url: str) -> None:
    """Extract an HTML file and print its quality assessment."""
    config: Config = ctx.obj["config"]
    content = _extract(ctx, source, base_url)
    assessment = QualityAssessor(config.quality).assess(content, base_url)

    style = "green" if assessment.is_visible else "red"
    console.print(
        Panel.fit(
            f"[bold]{assessment.level.value.upper()}[/bold]\n{assessment.reason}\n"
            f"Words: {content.word_count}  Reading time: {content.reading_time} min",
            title="Quality",
            border_style=style,
        )
    )


def main() -> None:
    """Main entry point for the CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
