"""Command line access to the built-in quote APIs."""

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from jollyquotes.lib.config_manager import config
from jollyquotes.lib.defaults import CONFIG_CATEGORIES
from jollyquotes.lib.errors import InvalidOperationError
from jollyquotes.lib.logging_config import setup_logging
from jollyquotes.services.providers import create_default_generator
from jollyquotes.services.tronald_dump import TronaldDumpService

app = typer.Typer(help="Random quotes from kanye.rest, quotable and Tronald Dump")
console = Console()


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override JOLLYQUOTES_LOG_LEVEL"),
):
    setup_logging(level=log_level)


@app.command()
def apis():
    """List the registered quote APIs."""
    generator = create_default_generator()

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("API", style="cyan")
    table.add_column("Source", style="white")
    table.add_column("Enabled", style="green")

    for api_name in generator.api_names:
        table.add_row(api_name, generator.get_generator(api_name).source, str(generator.is_enabled(api_name)))

    console.print(table)
    asyncio.run(generator.aclose())


@app.command("config")
def show_config():
    """Show the effective configuration."""
    for category, keys in CONFIG_CATEGORIES.items():
        table = Table(title=category.title(), show_header=True, header_style="bold magenta")
        table.add_column("Key", style="cyan")
        table.add_column("Value", style="white")
        for key in keys:
            table.add_row(key, str(config.get(key)))
        console.print(table)


@app.command()
def random(
    api: Optional[str] = typer.Option(None, "--api", "-a", help="Only use this API"),
    tag: Optional[list[str]] = typer.Option(None, "--tag", "-t", help="Tag the quote must carry (repeatable)"),
):
    """Print a random quote."""
    asyncio.run(_random(api, tag or []))


async def _random(api: Optional[str], tags: list[str]):
    async with create_default_generator() as generator:
        if api:
            if not generator.is_registered(api):
                console.print(f"[bold red]Unknown API:[/bold red] {api}")
                raise typer.Exit(1)
            generator.switch_to(api)

        with console.status("[bold yellow]Fetching quote..."):
            try:
                if tags:
                    quote = await generator.get_random_quote_with_any_tag(tags)
                else:
                    quote = await generator.get_random_quote()
            except InvalidOperationError as e:
                console.print(f"[bold red]Error:[/bold red] {e}")
                raise typer.Exit(1)

    if quote is None:
        console.print(f"[yellow]No quote found for tags: {', '.join(tags)}[/yellow]")
        raise typer.Exit(1)

    console.print(f"\n[bold]“{quote.value}”[/bold]")
    console.print(f"  [cyan]{quote.author}[/cyan]")
    if quote.tags:
        console.print(f"  [dim]{', '.join(quote.tags)}[/dim]")
    console.print(f"  [dim]{quote.source}[/dim]\n")


@app.command()
def meme(output: Path = typer.Argument(..., help="File to write the image to")):
    """Save a random Tronald Dump meme."""
    asyncio.run(_meme(output))


async def _meme(output: Path):
    async with TronaldDumpService() as service:
        with console.status("[bold yellow]Downloading meme..."):
            image = await service.get_random_meme()

    output.write_bytes(image)
    console.print(f"[bold green]Saved {len(image)} bytes to {output}[/bold green]")


if __name__ == "__main__":
    app()
