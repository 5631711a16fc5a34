"""Command line interface for sitemd."""

import asyncio
import sys
from pathlib import Path
from typing import Annotated, Any, Coroutine, Optional, TypeVar

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from sitemd import __version__
from sitemd.convert import CONVERTERS, get_converter
from sitemd.core.errors import SitemdError
from sitemd.core.models import DiscoveryResult, ScrapeConfig
from sitemd.engine.fetcher import HttpFetcher
from sitemd.engine.scraper import SiteScraper
from sitemd.events import ConsoleEventSink
from sitemd.storage.filesystem import FilesystemStorage

console = Console()

T = TypeVar("T")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold]sitemd[/bold] version {__version__}")
        raise typer.Exit()


def _normalize_url(url: str) -> str:
    if not url.startswith(("http://", "https://")):
        url = f"https://{url}"
    return url.rstrip("/")


def _build_scraper(config: ScrapeConfig, fetcher: HttpFetcher) -> SiteScraper:
    return SiteScraper(
        fetcher=fetcher,
        converter=get_converter(config.converter),
        storage=FilesystemStorage(config.output_dir),
        config=config,
        events=ConsoleEventSink(verbose=config.verbose, quiet=config.quiet),
    )


def _new_fetcher(config: ScrapeConfig) -> HttpFetcher:
    return HttpFetcher(
        timeout=config.timeout,
        max_retries=config.max_retries,
        retry_delay=config.retry_delay,
    )


async def _run_scrape(config: ScrapeConfig) -> None:
    """Run the scrape asynchronously."""
    if not config.quiet:
        console.print()
        console.print(
            Panel(
                f"[bold green]URL:[/bold green] {config.base_url}\n"
                f"[bold cyan]Converter:[/bold cyan] {config.converter}\n"
                f"[bold yellow]Output:[/bold yellow] {config.output_dir}",
                title="[bold]sitemd[/bold]",
                border_style="blue",
            )
        )
        console.print()

    async with _new_fetcher(config) as fetcher:
        report = await _build_scraper(config, fetcher).scrape()

    if config.quiet:
        return

    console.print()
    console.print(
        Panel(
            f"[bold cyan]Discovery:[/bold cyan] {report.branch.value}\n"
            f"[bold green]Successful:[/bold green] {report.successful}\n"
            f"[bold red]Failed:[/bold red] {report.failed}\n"
            f"[bold yellow]Output:[/bold yellow] {config.output_dir}",
            title="[bold green]Scrape Complete![/bold green]",
            border_style="green",
        )
    )

    if report.failed_urls:
        console.print()
        console.print("[yellow]Failed URLs:[/yellow]")
        for failed in report.failed_urls[:5]:
            console.print(f"  [dim]-[/dim] {failed['url']}")
        if len(report.failed_urls) > 5:
            console.print(f"  [dim]... and {len(report.failed_urls) - 5} more[/dim]")


async def _run_discover(config: ScrapeConfig) -> DiscoveryResult:
    async with _new_fetcher(config) as fetcher:
        return await _build_scraper(config, fetcher).discover()


def _run(coro: Coroutine[Any, Any, T]) -> T:
    """Run a coroutine, turning pipeline failures into exit codes."""
    try:
        return asyncio.run(coro)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted.[/yellow]")
        raise typer.Exit(1)
    except SitemdError as e:
        console.print(f"\n[red]Error: {e}[/red]", highlight=False)
        raise typer.Exit(1)


app = typer.Typer(
    name="sitemd",
    help="Discover every page of a site and convert it to Markdown.",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


@app.callback()
def callback(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = None,
) -> None:
    """Discover every page of a site and convert it to Markdown."""


@app.command()
def scrape(
    url: Annotated[str, typer.Argument(help="Site root to scrape (e.g., https://example.com)")],
    output: Annotated[
        Path,
        typer.Option("-o", "--output", help="Output directory"),
    ] = Path("output"),
    depth: Annotated[
        int,
        typer.Option("--depth", help="Link depth for the crawl fallback"),
    ] = 3,
    delay_ms: Annotated[
        int,
        typer.Option("--delay-ms", help="Delay between crawl requests in milliseconds"),
    ] = 100,
    timeout: Annotated[
        float,
        typer.Option("--timeout", help="Request timeout in seconds"),
    ] = 30.0,
    retries: Annotated[
        int,
        typer.Option("--retries", help="Attempts per request"),
    ] = 3,
    max_pages: Annotated[
        int,
        typer.Option("-m", "--max-pages", help="Maximum pages to convert (0 = unlimited)"),
    ] = 0,
    converter: Annotated[
        str,
        typer.Option("-c", "--converter", help=f"Converter: {', '.join(CONVERTERS)}"),
    ] = "single",
    verbose: Annotated[bool, typer.Option("-v", "--verbose", help="Verbose output")] = False,
    quiet: Annotated[bool, typer.Option("-q", "--quiet", help="Only print errors")] = False,
) -> None:
    """Scrape a site to Markdown files.

    \b
    Examples:
        sitemd scrape https://example.com
        sitemd scrape https://example.com -o ./pages -m 50 -v
    """
    if converter.lower() not in CONVERTERS:
        raise typer.BadParameter(
            f"choose from {', '.join(CONVERTERS)}", param_hint="--converter"
        )

    config = ScrapeConfig(
        base_url=_normalize_url(url),
        output_dir=output,
        crawl_depth=depth,
        crawl_delay_ms=delay_ms,
        timeout=timeout,
        max_retries=retries,
        max_pages=max_pages,
        converter=converter.lower(),
        verbose=verbose,
        quiet=quiet,
    )
    _run(_run_scrape(config))


@app.command()
def discover(
    url: Annotated[str, typer.Argument(help="Site root to discover")],
    depth: Annotated[int, typer.Option("--depth", help="Link depth for the crawl fallback")] = 3,
    delay_ms: Annotated[
        int,
        typer.Option("--delay-ms", help="Delay between crawl requests in milliseconds"),
    ] = 100,
    timeout: Annotated[
        float,
        typer.Option("--timeout", help="Request timeout in seconds"),
    ] = 30.0,
    retries: Annotated[
        int,
        typer.Option("--retries", help="Attempts per request"),
    ] = 3,
    verbose: Annotated[bool, typer.Option("-v", "--verbose", help="Verbose output")] = False,
) -> None:
    """List the page URLs of a site without converting them."""
    config = ScrapeConfig(
        base_url=_normalize_url(url),
        crawl_depth=depth,
        crawl_delay_ms=delay_ms,
        timeout=timeout,
        max_retries=retries,
        verbose=verbose,
    )
    result = _run(_run_discover(config))

    table = Table(
        title=f"[bold]{len(result.urls)} URLs via {result.branch.value}[/bold]",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("URL", style="green")
    for page_url in result.urls:
        table.add_row(page_url)
    console.print(table)


@app.command()
def convert(
    path: Annotated[Path, typer.Argument(help="HTML file to convert", exists=True, dir_okay=False)],
    converter: Annotated[
        str,
        typer.Option("-c", "--converter", help=f"Converter: {', '.join(CONVERTERS)}"),
    ] = "single",
) -> None:
    """Convert a local HTML file and print the Markdown."""
    try:
        document_converter = get_converter(converter)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--converter")

    markup = path.read_text(encoding="utf-8", errors="replace")
    typer.echo(document_converter.convert(markup), nl=False)


def main() -> None:
    """Main entry point with smart argument handling.

    Allows both:
        sitemd https://example.com
        sitemd scrape https://example.com
    """
    if len(sys.argv) > 1:
        first_arg = sys.argv[1]
        if first_arg.startswith(("http://", "https://")):
            sys.argv.insert(1, "scrape")

    app()


if __name__ == "__main__":
    main()
