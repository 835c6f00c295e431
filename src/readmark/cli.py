"""Command-line interface for readmark.

Fetches web pages, isolates their readable content and prints it as
Markdown (or as the cleaned HTML fragment). Converted content goes to
stdout; progress, logs and errors go to stderr.
"""

import sys
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .archive import archive_urls
from .config import settings
from .exceptions import ReadmarkError
from .log import configure_logging
from .models import OutputFormat
from .server import ReadmarkMCPServer
from .service import convert_source, convert_url, read_source

app = typer.Typer(
    name="readmark",
    help="readmark - Convert web pages into clean Markdown",
)
console = Console(stderr=True)


def _fail(error: ReadmarkError) -> NoReturn:
    """Report a driver failure on stderr and exit non-zero."""
    response = error.to_response()
    console.print(f"[bold red]Error ({response.code}):[/bold red] {escape(response.message)}")
    if response.context:
        details = " ".join(f"{key}={value}" for key, value in response.context.items())
        console.print(f"[dim]{escape(details)}[/dim]")
    raise typer.Exit(code=1)


def _emit(content: str, output: Path | None) -> None:
    if output is None:
        typer.echo(content)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(content, encoding="utf-8")
    console.print(f"[green]✓ Wrote {escape(str(output))}[/green]")


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Configure logging before any command runs."""
    configure_logging(settings, level="DEBUG" if verbose else None)


@app.command()
def fetch(
    url: str = typer.Argument(..., help="URL of the page to convert"),
    output_format: Optional[OutputFormat] = typer.Option(
        None, "--format", "-f", case_sensitive=False, help="Output format (markdown or html)"
    ),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write to FILE instead of stdout"),
) -> None:
    """Fetch a URL and print its readable content."""
    output_format = output_format or OutputFormat(settings.default_format)
    try:
        result = convert_url(url, output_format)
    except ReadmarkError as e:
        _fail(e)
    _emit(result.content, output)


@app.command()
def convert(
    source: Optional[Path] = typer.Argument(None, help="HTML file to convert (default: stdin)"),
    readable: bool = typer.Option(False, "--readable", "-r", help="Extract the main content first"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write to FILE instead of stdout"),
) -> None:
    """Convert a local HTML file (or stdin) to Markdown."""
    try:
        if source is None or str(source) == "-":
            html_content = sys.stdin.read()
        else:
            html_content = read_source(source)
        result = convert_source(html_content, readable=readable)
    except ReadmarkError as e:
        _fail(e)
    _emit(result.content, output)


@app.command()
def archive(
    urls: Optional[list[str]] = typer.Argument(None, help="URLs to archive"),
    from_file: Optional[Path] = typer.Option(None, "--from", help="Read URLs from a file (one per line)"),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", "-d", help="Archive directory"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show destinations without writing files"),
) -> None:
    """Archive one or more URLs as Markdown files with front matter."""
    targets = list(urls or [])
    if from_file:
        if not from_file.exists():
            console.print(f"[bold red]Error:[/bold red] file not found: {escape(str(from_file))}")
            raise typer.Exit(code=1)
        try:
            url_list = read_source(from_file)
        except ReadmarkError as e:
            _fail(e)
        for line in url_list.splitlines():
            line = line.strip()
            if line and not line.startswith("#"):
                targets.append(line)

    if not targets:
        console.print("[yellow]No URLs to archive[/yellow]")
        raise typer.Exit(code=1)

    report = archive_urls(targets, output_dir=output_dir, dry_run=dry_run)

    title = "Archive Plan (dry run)" if dry_run else "Archive Results"
    table = Table(title=title)
    table.add_column("URL", style="cyan")
    table.add_column("Result", style="green")
    for entry in report.entries:
        table.add_row(escape(entry.url), escape(entry.path or f"✗ {entry.error}"))
    console.print(table)

    console.print(f"Archived: {report.archived}  Failed: {report.failed}  Directory: {escape(report.output_dir)}")
    if report.failed:
        raise typer.Exit(code=1)


@app.command()
def serve(
    host: str = typer.Option(settings.http_host, "--host", "-h", help="Server host"),
    port: int = typer.Option(settings.http_port, "--port", "-p", help="Server port"),
    transport: str = typer.Option("stdio", "--transport", "-t", help="Transport protocol (stdio, http, sse)"),
) -> None:
    """Start the readmark MCP server."""
    console.print("[bold green]Starting readmark MCP Server[/bold green]")
    console.print(f"Transport: {transport}")

    server = ReadmarkMCPServer()

    if transport in ("http", "sse"):
        console.print(f"HTTP Server: http://{host}:{port}")
        server.run(transport=transport, host=host, port=port)
    else:
        # Default STDIO transport
        server.run()


@app.command()
def config() -> None:
    """Show current configuration."""
    table = Table(title="Settings")
    table.add_column("Setting", style="cyan", min_width=20)
    table.add_column("Value", style="green")

    table.add_row("App Version", settings.app_version)
    table.add_row("Debug Mode", "✓" if settings.debug else "✗")
    table.add_row("User-Agent", escape(settings.user_agent))
    table.add_row("Request Timeout", f"{settings.request_timeout}s")
    table.add_row("Max Content Bytes", str(settings.max_content_bytes))
    table.add_row("HTML Parser", settings.html_parser)
    table.add_row("Default Format", settings.default_format)
    table.add_row("Archive Directory", str(settings.archive_dir))
    table.add_row("MCP Server Name", settings.mcp_server_name)
    table.add_row("Log Level", settings.log_level)

    console.print(table)


def main() -> None:
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
