"""Conversion pipeline shared by the CLI and the MCP server.

URL -> fetch -> readability -> parse -> Markdown (or the readable HTML
fragment when HTML output is requested). Failures surface as
``ReadmarkError`` subclasses, never inside the returned content.
"""

import logging
from pathlib import Path

from .config import Settings, settings
from .exceptions import DocumentError
from .models import ConversionResult, OutputFormat
from .utils.fetcher import extract_readable, fetch_readable
from .utils.markdown_converter import convert_string

logger = logging.getLogger(__name__)


def convert_url(
    url: str,
    output_format: OutputFormat = OutputFormat.MARKDOWN,
    config: Settings | None = None,
) -> ConversionResult:
    """Fetch a URL and render its main content.

    Args:
        url: Page to fetch
        output_format: Markdown conversion or the raw readable fragment
        config: Settings override

    Returns:
        ConversionResult carrying the rendered content

    Raises:
        FetchError: If the page could not be downloaded
        ExtractionError: If no readable content was found
    """
    config = config or settings
    readable = fetch_readable(url, config=config)

    if output_format is OutputFormat.HTML:
        content = readable.html
    else:
        content = convert_string(readable.html, parser=config.html_parser)

    logger.info("Rendered %s as %s (%d characters)", url, output_format.value, len(content))
    return ConversionResult(
        content=content,
        output_format=output_format,
        url=url,
        title=readable.title,
    )


def convert_source(
    html_content: str,
    readable: bool = False,
    config: Settings | None = None,
) -> ConversionResult:
    """Convert HTML already in hand (file, stdin, MCP argument) to Markdown.

    Args:
        html_content: HTML markup
        readable: Run readability extraction before converting
        config: Settings override

    Returns:
        ConversionResult with Markdown content
    """
    config = config or settings
    title = None
    if readable:
        extracted = extract_readable(html_content)
        html_content, title = extracted.html, extracted.title

    return ConversionResult(
        content=convert_string(html_content, parser=config.html_parser),
        title=title,
    )


def read_source(path: Path) -> str:
    """Read a local HTML file as UTF-8 text.

    Raises:
        DocumentError: If the file is missing, unreadable or not UTF-8
    """
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentError(f"Could not read {path}: {e}", path=str(path)) from e
