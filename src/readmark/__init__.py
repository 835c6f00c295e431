"""readmark - Convert web pages into clean Markdown.

Fetches a page, isolates its readable content and serializes the HTML tree
into Markdown, keeping emphasis, links, images, nested lists, blockquotes
and paragraph breaks while collapsing insignificant whitespace.

Key Features:
- Context-tracking HTML to Markdown converter (lists, blockquotes)
- readability-based main content extraction
- Typer CLI for single pages, local files and batch archiving
- FastMCP server for AI agents
"""

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from .config import Settings
from .exceptions import DocumentError, ExtractionError, FetchError, ReadmarkError
from .models import ConversionResult, OutputFormat, ReadableContent
from .service import convert_source, convert_url
from .utils.document import parse_html
from .utils.markdown_converter import MarkdownConverter, convert_html, convert_string

__all__ = [
    "ConversionResult",
    "DocumentError",
    "ExtractionError",
    "FetchError",
    "MarkdownConverter",
    "OutputFormat",
    "ReadableContent",
    "ReadmarkError",
    "Settings",
    "__version__",
    "convert_html",
    "convert_source",
    "convert_string",
    "convert_url",
    "parse_html",
]
