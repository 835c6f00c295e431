"""FastMCP server exposing readmark conversions.

Lets MCP clients (AI agents, LLM tools) fetch pages as Markdown or convert
HTML they already hold.
"""

import asyncio

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from .config import settings
from .exceptions import ReadmarkError
from .models import ConversionResult, OutputFormat
from .service import convert_source, convert_url


class ReadmarkMCPServer:
    """FastMCP server for web page to Markdown conversion."""

    def __init__(self, name: str | None = None):
        """Initialize the readmark MCP server."""
        self.mcp = FastMCP(name or settings.mcp_server_name)
        self._setup_tools()

    def _setup_tools(self) -> None:
        """Register MCP tools."""

        @self.mcp.tool()
        async def fetch_url(
            url: str,
            output_format: OutputFormat = OutputFormat.MARKDOWN,
        ) -> ConversionResult:
            """Fetch a web page and return its main content.

            Args:
                url: Page URL
                output_format: "markdown" for converted text, "html" for the
                    cleaned readable fragment

            Returns:
                ConversionResult with the content and page title
            """
            try:
                return await asyncio.to_thread(convert_url, url, output_format)
            except ReadmarkError as e:
                raise ToolError(f"{e.code}: {e.message}") from e

        @self.mcp.tool()
        async def convert_html(html: str, readable: bool = False) -> ConversionResult:
            """Convert an HTML document or fragment to Markdown.

            Args:
                html: HTML markup
                readable: Extract the main article content before converting

            Returns:
                ConversionResult with Markdown content
            """
            try:
                return await asyncio.to_thread(convert_source, html, readable=readable)
            except ReadmarkError as e:
                raise ToolError(f"{e.code}: {e.message}") from e

    def run(self, **kwargs) -> None:
        """Run the MCP server.

        Args:
            **kwargs: Additional arguments passed to FastMCP.run()
        """
        self.mcp.run(**kwargs)


def main() -> None:
    """Main entry point for the readmark MCP server."""
    server = ReadmarkMCPServer()
    server.run()


if __name__ == "__main__":
    main()
