"""Data models for readmark.

Pydantic models for fetched content, conversion results, archive entries
and structured errors.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class OutputFormat(str, Enum):
    """Output format selected at the driver boundary."""

    MARKDOWN = "markdown"
    HTML = "html"


class ReadableContent(BaseModel):
    """Main content isolated from a page by readability."""

    url: str | None = Field(None, description="Source URL, if fetched")
    title: str | None = Field(None, description="Document title")
    html: str = Field(..., description="Sanitized HTML fragment")


class ConversionResult(BaseModel):
    """Result of converting one document."""

    content: str = Field(..., description="Converted output")
    output_format: OutputFormat = Field(default=OutputFormat.MARKDOWN, description="Format of content")
    url: str | None = Field(None, description="Source URL")
    title: str | None = Field(None, description="Document title")

    def is_empty(self) -> bool:
        """Check if the conversion produced only whitespace."""
        return not self.content.strip()


class ArchiveEntry(BaseModel):
    """Outcome of archiving a single URL."""

    url: str = Field(..., description="Archived URL")
    path: str | None = Field(None, description="Written (or planned) file path")
    title: str | None = Field(None, description="Document title")
    archived_at: datetime | None = Field(None, description="Archive timestamp")
    error: str | None = Field(None, description="Failure message, if archiving failed")

    @property
    def ok(self) -> bool:
        return self.error is None


class ArchiveReport(BaseModel):
    """Summary of an archive run."""

    entries: list[ArchiveEntry] = Field(default_factory=list, description="Per-URL outcomes")
    output_dir: str = Field(..., description="Archive directory")
    dry_run: bool = Field(default=False, description="True if nothing was written")

    @property
    def archived(self) -> int:
        return sum(1 for entry in self.entries if entry.ok)

    @property
    def failed(self) -> int:
        return sum(1 for entry in self.entries if not entry.ok)


class ErrorResponse(BaseModel):
    """Structured error reported at the CLI and MCP boundaries."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    context: dict[str, Any] = Field(default_factory=dict, description="Additional error context")
