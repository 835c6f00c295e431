"""Exception hierarchy for the fetch/extract/convert driver.

The Markdown converter itself never raises; everything here originates in
fetching, readability extraction or reading local input.
"""

from typing import Any

from .models import ErrorResponse


class ReadmarkError(Exception):
    """Base class for driver failures."""

    code = "readmark_error"

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def to_response(self) -> ErrorResponse:
        """Render as a structured error response."""
        return ErrorResponse(code=self.code, message=self.message, context=self.context)


class FetchError(ReadmarkError):
    """Network failure, HTTP error status or unusable response body."""

    code = "fetch_failed"


class ExtractionError(ReadmarkError):
    """Readability could not isolate any content."""

    code = "extraction_failed"


class DocumentError(ReadmarkError):
    """Local input could not be read or decoded."""

    code = "document_unreadable"
