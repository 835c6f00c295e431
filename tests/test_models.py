"""Tests for readmark data models."""

import pytest
from pydantic import ValidationError

from readmark.exceptions import DocumentError, ExtractionError, FetchError, ReadmarkError
from readmark.models import (
    ArchiveEntry,
    ArchiveReport,
    ConversionResult,
    ErrorResponse,
    OutputFormat,
    ReadableContent,
)


class TestConversionResult:
    """Test ConversionResult model."""

    def test_defaults(self):
        result = ConversionResult(content="# Title")

        assert result.output_format is OutputFormat.MARKDOWN
        assert result.url is None
        assert result.title is None
        assert not result.is_empty()

    def test_whitespace_only_is_empty(self):
        assert ConversionResult(content=" \n\n ").is_empty()

    def test_format_from_string(self):
        result = ConversionResult(content="<p>x</p>", output_format="html")
        assert result.output_format is OutputFormat.HTML

    def test_content_required(self):
        with pytest.raises(ValidationError):
            ConversionResult()


class TestReadableContent:
    def test_html_required(self):
        with pytest.raises(ValidationError):
            ReadableContent(url="https://example.com")


class TestArchiveReport:
    """Test archive run summaries."""

    def test_counts(self):
        report = ArchiveReport(
            output_dir="archive",
            entries=[
                ArchiveEntry(url="https://a.com", path="archive/a.md"),
                ArchiveEntry(url="https://b.com", path="archive/b.md"),
                ArchiveEntry(url="https://c.com", error="timed out"),
            ],
        )

        assert report.archived == 2
        assert report.failed == 1
        assert not report.dry_run

    def test_entry_ok(self):
        assert ArchiveEntry(url="https://a.com", path="a.md").ok
        assert not ArchiveEntry(url="https://a.com", error="boom").ok

    def test_empty_report(self):
        report = ArchiveReport(output_dir="archive")
        assert report.archived == 0
        assert report.failed == 0


class TestErrorResponse:
    """Test structured error rendering."""

    def test_from_exception(self):
        error = FetchError("Request failed", url="https://example.com")
        response = error.to_response()

        assert isinstance(response, ErrorResponse)
        assert response.code == "fetch_failed"
        assert response.message == "Request failed"
        assert response.context == {"url": "https://example.com"}

    def test_codes_per_subclass(self):
        assert ExtractionError("x").code == "extraction_failed"
        assert DocumentError("x").code == "document_unreadable"
        assert ReadmarkError("x").code == "readmark_error"

    def test_subclasses_share_base(self):
        for error_cls in (FetchError, ExtractionError, DocumentError):
            assert issubclass(error_cls, ReadmarkError)

    def test_context_defaults_empty(self):
        assert ExtractionError("nothing found").to_response().context == {}
