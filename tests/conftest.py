"""Pytest configuration and shared fixtures for readmark tests."""

from collections.abc import Callable
from pathlib import Path
from unittest.mock import Mock

import pytest
from requests.structures import CaseInsensitiveDict
from requests.utils import get_encoding_from_headers

from readmark.config import Settings
from readmark.models import ReadableContent


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Create test configuration settings."""
    return Settings(
        debug=True,
        user_agent="readmark-tests/1.0",
        request_timeout=5,
        max_content_bytes=100_000,
        html_parser="html.parser",
        archive_dir=tmp_path / "archive",
        log_level="DEBUG",
    )


@pytest.fixture
def sample_article_html() -> str:
    """A small but realistic article page."""
    return """<!DOCTYPE html>
<html>
<head>
  <title>Understanding Markdown Conversion</title>
  <style>body { font-family: serif; }</style>
  <script>window.analytics = {};</script>
</head>
<body>
  <nav><a href="/">Home</a> <a href="/about">About</a></nav>
  <article>
    <h1>Understanding Markdown Conversion</h1>
    <p>The first paragraph explains, in some detail, why converting HTML into
    Markdown is useful for archiving articles, reading them offline, and feeding
    them into tools that prefer plain text over markup.</p>
    <p>The second paragraph covers <b>emphasis</b>, <em>italics</em>, and
    <a href="https://example.com/links">links</a>, which all survive the
    conversion, while scripts, styles, and other page furniture are dropped.</p>
    <p>The third paragraph talks about lists, quotes, and images, and about how
    nesting depth is tracked so that indentation comes out right in the end.</p>
  </article>
  <footer>Copyright 2024</footer>
</body>
</html>"""


@pytest.fixture
def readable_content() -> ReadableContent:
    """Readable content as produced by the extraction step."""
    return ReadableContent(
        url="https://example.com/blog/markdown",
        title="Understanding Markdown Conversion",
        html="<div><p>Hello <b>world</b>.</p><ul><li>one</li><li>two</li></ul></div>",
    )


@pytest.fixture
def fake_response() -> Callable[..., Mock]:
    """Factory for fake ``requests`` responses."""

    def _make(
        text: str = "<html><body><p>ok</p></body></html>",
        content_type: str = "text/html; charset=utf-8",
        status_error: Exception | None = None,
        body: bytes | None = None,
        content_length: int | None = None,
    ) -> Mock:
        content = body if body is not None else text.encode("utf-8")
        headers = CaseInsensitiveDict({"Content-Type": content_type})
        if content_length is not None:
            headers["Content-Length"] = str(content_length)

        response = Mock()
        response.headers = headers
        response.encoding = get_encoding_from_headers(headers)
        # Delivered in two chunks, as a streamed body would be
        middle = len(content) // 2
        response.iter_content.return_value = iter(
            [chunk for chunk in (content[:middle], content[middle:]) if chunk]
        )
        if status_error is not None:
            response.raise_for_status.side_effect = status_error
        return response

    return _make
