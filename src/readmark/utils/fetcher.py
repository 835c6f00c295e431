"""
Page Fetcher Module

Downloads a page over HTTP and isolates its main content with readability.

Usage example:
    from readmark.utils.fetcher import fetch_readable
    from readmark.utils.markdown_converter import convert_string

    content = fetch_readable("https://example.com/post")
    print(convert_string(content.html))
"""

import logging

import requests
from bs4 import BeautifulSoup, UnicodeDammit
from readability import Document as ReadabilityDocument
from readability.readability import Unparseable

from ..config import Settings, settings
from ..exceptions import ExtractionError, FetchError
from ..models import ReadableContent

logger = logging.getLogger(__name__)

ACCEPT_HEADER = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
CHUNK_SIZE = 64 * 1024


def _is_markup(content_type: str) -> bool:
    content_type = content_type.lower()
    return not content_type or "html" in content_type or "xml" in content_type


def fetch_html(url: str, config: Settings | None = None) -> str:
    """Download a page and return its decoded HTML.

    Args:
        url: Page URL
        config: Settings providing User-Agent, timeout and size limit

    Returns:
        Response body as text

    Raises:
        FetchError: On network failure, HTTP error status, non-HTML content
            or a body larger than ``max_content_bytes``
    """
    config = config or settings
    headers = {"User-Agent": config.user_agent, "Accept": ACCEPT_HEADER}

    logger.info("Fetching %s", url)
    try:
        response = requests.get(url, headers=headers, timeout=config.request_timeout, stream=True)
    except requests.RequestException as e:
        raise FetchError(f"Could not fetch {url}: {e}", url=url) from e

    try:
        try:
            response.raise_for_status()
        except requests.RequestException as e:
            raise FetchError(f"Could not fetch {url}: {e}", url=url) from e

        content_type = response.headers.get("Content-Type", "")
        if not _is_markup(content_type):
            raise FetchError(
                f"Unsupported content type for {url}: {content_type}",
                url=url,
                content_type=content_type,
            )

        body = _read_capped(response, url, config.max_content_bytes)
    finally:
        response.close()

    logger.debug("Fetched %d bytes from %s", len(body), url)
    return _decode(body, content_type, response.encoding)


def _too_large(url: str, size: int, limit: int) -> FetchError:
    return FetchError(f"Response from {url} is too large ({size} bytes)", url=url, size=size, limit=limit)


def _read_capped(response: requests.Response, url: str, limit: int) -> bytes:
    """Read a streamed body, giving up as soon as it exceeds ``limit`` bytes."""
    declared = response.headers.get("Content-Length", "")
    if declared.isdigit() and int(declared) > limit:
        raise _too_large(url, int(declared), limit)

    body = bytearray()
    try:
        for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
            body.extend(chunk)
            if len(body) > limit:
                raise _too_large(url, len(body), limit)
    except requests.RequestException as e:
        raise FetchError(f"Could not read response from {url}: {e}", url=url) from e
    return bytes(body)


def _decode(body: bytes, content_type: str, encoding: str | None) -> str:
    # requests reports ISO-8859-1 when the header has no charset, so only a
    # declared charset is trusted; otherwise sniff meta tags and the bytes
    if "charset" in content_type.lower() and encoding:
        try:
            return body.decode(encoding, errors="replace")
        except LookupError:
            logger.debug("Unknown charset %r, detecting encoding instead", encoding)
    return UnicodeDammit(body, is_html=True).unicode_markup or ""


def extract_readable(html_content: str, url: str | None = None) -> ReadableContent:
    """Isolate the main article content of a page.

    Args:
        html_content: Full page HTML
        url: Page URL, used by readability to resolve relative links

    Returns:
        ReadableContent with the title and a sanitized HTML fragment

    Raises:
        ExtractionError: If the page cannot be parsed or has no content
    """
    if not html_content or not html_content.strip():
        raise ExtractionError("Document is empty", url=url)

    try:
        document = ReadabilityDocument(html_content, url=url)
        fragment = document.summary(html_partial=True)
        title = document.short_title()
    except Unparseable as e:
        raise ExtractionError(f"Could not extract content: {e}", url=url) from e

    if not BeautifulSoup(fragment, "html.parser").get_text(strip=True):
        raise ExtractionError("No readable content found", url=url)

    logger.debug("Extracted %d characters of content (title: %r)", len(fragment), title)
    return ReadableContent(url=url, title=title or None, html=fragment)


def fetch_readable(url: str, config: Settings | None = None) -> ReadableContent:
    """Fetch a page and extract its readable content."""
    return extract_readable(fetch_html(url, config=config), url=url)
