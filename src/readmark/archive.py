"""Archive web pages as Markdown files.

Each URL is fetched, reduced to its readable content, converted to Markdown
and written to ``<output_dir>/<slug>.md`` with YAML front matter:

    ---
    title: "Some Article"
    source_url: "https://example.com/blog/some-article"
    archived_at: "2024-05-01T12:00:00+00:00"
    ---

    # Some Article

    ...
"""

import json
import logging
import re
from collections.abc import Iterable
from datetime import datetime, timezone
from pathlib import Path
from urllib.parse import urlparse

from .config import Settings, settings
from .exceptions import ReadmarkError
from .models import ArchiveEntry, ArchiveReport, ConversionResult, OutputFormat
from .service import convert_url

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^a-z0-9_-]+")


def slug_from_url(url: str) -> str:
    """Derive a file name stem from a URL.

    Uses the last path segment (minus any extension) and falls back to the
    hostname for bare or very short paths.
    """
    parsed = urlparse(url)
    path = parsed.path.rstrip("/")
    segment = path.split("/")[-1] if path else ""
    segment = segment.rsplit(".", 1)[0] if "." in segment else segment

    slug = _UNSAFE_CHARS.sub("-", segment.lower()).strip("-")
    if len(slug) > 2:
        return slug

    host = _UNSAFE_CHARS.sub("-", parsed.netloc.lower()).strip("-")
    return host or "unknown"


def _quoted(value: str) -> str:
    # JSON strings are valid YAML double-quoted scalars
    return json.dumps(value, ensure_ascii=False)


def render_archive_document(result: ConversionResult, archived_at: datetime) -> str:
    """Render a converted page as a Markdown file with front matter."""
    title = result.title or result.url or "Untitled"

    lines = ["---"]
    lines.append(f"title: {_quoted(title)}")
    if result.url:
        lines.append(f"source_url: {_quoted(result.url)}")
    lines.append(f"archived_at: {_quoted(archived_at.isoformat())}")
    lines.append("---")
    lines.append("")
    lines.append(f"# {title}")
    lines.append("")
    lines.append(result.content.strip())
    lines.append("")

    return "\n".join(lines)


def _unique_path(output_dir: Path, slug: str, taken: set[Path]) -> Path:
    candidate = output_dir / f"{slug}.md"
    counter = 2
    while candidate in taken or candidate.exists():
        candidate = output_dir / f"{slug}-{counter}.md"
        counter += 1
    taken.add(candidate)
    return candidate


def archive_urls(
    urls: Iterable[str],
    output_dir: Path | None = None,
    dry_run: bool = False,
    config: Settings | None = None,
) -> ArchiveReport:
    """Archive each URL as a Markdown file.

    A failing URL is recorded in the report and does not stop the run.

    Args:
        urls: URLs to archive
        output_dir: Target directory (default: ``settings.archive_dir``)
        dry_run: If True, don't write files, just plan destinations
        config: Settings override

    Returns:
        ArchiveReport with one entry per URL
    """
    config = config or settings
    output_dir = output_dir or config.archive_dir
    report = ArchiveReport(output_dir=str(output_dir), dry_run=dry_run)
    taken: set[Path] = set()

    if not dry_run:
        output_dir.mkdir(parents=True, exist_ok=True)

    for url in urls:
        target = _unique_path(output_dir, slug_from_url(url), taken)

        if dry_run:
            report.entries.append(ArchiveEntry(url=url, path=str(target)))
            continue

        try:
            result = convert_url(url, OutputFormat.MARKDOWN, config=config)
        except ReadmarkError as e:
            logger.warning("Failed to archive %s: %s", url, e.message)
            report.entries.append(ArchiveEntry(url=url, error=e.message))
            continue

        archived_at = datetime.now(timezone.utc)
        target.write_text(render_archive_document(result, archived_at), encoding="utf-8")
        logger.info("Archived %s -> %s", url, target)
        report.entries.append(
            ArchiveEntry(url=url, path=str(target), title=result.title, archived_at=archived_at)
        )

    return report
