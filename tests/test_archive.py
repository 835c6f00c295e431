"""Tests for archiving URLs as Markdown files."""

from datetime import datetime, timezone
from unittest.mock import patch

from readmark.archive import archive_urls, render_archive_document, slug_from_url
from readmark.exceptions import FetchError
from readmark.models import ConversionResult


class TestSlugFromUrl:
    def test_path_segment(self):
        assert slug_from_url("https://example.com/blog/my-post") == "my-post"

    def test_trailing_slash(self):
        assert slug_from_url("https://example.com/blog/my-post/") == "my-post"

    def test_extension_dropped(self):
        assert slug_from_url("https://example.com/news/story.html") == "story"

    def test_unsafe_characters(self):
        assert slug_from_url("https://example.com/a/Hello World!") == "hello-world"

    def test_hostname_fallback(self):
        assert slug_from_url("https://example.com/") == "example-com"


class TestRenderArchiveDocument:
    def test_front_matter_and_body(self):
        result = ConversionResult(
            content="Body text.\n\n",
            url="https://example.com/post",
            title='A "quoted" title',
        )
        archived_at = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

        document = render_archive_document(result, archived_at)

        assert document.startswith("---\n")
        assert 'title: "A \\"quoted\\" title"' in document
        assert 'source_url: "https://example.com/post"' in document
        assert 'archived_at: "2024-05-01T12:00:00+00:00"' in document
        assert document.endswith('# A "quoted" title\n\nBody text.\n')

    def test_untitled_falls_back_to_url(self):
        result = ConversionResult(content="x", url="https://example.com/post")
        document = render_archive_document(result, datetime.now(timezone.utc))
        assert "# https://example.com/post" in document


class TestArchiveUrls:
    def test_writes_one_file_per_url(self, test_settings, tmp_path):
        def fake_convert(url, output_format, config=None):
            return ConversionResult(content=f"Content of {url}", url=url, title="Title")

        with patch("readmark.archive.convert_url", side_effect=fake_convert):
            report = archive_urls(
                ["https://a.com/post", "https://b.com/post"],
                output_dir=tmp_path,
                config=test_settings,
            )

        assert report.archived == 2
        assert report.failed == 0
        assert (tmp_path / "post.md").exists()
        assert (tmp_path / "post-2.md").exists()
        assert "Content of https://b.com/post" in (tmp_path / "post-2.md").read_text(encoding="utf-8")

    def test_existing_files_are_kept(self, test_settings, tmp_path):
        (tmp_path / "post.md").write_text("earlier run", encoding="utf-8")

        with patch(
            "readmark.archive.convert_url",
            return_value=ConversionResult(content="fresh", url="https://a.com/post"),
        ):
            report = archive_urls(["https://a.com/post"], output_dir=tmp_path, config=test_settings)

        assert report.entries[0].path == str(tmp_path / "post-2.md")
        assert (tmp_path / "post.md").read_text(encoding="utf-8") == "earlier run"
        assert "fresh" in (tmp_path / "post-2.md").read_text(encoding="utf-8")

    def test_failures_are_recorded(self, test_settings, tmp_path):
        with patch("readmark.archive.convert_url", side_effect=FetchError("unreachable")):
            report = archive_urls(["https://a.com/post"], output_dir=tmp_path, config=test_settings)

        assert report.archived == 0
        assert report.failed == 1
        assert report.entries[0].error == "unreachable"
        assert not (tmp_path / "post.md").exists()

    def test_dry_run_writes_nothing(self, test_settings, tmp_path):
        target = tmp_path / "out"
        with patch("readmark.archive.convert_url") as convert:
            report = archive_urls(
                ["https://a.com/post"], output_dir=target, dry_run=True, config=test_settings
            )

        convert.assert_not_called()
        assert report.dry_run is True
        assert report.entries[0].path == str(target / "post.md")
        assert not target.exists()

    def test_defaults_to_configured_directory(self, test_settings):
        report = archive_urls(["https://a.com/post"], dry_run=True, config=test_settings)
        assert report.output_dir == str(test_settings.archive_dir)
