"""Tests for the CLI module."""

import pytest
from conftest import FakeFetcher, urlset
from typer.testing import CliRunner

from sitemd import __version__
from sitemd import cli
from sitemd.cli import _normalize_url, app

runner = CliRunner()


@pytest.fixture
def fake_http(monkeypatch):
    """Replace HttpFetcher in the CLI with an in-memory fetcher."""
    created = []

    def install(documents):
        fetcher = FakeFetcher(documents)

        def factory(**kwargs):
            created.append(kwargs)
            return fetcher

        monkeypatch.setattr(cli, "HttpFetcher", factory)
        return fetcher

    install.created = created
    return install


class TestNormalizeUrl:
    """Tests for site root normalization."""

    def test_adds_scheme(self):
        assert _normalize_url("example.com") == "https://example.com"

    def test_keeps_scheme_and_strips_slash(self):
        assert _normalize_url("http://example.com/") == "http://example.com"


class TestCommands:
    """Tests for CLI commands."""

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_convert(self, temp_dir):
        """Test converting a local file."""
        path = temp_dir / "page.html"
        path.write_text("<h1>Title</h1><a>label</a>", encoding="utf-8")

        result = runner.invoke(app, ["convert", str(path)])

        assert result.exit_code == 0
        assert result.output == "# Title\n\n[label](label)"

    def test_convert_nested(self, temp_dir):
        """Test the nested converter option."""
        path = temp_dir / "page.html"
        path.write_text('<p><a href="https://x.com/a">label</a></p>', encoding="utf-8")

        result = runner.invoke(app, ["convert", str(path), "--converter", "nested"])

        assert result.exit_code == 0
        assert "[label](https://x.com/a)" in result.output

    def test_scrape_rejects_unknown_converter(self):
        result = runner.invoke(app, ["scrape", "https://x.com", "--converter", "fancy"])
        assert result.exit_code != 0


class TestScrapeCommand:
    """Tests for the scrape command against an in-memory site."""

    def test_saves_pages(self, fake_http, temp_dir):
        fake_http(
            {
                "https://x.com/sitemap.xml": urlset("https://x.com/guide"),
                "https://x.com/guide": "<h1>Guide</h1>",
            }
        )

        result = runner.invoke(app, ["scrape", "https://x.com", "-o", str(temp_dir), "-q"])

        assert result.exit_code == 0
        assert (temp_dir / "guide.md").read_text(encoding="utf-8") == "# Guide\n\n"

    def test_malformed_sitemap_exits_with_error(self, fake_http, temp_dir):
        """Test that a sitemap parse error aborts with status 1."""
        fake_http({"https://x.com/sitemap.xml": "<urlset>"})

        result = runner.invoke(app, ["scrape", "https://x.com", "-o", str(temp_dir)])

        assert result.exit_code == 1
        assert "Failed to parse sitemap" in result.output
        assert list(temp_dir.iterdir()) == []


class TestDiscoverCommand:
    """Tests for the discover command against an in-memory site."""

    def test_lists_urls(self, fake_http):
        fake_http({"https://x.com/sitemap.xml": urlset("https://x.com/a")})

        result = runner.invoke(app, ["discover", "https://x.com"])

        assert result.exit_code == 0
        assert "https://x.com/a" in result.output
        assert "guessed_sitemap" in result.output

    def test_timeout_and_retries(self, fake_http):
        """Test that network options reach the fetcher."""
        fake_http({"https://x.com/sitemap.xml": urlset("https://x.com/a")})

        result = runner.invoke(
            app, ["discover", "https://x.com", "--timeout", "5", "--retries", "1"]
        )

        assert result.exit_code == 0
        assert fake_http.created == [{"timeout": 5.0, "max_retries": 1, "retry_delay": 0.5}]

    def test_malformed_sitemap_exits_with_error(self, fake_http):
        """Test that discover reports a sitemap parse error."""
        fake_http({"https://x.com/sitemap.xml": "<html><body>Not a sitemap"})

        result = runner.invoke(app, ["discover", "https://x.com"])

        assert result.exit_code == 1
        assert "Failed to parse sitemap" in result.output
