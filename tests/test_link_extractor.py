"""Tests for link extraction and candidate filtering."""

import pytest

from processor.link_extractor import (
    extract_links,
    filter_links,
    get_origin,
    normalize_origins,
)


class TestGetOrigin:
    """Tests for get_origin."""

    def test_strips_path_query_and_fragment(self):
        """Test that only scheme and host are kept."""
        assert get_origin("https://example.com/blog/post?x=1#top") == "https://example.com"

    def test_drops_default_port(self):
        """Test that default ports are omitted."""
        assert get_origin("https://example.com:443/") == "https://example.com"
        assert get_origin("http://example.com:80") == "http://example.com"

    def test_keeps_non_default_port(self):
        """Test that a custom port is part of the origin."""
        assert get_origin("http://localhost:8080/app") == "http://localhost:8080"

    def test_lowercases_scheme_and_host(self):
        """Test that origins are case-insensitive in scheme and host."""
        assert get_origin("HTTPS://Example.COM/Path") == "https://example.com"

    def test_brackets_ipv6_hosts(self):
        """Test IPv6 hosts keep their brackets."""
        assert get_origin("http://[::1]:3000/") == "http://[::1]:3000"

    @pytest.mark.parametrize("url", [
        "",
        "#section",
        "/relative/path",
        "https://",
        "https://example.com:notaport/",
        "http://[::1",
    ])
    def test_rejects_invalid_urls(self, url):
        """Test that non-absolute or malformed URLs raise ValueError."""
        with pytest.raises(ValueError):
            get_origin(url)

    @pytest.mark.parametrize("url", [
        "mailto:someone@example.com",
        "tel:+15550100",
        "ftp://files.example.com/pub",
    ])
    def test_other_schemes_get_opaque_origin(self, url):
        """Test absolute non-http(s) URLs map to the "null" origin."""
        assert get_origin(url) == "null"

    def test_normalize_origins_handles_paths_and_slashes(self):
        """Test that blocklist entries with paths collapse to origins."""
        origins = normalize_origins([
            "https://kireerik.github.io/refo/",
            "https://souto.tk",
            "https://souto.tk/",
        ])
        assert origins == {"https://kireerik.github.io", "https://souto.tk"}


class TestExtractLinks:
    """Tests for extract_links."""

    def test_empty_string_returns_empty_list(self):
        """Test that no input means no links."""
        assert extract_links("") == []

    def test_extracts_hrefs_in_document_order(self):
        """Test links are returned in first-occurrence order."""
        html = (
            '<p>Check out <a href="https://b.dev/">b</a> and '
            '<a href="https://a.dev/">a</a></p>'
        )
        assert extract_links(html) == ["https://b.dev/", "https://a.dev/"]

    def test_removes_exact_duplicates_only(self):
        """Test dedup is by full string, not by origin."""
        html = (
            '<a href="https://a.dev/">1</a>'
            '<a href="https://a.dev/about">2</a>'
            '<a href="https://a.dev/">3</a>'
        )
        assert extract_links(html) == ["https://a.dev/", "https://a.dev/about"]

    def test_does_not_normalize_case(self):
        """Test that differently-cased URLs are kept as distinct strings."""
        html = '<a href="https://A.dev/">1</a><a href="https://a.dev/">2</a>'
        assert extract_links(html) == ["https://A.dev/", "https://a.dev/"]

    def test_skips_empty_and_missing_hrefs(self):
        """Test anchors without a usable target are ignored."""
        html = '<a>no href</a><a href="">empty</a><a href="   ">blank</a><a href="https://x.dev">x</a>'
        assert extract_links(html) == ["https://x.dev"]

    def test_tolerates_malformed_markup(self):
        """Test unclosed tags and stray markup don't stop extraction."""
        html = '<div><p><a href="https://one.dev">one<a href="https://two.dev">two</div></span>'
        assert extract_links(html) == ["https://one.dev", "https://two.dev"]

    def test_resolves_relative_links_against_base(self):
        """Test relative hrefs are resolved when a base URL is given."""
        html = '<a href="/showcase">s</a><a href="https://x.dev/">x</a>'
        links = extract_links(html, base_url="https://github.com/withastro/roadmap")
        assert links == ["https://github.com/showcase", "https://x.dev/"]

    def test_output_has_no_duplicates(self):
        """Test a long, repetitive document yields unique links."""
        html = "".join(f'<a href="https://site{i % 7}.dev/">x</a>' for i in range(50))
        links = extract_links(html)
        assert len(links) == len(set(links)) == 7
        assert links[0] == "https://site0.dev/"


class TestFilterLinks:
    """Tests for filter_links."""

    BLOCKED = {"https://github.com", "https://twitter.com"}
    KNOWN = {"https://example.com"}

    def test_drops_blocked_origins(self):
        """Test URLs on blocked origins are removed."""
        urls = ["https://github.com/withastro/astro", "https://new.dev/"]
        assert filter_links(urls, self.BLOCKED, set()) == ["https://new.dev/"]

    def test_drops_known_origins(self):
        """Test URLs already in the showcase are removed, whatever the path."""
        urls = ["https://example.com/other-page", "https://new.dev/"]
        assert filter_links(urls, set(), self.KNOWN) == ["https://new.dev/"]

    def test_keeps_same_host_on_different_scheme(self):
        """Test origin comparison includes the scheme."""
        urls = ["http://example.com/"]
        assert filter_links(urls, set(), self.KNOWN) == ["http://example.com/"]

    def test_invalid_urls_are_dropped_with_warning(self, caplog):
        """Test unparseable candidates are dropped without raising."""
        urls = ["#anchor", "https://new.dev/", "http://[::1"]
        with caplog.at_level("WARNING", logger="showcase_scraper"):
            result = filter_links(urls, self.BLOCKED, self.KNOWN)

        assert result == ["https://new.dev/"]
        assert "Error parsing URL: #anchor" in caplog.text

    def test_keeps_non_http_links(self, caplog):
        """Test mailto links pass the filter without a parse warning."""
        urls = ["mailto:hi@site.dev", "https://site.dev/"]
        with caplog.at_level("WARNING", logger="showcase_scraper"):
            result = filter_links(urls, set(), set())

        assert result == ["mailto:hi@site.dev", "https://site.dev/"]
        assert "Error parsing URL" not in caplog.text

    def test_preserves_order(self):
        """Test kept URLs stay in input order."""
        urls = ["https://c.dev", "https://github.com/x", "https://a.dev", "https://b.dev"]
        assert filter_links(urls, self.BLOCKED, self.KNOWN) == [
            "https://c.dev", "https://a.dev", "https://b.dev",
        ]

    def test_filter_is_idempotent(self):
        """Test filtering a filtered list changes nothing."""
        urls = [
            "https://github.com/a", "https://new.dev/", "not a url",
            "https://example.com/x", "https://other.dev/page",
        ]
        once = filter_links(urls, self.BLOCKED, self.KNOWN)
        twice = filter_links(once, self.BLOCKED, self.KNOWN)
        assert once == twice == ["https://new.dev/", "https://other.dev/page"]
