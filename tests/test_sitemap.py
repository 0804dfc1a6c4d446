"""Tests for the SitemapReader class."""

import unittest

from media_scraper.base import BaseFetcher
from media_scraper.errors import SitemapError
from media_scraper.models import Document
from media_scraper.sitemap import SitemapReader


class StaticFetcher(BaseFetcher):
    """Serves a fixed body for every URL, or raises a configured error."""

    def __init__(self, body=b"", error=None):
        super().__init__(identity=lambda: "agent")
        self._body = body
        self._error = error

    def _get(self, url, headers):
        if self._error is not None:
            raise self._error
        return Document(url=url, requested_url=url, status_code=200, content=self._body)


SITEMAP_NS = (
    b'<?xml version="1.0" encoding="UTF-8"?>\n'
    b'<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">\n'
    b"  <url><loc>https://x/1</loc><lastmod>2024-01-01</lastmod></url>\n"
    b"  <url><loc>\n    https://x/2\n  </loc></url>\n"
    b"</urlset>\n"
)


class TestSitemapReader(unittest.TestCase):
    """Verify urlset decoding and failure handling."""

    def test_returns_locs_in_document_order(self):
        """Two url/loc entries should come back exactly, in order."""
        body = b"<urlset><url><loc>https://x/1</loc></url><url><loc>https://x/2</loc></url></urlset>"
        reader = SitemapReader(StaticFetcher(body))
        self.assertEqual(reader.read("https://x/sitemap.xml"), ["https://x/1", "https://x/2"])

    def test_namespaced_sitemap(self):
        """The standard sitemap namespace and XML declaration should be accepted."""
        reader = SitemapReader(StaticFetcher(SITEMAP_NS))
        self.assertEqual(reader.read("https://x/sitemap.xml"), ["https://x/1", "https://x/2"])

    def test_duplicates_are_kept(self):
        """Duplicate locations should not be removed."""
        body = b"<urlset><url><loc>https://x/1</loc></url><url><loc>https://x/1</loc></url></urlset>"
        reader = SitemapReader(StaticFetcher(body))
        self.assertEqual(reader.read("https://x/sitemap.xml"), ["https://x/1", "https://x/1"])

    def test_entries_without_loc_are_skipped(self):
        """A url entry lacking a loc should be ignored."""
        body = b"<urlset><url><lastmod>2024</lastmod></url><url><loc>https://x/3</loc></url></urlset>"
        reader = SitemapReader(StaticFetcher(body))
        self.assertEqual(reader.read("https://x/sitemap.xml"), ["https://x/3"])

    def test_empty_urlset(self):
        """A urlset without entries should give an empty list."""
        reader = SitemapReader(StaticFetcher(b"<urlset></urlset>"))
        self.assertEqual(reader.read("https://x/sitemap.xml"), [])

    def test_malformed_xml_raises(self):
        """Truncated XML should raise SitemapError."""
        reader = SitemapReader(StaticFetcher(b"<urlset><url><loc>https://x/1</loc>"))
        with self.assertRaises(SitemapError):
            reader.read("https://x/sitemap.xml")

    def test_wrong_root_raises(self):
        """A document whose root is not urlset should raise SitemapError."""
        body = b"<sitemapindex><sitemap><loc>https://x/s1.xml</loc></sitemap></sitemapindex>"
        reader = SitemapReader(StaticFetcher(body))
        with self.assertRaises(SitemapError) as ctx:
            reader.read("https://x/sitemap.xml")
        self.assertIn("sitemapindex", str(ctx.exception))

    def test_html_error_page_raises(self):
        """An HTML page served instead of XML should raise SitemapError."""
        reader = SitemapReader(StaticFetcher(b"<html><body>Not found</body></html>"))
        with self.assertRaises(SitemapError):
            reader.read("https://x/sitemap.xml")

    def test_empty_body_raises(self):
        """An empty response body should raise SitemapError."""
        reader = SitemapReader(StaticFetcher(b""))
        with self.assertRaises(SitemapError):
            reader.read("https://x/sitemap.xml")

    def test_fetch_failure_raises(self):
        """A failed fetch of the sitemap should raise SitemapError."""
        reader = SitemapReader(StaticFetcher(error=ConnectionError("refused")))
        with self.assertRaises(SitemapError) as ctx:
            reader.read("https://x/sitemap.xml")
        self.assertIn("refused", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
