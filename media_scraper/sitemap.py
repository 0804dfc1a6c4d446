"""Sitemap (``urlset``) discovery.

Unlike page scraping this step is not best-effort: any fetch or decode
failure raises SitemapError and the whole run is expected to abort.
"""

from __future__ import annotations

import logging
from typing import List

from lxml import etree

from .base import BaseFetcher
from .errors import FetchError, SitemapError

logger = logging.getLogger(__name__)

ROOT_TAG = "urlset"


class SitemapReader:
    def __init__(self, fetcher: BaseFetcher) -> None:
        self._fetcher = fetcher
        self._parser = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=False)

    def read(self, url: str) -> List[str]:
        """Fetch ``url`` and return its ``<url><loc>`` entries in document order."""
        try:
            document = self._fetcher.fetch(url)
        except FetchError as exc:
            raise SitemapError(f"failed to fetch sitemap {url}: {exc}") from exc

        urls = self.decode(document.content, source=url)
        logger.info("Sitemap %s listed %d URLs (status %d)", url, len(urls), document.status_code)
        return urls

    def decode(self, content: bytes, source: str = "<sitemap>") -> List[str]:
        if not content or not content.strip():
            raise SitemapError(f"empty sitemap document from {source}")
        try:
            root = etree.fromstring(content, parser=self._parser)
        except etree.XMLSyntaxError as exc:
            raise SitemapError(f"malformed sitemap XML from {source}: {exc}") from exc

        if _local_name(root) != ROOT_TAG:
            raise SitemapError(f"unexpected sitemap root <{_local_name(root)}> from {source}, expected <{ROOT_TAG}>")

        urls: List[str] = []
        for entry in root:
            if _local_name(entry) != "url":
                continue
            loc = next((child for child in entry if _local_name(child) == "loc"), None)
            text = (loc.text or "").strip() if loc is not None else ""
            if not text:
                logger.debug("Skipping <url> entry without <loc> in %s", source)
                continue
            urls.append(text)
        return urls


def _local_name(element) -> str:
    if not isinstance(element.tag, str):
        # comments and processing instructions
        return ""
    return etree.QName(element).localname
