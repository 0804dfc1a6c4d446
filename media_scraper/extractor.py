"""Image and meta-description extraction from fetched HTML."""

from __future__ import annotations

import re
from typing import List, Optional

from bs4 import BeautifulSoup
from bs4.dammit import EncodingDetector

from .base import BaseExtractor
from .errors import ExtractionError
from .models import Document, PageRecord

DESCRIPTION_SELECTOR = 'meta[name^="description"]'

_CHARSET_RE = re.compile(r"charset\s*=\s*[\"']?([\w.:-]+)", re.IGNORECASE)


class HtmlMediaExtractor(BaseExtractor):
    """Builds a PageRecord from an HTML Document.

    - ``image_refs``: the ``src`` of every ``<img>`` that has one, in
      document order. Images without ``src`` are skipped.
    - ``meta_snippet``: ``content`` of the first ``<meta>`` whose ``name``
      starts with ``description``, or ``""``.
    - ``source_url`` is the effective (post-redirect) URL.

    The raw body bytes are parsed. The encoding is the Content-Type charset,
    else the in-document declaration, else UTF-8 when the bytes are valid
    UTF-8, else BeautifulSoup detection. Holds no state, so the same
    Document always yields an equal record.
    """

    def __init__(self, parser: str = "lxml") -> None:
        self._parser = parser

    def extract(self, document: Document) -> PageRecord:
        content = document.content
        if not content or not content.strip():
            raise ExtractionError(document.url, "empty document body")
        try:
            soup = BeautifulSoup(content, self._parser, from_encoding=_document_encoding(document))
        except Exception as exc:  # noqa: BLE001
            raise ExtractionError(document.url, f"unparsable document: {exc}") from exc

        return PageRecord(
            source_url=document.url,
            status_code=document.status_code,
            image_refs=tuple(_image_sources(soup)),
            meta_snippet=_meta_description(soup),
        )


def _document_encoding(document: Document) -> Optional[str]:
    match = _CHARSET_RE.search(document.content_type or "")
    if match:
        return match.group(1)
    declared = EncodingDetector.find_declared_encoding(document.content, is_html=True)
    if declared:
        return declared
    try:
        document.content.decode("utf-8")
    except UnicodeDecodeError:
        # unknown legacy encoding, left to BeautifulSoup detection
        return None
    return "utf-8"


def _image_sources(soup: BeautifulSoup) -> List[str]:
    sources: List[str] = []
    for img in soup.find_all("img"):
        if img.has_attr("src"):
            sources.append(img["src"])
    return sources


def _meta_description(soup: BeautifulSoup) -> str:
    tag = soup.select_one(DESCRIPTION_SELECTOR)
    if tag is None:
        return ""
    return tag.get("content") or ""
