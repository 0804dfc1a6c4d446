from __future__ import annotations

from typing import Optional


class ScraperError(Exception):
    """Base class for all scraper errors."""


class FetchError(ScraperError):
    """A single HTTP GET could not produce a response."""

    def __init__(self, url: str, cause: Optional[BaseException] = None, message: Optional[str] = None) -> None:
        self.url = url
        self.cause = cause
        detail = message or (str(cause) if cause is not None else "fetch failed")
        super().__init__(f"{url}: {detail}")

    @property
    def error_type(self) -> str:
        if self.cause is None:
            return type(self).__name__
        return type(self.cause).__name__


class ExtractionError(ScraperError):
    """A fetched body could not be parsed as an HTML document."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"{url}: {reason}")


class SitemapError(ScraperError):
    """The sitemap could not be fetched or decoded. Aborts the run."""


class ReportError(ScraperError):
    """The report artifact could not be created or written. Aborts the run."""
