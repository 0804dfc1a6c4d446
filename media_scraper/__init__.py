"""Sitemap media scraper package.

Reads a sitemap, fetches every listed page under a fixed concurrency budget,
extracts image references and the meta description, and writes a report.

Key modules:
    identity     -- UserAgentProvider for randomized client identity
    base         -- BaseFetcher and BaseExtractor abstract classes
    fetchers     -- RequestsFetcher, CurlCffiFetcher concrete implementations
    factory      -- FetcherFactory for creating fetchers by backend name
    extractor    -- HtmlMediaExtractor (images + meta description)
    sitemap      -- SitemapReader for urlset documents
    gate         -- AdmissionGate counting primitive
    coordinator  -- ScrapeCoordinator bounded-concurrency pipeline
    metrics      -- MetricsCollector for per-URL outcomes
    models       -- Document, PageRecord, ScrapeOutcome, RunSummary dataclasses
    errors       -- ScraperError hierarchy
    storage      -- StorageBase, TextReportStorage and JsonlStorage
"""
