from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from media_scraper.coordinator import ScrapeCoordinator
from media_scraper.errors import ReportError, SitemapError
from media_scraper.extractor import HtmlMediaExtractor
from media_scraper.factory import BACKENDS, FetcherFactory
from media_scraper.fetchers import DEFAULT_IMPERSONATE
from media_scraper.identity import UserAgentProvider
from media_scraper.metrics import MetricsCollector
from media_scraper.sitemap import SitemapReader
from media_scraper.storage import FORMATS, create_storage

logger = logging.getLogger("media_scraper")

DEFAULT_SITEMAP_URL = "https://www.espn.com/googlenewssitemap"
DEFAULT_OUTPUT_PATH = "image_results.txt"
DEFAULT_CONCURRENCY = 50
DEFAULT_TIMEOUT_SECS = 10.0


def run(
    sitemap_url: str,
    output_path: str,
    output_format: str,
    concurrency: int,
    timeout: float,
    backend: str,
    impersonate: Optional[str],
    limit: Optional[int],
    seed: Optional[int],
) -> int:
    identity = UserAgentProvider(seed=seed)
    fetcher = FetcherFactory(timeout=timeout, identity=identity, impersonate=impersonate).create_fetcher(backend)
    metrics = MetricsCollector()
    coordinator = ScrapeCoordinator(fetcher, HtmlMediaExtractor(), budget=concurrency, metrics=metrics)
    storage = create_storage(output_path, output_format)

    try:
        storage.open()
    except ReportError as exc:
        logger.error("%s", exc)
        return 1

    try:
        try:
            urls = SitemapReader(fetcher).read(sitemap_url)
        except SitemapError as exc:
            logger.error("Error parsing sitemap: %s", exc)
            return 1

        if limit is not None:
            urls = urls[:limit]

        records = coordinator.scrape(urls)

        try:
            written = storage.write_all(records)
        except ReportError as exc:
            logger.error("%s", exc)
            return 1
    finally:
        storage.close()

    summary = metrics.snapshot()
    print(
        f"DONE: success={summary.success_count} fetch_errors={summary.fetch_error_count} "
        f"extract_errors={summary.extract_error_count} timeouts={summary.timeout_count} "
        f"total={summary.total_tasks} avg_latency_ms={summary.avg_latency_ms:.0f}"
    )
    print(f"Image extraction completed. {written} records saved to {storage.path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Scrape image references and meta descriptions from a sitemap")
    parser.add_argument("sitemap", nargs="?", default=DEFAULT_SITEMAP_URL, help="Sitemap URL (urlset XML)")
    parser.add_argument("-o", "--output", default=DEFAULT_OUTPUT_PATH, help="Report output path")
    parser.add_argument("--format", choices=sorted(FORMATS), default="text", help="Report format")

    parser.add_argument("-c", "--concurrency", type=int, default=DEFAULT_CONCURRENCY, help="Max requests in flight")
    parser.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT_SECS, help="Per-request timeout in seconds")
    parser.add_argument("--backend", choices=BACKENDS, default="requests", help="HTTP client backend")
    parser.add_argument("--impersonate", default=DEFAULT_IMPERSONATE, help="curl_cffi browser target (curl backend only)")

    parser.add_argument("--limit", type=int, default=None, help="Max number of sitemap URLs to scrape")
    parser.add_argument("--seed", type=int, default=None, help="Seed for User-Agent selection")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.concurrency < 1:
        print("--concurrency must be >= 1", file=sys.stderr)
        return 2
    if args.limit is not None and args.limit < 0:
        print("--limit must be >= 0", file=sys.stderr)
        return 2

    return run(
        sitemap_url=args.sitemap,
        output_path=args.output,
        output_format=args.format,
        concurrency=args.concurrency,
        timeout=args.timeout,
        backend=args.backend,
        impersonate=args.impersonate,
        limit=args.limit,
        seed=args.seed,
    )


if __name__ == "__main__":
    sys.exit(main())
