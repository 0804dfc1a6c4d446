from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from .base import BaseExtractor, BaseFetcher
from .errors import ExtractionError, FetchError
from .gate import AdmissionGate
from .metrics import MetricsCollector
from .models import PageRecord, ScrapeOutcome

logger = logging.getLogger(__name__)


class ResultCollection:
    """Append-only list of PageRecords shared by concurrent tasks.

    The lock is held only for the append itself.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: List[PageRecord] = []

    def append(self, record: PageRecord) -> None:
        with self._lock:
            self._records.append(record)

    def snapshot(self) -> List[PageRecord]:
        with self._lock:
            return list(self._records)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


class CompletionLatch:
    """Counts task completions; ``wait()`` returns once ``expected`` are seen."""

    def __init__(self, expected: int) -> None:
        self._cv = threading.Condition(threading.Lock())
        self._expected = expected
        self._completed = 0

    def signal(self) -> None:
        with self._cv:
            self._completed += 1
            if self._completed >= self._expected:
                self._cv.notify_all()

    def wait(self) -> None:
        with self._cv:
            while self._completed < self._expected:
                self._cv.wait()

    @property
    def completed(self) -> int:
        with self._cv:
            return self._completed


class ScrapeCoordinator:
    """Drives one fetch+extract task per URL under a fixed concurrency budget.

    - Exactly one task is launched per input URL; the budget is enforced by
      an AdmissionGate each task must pass, not by the pool size.
    - Fetch and extraction failures are logged and dropped. They never
      propagate, so the returned list may be shorter than the input.
    - ``scrape()`` returns only after every task has reported completion.
    - Results are in completion order, not input order.
    """

    def __init__(
        self,
        fetcher: BaseFetcher,
        extractor: BaseExtractor,
        budget: int,
        metrics: Optional[MetricsCollector] = None,
    ) -> None:
        if int(budget) < 1:
            raise ValueError(f"concurrency budget must be >= 1, got {budget}")
        self._fetcher = fetcher
        self._extractor = extractor
        self._budget = int(budget)
        self._metrics = metrics

    def scrape(self, urls: Sequence[str]) -> List[PageRecord]:
        urls = list(urls)
        if not urls:
            return []

        gate = AdmissionGate(self._budget)
        results = ResultCollection()
        latch = CompletionLatch(len(urls))

        with ThreadPoolExecutor(max_workers=len(urls), thread_name_prefix="scrape") as executor:
            for index, url in enumerate(urls):
                try:
                    executor.submit(self._run_task, url, gate, results, latch)
                except RuntimeError as exc:
                    self._skip_unstarted(urls[index:], latch, exc)
                    break
            latch.wait()

        records = results.snapshot()
        logger.info("Scraped %d/%d URLs (budget=%d, peak=%d)", len(records), len(urls), self._budget, gate.peak)
        return records

    def _run_task(self, url: str, gate: AdmissionGate, results: ResultCollection, latch: CompletionLatch) -> None:
        try:
            with gate:
                record = self._process(url)
                if record is not None:
                    results.append(record)
        finally:
            latch.signal()

    def _skip_unstarted(self, urls: List[str], latch: CompletionLatch, exc: RuntimeError) -> None:
        """Count URLs whose task could not be started as failed completions."""
        logger.error("Could not start scrape tasks for %d URLs: %s", len(urls), exc)
        now_ms = self._now_ms()
        for url in urls:
            self._record(url, False, None, now_ms, type(exc).__name__)
            latch.signal()

    def _process(self, url: str) -> Optional[PageRecord]:
        start_ms = self._now_ms()
        status_code = None
        logger.info("Scraping URL: %s", url)
        try:
            document = self._fetcher.fetch(url)
            status_code = document.status_code
            record = self._extractor.extract(document)
        except FetchError as exc:
            logger.warning("Error requesting URL %s: %s", url, exc)
            self._record(url, False, status_code, start_ms, exc.error_type)
            return None
        except ExtractionError as exc:
            logger.warning("Error parsing media data for URL %s: %s", url, exc.reason)
            self._record(url, False, status_code, start_ms, type(exc).__name__)
            return None
        except Exception as exc:  # noqa: BLE001
            logger.exception("Unexpected error scraping URL %s", url)
            self._record(url, False, status_code, start_ms, type(exc).__name__)
            return None

        self._record(url, True, status_code, start_ms, None)
        return record

    def _record(self, url: str, success: bool, status_code: Optional[int], start_ms: int, error_type: Optional[str]) -> None:
        if self._metrics is None:
            return
        self._metrics.record_outcome(
            ScrapeOutcome(
                url=url,
                success=success,
                status_code=status_code,
                latency_ms=self._now_ms() - start_ms,
                error_type=error_type,
            )
        )

    @staticmethod
    def _now_ms() -> int:
        return int(time.time() * 1000)
