from __future__ import annotations

import time
from collections import deque
from dataclasses import asdict
from threading import Lock
from typing import Deque, Dict, List

from .models import RunSummary, ScrapeOutcome

EXTRACTION_ERROR = "ExtractionError"


class MetricsCollector:
    """Thread-safe collector of per-URL scrape outcomes.

    The coordinator records one ScrapeOutcome per task, so failed URLs stay
    inspectable even though they produce no PageRecord."""

    def __init__(self, maxlen: int = 100000) -> None:
        self._lock = Lock()
        self._events: Deque[tuple[float, ScrapeOutcome]] = deque(maxlen=maxlen)

    def record_outcome(self, outcome: ScrapeOutcome) -> None:
        """Record an outcome with the current timestamp."""
        with self._lock:
            self._events.append((time.time(), outcome))

    def snapshot(self) -> RunSummary:
        """Return aggregated counts over every recorded outcome."""
        now = time.time()
        with self._lock:
            events: List[ScrapeOutcome] = [e for _, e in self._events]
        total = len(events)
        success_count = sum(1 for e in events if e.success)
        extract_error_count = sum(1 for e in events if not e.success and e.error_type == EXTRACTION_ERROR)
        fetch_error_count = total - success_count - extract_error_count
        timeout_count = sum(1 for e in events if e.error_type and "Timeout" in e.error_type)
        avg_latency_ms = (sum(e.latency_ms for e in events) / total) if total else 0.0

        return RunSummary(
            total_tasks=total,
            success_count=success_count,
            fetch_error_count=fetch_error_count,
            extract_error_count=extract_error_count,
            timeout_count=timeout_count,
            avg_latency_ms=avg_latency_ms,
            timestamp=now,
        )

    def failures(self) -> List[ScrapeOutcome]:
        with self._lock:
            return [e for _, e in self._events if not e.success]

    def export_json(self) -> List[Dict]:
        """Export all recorded outcomes as a list of dictionaries."""
        with self._lock:
            return [{"timestamp": ts, **asdict(e)} for ts, e in self._events]
