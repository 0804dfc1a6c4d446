from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class Document:
    url: str
    requested_url: str
    status_code: int
    content: bytes
    content_type: str = ""


@dataclass(frozen=True)
class PageRecord:
    source_url: str
    status_code: int
    image_refs: Tuple[str, ...] = field(default_factory=tuple)
    meta_snippet: str = ""


@dataclass(frozen=True)
class ScrapeOutcome:
    url: str
    success: bool
    status_code: Optional[int]
    latency_ms: int
    error_type: Optional[str]


@dataclass(frozen=True)
class RunSummary:
    total_tasks: int
    success_count: int
    fetch_error_count: int
    extract_error_count: int
    timeout_count: int
    avg_latency_ms: float
    timestamp: float
