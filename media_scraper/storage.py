from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import IO, Iterable, Optional

from .errors import ReportError
from .models import PageRecord


class StorageBase(ABC):
    """Abstract base class for report backends.

    The artifact is created by open() before any scraping happens, so an
    unwritable path fails the run early. Records are written once, at the end.
    """

    def __init__(self, path: str) -> None:
        self._path = path
        self._fh: Optional[IO[str]] = None

    @property
    def path(self) -> str:
        return self._path

    def open(self) -> None:
        """Create (truncate) the output artifact."""
        try:
            self._fh = open(self._path, "w", encoding="utf-8")
        except OSError as exc:
            raise ReportError(f"Failed to create output file {self._path}: {exc}") from exc

    def write_all(self, records: Iterable[PageRecord]) -> int:
        """Serialize every record and return how many were written."""
        if self._fh is None:
            raise ReportError(f"Output file {self._path} is not open")
        count = 0
        try:
            for record in records:
                self._fh.write(self.format_record(record))
                count += 1
            self._fh.flush()
        except OSError as exc:
            raise ReportError(f"Failed to write output file {self._path}: {exc}") from exc
        return count

    def close(self) -> None:
        if self._fh is not None:
            self._fh.close()
            self._fh = None

    def __enter__(self) -> "StorageBase":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @abstractmethod
    def format_record(self, record: PageRecord) -> str:
        """Render one record as text."""


class TextReportStorage(StorageBase):
    """Human-readable report, one block per page separated by a blank line."""

    def format_record(self, record: PageRecord) -> str:
        output = (
            f"URL: {record.source_url}\n"
            f"StatusCode: {record.status_code}\n"
            f"Meta Description: {record.meta_snippet}\n"
            "Images:\n"
        )
        for src in record.image_refs:
            output += f"- {src}\n"
        return output + "\n"


class JsonlStorage(StorageBase):
    """Stores page records as JSON Lines (.jsonl)."""

    def format_record(self, record: PageRecord) -> str:
        row = {
            "url": record.source_url,
            "status_code": record.status_code,
            "meta_description": record.meta_snippet,
            "images": list(record.image_refs),
        }
        return json.dumps(row, ensure_ascii=False) + "\n"


FORMATS = {
    "text": TextReportStorage,
    "jsonl": JsonlStorage,
}


def create_storage(path: str, fmt: str = "text") -> StorageBase:
    try:
        cls = FORMATS[fmt]
    except KeyError:
        raise ValueError(f"Unknown report format: {fmt}") from None
    return cls(path)
