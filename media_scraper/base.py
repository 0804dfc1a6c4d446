from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional
from urllib.parse import urlsplit

from .errors import FetchError
from .identity import UserAgentProvider
from .models import Document, PageRecord

DEFAULT_TIMEOUT_SECS = 10.0

IdentityProvider = Callable[[], str]


class BaseFetcher(ABC):
    """Abstract base class defining a single HTTP GET.

    - Every call carries a User-Agent drawn from the identity provider.
    - Every call is bounded by a fixed timeout.
    - Any non-2xx status is a normal Document, not an error.
    - Failures are raised as FetchError and never logged here.
    """

    def __init__(self, identity: Optional[IdentityProvider] = None, timeout: float = DEFAULT_TIMEOUT_SECS) -> None:
        self._identity = identity if identity is not None else UserAgentProvider()
        self._timeout = timeout

    def fetch(self, url: str) -> Document:
        self.validate(url)
        headers = {"User-Agent": self._identity()}
        try:
            return self._get(url, headers)
        except FetchError:
            raise
        except Exception as exc:  # noqa: BLE001
            raise FetchError(url, exc) from exc

    def validate(self, url: str) -> None:
        if not url:
            raise FetchError(url, message="url is required")
        parts = urlsplit(url)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise FetchError(url, message="malformed url")

    @property
    def timeout(self) -> float:
        return self._timeout

    @abstractmethod
    def _get(self, url: str, headers: Dict[str, str]) -> Document:
        ...


class BaseExtractor(ABC):
    """Turns a fetched Document into a PageRecord."""

    @abstractmethod
    def extract(self, document: Document) -> PageRecord:
        ...
