from __future__ import annotations

from typing import Optional

from .base import DEFAULT_TIMEOUT_SECS, BaseFetcher, IdentityProvider
from .fetchers import DEFAULT_IMPERSONATE, CurlCffiFetcher, RequestsFetcher
from .identity import UserAgentProvider

BACKENDS = ("requests", "curl")


class FetcherFactory:
    """Factory for creating fetcher instances by backend name.

    Fetchers carry no per-request state, so one instance is built per backend
    and shared by every task of a run.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT_SECS,
        identity: Optional[IdentityProvider] = None,
        impersonate: Optional[str] = DEFAULT_IMPERSONATE,
    ) -> None:
        self._timeout = timeout
        self._identity = identity if identity is not None else UserAgentProvider()
        self._impersonate = impersonate

    def create_fetcher(self, backend: str = "requests") -> BaseFetcher:
        if backend == "requests":
            return RequestsFetcher(identity=self._identity, timeout=self._timeout)
        if backend == "curl":
            return CurlCffiFetcher(identity=self._identity, timeout=self._timeout, impersonate=self._impersonate)
        raise ValueError(f"Unknown fetcher backend: {backend}")
