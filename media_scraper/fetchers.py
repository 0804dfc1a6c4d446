from __future__ import annotations

import time
from typing import Dict, Optional

from curl_cffi import requests as curl_requests
import requests

from .base import DEFAULT_TIMEOUT_SECS, BaseFetcher, IdentityProvider
from .models import Document

DEFAULT_IMPERSONATE = "chrome120"
READ_CHUNK_SIZE = 64 * 1024


class RequestsFetcher(BaseFetcher):
    """Plain ``requests`` backend. Stateless, safe to share across threads.

    The ``requests`` timeout only bounds connect and each socket read, so the
    body is streamed with one socket read per step against a total deadline.
    A trickling server raises Timeout once the deadline has passed.
    """

    def _get(self, url: str, headers: Dict[str, str]) -> Document:
        deadline = time.monotonic() + self._timeout
        with requests.get(url, headers=headers, timeout=self._timeout, allow_redirects=True, stream=True) as resp:
            content = self._read_body(resp, deadline)
            return Document(
                url=resp.url or url,
                requested_url=url,
                status_code=resp.status_code,
                content=content,
                content_type=resp.headers.get("Content-Type", ""),
            )

    def _read_body(self, resp: requests.Response, deadline: float) -> bytes:
        chunks = []
        while True:
            if time.monotonic() > deadline:
                raise requests.exceptions.Timeout(f"response not complete within {self._timeout}s")
            chunk = resp.raw.read1(READ_CHUNK_SIZE, decode_content=True)
            if not chunk:
                return b"".join(chunks)
            chunks.append(chunk)


class CurlCffiFetcher(BaseFetcher):
    """``curl_cffi`` backend with optional browser TLS impersonation.

    libcurl applies the timeout to the whole transfer. A fresh session is
    opened per call to avoid sharing curl handles between threads.
    """

    def __init__(
        self,
        identity: Optional[IdentityProvider] = None,
        timeout: float = DEFAULT_TIMEOUT_SECS,
        impersonate: Optional[str] = DEFAULT_IMPERSONATE,
    ) -> None:
        super().__init__(identity=identity, timeout=timeout)
        self._impersonate = impersonate

    def _get(self, url: str, headers: Dict[str, str]) -> Document:
        with curl_requests.Session() as session:
            resp = session.request(
                method="GET",
                url=url,
                headers=headers,
                impersonate=self._impersonate,
                timeout=self._timeout,
                allow_redirects=True,
            )
            return Document(
                url=str(resp.url or url),
                requested_url=url,
                status_code=resp.status_code,
                content=resp.content,
                content_type=resp.headers.get("Content-Type", "") or "",
            )
