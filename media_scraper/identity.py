from __future__ import annotations

import random
import threading
from typing import Optional, Sequence

USER_AGENTS: tuple[str, ...] = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/61.0.3163.100 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_12_6) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/61.0.3163.100 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:56.0) Gecko/20100101 Firefox/56.0",
)


class UserAgentProvider:
    """Picks a User-Agent uniformly at random from a fixed pool on every call.

    This only varies how requests present themselves; it is not a security
    or anti-detection mechanism. Pass ``seed`` (or an ``rng``) to make the
    sequence reproducible in tests."""

    def __init__(
        self,
        pool: Sequence[str] = USER_AGENTS,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        if not pool:
            raise ValueError("User-Agent pool must not be empty")
        self._pool = tuple(pool)
        self._rng = rng if rng is not None else random.Random(seed)
        self._lock = threading.Lock()

    def __call__(self) -> str:
        with self._lock:
            return self._rng.choice(self._pool)
