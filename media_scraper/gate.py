from __future__ import annotations

import threading


class AdmissionGate:
    """Counting admission primitive bounding how many tasks run at once.

    ``acquire()`` blocks while ``limit`` holders are active. Use it as a
    context manager so the release happens on every exit path. ``peak``
    records the highest number of simultaneous holders observed.
    """

    def __init__(self, limit: int) -> None:
        if int(limit) < 1:
            raise ValueError(f"concurrency budget must be >= 1, got {limit}")
        self._lock = threading.Lock()
        self._cv = threading.Condition(self._lock)
        self._limit = int(limit)
        self._active = 0
        self._peak = 0

    def acquire(self) -> None:
        with self._cv:
            while self._active >= self._limit:
                self._cv.wait()
            self._active += 1
            self._peak = max(self._peak, self._active)

    def release(self) -> None:
        with self._cv:
            if self._active <= 0:
                raise RuntimeError("AdmissionGate released more times than acquired")
            self._active -= 1
            self._cv.notify()

    def __enter__(self) -> "AdmissionGate":
        self.acquire()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    @property
    def active(self) -> int:
        with self._lock:
            return self._active

    @property
    def peak(self) -> int:
        with self._lock:
            return self._peak
