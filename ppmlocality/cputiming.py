"""Measure the processor time spent by a stretch of code, in nanoseconds."""

from __future__ import annotations

import time
from types import TracebackType
from typing import Optional


class CPUTimer:
    """A stopwatch over process CPU time.

    ``stop`` returns the nanoseconds used since the last ``start`` as a
    float holding a whole number.  Used as a context manager, the timer
    starts on entry and leaves the result in ``elapsed`` on exit.
    """

    __slots__ = ("_started", "elapsed")

    def __init__(self) -> None:
        self._started: Optional[int] = None
        self.elapsed: Optional[float] = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(elapsed={self.elapsed!r})"

    def start(self) -> None:
        """Record the current CPU time as the starting point."""
        self._started = time.process_time_ns()

    def stop(self) -> float:
        """Return the CPU nanoseconds used since ``start``."""
        now = time.process_time_ns()
        if self._started is None:
            raise RuntimeError("timer was stopped before it was started")
        used = now - self._started
        if used < 0:
            raise RuntimeError("CPU clock went backwards")
        self.elapsed = float(used)
        return self.elapsed

    def __enter__(self) -> "CPUTimer":
        self.start()
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.stop()