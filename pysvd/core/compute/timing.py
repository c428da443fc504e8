"""
Wall-clock timing of decomposition phases.

The Golub-Reinsch backend times its four phases (bidiagonalization,
right and left accumulation, diagonalization) and the least-squares
backend times the decomposition, the solve and the residuals. The
numbers land in Result.timing.
"""

import time
from contextlib import contextmanager
from typing import Iterator


class Timer:
    """
    Phase timer for a single backend call.

    A backend calls start() on entry, wraps each phase in section(), and
    calls stop() before building its Result:

        timer = Timer()
        timer.start()
        with timer.section('bidiagonalization'):
            bidiagonal = bidiagonalize(u, m, n, tol)
        with timer.section('diagonalization'):
            diag = diagonalize(u, v, bidiagonal.q, bidiagonal.e, m, n, ...)
        timer.stop()
        timer.result()
        # {'total_seconds': ..., 'bidiagonalization': ..., 'diagonalization': ...}

    Phases entered more than once add up under their name.
    """

    def __init__(self) -> None:
        self._sections: dict[str, float] = {}
        self._start_time: float | None = None
        self._total: float | None = None

    def start(self) -> None:
        self._start_time = time.perf_counter()

    def stop(self) -> None:
        if self._start_time is None:
            raise RuntimeError("Timer.stop() called before start()")
        self._total = time.perf_counter() - self._start_time

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """Add the time spent in the block to phase `name`, even if it raises."""
        start = time.perf_counter()
        try:
            yield
        finally:
            self._sections[name] = self._sections.get(name, 0.0) + (time.perf_counter() - start)

    def result(self) -> dict[str, float]:
        """
        Seconds per phase plus 'total_seconds' for the whole call.

        Raises:
            RuntimeError: If the timer has not been stopped
        """
        if self._total is None:
            raise RuntimeError("Timer.result() called before stop()")
        return {'total_seconds': self._total, **self._sections}
