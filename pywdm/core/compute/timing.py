"""
Execution timing for backends.

Every backend records a per-stage breakdown (preprocessing, estimation,
inference) in the Result envelope. GPU work is asynchronous, so the GPU
backend asks for a CUDA synchronization before each reading.
"""

import time
from contextlib import contextmanager
from typing import Iterator


class Timer:
    """
    Accumulating stage timer.

    Usage:
        timer = Timer()
        timer.start()

        with timer.section('preprocess'):
            prepared = preprocess(...)

        with timer.section('estimate'):
            value = estimate(kind, x, y, w)

        timer.stop()
        timer.result()
        # {'total_seconds': 0.002, 'preprocess': 0.0004, 'estimate': 0.0013}
    """

    def __init__(self, sync_cuda: bool = False):
        self._sync_cuda = sync_cuda
        self._sections: dict[str, float] = {}
        self._start_time: float | None = None
        self._total: float | None = None

    def _sync(self) -> None:
        if not self._sync_cuda:
            return
        try:
            import torch
        except ImportError:
            return
        if torch.cuda.is_available():
            torch.cuda.synchronize()

    def start(self) -> None:
        """Start the overall timer."""
        self._sync()
        self._start_time = time.perf_counter()

    def stop(self) -> None:
        """Stop the overall timer."""
        self._sync()
        if self._start_time is None:
            raise RuntimeError("Timer.stop() called before start()")
        self._total = time.perf_counter() - self._start_time

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """
        Time a named stage. Repeated stages accumulate, so a matrix
        computation reports the summed estimation time over all pairs.
        """
        self._sync()
        begin = time.perf_counter()
        try:
            yield
        finally:
            self._sync()
            self._sections[name] = (
                self._sections.get(name, 0.0) + time.perf_counter() - begin
            )

    def result(self) -> dict[str, float]:
        """
        Timing breakdown with 'total_seconds' plus every section.

        Raises:
            RuntimeError: If called before stop()
        """
        if self._total is None:
            raise RuntimeError("Timer.result() called before stop()")
        return {'total_seconds': self._total, **self._sections}
