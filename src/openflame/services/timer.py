"""Page generation timer."""

import time


class Timer:
    """Measures elapsed time since construction (or the last ``reset``)."""

    def __init__(self):
        self.start = time.perf_counter()

    def reset(self) -> "Timer":
        self.start = time.perf_counter()
        return self

    def elapsed(self) -> float:
        return time.perf_counter() - self.start

    def __str__(self) -> str:
        return f"{self.elapsed():.5f}"
