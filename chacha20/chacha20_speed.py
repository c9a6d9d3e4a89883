import time
from typing import Callable, Any, Tuple


def measure_time(func: Callable, *args, repeats: int = 1, **kwargs) -> Tuple[float, Any]:
    """
    Measure execution time of a function. Returns (avg_seconds, last_result).
    """
    repeats = max(1, repeats)
    result = None
    start = time.perf_counter()
    for _ in range(repeats):
        result = func(*args, **kwargs)
    elapsed = (time.perf_counter() - start) / repeats
    return elapsed, result


def throughput(nbytes: int, seconds: float) -> float:
    """MiB/s for `nbytes` processed in `seconds`."""
    if seconds <= 0:
        return 0.0
    return nbytes / (1024 * 1024) / seconds
