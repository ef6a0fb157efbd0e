"""Concurrency utilities for batchwhois."""

import logging
import random
import threading
import time
from typing import List, Sequence, TypeVar

T = TypeVar('T')


def partition(items: Sequence[T], parts: int) -> List[List[T]]:
    """Split items into exactly ``parts`` contiguous chunks.
    
    Chunk sizes differ by at most one; the first ``len(items) % parts``
    chunks get the extra item. Chunks may be empty when there are fewer
    items than parts.
    
    Args:
        items: Items to split, order is preserved
        parts: Number of chunks, at least 1
        
    Returns:
        List of chunks
    """
    if parts < 1:
        raise ValueError("parts must be at least 1")

    base, remainder = divmod(len(items), parts)
    chunks = []
    start = 0
    for index in range(parts):
        size = base + (1 if index < remainder else 0)
        chunks.append(list(items[start:start + size]))
        start += size
    return chunks


class RateLimiter:
    """Sliding-window rate limiter shared by worker threads."""

    def __init__(self, calls: int, period: float = 1.0, jitter: float = 0.1):
        """Initialize rate limiter.
        
        Args:
            calls: Number of calls allowed in the period
            period: Time period in seconds
            jitter: Random jitter factor (0.0 to 1.0) to avoid thundering herd
        """
        if calls < 1:
            raise ValueError("calls must be at least 1")
        self.calls = calls
        self.period = period
        self.jitter = jitter
        self.timestamps = []
        self._lock = threading.Lock()
        self.logger = logging.getLogger('batchwhois.rate_limiter')

    def acquire(self) -> None:
        """Block until another call fits in the window, then record it."""
        while True:
            with self._lock:
                now = time.monotonic()
                self.timestamps = [ts for ts in self.timestamps if now - ts < self.period]
                if len(self.timestamps) < self.calls:
                    self.timestamps.append(now)
                    return
                wait_time = self.period - (now - min(self.timestamps))

            wait_time += wait_time * self.jitter * random.random()
            self.logger.debug(f"Rate limit reached. Waiting {wait_time:.2f}s")
            time.sleep(wait_time)
