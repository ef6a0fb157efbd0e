"""Concurrent query dispatcher for batch runs.

The candidate list is split into ``thread_count`` contiguous chunks and each
non-empty chunk is processed by one worker thread, strictly in order. Workers
share a RunHandle that owns the stop flag, the run state and the progress
channel. Stopping is cooperative: a worker checks the flag before each query
and again once the query returns, so an in-flight query is never aborted.
"""

import concurrent.futures
import logging
import queue
import threading
from typing import Any, Callable, Iterator, List, Optional, Sequence

from batchwhois.core.exceptions import DispatchError
from batchwhois.core.interfaces import (
    DEFAULT_THREAD_COUNT, ProgressEvent, QueryResult, RunState, clamp_thread_count
)
from batchwhois.utils.concurrency import RateLimiter, partition

QueryFunc = Callable[[str], Any]
ProgressCallback = Callable[[ProgressEvent], None]

_DONE = object()


class RunHandle:
    """Control and observation handle for a single dispatcher run.
    
    A handle can be stopped from any thread, before or during the run. It is
    single-use: starting a second run with the same handle raises
    DispatchError.
    
    Attributes:
        state: RunState of the run, None until the run starts
    """

    def __init__(self):
        self.state: Optional[RunState] = None
        self._stop_event = threading.Event()
        self._finished = threading.Event()
        self._lock = threading.RLock()
        self._events = queue.Queue()
        self.logger = logging.getLogger('batchwhois.run_handle')

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    @property
    def finished(self) -> bool:
        return self._finished.is_set()

    def stop(self) -> None:
        """Ask every worker to stop. Calling it again has no effect."""
        with self._lock:
            if self._stop_event.is_set():
                return
            self._stop_event.set()
            if self.state is not None:
                self.state.stopped = True
        self.logger.info("Stop requested, waiting for in-flight queries")

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the run has finished. Returns False on timeout."""
        return self._finished.wait(timeout)

    def events(self) -> Iterator[ProgressEvent]:
        """Iterate over progress events until the run finishes."""
        while True:
            event = self._events.get()
            if event is _DONE:
                return
            yield event

    def _begin(self, total: int) -> RunState:
        with self._lock:
            if self.state is not None:
                raise DispatchError("A RunHandle can only be used for one run")
            self.state = RunState(total=total, stopped=self._stop_event.is_set())
            return self.state

    def _record(self, result: QueryResult,
                on_progress: Optional[ProgressCallback]) -> bool:
        with self._lock:
            if self._stop_event.is_set():
                return False
            self.state.results.append(result)
            self.state.completed += 1
            event = ProgressEvent(self.state.completed, self.state.total, result)
            self._events.put(event)

        if on_progress is not None:
            try:
                on_progress(event)
            except Exception as e:
                self.logger.error(f"Progress callback failed for {result.domain}: {e}")
        return True

    def _finish(self) -> None:
        self._events.put(_DONE)
        self._finished.set()


def as_query_result(domain: str, value: Any) -> QueryResult:
    """Accept either a QueryResult or a result in its wire shape."""
    if isinstance(value, QueryResult):
        return value
    if isinstance(value, dict):
        return QueryResult.from_dict(value, default_domain=domain)
    raise TypeError(f"Unsupported query result for {domain}: {type(value).__name__}")


class BatchDispatcher:
    """Runs a query function over candidates with a fixed pool of workers."""

    def __init__(self, thread_count: int = DEFAULT_THREAD_COUNT,
                 rate_limiter: Optional[RateLimiter] = None):
        """Initialize the dispatcher.
        
        Args:
            thread_count: Number of workers, clamped to [1, 30]
            rate_limiter: Optional limiter shared by all workers
        """
        self.thread_count = clamp_thread_count(thread_count)
        self.rate_limiter = rate_limiter
        self.logger = logging.getLogger('batchwhois.dispatcher')

    def run(self, candidates: Sequence[str], query: QueryFunc,
            handle: Optional[RunHandle] = None,
            on_progress: Optional[ProgressCallback] = None) -> RunState:
        """Query every candidate and return the final run state.
        
        Returns only after all workers have exited, either because their
        chunk is exhausted or because a stop was requested. A failing query
        is recorded as an error-tagged result and never fails the run.
        
        Args:
            candidates: Fully-qualified domains to query
            query: Callable taking a domain, returning a QueryResult (or its
                wire-shape dict)
            handle: Optional handle used to stop or observe the run
            on_progress: Optional callback invoked after every recorded result
            
        Returns:
            Final RunState (possibly partial if stopped)
            
        Raises:
            DispatchError: If the handle was already used
        """
        handle = handle or RunHandle()
        state = handle._begin(len(candidates))

        chunks = [chunk for chunk in partition(candidates, self.thread_count) if chunk]
        self.logger.info(
            f"Querying {len(candidates)} domains with {len(chunks)} workers")

        try:
            if chunks:
                with concurrent.futures.ThreadPoolExecutor(
                        max_workers=self.thread_count) as executor:
                    future_to_worker = {
                        executor.submit(self._work, index, chunk, query, handle, on_progress): index
                        for index, chunk in enumerate(chunks)
                    }
                    for future in concurrent.futures.as_completed(future_to_worker):
                        index = future_to_worker[future]
                        try:
                            future.result()
                        except Exception as e:
                            self.logger.error(f"Worker {index} failed: {e}")
        finally:
            handle._finish()

        if state.stopped:
            self.logger.info(f"Batch stopped after {state.completed}/{state.total} domains")
        else:
            self.logger.info(f"Batch finished: {state.completed}/{state.total} domains")
        return state

    def _work(self, index: int, chunk: List[str], query: QueryFunc,
              handle: RunHandle, on_progress: Optional[ProgressCallback]) -> None:
        """Process one chunk sequentially."""
        for domain in chunk:
            if self.rate_limiter is not None and not handle.stopped:
                self.rate_limiter.acquire()

            if handle.stopped:
                self.logger.debug(f"Worker {index} stopped before querying {domain}")
                return

            try:
                result = as_query_result(domain, query(domain))
            except Exception as e:
                self.logger.error(f"Error querying {domain}: {e}")
                result = QueryResult.failed(domain, str(e))

            if not handle._record(result, on_progress):
                self.logger.debug(f"Worker {index} discarded {domain}, stop requested")
                return
