"""Batch manager tying generation, validation and dispatch together."""

import logging
import threading
from typing import List, Optional

from batchwhois.core.dispatcher import BatchDispatcher, ProgressCallback, RunHandle
from batchwhois.core.generator import generate_domains
from batchwhois.core.interfaces import BatchConfig, LookupBackend, RunState
from batchwhois.utils.concurrency import RateLimiter
from batchwhois.utils.validators import validate_domains, validate_suffix


class BatchManager:
    """Runs one batch configuration against a lookup backend.
    
    Configuration problems are raised before any query is sent. Each call to
    run() or start() uses a fresh RunHandle, so a manager can be run again
    after a previous run finished or was stopped.
    """

    def __init__(self, config: BatchConfig, backend: LookupBackend,
                 rate_limit: Optional[int] = None):
        """Initialize the batch manager.
        
        Args:
            config: Batch configuration
            backend: Lookup backend queried for every domain
            rate_limit: Optional maximum number of queries per second
        """
        self.config = config
        self.backend = backend
        self.rate_limiter = RateLimiter(rate_limit, 1) if rate_limit else None
        self.dispatcher = BatchDispatcher(config.thread_count, rate_limiter=self.rate_limiter)
        self.handle: Optional[RunHandle] = None
        self._domains: Optional[List[str]] = None
        self.logger = logging.getLogger('batchwhois.batch_manager')

    def preview(self) -> List[str]:
        """Return the candidate domains of the configuration.
        
        Raises:
            ConfigurationError: If the suffix is invalid
            GenerationBoundsError: If the candidate space is too large
        """
        if self._domains is None:
            self._domains = generate_domains(self.config)
        return self._domains

    def validate(self) -> List[str]:
        """Generate and check every domain, failing on the first bad one.
        
        Returns:
            The validated domain list
            
        Raises:
            ConfigurationError: If the suffix or a generated domain is invalid
        """
        validate_suffix(self.config.suffix)
        domains = self.preview()
        validate_domains(domains)
        return domains

    def run(self, on_progress: Optional[ProgressCallback] = None) -> RunState:
        """Validate the configuration and query every domain.
        
        Args:
            on_progress: Optional callback invoked after every recorded result
            
        Returns:
            Final RunState
        """
        domains = self.validate()
        self.handle = RunHandle()
        self.logger.info(
            f"Starting batch of {len(domains)} domains with backend {self.backend.name}")
        return self.dispatcher.run(domains, self.backend, handle=self.handle,
                                   on_progress=on_progress)

    def start(self, on_progress: Optional[ProgressCallback] = None) -> RunHandle:
        """Validate, then run the batch on a background thread.
        
        The returned handle can be stopped, waited on and iterated for
        progress events; its state holds the results once it has finished.
        """
        domains = self.validate()
        handle = RunHandle()
        self.handle = handle
        self.logger.info(
            f"Starting batch of {len(domains)} domains with backend {self.backend.name}")

        thread = threading.Thread(
            target=self.dispatcher.run,
            args=(domains, self.backend),
            kwargs={'handle': handle, 'on_progress': on_progress},
            name='batchwhois-dispatcher',
            daemon=True,
        )
        thread.start()
        return handle

    def stop(self) -> None:
        """Stop the current run, if any."""
        if self.handle is not None:
            self.handle.stop()
