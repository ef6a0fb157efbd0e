"""Progress indicator utilities for batchwhois."""

import sys
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from tqdm import tqdm

from batchwhois.core.interfaces import ProgressEvent


class ProgressIndicator:
    """Terminal progress bar fed by dispatcher progress events."""

    def __init__(self, total: Optional[int] = None, desc: str = "",
                 disable: bool = False, unit: str = "domain"):
        """Initialize progress indicator.
        
        Args:
            total: Total number of domains (None for indeterminate)
            desc: Description of the operation
            disable: Whether to disable the progress indicator
            unit: Unit of items
        """
        self.total = total
        self.desc = desc
        self.disable = disable
        self.unit = unit
        self.current = 0
        self.available = 0
        self.unavailable = 0
        self.tqdm_instance = None
        self._lock = threading.Lock()

    def start(self) -> None:
        """Start the progress indicator."""
        if self.disable:
            return

        self.tqdm_instance = tqdm(
            total=self.total,
            desc=self.desc,
            unit=self.unit,
            file=sys.stderr
        )

    def update(self, event: ProgressEvent) -> None:
        """Advance the bar to the event's completed count.
        
        Args:
            event: Progress event emitted by the dispatcher
        """
        with self._lock:
            if event.result.is_available:
                self.available += 1
            else:
                self.unavailable += 1

            step = event.completed - self.current
            self.current = max(self.current, event.completed)

            if self.disable or self.tqdm_instance is None:
                return
            self.tqdm_instance.set_postfix(
                available=self.available, taken=self.unavailable, refresh=False)
            if step > 0:
                self.tqdm_instance.update(step)

    def set_description(self, desc: str) -> None:
        """Set the description of the progress indicator.
        
        Args:
            desc: New description
        """
        self.desc = desc
        if not self.disable and self.tqdm_instance:
            self.tqdm_instance.set_description(desc)

    def close(self) -> None:
        """Close the progress indicator."""
        if not self.disable and self.tqdm_instance:
            self.tqdm_instance.close()


@contextmanager
def progress_bar(total: Optional[int] = None, desc: str = "",
                 disable: bool = False, unit: str = "domain") -> Iterator[ProgressIndicator]:
    """Context manager for progress indicator.
    
    Args:
        total: Total number of domains (None for indeterminate)
        desc: Description of the operation
        disable: Whether to disable the progress indicator
        unit: Unit of items
        
    Yields:
        ProgressIndicator instance
    """
    progress = ProgressIndicator(total, desc, disable, unit)
    progress.start()
    try:
        yield progress
    finally:
        progress.close()
