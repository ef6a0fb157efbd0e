"""Error handling utilities for batchwhois."""

import logging
import sys
from typing import Optional


class ErrorHandler:
    """Centralized error reporting and logging setup for the CLI."""

    def __init__(self, verbose: bool = False, quiet: bool = False):
        """Initialize the error handler.
        
        Args:
            verbose: Enable debug logging and exception details
            quiet: Only log errors
        """
        self.verbose = verbose
        self.quiet = quiet
        self._setup_logging()

    def _setup_logging(self):
        """Set up logging configuration."""
        if self.verbose:
            level = logging.DEBUG
        elif self.quiet:
            level = logging.ERROR
        else:
            level = logging.INFO
        logging.basicConfig(
            level=level,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            handlers=[
                logging.StreamHandler(sys.stderr)
            ]
        )
        self.logger = logging.getLogger('batchwhois')
        self.logger.setLevel(level)

    def handle_error(self, error_type: str, message: str, exception: Optional[Exception] = None) -> None:
        """Report an error by category.
        
        Input and configuration errors and unexpected errors end the process
        with exit status 1; network, API and query errors are reported and the
        caller carries on.
        
        Args:
            error_type: One of input, config, network, api, query, unexpected
            message: Error message to display
            exception: Optional exception object
        """
        labels = {
            'input': 'Input Error',
            'config': 'Configuration Error',
            'network': 'Network Error',
            'api': 'API Error',
            'query': 'Query Error',
        }
        label = labels.get(error_type)

        if label is None:
            print(f"Unexpected Error: {message}", file=sys.stderr)
            if exception:
                self.logger.error(f"Exception: {exception}", exc_info=True)
            sys.exit(1)

        print(f"{label}: {message}", file=sys.stderr)
        if self.verbose and exception:
            self.logger.debug(f"Exception details: {exception}")
        if error_type in ('input', 'config'):
            sys.exit(1)
