"""Custom exceptions for batchwhois.

This module defines the exception hierarchy used throughout batchwhois.
All exceptions inherit from BatchWhoisError so callers can catch every
batchwhois-specific failure with a single except clause.
"""


class BatchWhoisError(Exception):
    """Base exception for all batchwhois errors."""
    pass


class ValidationError(BatchWhoisError):
    """Raised when input validation fails.
    
    Used for malformed domain names, empty fixed-text positions and unknown
    pattern filter names.
    """
    pass


class ConfigurationError(BatchWhoisError):
    """Raised when a batch configuration cannot be run.
    
    The suffix or a generated domain failed label validation. Raised before
    any query is issued, so a run never starts with a bad configuration.
    """
    pass


class GenerationBoundsError(ConfigurationError):
    """Raised when the candidate space is outside the allowed bounds.
    
    Either the number of positions is outside [1, 6] or the candidate count
    exceeds the configured ceiling.
    """
    pass


class NetworkError(BatchWhoisError):
    """Raised when network operations fail.
    
    Covers HTTP transport failures, timeouts and DNS resolution problems.
    """
    pass


class APIError(BatchWhoisError):
    """Raised when the WHOIS API answers with an error payload."""
    pass


class QueryError(BatchWhoisError):
    """Raised when a single domain lookup fails for any other reason."""
    pass


class DispatchError(BatchWhoisError):
    """Raised when the dispatcher is misused, e.g. a run handle is reused."""
    pass
