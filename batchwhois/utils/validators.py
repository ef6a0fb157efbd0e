"""Domain name validation for batchwhois.

Labels follow RFC 952/1123: 1-63 characters of letters, digits and hyphens,
starting and ending with a letter or digit.
"""

import re
from typing import Iterable

from batchwhois.core.exceptions import ConfigurationError, ValidationError

MAX_LABEL_LENGTH = 63

LABEL_PATTERN = re.compile(r'^[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?$')
TLD_PATTERN = re.compile(r'^[a-zA-Z]{2,}$')


def is_valid_label(label: str) -> bool:
    """Check a single domain label.
    
    Args:
        label: Label to check, e.g. ``example`` in ``example.com``
        
    Returns:
        True if the label is 1-63 characters and well formed
    """
    if not label or not isinstance(label, str) or len(label) > MAX_LABEL_LENGTH:
        return False
    return LABEL_PATTERN.match(label) is not None


def validate_suffix(suffix: str) -> None:
    """Reject a run whose suffix is missing or malformed.
    
    Raises:
        ConfigurationError: If the suffix is empty or not a valid label
    """
    if not suffix:
        raise ConfigurationError("A domain suffix is required")
    if not is_valid_label(suffix):
        raise ConfigurationError(f"Domain suffix '{suffix}' is not a valid domain label")


def validate_domains(domains: Iterable[str]) -> None:
    """Check every label of every generated domain before a run starts.
    
    Args:
        domains: Generated domains (label.suffix)
        
    Raises:
        ConfigurationError: On the first domain that does not validate
    """
    for domain in domains:
        labels = domain.split('.')
        if len(labels) < 2:
            raise ConfigurationError(
                f"Generated domain '{domain}' needs at least a name and a suffix")
        for label in labels:
            if label == '':
                raise ConfigurationError(f"Domain '{domain}' contains an empty label")
            if not is_valid_label(label):
                raise ConfigurationError(
                    f"Label '{label}' of domain '{domain}' is not valid, check the position rules")


def validate_domain(domain: str) -> bool:
    """Validate a fully-qualified domain before looking it up.
    
    Args:
        domain: Domain name to validate
        
    Returns:
        True if the domain is valid
        
    Raises:
        ValidationError: If the domain is invalid
    """
    if not domain or not isinstance(domain, str):
        raise ValidationError("Domain must be a non-empty string")

    labels = domain.split('.')
    if len(labels) < 2 or not all(is_valid_label(label) for label in labels):
        raise ValidationError(f"Invalid domain format: {domain}")
    if not TLD_PATTERN.match(labels[-1]):
        raise ValidationError(f"Invalid top-level domain: {domain}")

    return True
