"""Candidate generation for batch runs.

Expands a list of position specs into every label they describe, in
odometer order (the last position changes fastest), applying the optional
pattern filter and dropping labels that are not valid domain labels.
"""

import itertools
import logging
from functools import reduce
from typing import Iterator, List, Optional, Sequence

from batchwhois.core.exceptions import GenerationBoundsError
from batchwhois.core.interfaces import BatchConfig, PositionSpec
from batchwhois.utils.patterns import get_pattern
from batchwhois.utils.validators import is_valid_label, validate_suffix

logger = logging.getLogger('batchwhois.generator')


def is_all_digits(positions: Sequence[PositionSpec]) -> bool:
    """True if every position yields digits only."""
    return all(position.is_numeric for position in positions)


def candidate_space(positions: Sequence[PositionSpec]) -> int:
    """Number of labels the positions describe before any filtering."""
    return reduce(lambda acc, position: acc * len(position.alphabet()), positions, 1)


def iter_labels(positions: Sequence[PositionSpec],
                pattern: Optional[str] = None) -> Iterator[str]:
    """Lazily yield candidate labels.
    
    The pattern filter only applies when every position is numeric; it sees
    the bare label, never the suffix.
    
    Args:
        positions: Position specs, left to right
        pattern: Optional pattern filter name
        
    Yields:
        Labels that pass the filter and label validation
    """
    predicate = None
    if pattern and pattern != 'none' and is_all_digits(positions):
        predicate = get_pattern(pattern)

    alphabets = [position.alphabet() for position in positions]
    for parts in itertools.product(*alphabets):
        label = ''.join(parts)
        if predicate is not None and not predicate(label):
            continue
        if not is_valid_label(label):
            continue
        yield label


def generate(positions: Sequence[PositionSpec], suffix: str,
             pattern: Optional[str] = None) -> List[str]:
    """Return every candidate domain as ``label.suffix``."""
    return [f"{label}.{suffix}" for label in iter_labels(positions, pattern)]


def generate_domains(config: BatchConfig) -> List[str]:
    """Generate the candidate domains of a batch configuration.
    
    Args:
        config: Batch configuration
        
    Returns:
        Candidate domains in generation order
        
    Raises:
        ConfigurationError: If the suffix is invalid
        GenerationBoundsError: If the candidate space exceeds max_candidates
    """
    validate_suffix(config.suffix)

    space = candidate_space(config.positions)
    if config.max_candidates is not None and space > config.max_candidates:
        raise GenerationBoundsError(
            f"{space} candidates exceed the limit of {config.max_candidates}")

    domains = generate(config.positions, config.suffix, config.pattern)
    logger.debug(f"Generated {len(domains)} of {space} candidates for .{config.suffix}")
    return domains
