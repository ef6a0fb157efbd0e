"""Base interfaces and data models for batchwhois.

This module defines the data models that flow through the batch pipeline
(position specs, batch configuration, query results and run state) together
with the abstract base classes for lookup backends and output formatters.
"""

import math
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from batchwhois.core.exceptions import GenerationBoundsError, ValidationError
from batchwhois.utils.patterns import get_pattern

MIN_POSITIONS = 1
MAX_POSITIONS = 6
MIN_THREAD_COUNT = 1
MAX_THREAD_COUNT = 30
DEFAULT_THREAD_COUNT = 10

DIGITS = tuple("0123456789")
LETTERS = tuple("abcdefghijklmnopqrstuvwxyz")


class PositionKind(Enum):
    """What a single character position of a label ranges over."""
    DIGIT = "digit"
    LETTER = "letter"
    FIXED = "fixed"


@dataclass(frozen=True)
class PositionSpec:
    """One slot of a generated label.

    Attributes:
        kind: Whether the slot ranges over digits, letters or a fixed string
        value: The literal text of a FIXED slot, None otherwise
    """
    kind: PositionKind
    value: Optional[str] = None

    def __post_init__(self):
        if self.kind is PositionKind.FIXED:
            if not self.value:
                raise ValidationError("Fixed text position requires a non-empty value")
        elif self.value is not None:
            raise ValidationError(f"{self.kind.value} position does not take a value")

    @classmethod
    def digit(cls) -> 'PositionSpec':
        return cls(PositionKind.DIGIT)

    @classmethod
    def letter(cls) -> 'PositionSpec':
        return cls(PositionKind.LETTER)

    @classmethod
    def fixed(cls, value: str) -> 'PositionSpec':
        return cls(PositionKind.FIXED, value)

    @classmethod
    def parse(cls, token: str) -> 'PositionSpec':
        """Parse a command-line position token.

        ``d``/``digit`` and ``l``/``letter`` select the ranged kinds, while a
        token starting with ``=`` is fixed text (``=shop``).

        Args:
            token: Position token

        Returns:
            Parsed PositionSpec

        Raises:
            ValidationError: If the token is not recognised
        """
        token = token.strip()
        if token.startswith('='):
            return cls.fixed(token[1:])
        lowered = token.lower()
        if lowered in ('d', 'digit'):
            return cls.digit()
        if lowered in ('l', 'letter'):
            return cls.letter()
        raise ValidationError(f"Invalid position token: {token!r}")

    def alphabet(self) -> Tuple[str, ...]:
        """Return the values this position expands to, in generation order."""
        if self.kind is PositionKind.DIGIT:
            return DIGITS
        if self.kind is PositionKind.LETTER:
            return LETTERS
        return (self.value,)

    @property
    def is_numeric(self) -> bool:
        """True if every value of this position is made of digits only."""
        if self.kind is PositionKind.DIGIT:
            return True
        if self.kind is PositionKind.FIXED:
            return re.fullmatch(r'\d+', self.value) is not None
        return False


@dataclass(frozen=True)
class BatchConfig:
    """Immutable configuration of one batch run.

    Attributes:
        positions: Ordered position specs, concatenated left to right
        suffix: Domain suffix appended after a literal dot
        thread_count: Number of concurrent workers, clamped to [1, 30]
        pattern: Optional pattern filter name, used for all-digit labels only
        max_candidates: Optional ceiling on the size of the candidate space
    """
    positions: Tuple[PositionSpec, ...]
    suffix: str
    thread_count: int = DEFAULT_THREAD_COUNT
    pattern: Optional[str] = None
    max_candidates: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, 'positions', tuple(self.positions))
        object.__setattr__(self, 'thread_count', clamp_thread_count(self.thread_count))

        count = len(self.positions)
        if count < MIN_POSITIONS or count > MAX_POSITIONS:
            raise GenerationBoundsError(
                f"Number of positions must be between {MIN_POSITIONS} and "
                f"{MAX_POSITIONS}, got {count}")

        # Unknown names fail here rather than halfway through generation
        if self.pattern is not None:
            get_pattern(self.pattern)


def clamp_thread_count(value: Any) -> int:
    """Floor a thread count and clamp it to the allowed worker range."""
    try:
        count = math.floor(value)
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_THREAD_COUNT
    return min(max(MIN_THREAD_COUNT, count), MAX_THREAD_COUNT)


@dataclass
class QueryResult:
    """Outcome of looking up one fully-qualified domain.

    Attributes:
        domain: The queried domain (label.suffix)
        is_registered: Whether the backend reports the domain as taken
        data: Opaque backend payload (WHOIS record, nameservers, ...)
        error: Error message if the lookup failed; is_registered is then
            not meaningful
    """
    domain: str
    is_registered: bool = False
    data: Any = None
    error: Optional[str] = None

    @classmethod
    def failed(cls, domain: str, message: str) -> 'QueryResult':
        return cls(domain=domain, error=message or "Query failed")

    @classmethod
    def from_dict(cls, payload: Dict[str, Any],
                  default_domain: Optional[str] = None) -> 'QueryResult':
        """Build a result from its wire shape ({domain, isRegistered, whoisData, error})."""
        return cls(
            domain=payload.get('domain') or default_domain,
            is_registered=bool(payload.get('isRegistered')),
            data=payload.get('whoisData'),
            error=payload.get('error') or None,
        )

    @property
    def is_available(self) -> bool:
        return not self.is_registered and not self.error

    def to_dict(self) -> Dict[str, Any]:
        """Return the result in its wire shape."""
        payload = {
            'domain': self.domain,
            'isRegistered': self.is_registered,
            'whoisData': self.data,
        }
        if self.error:
            payload['error'] = self.error
        return payload


@dataclass(frozen=True)
class ProgressEvent:
    """One progress message, emitted after every recorded query."""
    completed: int
    total: int
    result: QueryResult

    @property
    def percent(self) -> float:
        return progress_percent(self.completed, self.total)


@dataclass
class RunState:
    """Mutable state of a single dispatcher run.

    Attributes:
        total: Number of candidates at run start
        completed: Number of recorded results, never above total
        results: Results in completion order
        stopped: Whether a stop was requested during the run
    """
    total: int
    completed: int = 0
    results: List[QueryResult] = field(default_factory=list)
    stopped: bool = False

    @property
    def progress(self) -> float:
        return progress_percent(self.completed, self.total)

    @property
    def is_complete(self) -> bool:
        return not self.stopped and self.completed == self.total


def progress_percent(completed: int, total: int) -> float:
    if total == 0:
        return 100.0
    return completed / total * 100


class LookupBackend(ABC):
    """Base interface for domain lookup backends.

    A backend answers whether a single domain is registered. Instances are
    called concurrently from the dispatcher's worker threads.
    """

    @abstractmethod
    def lookup(self, domain: str) -> QueryResult:
        """Look up a single domain.

        Args:
            domain: Fully-qualified domain name

        Returns:
            QueryResult for the domain

        Raises:
            ValidationError: If the domain is malformed
            NetworkError: If the backend cannot be reached
            APIError: If the backend reports an error
            QueryError: If the backend answer cannot be classified
        """
        pass

    def __call__(self, domain: str) -> QueryResult:
        return self.lookup(domain)

    @property
    def name(self) -> str:
        """Return the backend name, derived from the class name."""
        return self.__class__.__name__.replace('Lookup', '').lower()


class OutputFormatter(ABC):
    """Base interface for output formatters."""

    @abstractmethod
    def format(self, state: RunState, keyword: Optional[str] = None) -> str:
        """Format the results of a run.

        Args:
            state: Final run state
            keyword: Optional case-insensitive domain filter

        Returns:
            Formatted string representation
        """
        pass
