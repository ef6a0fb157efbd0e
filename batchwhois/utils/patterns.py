"""Numeric pattern filters for generated labels.

Each filter is a pure predicate over a digit string. All window-based
filters scan every start offset and succeed on the first matching window;
``AB`` and ``ABC`` look at the number of distinct digits in the whole string.
The generator only applies filters to labels made entirely of digits.
"""

from typing import Callable, Dict, Iterator, Optional

from batchwhois.core.exceptions import ValidationError

Pattern = Callable[[str], bool]


def _windows(value: str, size: int) -> Iterator[str]:
    """Yield every substring of the given size, left to right."""
    for i in range(len(value) - size + 1):
        yield value[i:i + size]


def unique_digit_count(value: str, count: int) -> bool:
    """Check that the string holds exactly ``count`` distinct digits."""
    return len({c for c in value if c.isdigit()}) == count


def has_aa(value: str) -> bool:
    """Two adjacent equal characters (11)."""
    return any(w[0] == w[1] for w in _windows(value, 2))


def has_aaa(value: str) -> bool:
    """Three consecutive equal digits (111)."""
    return any(w[0] == w[1] == w[2] and w.isdigit() for w in _windows(value, 3))


def has_aabb(value: str) -> bool:
    """Two adjacent pairs (1122)."""
    return any(w[0] == w[1] and w[2] == w[3] for w in _windows(value, 4))


def has_aabbcc(value: str) -> bool:
    """Three adjacent pairs (112233)."""
    return any(w[0] == w[1] and w[2] == w[3] and w[4] == w[5]
               for w in _windows(value, 6))


def has_aba(value: str) -> bool:
    """Digit sandwich (121). The middle digit may equal the outer ones."""
    return any(w[0] == w[2] and w.isdigit() for w in _windows(value, 3))


def has_abcba(value: str) -> bool:
    """Five digit palindrome (12321)."""
    return any(w[0] == w[4] and w[1] == w[3] and w.isdigit()
               for w in _windows(value, 5))


def has_abccba(value: str) -> bool:
    """Six digit palindrome (123321)."""
    return any(w == w[::-1] and w.isdigit() for w in _windows(value, 6))


def has_abccab(value: str) -> bool:
    """Pair, doubled middle, same pair again (123312)."""
    return any(w[0] == w[4] and w[1] == w[5] and w[2] == w[3] and w.isdigit()
               for w in _windows(value, 6))


def has_abbba(value: str) -> bool:
    """Outer digits match around three equal inner digits (12221)."""
    return any(w[0] == w[4] and w[1] == w[2] == w[3] and w.isdigit()
               for w in _windows(value, 5))


def has_abcabc(value: str) -> bool:
    """A three digit block repeated (123123)."""
    return any(w[:3] == w[3:] and w.isdigit() for w in _windows(value, 6))


def has_abbbba(value: str) -> bool:
    """Outer digits match around four equal inner digits (122221)."""
    return any(w[0] == w[5] and w[1] == w[2] == w[3] == w[4] and w.isdigit()
               for w in _windows(value, 6))


def has_abcdee(value: str) -> bool:
    """Five ascending consecutive digits with the last one doubled (123455)."""
    for w in _windows(value, 6):
        if not w.isdigit():
            continue
        digits = [int(c) for c in w]
        if all(digits[i] + 1 == digits[i + 1] for i in range(4)) and w[4] == w[5]:
            return True
    return False


def has_consecutive(value: str) -> bool:
    """Three ascending digits, wrapping from 9 to 0 (123, 901)."""
    for w in _windows(value, 3):
        if not w.isdigit():
            continue
        a, b, c = (int(ch) for ch in w)
        if b == (a + 1) % 10 and c == (b + 1) % 10:
            return True
    return False


def _always(value: str) -> bool:
    return True


PATTERNS: Dict[str, Pattern] = {
    'none': _always,
    'AB': lambda value: unique_digit_count(value, 2),
    'ABC': lambda value: unique_digit_count(value, 3),
    'AA': has_aa,
    'AAA': has_aaa,
    'AABB': has_aabb,
    'AABBCC': has_aabbcc,
    'ABA': has_aba,
    'ABCBA': has_abcba,
    'ABCCBA': has_abccba,
    'ABCCAB': has_abccab,
    'ABBBA': has_abbba,
    'ABCABC': has_abcabc,
    'ABBBBA': has_abbbba,
    'ABCDEE': has_abcdee,
    'useConsecutive': has_consecutive,
}

# Older filter keys kept working for saved command lines
ALIASES = {
    'useAABB': 'AABB',
    'useAABBCC': 'AABBCC',
    'useABA': 'ABA',
    'useABCBA': 'ABCBA',
    'useABCCBA': 'ABCCBA',
    'useABCCAB': 'ABCCAB',
}

# Display labels, in the order they are offered to users
PATTERN_CHOICES = [
    ('none', 'no filter'),
    ('AB', 'AB (two distinct digits)'),
    ('ABC', 'ABC (three distinct digits)'),
    ('AAA', 'AAA'),
    ('ABBBA', 'ABBBA'),
    ('ABCABC', 'ABCABC'),
    ('ABBBBA', 'ABBBBA'),
    ('AA', 'AA'),
    ('ABCDEE', 'ABCDEE'),
    ('useConsecutive', 'consecutive run'),
    ('AABB', 'AABB'),
    ('AABBCC', 'AABBCC'),
    ('ABA', 'ABA'),
    ('ABCBA', 'ABCBA'),
    ('ABCCBA', 'ABCCBA'),
    ('ABCCAB', 'ABCCAB'),
]


def get_pattern(name: str) -> Pattern:
    """Look up a pattern predicate by name or alias.
    
    Args:
        name: Pattern name
        
    Returns:
        The predicate function
        
    Raises:
        ValidationError: If no pattern has that name
    """
    key = ALIASES.get(name, name)
    try:
        return PATTERNS[key]
    except KeyError:
        raise ValidationError(f"Unknown pattern filter: {name}") from None


def apply_pattern(value: str, name: Optional[str]) -> bool:
    """Apply the named pattern to a label; no name means no filtering."""
    if not name or name == 'none':
        return True
    return get_pattern(name)(value)
