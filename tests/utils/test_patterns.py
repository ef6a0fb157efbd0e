"""
Unit tests for numeric pattern filters.
"""
import pytest

from batchwhois.core.exceptions import ValidationError
from batchwhois.utils.patterns import (
    PATTERNS, PATTERN_CHOICES, ALIASES, apply_pattern, get_pattern
)


class TestPatterns:
    """Table-driven checks of every pattern filter."""

    @pytest.mark.parametrize("name,value,expected", [
        ("AA", "1123", True),
        ("AA", "1234", False),
        ("AA", "1", False),
        ("AAA", "12223", True),
        ("AAA", "1122", False),
        ("AABB", "01122", True),
        ("AABB", "1212", False),
        ("AABBCC", "112233", True),
        ("AABBCC", "112234", False),
        ("AABBCC", "11223", False),
        ("ABA", "121", True),
        ("ABA", "111", True),
        ("ABA", "123", False),
        ("ABCBA", "12321", True),
        ("ABCBA", "012321", True),
        ("ABCBA", "12345", False),
        ("ABCCBA", "123321", True),
        ("ABCCBA", "123421", False),
        ("ABCCAB", "123312", True),
        ("ABCCAB", "123321", False),
        ("ABBBA", "12221", True),
        ("ABBBA", "12231", False),
        ("ABCABC", "123123", True),
        ("ABCABC", "123124", False),
        ("ABBBBA", "122221", True),
        ("ABBBBA", "122211", False),
        ("ABCDEE", "123455", True),
        ("ABCDEE", "0567899", True),
        ("ABCDEE", "123456", False),
        ("ABCDEE", "890122", False),
        ("AB", "1212121", True),
        ("AB", "1213121", False),
        ("AB", "123", False),
        ("AB", "11", False),
        ("ABC", "123", True),
        ("ABC", "1231234", False),
        ("useConsecutive", "0123", True),
        ("useConsecutive", "901", True),
        ("useConsecutive", "135", False),
        ("useConsecutive", "321", False),
        ("none", "999", True),
    ])
    def test_pattern(self, name, value, expected):
        """Each predicate matches its documented shape."""
        assert PATTERNS[name](value) is expected

    def test_short_input(self):
        """Window filters never match strings shorter than their window."""
        for name in ("AAA", "AABB", "AABBCC", "ABCBA", "ABCCBA", "ABCDEE"):
            assert PATTERNS[name]("12") is False

    def test_aliases(self):
        """Aliases resolve to the same predicate."""
        for alias, name in ALIASES.items():
            assert get_pattern(alias) is PATTERNS[name]

    def test_apply_pattern(self):
        """No name or none keeps every label."""
        assert apply_pattern("1234", None) is True
        assert apply_pattern("1234", "none") is True
        assert apply_pattern("1234", "AA") is False
        assert apply_pattern("1134", "useAABB") is False
        assert apply_pattern("1133", "useAABB") is True

    def test_unknown_pattern(self):
        """Unknown names raise a validation error."""
        with pytest.raises(ValidationError):
            get_pattern("ABCD")

    def test_choices_cover_registry(self):
        """Every registered pattern is offered exactly once."""
        names = [name for name, _ in PATTERN_CHOICES]
        assert sorted(names) == sorted(PATTERNS)
