#!/usr/bin/env python3
"""
Unit tests for the input normalizer
"""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from parley.normalizer import NormalizedInput, normalize


class TestNormalize:
    """Lowercasing, stripping and tokenizing."""

    def test_basic_sentence(self):
        result = normalize("How are you today?")
        assert result.tokens == ("how", "are", "you", "today")
        assert result.joined == "how are you today"

    def test_punctuation_removed_without_separator(self):
        result = normalize("Don't stop-me now")
        assert result.tokens == ("dont", "stopme", "now")

    def test_digits_dropped(self):
        assert normalize("java17 rocks").tokens == ("java", "rocks")

    def test_whitespace_runs_collapse(self):
        result = normalize("  hello \t\n  world  ")
        assert result.tokens == ("hello", "world")
        assert result.joined == "hello world"

    def test_non_ascii_letters_removed(self):
        assert normalize("café Ñandú").tokens == ("caf", "and")

    def test_returns_value_type(self):
        assert isinstance(normalize("hi"), NormalizedInput)


class TestEmptyInput:
    """Input with nothing but digits, punctuation and whitespace."""

    @pytest.mark.parametrize("raw", ["", "   ", "???....", "123 456", "!@#$ %^&*() 42\t\n"])
    def test_yields_no_tokens(self, raw):
        result = normalize(raw)
        assert result.tokens == ()
        assert result.joined == ""
        assert result.is_empty


class TestIdempotence:
    """Normalizing the joined form changes nothing."""

    @pytest.mark.parametrize(
        "raw",
        ["Hello, Java!", "  so... HOW are you??  ", "???", "x1y2 z3", "Tabs\tand\nnewlines"],
    )
    def test_joined_is_fixed_point(self, raw):
        once = normalize(raw).joined
        assert normalize(once).joined == once


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
