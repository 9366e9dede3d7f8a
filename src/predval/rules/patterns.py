from __future__ import annotations

import re
from typing import Any

from predval.factory import rule_def
from predval.rules.params import RegexParams

LOWERCASE_WORDS = re.compile(r"\A[a-z][a-z\s]*\Z", re.ASCII)
UPPERCASE_WORDS = re.compile(r"\A[A-Z][A-Z\s]*\Z", re.ASCII)
VOWELS = re.compile(r"\A[aeiouy]+\Z", re.ASCII | re.IGNORECASE)
LETTERS = re.compile(r"\A[a-z]+\Z", re.ASCII | re.IGNORECASE)
ANY_VOWEL = re.compile(r"[aeiouy]", re.ASCII | re.IGNORECASE)


def _search(regex: re.Pattern[str], value: Any) -> bool:  # noqa: ANN401
    if not isinstance(value, str):
        msg = f"Pattern rules expect a str, got {type(value).__name__}"
        raise TypeError(msg)
    return regex.search(value) is not None


@rule_def(params=RegexParams)
def pattern(value: Any, regex: str | re.Pattern[str], flags: int = 0) -> bool:  # noqa: ANN401, ARG001
    """
    Test that the regex matches the value.

    The regex is searched over the whole input; anchor it (`^...$`) to require a full match.
    `flags` is folded into the compiled regex at construction.
    """
    return _search(regex, value)


@rule_def()
def lowercase(value: Any) -> bool:  # noqa: ANN401
    """Test that the value is lowercase words separated by whitespace."""
    return _search(LOWERCASE_WORDS, value)


@rule_def()
def uppercase(value: Any) -> bool:  # noqa: ANN401
    """Test that the value is uppercase words separated by whitespace."""
    return _search(UPPERCASE_WORDS, value)


@rule_def()
def vowel(value: Any) -> bool:  # noqa: ANN401
    """Test that the value only holds vowels, y included, in any case."""
    return _search(VOWELS, value)


@rule_def()
def consonant(value: Any) -> bool:  # noqa: ANN401
    """Test that the value only holds letters and none of them is a vowel."""
    return _search(LETTERS, value) and not _search(ANY_VOWEL, value)
