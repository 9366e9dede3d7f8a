from __future__ import annotations

from typing import Any, assert_never

from predval.factory import rule_def
from predval.rules.params import LengthRange, MaxLength, MinLength
from predval.types import Kind, kind_of


def extract_length(value: Any) -> int | None:  # noqa: ANN401
    """
    Measure sequences, mappings and text uniformly.

    Text is measured in code points, not encoded bytes.

    Returns:
        The element or character count, or None when the value has no length.
    """
    match kind_of(value):
        case Kind.SEQUENCE | Kind.MAPPING | Kind.TEXT:
            return len(value)
        case _:
            return None


def is_empty(value: Any) -> bool:  # noqa: ANN401, PLR0911
    """
    Report whether a value is the empty representation of its kind.

    Accepted empty values: None, False, 0, 0.0, "", "0", an empty sequence and an empty mapping.
    """
    kind = kind_of(value)
    match kind:
        case Kind.NULL:
            return True
        case Kind.BOOLEAN:
            return value is False
        case Kind.INTEGER | Kind.FLOAT:
            return value == 0
        case Kind.TEXT:
            return value in ("", "0")
        case Kind.SEQUENCE | Kind.MAPPING:
            return len(value) == 0
        case Kind.OTHER:
            return False
        case _:
            assert_never(kind)


@rule_def()
def empty(value: Any) -> bool:  # noqa: ANN401
    """Test that the value is empty for its kind."""
    return is_empty(value)


@rule_def(params=LengthRange)
def length(value: Any, minimum: int, maximum: int) -> bool:  # noqa: ANN401
    """
    Test that the value length is between minimum and maximum (inclusive).

    Values without a length are rejected instead of raising.
    """
    size = extract_length(value)
    return size is not None and minimum <= size <= maximum


@rule_def(params=MinLength)
def min_length(value: Any, minimum: int) -> bool:  # noqa: ANN401
    """Test that the value length is at least minimum."""
    size = extract_length(value)
    return size is not None and size >= minimum


@rule_def(params=MaxLength)
def max_length(value: Any, maximum: int) -> bool:  # noqa: ANN401
    """Test that the value length is at most maximum."""
    size = extract_length(value)
    return size is not None and size <= maximum
