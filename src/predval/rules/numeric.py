from __future__ import annotations

from numbers import Real
from typing import Any

from predval.factory import rule_def
from predval.rules.params import LowerBound, NumericRange, UpperBound


def _require_real(value: Any, rule_name: str) -> None:  # noqa: ANN401
    if isinstance(value, bool) or not isinstance(value, Real):
        msg = f"{rule_name}() expects a real number, got {type(value).__name__}"
        raise TypeError(msg)


def _reject_bool(value: Any, rule_name: str) -> None:  # noqa: ANN401
    if isinstance(value, bool):
        msg = f"{rule_name}() does not compare booleans"
        raise TypeError(msg)


@rule_def()
def negative(value: Any) -> bool:  # noqa: ANN401
    """Test that the value is strictly below zero."""
    _reject_bool(value, "negative")
    return value < 0


@rule_def()
def positive(value: Any) -> bool:  # noqa: ANN401
    """Test that the value is zero or above. Zero counts as positive."""
    _reject_bool(value, "positive")
    return value >= 0


@rule_def(params=NumericRange)
def range_(value: Any, minimum: float, maximum: float) -> bool:  # noqa: ANN401
    """Test that the value is between minimum and maximum (inclusive)."""
    _reject_bool(value, "range_")
    return minimum <= value <= maximum


@rule_def(params=UpperBound)
def less_than(value: Any, maximum: float) -> bool:  # noqa: ANN401
    _reject_bool(value, "less_than")
    return value < maximum


@rule_def(params=UpperBound)
def less_than_or_equal(value: Any, maximum: float) -> bool:  # noqa: ANN401
    _reject_bool(value, "less_than_or_equal")
    return value <= maximum


@rule_def(params=LowerBound)
def greater_than(value: Any, minimum: float) -> bool:  # noqa: ANN401
    _reject_bool(value, "greater_than")
    return value > minimum


@rule_def(params=LowerBound)
def greater_than_or_equal(value: Any, minimum: float) -> bool:  # noqa: ANN401
    _reject_bool(value, "greater_than_or_equal")
    return value >= minimum


@rule_def()
def even(value: Any) -> bool:  # noqa: ANN401
    """
    Test that the value is even.

    Uses the floored remainder, so negative integers keep their parity and floats are not truncated.
    """
    _require_real(value, "even")
    return value % 2 == 0


@rule_def()
def odd(value: Any) -> bool:  # noqa: ANN401
    """Test that the value is odd (anything not even, fractional floats included)."""
    _require_real(value, "odd")
    return value % 2 != 0
