"""
Value identity rules.

`similar` uses loose equality. Both operands are classified with `kind_of` and
compared according to the first matching row (the table is symmetric):

==========================  ===================================================
Pair                        Rule
==========================  ===================================================
NULL vs TEXT                the text is ``""``
NULL vs anything            the other value is empty (see ``is_empty``)
BOOLEAN vs anything         both sides have the same truthiness, where a value
                            is falsy exactly when ``is_empty`` says so
NUMBER vs NUMBER            numeric ``==`` (``12 == 12.0``)
NUMBER vs TEXT              the text is a numeric string with the same value;
                            non-numeric text never equals a number
TEXT vs TEXT                numeric ``==`` when both are numeric strings
                            (``"1e1" == "10"``), plain ``==`` otherwise
SEQUENCE vs SEQUENCE        same length, positionally similar elements
MAPPING vs MAPPING          same keys, similar values per key
OTHER vs OTHER              Python ``==``
any other pair              false
==========================  ===================================================

A numeric string is optional ASCII whitespace, an optional sign, decimal digits
with an optional fraction and exponent, then optional ASCII whitespace.
"""

from __future__ import annotations

import re
import sys
from decimal import Decimal
from typing import Any

from predval.factory import rule_def
from predval.rules.length import is_empty
from predval.types import NUMERIC_KINDS, Kind, kind_of

NUMERIC_STRING = re.compile(
    r"""
    \A[ \t\n\r\v\f]*
    (?P<number>
        [+-]?
        (?:\d+(?P<fraction>\.\d*)?|(?P<bare>\.\d+))
        (?P<exponent>[eE][+-]?\d+)?
    )
    [ \t\n\r\v\f]*\Z
    """,
    re.ASCII | re.VERBOSE,
)


def parse_numeric(text: str) -> int | float | Decimal | None:
    """
    Parse a numeric string, keeping integers exact.

    Integers longer than the interpreter's int/str conversion limit come back as `Decimal`,
    which still compares exactly with other numbers.

    Returns:
        The number, or None when the text is not numeric.
    """
    match = NUMERIC_STRING.match(text)
    if match is None:
        return None
    number = match["number"]
    if match["fraction"] is None and match["bare"] is None and match["exponent"] is None:
        max_digits = sys.get_int_max_str_digits()
        if max_digits and len(number.lstrip("+-")) > max_digits:
            return Decimal(number)
        return int(number)
    return float(number)


def _number_equals_text(number: float, text: str) -> bool:
    parsed = parse_numeric(text)
    return parsed is not None and parsed == number


def loose_equals(left: Any, right: Any) -> bool:  # noqa: ANN401, PLR0911, C901
    left_kind, right_kind = kind_of(left), kind_of(right)

    if Kind.NULL in (left_kind, right_kind):
        other, other_kind = (right, right_kind) if left_kind is Kind.NULL else (left, left_kind)
        if other_kind is Kind.TEXT:
            return other == ""
        return is_empty(other)

    if Kind.BOOLEAN in (left_kind, right_kind):
        return is_empty(left) == is_empty(right)

    if left_kind in NUMERIC_KINDS and right_kind in NUMERIC_KINDS:
        return left == right

    if left_kind in NUMERIC_KINDS and right_kind is Kind.TEXT:
        return _number_equals_text(left, right)

    if left_kind is Kind.TEXT and right_kind in NUMERIC_KINDS:
        return _number_equals_text(right, left)

    if left_kind is Kind.TEXT and right_kind is Kind.TEXT:
        left_number, right_number = parse_numeric(left), parse_numeric(right)
        if left_number is not None and right_number is not None:
            return left_number == right_number
        return left == right

    if left_kind is Kind.SEQUENCE and right_kind is Kind.SEQUENCE:
        return len(left) == len(right) and all(loose_equals(a, b) for a, b in zip(left, right, strict=True))

    if left_kind is Kind.MAPPING and right_kind is Kind.MAPPING:
        return left.keys() == right.keys() and all(loose_equals(left[k], right[k]) for k in left)

    if left_kind is Kind.OTHER and right_kind is Kind.OTHER:
        return bool(left == right)

    return False


def strict_equals(left: Any, right: Any) -> bool:  # noqa: ANN401
    """
    Same type and same value; containers are compared element by element, mappings in key order.
    """
    if type(left) is not type(right):
        return False

    match kind_of(left):
        case Kind.SEQUENCE:
            return len(left) == len(right) and all(strict_equals(a, b) for a, b in zip(left, right, strict=True))
        case Kind.MAPPING:
            return len(left) == len(right) and all(
                strict_equals(left_key, right_key) and strict_equals(left[left_key], right[right_key])
                for left_key, right_key in zip(left, right, strict=True)
            )
        case _:
            return bool(left == right)


@rule_def()
def similar(value: Any, target: Any) -> bool:  # noqa: ANN401
    """Test that the value is loosely equal to target."""
    return loose_equals(target, value)


@rule_def()
def exact(value: Any, target: Any) -> bool:  # noqa: ANN401
    """Test that the value has the same type and value as target."""
    return strict_equals(target, value)
