from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from predval.factory import rule_def
from predval.rules.params import ElementRule, PositionRule
from predval.types import Kind, kind_of

if TYPE_CHECKING:
    from predval.predicate import Predicate


def _elements(value: Any) -> Iterable[Any]:  # noqa: ANN401
    """
    Elements of a collection: mapping values, or the items of any other non-text iterable.
    """
    kind = kind_of(value)
    if kind is Kind.MAPPING:
        return value.values()
    if kind is Kind.TEXT or isinstance(value, (bytes, bytearray)):
        msg = f"Element rules expect a collection, got {type(value).__name__}"
        raise TypeError(msg)
    return value


@rule_def(params=ElementRule)
def every(value: Any, rule: Predicate) -> bool:  # noqa: ANN401
    """Test that every element of the collection matches rule."""
    return all(rule(item) for item in _elements(value))


@rule_def(params=ElementRule)
def any_(value: Any, rule: Predicate) -> bool:  # noqa: ANN401
    """Test that at least one element of the collection matches rule."""
    return any(rule(item) for item in _elements(value))


@rule_def(params=PositionRule)
def at(value: Any, position: int | str, rule: Predicate) -> bool:  # noqa: ANN401
    """
    Test that position exists in the collection and that its value matches rule.

    Mappings are looked up by key. Sequences only have the non-negative integer positions below their length.
    A missing position is rejected without evaluating rule.
    """
    match kind_of(value):
        case Kind.MAPPING:
            return position in value and rule(value[position])
        case Kind.SEQUENCE:
            return isinstance(position, int) and 0 <= position < len(value) and rule(value[position])
        case _:
            msg = f"at() expects a sequence or a mapping, got {type(value).__name__}"
            raise TypeError(msg)
