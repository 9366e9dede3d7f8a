from __future__ import annotations

from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any, Literal, ParamSpec, Protocol, TypeVar


class Kind(Enum):
    """
    Closed set of value kinds every predicate reasons about.
    """

    INTEGER = "integer"
    FLOAT = "float"
    TEXT = "text"
    BOOLEAN = "boolean"
    NULL = "null"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    OTHER = "other"


NUMERIC_KINDS = frozenset({Kind.INTEGER, Kind.FLOAT})
ARRAY_KINDS = frozenset({Kind.SEQUENCE, Kind.MAPPING})


def kind_of(value: Any) -> Kind:  # noqa: ANN401, PLR0911
    """
    Classify a runtime value.

    `bool` is tested before `int` because it subclasses it, and text-like
    sequences (`str`, `bytes`, `bytearray`) are never treated as arrays.

    Examples:
        >>> kind_of(True)
        <Kind.BOOLEAN: 'boolean'>
        >>> kind_of(12.0)
        <Kind.FLOAT: 'float'>
        >>> kind_of({"k": 1})
        <Kind.MAPPING: 'mapping'>
    """
    if value is None:
        return Kind.NULL
    if isinstance(value, bool):
        return Kind.BOOLEAN
    if isinstance(value, int):
        return Kind.INTEGER
    if isinstance(value, float):
        return Kind.FLOAT
    if isinstance(value, str):
        return Kind.TEXT
    if isinstance(value, Mapping):
        return Kind.MAPPING
    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        return Kind.SEQUENCE
    return Kind.OTHER


T = TypeVar("T")
RuleParams = ParamSpec("RuleParams")


class RuleDef(Protocol[T, RuleParams]):
    """
    A callable that takes a value plus positional and keyword parameters and returns a boolean.
    """

    __name__: str

    def __call__(self, value: T, /, *args: RuleParams.args, **kwargs: RuleParams.kwargs) -> bool:
        """
        Take a value and the construction-time parameters and return a boolean.

        Args:
            value: The value under test.
            *args: Positional parameters captured by the factory.
            **kwargs: Keyword parameters captured by the factory.

        Examples:
            >>> def is_multiple_of(value: int, factor: int) -> bool:
            ...     return value % factor == 0
            >>> is_multiple_of.__name__
            'is_multiple_of'

        """

        ...


PredicateNodeType = Literal["leaf", "and", "or", "not", "opt"]
LogicBinOp = Literal["and", "or"]
LogicUnaryOp = Literal["not", "opt"]
