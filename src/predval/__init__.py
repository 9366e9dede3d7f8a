import logging

from .factory import InvalidParameterError, rule_def
from .predicate import (
    NotAPredicateError,
    Predicate,
    PredicateConstructionError,
    PredicateError,
    and_,
    as_predicate,
    is_predicate,
    not_,
    opt,
    or_,
    predicate,
)
from .rules import (
    any_,
    array,
    at,
    boolean,
    consonant,
    empty,
    even,
    every,
    exact,
    float_,
    greater_than,
    greater_than_or_equal,
    integer,
    length,
    less_than,
    less_than_or_equal,
    lowercase,
    max_length,
    min_length,
    negative,
    null,
    odd,
    pattern,
    positive,
    range_,
    similar,
    string,
    uppercase,
    vowel,
)
from .types import Kind, kind_of

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "InvalidParameterError",
    "Kind",
    "NotAPredicateError",
    "Predicate",
    "PredicateConstructionError",
    "PredicateError",
    "and_",
    "any_",
    "array",
    "as_predicate",
    "at",
    "boolean",
    "consonant",
    "empty",
    "even",
    "every",
    "exact",
    "float_",
    "greater_than",
    "greater_than_or_equal",
    "integer",
    "is_predicate",
    "kind_of",
    "length",
    "less_than",
    "less_than_or_equal",
    "lowercase",
    "max_length",
    "min_length",
    "negative",
    "not_",
    "null",
    "odd",
    "opt",
    "or_",
    "pattern",
    "positive",
    "predicate",
    "range_",
    "rule_def",
    "similar",
    "string",
    "uppercase",
    "vowel",
]
