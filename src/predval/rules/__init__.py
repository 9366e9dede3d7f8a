from .kinds import array, boolean, float_, integer, null, string
from .length import empty, extract_length, is_empty, length, max_length, min_length
from .numeric import (
    even,
    greater_than,
    greater_than_or_equal,
    less_than,
    less_than_or_equal,
    negative,
    odd,
    positive,
    range_,
)
from .patterns import consonant, lowercase, pattern, uppercase, vowel
from .sequences import any_, at, every
from .values import exact, loose_equals, similar, strict_equals

__all__ = [
    "any_",
    "array",
    "at",
    "boolean",
    "consonant",
    "empty",
    "even",
    "every",
    "exact",
    "extract_length",
    "float_",
    "greater_than",
    "greater_than_or_equal",
    "integer",
    "is_empty",
    "length",
    "less_than",
    "less_than_or_equal",
    "loose_equals",
    "lowercase",
    "max_length",
    "min_length",
    "negative",
    "null",
    "odd",
    "pattern",
    "positive",
    "range_",
    "similar",
    "strict_equals",
    "string",
    "uppercase",
    "vowel",
]
