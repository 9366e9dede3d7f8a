from .errs import NotAPredicateError, PredicateConstructionError, PredicateError
from .predicate import (
    Predicate,
    PredicateFn,
    and_,
    as_predicate,
    is_predicate,
    not_,
    opt,
    or_,
    predicate,
)

__all__ = [
    "NotAPredicateError",
    "Predicate",
    "PredicateConstructionError",
    "PredicateError",
    "PredicateFn",
    "and_",
    "as_predicate",
    "is_predicate",
    "not_",
    "opt",
    "or_",
    "predicate",
]
