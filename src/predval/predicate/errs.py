class PredicateError(Exception):
    """Base Predicate exception."""

    ...


class PredicateConstructionError(PredicateError):
    """
    Error raised when a predicate cannot be built from the given arguments.
    """

    ...


class NotAPredicateError(PredicateConstructionError, TypeError):
    """Raised when a combinator receives something that is neither a predicate nor a callable."""

    def __init__(self, obj: object):
        self.obj = obj
        super().__init__(f"Expected a predicate or a callable, got {type(obj).__name__}: {obj!r}")
