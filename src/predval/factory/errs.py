from __future__ import annotations

from typing import TYPE_CHECKING

from predval.predicate.errs import PredicateConstructionError

if TYPE_CHECKING:
    from pydantic_core import ErrorDetails


class InvalidParameterError(PredicateConstructionError, ValueError):
    """
    Raised when the parameters given to a predicate factory are rejected.
    """

    def __init__(self, factory: str, errors: list[ErrorDetails]):
        """
        Args:
            factory: name of the factory that rejected its parameters.
            errors: pydantic error details, one per rejected parameter.
        """
        self.factory = factory
        self.errors = errors

        details = "; ".join(f"{'.'.join(map(str, e['loc'])) or 'params'}: {e['msg']}" for e in errors)
        super().__init__(f"Invalid parameters for {factory}(): {details}")
