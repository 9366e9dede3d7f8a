from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from functools import wraps
from typing import TYPE_CHECKING, Concatenate, Generic, ParamSpec, TypeVar, cast

from pydantic import BaseModel, ValidationError

from predval.factory.errs import InvalidParameterError
from predval.predicate import Predicate, is_predicate, predicate

if TYPE_CHECKING:
    from predval.types import RuleDef

logger = logging.getLogger(__name__)

T_contra = TypeVar("T_contra", contravariant=True)
P = ParamSpec("P")


def _render(arg: object) -> str:
    if is_predicate(arg):
        return arg.desc or arg.name or repr(arg)
    return repr(arg)


def _describe(name: str, args: tuple, kwargs: dict) -> str:
    rendered = [_render(a) for a in args] + [f"{k}={_render(v)}" for k, v in kwargs.items()]
    return f"{name}({', '.join(rendered)})"


class rule_def(Generic[T_contra]):  # noqa: N801
    """
    Convert a [predval.types.RuleDef][] function into a factory returning Predicate[T].
    This will modify the signature of RuleDef: the first parameter (the value under test) is dropped.

    Must be used on named functions.

    Args:
        params: Optional pydantic model validating the factory arguments at construction time.
            Field names must match the parameter names of the decorated function; the validated
            field values are what the function receives.

    Examples:
        ```python
        @rule_def()
        def is_multiple_of(value: int, factor: int) -> bool:
            return value % factor == 0

        multiple_of_three = is_multiple_of(3)

        assert multiple_of_three(9)
        assert not multiple_of_three(10)
        ```

    """

    # XXX: Closure decorator functions are not directly defined due to type inference issues
    #  with IDEs and static analysis tools. Using decorator classes makes static inference more straightforward.

    def __init__(self, *, params: type[BaseModel] | None = None):
        self.__params = params

    def __call__(self, fn: Callable[Concatenate[T_contra, P], bool]) -> Callable[P, Predicate[T_contra]]:
        """
        Convert the RuleDef function into a predicate factory.

        Args:
            fn (RuleDef[T,P]): Rule define func. Must be a named function.

        Raises:
            InvalidParameterError: (from the returned factory) if the params model rejects the arguments.
        """
        fn = cast("RuleDef[T_contra, P]", fn)
        params_model = self.__params

        sig = inspect.signature(fn)
        new_params = list(sig.parameters.values())[1:]
        factory_sig = inspect.Signature(parameters=new_params, return_annotation=Predicate)

        @wraps(fn)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> Predicate[T_contra]:
            desc = _describe(fn.__name__, args, kwargs)
            bound = factory_sig.bind(*args, **kwargs)
            bound.apply_defaults()

            if params_model is not None:
                try:
                    validated = params_model.model_validate(dict(bound.arguments))
                except ValidationError as e:
                    logger.debug("Rejected parameters for %s: %s", desc, e)
                    raise InvalidParameterError(fn.__name__, e.errors()) from e
                for name, value in bound.arguments.items():
                    bound.arguments[name] = getattr(validated, name, value)

            call_args, call_kwargs = bound.args, bound.kwargs

            def rule(value: T_contra) -> bool:
                return fn(value, *call_args, **call_kwargs)

            return predicate(rule, name=fn.__name__, desc=desc)

        wrapper.__annotations__ = {p.name: p.annotation for p in new_params}
        wrapper.__annotations__["return"] = Predicate

        wrapper.__signature__ = factory_sig  # ty:ignore[unresolved-attribute]

        return wrapper
