from __future__ import annotations

import math
import re
from abc import ABC
from typing import Annotated, Any, Self

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, PlainValidator, model_validator

from predval.predicate import as_predicate


def _reject_nan(value: float) -> float:
    if math.isnan(value):
        msg = "NaN is not a valid bound"
        raise ValueError(msg)
    return value


Number = int | Annotated[float, AfterValidator(_reject_nan)]
NonNegativeInt = Annotated[int, Field(ge=0)]
PredicateParam = Annotated[Any, PlainValidator(as_predicate)]


class BaseRuleParams(BaseModel, ABC):
    """
    Base class for the construction-time parameters of a rule factory.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", strict=True)


class LowerBound(BaseRuleParams):
    minimum: Number = Field(..., description="Lower numeric bound")


class UpperBound(BaseRuleParams):
    maximum: Number = Field(..., description="Upper numeric bound")


class NumericRange(BaseRuleParams):
    minimum: Number = Field(..., description="Inclusive lower bound")
    maximum: Number = Field(..., description="Inclusive upper bound")

    @model_validator(mode="after")
    def _check_order(self) -> Self:
        if self.minimum > self.maximum:
            msg = f"minimum ({self.minimum!r}) must not exceed maximum ({self.maximum!r})"
            raise ValueError(msg)
        return self


class MinLength(BaseRuleParams):
    minimum: NonNegativeInt = Field(..., description="Smallest accepted length")


class MaxLength(BaseRuleParams):
    maximum: NonNegativeInt = Field(..., description="Largest accepted length")


class LengthRange(BaseRuleParams):
    minimum: NonNegativeInt = Field(..., description="Smallest accepted length")
    maximum: NonNegativeInt = Field(..., description="Largest accepted length")

    @model_validator(mode="after")
    def _check_order(self) -> Self:
        if self.minimum > self.maximum:
            msg = f"minimum length ({self.minimum}) must not exceed maximum length ({self.maximum})"
            raise ValueError(msg)
        return self


class RegexParams(BaseRuleParams):
    regex: re.Pattern[str] = Field(..., description="Regular expression searched in the input")
    flags: int = Field(0, description="re flags, only with a textual regex")

    @model_validator(mode="before")
    @classmethod
    def _compile(cls, data: Any) -> Any:  # noqa: ANN401
        """
        Compile a textual regex with its flags so a malformed pattern fails at construction.
        """
        if not isinstance(data, dict):
            return data

        regex = data.get("regex")
        flags = data.get("flags", 0)
        if isinstance(regex, re.Pattern):
            if flags:
                msg = "flags cannot be combined with a compiled regex"
                raise ValueError(msg)
            return data
        if not isinstance(regex, str):
            return data

        try:
            compiled = re.compile(regex, flags)
        except (re.error, TypeError, ValueError) as e:
            msg = f"invalid regular expression {regex!r}: {e}"
            raise ValueError(msg) from e
        return {**data, "regex": compiled, "flags": int(flags)}


class ElementRule(BaseRuleParams):
    rule: PredicateParam = Field(..., description="Predicate applied to each element")


class PositionRule(BaseRuleParams):
    position: int | str = Field(..., description="Index or key that must exist")
    rule: PredicateParam = Field(..., description="Predicate applied to the value at position")
