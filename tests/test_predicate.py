from __future__ import annotations

import dataclasses
import functools
import inspect
import operator
import time
from typing import TypedDict, get_type_hints

import pytest
from pydantic import BaseModel, ConfigDict, Field

from predval import (
    InvalidParameterError,
    NotAPredicateError,
    Predicate,
    PredicateConstructionError,
    PredicateError,
    and_,
    as_predicate,
    greater_than,
    integer,
    is_predicate,
    not_,
    null,
    opt,
    or_,
    predicate,
    range_,
    rule_def,
)
from predval import factory as factory_package
from predval.predicate.predicate import Compiler


class UserCtx(TypedDict):
    age: int
    active: bool


def test_predicate_from_function():
    def is_adult(ctx: UserCtx) -> bool:
        """Adult check."""
        return ctx["age"] >= 18

    adult = predicate(is_adult)

    assert isinstance(adult, Predicate)
    assert adult.name == "is_adult"
    assert adult.desc == "Adult check."
    assert adult({"age": 18, "active": True}) is True
    assert adult({"age": 17, "active": True}) is False


def test_predicate_explicit_name_and_desc():
    p = predicate(lambda ctx: True, name="always", desc="Always passes")
    assert p.name == "always"
    assert p.desc == "Always passes"


def test_predicate_combinations():
    adult = predicate(lambda ctx: ctx["age"] >= 18)
    active = predicate(lambda ctx: ctx["active"])

    adult_and_active = adult & active
    active_or_adult = active | adult
    not_adult = ~adult

    assert adult_and_active({"age": 25, "active": True})
    assert not adult_and_active({"age": 25, "active": False})

    assert active_or_adult({"age": 17, "active": True})
    assert not active_or_adult({"age": 16, "active": False})

    assert not_adult({"age": 16, "active": True})
    assert not not_adult({"age": 21, "active": True})


def test_operators_reject_non_predicates():
    with pytest.raises(TypeError):
        integer() & 1  # noqa: B018
    with pytest.raises(TypeError):
        integer() | "x"  # noqa: B018


def test_result_is_always_bool():
    truthy = predicate(lambda value: value)

    assert truthy(5) is True
    assert truthy(0) is False
    assert (truthy & truthy)("x") is True
    assert (truthy | truthy)([]) is False


def test_predicates_are_frozen():
    p = integer()
    with pytest.raises(dataclasses.FrozenInstanceError):
        p.desc = "changed"  # ty:ignore[invalid-assignment]


def test_is_and_as_predicate():
    p = integer()

    assert is_predicate(p)
    assert not is_predicate(lambda value: True)
    assert as_predicate(p) is p

    lifted = as_predicate(lambda value: value == 1)
    assert is_predicate(lifted)
    assert lifted(1)

    with pytest.raises(NotAPredicateError) as exc_info:
        as_predicate(42)
    assert exc_info.value.obj == 42
    assert isinstance(exc_info.value, TypeError)
    assert isinstance(exc_info.value, PredicateConstructionError)
    assert isinstance(exc_info.value, PredicateError)


def test_long_chains_are_flattened():
    bounds = [greater_than(-i) for i in range(300)]
    chain = functools.reduce(operator.and_, bounds)

    assert chain(5) is True
    assert chain(-150) is False


def test_chaining_compiles_only_the_root():
    start = time.perf_counter()
    chain = functools.reduce(operator.and_, [greater_than(-i) for i in range(1000)])

    assert chain(5) is True
    assert chain(-500) is False
    assert time.perf_counter() - start < 2.0


def test_intermediate_nodes_stay_uncompiled():
    inner = integer() & greater_than(0)
    outer = inner & range_(0, 10)

    assert outer(5) is True
    assert inner._runner is None
    assert outer._runner is not None


def test_deep_negation():
    p = integer()
    for _ in range(2001):
        p = ~p

    assert p(1) is False
    assert p("1") is True


def test_nested_opt_collapses():
    p = integer()
    for _ in range(2000):
        p = opt(p)

    assert p(None) is True
    assert p(1) is True
    assert p("1") is False


def test_deep_alternating_tree():
    p = integer()
    for i in range(3000):
        p = and_(p, integer()) if i % 2 else or_(p, null())

    compiler = Compiler()
    compiled = compiler.compile(p)

    assert compiled(5) is True
    assert compiled("x") is False
    assert compiled(None) is False
    assert compiler._subtree_counter > 0
    assert p(5) is True


def test_deep_negated_opt_chain():
    p = integer()
    for _ in range(2000):
        p = opt(not_(p))

    assert p(1) is True
    assert p("x") is False
    assert p(None) is True


def test_shared_leaf_is_bound_once():
    leaf = integer()
    tree = (leaf & leaf) | ~leaf

    compiler = Compiler()
    compiled = compiler.compile(tree)

    assert compiled(1) is True
    assert compiled("x") is True
    assert len([name for name in compiler._context if name.startswith("_leaf_")]) == 1


class TestRuleDef:
    """Test the rule_def factory decorator."""

    def test_rule_def_builds_factories(self):
        @rule_def()
        def is_user_over_age(user_ctx: UserCtx, threshold: int) -> bool:
            return user_ctx["age"] >= threshold

        over_18 = is_user_over_age(18)

        assert isinstance(over_18, Predicate)
        assert over_18.name == "is_user_over_age"
        assert over_18.desc == "is_user_over_age(18)"
        assert over_18({"age": 18, "active": True})
        assert not over_18({"age": 17, "active": True})

    def test_rule_def_signature(self):
        @rule_def()
        def has_minimum_age(ctx: UserCtx, threshold: int, *, strict: bool = False) -> bool:
            return ctx["age"] >= threshold if strict else ctx["age"] > threshold - 1

        sig = inspect.signature(has_minimum_age)
        assert list(sig.parameters) == ["threshold", "strict"]
        assert sig.parameters["threshold"].annotation == "int"
        assert sig.parameters["strict"].annotation == "bool"
        assert sig.parameters["strict"].default is False
        assert sig.return_annotation is Predicate

        type_hints = get_type_hints(has_minimum_age)
        assert type_hints["threshold"] is int
        assert type_hints["strict"] is bool
        assert type_hints["return"] is Predicate

        p = has_minimum_age(18, strict=True)
        assert p.desc == "has_minimum_age(18, strict=True)"
        assert p({"age": 20, "active": True})
        assert not p({"age": 16, "active": True})

    def test_rule_def_rejects_bad_arity(self):
        @rule_def()
        def is_named(ctx: dict, name: str) -> bool:
            return ctx["name"] == name

        with pytest.raises(TypeError):
            is_named()

    def test_rule_def_validates_params(self):
        class Factor(BaseModel):
            model_config = ConfigDict(frozen=True, extra="forbid", strict=True)

            factor: int = Field(..., gt=0)

        @rule_def(params=Factor)
        def multiple_of(value: int, factor: int) -> bool:
            return value % factor == 0

        assert multiple_of(3)(9)
        assert not multiple_of(3)(10)

        with pytest.raises(InvalidParameterError) as exc_info:
            multiple_of(0)

        err = exc_info.value
        assert err.factory == "multiple_of"
        assert err.errors[0]["loc"] == ("factor",)
        assert "multiple_of()" in str(err)
        assert isinstance(err, ValueError)
        assert isinstance(err, PredicateConstructionError)

    def test_builtin_factories_describe_themselves(self):
        p = range_(1, 2)
        assert p.name == "range_"
        assert p.desc == "range_(1, 2)"


def test_factory_package_exports():
    assert sorted(factory_package.__all__) == ["InvalidParameterError", "rule_def"]
    assert not hasattr(factory_package, "PredicateProducer")
