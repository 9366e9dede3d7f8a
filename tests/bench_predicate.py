"""Benchmarks for predicate operations."""

from __future__ import annotations

from typing import Any

import pytest

from predval import and_, at, every, float_, integer, length, negative, not_, or_, pattern, predicate, string


@pytest.fixture
def record() -> dict[str, Any]:
    """Create a sample record."""
    return {"id": 25, "tags": ["a", "b", "c"], "name": "admin"}


@pytest.mark.benchmark
def test_leaf_predicate() -> None:
    """Benchmark a single leaf evaluation."""
    p = integer()
    for _ in range(1000):
        p(25)


@pytest.mark.benchmark
def test_predicate_and() -> None:
    """Benchmark AND composition."""
    combined = and_(float_(), negative())
    for _ in range(1000):
        combined(-0.1)


@pytest.mark.benchmark
def test_predicate_or() -> None:
    """Benchmark OR composition."""
    combined = or_(float_(), integer())
    for _ in range(1000):
        combined(1)


@pytest.mark.benchmark
def test_predicate_not() -> None:
    """Benchmark NOT composition."""
    not_int = not_(integer())
    for _ in range(1000):
        not_int("1")


@pytest.mark.benchmark
def test_complex_predicate_composition(record: dict[str, Any]) -> None:
    """Benchmark complex predicate composition."""
    is_record = predicate(lambda value: isinstance(value, dict))
    has_id = at("id", integer())
    has_tags = at("tags", and_(every(string()), length(1, 5)))
    named = at("name", pattern(r"^[a-z]+$"))

    complex_predicate = is_record & ((has_id & has_tags) | named) & ~at("deleted", integer())

    for _ in range(1000):
        complex_predicate(record)
