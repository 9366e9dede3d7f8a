"""
Shared fixtures for predicate tests.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from predval import Predicate, predicate


class Exploded(Exception):  # noqa: N818
    """Raised by predicates that must never be evaluated."""


class Recorder:
    """Callable recording every value it is applied to, then answering a fixed result."""

    def __init__(self, result: bool, log: list[Any] | None = None, tag: str | None = None):
        self.result = result
        self.calls: list[Any] = []
        self.log = log
        self.tag = tag

    def __call__(self, value: Any) -> bool:
        self.calls.append(value)
        if self.log is not None:
            self.log.append(self.tag)
        return self.result


@pytest.fixture
def explode() -> Predicate[Any]:
    """Provides a predicate raising Exploded when applied."""

    def _explode(value: Any) -> bool:
        raise Exploded(value)

    return predicate(_explode)


@pytest.fixture
def recorder() -> Callable[..., tuple[Predicate[Any], Recorder]]:
    """Provides a factory of (predicate, recorder) pairs."""

    def make(result: bool, log: list[Any] | None = None, tag: str | None = None) -> tuple[Predicate[Any], Recorder]:
        rec = Recorder(result, log=log, tag=tag)
        return predicate(rec), rec

    return make
