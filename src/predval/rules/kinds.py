from __future__ import annotations

from typing import Any

from predval.factory import rule_def
from predval.types import ARRAY_KINDS, Kind, kind_of


@rule_def()
def integer(value: Any) -> bool:  # noqa: ANN401
    """Test that the value is an int (bool excluded)."""
    return kind_of(value) is Kind.INTEGER


@rule_def()
def float_(value: Any) -> bool:  # noqa: ANN401
    """Test that the value is a float."""
    return kind_of(value) is Kind.FLOAT


@rule_def()
def string(value: Any) -> bool:  # noqa: ANN401
    """Test that the value is a str."""
    return kind_of(value) is Kind.TEXT


@rule_def()
def boolean(value: Any) -> bool:  # noqa: ANN401
    """Test that the value is a bool."""
    return kind_of(value) is Kind.BOOLEAN


@rule_def()
def null(value: Any) -> bool:  # noqa: ANN401
    """Test that the value is None."""
    return value is None


@rule_def()
def array(value: Any) -> bool:  # noqa: ANN401
    """Test that the value is a sequence or a mapping (text excluded)."""
    return kind_of(value) in ARRAY_KINDS
