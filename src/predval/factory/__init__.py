from .errs import InvalidParameterError
from .factory import rule_def

__all__ = [
    "InvalidParameterError",
    "rule_def",
]
