"""Exact-count trimming of prefixes and suffixes of ``str`` and ``bytes``."""

from trim_exactly.errors import ActionableError, ErrorType
from trim_exactly.patterns import (
    CharSetPattern,
    LiteralPattern,
    Pattern,
    PredicatePattern,
    RegexPattern,
    ReversiblePattern,
)
from trim_exactly.trim import Err, Ok, TrimResult, trim_from_end, trim_from_start

__all__ = [
    "ActionableError",
    "CharSetPattern",
    "Err",
    "ErrorType",
    "LiteralPattern",
    "Ok",
    "Pattern",
    "PredicatePattern",
    "RegexPattern",
    "ReversiblePattern",
    "TrimResult",
    "trim_from_end",
    "trim_from_start",
]
