"""Patterns, searchers, and the search-step data contract.

A pattern knows how to produce a *searcher* over a text: an iterator of
:class:`Match` and :class:`Reject` steps covering the text from one end.
Iterator exhaustion is the third step kind, :data:`DONE`.

Two capability tiers exist:

- :class:`Pattern` searches forward only (required by ``trim_from_start``).
- :class:`ReversiblePattern` also searches backward (required by
  ``trim_from_end``).

Concrete patterns operate on *units*: one code point of a ``str`` or one
byte of a ``bytes``, always presented as a length-one slice.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Iterator, Set
from dataclasses import dataclass
from typing import Any, TypeAlias

from trim_exactly.errors import ActionableError

Text: TypeAlias = str | bytes


# ---------------------------------------------------------------------------
# Search steps
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Match:
    """Pattern occurrence at ``text[start:end]``."""

    start: int
    end: int


@dataclass(frozen=True, slots=True)
class Reject:
    """Confirmed non-match span ``text[start:end]``."""

    start: int
    end: int


class _Done:
    __slots__ = ()

    def __repr__(self) -> str:
        return "DONE"


DONE = _Done()

SearchStep: TypeAlias = Match | Reject | _Done


# ---------------------------------------------------------------------------
# Capability tiers
# ---------------------------------------------------------------------------


class Pattern(ABC):
    """Forward-searchable pattern."""

    @abstractmethod
    def search_forward(self, text: Text) -> Iterator[Match | Reject]:
        """Return steps covering *text* from its start toward its end.

        Implementations must make progress: a zero-width :class:`Match`
        at position ``p`` is never followed by another zero-width match
        at ``p``.
        """
        ...


class ReversiblePattern(Pattern):
    """Pattern that can also search from the end of a text."""

    @abstractmethod
    def search_backward(self, text: Text) -> Iterator[Match | Reject]:
        """Return steps covering *text* from its end toward its start."""
        ...


# ---------------------------------------------------------------------------
# Concrete patterns
# ---------------------------------------------------------------------------


def _require_same_kind(pattern: Text, text: Text, label: str) -> None:
    if isinstance(pattern, str) != isinstance(text, str):
        raise ActionableError.pattern(
            label,
            f"{type(pattern).__name__} pattern cannot search {type(text).__name__} text",
            suggestion="Encode or decode the pattern to match the text type",
        )


def _empty_forward(length: int) -> Iterator[Match | Reject]:
    # A zero-width match sits before every unit and after the last one.
    for pos in range(length):
        yield Match(pos, pos)
        yield Reject(pos, pos + 1)
    yield Match(length, length)


def _empty_backward(length: int) -> Iterator[Match | Reject]:
    for pos in range(length, 0, -1):
        yield Match(pos, pos)
        yield Reject(pos - 1, pos)
    yield Match(0, 0)


@dataclass(frozen=True, slots=True)
class LiteralPattern(ReversiblePattern):
    """Literal substring (or single character) pattern.

    Occurrences never overlap: after a match the search resumes at the
    match's far edge.
    """

    needle: Text

    def search_forward(self, text: Text) -> Iterator[Match | Reject]:
        _require_same_kind(self.needle, text, repr(self))
        if not self.needle:
            return _empty_forward(len(text))
        return self._forward(text)

    def search_backward(self, text: Text) -> Iterator[Match | Reject]:
        _require_same_kind(self.needle, text, repr(self))
        if not self.needle:
            return _empty_backward(len(text))
        return self._backward(text)

    def _forward(self, text: Text) -> Iterator[Match | Reject]:
        needle, size, length = self.needle, len(self.needle), len(text)
        pos = 0
        while pos < length:
            if text.startswith(needle, pos):  # type: ignore[arg-type]
                yield Match(pos, pos + size)
                pos += size
                continue
            found = text.find(needle, pos)  # type: ignore[arg-type]
            if found == -1:
                yield Reject(pos, length)
                return
            yield Reject(pos, found)
            pos = found

    def _backward(self, text: Text) -> Iterator[Match | Reject]:
        needle, size = self.needle, len(self.needle)
        end = len(text)
        while end > 0:
            if text.endswith(needle, 0, end):  # type: ignore[arg-type]
                yield Match(end - size, end)
                end -= size
                continue
            found = text.rfind(needle, 0, end)  # type: ignore[arg-type]
            if found == -1:
                yield Reject(0, end)
                return
            yield Reject(found + size, end)
            end = found + size


class _UnitPattern(ReversiblePattern):
    """Pattern deciding one unit at a time."""

    @abstractmethod
    def accepts(self, unit: Text) -> bool: ...

    def search_forward(self, text: Text) -> Iterator[Match | Reject]:
        return (self._step(text, pos) for pos in range(len(text)))

    def search_backward(self, text: Text) -> Iterator[Match | Reject]:
        return (self._step(text, pos) for pos in range(len(text) - 1, -1, -1))

    def _step(self, text: Text, pos: int) -> Match | Reject:
        if self.accepts(text[pos : pos + 1]):
            return Match(pos, pos + 1)
        return Reject(pos, pos + 1)


class CharSetPattern(_UnitPattern):
    """Matches any unit contained in a set of candidates.

    Members must all be ``str`` or all be ``bytes``, and the text searched
    must be of the same type.
    """

    def __init__(self, units: Iterable[Text]) -> None:
        members = frozenset(units)
        for member in members:
            if not isinstance(member, (str, bytes)) or len(member) != 1:
                raise ActionableError.pattern(
                    repr(member),
                    "character sets may only contain single characters or single bytes",
                )
        if len({type(member) for member in members}) > 1:
            raise ActionableError.pattern(
                repr(sorted(members, key=repr)),
                "character sets cannot mix str and bytes members",
            )
        self.units: frozenset[Text] = members

    def __repr__(self) -> str:
        return f"CharSetPattern({sorted(self.units, key=repr)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CharSetPattern):
            return NotImplemented
        return self.units == other.units

    def __hash__(self) -> int:
        return hash(self.units)

    def search_forward(self, text: Text) -> Iterator[Match | Reject]:
        self._check_kind(text)
        return super().search_forward(text)

    def search_backward(self, text: Text) -> Iterator[Match | Reject]:
        self._check_kind(text)
        return super().search_backward(text)

    def accepts(self, unit: Text) -> bool:
        return unit in self.units

    def _check_kind(self, text: Text) -> None:
        # An empty set matches nothing in either kind of text.
        if self.units:
            _require_same_kind(next(iter(self.units)), text, repr(self))


@dataclass(frozen=True)
class PredicatePattern(_UnitPattern):
    """Matches any unit for which ``func(unit)`` is truthy."""

    func: Callable[[Any], object]

    def accepts(self, unit: Text) -> bool:
        return bool(self.func(unit))


@dataclass(frozen=True, slots=True)
class RegexPattern(Pattern):
    """Compiled regular expression, matched at the current position.

    Forward only: Python's ``re`` cannot scan from the end of a text, so
    this pattern is rejected by ``trim_from_end``.  Anchors such as ``^``
    only match at offset 0, so an anchored expression trims at most once.
    """

    regex: re.Pattern[Any]

    def search_forward(self, text: Text) -> Iterator[Match | Reject]:
        _require_same_kind(self.regex.pattern, text, repr(self))
        return self._forward(text)

    def _forward(self, text: Text) -> Iterator[Match | Reject]:
        pos, length = 0, len(text)
        while True:
            found = self.regex.match(text, pos)
            if found is not None:
                end = found.end()
                yield Match(pos, end)
                if end > pos:
                    pos = end
                    continue
            # No match, or a zero-width one: step over a single unit.
            if pos >= length:
                return
            yield Reject(pos, pos + 1)
            pos += 1


# ---------------------------------------------------------------------------
# Coercion
# ---------------------------------------------------------------------------

PatternLike: TypeAlias = (
    Pattern
    | str
    | bytes
    | re.Pattern[str]
    | re.Pattern[bytes]
    | Set[Text]
    | list[Text]
    | tuple[Text, ...]
    | Callable[[Any], object]
)
ReversiblePatternLike: TypeAlias = (
    ReversiblePattern
    | str
    | bytes
    | Set[Text]
    | list[Text]
    | tuple[Text, ...]
    | Callable[[Any], object]
)


def as_pattern(pattern: PatternLike) -> Pattern:
    """Build a :class:`Pattern` from any supported pattern-like value.

    >>> as_pattern("ab")
    LiteralPattern(needle='ab')
    """
    if isinstance(pattern, Pattern):
        return pattern
    if isinstance(pattern, (str, bytes)):
        return LiteralPattern(pattern)
    if isinstance(pattern, re.Pattern):
        return RegexPattern(pattern)
    if isinstance(pattern, (Set, list, tuple)):
        return CharSetPattern(pattern)
    if callable(pattern):
        return PredicatePattern(pattern)
    raise ActionableError.pattern(
        repr(pattern),
        f"cannot build a searcher from {type(pattern).__name__}",
    )


def as_reversible_pattern(pattern: ReversiblePatternLike) -> ReversiblePattern:
    """Like :func:`as_pattern`, but require backward search."""
    built = as_pattern(pattern)
    if not isinstance(built, ReversiblePattern):
        raise ActionableError.pattern(
            repr(pattern),
            f"{type(built).__name__} cannot search backward",
            suggestion="Use trim_from_start, or a literal/character-set/predicate pattern",
        )
    return built


__all__ = [
    "DONE",
    "CharSetPattern",
    "LiteralPattern",
    "Match",
    "Pattern",
    "PatternLike",
    "PredicatePattern",
    "RegexPattern",
    "Reject",
    "ReversiblePattern",
    "ReversiblePatternLike",
    "SearchStep",
    "Text",
    "as_pattern",
    "as_reversible_pattern",
]
