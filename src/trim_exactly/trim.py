"""Controlled trimming of prefixes and suffixes.

Both operations trim only if the pattern matches the exact number of
times requested, contiguously from one end; otherwise they return the
unmodified text.  This can be used for primitive parsing and text
analysis.

Text directionality
-------------------

A string is a sequence of bytes. 'Right' in this context means the last
position of that byte string; for a language like Arabic or Hebrew
which are 'right to left' rather than 'left to right', this will be
the _left_ side, not the right.  Put differently: "left"/"start" and
"right"/"end" refer to byte-sequence position, not visual or linguistic
reading direction — for right-to-left scripts, the byte-sequence "right"
end is the visual left side.

>>> trim_from_start("not trimmed", "not ", 1)
Ok(value='trimmed')
>>> trim_from_end("trim me!", " you!", 1)
Err(value='trim me!')
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

from trim_exactly.errors import ActionableError
from trim_exactly.logging import logger
from trim_exactly.patterns import (
    DONE,
    Match,
    PatternLike,
    ReversiblePatternLike,
    as_pattern,
    as_reversible_pattern,
)

TextT = TypeVar("TextT", str, bytes)

START = "start"
END = "end"


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Ok(Generic[TextT]):
    """Successful trim carrying the trimmed slice."""

    value: TextT

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> TextT:
        return self.value

    def unwrap_or(self, default: TextT) -> TextT:
        return self.value


@dataclass(frozen=True, slots=True)
class Err(Generic[TextT]):
    """Failed trim carrying the original, untouched text.

    The pattern, count, and direction of the failed call ride along for
    :meth:`unwrap` diagnostics but take no part in equality.  They are
    unset on an ``Err`` built by hand.
    """

    value: TextT
    pattern: str | None = field(default=None, compare=False, repr=False)
    count: int | None = field(default=None, compare=False, repr=False)
    direction: str | None = field(default=None, compare=False, repr=False)

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> TextT:
        """Raise INSUFFICIENT_MATCHES — there is no trimmed value."""
        raise ActionableError.insufficient_matches(
            self.value, self.pattern, self.count, self.direction
        )

    def unwrap_or(self, default: TextT) -> TextT:
        return default


TrimResult = Ok[TextT] | Err[TextT]


# ---------------------------------------------------------------------------
# Trimming
# ---------------------------------------------------------------------------


def trim_from_start(text: TextT, pattern: PatternLike, count: int) -> TrimResult[TextT]:
    """Trim *pattern* from the start of *text* exactly *count* times.

    Returns ``Ok`` with the rest of the text when *count* matches follow
    one another from offset 0, otherwise ``Err`` with *text* itself.
    A count of zero always succeeds.

    >>> trim_from_start("tttrimmed", "t", 2)
    Ok(value='trimmed')
    >>> trim_from_start("aab", "a", 3)
    Err(value='aab')
    """
    _validate_count(count)
    steps = iter(as_pattern(pattern).search_forward(text))

    boundary = 0
    zero_width_at: int | None = None
    for matched in range(count):
        step = next(steps, DONE)
        if not isinstance(step, Match):
            return _fail(text, pattern, count, START, matched, f"next step is {step!r}")
        if step.start != boundary:
            return _fail(text, pattern, count, START, matched, f"{step!r} skips past {boundary}")
        if step.start == step.end:
            if zero_width_at == boundary:
                return _fail(text, pattern, count, START, matched, f"{step!r} does not advance")
            zero_width_at = boundary
        boundary = step.end

    assert 0 <= boundary <= len(text), f"boundary {boundary} outside text"
    return Ok(text[boundary:])


def trim_from_end(
    text: TextT, pattern: ReversiblePatternLike, count: int
) -> TrimResult[TextT]:
    """Trim *pattern* from the end of *text* exactly *count* times.

    Mirror image of :func:`trim_from_start`; the pattern must be able to
    search backward, so a compiled regex raises a PATTERN error here.

    >>> trim_from_end("trimmm", "m", 2)
    Ok(value='trim')
    """
    _validate_count(count)
    steps = iter(as_reversible_pattern(pattern).search_backward(text))

    boundary = len(text)
    zero_width_at: int | None = None
    for matched in range(count):
        step = next(steps, DONE)
        if not isinstance(step, Match):
            return _fail(text, pattern, count, END, matched, f"next step is {step!r}")
        if step.end != boundary:
            return _fail(text, pattern, count, END, matched, f"{step!r} skips past {boundary}")
        if step.start == step.end:
            if zero_width_at == boundary:
                return _fail(text, pattern, count, END, matched, f"{step!r} does not advance")
            zero_width_at = boundary
        boundary = step.start

    assert 0 <= boundary <= len(text), f"boundary {boundary} outside text"
    return Ok(text[:boundary])


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _validate_count(count: int) -> None:
    # bool is an int subclass, but True as a repetition count is a caller bug
    if isinstance(count, bool) or not isinstance(count, int):
        raise ActionableError.validation(
            field_name="count",
            reason=f"must be an int, got {type(count).__name__}",
        )
    if count < 0:
        raise ActionableError.validation(
            field_name="count",
            reason=f"is {count} — must be >= 0",
            suggestion="Pass 0 to leave the text as is, or a positive repetition count",
        )


def _fail(
    text: TextT,
    pattern: object,
    count: int,
    direction: str,
    matched: int,
    reason: str,
) -> Err[TextT]:
    logger.debug(
        "Trim from %s failed after %d of %d match(es) of %r: %s",
        direction,
        matched,
        count,
        pattern,
        reason,
    )
    return Err(text, pattern=repr(pattern), count=count, direction=direction)


__all__ = ["Err", "Ok", "TrimResult", "trim_from_end", "trim_from_start"]
