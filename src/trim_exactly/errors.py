"""Actionable error hierarchy for trim-exactly.

Errors are classified by **recovery path**, not by origin.
Each error type carries structured guidance for three audiences:
  - The calling code (typed ``error_type`` for routing)
  - The human operator (``suggestion`` + ``troubleshooting`` steps)
  - An AI agent (``ai_guidance`` with concrete next actions)

A failed trim is *not* an exception: the trim operations return
``Err(original)``.  These errors cover caller misuse (bad counts,
unsupported patterns), configuration problems, and ``Err.unwrap()``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any


# ---------------------------------------------------------------------------
# Error classification
# ---------------------------------------------------------------------------


class ErrorType(StrEnum):
    """Recovery-path categories — what to *do*, not where it came from."""

    INSUFFICIENT_MATCHES = "insufficient_matches"
    PATTERN = "pattern"
    CONFIG = "config"
    PARSE = "parse"
    VALIDATION = "validation"


# ---------------------------------------------------------------------------
# Guidance dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AIGuidance:
    """Machine-readable guidance for an AI agent consuming this error."""

    action_required: str
    checks: list[str] | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"action_required": self.action_required}
        if self.checks is not None:
            result["checks"] = self.checks
        return result


@dataclass(frozen=True)
class Troubleshooting:
    """Sequential, human-readable recovery steps for the operator."""

    steps: list[str]

    def to_dict(self) -> dict[str, Any]:
        return {"steps": self.steps}


# ---------------------------------------------------------------------------
# Base actionable error
# ---------------------------------------------------------------------------


@dataclass
class ActionableError(Exception):
    """Structured error with embedded recovery guidance.

    Use the factory classmethods rather than constructing directly —
    they encode domain knowledge so callers don't have to.
    """

    error: str
    error_type: ErrorType
    service: str

    success: bool = field(default=False, init=False)
    suggestion: str | None = None
    ai_guidance: AIGuidance | None = None
    troubleshooting: Troubleshooting | None = None
    context: dict[str, Any] | None = None
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    # Make it work as a real exception
    def __post_init__(self) -> None:
        super().__init__(self.error)

    # -- serialisation -------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Compact JSON-ready dict — ``None`` values are excluded."""
        result: dict[str, Any] = {
            "success": self.success,
            "error": self.error,
            "error_type": self.error_type.value,
            "service": self.service,
            "timestamp": self.timestamp,
        }
        if self.suggestion is not None:
            result["suggestion"] = self.suggestion
        if self.ai_guidance is not None:
            result["ai_guidance"] = self.ai_guidance.to_dict()
        if self.troubleshooting is not None:
            result["troubleshooting"] = self.troubleshooting.to_dict()
        if self.context is not None:
            result["context"] = self.context
        return result

    # -- factory methods -----------------------------------------------------

    @classmethod
    def insufficient_matches(
        cls,
        text: str | bytes,
        pattern: str | None = None,
        count: int | None = None,
        direction: str | None = None,
        *,
        suggestion: str | None = None,
    ) -> ActionableError:
        """Pattern did not occur ``count`` times contiguously from one end.

        Unknown details (an ``Err`` built by hand) are left out of the message.
        """
        subject = "Pattern" if pattern is None else f"Pattern {pattern}"
        times = "the requested number of times" if count is None else f"{count} time(s)"
        where = (
            f"in {text!r}"
            if direction is None
            else f"contiguously from the {direction} of {text!r}"
        )
        context = {
            key: value
            for key, value in (("count", count), ("direction", direction))
            if value is not None
        }
        return cls(
            error=f"{subject} does not occur {times} {where}",
            error_type=ErrorType.INSUFFICIENT_MATCHES,
            service="trimmer",
            suggestion=suggestion or "Retry with a smaller count or inspect the untrimmed text",
            ai_guidance=AIGuidance(
                action_required="Decide whether the untrimmed text is acceptable",
                checks=[
                    f"Count how many times {pattern or 'the pattern'} repeats "
                    f"at the {direction or 'trimmed end'}",
                    "Verify the pattern is anchored at the trimmed end, not mid-text",
                ],
            ),
            troubleshooting=Troubleshooting(
                steps=[
                    "1. Use unwrap_or() to fall back to the untrimmed text",
                    "2. Or retry with a smaller count",
                ]
            ),
            context=context or None,
        )

    @classmethod
    def pattern(
        cls,
        pattern: str,
        reason: str,
        *,
        suggestion: str | None = None,
    ) -> ActionableError:
        """Pattern value is unsupported or lacks a required capability."""
        return cls(
            error=f"Unsupported pattern {pattern}: {reason}",
            error_type=ErrorType.PATTERN,
            service="patterns",
            suggestion=suggestion
            or "Pass a str/bytes literal, a set of characters, a predicate, or a Pattern",
            ai_guidance=AIGuidance(
                action_required="Replace the pattern with a supported pattern value",
                checks=[
                    "Does the pattern type match the text type (str vs bytes)?",
                    "Does trim_from_end receive a pattern that can search backward?",
                ],
            ),
        )

    @classmethod
    def config(
        cls,
        field_name: str,
        reason: str,
        *,
        suggestion: str | None = None,
    ) -> ActionableError:
        """Missing or invalid configuration in trim-exactly.toml."""
        return cls(
            error=f"Configuration error — {field_name}: {reason}",
            error_type=ErrorType.CONFIG,
            service="trim-exactly.toml",
            suggestion=suggestion or f"Fix '{field_name}' in trim-exactly.toml",
            ai_guidance=AIGuidance(
                action_required=f"Correct the '{field_name}' value in trim-exactly.toml",
                checks=[
                    "Verify the settings file exists at the given path",
                    f"Verify '{field_name}' is present and valid",
                ],
            ),
            troubleshooting=Troubleshooting(
                steps=[
                    "1. Open trim-exactly.toml",
                    f"2. Locate the '{field_name}' setting",
                    f"3. Fix the issue: {reason}",
                    "4. Save and re-run",
                ]
            ),
        )

    @classmethod
    def parse(
        cls,
        source: str,
        raw_error: str,
        *,
        suggestion: str | None = None,
    ) -> ActionableError:
        """Malformed input — TOML syntax or an uncompilable regex."""
        return cls(
            error=f"Parse failure in {source}: {raw_error}",
            error_type=ErrorType.PARSE,
            service=source,
            suggestion=suggestion or f"Fix the syntax of {source}",
            ai_guidance=AIGuidance(
                action_required=f"Correct the syntax of {source}",
                checks=[f"Re-read {source} around the reported position"],
            ),
        )

    @classmethod
    def validation(
        cls,
        field_name: str,
        reason: str,
        *,
        suggestion: str | None = None,
    ) -> ActionableError:
        """Input validation failure (counts, TOML values, CLI args)."""
        return cls(
            error=f"Validation error — {field_name}: {reason}",
            error_type=ErrorType.VALIDATION,
            service="validation",
            suggestion=suggestion or f"Fix '{field_name}': {reason}",
            ai_guidance=AIGuidance(
                action_required=f"Correct the value for '{field_name}'",
            ),
            troubleshooting=Troubleshooting(
                steps=[
                    f"1. Check the value of '{field_name}'",
                    f"2. Issue: {reason}",
                    "3. Correct and retry",
                ]
            ),
        )
