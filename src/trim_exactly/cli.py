"""CLI command handlers for trim-exactly.

Each public ``handle_*`` function corresponds to a CLI subcommand and
encapsulates the wiring and output for that command.

Exit codes: 0 when every input was trimmed, 1 when at least one input
was left untrimmed (and printed unchanged), 2 on usage, configuration,
or pattern errors.
"""

from __future__ import annotations

import argparse
import re
import sys

from trim_exactly.config import PATTERN_KINDS, Settings, load_default_settings, load_settings
from trim_exactly.errors import ActionableError
from trim_exactly.logging import apply_logging_config, logger
from trim_exactly.patterns import PatternLike
from trim_exactly.trim import trim_from_end, trim_from_start

EXIT_SUCCESS = 0
EXIT_UNTRIMMED = 1
EXIT_USAGE = 2

# Reads the text argument from stdin, one input per line
STDIN_MARKER = "-"


def build_pattern(raw: str, kind: str) -> PatternLike:
    """Turn the PATTERN argument into a pattern value for *kind*."""
    if kind == "literal":
        return raw
    if kind == "chars":
        return frozenset(raw)
    if kind == "regex":
        try:
            return re.compile(raw)
        except re.error as exc:
            raise ActionableError.parse(
                source="regex",
                raw_error=f"{raw!r}: {exc}",
                suggestion="Escape special characters or use --kind literal",
            ) from None
    raise ActionableError.validation(
        field_name="kind",
        reason=f"'{kind}' is not one of {', '.join(PATTERN_KINDS)}",
    )


def _read_inputs(text: str) -> list[str]:
    if text == STDIN_MARKER:
        # Only "\n" ends a line, unlike str.splitlines()
        lines = sys.stdin.read().split("\n")
        if lines[-1] == "":
            lines.pop()
        return lines
    return [text]


def _run_trim(args: argparse.Namespace, settings: Settings, *, from_end: bool) -> None:
    count = settings.trim.count if args.count is None else args.count
    kind = args.kind or settings.trim.kind
    pattern = build_pattern(args.pattern, kind)
    trim = trim_from_end if from_end else trim_from_start

    inputs = _read_inputs(args.text)
    untrimmed = 0
    for text in inputs:
        result = trim(text, pattern, count)  # type: ignore[arg-type]
        if result.is_err():
            untrimmed += 1
        print(result.value)

    if untrimmed:
        logger.info("%d of %d input(s) left untrimmed", untrimmed, len(inputs))
        sys.exit(EXIT_UNTRIMMED)


def handle_start(args: argparse.Namespace, settings: Settings) -> None:
    """Trim PATTERN from the start of TEXT exactly --count times."""
    _run_trim(args, settings, from_end=False)


def handle_end(args: argparse.Namespace, settings: Settings) -> None:
    """Trim PATTERN from the end of TEXT exactly --count times."""
    _run_trim(args, settings, from_end=True)


def _non_negative_int(value: str) -> int:
    count = int(value)
    if count < 0:
        raise argparse.ArgumentTypeError(f"count must be >= 0, got {count}")
    return count


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="trim-exactly",
        description="Trim a pattern from either end of a text an exact number of times",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        metavar="PATH",
        help="Settings TOML (default: ./trim-exactly.toml when present)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("start", "Trim the pattern from the start of the text"),
        ("end", "Trim the pattern from the end of the text"),
    ):
        trim_p = sub.add_parser(name, help=help_text)
        trim_p.add_argument("text", type=str, help="Text to trim, or '-' to trim each stdin line")
        trim_p.add_argument("pattern", type=str, help="Pattern to trim")
        trim_p.add_argument(
            "--count",
            type=_non_negative_int,
            default=None,
            metavar="N",
            help="Exact number of matches to trim (default: [trim].count, else 1)",
        )
        trim_p.add_argument(
            "--kind",
            choices=list(PATTERN_KINDS),
            default=None,
            help="How to read PATTERN (default: [trim].kind, else literal)",
        )

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.config) if args.config else load_default_settings()
        apply_logging_config(settings.logging)
        if args.command == "start":
            handle_start(args, settings)
        else:
            handle_end(args, settings)
    except ActionableError as exc:
        logger.debug("Command failed: %s", exc.to_dict())
        print(f"Error: {exc.error}", file=sys.stderr)
        if exc.suggestion:
            print(f"  {exc.suggestion}", file=sys.stderr)
        sys.exit(EXIT_USAGE)
