"""CLI handler tests — parser construction, command wiring, exit codes.

Covers :class:`TestParserConstruction`, :class:`TestStartCommand`,
:class:`TestEndCommand`, :class:`TestStdinInput`, and
:class:`TestErrorReporting`.
"""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from trim_exactly.cli import (
    EXIT_UNTRIMMED,
    EXIT_USAGE,
    build_parser,
    build_pattern,
    handle_end,
    handle_start,
    main,
)
from trim_exactly.config import Settings, TrimConfig
from trim_exactly.errors import ActionableError, ErrorType

# ---------------------------------------------------------------------------
# TestParserConstruction
# ---------------------------------------------------------------------------


class TestParserConstruction:
    """REQUIREMENT: The CLI parser defines both subcommands with correct arguments.

    WHO: The operator invoking the tool from the command line
    WHAT: 'start' and 'end' take TEXT and PATTERN plus --count and --kind;
          --count must be a non-negative integer; a missing subcommand
          produces a usage error
    WHY: Silently accepting a negative count would trim nothing and exit 0
    """

    def test_parser_accepts_start_subcommand(self) -> None:
        """The 'start' subcommand is registered with its positionals."""
        args = build_parser().parse_args(["start", "xxabc", "x"])
        assert args.command == "start"
        assert args.text == "xxabc"
        assert args.pattern == "x"

    def test_count_and_kind_default_to_none(self) -> None:
        """Unset flags stay None so settings can supply the defaults."""
        args = build_parser().parse_args(["end", "abc", "c"])
        assert args.count is None
        assert args.kind is None

    def test_parser_accepts_count_and_kind(self) -> None:
        """--count and --kind are parsed and typed."""
        args = build_parser().parse_args(["start", "abc", "ab", "--count", "3", "--kind", "chars"])
        assert args.count == 3
        assert args.kind == "chars"

    def test_negative_count_is_rejected(self) -> None:
        """A negative --count is a usage error."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["start", "abc", "a", "--count", "-1"])

    def test_unknown_kind_is_rejected(self) -> None:
        """--kind only accepts literal, chars, or regex."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["start", "abc", "a", "--kind", "glob"])

    def test_missing_subcommand_raises_system_exit(self) -> None:
        """Omitting the subcommand entirely produces a usage error."""
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


# ---------------------------------------------------------------------------
# TestStartCommand / TestEndCommand
# ---------------------------------------------------------------------------


class TestStartCommand:
    """REQUIREMENT: 'start' prints the trimmed text, or the original with exit 1.

    WHO: Shell scripts stripping a known prefix
    WHAT: Success prints the remainder and returns normally; failure prints
          the untouched text and exits 1; settings supply the default count
    WHY: Scripts need the text either way and the exit code to branch on
    """

    def test_trimmed_text_is_printed(self, capsys: pytest.CaptureFixture[str]) -> None:
        """A successful trim prints the remainder."""
        args = build_parser().parse_args(["start", "not trimmed", "not "])
        handle_start(args, Settings())
        assert capsys.readouterr().out == "trimmed\n"

    def test_untrimmed_text_is_printed_and_exits_one(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """A failed trim prints the input unchanged and exits 1."""
        args = build_parser().parse_args(["start", "aab", "a", "--count", "3"])
        with pytest.raises(SystemExit) as exc_info:
            handle_start(args, Settings())
        assert exc_info.value.code == EXIT_UNTRIMMED
        assert capsys.readouterr().out == "aab\n"

    def test_count_defaults_to_settings(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Without --count, [trim].count from the settings is used."""
        args = build_parser().parse_args(["start", "tttrimmed", "t"])
        handle_start(args, Settings(trim=TrimConfig(count=2)))
        assert capsys.readouterr().out == "trimmed\n"

    def test_chars_kind_trims_any_listed_character(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """--kind chars treats PATTERN as a set of characters."""
        args = build_parser().parse_args(["start", "+-value", "+-", "--kind", "chars", "--count", "2"])
        handle_start(args, Settings())
        assert capsys.readouterr().out == "value\n"

    def test_regex_kind(self, capsys: pytest.CaptureFixture[str]) -> None:
        """--kind regex compiles PATTERN."""
        args = build_parser().parse_args(["start", "12 rest", r"\d+ ", "--kind", "regex"])
        handle_start(args, Settings())
        assert capsys.readouterr().out == "rest\n"


class TestEndCommand:
    """REQUIREMENT: 'end' mirrors 'start' at the end of the text.

    WHO: Shell scripts stripping a known suffix
    WHAT: Suffix trimming prints the remainder; regex patterns are refused
    WHY: Regexes cannot search backward, so accepting one would mislead
    """

    def test_trimmed_text_is_printed(self, capsys: pytest.CaptureFixture[str]) -> None:
        """A successful suffix trim prints the remainder."""
        args = build_parser().parse_args(["end", "trimmm", "m", "--count", "2"])
        handle_end(args, Settings())
        assert capsys.readouterr().out == "trim\n"

    def test_regex_kind_raises_pattern_error(self) -> None:
        """'end' with --kind regex raises a PATTERN error."""
        args = build_parser().parse_args(["end", "abc", "c", "--kind", "regex"])
        with pytest.raises(ActionableError) as exc_info:
            handle_end(args, Settings())
        assert exc_info.value.error_type == ErrorType.PATTERN


# ---------------------------------------------------------------------------
# TestStdinInput
# ---------------------------------------------------------------------------


class TestStdinInput:
    """REQUIREMENT: TEXT '-' trims every stdin line independently.

    WHO: Pipelines feeding many lines through one trim
    WHAT: Each line is trimmed or echoed unchanged; any untrimmed line
          makes the command exit 1
    WHY: One bad line must not stop or alter the others
    """

    def test_each_line_is_trimmed(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Every line with the prefix is trimmed."""
        monkeypatch.setattr("sys.stdin", io.StringIO("> a\n> b\n"))
        args = build_parser().parse_args(["start", "-", "> "])
        handle_start(args, Settings())
        assert capsys.readouterr().out == "a\nb\n"

    def test_untrimmed_line_is_echoed_and_exits_one(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """A line without the prefix is printed as is, and the exit code is 1."""
        monkeypatch.setattr("sys.stdin", io.StringIO("> a\nplain\n"))
        args = build_parser().parse_args(["start", "-", "> "])
        with pytest.raises(SystemExit) as exc_info:
            handle_start(args, Settings())
        assert exc_info.value.code == EXIT_UNTRIMMED
        assert capsys.readouterr().out == "a\nplain\n"

    def test_only_newline_separates_lines(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Vertical tabs and Unicode line separators stay inside their line."""
        monkeypatch.setattr("sys.stdin", io.StringIO("> a\x0bb\n> c\u2028d\n"))
        args = build_parser().parse_args(["start", "-", "> "])
        handle_start(args, Settings())
        assert capsys.readouterr().out == "a\x0bb\nc\u2028d\n"


# ---------------------------------------------------------------------------
# TestErrorReporting
# ---------------------------------------------------------------------------


class TestErrorReporting:
    """REQUIREMENT: main() turns actionable errors into a message and exit 2.

    WHO: The operator reading stderr after a failed command
    WHAT: Bad regexes, missing config files, and capability errors print
          'Error:' plus the suggestion to stderr and exit 2
    WHY: Exit 1 already means "left untrimmed"; misuse needs its own code
    """

    def test_invalid_regex_raises_parse_error(self) -> None:
        """build_pattern() reports an uncompilable regex as PARSE."""
        with pytest.raises(ActionableError) as exc_info:
            build_pattern("[unclosed", "regex")
        assert exc_info.value.error_type == ErrorType.PARSE

    def test_main_reports_missing_config_and_exits_two(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """An explicit --config that does not exist exits 2 with a message."""
        missing = tmp_path / "absent.toml"
        with pytest.raises(SystemExit) as exc_info:
            main(["--config", str(missing), "start", "abc", "a"])
        assert exc_info.value.code == EXIT_USAGE
        err = capsys.readouterr().err
        assert "Error:" in err
        assert "absent.toml" in err

    def test_main_reports_regex_with_end_and_exits_two(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """'end --kind regex' is refused with exit 2."""
        monkeypatch.chdir(tmp_path)
        with pytest.raises(SystemExit) as exc_info:
            main(["end", "abc", "c", "--kind", "regex"])
        assert exc_info.value.code == EXIT_USAGE
        assert "backward" in capsys.readouterr().err

    def test_main_uses_config_file_defaults(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """A config file's [trim] section drives count and kind."""
        config = tmp_path / "custom.toml"
        config.write_text('[trim]\ncount = 3\nkind = "chars"\n', encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        main(["--config", str(config), "start", "ab-value", "ab-"])
        assert capsys.readouterr().out == "value\n"
