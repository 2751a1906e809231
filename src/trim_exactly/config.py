"""Configuration loading and validation.

Loads ``trim-exactly.toml`` and validates all fields up front, before
any input is read.  The library functions take no configuration; the
settings only supply defaults for the command-line front end.

The validated config is exposed as a :class:`Settings` dataclass with
typed fields for each section: ``trim`` and ``logging``.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from trim_exactly.errors import ActionableError
from trim_exactly.logging import LOG_LEVELS

# ---------------------------------------------------------------------------
# Config dataclasses
# ---------------------------------------------------------------------------

PATTERN_KINDS = ("literal", "chars", "regex")


@dataclass
class TrimConfig:
    """Trim defaults from ``[trim]``."""

    count: int = 1
    kind: str = "literal"


@dataclass
class LoggingConfig:
    """Logging settings from ``[logging]``."""

    level: str = "INFO"
    log_dir: str | None = None


@dataclass
class Settings:
    """Top-level validated configuration."""

    trim: TrimConfig = field(default_factory=TrimConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# ---------------------------------------------------------------------------
# Default settings path
# ---------------------------------------------------------------------------

DEFAULT_SETTINGS_PATH = Path("trim-exactly.toml")


# ---------------------------------------------------------------------------
# Loading and validation
# ---------------------------------------------------------------------------


def load_settings(path: str | Path = DEFAULT_SETTINGS_PATH) -> Settings:
    """Load and validate settings from a TOML file.

    Raises :class:`~trim_exactly.errors.ActionableError`:
      - CONFIG if the file is missing
      - VALIDATION if field values are out of range
      - PARSE if the TOML is malformed

    Returns a fully validated :class:`Settings` instance.
    """
    filepath = Path(path)
    if not filepath.exists():
        raise ActionableError.config(
            field_name="settings_path",
            reason=f"Settings file not found: {filepath}",
            suggestion=f"Create {filepath} or omit --config to use built-in defaults",
        )

    raw_text = filepath.read_text(encoding="utf-8")
    try:
        data = tomllib.loads(raw_text)
    except tomllib.TOMLDecodeError as exc:
        raise ActionableError.parse(
            source=str(filepath),
            raw_error=str(exc),
            suggestion=f"Fix TOML syntax in {filepath}",
        ) from None

    return _validate(data)


def load_default_settings() -> Settings:
    """Load ``trim-exactly.toml`` from the working directory if present."""
    if DEFAULT_SETTINGS_PATH.exists():
        return load_settings(DEFAULT_SETTINGS_PATH)
    return Settings()


def _validate(data: dict[str, object]) -> Settings:
    """Validate raw TOML data and return a Settings instance."""

    # -- trim section --------------------------------------------------------
    trim_data = _optional_section(data, "trim")

    count = trim_data.get("count", 1)
    if isinstance(count, bool) or not isinstance(count, int):
        raise ActionableError.validation(
            field_name="trim.count",
            reason=f"must be an integer, got {count!r}",
            suggestion="Set [trim].count to a whole number such as 1",
        )
    if count < 0:
        raise ActionableError.validation(
            field_name="trim.count",
            reason=f"is {count} — must be >= 0",
            suggestion="Set [trim].count to 0 or a positive number",
        )

    kind = str(trim_data.get("kind", "literal"))
    if kind not in PATTERN_KINDS:
        raise ActionableError.validation(
            field_name="trim.kind",
            reason=f"'{kind}' is not one of {', '.join(PATTERN_KINDS)}",
            suggestion="Set [trim].kind to literal, chars, or regex",
        )

    # -- logging section -----------------------------------------------------
    logging_data = _optional_section(data, "logging")

    level = str(logging_data.get("level", "INFO")).upper()
    if level not in LOG_LEVELS:
        raise ActionableError.validation(
            field_name="logging.level",
            reason=f"'{level}' is not one of {', '.join(LOG_LEVELS)}",
            suggestion="Set [logging].level to DEBUG, INFO, WARNING, or ERROR",
        )

    return Settings(
        trim=TrimConfig(count=count, kind=kind),
        logging=LoggingConfig(
            level=level,
            log_dir=str(logging_data.get("log_dir", "")) or None,
        ),
    )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _optional_section(data: dict[str, object], name: str) -> dict[str, object]:
    """Return a top-level section, empty when absent, or raise CONFIG error."""
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ActionableError.config(
            field_name=name,
            reason=f"[{name}] must be a table, not {type(section).__name__}",
            suggestion=f"Define [{name}] as a TOML table",
        )
    return section
