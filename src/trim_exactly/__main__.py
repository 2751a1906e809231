"""CLI entry point for trim-exactly."""

from __future__ import annotations

from trim_exactly.cli import main

if __name__ == "__main__":
    main()
