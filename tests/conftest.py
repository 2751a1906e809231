"""Global test configuration — shared safety guards.

This conftest provides:

1. **Logger guard** — the ``trim-exactly`` logger is module-level state.
   CLI runs call ``set_level()`` and ``configure_file_logging()``, which
   would otherwise leak levels and open file handlers into later tests.
"""

from __future__ import annotations

import contextlib
from typing import TYPE_CHECKING

import pytest

from trim_exactly.logging import handler, logger

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture(autouse=True)
def _guard_logger_state() -> Iterator[None]:
    """Restore the logger's level and handlers after each test.

    Handlers added during the test are removed and closed, even on failure.
    """
    original_level = logger.level
    original_handler_level = handler.level
    original_handlers = list(logger.handlers)

    try:
        yield
    finally:
        for added in [h for h in logger.handlers if h not in original_handlers]:
            logger.removeHandler(added)
            with contextlib.suppress(OSError):
                added.close()
        logger.setLevel(original_level)
        handler.setLevel(original_handler_level)
