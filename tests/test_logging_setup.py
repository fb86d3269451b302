# tests/test_logging_setup.py

from __future__ import annotations

import logging

import pytest

from tasklist_sync.logging_setup import _ConsoleNoiseFilter


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


@pytest.mark.parametrize(
    ("name", "level", "shown"),
    [
        ("tasklist_sync.core.synchronizer", logging.INFO, True),
        ("httpx", logging.INFO, False),
        ("asyncio", logging.WARNING, False),
        ("py.warnings", logging.WARNING, False),
        ("py.warnings", logging.ERROR, True),
        ("httpcore", logging.CRITICAL, True),
    ],
)
def test_console_filter_hides_third_party_noise(name: str, level: int, shown: bool) -> None:
    assert _ConsoleNoiseFilter().filter(_record(name, level)) is shown
