"""Shared constants for pagination and reflow."""

from __future__ import annotations

import os

PX_PER_INCH = 96.0
PT_PER_PX = 0.75
WIDOW_HEADER_RATIO = 0.3
OVERFLOW_SLACK = 10.0
UNDERFLOW_SLACK = 10.0
CONSOLIDATE_SLACK = 20.0
DEBUG_PAGINATION = os.getenv("DEBUG_PAGINATION", "0") not in {
    "",
    "0",
    "false",
    "False",
}


def _debug(*, msg: str) -> None:
    """Print pagination debug output when enabled.

    Args:
        msg: Message to print.
    Returns:
        None.
    """

    if DEBUG_PAGINATION:
        print(msg)
