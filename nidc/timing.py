"""Measuring how long a compilation takes."""

from __future__ import annotations

import time


def time_now() -> float:
    """Return a monotonic timestamp in seconds."""
    return time.perf_counter()


def elapsed_since(start: float) -> float:
    """Return the seconds passed since a timestamp from time_now()."""
    return time.perf_counter() - start