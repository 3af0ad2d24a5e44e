"""Opt-in timing of engine stages, switched on by ``RESONANT_DEBUG``."""

from __future__ import annotations

import logging
import os
import time
from contextlib import contextmanager
from typing import Iterator

_TRUTHY = {"1", "true", "yes", "on"}

logger = logging.getLogger(__name__)


def _env_enabled() -> bool:
    return os.getenv("RESONANT_DEBUG", "").strip().lower() in _TRUTHY


@contextmanager
def time_block(
    label: str,
    *,
    log: logging.Logger | None = None,
    enabled: bool | None = None,
) -> Iterator[None]:
    """
    Log how long the wrapped block took, in milliseconds, at debug level.

    ``enabled`` overrides the environment switch, which is read on every
    call. When timing is off the block runs with no clock reads at all.
    """
    if not (_env_enabled() if enabled is None else enabled):
        yield
        return

    started = time.perf_counter()
    try:
        yield
    finally:
        (log or logger).debug("%s took %.3f ms", label, (time.perf_counter() - started) * 1e3)
