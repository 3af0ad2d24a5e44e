"""Developer tooling (instrumentation hooks)."""

from .debug import time_block

__all__ = ["time_block"]
