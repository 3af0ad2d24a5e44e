"""Time-domain feature helpers."""

from __future__ import annotations

import math
from typing import Iterable, Union

import numpy as np
from numpy.typing import ArrayLike


Number = Union[float, np.floating]


def to_1d_array(signal: ArrayLike) -> np.ndarray:
    """Convert input to a 1-D float64 numpy array (empty input allowed)."""
    arr = np.asarray(signal, dtype=float)
    if arr.ndim != 1:
        arr = arr.reshape(-1)
    return arr


def rms(signal: ArrayLike) -> Number:
    """
    Compute root-mean-square (RMS) value of a 1-D signal.

    Parameters
    ----------
    signal:
        1-D array-like of samples.

    Returns
    -------
    float
        RMS value of the signal, ``0.0`` for an empty signal.
    """
    arr = to_1d_array(signal)
    if arr.size == 0:
        return 0.0
    return float(np.sqrt(np.mean(np.square(arr))))


def zero_crossing_phase(signal: ArrayLike) -> float:
    """
    Phase proxy in radians: the zero-crossing rate scaled to ``0..pi``.

    A crossing is counted whenever consecutive samples fall on different
    sides of zero (zero itself counts as non-negative).
    """
    arr = to_1d_array(signal)
    if arr.size < 2:
        return 0.0
    non_negative = arr >= 0.0
    crossings = int(np.count_nonzero(non_negative[1:] != non_negative[:-1]))
    return crossings / arr.size * math.pi


def variance(values: Iterable[float]) -> float:
    """Population variance, ``0.0`` for an empty sequence."""
    arr = np.fromiter(values, dtype=float)
    if arr.size == 0:
        return 0.0
    return float(np.var(arr))
