"""Synthetic signal and feature-record sources.

Used for demos, tests, and non-audio inputs (radio/wifi-like readings,
touch gestures) that skip spectral analysis and feed records straight
into :meth:`resonant.core.engine.ResonanceEngine.ingest`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Literal, Sequence, Tuple

import numpy as np

from ..core.models import FeatureRecord

SignalType = Literal["audio", "radio", "wifi", "synthetic"]

# (frequency low, frequency span, amplitude low, amplitude span)
SIGNAL_BANDS: Dict[str, Tuple[float, float, float, float]] = {
    "audio": (20.0, 19980.0, 0.1, 0.1),
    "radio": (88.5, 20.0, 0.2, 0.3),
    "wifi": (2400.0, 100.0, 0.1, 0.2),
    "synthetic": (100.0, 1900.0, 0.5, 0.5),
}


@dataclass(frozen=True, slots=True)
class SignalData:
    kind: SignalType
    frequency: float
    amplitude: float
    timestamp: float


def generate_signal(kind: SignalType, rng: np.random.Generator, *, timestamp: float = 0.0) -> SignalData:
    """Draw one reading from the band associated with ``kind``."""
    band = SIGNAL_BANDS.get(kind, SIGNAL_BANDS["audio"])
    f_low, f_span, a_low, a_span = band
    return SignalData(
        kind=kind if kind in SIGNAL_BANDS else "audio",
        frequency=f_low + float(rng.random()) * f_span,
        amplitude=a_low + float(rng.random()) * a_span,
        timestamp=float(timestamp),
    )


def record_from_signal(signal: SignalData, rng: np.random.Generator) -> FeatureRecord:
    """Wrap a reading as a record with 2x/3x harmonics and random phase/coherence."""
    phase = float(rng.random()) * 2.0 * math.pi
    return FeatureRecord(
        frequency=signal.frequency,
        amplitude=signal.amplitude,
        harmonics=(signal.frequency * 2.0, signal.frequency * 3.0),
        phase=phase % math.pi,
        coherence=float(rng.random()),
        timestamp=signal.timestamp,
    )


def record_from_gesture(
    y_fraction: float,
    velocity: float,
    timestamp: float,
    *,
    rng: np.random.Generator | None = None,
) -> FeatureRecord:
    """
    Map a touch-move gesture to a record.

    ``y_fraction`` is the vertical touch position over the surface height
    (0 at the top) and ``velocity`` is in pixels per millisecond.
    """
    y = min(1.0, max(0.0, float(y_fraction)))
    frequency = 200.0 + y * 800.0
    intensity = min(max(0.0, float(velocity)) * 100.0, 1.0)
    phase = float(rng.random()) * math.pi if rng is not None else 0.0
    return FeatureRecord(
        frequency=frequency,
        amplitude=intensity,
        harmonics=(frequency * 2.0, frequency * 3.0),
        phase=phase,
        coherence=intensity,
        timestamp=float(timestamp),
    )


def sine_window(
    frequency_hz: float,
    *,
    sample_rate_hz: float = 44100.0,
    size: int = 1024,
    amplitude: float = 1.0,
    overtones: Sequence[Tuple[int, float]] = (),
    noise: float = 0.0,
    rng: np.random.Generator | None = None,
) -> np.ndarray:
    """
    Build a time-domain window of a sine wave.

    ``overtones`` is a sequence of ``(order, relative_amplitude)`` pairs
    added on top of the fundamental; ``noise`` is the standard deviation of
    additive Gaussian noise.
    """
    t = np.arange(int(size)) / float(sample_rate_hz)
    window = amplitude * np.sin(2.0 * np.pi * frequency_hz * t)
    for order, relative in overtones:
        window += amplitude * relative * np.sin(2.0 * np.pi * frequency_hz * order * t)
    if noise > 0.0:
        generator = rng if rng is not None else np.random.default_rng()
        window += generator.normal(0.0, noise, size=window.shape)
    return window
