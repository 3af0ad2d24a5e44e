"""
Approximate magnitude spectrum and the features derived from it.

The estimator is a direct DFT summation, not a fast transform: for every
bin ``k`` in ``0..N/2`` the window is correlated with ``cos``/``sin`` of
``-2*pi*k*n/N`` and the magnitude is ``sqrt(real**2 + imag**2)``. Two knobs
trade precision for cost:

* ``decimation`` strides over the samples (the sum is rescaled by the
  stride so magnitudes stay comparable);
* ``bin_step`` evaluates every ``bin_step``-th bin and copies each value
  into the skipped neighbours.

Both default to 1. The output is deliberately not bit-compatible with an
FFT; the classifier thresholds were tuned against this estimator.
"""

from __future__ import annotations

import logging
import math
from collections import OrderedDict
from dataclasses import dataclass
from typing import Hashable, Tuple

import numpy as np
from numpy.typing import ArrayLike

from ..config.runtime import EngineConfig
from .features import rms, to_1d_array, zero_crossing_phase

logger = logging.getLogger(__name__)

BasisKey = Tuple[int, int, int]
Basis = Tuple[np.ndarray, np.ndarray, np.ndarray]

# Each basis is a dense (n/2) x n pair, so only a couple are kept
BASIS_CACHE_SIZE = 2


@dataclass(frozen=True, slots=True)
class SpectralFeatures:
    """Everything :meth:`SpectralAnalyzer.extract` derives from one window."""

    spectrum: np.ndarray
    frequency: float
    harmonics: Tuple[float, ...]
    amplitude: float
    phase: float
    signal_rms: float


class SpectralAnalyzer:
    """Magnitude estimator with a small oldest-first result cache."""

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = (config or EngineConfig()).sanitized()
        self._cache: "OrderedDict[Hashable, np.ndarray]" = OrderedDict()
        self._bases: "OrderedDict[BasisKey, Basis]" = OrderedDict()

    # ------------------------------------------------------------------ cache
    def _cache_key(self, samples: np.ndarray) -> Hashable:
        """
        Coarse fingerprint: every ``cache_stride``-th sample, truncated, plus
        the rounded window energy so tones that vanish on the stride grid
        still get their own entry.
        """
        coarse = np.trunc(samples[:: self.config.cache_stride] * 1e4).astype(np.int64)
        energy = round(float(np.dot(samples, samples)), 4)
        return samples.size, energy, hash(coarse.tobytes())

    def _cache_put(self, key: Hashable, spectrum: np.ndarray) -> None:
        if self.config.cache_size <= 0:
            return
        self._cache[key] = spectrum
        while len(self._cache) > self.config.cache_size:
            evicted, _ = self._cache.popitem(last=False)
            logger.debug("Spectrum cache evicted %r", evicted)

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    @property
    def basis_count(self) -> int:
        return len(self._bases)

    # --------------------------------------------------------------- spectrum
    def _basis(self, n_samples: int) -> Basis:
        """Return (bin indices, cos matrix, sin matrix) for ``n_samples``."""
        stride = self.config.decimation
        step = self.config.bin_step
        key = (n_samples, stride, step)
        basis = self._bases.get(key)
        if basis is None:
            bins = np.arange(0, n_samples // 2, step)
            n = np.arange(0, n_samples, stride)
            angle = -2.0 * np.pi * np.outer(bins, n) / float(n_samples)
            basis = (bins, np.cos(angle), np.sin(angle))
            self._bases[key] = basis
            while len(self._bases) > BASIS_CACHE_SIZE:
                self._bases.popitem(last=False)
        else:
            self._bases.move_to_end(key)
        return basis

    def analyze(self, window: ArrayLike) -> np.ndarray:
        """
        Return the magnitude spectrum of ``window`` (``len(window)//2`` bins).

        Windows longer than the configured size are cut to their most recent
        ``window_size`` samples. The returned array is read-only since it may
        be shared with the cache.
        """
        samples = to_1d_array(window)
        if samples.size > self.config.window_size:
            samples = samples[-self.config.window_size :]
        n_samples = samples.size
        if n_samples < 2:
            empty = np.zeros(max(0, n_samples // 2))
            empty.setflags(write=False)
            return empty

        key = self._cache_key(samples)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Spectrum cache hit for %d-sample window", n_samples)
            return cached

        bins, cos_basis, sin_basis = self._basis(n_samples)
        stride = self.config.decimation
        decimated = samples[::stride]
        real = cos_basis @ decimated
        imag = sin_basis @ decimated
        magnitudes = np.sqrt(real * real + imag * imag) * float(stride)

        num_bins = n_samples // 2
        spectrum = np.zeros(num_bins)
        step = self.config.bin_step
        for offset in range(step):
            targets = bins + offset
            valid = targets < num_bins
            spectrum[targets[valid]] = magnitudes[valid]

        spectrum.setflags(write=False)
        self._cache_put(key, spectrum)
        return spectrum

    # ---------------------------------------------------------------- features
    def bin_to_hz(self, index: float, num_bins: int) -> float:
        if num_bins <= 0:
            return 0.0
        return float(index) * self.config.sample_rate_hz / (num_bins * 2)

    def hz_to_bin(self, frequency: float, num_bins: int) -> int:
        return int(round(frequency * num_bins * 2 / self.config.sample_rate_hz))

    def dominant_frequency(self, spectrum: np.ndarray) -> float:
        """
        Frequency (Hz) of the strongest bin inside the audible sub-range.

        Returns ``fallback_frequency_hz`` when nothing in range carries any
        magnitude or the peak sits below ``frequency_floor_hz``.
        """
        cfg = self.config
        num_bins = spectrum.size
        fallback = cfg.fallback_frequency_hz
        if num_bins == 0:
            return fallback

        bin_hz = cfg.sample_rate_hz / (num_bins * 2)
        lo = max(1, int(math.ceil(cfg.low_cutoff_hz / bin_hz)))
        hi = min(num_bins - 1, int(math.floor(cfg.high_cutoff_hz / bin_hz)))
        if hi < lo:
            return fallback

        band = spectrum[lo : hi + 1]
        peak = int(np.argmax(band))
        if band[peak] <= 0.0:
            return fallback
        frequency = self.bin_to_hz(lo + peak, num_bins)
        if frequency < cfg.frequency_floor_hz:
            return fallback
        return frequency

    def harmonics(self, spectrum: np.ndarray, fundamental: float) -> Tuple[float, ...]:
        """
        Frequencies of the 2x..``max_harmonic``x multiples of ``fundamental``
        whose magnitude exceeds ``harmonic_threshold`` of the fundamental's.
        """
        num_bins = spectrum.size
        fundamental_bin = self.hz_to_bin(fundamental, num_bins)
        if fundamental_bin <= 0 or fundamental_bin >= num_bins:
            return ()
        threshold = spectrum[fundamental_bin] * self.config.harmonic_threshold
        found = []
        for order in range(2, self.config.max_harmonic + 1):
            harmonic_bin = fundamental_bin * order
            if harmonic_bin >= num_bins:
                break
            if spectrum[harmonic_bin] > threshold:
                found.append(self.bin_to_hz(harmonic_bin, num_bins))
        return tuple(found)

    def amplitude(self, spectrum: np.ndarray) -> float:
        """RMS of the magnitude spectrum over ``amplitude_normalization``."""
        return float(rms(spectrum)) / self.config.amplitude_normalization

    def extract(self, window: ArrayLike) -> SpectralFeatures:
        """Run the full per-window analysis."""
        samples = to_1d_array(window)
        if samples.size > self.config.window_size:
            samples = samples[-self.config.window_size :]
        spectrum = self.analyze(samples)
        frequency = self.dominant_frequency(spectrum)
        return SpectralFeatures(
            spectrum=spectrum,
            frequency=frequency,
            harmonics=self.harmonics(spectrum, frequency),
            amplitude=self.amplitude(spectrum),
            phase=zero_crossing_phase(samples),
            signal_rms=float(rms(samples)),
        )
