"""Runtime configuration for the resonance engine."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class EngineConfig:
    """
    Tuning knobs for spectral analysis, history tracking and voiceprints.

    The defaults assume 1024-sample windows of 44.1 kHz microphone audio
    delivered at display-refresh cadence (~60 Hz, throttled to 20 Hz).
    """

    sample_rate_hz: float = 44100.0
    window_size: int = 1024

    # Audible sub-range scanned for the dominant frequency
    low_cutoff_hz: float = 50.0
    high_cutoff_hz: float = 4000.0
    frequency_floor_hz: float = 20.0
    fallback_frequency_hz: float = 440.0

    harmonic_threshold: float = 0.1
    max_harmonic: int = 6

    amplitude_normalization: float = 1000.0
    amplitude_floor_ratio: float = 0.1

    # Estimator cost controls: stride over samples and over bins
    decimation: int = 1
    bin_step: int = 1

    cache_size: int = 5
    cache_stride: int = 10

    history_size: int = 10
    coherence_window: int = 5
    min_coherence_history: int = 3
    harmonic_tolerance_hz: float = 50.0

    min_interval_s: float = 0.05

    min_voiceprint_records: int = 5
    voiceprint_threshold: float = 1000.0

    evolution_size: int = 50

    @property
    def num_bins(self) -> int:
        """Number of magnitude bins produced for a full window."""
        return self.window_size // 2

    @property
    def bin_width_hz(self) -> float:
        return self.sample_rate_hz / float(self.window_size)

    def sanitized(self) -> EngineConfig:
        """Return a copy with derived limits applied."""
        sample_rate = max(1.0, float(self.sample_rate_hz))
        nyquist = 0.5 * sample_rate
        low = min(max(0.0, float(self.low_cutoff_hz)), nyquist)
        high = min(max(low, float(self.high_cutoff_hz)), nyquist)
        return EngineConfig(
            sample_rate_hz=sample_rate,
            window_size=max(2, int(self.window_size)),
            low_cutoff_hz=low,
            high_cutoff_hz=high,
            frequency_floor_hz=max(0.0, float(self.frequency_floor_hz)),
            fallback_frequency_hz=max(0.0, float(self.fallback_frequency_hz)),
            harmonic_threshold=max(0.0, min(1.0, float(self.harmonic_threshold))),
            max_harmonic=max(2, int(self.max_harmonic)),
            amplitude_normalization=max(1e-9, float(self.amplitude_normalization)),
            amplitude_floor_ratio=max(0.0, float(self.amplitude_floor_ratio)),
            decimation=max(1, int(self.decimation)),
            bin_step=max(1, int(self.bin_step)),
            cache_size=max(0, int(self.cache_size)),
            cache_stride=max(1, int(self.cache_stride)),
            history_size=max(1, int(self.history_size)),
            coherence_window=max(1, int(self.coherence_window)),
            min_coherence_history=max(1, int(self.min_coherence_history)),
            harmonic_tolerance_hz=max(0.0, float(self.harmonic_tolerance_hz)),
            min_interval_s=max(0.0, float(self.min_interval_s)),
            min_voiceprint_records=max(1, int(self.min_voiceprint_records)),
            voiceprint_threshold=max(0.0, float(self.voiceprint_threshold)),
            evolution_size=max(1, int(self.evolution_size)),
        )

    def to_mapping(self) -> dict:
        """Serialize back into a mapping suitable for YAML."""
        return {ENGINE_SECTION: {f.name: getattr(self, f.name) for f in fields(self)}}


ENGINE_SECTION = "engine"


def _engine_section(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Top-level keys overlaid with the ``engine:`` block, which wins on conflicts."""
    merged = {key: value for key, value in data.items() if key != ENGINE_SECTION}
    section = data.get(ENGINE_SECTION)
    if isinstance(section, Mapping):
        merged.update(section)
    return merged


def config_from_mapping(data: Mapping[str, Any] | None) -> EngineConfig:
    """Build a sanitized :class:`EngineConfig`; unknown keys are logged and skipped."""
    if not data:
        return EngineConfig()
    accepted = {f.name for f in fields(EngineConfig)}
    section = _engine_section(data)
    unknown = sorted(set(section) - accepted)
    if unknown:
        logger.debug("Ignoring unknown engine settings: %s", ", ".join(unknown))
    return EngineConfig(**{k: v for k, v in section.items() if k in accepted}).sanitized()


def load_config(path: str | Path | None) -> EngineConfig:
    """
    Read engine settings from the YAML document at ``path``.

    ``None``, a missing file, or an empty document give the defaults; a
    document that is not a mapping raises ``ValueError``.
    """
    if path is None:
        return EngineConfig()
    cfg_path = Path(path)
    try:
        text = cfg_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.info("No engine config at %s; using defaults", cfg_path)
        return EngineConfig()
    raw = yaml.safe_load(text)
    if raw is None:
        return EngineConfig()
    if not isinstance(raw, Mapping):
        raise ValueError(f"Expected mapping in {cfg_path}, got {type(raw).__name__}")
    return config_from_mapping(raw)


__all__ = ["EngineConfig", "config_from_mapping", "load_config"]
